"""
keyframe-mosaic Configuration
=============================

This module handles configuration loading for the mosaic pipeline.

Configuration Sources (in order of precedence):
    1. Command-line overrides (applied by the CLI)
    2. Environment variables
    3. mosaic.yaml file
    4. Default values (lowest priority)

Environment Variable Mapping:
    MOSAIC_SAMPLING_DENSITY -> metric.sampling_density
    MOSAIC_DISTANCE         -> metric.distance
    MOSAIC_THRESHOLD        -> selection.threshold
    MOSAIC_RESOLUTION       -> mosaic.resolution
    MOSAIC_SCALE            -> mosaic.scale
    MOSAIC_FRAMES_DIR       -> paths.frames_dir
    MOSAIC_KEYFRAMES_DIR    -> paths.keyframes_dir
    MOSAIC_OUTPUT_DIR       -> paths.output_dir
    MOSAIC_LOG_LEVEL        -> logging.level

Example:
    from keyframe_mosaic.config import load_config

    settings = load_config()
    print(settings.selection.threshold)
    print(settings.mosaic.resolution)
"""

import os
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from keyframe_mosaic.metrics.distance import ChannelDistance


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class MetricConfig(BaseModel):
    """Scene-change metric configuration."""

    sampling_density: int = Field(
        default=30,
        ge=1,
        description="Sample points per axis for the scene-change metric",
    )
    distance: ChannelDistance = Field(
        default=ChannelDistance.SUMMED,
        description="Per-pixel distance: 'summed' or 'per_channel'",
    )


class SelectionConfig(BaseModel):
    """Keyframe selection configuration."""

    threshold: float = Field(
        default=24.0,
        ge=0,
        description="Scene-change threshold (strictly exceeded to select)",
    )
    reuse_cached: bool = Field(
        default=False,
        description="Load existing keyframes from the store instead of re-selecting",
    )


class MosaicConfig(BaseModel):
    """Grid and render configuration."""

    resolution: int = Field(
        default=18,
        ge=1,
        description="Grid cells per axis",
    )
    scale: int = Field(
        default=2,
        ge=1,
        description="Output magnification",
    )


class PathsConfig(BaseModel):
    """Input and output locations."""

    frames_dir: str = Field(default="./src/frames", description="Input frame directory")
    frames_pattern: str = Field(default="*.png", description="Glob for input frames")
    keyframes_dir: str = Field(default="./src/keyframes", description="Keyframe cache directory")
    output_dir: str = Field(default="./output", description="Rendered output directory")
    output_prefix: str = Field(default="render", description="Rendered file name prefix")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for keyframe-mosaic.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    metric: MetricConfig = Field(default_factory=MetricConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    mosaic: MosaicConfig = Field(default_factory=MosaicConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values

    Args:
        config_path: Path to a YAML file. If None, searches common locations.

    Returns:
        Settings: Loaded configuration

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
    """
    if config_path is not None and not Path(config_path).exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    # Find config file
    if config_path is None:
        search_paths = [
            Path("mosaic.yaml"),
            Path("mosaic.yml"),
            Path("config.yaml"),
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    # Load from YAML if exists
    config_data = {}
    if config_path:
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.debug("No config file found, using defaults and environment variables")

    # Apply environment variable overrides
    _apply_env_overrides(config_data)

    return Settings.model_validate(config_data)


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    # Metric settings
    if env_density := os.environ.get("MOSAIC_SAMPLING_DENSITY"):
        config_data.setdefault("metric", {})["sampling_density"] = int(env_density)
    if env_distance := os.environ.get("MOSAIC_DISTANCE"):
        config_data.setdefault("metric", {})["distance"] = env_distance

    # Selection settings
    if env_threshold := os.environ.get("MOSAIC_THRESHOLD"):
        config_data.setdefault("selection", {})["threshold"] = float(env_threshold)

    # Grid settings
    if env_resolution := os.environ.get("MOSAIC_RESOLUTION"):
        config_data.setdefault("mosaic", {})["resolution"] = int(env_resolution)
    if env_scale := os.environ.get("MOSAIC_SCALE"):
        config_data.setdefault("mosaic", {})["scale"] = int(env_scale)

    # Paths
    if env_frames := os.environ.get("MOSAIC_FRAMES_DIR"):
        config_data.setdefault("paths", {})["frames_dir"] = env_frames
    if env_keyframes := os.environ.get("MOSAIC_KEYFRAMES_DIR"):
        config_data.setdefault("paths", {})["keyframes_dir"] = env_keyframes
    if env_output := os.environ.get("MOSAIC_OUTPUT_DIR"):
        config_data.setdefault("paths", {})["output_dir"] = env_output

    # Logging settings
    if env_log := os.environ.get("MOSAIC_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    if settings.logging.format == "json":
        log_format = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
