"""
Command-Line Entry Point
========================

Runs the keyframe mosaic pipeline over a directory of frames.

Usage:
    # Continue from the last run (skip frames already rendered)
    keyframe-mosaic --frames ./src/frames --keyframes ./src/keyframes --output ./output

    # Start over: clear keyframes and outputs first
    keyframe-mosaic --refresh

    # Tune the scene-change threshold and grid
    keyframe-mosaic --threshold 18 --resolution 24 --scale 3

    # Only pick keyframes
    keyframe-mosaic --select-only
"""

import argparse
import logging
import sys
from typing import List, Optional

import yaml

from keyframe_mosaic.config import Settings, load_config, setup_logging
from keyframe_mosaic.errors import MosaicError
from keyframe_mosaic.io import DirectoryFrameSource, DirectoryImageStore
from keyframe_mosaic.metrics.distance import ChannelDistance
from keyframe_mosaic.pipeline import MosaicPipeline


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="keyframe-mosaic",
        description="Reconstruct a frame sequence as a mosaic of its own keyframes",
    )
    parser.add_argument("--config", "-c", type=str, default=None, help="Path to a YAML config file")
    parser.add_argument(
        "--refresh", action="store_true", default=False,
        help="Clear cached keyframes and rendered outputs before running",
    )
    parser.add_argument(
        "--select-only", dest="select_only", action="store_true", default=False,
        help="Pick and store keyframes, then stop",
    )

    # Paths
    parser.add_argument("--frames", type=str, default=None, help="Input frame directory")
    parser.add_argument("--pattern", type=str, default=None, help="Glob for input frames (default: *.png)")
    parser.add_argument("--keyframes", type=str, default=None, help="Keyframe cache directory")
    parser.add_argument("--output", "-o", type=str, default=None, help="Rendered output directory")

    # Tunables
    parser.add_argument("--threshold", "-t", type=float, default=None, help="Scene-change threshold (default: 24)")
    parser.add_argument("--density", type=int, default=None, help="Sampling density per axis (default: 30)")
    parser.add_argument("--resolution", "-r", type=int, default=None, help="Grid cells per axis (default: 18)")
    parser.add_argument("--scale", "-s", type=int, default=None, help="Output magnification (default: 2)")
    parser.add_argument(
        "--distance", type=str, default=None,
        choices=[strategy.value for strategy in ChannelDistance],
        help="Per-pixel distance strategy (default: summed)",
    )
    parser.add_argument("--log-level", dest="log_level", type=str, default=None, help="Log level (default: INFO)")
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Merge command-line overrides into loaded settings."""
    data = settings.model_dump()

    overrides = {
        ("paths", "frames_dir"): args.frames,
        ("paths", "frames_pattern"): args.pattern,
        ("paths", "keyframes_dir"): args.keyframes,
        ("paths", "output_dir"): args.output,
        ("selection", "threshold"): args.threshold,
        ("metric", "sampling_density"): args.density,
        ("metric", "distance"): args.distance,
        ("mosaic", "resolution"): args.resolution,
        ("mosaic", "scale"): args.scale,
        ("logging", "level"): args.log_level,
    }
    for (section, key), value in overrides.items():
        if value is not None:
            data[section][key] = value

    return Settings.model_validate(data)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = apply_overrides(load_config(args.config), args)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: invalid configuration: {e}", file=sys.stderr)
        return 2

    setup_logging(settings)
    logger.info("Initializing program...")

    paths = settings.paths
    source = DirectoryFrameSource(paths.frames_dir, pattern=paths.frames_pattern)
    keyframe_store = DirectoryImageStore(paths.keyframes_dir)
    output_store = DirectoryImageStore(paths.output_dir, prefix=paths.output_prefix)
    pipeline = MosaicPipeline.from_settings(settings)

    try:
        if args.select_only:
            if args.refresh:
                output_store.clear()
            keyframe_store.clear()
            keyframes = pipeline.select_keyframes(source, keyframe_store)
            logger.info(f"{len(keyframes)} keyframes written to {paths.keyframes_dir}")
        else:
            summary = pipeline.run(source, keyframe_store, output_store, refresh=args.refresh)
            logger.info(
                f"Done: {summary.rendered_count} frames rendered with "
                f"{summary.keyframe_count} keyframes in {summary.elapsed_seconds:.1f}s"
            )
    except MosaicError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
