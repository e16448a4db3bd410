"""
Mosaic Renderer Tests
=====================

Tests for grid geometry and output compositing.
"""

import numpy as np
import pytest

from keyframe_mosaic.bank import KeyframeBank
from keyframe_mosaic.models.frame import Frame
from keyframe_mosaic.render import MosaicRenderer, grid_cells


class TestGridCells:
    """Tests for grid_cells geometry."""

    @pytest.mark.parametrize("cols, rows", [(4, 4), (37, 23), (100, 75), (19, 18), (640, 360)])
    def test_cells_inside_and_covering(self, cols, rows):
        """Cells stay inside the frame and leave no uncovered pixel."""
        resolution = 18
        x_step = -(-cols // resolution)
        y_step = -(-rows // resolution)

        covered = np.zeros((rows, cols), dtype=bool)
        for cell in grid_cells(cols, rows, resolution, x_step, y_step):
            assert cell.x >= 0 and cell.y >= 0
            assert 0 < cell.width <= x_step
            assert 0 < cell.height <= y_step
            assert cell.x + cell.width <= cols
            assert cell.y + cell.height <= rows
            covered[cell.slices()] = True

        assert covered.all()

    def test_rounding_half_away_from_zero(self):
        """Origins round .5 upward."""
        # gx=1 of 4 on a 6-pixel frame: 1.5 -> 2
        origins = sorted({cell.x for cell in grid_cells(6, 4, 4, 2, 1)})
        assert origins == [0, 2, 3, 5]

    def test_edge_cells_are_clipped(self):
        """Right and bottom cells shrink instead of padding."""
        cells = list(grid_cells(5, 5, 2, 3, 3))
        assert [(c.x, c.y, c.width, c.height) for c in cells] == [
            (0, 0, 3, 3),
            (3, 0, 2, 3),
            (0, 3, 3, 2),
            (3, 3, 2, 2),
        ]

    def test_empty_cells_skipped(self):
        """Grid positions with no pixels produce no cell."""
        cells = list(grid_cells(4, 4, 18, 1, 1))
        assert all(c.width > 0 and c.height > 0 for c in cells)
        assert len(cells) < 18 * 18


class TestMosaicRenderer:
    """Tests for MosaicRenderer.render."""

    def test_two_by_two_grid(self, rng):
        """A 4x4 frame at resolution 2, scale 2 tiles four 4x4 regions."""
        pixels = rng.integers(1, 256, size=(4, 4, 3), dtype=np.uint8)
        frame = Frame(index=0, pixels=pixels)
        bank = KeyframeBank.build([frame], resolution=2, scale=2)

        output = MosaicRenderer().render(frame, bank)

        assert output.shape == (8, 8, 3)
        assert output.dtype == np.uint8
        # render image is the 4x4 keyframe itself; each quadrant is a copy
        for y in (0, 4):
            for x in (0, 4):
                np.testing.assert_array_equal(output[y:y + 4, x:x + 4], pixels)
        assert (output > 0).all()

    @pytest.mark.parametrize("cols, rows", [(37, 23), (10, 10), (4, 4), (19, 7)])
    def test_output_dimensions(self, random_frame, cols, rows):
        """Output is always (rows * SCALE, cols * SCALE)."""
        frame = random_frame(cols=cols, rows=rows)
        bank = KeyframeBank.build([frame], resolution=18, scale=2)
        assert MosaicRenderer().render(frame, bank).shape == (rows * 2, cols * 2, 3)

    def test_frame_differs_from_bank_geometry(self, random_frame):
        """Frames of another size still render at their own size."""
        bank = KeyframeBank.build([random_frame(cols=20, rows=20)], resolution=5, scale=3)
        frame = random_frame(index=1, cols=13, rows=9)
        assert MosaicRenderer().render(frame, bank).shape == (27, 39, 3)

    def test_picks_closest_keyframe(self, make_frame):
        """A white frame is rebuilt from the white keyframe."""
        black = make_frame(0, cols=8, rows=8, color=(0, 0, 0))
        white = make_frame(1, cols=8, rows=8, color=(255, 255, 255))
        bank = KeyframeBank.build([black, white], resolution=4, scale=2)

        output = MosaicRenderer().render(white, bank)
        assert (output == 255).all()

    def test_mixed_content(self, make_frame):
        """Each cell takes the keyframe that matches its own content."""
        black = make_frame(0, cols=8, rows=8, color=(0, 0, 0))
        white = make_frame(1, cols=8, rows=8, color=(255, 255, 255))
        bank = KeyframeBank.build([black, white], resolution=2, scale=2)

        pixels = np.zeros((8, 8, 3), dtype=np.uint8)
        pixels[:, 4:] = 255
        frame = Frame(index=2, pixels=pixels)

        output = MosaicRenderer().render(frame, bank)
        assert (output[:, :8] == 0).all()
        assert (output[:, 8:] == 255).all()

    def test_cells_land_on_scaled_slices(self, random_frame):
        """Each cell's magnified rectangle holds the top-left of its matched tile."""
        frame = random_frame(cols=13, rows=9)
        bank = KeyframeBank.build(
            [frame, random_frame(index=1, cols=13, rows=9)], resolution=4, scale=3,
        )
        renderer = MosaicRenderer()

        output = renderer.render(frame, bank)
        layout = renderer.match_grid(frame, bank)

        for cell in renderer.cells(frame, bank):
            _, tile = bank.lookup(int(layout[cell.grid_y, cell.grid_x]))
            region = output[cell.slices(3)]
            assert region.shape[:2] == (cell.height * 3, cell.width * 3)
            np.testing.assert_array_equal(region, tile[:cell.height * 3, :cell.width * 3])

    def test_match_grid(self, make_frame):
        """match_grid reports the chosen keyframe per grid cell."""
        black = make_frame(0, cols=8, rows=8, color=(0, 0, 0))
        white = make_frame(1, cols=8, rows=8, color=(255, 255, 255))
        bank = KeyframeBank.build([black, white], resolution=2, scale=2)

        pixels = np.zeros((8, 8, 3), dtype=np.uint8)
        pixels[4:, :] = 255
        layout = MosaicRenderer().match_grid(Frame(index=0, pixels=pixels), bank)
        assert layout.tolist() == [[0, 0], [1, 1]]

    def test_match_grid_marks_empty_cells(self, random_frame):
        """Skipped grid positions are reported as -1."""
        frame = random_frame(cols=4, rows=4)
        bank = KeyframeBank.build([frame], resolution=18, scale=2)
        layout = MosaicRenderer().match_grid(frame, bank)
        assert layout.shape == (18, 18)
        assert (layout == -1).any()
        assert (layout == 0).any()

    def test_stateless(self, random_frame):
        """Rendering the same frame twice gives the same image."""
        keyframes = [random_frame(index=i, cols=30, rows=20) for i in range(3)]
        bank = KeyframeBank.build(keyframes, resolution=6, scale=2)
        renderer = MosaicRenderer()
        first = renderer.render(keyframes[1], bank)
        renderer.render(keyframes[2], bank)
        np.testing.assert_array_equal(first, renderer.render(keyframes[1], bank))
