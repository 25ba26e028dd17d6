"""Tests for polygon mask rasterization."""

import numpy as np
import pytest

from refmatch.config_exceptions import ConfigurationError
from refmatch.masks import mask_metadata, polygon_to_mask


class TestPolygonToMask:
    def test_full_rectangle_covers_everything(self):
        mask = polygon_to_mask([(0, 0), (9, 0), (9, 9), (0, 9)], 10, 10)

        assert mask.shape == (10, 10)
        assert mask.all()

    def test_boundary_is_inclusive(self):
        mask = polygon_to_mask([(2, 2), (5, 2), (5, 6), (2, 6)], 10, 10)

        expected = np.zeros((10, 10), dtype=bool)
        expected[2:7, 2:6] = True
        assert np.array_equal(mask, expected)

    def test_triangle(self):
        mask = polygon_to_mask([(0, 0), (4, 0), (0, 4)], 5, 5)

        ys, xs = np.nonzero(mask)
        assert all(x + y <= 4 for x, y in zip(xs, ys))
        assert mask.sum() == 15

    def test_vertex_order_does_not_matter(self):
        clockwise = polygon_to_mask([(1, 1), (7, 1), (7, 5), (1, 5)], 10, 8)
        counter = polygon_to_mask([(1, 5), (7, 5), (7, 1), (1, 1)], 10, 8)

        assert np.array_equal(clockwise, counter)

    def test_points_outside_image_are_clipped(self):
        mask = polygon_to_mask([(-5, -5), (20, -5), (20, 20), (-5, 20)], 6, 4)

        assert mask.all()

    def test_polygon_outside_image_is_empty(self):
        mask = polygon_to_mask([(50, 50), (60, 50), (60, 60)], 10, 10)

        assert not mask.any()

    def test_concave_polygon(self):
        # U shape: columns 0-1 and 5-6 full height, joined along rows 5-6
        u_shape = [(0, 0), (1, 0), (1, 5), (5, 5), (5, 0), (6, 0), (6, 6), (0, 6)]

        mask = polygon_to_mask(u_shape, 7, 7)

        assert mask[0, 0] and mask[0, 6]
        assert not mask[2, 3]
        assert mask[6, 3]

    def test_requires_three_points(self):
        with pytest.raises(ConfigurationError):
            polygon_to_mask([(0, 0), (1, 1)], 5, 5)


class TestMaskMetadata:
    def test_counts(self):
        mask = np.zeros((4, 5), dtype=bool)
        mask[0, :] = True

        metadata = mask_metadata(mask)

        assert metadata.active_pixels == 5
        assert metadata.total_pixels == 20
        assert metadata.density == 0.25
        assert not metadata.is_empty

    def test_empty(self):
        assert mask_metadata(np.zeros((3, 3), dtype=bool)).is_empty
