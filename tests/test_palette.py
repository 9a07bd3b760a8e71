import unittest

import numpy as np

from thermcam.errors import ConfigError
from thermcam.palette import PALETTES, build_palette


class TestPalette(unittest.TestCase):

    def test_shape_and_dtype(self):
        for name in PALETTES:
            p = build_palette(1024, name)
            self.assertEqual(p.shape, (1024, 3))
            self.assertEqual(p.dtype, np.uint8)

    def test_hue_runs_blue_to_red(self):
        p = build_palette(1024)
        self.assertEqual(tuple(p[0]), (0, 0, 255))
        self.assertEqual(tuple(p[-1]), (255, 0, 0))

    def test_hue_is_smooth(self):
        p = build_palette(1024).astype(int)
        steps = np.abs(np.diff(p, axis=0)).max()
        self.assertLessEqual(steps, 2)

    def test_deterministic(self):
        self.assertTrue(np.array_equal(build_palette(300, "jet"), build_palette(300, "jet")))

    def test_read_only(self):
        p = build_palette(16)
        with self.assertRaises(ValueError):
            p[0] = (1, 2, 3)

    def test_colormap_runs_dark_to_bright(self):
        p = build_palette(256, "inferno")
        self.assertGreater(int(p[-1].sum()), int(p[0].sum()))

    def test_invalid(self):
        with self.assertRaises(ConfigError):
            build_palette(1)
        with self.assertRaises(ConfigError):
            build_palette(16, "rainbow")


if __name__ == "__main__":
    unittest.main()
