import unittest

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from spectral_config import ViewerConfig
from spectral_parser import decode
from spectral_view import SpectrumViewer
from spectral_samples import ht20, ht20_40, ath10k


class _Key:
    def __init__(self, key):
        self.key = key


class SpectrumViewerTests(unittest.TestCase):
    def setUp(self):
        records, _ = decode(ht20(freq=2412) + ht20_40(channel_type=1) + ht20(freq=2462) + ath10k(freq1=5210))
        self.viewer = SpectrumViewer(records, ViewerConfig())

    def tearDown(self):
        plt.close('all')

    def test_bad_channel_type_not_plotted(self):
        self.assertEqual(len(self.viewer.series), 3)

    def test_navigation_follows_highlight(self):
        v = self.viewer
        self.assertEqual(v.current.freq, 2412)
        v.on_key(_Key('left'))
        self.assertEqual(v.highlight, 0)
        v.on_key(_Key('right')); v.on_key(_Key('right'))
        self.assertEqual(v.current.freq, 5210)
        lo, hi = v.ax.get_xlim()
        self.assertLessEqual(lo, 5210 - 40)
        self.assertGreaterEqual(hi, 5210 + 40)
        v.on_key(_Key('right'))
        self.assertEqual(v.highlight, 2)

    def test_scroll_and_presets_are_clamped(self):
        v = self.viewer
        for _ in range(10):
            v.on_key(_Key('pageup'))
        self.assertEqual(v.start_freq, 2300.0)
        v.on_key(_Key('5'))
        self.assertEqual(v.start_freq, 5150.0)
        v.on_key(_Key('2'))
        self.assertEqual(v.start_freq, 2370.0)
        self.assertEqual(v.ax.get_xlim()[0], 2370.0)

    def test_invert(self):
        v = self.viewer
        v.on_key(_Key('i'))
        self.assertTrue(v.invert)
        self.assertEqual(matplotlib.colors.to_hex(v.ax.get_facecolor()), '#ffffff')

    def test_empty(self):
        v = SpectrumViewer([], ViewerConfig())
        self.assertIsNone(v.current)
        v.on_key(_Key('right'))
        self.assertEqual(v.highlight, 0)


if __name__ == '__main__':
    unittest.main()
