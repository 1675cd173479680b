import logging

import numpy as np
import matplotlib.pyplot as plt

from spectral_config import ViewerConfig
from spectral_power import spectrum_arrays, record_stats
from spectral_records import DecodeError

logger = logging.getLogger(__name__)

COLORS = {False: {"bg": "black", "fg": "white", "grid": "#404040", "dim": "tab:blue", "hl": "red"},
          True: {"bg": "white", "fg": "black", "grid": "#c0c0c0", "dim": "tab:orange", "hl": "tab:cyan"}}

# matplotlib binds these to its own navigation toolbar
_TAKEN_KEYS = ("left", "right", "pageup", "pagedown", "i", "2", "5")


class SpectrumViewer:
    """Scatter of every sample's bins; one sample highlighted, arrows move the highlight."""

    def __init__(self, records, config=None, fig=None):
        self.config = config or ViewerConfig()
        self.series = []
        for rec in records:
            try:
                freqs, powers = spectrum_arrays(rec)
            except DecodeError as e:
                logger.warning("not plotting sample: %s", e.warning()); continue
            self.series.append((rec, freqs, powers))
        self.highlight = 0
        self.start_freq = self.config.start_freq
        self.scrolling = False
        self.invert = self.config.invert

        if fig is None:
            fig = plt.figure(figsize=(16, 6.5))
        self.fig = fig
        self.ax = fig.add_subplot(111)
        self.ax.set_xlabel("Frequency (MHz)"); self.ax.set_ylabel("Power (dBm)")
        if self.series:
            all_f = np.concatenate([f for _, f, _ in self.series])
            all_p = np.concatenate([p for _, _, p in self.series])
        else:
            all_f = all_p = np.empty(0)
        self.dim = self.ax.scatter(all_f, all_p, s=self.config.point_size, alpha=self.config.dim_alpha, linewidths=0)
        self.hl = self.ax.scatter([], [], s=self.config.point_size, linewidths=0)
        self.fig.canvas.mpl_connect("key_press_event", self.on_key)
        self.follow()
        self.redraw()

    @property
    def current(self):
        return self.series[self.highlight][0] if self.series else None

    def clamp(self):
        c = self.config
        self.start_freq = min(max(self.start_freq, c.min_start_freq), c.max_start_freq)

    def follow(self):
        """Move the window so the highlighted sample is visible."""
        if not self.series:
            return
        _, freqs, _ = self.series[self.highlight]
        c = self.config
        lo, hi = float(freqs[0]), float(freqs[-1])
        if lo - c.follow_margin_mhz < self.start_freq:
            self.start_freq = lo - c.follow_margin_mhz
        elif hi + c.follow_margin_mhz > self.start_freq + c.window_mhz:
            self.start_freq = hi + c.follow_margin_mhz - c.window_mhz
        self.clamp()

    def on_key(self, event):
        key = event.key
        if key == "left" and self.highlight > 0:
            self.highlight -= 1; self.scrolling = False
        elif key == "right" and self.highlight < len(self.series) - 1:
            self.highlight += 1; self.scrolling = False
        elif key == "pageup":
            self.start_freq -= self.config.scroll_step_mhz; self.scrolling = True
        elif key == "pagedown":
            self.start_freq += self.config.scroll_step_mhz; self.scrolling = True
        elif key in self.config.band_presets:
            self.start_freq = self.config.band_presets[key]; self.scrolling = True
        elif key == "i":
            self.invert = not self.invert
        else:
            return
        if not self.scrolling:
            self.follow()
        self.clamp()
        self.redraw()

    def redraw(self):
        c = self.config; col = COLORS[self.invert]
        self.ax.set_facecolor(col["bg"])
        self.ax.grid(True, color=col["grid"])
        self.ax.set_xlim(self.start_freq, self.start_freq + c.window_mhz)
        self.ax.set_ylim(c.y_min, c.y_max)
        self.dim.set_color(col["dim"]); self.hl.set_color(col["hl"])
        if self.series:
            rec, freqs, powers = self.series[self.highlight]
            self.hl.set_offsets(np.column_stack([freqs, powers]))
            self.ax.set_title(f"[{self.highlight + 1}/{len(self.series)}] {rec.summary()}")
            logger.info("result: %s | %s", rec.summary(),
                        ", ".join(f"{k} = {v}" for k, v in record_stats(rec).items()))
        else:
            self.ax.set_title("no samples")
        self.fig.canvas.draw_idle()

    def show(self):
        for name in ("keymap.back", "keymap.forward", "keymap.fullscreen", "keymap.zoom"):
            plt.rcParams[name] = [k for k in plt.rcParams[name] if k not in _TAKEN_KEYS]
        plt.show()
