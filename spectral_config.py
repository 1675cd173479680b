"""
Tool configuration.

Dataclass-based; every number the viewer and command line need lives here.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ViewerConfig:
    """Spectrum viewer geometry and styling."""
    start_freq: float = 2350.0        # MHz, left edge of the window
    window_mhz: float = 160.0         # visible span
    min_start_freq: float = 2300.0
    max_start_freq: float = 7200.0
    band_presets: dict = field(default_factory=lambda: {"2": 2370.0, "5": 5150.0})
    scroll_step_mhz: float = 20.0     # PageUp/PageDown
    follow_margin_mhz: float = 20.0   # keep highlighted sample this far from the edge
    y_min: float = -140.0             # dBm
    y_max: float = 0.0
    point_size: float = 9.0
    dim_alpha: float = 0.12
    invert: bool = False


@dataclass
class Config:
    """Top-level configuration for one fft-eval run."""
    debug: bool = False
    log_file: Optional[str] = None
    output: str = "plot"              # "json", "csv", "fftw" or "plot"
    viewer: ViewerConfig = field(default_factory=ViewerConfig)


OUTPUT_FORMATS = ("json", "csv", "fftw", "plot")
