from dataclasses import dataclass, field

import numpy as np

from spectral_layouts import SampleKind


class DecodeError(ValueError):
    """Base for everything the decoder can report about a sample."""

    phrase = "decode error"

    def warning(self):
        return f"{type(self).__name__}: {self.phrase}: {self}"


class TruncatedHeader(DecodeError):
    phrase = "truncated header"


class TruncatedRecord(DecodeError):
    phrase = "truncated record"


class RecordTooLong(DecodeError):
    phrase = "record too long"


class UnknownKind(DecodeError):
    phrase = "unknown sample type"


class LengthMismatch(DecodeError):
    phrase = "wrong sample length"


class InvalidBinCount(DecodeError):
    phrase = "invalid bin count"


class InvalidChannelType(DecodeError):
    phrase = "invalid channel type"


def _bins():
    return field(default=None, compare=False, repr=False)


def readonly_bins(raw):
    arr = np.frombuffer(bytes(raw), dtype=np.uint8)
    arr.flags.writeable = False
    return arr


class _Sample:
    kind = None

    @property
    def tsf(self):
        return self.timestamp

    @property
    def bin_count(self):
        return int(self.bins.size)

    def summary(self):
        return (f"{self.kind.name}: freq {self.freq:04d} rssi {self.rssi:03d}, noise {self.noise:03d}, "
                f"{self.bin_count} bins, tsf {self.timestamp}")


@dataclass(frozen=True)
class HT20Sample(_Sample):
    max_exp: int
    freq: int
    rssi: int
    noise: int
    max_magnitude: int
    max_index: int
    bitmap_weight: int
    timestamp: int
    bins: np.ndarray = _bins()

    kind = SampleKind.HT20


@dataclass(frozen=True)
class HT40Sample(_Sample):
    channel_type: int
    freq: int
    lower_rssi: int
    upper_rssi: int
    timestamp: int
    lower_noise: int
    upper_noise: int
    lower_max_magnitude: int
    upper_max_magnitude: int
    lower_max_index: int
    upper_max_index: int
    lower_bitmap_weight: int
    upper_bitmap_weight: int
    max_exp: int
    bins: np.ndarray = _bins()

    kind = SampleKind.HT20_40

    # single-value consumers (JSON, summaries) get the lower half
    @property
    def rssi(self):
        return self.lower_rssi

    @property
    def noise(self):
        return self.lower_noise


@dataclass(frozen=True)
class Ath10kSample(_Sample):
    chan_width_mhz: int
    freq1: int
    freq2: int
    noise: int
    max_magnitude: int
    total_gain_db: int
    base_pwr_db: int
    timestamp: int
    max_index: int
    rssi: int
    relpwr_db: int
    avgpwr_db: int
    max_exp: int
    bins: np.ndarray = _bins()

    kind = SampleKind.ATH10K

    @property
    def freq(self):
        return self.freq1


@dataclass(frozen=True)
class Ath11kSample(_Sample):
    chan_width_mhz: int
    max_index: int
    max_exp: int
    freq1: int
    freq2: int
    max_magnitude: int
    rssi: int
    timestamp: int
    noise: int
    is_primary: bool = True
    bins: np.ndarray = _bins()

    kind = SampleKind.ATH11K

    @property
    def freq(self):
        return self.freq1

    @property
    def fragmented(self):
        return bool(self.freq2) and self.freq2 != self.freq1

