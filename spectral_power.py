"""Per-bin power estimate of a decoded spectral sample.

The estimate is the empirical formula the ath9k spectral tools have always
used and nobody has verified against calibrated hardware:

    power = noise + rssi + 20*log10(m << max_exp) - 10*log10(sum of squares)

It is reproduced operation for operation so output stays comparable with
those tools. Do not "fix" it.
"""
import logging
import math

import numpy as np

from spectral_layouts import SampleKind, ChannelType, SPECTRAL_HT20_40_NUM_BINS
from spectral_records import DecodeError, InvalidChannelType

logger = logging.getLogger(__name__)

# HT20 reports the middle 56 of 64 subcarriers across a 22 MHz channel
HT20_SPAN_MHZ = 22.0
HT20_FFT_SIZE = 64
HT20_LOW_OFFSET_MHZ = 11.0
HT40_SPAN_MHZ = 40.0
HT40_FFT_SIZE = 128
HT40_HALF = SPECTRAL_HT20_40_NUM_BINS // 2


def _shifted(bins, exp):
    return [int(m) << exp for m in bins]


def square_sum(values):
    return sum(v * v for v in values)


def bin_power(noise, rssi, data, datasquaresum):
    if data == 0:
        data = 1
    return noise + rssi + 20 * math.log10(data) - math.log10(max(datasquaresum, 1)) * 10


def ht40_center(rec):
    ct = rec.channel_type
    if ct == ChannelType.HT40PLUS:
        return rec.freq + 10
    if ct == ChannelType.HT40MINUS:
        return rec.freq - 10
    raise InvalidChannelType(f"HT20/40 sample at {rec.freq} MHz has channel type {ct}")


def wide_geometry(rec):
    """(anchor MHz, width MHz) of an ath10k/ath11k sample."""
    if rec.kind == SampleKind.ATH11K and rec.fragmented:
        width = rec.chan_width_mhz // 2
        return (rec.freq1 if rec.is_primary else rec.freq2), width
    return rec.freq1, rec.chan_width_mhz


def bin_frequencies(rec):
    idx = np.arange(rec.bin_count, dtype=np.float64) + 0.5
    if rec.kind == SampleKind.HT20:
        return rec.freq - HT20_LOW_OFFSET_MHZ + HT20_SPAN_MHZ * idx / HT20_FFT_SIZE
    if rec.kind == SampleKind.HT20_40:
        return ht40_center(rec) - HT40_SPAN_MHZ / 2 + HT40_SPAN_MHZ * idx / HT40_FFT_SIZE
    freq, width = wide_geometry(rec)
    return freq - width // 2 + width * idx / rec.bin_count


def bin_powers(rec):
    data = _shifted(rec.bins, rec.max_exp)
    if rec.kind == SampleKind.HT20_40:
        lower, upper = square_sum(data[:HT40_HALF]), square_sum(data[HT40_HALF:])
        return np.array(
            [bin_power(rec.lower_noise, rec.lower_rssi, d, lower) if i < HT40_HALF
             else bin_power(rec.upper_noise, rec.upper_rssi, d, upper)
             for i, d in enumerate(data)], dtype=np.float64)
    if rec.kind == SampleKind.ATH11K:
        # ath11k squares the raw magnitudes but shifts them per bin
        total = square_sum(int(m) for m in rec.bins)
    else:
        total = square_sum(data)
    return np.array([bin_power(rec.noise, rec.rssi, d, total) for d in data], dtype=np.float64)


def spectrum_arrays(rec):
    # geometry first so a bad channel type fails before any work
    freqs = bin_frequencies(rec)
    return freqs, bin_powers(rec)


def power_spectrum(rec):
    freqs, powers = spectrum_arrays(rec)
    return [(float(f), float(p)) for f, p in zip(freqs, powers)]


def spectra(records):
    for rec in records:
        try:
            yield rec, power_spectrum(rec)
        except DecodeError as e:
            logger.warning("skipping sample: %s", e.warning())


def record_stats(rec):
    data = _shifted(rec.bins, rec.max_exp)
    sq = [d * d for d in data]
    stats = {"datamax": max(sq), "datamin": min(sq)}
    if rec.kind == SampleKind.HT20_40:
        stats["datasquaresum_lower"] = sum(sq[:HT40_HALF])
        stats["datasquaresum_upper"] = sum(sq[HT40_HALF:])
    elif rec.kind == SampleKind.ATH11K:
        stats["datasquaresum"] = square_sum(int(m) for m in rec.bins)
    else:
        stats["datasquaresum"] = sum(sq)
    return stats
