"""Text renderers for decoded samples: JSON list, rtl_power CSV, rtl_power_fftw."""
import json
import logging
from datetime import datetime

from spectral_layouts import SampleKind
from spectral_power import spectra, spectrum_arrays, record_stats
from spectral_records import DecodeError

logger = logging.getLogger(__name__)


def json_entry(rec, pairs):
    return {"tsf": rec.timestamp, "central_freq": rec.freq, "rssi": rec.rssi, "noise": rec.noise,
            "data": [[f, p] for f, p in pairs]}


def write_json(records, out):
    entries = [json.dumps(json_entry(rec, pairs)) for rec, pairs in spectra(records)]
    out.write("[\n" + ",\n".join(entries) + ("\n" if entries else "") + "]\n")
    return len(entries)


def _step_mhz(freqs):
    n = len(freqs)
    return float(freqs[-1] - freqs[0]) / (n - 1) if n > 1 else 0.0


def rtl_power_line(rec, now=None):
    """One rtl_power style line: date, time, low Hz, high Hz, step Hz, samples, dB values..."""
    now = now or datetime.now()
    freqs, powers = spectrum_arrays(rec)
    step = _step_mhz(freqs)
    low = float(freqs[0]) - step / 2
    high = low + step * len(freqs)
    cols = [now.strftime("%Y-%m-%d"), now.strftime("%H:%M:%S"),
            str(int(round(low * 1e6))), str(int(round(high * 1e6))), f"{step * 1e6:.2f}", str(len(freqs))]
    cols += [f"{p:f}" for p in powers]
    return ", ".join(cols)


def _metadata(rec):
    stats = record_stats(rec)
    if rec.kind == SampleKind.HT20:
        keys = [("datasquaresum", stats["datasquaresum"]), ("noise", rec.noise),
                ("max_exp", rec.max_exp), ("rssi", rec.rssi)]
    elif rec.kind == SampleKind.HT20_40:
        keys = [("datasquaresum_lower", stats["datasquaresum_lower"]),
                ("datasquaresum_upper", stats["datasquaresum_upper"]),
                ("noise_lower", rec.lower_noise), ("noise_upper", rec.upper_noise),
                ("max_exp", rec.max_exp), ("rssi_lower", rec.lower_rssi), ("rssi_upper", rec.upper_rssi)]
    elif rec.kind == SampleKind.ATH10K:
        keys = [("freq1", rec.freq1), ("freq2", rec.freq2), ("total_gain_db", rec.total_gain_db),
                ("relpwr_db", rec.relpwr_db), ("avgpwr_db", rec.avgpwr_db), ("base_pwr_db", rec.base_pwr_db),
                ("max_exp", rec.max_exp), ("max_magnitude", rec.max_magnitude),
                ("datasquaresum", stats["datasquaresum"]), ("rssi", rec.rssi), ("noise", rec.noise)]
    else:
        keys = [("freq1", rec.freq1), ("freq2", rec.freq2), ("max_exp", rec.max_exp),
                ("max_magnitude", rec.max_magnitude), ("rssi", rec.rssi), ("noise", rec.noise),
                ("is_primary", int(rec.is_primary))]
    return [f"# {k} = {v}" for k, v in keys]


def rtl_power_fftw_block(rec, now=None):
    now = now or datetime.now()
    freqs, powers = spectrum_arrays(rec)
    lines = [now.strftime("# Acquisition start: %Y-%m-%d %H:%M:%S"),
             now.strftime("# Acquisition end: %Y-%m-%d %H:%M:%S"), "#"]
    lines += _metadata(rec)
    lines += [f"{f / 1000:f}e+09  {p:f}" for f, p in zip(freqs, powers)]
    return "\n".join(lines) + "\n\n"


def _write_each(render, records, out, now):
    n = 0
    for rec in records:
        try:
            text = render(rec, now)
        except DecodeError as e:
            logger.warning("skipping sample: %s", e.warning())
            continue
        out.write(text); n += 1
    return n


def write_rtl_power(records, out, now=None):
    return _write_each(lambda rec, t: rtl_power_line(rec, t) + "\n", records, out, now)


def write_rtl_power_fftw(records, out, now=None):
    return _write_each(rtl_power_fftw_block, records, out, now)


WRITERS = {
    "json": write_json,
    "csv": write_rtl_power,
    "fftw": write_rtl_power_fftw,
}
