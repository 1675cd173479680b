import logging
from dataclasses import replace
from typing import List, NamedTuple

from spectral_layouts import SampleKind, TLV_HDR, MAX_RECORD_LEN, LAYOUTS
from spectral_records import (
    HT20Sample, HT40Sample, Ath10kSample, Ath11kSample, readonly_bins,
    DecodeError, TruncatedHeader, TruncatedRecord, RecordTooLong, UnknownKind,
    LengthMismatch, InvalidBinCount,
)

logger = logging.getLogger(__name__)


class DecodeResult(NamedTuple):
    records: List
    warnings: List[str]

    @property
    def count(self):
        return len(self.records)


def _unpack(kind, payload, length):
    """Check the payload size against the layout of `kind`, return (fixed fields, bins)."""
    layout = LAYOUTS[kind]
    fixed, name = layout.fixed, kind.name
    if layout.fixed_bins:
        expected = layout.max_payload
        if length != expected:
            raise LengthMismatch(f"{name} payload is {length} bytes, expected {expected}")
    else:
        if length < fixed.size:
            raise LengthMismatch(f"{name} payload is {length} bytes, shorter than its {fixed.size} byte header")
        nbins = length - fixed.size
        if nbins not in layout.bin_counts:
            raise InvalidBinCount(f"{name} sample has {nbins} bins, expected one of {sorted(layout.bin_counts)}")
    return fixed.unpack_from(payload, 0), readonly_bins(payload[fixed.size:length])


def parse_ht20(payload, length):
    vals, bins = _unpack(SampleKind.HT20, payload, length)
    return HT20Sample(*vals, bins=bins)


def parse_ht20_40(payload, length):
    vals, bins = _unpack(SampleKind.HT20_40, payload, length)
    return HT40Sample(*vals, bins=bins)


def parse_ath10k(payload, length):
    vals, bins = _unpack(SampleKind.ATH10K, payload, length)
    return Ath10kSample(*vals, bins=bins)


def parse_ath11k(payload, length, is_primary=True):
    vals, bins = _unpack(SampleKind.ATH11K, payload, length)
    return Ath11kSample(*vals, is_primary=bool(is_primary), bins=bins)


PARSERS = {
    SampleKind.HT20: parse_ht20,
    SampleKind.HT20_40: parse_ht20_40,
    SampleKind.ATH10K: parse_ath10k,
    SampleKind.ATH11K: parse_ath11k,
}


def parse_variant(kind, payload, length, **kw):
    try:
        parser = PARSERS[SampleKind(kind)]
    except ValueError:
        raise UnknownKind(f"type {kind}") from None
    return parser(payload, length, **kw)


class _Ath11kPairing:
    """Tracks fragmented ath11k scans: the second of two samples sharing a tsf is secondary."""

    def __init__(self):
        self.prev = None

    def mark(self, rec):
        primary = self.prev != (rec.timestamp, True)
        self.prev = (rec.timestamp, primary)
        return rec if primary == rec.is_primary else replace(rec, is_primary=primary)


def _walk(raw):
    """Yield (record, error) pairs for one pass over `raw`; exactly one of them is set."""
    view = memoryview(raw)
    i = 0; n = len(view)
    pairing = _Ath11kPairing()
    while i < n:
        left = n - i
        if left < TLV_HDR.size:
            yield None, TruncatedHeader(f"{left} byte(s) left at offset {i}, header needs {TLV_HDR.size}")
            return
        tlv_type, tlv_len = TLV_HDR.unpack_from(view, i)
        rec_len = TLV_HDR.size + tlv_len
        if rec_len > left:
            yield None, TruncatedRecord(f"type {tlv_type} at offset {i} needs {rec_len} bytes, {left} left")
            return
        if rec_len > MAX_RECORD_LEN:
            yield None, RecordTooLong(f"type {tlv_type} at offset {i} is {rec_len} bytes, max {MAX_RECORD_LEN}")
            i += rec_len; continue
        payload = view[i + TLV_HDR.size:i + rec_len]
        try:
            rec = parse_variant(tlv_type, payload, tlv_len)
            if rec.kind == SampleKind.ATH11K:
                rec = pairing.mark(rec)
        except DecodeError as e:
            yield None, e
        else:
            yield rec, None
        i += rec_len


def decode(raw) -> DecodeResult:
    """Decode a whole spectral scan dump.

    Never raises on malformed input: truncation stops the walk, any other
    problem drops the one sample, and each is reported in `warnings`.
    """
    records, warnings = [], []
    for rec, err in _walk(raw):
        if err is not None:
            logger.debug("skipping sample: %s", err.warning())
            warnings.append(err.warning())
        else:
            records.append(rec)
    logger.debug("decoded %d sample(s) from %d bytes, %d warning(s)", len(records), len(raw), len(warnings))
    return DecodeResult(records, warnings)


def iter_records(raw):
    for rec, _ in _walk(raw):
        if rec is not None:
            yield rec


def read_scanfile(path):
    with open(path, "rb") as f:
        return f.read()
