"""On-wire layouts of the ath9k/ath10k/ath11k spectral scan samples.

Every sample is a TLV: u8 type, big-endian u16 length, then `length` bytes
of payload. All multi-byte payload fields are big-endian.
"""
import struct
from enum import IntEnum


class SampleKind(IntEnum):
    HT20 = 1
    HT20_40 = 2
    ATH10K = 3
    ATH11K = 4


class ChannelType(IntEnum):
    NO_HT = 0
    HT20 = 1
    HT40MINUS = 2
    HT40PLUS = 3


TLV_HDR = struct.Struct(">BH")

SPECTRAL_HT20_NUM_BINS = 56
SPECTRAL_HT20_40_NUM_BINS = 128

# max_exp freq rssi noise max_mag max_index bitmap_weight tsf
HT20_FIXED = struct.Struct(">BHbbHBBQ")
# chan_type freq lower/upper rssi tsf lower/upper noise lower/upper max_mag
# lower/upper max_index lower/upper bitmap_weight max_exp
HT20_40_FIXED = struct.Struct(">BHbbQbbHHBBBBB")
# chan_width freq1 freq2 noise max_mag total_gain base_pwr tsf
# max_index rssi relpwr avgpwr max_exp
ATH10K_FIXED = struct.Struct(">BHHhHHHQbBBBB")
# chan_width max_index max_exp freq1 freq2 max_mag rssi tsf noise
ATH11K_FIXED = struct.Struct(">BbBHHHHII")

ATH10K_BIN_COUNTS = frozenset((64, 128, 256))
ATH11K_BIN_COUNTS = frozenset((32, 64, 128, 256))


class Layout:
    """Size constraints of one sample kind."""

    def __init__(self, kind, fixed, bin_counts):
        self.kind = SampleKind(kind)
        self.fixed = fixed
        self.bin_counts = frozenset(bin_counts)

    @property
    def fixed_size(self):
        return self.fixed.size

    @property
    def fixed_bins(self):
        return len(self.bin_counts) == 1

    @property
    def max_payload(self):
        return self.fixed.size + max(self.bin_counts)

    def __repr__(self):
        return f"Layout({self.kind.name}, fixed={self.fixed_size}, bins={sorted(self.bin_counts)})"


LAYOUTS = {
    SampleKind.HT20: Layout(SampleKind.HT20, HT20_FIXED, (SPECTRAL_HT20_NUM_BINS,)),
    SampleKind.HT20_40: Layout(SampleKind.HT20_40, HT20_40_FIXED, (SPECTRAL_HT20_40_NUM_BINS,)),
    SampleKind.ATH10K: Layout(SampleKind.ATH10K, ATH10K_FIXED, ATH10K_BIN_COUNTS),
    SampleKind.ATH11K: Layout(SampleKind.ATH11K, ATH11K_FIXED, ATH11K_BIN_COUNTS),
}

# largest record any kind can produce, header included
MAX_RECORD_LEN = TLV_HDR.size + max(l.max_payload for l in LAYOUTS.values())

