"""Builders for synthetic spectral scan TLVs, packed by hand in wire order."""
import struct


def tlv(kind, payload):
    return struct.pack(">BH", kind, len(payload)) + payload


def ht20(freq=2412, rssi=30, noise=-95, max_exp=0, bins=None, tsf=0x0102030405060708,
         max_magnitude=0x1234, max_index=7, bitmap_weight=3):
    bins = bytes(range(56)) if bins is None else bytes(bins)
    return tlv(1, struct.pack(">BHbbHBBQ", max_exp, freq, rssi, noise, max_magnitude,
                              max_index, bitmap_weight, tsf) + bins)


def ht20_40(freq=5180, channel_type=3, lower_rssi=20, upper_rssi=25, lower_noise=-96, upper_noise=-94,
            max_exp=0, bins=None, tsf=1000):
    bins = bytes(i % 200 + 1 for i in range(128)) if bins is None else bytes(bins)
    return tlv(2, struct.pack(">BHbbQbbHHBBBBB", channel_type, freq, lower_rssi, upper_rssi, tsf,
                              lower_noise, upper_noise, 0x0100, 0x0200, 10, 70, 4, 5, max_exp) + bins)


def ath10k(freq1=5210, freq2=0, width=80, noise=-100, rssi=40, max_exp=0, bins=None, nbins=64, tsf=5000):
    bins = bytes(i % 250 + 1 for i in range(nbins)) if bins is None else bytes(bins)
    return tlv(3, struct.pack(">BHHhHHHQbBBBB", width, freq1, freq2, noise, 0x0300, 60, 0x0102,
                              tsf, -3, rssi, 7, 8, max_exp) + bins)


def ath11k(freq1=5250, freq2=0, width=80, noise=5, rssi=50, max_exp=0, bins=None, nbins=64, tsf=7000):
    bins = bytes(i % 250 + 1 for i in range(nbins)) if bins is None else bytes(bins)
    return tlv(4, struct.pack(">BbBHHHHII", width, 12, max_exp, freq1, freq2, 0x0400, rssi, tsf, noise) + bins)
