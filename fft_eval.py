#!/usr/bin/env python3
"""
fft-eval - decode an ath9k/ath10k/ath11k spectral scan dump and show it.

Capture one first, e.g. for ath9k:

    echo background > /sys/kernel/debug/ieee80211/phy0/ath9k/spectral_scan_ctl
    iw dev wlan0 scan
    cat /sys/kernel/debug/ieee80211/phy0/ath9k/spectral_scan0 > /tmp/fft_results
    fft-eval -o json /tmp/fft_results

(debugfs may have to be mounted first: mount -t debugfs none /sys/kernel/debug/)
"""

import argparse
import logging
import sys

from spectral_config import Config, OUTPUT_FORMATS
from spectral_log import setup_logging
from spectral_output import WRITERS
from spectral_parser import decode, read_scanfile

logger = logging.getLogger("fft_eval")


def build_parser():
    parser = argparse.ArgumentParser(prog="fft-eval", description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("scanfile", help="spectral scan dump read from debugfs")
    parser.add_argument("-o", "--output", choices=OUTPUT_FORMATS, default="plot",
                        help="json, csv (rtl_power), fftw (rtl_power_fftw) or plot (default)")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--log-file", help="also log to this rotating file")
    parser.add_argument("--invert", action="store_true", help="plot on a white background")
    return parser


def config_from_args(args):
    config = Config(debug=args.verbose, log_file=args.log_file, output=args.output)
    config.viewer.invert = args.invert
    return config


def run(config, scanfile, out=None):
    out = out or sys.stdout
    try:
        raw = read_scanfile(scanfile)
    except OSError as e:
        logger.error("Couldn't read scanfile %s: %s", scanfile, e)
        return 1

    records, warnings = decode(raw)
    for w in warnings:
        logger.warning(w)
    logger.info("%d sample(s) decoded from %s (%d bytes)", len(records), scanfile, len(raw))

    if config.output == "plot":
        from spectral_view import SpectrumViewer
        SpectrumViewer(records, config.viewer).show()
    else:
        WRITERS[config.output](records, out)
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    config = config_from_args(args)
    setup_logging(logging.DEBUG if config.debug else logging.INFO, log_file=config.log_file)
    logger.warning("Experimental Software! Don't trust anything you see. :)")
    return run(config, args.scanfile)


if __name__ == "__main__":
    sys.exit(main())
