import io
import json
import os
import tempfile
import unittest

import fft_eval
from spectral_config import Config
from spectral_samples import ht20, ht20_40


class FftEvalCliTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, 'fft_results')
        with open(self.path, 'wb') as f:
            f.write(ht20() + ht20_40() + b'\x09\x00')

    def tearDown(self):
        self.tmp.cleanup()

    def test_missing_file_fails(self):
        missing = os.path.join(self.tmp.name, 'nope')
        self.assertEqual(fft_eval.run(Config(output='json'), missing, out=io.StringIO()), 1)

    def test_json_run_keeps_decoded_records(self):
        out = io.StringIO()
        with self.assertLogs('fft_eval', level='WARNING') as logs:
            rc = fft_eval.run(Config(output='json'), self.path, out=out)
        self.assertEqual(rc, 0)
        self.assertEqual(len(json.loads(out.getvalue())), 2)
        self.assertTrue(any('TruncatedHeader' in m for m in logs.output))

    def test_csv_run(self):
        out = io.StringIO()
        self.assertEqual(fft_eval.run(Config(output='csv'), self.path, out=out), 0)
        self.assertEqual(len(out.getvalue().splitlines()), 2)

    def test_args(self):
        args = fft_eval.build_parser().parse_args(['-o', 'fftw', '-v', '--invert', self.path])
        config = fft_eval.config_from_args(args)
        self.assertEqual(config.output, 'fftw')
        self.assertTrue(config.debug)
        self.assertTrue(config.viewer.invert)
        self.assertEqual(args.scanfile, self.path)

    def test_default_output_is_plot(self):
        args = fft_eval.build_parser().parse_args([self.path])
        config = fft_eval.config_from_args(args)
        self.assertEqual(config.output, 'plot')
        self.assertIsNone(config.log_file)

    def test_rejects_unknown_output(self):
        with self.assertRaises(SystemExit):
            fft_eval.build_parser().parse_args(['-o', 'xml', self.path])


if __name__ == '__main__':
    unittest.main()
