"""
Tests for the command-line entry point.
"""

import contextlib
import io
import unittest
import tempfile
import shutil
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import yaml

from drive_cli import build_parser, main
from gene_drive.statistics import load_stats_csv


class TestDriveCli(unittest.TestCase):

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def write_config(self, **run):
        config = {
            "population": {"capacity": 80},
            "architecture": {"modification": True},
            "release": {"drop_size": 20, "drop_generation": 0},
            "run": dict({"generations": 2, "random_seed": 3}, **run),
        }
        path = self.temp_dir / "run.yaml"
        with open(path, 'w') as f:
            yaml.safe_dump(config, f)
        return path

    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        self.assertEqual(args.config_file, "config.yaml")
        self.assertIsNone(args.seed)

        args = build_parser().parse_args(["run.yaml", "--seed", "9"])
        self.assertEqual(args.config_file, "run.yaml")
        self.assertEqual(args.seed, 9)

    def test_missing_config_exits_with_error(self):
        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            with self.assertRaises(SystemExit) as ctx:
                main([str(self.temp_dir / "missing.yaml")])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("Error:", buffer.getvalue())

    def test_invalid_config_exits_with_error(self):
        path = self.temp_dir / "bad.yaml"
        with open(path, 'w') as f:
            yaml.safe_dump({"architecture": {"modification": True, "haplolethal": True}}, f)

        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            with self.assertRaises(SystemExit) as ctx:
                main([str(path)])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("Mutually exclusive", buffer.getvalue())

    def test_seed_override_runs(self):
        csv_path = self.temp_dir / "stats.csv"
        path = self.write_config(output={"stats_csv": str(csv_path)})

        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            main([str(path), "--seed", "11"])
        output = buffer.getvalue()

        self.assertIn("Random seed: 11", output)
        self.assertIn("OUT:", output)
        self.assertEqual(len(load_stats_csv(csv_path)), 2)


if __name__ == '__main__':
    unittest.main()
