"""
Tests for the standalone configuration validation tool.
"""

import unittest
import tempfile
import shutil
from pathlib import Path

from validate_config import ConfigValidator


class TestConfigValidator(unittest.TestCase):

    def setUp(self):
        self.validator = ConfigValidator()
        self.config = {
            "population": {"capacity": 1000},
            "drive": {"germline_resistance_rate": 0.9, "num_grnas": 2},
            "architecture": {"haplolethal": True},
            "release": {"drop_size": 100, "drop_generation": 5},
            "run": {"generations": 50, "random_seed": 1},
        }

    def test_valid_config(self):
        result = self.validator.validate_dict(self.config)
        self.assertTrue(result['valid'])
        self.assertEqual(result['errors'], [])
        self.assertEqual(result['summary']['architecture']['family'], "haplolethal")
        self.assertTrue(result['summary']['run']['reproducible'])

    def test_errors_make_config_invalid(self):
        self.config["architecture"]["modification"] = True
        result = self.validator.validate_dict(self.config)
        self.assertFalse(result['valid'])
        self.assertTrue(any("Mutually exclusive" in e for e in result['errors']))

    def test_drop_after_run_end_warns(self):
        self.config["run"]["generations"] = 5
        result = self.validator.validate_dict(self.config)
        self.assertTrue(any("before the drop" in w for w in result['warnings']))

    def test_no_cutting_warns(self):
        self.config["drive"]["germline_resistance_rate"] = 0.0
        result = self.validator.validate_dict(self.config)
        self.assertTrue(any("Mendelian" in w for w in result['warnings']))

    def test_unseeded_run_recommendation(self):
        self.config["run"]["random_seed"] = "random"
        result = self.validator.validate_dict(self.config)
        self.assertFalse(result['summary']['run']['reproducible'])
        self.assertTrue(any("random_seed" in r for r in result['recommendations']))

    def test_unreadable_file(self):
        temp_dir = Path(tempfile.mkdtemp())
        try:
            result = self.validator.validate_comprehensive(str(temp_dir / "missing.yaml"))
            self.assertFalse(result['valid'])
            self.assertIn("Failed to load configuration", result['errors'][0])
        finally:
            shutil.rmtree(temp_dir)


if __name__ == '__main__':
    unittest.main()
