#!/usr/bin/env python3
"""
Configuration Validation Tool

Validates YAML configuration files for the gene drive simulator
and provides detailed feedback about parameter values and potential issues.
"""

import sys
import argparse
from typing import Dict, Any

from gene_drive.config_loader import (
    DEFAULTS,
    Architecture,
    active_architectures,
    load_config,
    validate_config,
)


class ConfigValidator:
    """Advanced configuration validator with detailed feedback"""

    def __init__(self):
        self.warnings = []
        self.errors = []
        self.recommendations = []

    def validate_comprehensive(self, config_path: str) -> Dict[str, Any]:
        """Perform comprehensive validation with detailed feedback"""
        try:
            config = load_config(config_path)
        except Exception as e:
            return {
                'valid': False,
                'errors': [f"Failed to load configuration: {e}"],
                'warnings': [],
                'recommendations': [],
                'summary': {}
            }

        return self.validate_dict(config)

    def validate_dict(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Validate an already-loaded configuration dictionary"""
        self.warnings = []
        self.errors = []
        self.recommendations = []

        # Basic validation
        self.errors.extend(validate_config(config))

        # Advanced validation
        population = self._section(config, 'population')
        drive = self._section(config, 'drive')
        release = self._section(config, 'release')
        run = self._section(config, 'run')

        self._validate_population(population)
        self._validate_drive(drive, config)
        self._validate_release(release, population, config)
        self._validate_run(run, release)

        summary = self._generate_summary(config, population, drive, release, run)

        return {
            'valid': len(self.errors) == 0,
            'errors': self.errors,
            'warnings': self.warnings,
            'recommendations': self.recommendations,
            'summary': summary
        }

    @staticmethod
    def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
        merged = dict(DEFAULTS.get(name, {}))
        merged.update(config.get(name) or {})
        return merged

    def _validate_population(self, population: Dict[str, Any]):
        """Validate population configuration"""
        capacity = population.get('capacity', 0)
        if isinstance(capacity, int):
            if 0 < capacity < 100:
                self.warnings.append(f"Small capacity ({capacity}) makes drift dominate drive dynamics")
            elif capacity > 100000:
                self.warnings.append(f"Large capacity ({capacity}) will run slowly")

        survival = population.get('female_survival_rate', 0.0)
        if isinstance(survival, (int, float)) and survival > 0.9:
            self.warnings.append(f"High female survival ({survival}) keeps old females breeding for many generations")

    def _validate_drive(self, drive: Dict[str, Any], config: Dict[str, Any]):
        """Validate drive configuration"""
        num_grnas = drive.get('num_grnas', 1)
        if isinstance(num_grnas, int) and num_grnas > 8:
            self.warnings.append(f"Many gRNAs ({num_grnas}) make multi-cut deletions dominate")

        phases = drive.get('num_cut_phases', 5)
        if isinstance(phases, int) and phases == 1:
            self.recommendations.append("A single cut phase suppresses sequential R1/R2 formation; consider 5 or more")

        germline = drive.get('germline_resistance_rate', 0.0)
        embryo = drive.get('embryo_resistance_rate', 0.0)
        if germline == 0 and embryo == 0:
            active = active_architectures(config)
            if active and active[0] is not Architecture.MODIFICATION:
                self.warnings.append("No cutting configured: the drive will spread only by Mendelian inheritance")

        r1_rate = drive.get('r1_occurrence_rate', 0.0)
        if isinstance(r1_rate, (int, float)) and r1_rate > 0.1:
            self.warnings.append(f"High R1 occurrence ({r1_rate}) will likely block drive spread")

        fitness = drive.get('drive_fitness_value', 1.0)
        if isinstance(fitness, (int, float)) and 0 < fitness < 0.5:
            self.warnings.append(f"Severe drive fitness cost ({fitness}) may prevent establishment")

    def _validate_release(self, release: Dict[str, Any], population: Dict[str, Any], config: Dict[str, Any]):
        """Validate drop configuration"""
        drop_size = release.get('drop_size', 0)
        capacity = population.get('capacity', 0)

        if drop_size == 0:
            self.warnings.append("drop_size is 0: no drive carriers will be released")
        elif isinstance(capacity, int) and isinstance(drop_size, int) and drop_size > capacity:
            self.warnings.append(f"drop_size ({drop_size}) exceeds capacity ({capacity})")

        active = active_architectures(config)
        if active and active[0] is Architecture.Y_SUPPRESSION and not release.get('sex_specific_drop', False):
            self.recommendations.append("Y-suppression carriers are always male; set sex_specific_drop for clarity")

    def _validate_run(self, run: Dict[str, Any], release: Dict[str, Any]):
        """Validate run configuration"""
        generations = run.get('generations', 0)
        drop_generation = release.get('drop_generation', 0)

        if isinstance(generations, int) and isinstance(drop_generation, int):
            drop_size = release.get('drop_size', 0)
            if generations <= drop_generation and isinstance(drop_size, int) and drop_size > 0:
                self.warnings.append(
                    f"Run ends (generation {generations}) before the drop (generation {drop_generation})"
                )

        random_seed = run.get('random_seed')
        if random_seed is None or random_seed == "random":
            self.recommendations.append("Set run.random_seed for a reproducible run")
        elif isinstance(random_seed, int) and (random_seed < 0 or random_seed > 2**31):
            self.warnings.append(f"random_seed ({random_seed}) outside typical range")

    def _generate_summary(self, config: Dict[str, Any], population: Dict[str, Any],
                          drive: Dict[str, Any], release: Dict[str, Any],
                          run: Dict[str, Any]) -> Dict[str, Any]:
        """Generate configuration summary"""
        active = active_architectures(config)
        arch_config = config.get('architecture') or {}
        random_seed = run.get('random_seed')

        return {
            'architecture': {
                'family': active[0].value if len(active) == 1 else ", ".join(a.value for a in active),
                'x_linked': bool(arch_config.get('x_linked', False)),
                'male_only_promoter': bool(arch_config.get('male_only_promoter', False)),
            },
            'population': {
                'capacity': population.get('capacity'),
                'female_survival_rate': population.get('female_survival_rate'),
            },
            'drive': {
                'num_grnas': drive.get('num_grnas'),
                'num_cut_phases': drive.get('num_cut_phases'),
                'germline_resistance_rate': drive.get('germline_resistance_rate'),
                'embryo_resistance_rate': drive.get('embryo_resistance_rate'),
            },
            'release': {
                'drop_size': release.get('drop_size'),
                'drop_generation': release.get('drop_generation'),
                'heterozygous': release.get('heterozygous_drop'),
            },
            'run': {
                'generations': run.get('generations'),
                'reproducible': random_seed is not None and random_seed != "random",
            },
        }


def main():
    """Main validation function"""
    parser = argparse.ArgumentParser(
        description="Validate YAML configuration files for the gene drive simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        'config_file',
        nargs='?',
        default='config.yaml',
        help='Configuration file to validate (default: config.yaml)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show detailed validation information'
    )

    parser.add_argument(
        '--warnings-only', '-w',
        action='store_true',
        help='Show only warnings and errors (no recommendations)'
    )

    args = parser.parse_args()

    validator = ConfigValidator()
    result = validator.validate_comprehensive(args.config_file)

    # Print results
    print("=" * 60)
    print("CONFIGURATION VALIDATION REPORT")
    print("=" * 60)
    print(f"File: {args.config_file}")
    print(f"Status: {'VALID' if result['valid'] else 'INVALID'}")
    print()

    if result['errors']:
        print("ERRORS:")
        for error in result['errors']:
            print(f"  - {error}")
        print()

    if result['warnings']:
        print("WARNINGS:")
        for warning in result['warnings']:
            print(f"  - {warning}")
        print()

    if result['recommendations'] and not args.warnings_only:
        print("RECOMMENDATIONS:")
        for rec in result['recommendations']:
            print(f"  - {rec}")
        print()

    if result['summary'] and args.verbose:
        print("SUMMARY:")
        for section, data in result['summary'].items():
            print(f"  {section.title()}:")
            for key, value in data.items():
                print(f"    {key}: {value}")
        print()

    # Quick stats
    if not args.verbose:
        summary = result['summary']
        if 'architecture' in summary and 'population' in summary:
            print(f"Architecture: {summary['architecture']['family']}, "
                  f"Capacity: {summary['population']['capacity']}, "
                  f"Drop: {summary['release']['drop_size']}")

    print("=" * 60)

    sys.exit(0 if result['valid'] else 1)


if __name__ == "__main__":
    main()
