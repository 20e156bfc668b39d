#!/usr/bin/env python3
"""
Command-line entry point for the gene drive simulator.

Runs one simulation from a YAML run configuration, printing a summary line
and an OUT: report line per generation.
"""

import sys
import argparse

from gene_drive.cli import run_from_config
from gene_drive.config_loader import ConfigurationError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simulate gene drive spread through a population",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  gene-drive config.yaml\n"
            "  gene-drive config.yaml --seed 7\n"
            "  python3 validate_config.py config.yaml"
        )
    )

    parser.add_argument(
        'config_file',
        nargs='?',
        default='config.yaml',
        help='Run configuration file (default: config.yaml)'
    )

    parser.add_argument(
        '--seed', '-s',
        type=int,
        default=None,
        help='Override run.random_seed from the configuration'
    )

    return parser


def main(argv=None):
    """Parse arguments and run the simulation; exit status 1 on failure."""
    args = build_parser().parse_args(argv)

    try:
        run_from_config(args.config_file, seed=args.seed)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
    except (ConfigurationError, OSError) as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
