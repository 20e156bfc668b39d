"""
Gene Drive Population Simulator

This package models the multi-generation spread of CRISPR gene drives
through a sexually-reproducing population, for several drive architectures
driven by one parameterized engine.

Key Features:
- Explicit per-site allele states on two independently-assorting blocks
- Multi-phase stochastic cut engine (R1, R2 and deletion gaps)
- Germline and maternal embryo editing windows
- Architecture-specific fitness, sterility and viability rules
- Seedable, explicitly threaded random number generator

Modules:
- data_models: Allele states, Genome, Individual, Population
- config_loader: YAML loading, validation and the immutable DriveConfig
- cutting: The cut engine
- genotype: Drive-copy and resistance queries
- inheritance: Gamete transmission, germline and embryo effects
- fitness: Genotype to fitness mapping
- reproduction: Mate choice, offspring counts, Y-drive gamete sampling
- viability: Post-editing viability gate
- lifecycle: Bootstrap, drive release, culling and ageing
- statistics: Per-generation counters, report lines and CSV export
- orchestration: Generation loop
- cli: Run a simulation from a YAML file
- visualization: Trajectory plots
"""

__version__ = "0.1.0"
__author__ = "Gene Drive Modelling Team"

from .data_models import Allele, Sex, Genome, Individual, Population
from .config_loader import Architecture, DriveConfig, ConfigurationError, load_drive_config

__all__ = [
    "Allele",
    "Sex",
    "Genome",
    "Individual",
    "Population",
    "Architecture",
    "DriveConfig",
    "ConfigurationError",
    "load_drive_config",
]
