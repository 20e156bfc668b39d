"""
Configuration Loading System

Loads YAML configuration files and converts them into the immutable
DriveConfig used by every component of the simulator.
"""

import yaml
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Any, Optional


class ConfigurationError(Exception):
    """Raised when configuration is invalid"""
    pass


class Architecture(Enum):
    """Drive architecture families. Exactly one is active per run."""
    HAPLOLETHAL = "haplolethal"
    DOUBLE_RESCUE = "double_rescue"
    HAPLOSUFFICIENT = "haplosufficient"
    Y_SUPPRESSION = "y_suppression"
    AUTOSOMAL_SUPPRESSION = "autosomal_suppression"
    MODIFICATION = "modification"
    TWO_LOCUS_UNDERDOMINANCE = "two_locus_underdominance"


MODIFIER_FLAGS = ("x_linked", "male_only_promoter")

RATE_FIELDS = (
    ("population", "female_survival_rate"),
    ("drive", "drive_fitness_value"),
    ("drive", "r2_fitness_value"),
    ("drive", "embryo_resistance_rate"),
    ("drive", "germline_resistance_rate"),
    ("drive", "r1_occurrence_rate"),
)

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "population": {
        "capacity": 1000,
        "female_survival_rate": 0.0,
        "growth_at_zero_density": 6.0,
    },
    "drive": {
        "drive_fitness_value": 1.0,
        "r2_fitness_value": 1.0,
        "embryo_resistance_rate": 0.0,
        "germline_resistance_rate": 0.0,
        "r1_occurrence_rate": 0.0,
        "num_grnas": 1,
        "num_cut_phases": 5,
    },
    "release": {
        "drop_size": 100,
        "drop_generation": 10,
        "heterozygous_drop": True,
        "sex_specific_drop": False,
    },
    "run": {
        "generations": 100,
        "random_seed": None,
    },
}


@dataclass(frozen=True)
class DriveConfig:
    """
    Immutable run configuration, built once and passed to every component.

    Attributes:
        architecture: Active drive architecture family
        capacity: Carrying capacity of the population
        female_survival_rate: Probability an adult female survives to breed again
        growth_at_zero_density: Fecundity multiplier for an almost empty population
        drive_fitness_value: Multiplicative fitness of a drive-carrying copy
        r2_fitness_value: Multiplicative fitness of an R2-carrying copy
        embryo_resistance_rate: Aggregate resistance rate from maternal deposition
        germline_resistance_rate: Aggregate resistance rate in the germline
        r1_occurrence_rate: Probability a single clean cut yields R1
        num_grnas: Target sites per chromosome block
        num_cut_phases: Independent cutting phases per editing window
        x_linked: Drive is on the X chromosome
        male_only_promoter: Cas9 is expressed only in the male germline
        drop_size: Number of drive carriers released
        drop_generation: Generation at which they are released
        heterozygous_drop: Release heterozygotes instead of homozygotes
        sex_specific_drop: Release males only
        generations: Number of generations to simulate
        random_seed: Seed for the run generator (None for fresh entropy)
    """
    architecture: Architecture
    capacity: int = 1000
    female_survival_rate: float = 0.0
    growth_at_zero_density: float = 6.0
    drive_fitness_value: float = 1.0
    r2_fitness_value: float = 1.0
    embryo_resistance_rate: float = 0.0
    germline_resistance_rate: float = 0.0
    r1_occurrence_rate: float = 0.0
    num_grnas: int = 1
    num_cut_phases: int = 5
    x_linked: bool = False
    male_only_promoter: bool = False
    drop_size: int = 100
    drop_generation: int = 10
    heterozygous_drop: bool = True
    sex_specific_drop: bool = False
    generations: int = 100
    random_seed: Optional[int] = None

    @property
    def is_two_locus(self) -> bool:
        return self.architecture is Architecture.TWO_LOCUS_UNDERDOMINANCE

    @property
    def is_y_suppression(self) -> bool:
        return self.architecture is Architecture.Y_SUPPRESSION


def load_config(config_path: str = "config.yaml") -> Dict[str, Any]:
    """Load configuration from YAML file"""
    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigurationError("Configuration file is empty")
    if not isinstance(config, dict):
        raise ConfigurationError("Configuration root must be a mapping")
    return config


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Section merged over its defaults."""
    merged = dict(DEFAULTS.get(name, {}))
    merged.update(config.get(name) or {})
    return merged


def active_architectures(config: Dict[str, Any]) -> List[Architecture]:
    """List the architecture families switched on in the config."""
    arch_config = config.get("architecture") or {}
    return [arch for arch in Architecture if arch_config.get(arch.value, False)]


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of issues

    Returns:
        List of validation error messages (empty if valid)
    """
    issues = []

    if "architecture" not in config:
        issues.append("Missing required section: architecture")

    arch_config = config.get("architecture") or {}
    known_flags = {arch.value for arch in Architecture} | set(MODIFIER_FLAGS)
    for flag in arch_config:
        if flag not in known_flags:
            issues.append(f"Unknown architecture flag: {flag}")

    active = active_architectures(config)
    if len(active) == 0:
        issues.append("No drive architecture selected")
    elif len(active) > 1:
        names = ", ".join(arch.value for arch in active)
        issues.append(f"Mutually exclusive architectures selected: {names}")

    if arch_config.get("x_linked", False):
        for arch in (Architecture.Y_SUPPRESSION, Architecture.TWO_LOCUS_UNDERDOMINANCE):
            if arch in active:
                issues.append(f"x_linked cannot be combined with {arch.value}")

    for section, key in RATE_FIELDS:
        value = _section(config, section)[key]
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            issues.append(f"{section}.{key} must be a number")
        elif not 0.0 <= value <= 1.0:
            issues.append(f"{section}.{key} must be within [0, 1], got {value}")

    population = _section(config, "population")
    if not isinstance(population["capacity"], int) or population["capacity"] < 1:
        issues.append("population.capacity must be a positive integer")
    growth = population["growth_at_zero_density"]
    if not isinstance(growth, (int, float)) or growth < 1:
        issues.append("population.growth_at_zero_density must be at least 1")

    drive = _section(config, "drive")
    for key in ("num_grnas", "num_cut_phases"):
        if not isinstance(drive[key], int) or drive[key] < 1:
            issues.append(f"drive.{key} must be a positive integer")

    release = _section(config, "release")
    if not isinstance(release["drop_size"], int) or release["drop_size"] < 0:
        issues.append("release.drop_size must be a non-negative integer")
    if not isinstance(release["drop_generation"], int) or release["drop_generation"] < 0:
        issues.append("release.drop_generation must be a non-negative integer")

    run = _section(config, "run")
    if not isinstance(run["generations"], int) or run["generations"] < 1:
        issues.append("run.generations must be a positive integer")
    seed = run["random_seed"]
    if seed is not None and seed != "random" and not isinstance(seed, int):
        issues.append("run.random_seed must be an integer, 'random' or null")

    return issues


def build_drive_config(config: Dict[str, Any]) -> DriveConfig:
    """
    Convert a raw configuration dictionary into a DriveConfig

    Args:
        config: Dictionary as returned by load_config

    Returns:
        Validated, immutable DriveConfig

    Raises:
        ConfigurationError: If any validation issue is found
    """
    issues = validate_config(config)
    if issues:
        raise ConfigurationError("Invalid configuration:\n  - " + "\n  - ".join(issues))

    arch_config = config.get("architecture") or {}
    population = _section(config, "population")
    drive = _section(config, "drive")
    release = _section(config, "release")
    run = _section(config, "run")

    random_seed = run["random_seed"]
    if random_seed == "random":
        random_seed = None

    return DriveConfig(
        architecture=active_architectures(config)[0],
        capacity=population["capacity"],
        female_survival_rate=float(population["female_survival_rate"]),
        growth_at_zero_density=float(population["growth_at_zero_density"]),
        drive_fitness_value=float(drive["drive_fitness_value"]),
        r2_fitness_value=float(drive["r2_fitness_value"]),
        embryo_resistance_rate=float(drive["embryo_resistance_rate"]),
        germline_resistance_rate=float(drive["germline_resistance_rate"]),
        r1_occurrence_rate=float(drive["r1_occurrence_rate"]),
        num_grnas=drive["num_grnas"],
        num_cut_phases=drive["num_cut_phases"],
        x_linked=bool(arch_config.get("x_linked", False)),
        male_only_promoter=bool(arch_config.get("male_only_promoter", False)),
        drop_size=release["drop_size"],
        drop_generation=release["drop_generation"],
        heterozygous_drop=bool(release["heterozygous_drop"]),
        sex_specific_drop=bool(release["sex_specific_drop"]),
        generations=run["generations"],
        random_seed=random_seed,
    )


def load_drive_config(config_path: str = "config.yaml") -> DriveConfig:
    """Load, validate and build a DriveConfig from a YAML file"""
    return build_drive_config(load_config(config_path))


def get_output_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Get the run.output section (stats CSV, plot path, overwrite)"""
    return (config.get("run") or {}).get("output") or {}


def print_config_summary(config_path: str = "config.yaml"):
    """Print a summary of the configuration"""
    try:
        config = load_config(config_path)

        print("=" * 50)
        print("CONFIGURATION SUMMARY")
        print("=" * 50)

        active = active_architectures(config)
        print(f"Architecture: {', '.join(a.value for a in active) or 'N/A'}")
        arch_config = config.get("architecture") or {}
        modifiers = [flag for flag in MODIFIER_FLAGS if arch_config.get(flag, False)]
        print(f"Modifiers: {', '.join(modifiers) or 'none'}")

        population = _section(config, "population")
        print(f"Capacity: {population['capacity']}")
        print(f"Female survival: {population['female_survival_rate']}")

        drive = _section(config, "drive")
        print(f"\ngRNAs: {drive['num_grnas']} ({drive['num_cut_phases']} cut phases)")
        print(f"Germline resistance: {drive['germline_resistance_rate']}")
        print(f"Embryo resistance: {drive['embryo_resistance_rate']}")
        print(f"R1 occurrence: {drive['r1_occurrence_rate']}")

        release = _section(config, "release")
        print(f"\nDrop: {release['drop_size']} at generation {release['drop_generation']}")

        issues = validate_config(config)
        if issues:
            print(f"\nValidation Issues ({len(issues)}):")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print("\nConfiguration is valid ✓")

        print("=" * 50)

    except ConfigurationError as e:
        print(f"Configuration Error: {e}")


if __name__ == "__main__":
    print_config_summary()
