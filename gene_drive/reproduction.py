"""
Reproduction scheduler.

Per prospective mother: mate choice by male fitness, a density-dependent
offspring count, sterility rules, and the conception of each offspring
through the inheritance effects and the viability gate.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import numpy as np

from .config_loader import Architecture, DriveConfig
from .data_models import Genome, Individual, Sex
from .fitness import individual_fitness
from .genotype import (
    copy_has_r2,
    drive_copies,
    has_y_drive,
    is_suppressed_female,
    r2_copies,
)
from .inheritance import apply_embryo_effect, apply_germline_effect, cross, transmit_genome
from .viability import gate_offspring

MAX_MATE_ATTEMPTS = 10
MAX_OFFSPRING = 50
BASE_FECUNDITY = 0.04  # 2 expected offspring per female at capacity


@dataclass
class ReproductionResult:
    """
    Outcome of one mother's reproduction in a generation.

    Attributes:
        father: Accepted mate (None if no mate was found or she is sterile)
        conceived: Offspring count drawn before the viability gate
        offspring: Viable offspring to admit
        rejected: Number of conceived offspring that failed the gate
    """
    father: Optional[Individual]
    conceived: int = 0
    offspring: List[Individual] = field(default_factory=list)
    rejected: int = 0


def density_factor(num_adults: int, capacity: int, growth_at_zero_density: float) -> float:
    """
    Beverton-Holt fecundity scaling.

    Equals `growth_at_zero_density` for an empty population, 1 at capacity
    and falls below 1 above capacity.
    """
    competition_ratio = num_adults / capacity
    return growth_at_zero_density / ((growth_at_zero_density - 1.0) * competition_ratio + 1.0)


def choose_mate(
    males: Sequence[Individual],
    config: DriveConfig,
    rng: np.random.Generator,
    max_attempts: int = MAX_MATE_ATTEMPTS
) -> Optional[Individual]:
    """
    Sample males uniformly, accepting each with probability equal to his fitness.

    Returns:
        The accepted male, or None after `max_attempts` rejections
    """
    if not males:
        return None

    for _ in range(max_attempts):
        candidate = males[int(rng.integers(0, len(males)))]
        if rng.random() < individual_fitness(candidate, config):
            return candidate
    return None


def offspring_count(
    mother: Individual,
    num_adults: int,
    config: DriveConfig,
    rng: np.random.Generator
) -> int:
    """
    Draw the number of offspring a mated female conceives.

    The trial probability is maternal fitness times the density factor
    times the base fecundity, divided by (1 + female survival) to account
    for females that breed in several generations.
    """
    factor = density_factor(num_adults, config.capacity, config.growth_at_zero_density)
    p = individual_fitness(mother, config) * factor * BASE_FECUNDITY
    p /= 1.0 + config.female_survival_rate
    p = min(max(p, 0.0), 1.0)
    return int(rng.binomial(MAX_OFFSPRING, p))


def is_sterile_male(male: Individual, config: DriveConfig) -> bool:
    """Male sterility rules for modification and autosomal suppression drives."""
    if config.architecture not in (Architecture.MODIFICATION, Architecture.AUTOSOMAL_SUPPRESSION):
        return False

    copies = drive_copies(male, config)
    if r2_copies(male, config) == 2 and copies == 0:
        return True
    if config.architecture is Architecture.AUTOSOMAL_SUPPRESSION and copies == 2:
        return True
    return False


def sample_y_drive_gamete(
    father: Individual,
    config: DriveConfig,
    rng: np.random.Generator
) -> Tuple[int, Genome, Sex]:
    """
    Meiotic-drive gamete sampling for a Y-drive father.

    Works on snapshots of the father's X (copy 0) and drive-bearing Y
    (copy 1). One germline cutting pass is applied to the X snapshot; the Y
    carries no copy of the X-linked target. The transmitted chromosome is
    then drawn from the number of copies carrying R2. With exactly one R2
    copy, it is transmitted with probability 1/3, otherwise each copy is
    equally likely. The transmitted chromosome fixes the gamete: the Y gives
    a drive-bearing gamete (son), the X a wild-type one (daughter). Shredded
    X chromosomes therefore bias the brood towards sons. The father is never
    modified.

    Returns:
        Tuple of (transmitted_copy_index, gamete_genome, offspring_sex)
    """
    snapshots = [father.maternal.copy(), father.paternal.copy()]
    apply_germline_effect(snapshots[0], father, config, rng)

    carries_r2 = [copy_has_r2(snapshot, config) for snapshot in snapshots]

    if sum(carries_r2) == 1:
        r2_index = carries_r2.index(True)
        index = r2_index if rng.random() < 1.0 / 3.0 else 1 - r2_index
    else:
        index = int(rng.integers(0, 2))

    sex = Sex.MALE if index == 1 else Sex.FEMALE
    gamete = snapshots[index].copy()
    return index, gamete, sex


def conceive(
    mother: Individual,
    father: Individual,
    config: DriveConfig,
    rng: np.random.Generator
) -> Tuple[Individual, bool, List[str]]:
    """
    Conceive one offspring and run it through the viability gate.

    Returns:
        Tuple of (child, viable, failed_filters)
    """
    if config.is_y_suppression and has_y_drive(father):
        _, paternal, sex = sample_y_drive_gamete(father, config, rng)
        child = Individual(
            maternal=transmit_genome(mother, config, rng),
            paternal=paternal,
            sex=sex,
        )
    else:
        sex = Sex.MALE if rng.random() < 0.5 else Sex.FEMALE
        child = cross(mother, father, sex, config, rng)

    apply_embryo_effect(child, mother, config, rng)
    viable, failures = gate_offspring(child, father, config)
    return child, viable, failures


def reproduce(
    mother: Individual,
    males: Sequence[Individual],
    num_adults: int,
    config: DriveConfig,
    rng: np.random.Generator
) -> ReproductionResult:
    """
    Run the reproduction state machine for one prospective mother.

    Args:
        mother: Prospective mother
        males: Males available as mates this generation
        num_adults: Breeding population size used for density regulation
        config: Run configuration
        rng: Random number generator

    Returns:
        ReproductionResult with the accepted father and viable offspring
    """
    if is_suppressed_female(mother, config):
        return ReproductionResult(father=None)

    father = choose_mate(males, config, rng)
    if father is None:
        return ReproductionResult(father=None)

    count = offspring_count(mother, num_adults, config, rng)
    if is_sterile_male(father, config):
        count = 0

    result = ReproductionResult(father=father, conceived=count)
    for _ in range(count):
        child, viable, _ = conceive(mother, father, config, rng)
        if viable:
            result.offspring.append(child)
        else:
            result.rejected += 1

    return result
