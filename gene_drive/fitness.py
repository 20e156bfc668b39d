"""
Fitness model: maps a diploid genotype to a scalar fitness.

The same value is used as male mating attractiveness and as a
multiplicative term in female fecundity.
"""

import math

from .config_loader import DriveConfig
from .data_models import Genome, Individual
from .genotype import copy_has_r2, is_drive_block


def copy_fitness(genome: Genome, config: DriveConfig) -> float:
    """Fitness contribution of a single genome copy."""
    value = 1.0

    if config.is_y_suppression:
        drive_blocks = ("drive_arm",)
    elif config.is_two_locus:
        drive_blocks = ("target", "drive_arm")
    else:
        drive_blocks = ("target",)

    for name in drive_blocks:
        if is_drive_block(genome.block(name)):
            value *= config.drive_fitness_value

    if copy_has_r2(genome, config):
        value *= config.r2_fitness_value

    return value


def individual_fitness(individual: Individual, config: DriveConfig) -> float:
    """
    Combine per-copy fitness as a geometric mean.

    Under Y-linked suppression the trait is hemizygous and only the
    sex-determining (paternal) copy counts.
    """
    paternal = copy_fitness(individual.paternal, config)
    if config.is_y_suppression:
        return paternal
    return math.sqrt(copy_fitness(individual.maternal, config) * paternal)
