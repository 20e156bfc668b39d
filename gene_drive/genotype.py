"""
Genotype queries shared by inheritance, fitness, viability and statistics.
"""

from typing import Tuple
import numpy as np

from .config_loader import Architecture, DriveConfig
from .data_models import Allele, Genome, Individual


def is_drive_block(block: np.ndarray) -> bool:
    """A block is a functional drive only if every site reads DRIVE."""
    return bool(np.all(block == Allele.DRIVE))


def has_r2(block: np.ndarray) -> bool:
    return bool(np.any(block == Allele.R2))


def has_wild_type(block: np.ndarray) -> bool:
    return bool(np.any(block == Allele.WILD_TYPE))


def classify_block(block: np.ndarray) -> Allele:
    """
    Summarise a block as a single allele for counting.

    Full drive -> DRIVE, any R2 or GAP -> R2, any R1 -> R1, else WILD_TYPE.
    """
    if is_drive_block(block):
        return Allele.DRIVE
    if np.any((block == Allele.R2) | (block == Allele.GAP)):
        return Allele.R2
    if np.any(block == Allele.R1):
        return Allele.R1
    return Allele.WILD_TYPE


def has_y_drive(individual: Individual) -> bool:
    """Male whose sex-determining copy carries the Y-linked drive."""
    return individual.is_male and is_drive_block(individual.paternal.drive_arm)


def drive_copies_at(individual: Individual, block_name: str) -> int:
    return sum(is_drive_block(g.block(block_name)) for g in individual.genomes)


def drive_copies(individual: Individual, config: DriveConfig) -> int:
    """
    Number of functional drive copies (0, 1 or 2).

    Under two-locus underdominance a copy counts when either locus is drive.
    """
    if config.is_y_suppression:
        return int(has_y_drive(individual))
    if config.is_two_locus:
        return sum(
            is_drive_block(g.target) or is_drive_block(g.drive_arm)
            for g in individual.genomes
        )
    return drive_copies_at(individual, "target")


def locus_drive_copies(individual: Individual) -> Tuple[int, int]:
    """Drive copies at locus 1 (target) and locus 2 (drive_arm)."""
    return drive_copies_at(individual, "target"), drive_copies_at(individual, "drive_arm")


def target_blocks(config: DriveConfig) -> Tuple[str, ...]:
    """Blocks whose disruption matters for fitness and viability."""
    if config.is_two_locus:
        return ("target", "drive_arm")
    return ("target",)


def copy_has_r2(genome: Genome, config: DriveConfig) -> bool:
    return any(has_r2(genome.block(name)) for name in target_blocks(config))


def r2_copies(individual: Individual, config: DriveConfig) -> int:
    return sum(copy_has_r2(g, config) for g in individual.genomes)


FEMALE_STERILE_FAMILIES = (
    Architecture.HAPLOLETHAL,
    Architecture.DOUBLE_RESCUE,
    Architecture.AUTOSOMAL_SUPPRESSION,
)


def is_suppressed_female(individual: Individual, config: DriveConfig) -> bool:
    """
    Drive homozygous female (sterile).

    Applies to the haplolethal-style families and to autosomal suppression,
    where the drive disrupts a female fertility gene.
    """
    return (
        individual.is_female
        and config.architecture in FEMALE_STERILE_FAMILIES
        and drive_copies(individual, config) == 2
    )
