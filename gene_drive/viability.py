"""
Viability gate for newly conceived offspring.

Runs after the inheritance effects. Normalizes the sex-determining copy
for sex-linked architectures, then applies the lethality filters of the
active drive architecture.
"""

from typing import List, Tuple

from .config_loader import Architecture, DriveConfig
from .data_models import Allele, Individual, new_block
from .genotype import (
    drive_copies,
    has_r2,
    has_y_drive,
    r2_copies,
)

HAPLOLETHAL_FAMILIES = (Architecture.HAPLOLETHAL, Architecture.DOUBLE_RESCUE)
RECESSIVE_LETHAL_FAMILIES = (Architecture.HAPLOSUFFICIENT, Architecture.HAPLOLETHAL)


def normalize_sex_chromosomes(child: Individual, father: Individual, config: DriveConfig) -> None:
    """
    Force the sex-determining copy into a state consistent with the child's sex.

    X-linked: a son's Y carries no target gene, so its target block is reset
    to wild type. Y-suppression: only sons of Y-drive fathers carry the drive
    on their paternal drive_arm; everyone else carries the wild-type X/Y slot.
    """
    num_sites = child.paternal.num_sites

    if config.x_linked and child.is_male:
        child.paternal.target = new_block(num_sites, Allele.WILD_TYPE)

    if config.is_y_suppression:
        if child.is_male and has_y_drive(father):
            child.paternal.drive_arm = new_block(num_sites, Allele.DRIVE)
        else:
            child.paternal.drive_arm = new_block(num_sites, Allele.WILD_TYPE)


def viability_failures(child: Individual, config: DriveConfig) -> List[str]:
    """
    Names of the lethality filters the child fails (empty if viable).

    All filters are independent; any one is enough to reject the child.
    """
    failures = []
    architecture = config.architecture

    if architecture in HAPLOLETHAL_FAMILIES:
        if r2_copies(child, config) >= 1 and drive_copies(child, config) == 0:
            failures.append("haplolethal_disruption")

    if architecture in RECESSIVE_LETHAL_FAMILIES:
        if r2_copies(child, config) == 2 and drive_copies(child, config) < 2:
            failures.append("recessive_lethal_disruption")

    if architecture is Architecture.TWO_LOCUS_UNDERDOMINANCE:
        for name in ("target", "drive_arm"):
            if all(has_r2(g.block(name)) for g in child.genomes):
                failures.append(f"underdominance_{name}_homozygous_r2")

    return failures


def is_viable(child: Individual, config: DriveConfig) -> bool:
    return not viability_failures(child, config)


def gate_offspring(child: Individual, father: Individual, config: DriveConfig) -> Tuple[bool, List[str]]:
    """
    Normalize and check a conceived offspring.

    Args:
        child: Offspring after germline and embryo effects (edited in place)
        father: The offspring's father
        config: Run configuration

    Returns:
        Tuple of (viable, failed_filters)
    """
    normalize_sex_chromosomes(child, father, config)
    failures = viability_failures(child, config)
    return len(failures) == 0, failures
