"""
Germline and embryo inheritance effects.

Builds gametes by independent assortment of the two chromosome blocks and
applies the cut engine in the two editing windows: the parent's germline
and the embryo (driven by maternally deposited nuclease).
"""

from typing import List, Optional
import numpy as np

from .config_loader import DriveConfig
from .cutting import CutGroup, combine_groups, cut_genome, per_phase_rate
from .data_models import Genome, Individual, Sex
from .genotype import (
    drive_copies,
    has_wild_type,
    has_y_drive,
    locus_drive_copies,
)


def germline_groups(parent: Individual, config: DriveConfig) -> Optional[CutGroup]:
    """
    Target-site groups eligible for cutting in a parent's germline.

    Under two-locus underdominance each drive locus cuts the other locus.

    Args:
        parent: Transmitting parent
        config: Run configuration

    Returns:
        CutGroup selector, or None if the parent's germline does not cut
    """
    if config.male_only_promoter and parent.is_female:
        return None

    if config.is_y_suppression:
        return CutGroup.TARGET if has_y_drive(parent) else None

    if config.is_two_locus:
        locus1, locus2 = locus_drive_copies(parent)
        groups = []
        if locus1 > 0:
            groups.append(CutGroup.DRIVE_ARM)
        if locus2 > 0:
            groups.append(CutGroup.TARGET)
        return combine_groups(groups)

    return CutGroup.TARGET if drive_copies(parent, config) > 0 else None


def apply_germline_effect(
    genome: Genome,
    parent: Individual,
    config: DriveConfig,
    rng: np.random.Generator
) -> int:
    """
    Cut a chromosome copy on its way through the parent's germline.

    Args:
        genome: Gamete copy to edit in place (never one of the parent's own copies)
        parent: Parent whose drive genotype decides whether cutting happens
        config: Run configuration
        rng: Random number generator

    Returns:
        Number of cutting events
    """
    groups = germline_groups(parent, config)
    if groups is None:
        return 0
    if not any(has_wild_type(genome.block(name)) for name in groups.blocks):
        return 0

    rate = per_phase_rate(config.germline_resistance_rate, config.num_cut_phases)
    return cut_genome(genome, rate, groups, config.num_cut_phases,
                      config.r1_occurrence_rate, rng)


def transmit_genome(
    parent: Individual,
    config: DriveConfig,
    rng: np.random.Generator,
    copy_index: Optional[int] = None
) -> Genome:
    """
    Produce the genome copy a parent passes to one offspring.

    The two blocks assort independently. `copy_index` pins the target block
    to one of the parent's copies (used for sex-linked transmission).

    Returns:
        New Genome; the parent is left untouched
    """
    genomes = parent.genomes
    if copy_index is None:
        copy_index = int(rng.integers(0, 2))
    arm_index = int(rng.integers(0, 2))

    gamete = Genome(
        target=genomes[copy_index].target.copy(),
        drive_arm=genomes[arm_index].drive_arm.copy(),
    )
    apply_germline_effect(gamete, parent, config, rng)
    return gamete


def cross(
    mother: Individual,
    father: Individual,
    sex: Sex,
    config: DriveConfig,
    rng: np.random.Generator
) -> Individual:
    """
    Standard crossing of two parents into a new offspring of given sex.

    Under X-linkage the father passes his X (maternal copy) to daughters
    and his Y (paternal copy) to sons.
    """
    paternal_index = None
    if config.x_linked:
        paternal_index = 1 if sex is Sex.MALE else 0

    return Individual(
        maternal=transmit_genome(mother, config, rng),
        paternal=transmit_genome(father, config, rng, copy_index=paternal_index),
        sex=sex,
    )


def embryo_doses(mother: Individual, config: DriveConfig) -> List[tuple]:
    """
    (group, dose) pairs for maternal deposition.

    The dose is the number of drive copies the mother carries for the
    locus that cuts the group.
    """
    if config.male_only_promoter or config.is_y_suppression:
        return []

    if config.is_two_locus:
        locus1, locus2 = locus_drive_copies(mother)
        doses = []
        if locus1 > 0:
            doses.append((CutGroup.DRIVE_ARM, locus1))
        if locus2 > 0:
            doses.append((CutGroup.TARGET, locus2))
        return doses

    copies = drive_copies(mother, config)
    return [(CutGroup.TARGET, copies)] if copies > 0 else []


def apply_embryo_effect(
    child: Individual,
    mother: Individual,
    config: DriveConfig,
    rng: np.random.Generator
) -> int:
    """
    Cut both of a new offspring's genome copies using the mother's deposited nuclease.

    Args:
        child: Offspring to edit in place
        mother: Mother whose drive dosage sets the cut rate
        config: Run configuration
        rng: Random number generator

    Returns:
        Number of cutting events
    """
    events = 0
    for group, dose in embryo_doses(mother, config):
        rate = per_phase_rate(config.embryo_resistance_rate, config.num_cut_phases, dose)
        for genome in child.genomes:
            events += cut_genome(genome, rate, group, config.num_cut_phases,
                                 config.r1_occurrence_rate, rng)
    return events
