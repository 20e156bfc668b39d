"""
Cut engine for the gene drive simulator.

Implements the stochastic, multi-phase CRISPR cutting process that turns
wild-type target sites into R1, R2 or gap alleles.
"""

from enum import Enum
from typing import List, Optional, Tuple
import numpy as np

from .data_models import Allele, Genome


class CutGroup(Enum):
    """Which target-site group(s) of a genome copy to process."""
    TARGET = ("target",)
    DRIVE_ARM = ("drive_arm",)
    BOTH = ("target", "drive_arm")

    @property
    def blocks(self) -> Tuple[str, ...]:
        return self.value


def per_phase_rate(total_rate: float, num_phases: int, dose: int = 1) -> float:
    """
    Per-phase cut probability that composes to an aggregate rate.

    Over `num_phases` independent phases the chance a site escapes every
    phase is (1 - total_rate) ** dose.

    Args:
        total_rate: Aggregate resistance rate over the whole window
        num_phases: Number of independent cutting phases
        dose: Drive copies supplying the nuclease (maternal dose for embryos)

    Returns:
        Cut probability per phase and per site
    """
    if dose <= 0 or total_rate <= 0.0:
        return 0.0
    if total_rate >= 1.0:
        return 1.0
    return 1.0 - (1.0 - total_rate) ** (dose / num_phases)


def wild_type_positions(block: np.ndarray) -> np.ndarray:
    return np.flatnonzero(block == Allele.WILD_TYPE)


def cut_block(
    block: np.ndarray,
    cut_rate: float,
    num_phases: int,
    r1_rate: float,
    rng: np.random.Generator
) -> int:
    """
    Run the cutting phases over one chromosome block, in place.

    Each phase marks every remaining wild-type site as CUT with probability
    `cut_rate`. A single cut becomes R1 (probability `r1_rate`) or R2. Several
    cuts in one phase delete the span between them: the leftmost cut becomes
    R2 and everything after it, up to and including the rightmost cut,
    becomes GAP.

    Args:
        block: Block to edit
        cut_rate: Per-phase cut probability
        num_phases: Number of phases
        r1_rate: Probability that a single clean cut yields R1
        rng: Random number generator

    Returns:
        Number of phases in which at least one cut happened
    """
    events = 0
    if cut_rate <= 0.0:
        return events

    candidates = wild_type_positions(block)

    for _ in range(num_phases):
        if candidates.size == 0:
            break

        hits = candidates[rng.random(candidates.size) < cut_rate]
        if hits.size == 0:
            continue

        block[hits] = Allele.CUT
        events += 1

        if hits.size == 1:
            block[hits[0]] = Allele.R1 if rng.random() < r1_rate else Allele.R2
        else:
            left, right = int(hits.min()), int(hits.max())
            # The rightmost cut is the far end of the deletion
            block[left + 1:right + 1] = Allele.GAP
            block[left] = Allele.R2

        candidates = wild_type_positions(block)

    return events


def cut_genome(
    genome: Genome,
    cut_rate: float,
    groups: CutGroup,
    num_phases: int,
    r1_rate: float,
    rng: np.random.Generator
) -> int:
    """
    Apply the cut engine to the selected blocks of one genome copy.

    Returns:
        Total number of cutting events across the processed blocks
    """
    return sum(
        cut_block(genome.block(name), cut_rate, num_phases, r1_rate, rng)
        for name in groups.blocks
    )


def combine_groups(groups: List[CutGroup]) -> Optional[CutGroup]:
    """Merge a list of groups into one selector (None when empty)."""
    blocks = set()
    for group in groups:
        blocks.update(group.blocks)
    if not blocks:
        return None
    if blocks == {"target", "drive_arm"}:
        return CutGroup.BOTH
    return CutGroup.TARGET if "target" in blocks else CutGroup.DRIVE_ARM
