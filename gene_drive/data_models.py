"""
Data models for the gene drive simulator.

Core data structures representing allele states, genome copies,
individuals and the population they belong to.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterator
import itertools

import numpy as np


class Allele(IntEnum):
    """State of a single gRNA target site."""
    WILD_TYPE = 0
    DRIVE = 1
    R1 = 2    # functional, cut-resistant
    R2 = 3    # loss of function
    CUT = 4   # transient, only exists inside the cut engine
    GAP = 5   # loss-of-function filler left by multi-site deletions


class Sex(Enum):
    FEMALE = "F"
    MALE = "M"


def new_block(num_sites: int, allele: Allele = Allele.WILD_TYPE) -> np.ndarray:
    """Create a chromosome block with every site set to `allele`."""
    return np.full(num_sites, int(allele), dtype=np.int8)


@dataclass
class Genome:
    """
    One genome copy: two independently-assorting chromosome blocks.

    Attributes:
        target: Cut-site block (locus 1); carries the drive for most architectures
        drive_arm: Drive-chromosome block (locus 2, or the Y slot under Y-suppression)
    """
    target: np.ndarray
    drive_arm: np.ndarray

    def __post_init__(self):
        """Coerce blocks to int8 arrays and check their shapes."""
        self.target = np.asarray(self.target, dtype=np.int8)
        self.drive_arm = np.asarray(self.drive_arm, dtype=np.int8)

        if self.target.ndim != 1 or self.target.size == 0:
            raise ValueError("Genome target block must be a non-empty 1-D array")
        if self.target.shape != self.drive_arm.shape:
            raise ValueError(
                f"Genome blocks differ in length: {self.target.size} vs {self.drive_arm.size}"
            )

    @classmethod
    def wild_type(cls, num_sites: int) -> "Genome":
        return cls(target=new_block(num_sites), drive_arm=new_block(num_sites))

    @property
    def num_sites(self) -> int:
        return int(self.target.size)

    def block(self, name: str) -> np.ndarray:
        """
        Get a block by name.

        Args:
            name: "target" or "drive_arm"

        Returns:
            The block array (not a copy)
        """
        if name == "target":
            return self.target
        if name == "drive_arm":
            return self.drive_arm
        raise ValueError(f"Unknown chromosome block: {name}")

    def copy(self) -> "Genome":
        return Genome(target=self.target.copy(), drive_arm=self.drive_arm.copy())


_id_counter = itertools.count()


@dataclass
class Individual:
    """
    A diploid member of the population.

    The paternal copy is the sex-determining copy: for a male it is the Y
    (or Y-equivalent), for a female the X received from the father.

    Attributes:
        maternal: Genome copy inherited from the mother
        paternal: Genome copy inherited from the father
        sex: Sex of the individual
        age: Generations survived (0 for newborns)
        id: Unique identifier
    """
    maternal: Genome
    paternal: Genome
    sex: Sex
    age: int = 0
    id: int = field(default_factory=lambda: next(_id_counter))

    def __post_init__(self):
        if self.maternal.num_sites != self.paternal.num_sites:
            raise ValueError("Maternal and paternal genomes must have the same number of sites")

    @classmethod
    def wild_type(cls, num_sites: int, sex: Sex, age: int = 0) -> "Individual":
        return cls(
            maternal=Genome.wild_type(num_sites),
            paternal=Genome.wild_type(num_sites),
            sex=sex,
            age=age,
        )

    @property
    def genomes(self) -> tuple[Genome, Genome]:
        return (self.maternal, self.paternal)

    @property
    def is_female(self) -> bool:
        return self.sex is Sex.FEMALE

    @property
    def is_male(self) -> bool:
        return self.sex is Sex.MALE

    def copy(self) -> "Individual":
        """
        Create a deep copy of this individual (same id).

        Returns:
            New Individual with copied genomes
        """
        return Individual(
            maternal=self.maternal.copy(),
            paternal=self.paternal.copy(),
            sex=self.sex,
            age=self.age,
            id=self.id,
        )


@dataclass
class Population:
    """
    The single deme being simulated.

    Membership only changes at phase boundaries of a generation
    (culling, drop, offspring admission).
    """
    individuals: list[Individual] = field(default_factory=list)
    generation: int = 0

    def __len__(self) -> int:
        return len(self.individuals)

    def __iter__(self) -> Iterator[Individual]:
        return iter(self.individuals)

    def females(self) -> list[Individual]:
        return [ind for ind in self.individuals if ind.is_female]

    def males(self) -> list[Individual]:
        return [ind for ind in self.individuals if ind.is_male]

    def admit(self, newcomers: list[Individual]) -> None:
        self.individuals.extend(newcomers)
