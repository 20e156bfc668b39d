"""
Population lifecycle: bootstrap, drive release, age-based culling and ageing.
"""

from typing import List
import numpy as np

from .config_loader import DriveConfig
from .data_models import Allele, Genome, Individual, Population, Sex, new_block


def random_sex(rng: np.random.Generator) -> Sex:
    return Sex.MALE if rng.random() < 0.5 else Sex.FEMALE


def initialize_population(config: DriveConfig, rng: np.random.Generator) -> Population:
    """
    Seed a wild-type population at carrying capacity.

    Returns:
        Population of `config.capacity` newborn wild-type individuals
    """
    individuals = [
        Individual.wild_type(config.num_grnas, random_sex(rng))
        for _ in range(config.capacity)
    ]
    return Population(individuals=individuals)


def _drive_genome(config: DriveConfig) -> Genome:
    genome = Genome.wild_type(config.num_grnas)
    if config.is_two_locus:
        genome.target = new_block(config.num_grnas, Allele.DRIVE)
        genome.drive_arm = new_block(config.num_grnas, Allele.DRIVE)
    elif not config.is_y_suppression:
        genome.target = new_block(config.num_grnas, Allele.DRIVE)
    return genome


def make_drive_carrier(config: DriveConfig, sex: Sex) -> Individual:
    """
    Build one released drive carrier.

    Heterozygous carriers have the drive on their maternal copy, which is
    the X under X-linkage. Under Y-suppression every carrier is a male with
    the drive on his Y slot.
    """
    num_sites = config.num_grnas

    if config.is_y_suppression:
        carrier = Individual.wild_type(num_sites, Sex.MALE)
        carrier.paternal.drive_arm = new_block(num_sites, Allele.DRIVE)
        return carrier

    maternal = _drive_genome(config)
    if config.heterozygous_drop or (config.x_linked and sex is Sex.MALE):
        paternal = Genome.wild_type(num_sites)
    else:
        paternal = _drive_genome(config)

    return Individual(maternal=maternal, paternal=paternal, sex=sex)


def drop_drive_carriers(
    population: Population,
    config: DriveConfig,
    rng: np.random.Generator
) -> List[Individual]:
    """
    Release `config.drop_size` drive carriers into the population.

    Returns:
        The admitted carriers
    """
    carriers = []
    for _ in range(config.drop_size):
        sex = Sex.MALE if config.sex_specific_drop else random_sex(rng)
        carriers.append(make_drive_carrier(config, sex))

    population.admit(carriers)
    return carriers


def cull(population: Population, config: DriveConfig, rng: np.random.Generator) -> int:
    """
    Remove adults that do not survive into this generation.

    Newborns (age 0) always survive. Adult males die after breeding; adult
    females survive with probability `female_survival_rate`.

    Returns:
        Number of individuals removed
    """
    survivors = []
    for ind in population.individuals:
        if ind.age == 0:
            survivors.append(ind)
        elif ind.is_female and rng.random() < config.female_survival_rate:
            survivors.append(ind)

    removed = len(population.individuals) - len(survivors)
    population.individuals = survivors
    return removed


def age_population(population: Population) -> None:
    for ind in population.individuals:
        ind.age += 1
