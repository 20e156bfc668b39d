"""
Tests for population bootstrap, drive release, culling and ageing.
"""

import unittest
import numpy as np

from gene_drive.config_loader import Architecture, DriveConfig
from gene_drive.data_models import Allele, Individual, Population, Sex
from gene_drive.genotype import drive_copies, has_y_drive, locus_drive_copies
from gene_drive.lifecycle import (
    age_population,
    cull,
    drop_drive_carriers,
    initialize_population,
    make_drive_carrier,
)


class TestInitialization(unittest.TestCase):

    def test_wild_type_bootstrap(self):
        rng = np.random.default_rng(0)
        config = DriveConfig(Architecture.MODIFICATION, capacity=400, num_grnas=3)
        population = initialize_population(config, rng)

        self.assertEqual(len(population), 400)
        self.assertGreater(len(population.females()), 150)
        self.assertGreater(len(population.males()), 150)
        for ind in population:
            self.assertEqual(ind.age, 0)
            self.assertEqual(ind.maternal.num_sites, 3)
            self.assertTrue(np.all(ind.maternal.target == Allele.WILD_TYPE))
            self.assertTrue(np.all(ind.paternal.drive_arm == Allele.WILD_TYPE))


class TestDrop(unittest.TestCase):

    def setUp(self):
        self.rng = np.random.default_rng(1)

    def test_heterozygous_drop(self):
        config = DriveConfig(Architecture.HAPLOSUFFICIENT, drop_size=30, heterozygous_drop=True)
        population = Population()
        carriers = drop_drive_carriers(population, config, self.rng)
        self.assertEqual(len(population), 30)
        self.assertEqual(len(carriers), 30)
        for ind in carriers:
            self.assertEqual(drive_copies(ind, config), 1)

    def test_homozygous_male_drop(self):
        config = DriveConfig(Architecture.MODIFICATION, drop_size=10,
                             heterozygous_drop=False, sex_specific_drop=True)
        population = Population()
        drop_drive_carriers(population, config, self.rng)
        for ind in population:
            self.assertTrue(ind.is_male)
            self.assertEqual(drive_copies(ind, config), 2)

    def test_y_suppression_drop(self):
        config = DriveConfig(Architecture.Y_SUPPRESSION, drop_size=5)
        population = Population()
        drop_drive_carriers(population, config, self.rng)
        for ind in population:
            self.assertTrue(has_y_drive(ind))
            self.assertTrue(np.all(ind.maternal.target == Allele.WILD_TYPE))

    def test_two_locus_drop(self):
        config = DriveConfig(Architecture.TWO_LOCUS_UNDERDOMINANCE, heterozygous_drop=True)
        carrier = make_drive_carrier(config, Sex.FEMALE)
        self.assertEqual(locus_drive_copies(carrier), (1, 1))

    def test_x_linked_male_is_hemizygous(self):
        config = DriveConfig(Architecture.HAPLOSUFFICIENT, x_linked=True, heterozygous_drop=False)
        male = make_drive_carrier(config, Sex.MALE)
        female = make_drive_carrier(config, Sex.FEMALE)
        self.assertTrue(np.all(male.maternal.target == Allele.DRIVE))
        self.assertTrue(np.all(male.paternal.target == Allele.WILD_TYPE))
        self.assertEqual(drive_copies(female, config), 2)


class TestCulling(unittest.TestCase):

    def make_population(self):
        individuals = []
        for age in (0, 1, 2):
            for sex in (Sex.FEMALE, Sex.MALE):
                individuals.extend(Individual.wild_type(1, sex, age=age) for _ in range(10))
        return Population(individuals=individuals)

    def test_newborns_survive_adult_males_die(self):
        rng = np.random.default_rng(2)
        config = DriveConfig(Architecture.MODIFICATION, female_survival_rate=0.0)
        population = self.make_population()
        removed = cull(population, config, rng)

        self.assertEqual(removed, 40)
        self.assertEqual(len(population), 20)
        self.assertTrue(all(ind.age == 0 for ind in population))

    def test_full_female_survival(self):
        rng = np.random.default_rng(2)
        config = DriveConfig(Architecture.MODIFICATION, female_survival_rate=1.0)
        population = self.make_population()
        cull(population, config, rng)

        adults = [ind for ind in population if ind.age > 0]
        self.assertEqual(len(adults), 20)
        self.assertTrue(all(ind.is_female for ind in adults))

    def test_ageing(self):
        population = self.make_population()
        age_population(population)
        self.assertEqual(sorted({ind.age for ind in population}), [1, 2, 3])


if __name__ == '__main__':
    unittest.main()
