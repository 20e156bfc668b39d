"""
Tests for the cut engine and the allele/genome data model.
"""

import unittest
import numpy as np

from gene_drive.data_models import Allele, Genome, Individual, Sex, new_block
from gene_drive.cutting import (
    CutGroup,
    combine_groups,
    cut_block,
    cut_genome,
    per_phase_rate,
)

VALID_STATES = {int(allele) for allele in Allele}


class TestDataModels(unittest.TestCase):
    """Test genome and individual construction."""

    def test_wild_type_genome(self):
        """A new genome has every site wild type in both blocks."""
        genome = Genome.wild_type(4)
        self.assertEqual(genome.num_sites, 4)
        self.assertTrue(np.all(genome.target == Allele.WILD_TYPE))
        self.assertTrue(np.all(genome.drive_arm == Allele.WILD_TYPE))

    def test_mismatched_blocks_rejected(self):
        """Blocks of different lengths are refused."""
        with self.assertRaises(ValueError):
            Genome(target=new_block(3), drive_arm=new_block(2))

    def test_empty_block_rejected(self):
        with self.assertRaises(ValueError):
            Genome(target=np.array([], dtype=np.int8), drive_arm=np.array([], dtype=np.int8))

    def test_genome_copy_is_deep(self):
        """Editing a copy leaves the original unchanged."""
        genome = Genome.wild_type(3)
        clone = genome.copy()
        clone.target[0] = Allele.R2
        self.assertEqual(genome.target[0], Allele.WILD_TYPE)

    def test_last_write_wins(self):
        """Assigning a state overwrites the previous one at that site."""
        genome = Genome.wild_type(2)
        genome.target[1] = Allele.R1
        genome.target[1] = Allele.DRIVE
        self.assertEqual(genome.target[1], Allele.DRIVE)

    def test_individual_copy(self):
        ind = Individual.wild_type(2, Sex.FEMALE)
        clone = ind.copy()
        clone.maternal.target[:] = Allele.DRIVE
        self.assertEqual(clone.id, ind.id)
        self.assertTrue(np.all(ind.maternal.target == Allele.WILD_TYPE))

    def test_unknown_block_name(self):
        with self.assertRaises(ValueError):
            Genome.wild_type(1).block("centromere")


class TestPerPhaseRate(unittest.TestCase):
    """Test derivation of per-phase cut probabilities."""

    def test_composes_to_total_rate(self):
        """Escaping every phase has probability 1 - R."""
        p = per_phase_rate(0.4, 5)
        self.assertAlmostEqual(1.0 - (1.0 - p) ** 5, 0.4, places=12)

    def test_maternal_dose_scales_exponent(self):
        """Two maternal drive copies compose to 1 - (1 - R)^2."""
        p = per_phase_rate(0.3, 4, dose=2)
        self.assertAlmostEqual(1.0 - (1.0 - p) ** 4, 1.0 - 0.7 ** 2, places=12)

    def test_zero_dose_or_rate(self):
        self.assertEqual(per_phase_rate(0.5, 5, dose=0), 0.0)
        self.assertEqual(per_phase_rate(0.0, 5), 0.0)

    def test_full_rate(self):
        self.assertEqual(per_phase_rate(1.0, 5), 1.0)


class TestCutBlock(unittest.TestCase):
    """Test the per-block cutting algorithm."""

    def setUp(self):
        self.rng = np.random.default_rng(7)

    def test_zero_rate_is_noop(self):
        block = new_block(4)
        events = cut_block(block, 0.0, 5, 0.5, self.rng)
        self.assertEqual(events, 0)
        self.assertTrue(np.all(block == Allele.WILD_TYPE))

    def test_single_site_always_resistance(self):
        """A single cut yields exactly one R1 or R2 and never leaves CUT."""
        for r1_rate, expected in ((1.0, Allele.R1), (0.0, Allele.R2)):
            block = new_block(1)
            events = cut_block(block, 1.0, 3, r1_rate, self.rng)
            self.assertEqual(events, 1)
            self.assertEqual(block[0], expected)

    def test_multi_cut_deletion(self):
        """Simultaneous cuts give one R2 at the leftmost site and gaps after it."""
        block = new_block(5)
        block[2] = Allele.R1
        cut_block(block, 1.0, 1, 1.0, self.rng)

        self.assertEqual(block[0], Allele.R2)
        # Strictly between leftmost (0) and rightmost (4), including the old R1
        self.assertTrue(np.all(block[1:4] == Allele.GAP))
        # The rightmost cut closes the deletion
        self.assertEqual(block[4], Allele.GAP)
        self.assertEqual(int(np.sum(block == Allele.R2)), 1)
        self.assertNotIn(Allele.CUT, block)

    def test_span_does_not_touch_outside_sites(self):
        """Sites outside the deletion span keep their state."""
        block = np.array([Allele.R1, Allele.WILD_TYPE, Allele.R2, Allele.WILD_TYPE, Allele.R1],
                         dtype=np.int8)
        cut_block(block, 1.0, 1, 0.0, self.rng)
        self.assertEqual(block[0], Allele.R1)
        self.assertEqual(block[1], Allele.R2)
        self.assertEqual(block[2], Allele.GAP)
        self.assertEqual(block[3], Allele.GAP)
        self.assertEqual(block[4], Allele.R1)

    def test_drive_sites_not_cut(self):
        block = new_block(3, Allele.DRIVE)
        events = cut_block(block, 1.0, 5, 0.0, self.rng)
        self.assertEqual(events, 0)
        self.assertTrue(np.all(block == Allele.DRIVE))

    def test_invariants_over_random_passes(self):
        """Wild-type count never rises, states stay valid, CUT never persists."""
        for _ in range(500):
            block = self.rng.choice([Allele.WILD_TYPE, Allele.R1, Allele.R2], size=4).astype(np.int8)
            before = int(np.sum(block == Allele.WILD_TYPE))
            cut_block(block, self.rng.random(), 3, 0.3, self.rng)
            after = int(np.sum(block == Allele.WILD_TYPE))

            self.assertLessEqual(after, before)
            self.assertNotIn(Allele.CUT, block)
            self.assertTrue(set(int(x) for x in block) <= VALID_STATES)

    def test_empirical_resistance_rate(self):
        """Aggregate resistance over all phases approximates the target rate."""
        target_rate = 0.35
        phases = 5
        p = per_phase_rate(target_rate, phases)
        trials = 20000

        resistant = 0
        for _ in range(trials):
            block = new_block(1)
            cut_block(block, p, phases, 0.0, self.rng)
            resistant += block[0] != Allele.WILD_TYPE

        # Binomial standard error is about 0.0034
        self.assertAlmostEqual(resistant / trials, target_rate, delta=0.02)


class TestCutGenome(unittest.TestCase):
    """Test group selection over a genome copy."""

    def setUp(self):
        self.rng = np.random.default_rng(11)

    def test_target_group_only(self):
        genome = Genome.wild_type(2)
        cut_genome(genome, 1.0, CutGroup.TARGET, 3, 0.0, self.rng)
        self.assertFalse(np.any(genome.target == Allele.WILD_TYPE))
        self.assertTrue(np.all(genome.drive_arm == Allele.WILD_TYPE))

    def test_both_groups(self):
        genome = Genome.wild_type(2)
        events = cut_genome(genome, 1.0, CutGroup.BOTH, 3, 0.0, self.rng)
        self.assertEqual(events, 2)
        self.assertFalse(np.any(genome.target == Allele.WILD_TYPE))
        self.assertFalse(np.any(genome.drive_arm == Allele.WILD_TYPE))

    def test_combine_groups(self):
        self.assertIsNone(combine_groups([]))
        self.assertIs(combine_groups([CutGroup.TARGET]), CutGroup.TARGET)
        self.assertIs(combine_groups([CutGroup.DRIVE_ARM]), CutGroup.DRIVE_ARM)
        self.assertIs(combine_groups([CutGroup.TARGET, CutGroup.DRIVE_ARM]), CutGroup.BOTH)


if __name__ == '__main__':
    unittest.main()
