"""
Tests for chromosomes and conflict counting.
"""

import unittest
import numpy as np

from chromosome import Chromosome, count_conflicts, random_permutation


def brute_force_conflicts(genes):
    n = len(genes)
    return sum(
        1
        for i in range(n)
        for j in range(i + 1, n)
        if abs(genes[i] - genes[j]) == abs(i - j)
    )


class TestCountConflicts(unittest.TestCase):
    """Test the fitness evaluator."""

    def test_known_solution_has_no_conflicts(self):
        self.assertEqual(count_conflicts([1, 3, 0, 2]), 0)
        self.assertEqual(count_conflicts([0, 4, 7, 5, 2, 6, 1, 3]), 0)

    def test_ascending_board_attacks_on_every_pair(self):
        """Every pair of the ascending permutation shares a diagonal."""
        for n in range(2, 12):
            genes = list(range(n))
            self.assertEqual(count_conflicts(genes), n * (n - 1) // 2)

    def test_matches_pairwise_definition_on_permutations(self):
        rng = np.random.default_rng(42)
        for _ in range(200):
            n = int(rng.integers(1, 12))
            genes = [int(g) for g in rng.permutation(n)]
            conflicts = count_conflicts(genes)
            self.assertEqual(conflicts, brute_force_conflicts(genes))
            self.assertGreaterEqual(conflicts, 0)
            self.assertLessEqual(conflicts, n * (n - 1) // 2)

    def test_repeated_columns_are_counted(self):
        # no diagonal pairs, but all four queens share one column
        self.assertEqual(count_conflicts([0, 0, 0, 0]), 6)

    def test_single_queen(self):
        self.assertEqual(count_conflicts([0]), 0)


class TestChromosome(unittest.TestCase):
    """Test chromosome construction and helpers."""

    def setUp(self):
        self.rng = np.random.default_rng(42)

    def test_random_chromosome_is_permutation(self):
        for n in (1, 4, 8, 20):
            c = Chromosome(n, rng=self.rng)
            self.assertTrue(c.is_permutation())
            self.assertEqual(c.fitness, count_conflicts(c.genes))

    def test_random_permutation_starts_fresh(self):
        genes = random_permutation(10, self.rng)
        self.assertEqual(sorted(genes), list(range(10)))

    def test_explicit_genes_are_copied(self):
        genes = [1, 3, 0, 2]
        c = Chromosome(4, genes)
        genes[0] = 0
        self.assertEqual(c.genes, [1, 3, 0, 2])
        self.assertTrue(c.is_solution())

    def test_invalid_input_raises(self):
        with self.assertRaises(ValueError):
            Chromosome(0)
        with self.assertRaises(ValueError):
            Chromosome(4, [0, 1, 2])
        with self.assertRaises(ValueError):
            Chromosome(4, [0, 1, 2, 4])
        with self.assertRaises(ValueError):
            Chromosome(4, [0, -1, 2, 3])

    def test_non_permutation_is_allowed(self):
        c = Chromosome(4, [0, 0, 1, 1])
        self.assertFalse(c.is_permutation())

    def test_clone_does_not_alias(self):
        c = Chromosome(6, rng=self.rng)
        twin = c.clone()
        twin.genes[0], twin.genes[1] = twin.genes[1], twin.genes[0]
        self.assertNotEqual(c.genes, twin.genes)
        self.assertEqual(twin.fitness, c.fitness)

    def test_evaluate_refreshes_cache(self):
        c = Chromosome(4, [0, 1, 2, 3])
        self.assertEqual(c.fitness, 6)
        c.genes[:] = [1, 3, 0, 2]
        self.assertEqual(c.evaluate(), 0)
        self.assertEqual(c.max_conflicts(), 6)


if __name__ == '__main__':
    unittest.main()
