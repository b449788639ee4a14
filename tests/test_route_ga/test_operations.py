"""
Tests for GA operations: chromosome, crossover, and mutation.
"""

import unittest

from route_ga.chromosome import FITNESS_EPSILON_KM, Chromosome
from route_ga.crossover import crossover_statistics, ordered_crossover
from route_ga.data_models import Stop
from route_ga.distance import haversine_distance
from route_ga.errors import InvalidPermutationError
from route_ga.mutation import mutate, mutation_statistics, swap_mutation
from route_ga.random_source import RandomSource


class ScriptedRandom:
    """Random source double returning pre-scripted draws."""

    def __init__(self, ints=(), floats=()):
        self.ints = list(ints)
        self.floats = list(floats)

    def int_below(self, n):
        value = self.ints.pop(0)
        assert 0 <= value < n, f"scripted draw {value} outside [0, {n})"
        return value

    def uniform01(self):
        return self.floats.pop(0)


def make_stop_index(count):
    """Stops spaced along a meridian, ids s0..s{count-1}."""
    return {
        f"s{i}": Stop(id=f"s{i}", latitude=-24.0 + 0.01 * i, longitude=25.9)
        for i in range(count)
    }


class TestChromosome(unittest.TestCase):
    """Test chromosome creation, fitness and copying."""

    def setUp(self):
        """Set up stop index."""
        self.stop_index = make_stop_index(5)
        self.ids = list(self.stop_index)

    def test_create_valid_permutation(self):
        """Test create accepts any ordering of the stop ids."""
        chromosome = Chromosome.create(reversed(self.ids), self.stop_index)

        self.assertEqual(chromosome.genes, tuple(reversed(self.ids)))
        self.assertEqual(len(chromosome), 5)
        self.assertEqual(chromosome[0], "s4")

    def test_create_rejects_duplicates(self):
        """Test create rejects repeated ids."""
        with self.assertRaises(InvalidPermutationError):
            Chromosome.create(["s0", "s0", "s1", "s2", "s3"], self.stop_index)

    def test_create_rejects_missing_and_unknown(self):
        """Test create rejects omitted and foreign ids."""
        with self.assertRaises(InvalidPermutationError):
            Chromosome.create(["s0", "s1", "s2", "s3"], self.stop_index)
        with self.assertRaises(InvalidPermutationError):
            Chromosome.create(["s0", "s1", "s2", "s3", "x9"], self.stop_index)

    def test_fitness_is_inverse_distance_sum(self):
        """Test fitness sums 1/d over consecutive legs without wrapping."""
        chromosome = Chromosome.create(self.ids, self.stop_index)
        stops = [self.stop_index[i] for i in self.ids]

        expected = sum(1.0 / haversine_distance(stops[i], stops[i + 1]) for i in range(4))
        self.assertAlmostEqual(chromosome.fitness(), expected)

    def test_ordered_route_beats_zigzag(self):
        """Test a monotone walk scores higher than a zigzag."""
        ordered = Chromosome.create(self.ids, self.stop_index)
        zigzag = Chromosome.create(["s0", "s4", "s1", "s3", "s2"], self.stop_index)

        self.assertGreater(ordered.fitness(), zigzag.fitness())
        self.assertLess(ordered.total_distance(), zigzag.total_distance())

    def test_fitness_epsilon_guard(self):
        """Test identical coordinates use the epsilon instead of dividing by zero."""
        stop_index = {
            'a': Stop(id='a', latitude=1.0, longitude=1.0),
            'b': Stop(id='b', latitude=1.0, longitude=1.0),
        }
        chromosome = Chromosome.create(['a', 'b'], stop_index)

        self.assertEqual(chromosome.fitness(), 1.0 / FITNESS_EPSILON_KM)
        self.assertGreater(chromosome.fitness(), 0.0)

    def test_single_stop_fitness_is_zero(self):
        """Test a one-stop route has no legs to score."""
        stop_index = make_stop_index(1)
        self.assertEqual(Chromosome.create(['s0'], stop_index).fitness(), 0.0)

    def test_fitness_follows_distance_model(self):
        """Test a different distance model is scored, not served from the cache."""
        stop_index = make_stop_index(8)
        chromosome = Chromosome.create(list(stop_index), stop_index)

        def unit_distance(a, b):
            return 1.0

        haversine_fitness = chromosome.fitness()
        self.assertEqual(chromosome.fitness(unit_distance), 7.0)
        self.assertEqual(chromosome.clone().fitness(unit_distance), 7.0)
        self.assertEqual(chromosome.fitness(), haversine_fitness)
        self.assertEqual(chromosome.clone().fitness(), haversine_fitness)

    def test_total_distance_with_distance_model(self):
        """Test total_distance passes the distance model through."""
        chromosome = Chromosome.create(self.ids, self.stop_index)

        self.assertEqual(chromosome.total_distance(lambda a, b: 2.5), 10.0)
        self.assertEqual(Chromosome.create(['s0'], make_stop_index(1)).total_distance(), 0.0)

    def test_clone_is_independent(self):
        """Test clone does not alias the original genes."""
        original = Chromosome.create(self.ids, self.stop_index)
        original_fitness = original.fitness()
        twin = original.clone()

        twin.swap(0, 4)

        self.assertEqual(original.genes, tuple(self.ids))
        self.assertEqual(original.fitness(), original_fitness)
        self.assertNotEqual(twin.genes, original.genes)

    def test_swap_invalidates_fitness(self):
        """Test swapping recomputes fitness."""
        chromosome = Chromosome.create(self.ids, self.stop_index)
        before = chromosome.fitness()

        chromosome.swap(0, 2)

        self.assertNotAlmostEqual(chromosome.fitness(), before)
        chromosome.validate()


class TestCrossover(unittest.TestCase):
    """Test ordered crossover."""

    def setUp(self):
        """Set up test parents."""
        self.stop_index = make_stop_index(5)
        self.parent_a = Chromosome.create(["s0", "s1", "s2", "s3", "s4"], self.stop_index)
        self.parent_b = Chromosome.create(["s4", "s3", "s2", "s1", "s0"], self.stop_index)

    def test_segment_and_fill(self):
        """Test the segment is copied and gaps filled in parent_b order."""
        # start = 1, span = 1 + 1 -> segment [1, 3)
        rng = ScriptedRandom(ints=[1, 1])

        child, (start, end) = ordered_crossover(self.parent_a, self.parent_b, rng)

        self.assertEqual((start, end), (1, 3))
        self.assertEqual(child.genes, ("s4", "s1", "s2", "s3", "s0"))

    def test_full_segment_copies_parent_a(self):
        """Test a segment spanning everything reproduces parent_a."""
        rng = ScriptedRandom(ints=[0, 4])

        child, segment = ordered_crossover(self.parent_a, self.parent_b, rng)

        self.assertEqual(segment, (0, 5))
        self.assertEqual(child.genes, self.parent_a.genes)

    def test_last_position_segment(self):
        """Test start at the final position gives a one-stop segment."""
        rng = ScriptedRandom(ints=[4, 0])

        child, segment = ordered_crossover(self.parent_a, self.parent_b, rng)

        self.assertEqual(segment, (4, 5))
        self.assertEqual(child.genes, ("s3", "s2", "s1", "s0", "s4"))

    def test_crossover_closure(self):
        """Test crossover always yields a valid permutation."""
        rng = RandomSource(42)
        stop_index = make_stop_index(12)
        ids = list(stop_index)

        for _ in range(200):
            parent_a = Chromosome.create(rng.shuffle(ids), stop_index)
            parent_b = Chromosome.create(rng.shuffle(ids), stop_index)
            child, (start, end) = ordered_crossover(parent_a, parent_b, rng)

            child.validate()
            self.assertLess(start, end)
            self.assertEqual(child.genes[start:end], parent_a.genes[start:end])

    def test_parents_untouched(self):
        """Test crossover does not modify the parents."""
        before_a, before_b = self.parent_a.genes, self.parent_b.genes
        ordered_crossover(self.parent_a, self.parent_b, RandomSource(1))

        self.assertEqual(self.parent_a.genes, before_a)
        self.assertEqual(self.parent_b.genes, before_b)

    def test_length_mismatch(self):
        """Test parents of different lengths are rejected."""
        other = Chromosome.create(["s0", "s1"], make_stop_index(2))
        with self.assertRaises(InvalidPermutationError):
            ordered_crossover(self.parent_a, other, RandomSource(1))

    def test_crossover_statistics(self):
        """Test positional inheritance statistics."""
        child, _ = ordered_crossover(self.parent_a, self.parent_b, ScriptedRandom(ints=[1, 1]))
        stats = crossover_statistics(self.parent_a, self.parent_b, child)

        # ("s4", "s1", "s2", "s3", "s0") vs parents
        self.assertEqual(stats['matches_parent_a'], 3)
        self.assertEqual(stats['matches_parent_b'], 3)


class TestMutation(unittest.TestCase):
    """Test mutation operators."""

    def setUp(self):
        """Set up test chromosome."""
        self.stop_index = make_stop_index(6)
        self.chromosome = Chromosome.create(list(self.stop_index), self.stop_index)

    def test_swap_mutation(self):
        """Test swap mutation exchanges the two drawn positions."""
        mutated, log = swap_mutation(self.chromosome, ScriptedRandom(ints=[1, 4]))

        self.assertEqual(mutated.genes, ("s0", "s4", "s2", "s3", "s1", "s5"))
        self.assertEqual(self.chromosome.genes, ("s0", "s1", "s2", "s3", "s4", "s5"))
        self.assertTrue(any('swap_mutation' in entry for entry in log))

    def test_swap_same_index_is_noop(self):
        """Test equal indices leave the order unchanged."""
        mutated, log = swap_mutation(self.chromosome, ScriptedRandom(ints=[2, 2]))

        self.assertEqual(mutated.genes, self.chromosome.genes)
        self.assertIn('no-op', log[0])

    def test_mutation_closure(self):
        """Test swap mutation always yields a valid permutation."""
        rng = RandomSource(3)
        current = self.chromosome
        for _ in range(100):
            current, _ = swap_mutation(current, rng)
            current.validate()

    def test_mutate_respects_probability(self):
        """Test the orchestrator only mutates when the draw is below the rate."""
        skipped, log = mutate(self.chromosome, 0.1, ScriptedRandom(floats=[0.5]))
        self.assertIs(skipped, self.chromosome)
        self.assertIn('no_mutation', log[0])

        mutated, log = mutate(self.chromosome, 0.1, ScriptedRandom(ints=[0, 5], floats=[0.05]))
        self.assertIsNot(mutated, self.chromosome)
        self.assertEqual(mutated.genes[0], "s5")

    def test_mutate_rate_bounds(self):
        """Test rate 0 never mutates and rate 1 always does."""
        rng = RandomSource(8)
        for _ in range(50):
            unchanged, _ = mutate(self.chromosome, 0.0, rng)
            self.assertIs(unchanged, self.chromosome)
            changed, _ = mutate(self.chromosome, 1.0, rng)
            self.assertIsNot(changed, self.chromosome)

    def test_mutation_statistics(self):
        """Test mutation statistics count changed positions."""
        mutated, _ = swap_mutation(self.chromosome, ScriptedRandom(ints=[0, 1]))
        stats = mutation_statistics(self.chromosome, mutated)

        self.assertEqual(stats['positions_changed'], 2)
        self.assertAlmostEqual(stats['change_rate'], 2 / 6)


if __name__ == '__main__':
    unittest.main()
