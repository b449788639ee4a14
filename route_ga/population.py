"""
Population management for route optimization.

Owns one run's population: random initialization, positional pairing,
ordered crossover, swap mutation and best-so-far tracking.
"""

import logging
from typing import Hashable, List, Mapping, Optional, Sequence, Tuple

from .chromosome import Chromosome
from .config import OptimizerConfig
from .crossover import ordered_crossover
from .data_models import GenerationStats, Stop
from .mutation import mutate
from .random_source import RandomSource

logger = logging.getLogger(__name__)


class PopulationManager:
    """
    Evolves one population, one generation at a time.

    Generation step:
    1. Pair members (0, 1), (2, 3), ...; an odd last member pairs with member 0
    2. Ordered crossover per pair (one child, or two under 'constant' policy)
    3. Swap mutation per child with probability mutation_rate
    4. Compare offspring 0 ('first') or all offspring ('scan') to the best
    """

    def __init__(self,
                 stop_index: Mapping[Hashable, Stop],
                 rng: RandomSource,
                 config: Optional[OptimizerConfig] = None):
        """
        Initialize population manager.

        Args:
            stop_index: Mapping of stop id to Stop (insertion order is the
                base order every initial shuffle starts from)
            rng: Random source owned by this run
            config: Optimizer configuration (defaults if None)
        """
        self.stop_index = stop_index
        self.rng = rng
        self.config = config or OptimizerConfig()

        self.population: List[Chromosome] = []
        self.generation = 0
        self.best: Optional[Chromosome] = None
        self.best_fitness = 0.0

    def initialize(self) -> List[Chromosome]:
        """
        Build the initial population of independent random shuffles.

        The run's best starts as member 0.

        Returns:
            The new population
        """
        stop_ids = list(self.stop_index.keys())
        self.population = [
            Chromosome.create(self.rng.shuffle(stop_ids), self.stop_index)
            for _ in range(self.config.population_size)
        ]
        self.generation = 0
        self.best = self.population[0].clone()
        self.best_fitness = self.best.fitness()

        logger.debug(
            "Initialized population of %d over %d stops, initial best fitness %.6f",
            len(self.population), len(stop_ids), self.best_fitness
        )
        return self.population

    def pair_members(self, population: Sequence[Chromosome]) -> List[Tuple[Chromosome, Chromosome]]:
        """
        Pair members by position.

        Args:
            population: Current generation

        Returns:
            List of (parent_a, parent_b); an odd last member is paired with
            member 0 (a lone member is paired with itself)
        """
        pairs = []
        for i in range(0, len(population), 2):
            parent_a = population[i]
            parent_b = population[i + 1] if i + 1 < len(population) else population[0]
            pairs.append((parent_a, parent_b))
        return pairs

    def breed(self, population: Sequence[Chromosome]) -> List[Chromosome]:
        """
        Produce the next generation's offspring before mutation.

        Under 'halving' each pair yields one child (P1 segment, P2 order).
        Under 'constant' each pair also yields the reciprocal child (P2
        segment, P1 order) and the result is truncated to population_size.

        Args:
            population: Current generation

        Returns:
            Offspring list
        """
        reciprocal = self.config.population_policy == 'constant'

        offspring = []
        for parent_a, parent_b in self.pair_members(population):
            child, _ = ordered_crossover(parent_a, parent_b, self.rng)
            offspring.append(child)
            if reciprocal:
                child, _ = ordered_crossover(parent_b, parent_a, self.rng)
                offspring.append(child)

        if reciprocal:
            offspring = offspring[:self.config.population_size]
        return offspring

    def step(self) -> GenerationStats:
        """
        Evolve the population by one generation.

        Returns:
            Statistics for the new generation

        Raises:
            RuntimeError: If initialize() has not been called
        """
        if not self.population:
            raise RuntimeError("Population not initialized; call initialize() first")

        offspring = self.breed(self.population)

        mutations = 0
        for index, child in enumerate(offspring):
            mutated, op_log = mutate(child, self.config.mutation_rate, self.rng)
            if mutated is not child:
                mutations += 1
                offspring[index] = mutated
                logger.debug("Generation %d offspring %d: %s",
                             self.generation + 1, index, "; ".join(op_log))

        self.population = offspring
        self.generation += 1

        first_fitness = offspring[0].fitness()
        improved = self._track_best(offspring)

        stats = GenerationStats(
            generation=self.generation,
            population_size=len(offspring),
            best_fitness=self.best_fitness,
            first_offspring_fitness=first_fitness,
            mutations=mutations,
            improved=improved,
        )
        logger.debug(
            "Generation %d: size=%d mutations=%d first=%.6f best=%.6f%s",
            stats.generation, stats.population_size, mutations,
            first_fitness, self.best_fitness, " (improved)" if improved else ""
        )
        return stats

    def _track_best(self, offspring: Sequence[Chromosome]) -> bool:
        """Replace the run's best if a strictly fitter offspring appeared."""
        if self.config.best_tracking == 'scan':
            candidate = max(offspring, key=lambda chromosome: chromosome.fitness())
        else:
            candidate = offspring[0]

        fitness = candidate.fitness()
        if fitness > self.best_fitness:
            candidate.validate()
            self.best = candidate.clone()
            self.best_fitness = fitness
            return True
        return False
