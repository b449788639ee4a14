"""
Genetic route optimizer.

Runs a PopulationManager for a generation budget and returns the best stop
ordering observed during the run.
"""

import logging
import time
from typing import Any, Callable, Dict, Hashable, Iterable, Mapping, Optional

from .config import OptimizerConfig
from .data_models import GenerationStats, OptimizationResult, Stop
from .errors import DuplicateStopError, EmptyInputError, InvalidConfigurationError
from .population import PopulationManager
from .random_source import RandomSource

logger = logging.getLogger(__name__)


class GeneticRouteOptimizer:
    """
    Genetic algorithm for ordering bus stops.

    Features:
    - Ordered crossover and swap mutation (permutation-preserving)
    - Reproducible runs from an explicit seed
    - Optional convergence check and cooperative cancellation (both opt-in)

    The optimizer holds only its configuration; every optimize_route call
    builds its own population and random source, so one instance can serve
    many callers.
    """

    def __init__(self, config: Optional[OptimizerConfig] = None):
        """
        Initialize optimizer.

        Args:
            config: Optimizer configuration (defaults if None)

        Raises:
            InvalidConfigurationError: If the configuration is invalid
        """
        self.config = config or OptimizerConfig()
        self.config.validate()

    def optimize_route(self,
                       stops: Iterable[Stop],
                       constraints: Optional[Mapping[str, Any]] = None,
                       generations: Optional[int] = None,
                       population_size: Optional[int] = None,
                       random_source: Optional[RandomSource] = None,
                       cancel_event=None,
                       on_generation: Optional[Callable[[GenerationStats], None]] = None
                       ) -> OptimizationResult:
        """
        Search for a high-fitness ordering of the given stops.

        Args:
            stops: Stops to order (any order; not modified)
            constraints: Opaque caller constraints, reserved and not scored
            generations: Override of config.generations
            population_size: Override of config.population_size
            random_source: Random source for this run (default: built from
                config.random_seed)
            cancel_event: Object with is_set(), checked before each generation
            on_generation: Callback receiving GenerationStats per generation

        Returns:
            OptimizationResult with the best route seen across the run

        Raises:
            EmptyInputError: If no stops are given
            DuplicateStopError: If two stops share an id
            InvalidConfigurationError: If a budget override is not positive
        """
        config = self.config.replace(generations=generations, population_size=population_size)
        stop_index = build_stop_index(stops)
        rng = random_source or RandomSource(config.random_seed)

        if constraints:
            logger.debug("Constraints %s accepted but not used in scoring", sorted(constraints))

        logger.info(
            "Optimizing route over %d stops: population=%d generations=%d seed=%d",
            len(stop_index), config.population_size, config.generations, rng.seed
        )
        started = time.perf_counter()

        manager = PopulationManager(stop_index, rng, config)
        manager.initialize()

        history = []
        stale_generations = 0
        stopped_early = False
        cancelled = False

        for _ in range(config.generations):
            if cancel_event is not None and cancel_event.is_set():
                cancelled = True
                logger.info("Optimization cancelled after %d generations", manager.generation)
                break

            stats = manager.step()
            history.append(manager.best_fitness)

            if on_generation is not None:
                on_generation(stats)

            stale_generations = 0 if stats.improved else stale_generations + 1
            if (config.convergence_patience is not None
                    and stale_generations >= config.convergence_patience):
                stopped_early = True
                logger.info(
                    "No improvement for %d generations; stopping at generation %d",
                    stale_generations, manager.generation
                )
                break

        best = manager.best
        best.validate()

        result = OptimizationResult(
            route=best.genes,
            fitness=manager.best_fitness,
            generations_run=manager.generation,
            history=history,
            total_distance_km=best.total_distance(),
            seed=rng.seed,
            spawn_key=rng.spawn_key,
            stopped_early=stopped_early,
            cancelled=cancelled,
        )

        logger.info(
            "Best fitness %.6f (%.3f km) after %d generations in %.3fs",
            result.fitness, result.total_distance_km, result.generations_run,
            time.perf_counter() - started
        )
        return result


def build_stop_index(stops: Iterable[Stop]) -> Dict[Hashable, Stop]:
    """
    Index stops by id, preserving input order.

    Args:
        stops: Input stops

    Returns:
        Dictionary of stop id -> Stop

    Raises:
        EmptyInputError: If there are no stops
        DuplicateStopError: If an id repeats
    """
    stop_index = {}
    for stop in stops:
        if stop.id in stop_index:
            raise DuplicateStopError(f"Duplicate stop id: {stop.id!r}")
        stop_index[stop.id] = stop

    if not stop_index:
        raise EmptyInputError("Route optimization requires at least one stop")

    return stop_index


def optimize_route(stops: Iterable[Stop],
                   constraints: Optional[Mapping[str, Any]] = None,
                   generations: int = 100,
                   population_size: int = 50,
                   seed: Optional[int] = None,
                   **options) -> OptimizationResult:
    """
    One-shot convenience wrapper around GeneticRouteOptimizer.

    Args:
        stops: Stops to order
        constraints: Opaque caller constraints
        generations: Generation budget
        population_size: Chromosomes per generation
        seed: Random seed (None = fresh entropy); random_seed is accepted
            as an alias
        **options: Other OptimizerConfig fields (mutation_rate, ...)

    Returns:
        OptimizationResult

    Raises:
        InvalidConfigurationError: If both seed and random_seed are given
    """
    if 'random_seed' in options:
        if seed is not None:
            raise InvalidConfigurationError("Pass either 'seed' or 'random_seed', not both")
        seed = options.pop('random_seed')

    config = OptimizerConfig.from_dict(dict(
        options, generations=generations, population_size=population_size, random_seed=seed
    ))
    return GeneticRouteOptimizer(config).optimize_route(stops, constraints)
