"""
Genetic route optimizer for bus stop ordering.

This package searches for a short visiting order over an unordered set of
stops with a genetic algorithm, and recommends seats on a 2+2 bus layout.

Key Features:
- Haversine distance model and inverse-distance fitness
- Ordered crossover and swap mutation (permutation-preserving)
- Seedable random source for bit-identical replays
- Opt-in convergence check and cooperative cancellation
- YAML-driven CLI with CSV/YAML/PNG outputs

Modules:
- data_models: Core data structures (Stop, OptimizationResult, SeatPreference)
- distance: Haversine great-circle distance
- random_source: Seedable random generator wrapper
- chromosome: Candidate route representation and fitness
- crossover: Ordered crossover operator
- mutation: Swap mutation operator
- population: Population initialization and evolution
- optimizer: Generation loop and results
- seats: Seat recommendation
- config: Optimizer configuration
- io_utils: CSV I/O and metadata sidecars
- visualization_utils: Route and fitness plots
- cli: Command-line interface for route and seats modes
"""

__version__ = "0.1.0"
__author__ = "Transit Optimization Team"

from .chromosome import Chromosome
from .config import OptimizerConfig, load_optimizer_config
from .data_models import GenerationStats, OptimizationResult, SeatPreference, Stop
from .distance import haversine_distance, route_distance
from .errors import (
    DuplicateStopError,
    EmptyInputError,
    InvalidConfigurationError,
    InvalidPermutationError,
    RouteOptimizationError,
)
from .optimizer import GeneticRouteOptimizer, optimize_route
from .population import PopulationManager
from .random_source import RandomSource
from .seats import SeatClass, recommend_seats

__all__ = [
    "Chromosome",
    "DuplicateStopError",
    "EmptyInputError",
    "GenerationStats",
    "GeneticRouteOptimizer",
    "InvalidConfigurationError",
    "InvalidPermutationError",
    "OptimizationResult",
    "OptimizerConfig",
    "PopulationManager",
    "RandomSource",
    "RouteOptimizationError",
    "SeatClass",
    "SeatPreference",
    "Stop",
    "haversine_distance",
    "load_optimizer_config",
    "optimize_route",
    "recommend_seats",
    "route_distance",
]
