"""
Data models for the route optimizer.

Core value objects: stops, optimization results, per-generation statistics
and seat preferences.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Hashable, Optional


@dataclass(frozen=True)
class Stop:
    """
    A candidate stop supplied by the caller.

    Attributes:
        id: Opaque, hashable identifier (string or integer in practice)
        latitude: Degrees in [-90, 90]
        longitude: Degrees in [-180, 180]
    """
    id: Hashable
    latitude: float
    longitude: float

    def __post_init__(self):
        """Validate coordinates."""
        if not math.isfinite(self.latitude) or not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Stop {self.id!r}: latitude {self.latitude} outside [-90, 90]")
        if not math.isfinite(self.longitude) or not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Stop {self.id!r}: longitude {self.longitude} outside [-180, 180]")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Stop":
        """
        Build a stop from a mapping.

        Accepts either ``latitude``/``longitude`` or the short ``lat``/``lng``
        keys used by map widgets.

        Args:
            data: Mapping with an ``id`` and coordinates

        Returns:
            Stop instance

        Raises:
            KeyError: If the id or a coordinate is missing
        """
        lat = data["latitude"] if "latitude" in data else data["lat"]
        lng = data["longitude"] if "longitude" in data else data["lng"]
        return cls(id=data["id"], latitude=float(lat), longitude=float(lng))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "latitude": self.latitude, "longitude": self.longitude}


@dataclass
class GenerationStats:
    """
    Summary of one evolved generation, handed to progress callbacks.

    Attributes:
        generation: 1-based generation number
        population_size: Size of the new generation
        best_fitness: Best fitness seen so far in the run
        first_offspring_fitness: Fitness of offspring 0 of this generation
        mutations: Number of offspring that received a swap mutation
        improved: Whether this generation replaced the run's best
    """
    generation: int
    population_size: int
    best_fitness: float
    first_offspring_fitness: float
    mutations: int
    improved: bool


@dataclass
class OptimizationResult:
    """
    Outcome of one optimize_route call.

    The optimizer keeps no reference to the result after returning it.

    Attributes:
        route: Stop ids in visiting order
        fitness: Inverse-distance fitness of the route (higher is better)
        generations_run: Number of generations actually executed
        history: Best fitness after each executed generation
        total_distance_km: Open-path length of the route
        seed: Entropy the run's random source was built from
        spawn_key: Spawn path of the run's random source below seed; replay
            with RandomSource(seed, spawn_key=spawn_key)
        stopped_early: True if the convergence check ended the run
        cancelled: True if the cancel event ended the run
    """
    route: tuple
    fitness: float
    generations_run: int
    history: list[float] = field(default_factory=list)
    total_distance_km: float = 0.0
    seed: Optional[int] = None
    spawn_key: tuple = ()
    stopped_early: bool = False
    cancelled: bool = False

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to a plain dictionary for YAML export.

        Returns:
            Dictionary with builtin-typed values
        """
        return {
            "route": list(self.route),
            "fitness": float(self.fitness),
            "generations_run": int(self.generations_run),
            "total_distance_km": float(self.total_distance_km),
            "seed": self.seed,
            "spawn_key": [int(key) for key in self.spawn_key],
            "stopped_early": self.stopped_early,
            "cancelled": self.cancelled,
            "history": [float(value) for value in self.history],
        }


@dataclass
class SeatPreference:
    """
    Passenger seat request.

    Attributes:
        wants_window: Keep only window seats
        wants_aisle: Keep only aisle seats
        count: Maximum number of seats to return
    """
    wants_window: bool = False
    wants_aisle: bool = False
    count: int = 1

    def __post_init__(self):
        """Validate count."""
        if self.count < 0:
            raise ValueError(f"Seat count must be non-negative, got: {self.count}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SeatPreference":
        return cls(
            wants_window=bool(data.get("wants_window", False)),
            wants_aisle=bool(data.get("wants_aisle", False)),
            count=int(data.get("count", 1)),
        )
