"""
Chromosome representation for route optimization.

A chromosome is one candidate route: a permutation of the input stop ids,
scored by the inverse-distance sum over consecutive stops.
"""

from collections import Counter
from typing import Callable, Hashable, Iterable, Iterator, Mapping, Optional

from .data_models import Stop
from .distance import haversine_distance, leg_distances, route_distance
from .errors import InvalidPermutationError

# Stand-in distance (km) for legs between identical coordinates
FITNESS_EPSILON_KM = 1e-9

DistanceFn = Callable[[Stop, Stop], float]


class Chromosome:
    """
    Candidate route in the GA population.

    Genome:
    - genes: stop ids in visiting order, each input id exactly once

    Fitness:
    - Higher is better: sum of 1/distance over consecutive legs (open path)
    - Cached per distance model; invalidated by swap()

    The stop index (id -> Stop) is shared read-only between all chromosomes of
    a run. Genes are never shared: clone() copies them.
    """

    __slots__ = ("_genes", "_stop_index", "_fitness", "_fitness_fn")

    def __init__(self, genes: list, stop_index: Mapping[Hashable, Stop]):
        self._genes = genes
        self._stop_index = stop_index
        self._fitness: Optional[float] = None
        self._fitness_fn: Optional[DistanceFn] = None

    @classmethod
    def create(cls, stop_order: Iterable[Hashable],
               stop_index: Mapping[Hashable, Stop]) -> "Chromosome":
        """
        Build a chromosome from a stop ordering.

        Args:
            stop_order: Stop ids in visiting order
            stop_index: Mapping of every expected stop id to its Stop

        Returns:
            New Chromosome

        Raises:
            InvalidPermutationError: If stop_order is not a permutation of
                the stop_index keys
        """
        chromosome = cls(list(stop_order), stop_index)
        chromosome.validate()
        return chromosome

    def validate(self) -> None:
        """
        Check the permutation invariant.

        Raises:
            InvalidPermutationError: Listing missing, duplicated and unknown ids
        """
        counts = Counter(self._genes)
        duplicated = [stop_id for stop_id, n in counts.items() if n > 1]
        unknown = [stop_id for stop_id in counts if stop_id not in self._stop_index]
        missing = [stop_id for stop_id in self._stop_index if stop_id not in counts]

        if duplicated or unknown or missing:
            raise InvalidPermutationError(
                f"Not a permutation of {len(self._stop_index)} stops: "
                f"missing={missing}, duplicated={duplicated}, unknown={unknown}"
            )

    @property
    def genes(self) -> tuple:
        """Stop ids in visiting order (read-only view)."""
        return tuple(self._genes)

    @property
    def stop_index(self) -> Mapping[Hashable, Stop]:
        return self._stop_index

    def stops(self) -> list[Stop]:
        return [self._stop_index[stop_id] for stop_id in self._genes]

    def fitness(self, distance_fn: DistanceFn = haversine_distance) -> float:
        """
        Inverse-distance fitness of this route.

        Sums 1/d over legs i -> i+1 for i in 0..N-2; the route does not wrap
        back to its first stop. Zero-length legs count as FITNESS_EPSILON_KM.

        Args:
            distance_fn: Distance model (haversine by default)

        Returns:
            Non-negative fitness (0.0 for routes with fewer than 2 stops)
        """
        if self._fitness is None or self._fitness_fn is not distance_fn:
            total = 0.0
            for distance in leg_distances(self.stops(), distance_fn):
                if distance <= 0.0:
                    distance = FITNESS_EPSILON_KM
                total += 1.0 / distance
            self._fitness = total
            self._fitness_fn = distance_fn
        return self._fitness

    def total_distance(self, distance_fn: DistanceFn = haversine_distance) -> float:
        """Open-path length of the route in km."""
        return route_distance(self.stops(), distance_fn)

    def swap(self, i: int, j: int) -> None:
        """
        Exchange the stops at positions i and j in place.

        Only call this on a chromosome you own exclusively (a fresh clone or
        offspring); parents must stay untouched.
        """
        if i != j:
            self._genes[i], self._genes[j] = self._genes[j], self._genes[i]
            self._fitness = None

    def clone(self) -> "Chromosome":
        """Create an independent copy (genes copied, cached fitness kept)."""
        twin = Chromosome(list(self._genes), self._stop_index)
        twin._fitness = self._fitness
        twin._fitness_fn = self._fitness_fn
        return twin

    def __len__(self) -> int:
        return len(self._genes)

    def __getitem__(self, index):
        return self._genes[index]

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._genes)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Chromosome):
            return NotImplemented
        return self._genes == other._genes

    __hash__ = None

    def __repr__(self) -> str:
        fitness = "unscored" if self._fitness is None else f"{self._fitness:.4f}"
        return f"Chromosome(stops={len(self._genes)}, fitness={fitness})"
