"""
Crossover operators for route optimization.

Implements ordered crossover (OX), which keeps every child a valid
permutation of the stop set.
"""

from typing import Tuple

from .chromosome import Chromosome
from .errors import InvalidPermutationError
from .random_source import RandomSource


def ordered_crossover(
    parent_a: Chromosome,
    parent_b: Chromosome,
    rng: RandomSource
) -> Tuple[Chromosome, Tuple[int, int]]:
    """
    Combine two parents using ordered crossover.

    A contiguous segment [start, end) is copied verbatim from parent_a; the
    remaining positions are filled left to right with parent_b's stops in
    parent_b's order, skipping stops already in the segment.

    Draw order: start = int_below(N), then span = int_below(N - start) + 1,
    so the segment always holds at least one stop.

    Args:
        parent_a: Segment donor
        parent_b: Order donor for the remaining positions
        rng: Random source

    Returns:
        Tuple of (child, (start, end)); parents are not modified

    Raises:
        InvalidPermutationError: If the parents have different lengths
    """
    size = len(parent_a)
    if len(parent_b) != size:
        raise InvalidPermutationError(
            f"Parents differ in length: {size} vs {len(parent_b)}"
        )

    start = rng.int_below(size)
    end = start + rng.int_below(size - start) + 1

    segment = parent_a.genes[start:end]
    taken = set(segment)
    filler = iter(stop_id for stop_id in parent_b.genes if stop_id not in taken)

    child_genes = []
    for position in range(size):
        if start <= position < end:
            child_genes.append(segment[position - start])
        else:
            child_genes.append(next(filler))

    return Chromosome(child_genes, parent_a.stop_index), (start, end)


def crossover_statistics(parent_a: Chromosome, parent_b: Chromosome,
                         child: Chromosome) -> dict:
    """
    Calculate how much of the child is inherited positionally from each parent.

    Args:
        parent_a: Segment donor
        parent_b: Order donor
        child: Offspring

    Returns:
        Dictionary with positional match counts and rates
    """
    size = max(len(child), 1)
    from_a = sum(1 for x, y in zip(child.genes, parent_a.genes) if x == y)
    from_b = sum(1 for x, y in zip(child.genes, parent_b.genes) if x == y)

    return {
        'positions': len(child),
        'matches_parent_a': from_a,
        'matches_parent_b': from_b,
        'parent_a_rate': from_a / size,
        'parent_b_rate': from_b / size,
    }
