"""
Mutation operators for route optimization.

Implements swap mutation and the probabilistic mutation orchestrator.
"""

from typing import List, Tuple

from .chromosome import Chromosome
from .random_source import RandomSource


def swap_mutation(
    chromosome: Chromosome,
    rng: RandomSource
) -> Tuple[Chromosome, List[str]]:
    """
    Swap the stops at two random positions.

    Both indices are drawn independently from [0, N); equal indices make the
    swap a no-op. The result is always a permutation.

    Args:
        chromosome: Chromosome to mutate (left untouched)
        rng: Random source

    Returns:
        Tuple of (mutated_copy, operation_log)
    """
    size = len(chromosome)
    i = rng.int_below(size)
    j = rng.int_below(size)

    mutated = chromosome.clone()
    mutated.swap(i, j)

    if i == j:
        return mutated, [f"swap_mutation: positions {i} == {j}, no-op"]
    return mutated, [f"swap_mutation: swapped {chromosome[i]!r}@{i} <-> {chromosome[j]!r}@{j}"]


def mutate(
    chromosome: Chromosome,
    mutation_rate: float,
    rng: RandomSource
) -> Tuple[Chromosome, List[str]]:
    """
    Apply swap mutation with probability mutation_rate.

    One uniform draw decides; when it is below the rate a single swap is
    applied.

    Args:
        chromosome: Chromosome to mutate
        mutation_rate: Probability in [0, 1]
        rng: Random source

    Returns:
        Tuple of (chromosome_or_mutated_copy, operation_log)
    """
    if rng.uniform01() >= mutation_rate:
        return chromosome, ["no_mutation: skipped (probability)"]

    return swap_mutation(chromosome, rng)


def mutation_statistics(original: Chromosome, mutated: Chromosome) -> dict:
    """
    Calculate statistics about a mutation.

    Args:
        original: Chromosome before mutation
        mutated: Chromosome after mutation

    Returns:
        Dictionary with the number and rate of changed positions
    """
    changed = sum(1 for x, y in zip(original.genes, mutated.genes) if x != y)
    return {
        'positions': len(mutated),
        'positions_changed': changed,
        'change_rate': changed / max(len(mutated), 1),
    }
