"""
Visualization utilities for the route optimizer.

Draws optimized routes on a longitude/latitude plane and plots the best
fitness per generation.
"""

from pathlib import Path
from typing import Hashable, Mapping, Tuple

import matplotlib

# Non-interactive backend; plots are only ever written to disk
matplotlib.use('Agg')

import matplotlib.pyplot as plt  # noqa: E402

from .data_models import OptimizationResult, Stop  # noqa: E402


def plot_route(
    result: OptimizationResult,
    stop_index: Mapping[Hashable, Stop],
    output_path: Path,
    figsize: Tuple[int, int] = (10, 8),
    annotate: bool = True
) -> Path:
    """
    Plot the optimized stop order.

    Stops are drawn at (longitude, latitude); legs are joined in visiting
    order, with the first stop in green and the last in red.

    Args:
        result: Optimization result to draw
        stop_index: Mapping of stop id to Stop
        output_path: Path to save PNG file
        figsize: Figure size (width, height) in inches
        annotate: Label each stop with its id and visiting order

    Returns:
        Path to saved PNG
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    stops = [stop_index[stop_id] for stop_id in result.route]
    xs = [stop.longitude for stop in stops]
    ys = [stop.latitude for stop in stops]

    fig, ax = plt.subplots(figsize=figsize)
    try:
        ax.plot(xs, ys, '-', color='steelblue', linewidth=1.5, zorder=1)
        ax.scatter(xs, ys, s=40, color='navy', zorder=2)
        ax.scatter(xs[:1], ys[:1], s=120, color='green', marker='s', zorder=3, label='start')
        ax.scatter(xs[-1:], ys[-1:], s=120, color='red', marker='X', zorder=3, label='end')

        if annotate:
            for order, stop in enumerate(stops):
                ax.annotate(f"{order}: {stop.id}", (stop.longitude, stop.latitude),
                            textcoords='offset points', xytext=(5, 5), fontsize=8)

        ax.set_xlabel('Longitude')
        ax.set_ylabel('Latitude')
        ax.set_title(
            f"Optimized route: {len(stops)} stops, {result.total_distance_km:.2f} km, "
            f"fitness {result.fitness:.3f}"
        )
        ax.grid(True, alpha=0.3)
        ax.legend(loc='best')

        fig.tight_layout()
        fig.savefig(output_path, dpi=150)
    finally:
        plt.close(fig)

    print(f"  Saved visualization: {output_path}")
    return output_path


def plot_fitness_history(
    result: OptimizationResult,
    output_path: Path,
    figsize: Tuple[int, int] = (10, 5)
) -> Path:
    """
    Plot the run's best fitness after each generation.

    Args:
        result: Optimization result with history
        output_path: Path to save PNG file
        figsize: Figure size (width, height) in inches

    Returns:
        Path to saved PNG
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    generations = list(range(1, len(result.history) + 1))

    fig, ax = plt.subplots(figsize=figsize)
    try:
        ax.step(generations, result.history, where='post', color='darkorange')
        ax.set_xlabel('Generation')
        ax.set_ylabel('Best fitness')
        ax.set_title(f"Best fitness over {result.generations_run} generations")
        ax.grid(True, alpha=0.3)

        fig.tight_layout()
        fig.savefig(output_path, dpi=150)
    finally:
        plt.close(fig)

    print(f"  Saved visualization: {output_path}")
    return output_path
