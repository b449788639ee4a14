"""
Orchestration module for the route optimizer CLI.

Implements route and seats mode workflows.
"""

from pathlib import Path
from typing import Dict

from .config import OptimizerConfig
from .data_models import SeatPreference
from .io_utils import (
    load_stops_csv,
    prepare_output_folder,
    save_history_csv,
    save_metadata,
    save_route_csv,
)
from .optimizer import GeneticRouteOptimizer, build_stop_index
from .seats import recommend_seats, seat_map


def run_route_mode(run_config: Dict) -> Dict:
    """
    Optimize the stop order of a stops CSV.

    Args:
        run_config: Run configuration dict from YAML

    Algorithm:
        1. Build OptimizerConfig from run_config['optimizer']
        2. Load stops from run_config['input']['stops']
        3. Create output directory: run_config['output']['root']
        4. Run GeneticRouteOptimizer (constraints passed through)
        5. Save route.csv, fitness_history.csv and result.yaml
        6. Optionally plot route.png and fitness_history.png
        7. Print summary report

    Returns:
        Result dictionary (as written to result.yaml)
    """
    print("=" * 70)
    print("ROUTE MODE")
    print("=" * 70)

    config = OptimizerConfig.from_dict(run_config.get('optimizer'))
    print(f"Population: {config.population_size}, generations: {config.generations}, "
          f"mutation rate: {config.mutation_rate}")
    print(f"Policies: population={config.population_policy}, best_tracking={config.best_tracking}")

    stops_path = run_config['input']['stops']
    print(f"Loading stops from: {stops_path}")
    stops = load_stops_csv(stops_path)
    stop_index = build_stop_index(stops)
    print(f"Stops: {len(stops)}")

    output_config = run_config['output']
    overwrite = output_config.get('overwrite', False)
    output_root = prepare_output_folder(output_config['root'], overwrite=overwrite)
    print(f"Output directory: {output_root}\n")

    progress_every = max(1, config.generations // 10)

    def report(stats):
        if stats.generation % progress_every == 0 or stats.generation == config.generations:
            print(f"  Progress: generation {stats.generation}/{config.generations}, "
                  f"best fitness {stats.best_fitness:.6f}")

    optimizer = GeneticRouteOptimizer(config)
    result = optimizer.optimize_route(
        stops,
        constraints=run_config.get('constraints'),
        on_generation=report,
    )

    route_path = save_route_csv(result, stop_index, output_root / 'route.csv', overwrite=overwrite)
    history_path = save_history_csv(result.history, output_root / 'fitness_history.csv',
                                    overwrite=overwrite)

    summary = result.to_dict()
    summary['config'] = config.to_dict()
    summary['stops_file'] = str(stops_path)
    result_path = save_metadata(summary, output_root / 'result.yaml', overwrite=overwrite)

    if output_config.get('plot', False):
        from .visualization_utils import plot_fitness_history, plot_route

        print("\nGenerating visualization plots...")
        plot_route(result, stop_index, output_root / 'route.png')
        plot_fitness_history(result, output_root / 'fitness_history.png')

    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Route: {' -> '.join(str(stop_id) for stop_id in result.route)}")
    print(f"Fitness: {result.fitness:.6f}")
    print(f"Distance: {result.total_distance_km:.3f} km")
    print(f"Generations run: {result.generations_run}"
          + (" (stopped early)" if result.stopped_early else ""))
    print(f"Seed: {result.seed}")
    print(f"Route file: {route_path}")
    print(f"History file: {history_path}")
    print(f"Result file: {result_path}")

    return summary


def run_seat_mode(run_config: Dict) -> Dict:
    """
    Recommend seats for a booking request.

    Args:
        run_config: Run configuration dict from YAML

    Algorithm:
        1. Read run_config['seats'] (total, occupied, preferences)
        2. Run recommend_seats
        3. Save seats.yaml (recommendation plus full seat map)
        4. Print summary report

    Returns:
        Result dictionary (as written to seats.yaml)
    """
    print("=" * 70)
    print("SEATS MODE")
    print("=" * 70)

    seat_config = run_config['seats']
    total_seats = seat_config['total']
    occupied = sorted(seat_config.get('occupied', []))
    preferences = SeatPreference.from_dict(seat_config)

    print(f"Total seats: {total_seats}, occupied: {len(occupied)}")
    print(f"Preferences: window={preferences.wants_window}, aisle={preferences.wants_aisle}, "
          f"count={preferences.count}")

    recommended = recommend_seats(preferences, total_seats, occupied)

    output_config = run_config['output']
    overwrite = output_config.get('overwrite', False)
    output_root = prepare_output_folder(output_config['root'], overwrite=overwrite)

    summary = {
        'recommended': recommended,
        'requested': preferences.count,
        'preferences': {
            'wants_window': preferences.wants_window,
            'wants_aisle': preferences.wants_aisle,
        },
        'total_seats': total_seats,
        'occupied': occupied,
        'seat_map': seat_map(total_seats, occupied),
    }
    seats_path = save_metadata(summary, Path(output_root) / 'seats.yaml', overwrite=overwrite)

    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Recommended: {recommended if recommended else 'none available'}")
    if len(recommended) < preferences.count:
        print(f"Only {len(recommended)} of {preferences.count} requested seats match")
    print(f"Seats file: {seats_path}")

    return summary
