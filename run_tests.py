#!/usr/bin/env python3
"""
Test runner for the route optimizer
"""

import unittest
import sys
from pathlib import Path

# Add current directory to path for imports
sys.path.append(str(Path(__file__).parent))

TEST_DIR = Path(__file__).parent / 'tests' / 'test_route_ga'


def run_all_tests():
    """Run all test modules"""
    loader = unittest.TestLoader()
    suite = loader.discover(str(TEST_DIR), pattern='test_*.py')

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return result.wasSuccessful()


def run_integration_test():
    """Run a basic integration test"""
    print("\n" + "=" * 50)
    print("INTEGRATION TEST")
    print("=" * 50)

    try:
        from route_ga import GeneticRouteOptimizer, OptimizerConfig, recommend_seats
        from route_ga.data_models import SeatPreference
        from route_ga.io_utils import load_stops_csv

        stops_path = Path(__file__).parent / 'examples' / 'stops.csv'
        print(f"Loading stops from {stops_path}...")
        stops = load_stops_csv(stops_path)

        print("Running optimizer...")
        optimizer = GeneticRouteOptimizer(OptimizerConfig(generations=50, random_seed=42))
        first = optimizer.optimize_route(stops)
        second = optimizer.optimize_route(stops)

        print(f"Route: {' -> '.join(first.route)}")
        print(f"Fitness: {first.fitness:.6f}")
        print(f"Distance: {first.total_distance_km:.3f} km")

        seats = recommend_seats(SeatPreference(wants_window=True, count=2), 8, [3])
        print(f"Recommended seats: {seats}")

        # Check basic success criteria
        success = (
            sorted(first.route) == sorted(stop.id for stop in stops) and
            first.route == second.route and
            first.fitness > 0.0 and
            len(first.history) == first.generations_run and
            seats == [4, 7]
        )

        if success:
            print("✓ Integration test PASSED")
        else:
            print("✗ Integration test FAILED")

        return success

    except Exception as e:
        print(f"✗ Integration test FAILED: {e}")
        import traceback
        traceback.print_exc()
        return False


if __name__ == "__main__":
    print("Running Route Optimizer Tests")
    print("=" * 60)

    # Run unit tests
    print("Running unit tests...")
    unit_success = run_all_tests()

    # Run integration test
    integration_success = run_integration_test()

    # Summary
    print("\n" + "=" * 60)
    print("TEST SUMMARY")
    print("=" * 60)
    print(f"Unit tests: {'PASSED' if unit_success else 'FAILED'}")
    print(f"Integration test: {'PASSED' if integration_success else 'FAILED'}")

    overall_success = unit_success and integration_success
    print(f"Overall: {'PASSED' if overall_success else 'FAILED'}")

    sys.exit(0 if overall_success else 1)
