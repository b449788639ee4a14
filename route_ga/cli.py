"""
CLI module for the route optimizer.

Handles run configuration loading, validation, and mode dispatching.

Usage:
    route-ga run_config.yaml
    route-ga --config run_config.yaml [--verbose]
    route-ga --help

Examples:
    # Optimize the order of a set of stops
    route-ga examples/route_run.yaml

    # Recommend seats for a booking
    route-ga examples/seats_run.yaml
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .config import OptimizerConfig
from .errors import InvalidConfigurationError

MODES = ('route', 'seats')


class ConfigValidationError(Exception):
    """Raised when run configuration is invalid."""
    pass


def load_run_config(config_path: str) -> Dict[str, Any]:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Dictionary containing run configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigValidationError("Configuration file is empty")

    if not isinstance(config, dict):
        raise ConfigValidationError("Configuration file must contain a mapping")

    return config


def validate_run_config(config: Dict[str, Any]) -> None:
    """
    Validate run configuration structure.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if 'mode' not in config:
        raise ConfigValidationError("Missing required field: 'mode'")

    mode = config['mode']
    if mode not in MODES:
        raise ConfigValidationError(
            f"Invalid mode: '{mode}'. Must be 'route' or 'seats'"
        )

    if 'output' not in config:
        raise ConfigValidationError("Missing required field: 'output'")

    if not isinstance(config['output'], dict):
        raise ConfigValidationError("'output' must be a dictionary")

    if 'root' not in config['output']:
        raise ConfigValidationError("Missing required field: 'output.root'")

    if mode == 'route':
        _validate_route_config(config)
    elif mode == 'seats':
        _validate_seats_config(config)


def _validate_route_config(config: Dict[str, Any]) -> None:
    """
    Validate route mode configuration.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if not isinstance(config.get('input'), dict):
        raise ConfigValidationError("Route mode requires an 'input' dictionary")

    if 'stops' not in config['input']:
        raise ConfigValidationError("Route mode requires 'input.stops' field")

    stops_path = Path(config['input']['stops'])
    if not stops_path.exists():
        raise ConfigValidationError(f"Stops file not found: {stops_path}")

    optimizer = config.get('optimizer')
    if optimizer is not None and not isinstance(optimizer, dict):
        raise ConfigValidationError("'optimizer' must be a dictionary")

    try:
        OptimizerConfig.from_dict(optimizer)
    except (InvalidConfigurationError, TypeError) as e:
        raise ConfigValidationError(f"Invalid optimizer settings: {e}")

    constraints = config.get('constraints')
    if constraints is not None and not isinstance(constraints, dict):
        raise ConfigValidationError("'constraints' must be a dictionary")


def _validate_seats_config(config: Dict[str, Any]) -> None:
    """
    Validate seats mode configuration.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    seats = config.get('seats')
    if not isinstance(seats, dict):
        raise ConfigValidationError("Seats mode requires a 'seats' dictionary")

    total = seats.get('total')
    if not isinstance(total, int) or isinstance(total, bool) or total <= 0:
        raise ConfigValidationError(
            f"'seats.total' must be a positive integer, got: {total}"
        )

    occupied = seats.get('occupied', [])
    if not isinstance(occupied, list) or not all(
            isinstance(seat, int) and not isinstance(seat, bool) for seat in occupied):
        raise ConfigValidationError("'seats.occupied' must be a list of seat numbers")

    count = seats.get('count', 1)
    if not isinstance(count, int) or isinstance(count, bool) or count < 0:
        raise ConfigValidationError(
            f"'seats.count' must be a non-negative integer, got: {count}"
        )


def run_from_config(config_path: str) -> Dict[str, Any]:
    """
    Load run configuration and execute appropriate mode.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Summary dictionary produced by the mode

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
        Various exceptions from mode implementations
    """
    print(f"Loading configuration from: {config_path}")
    config = load_run_config(config_path)

    print("Validating configuration...")
    validate_run_config(config)

    mode = config['mode']
    print(f"Mode: {mode}\n")

    if mode == 'route':
        from .orchestration import run_route_mode
        summary = run_route_mode(config)
    elif mode == 'seats':
        from .orchestration import run_seat_mode
        summary = run_seat_mode(config)
    else:
        # Should never reach here due to validation
        raise ConfigValidationError(f"Invalid mode: {mode}")

    print("\nRun completed successfully!")
    return summary


def parse_args(argv: List[str]) -> Optional[Dict[str, Any]]:
    """
    Parse command-line arguments.

    Args:
        argv: Arguments without the program name

    Returns:
        Dict with 'config_path' and 'verbose', or None if help was requested

    Raises:
        ConfigValidationError: If arguments are malformed
    """
    args = list(argv)
    verbose = False
    for flag in ('-v', '--verbose'):
        while flag in args:
            args.remove(flag)
            verbose = True

    if not args or args[0] in ('-h', '--help', 'help'):
        return None

    config_path = args[0]
    if config_path.startswith('--config='):
        config_path = config_path.split('=', 1)[1]
    elif config_path == '--config':
        if len(args) < 2:
            raise ConfigValidationError("--config requires an argument")
        config_path = args[1]

    return {'config_path': config_path, 'verbose': verbose}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the route optimizer CLI."""
    argv = sys.argv[1:] if argv is None else argv

    try:
        options = parse_args(argv)
    except ConfigValidationError as e:
        print(f"Error: {e}")
        print(__doc__)
        return 1

    if options is None:
        print(__doc__)
        return 0 if argv else 1

    logging.basicConfig(
        level=logging.DEBUG if options['verbose'] else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        run_from_config(options['config_path'])
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 1
    except (OSError, ValueError, ConfigValidationError) as e:
        print(f"\nError: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
