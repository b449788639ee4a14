"""
Optimizer configuration.

Dataclass-based configuration with validation, defaults and YAML loading.
"""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import InvalidConfigurationError

# Offspring per pair and how the next generation is sized
POPULATION_POLICIES = ('constant', 'halving')

# Which offspring are compared against the run's best each generation
BEST_TRACKING_POLICIES = ('first', 'scan')


@dataclass
class OptimizerConfig:
    """
    Genetic route optimizer configuration.

    Usage:
        config = OptimizerConfig()
        config = OptimizerConfig(generations=200, random_seed=7)
        config = load_optimizer_config("optimizer.yaml")

    Attributes:
        population_size: Chromosomes per generation
        generations: Generation budget
        mutation_rate: Per-offspring swap mutation probability
        population_policy: 'constant' keeps population_size every generation
            (two offspring per pair); 'halving' breeds one offspring per pair
            so the population shrinks towards a single member
        best_tracking: 'first' scores only offspring 0 against the best;
            'scan' scores the whole generation
        random_seed: Seed for reproducible runs (None = fresh entropy)
        convergence_patience: Stop after this many generations without
            improvement (None disables early stopping)
    """
    population_size: int = 50
    generations: int = 100
    mutation_rate: float = 0.1
    population_policy: str = 'constant'
    best_tracking: str = 'first'
    random_seed: Optional[int] = None
    convergence_patience: Optional[int] = None

    def validate(self) -> None:
        """
        Check every field.

        Raises:
            InvalidConfigurationError: On the first invalid field
        """
        if not _is_int(self.population_size) or self.population_size <= 0:
            raise InvalidConfigurationError(
                f"'population_size' must be a positive integer, got: {self.population_size}"
            )

        if not _is_int(self.generations) or self.generations <= 0:
            raise InvalidConfigurationError(
                f"'generations' must be a positive integer, got: {self.generations}"
            )

        if isinstance(self.mutation_rate, bool) or not isinstance(self.mutation_rate, (int, float)) \
                or not 0.0 <= self.mutation_rate <= 1.0:
            raise InvalidConfigurationError(
                f"'mutation_rate' must be a number in [0, 1], got: {self.mutation_rate}"
            )

        if self.population_policy not in POPULATION_POLICIES:
            raise InvalidConfigurationError(
                f"Invalid population_policy: '{self.population_policy}'. "
                f"Must be one of {POPULATION_POLICIES}"
            )

        if self.best_tracking not in BEST_TRACKING_POLICIES:
            raise InvalidConfigurationError(
                f"Invalid best_tracking: '{self.best_tracking}'. "
                f"Must be one of {BEST_TRACKING_POLICIES}"
            )

        if self.random_seed is not None and (not _is_int(self.random_seed) or self.random_seed < 0):
            raise InvalidConfigurationError(
                f"'random_seed' must be a non-negative integer or null, got: {self.random_seed}"
            )

        if self.convergence_patience is not None and (
                not _is_int(self.convergence_patience) or self.convergence_patience <= 0):
            raise InvalidConfigurationError(
                f"'convergence_patience' must be a positive integer or null, "
                f"got: {self.convergence_patience}"
            )

    def replace(self, **overrides) -> 'OptimizerConfig':
        """Copy with the given non-None fields overridden, validated."""
        values = self.to_dict()
        values.update({key: value for key, value in overrides.items() if value is not None})
        config = OptimizerConfig(**values)
        config.validate()
        return config

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> 'OptimizerConfig':
        """
        Create and validate a config from a dictionary.

        Raises:
            InvalidConfigurationError: On unknown keys or invalid values
        """
        d = d or {}
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise InvalidConfigurationError(f"Unknown optimizer settings: {unknown}")

        config = cls(**d)
        config.validate()
        return config

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_optimizer_config(config_path: Union[str, Path]) -> OptimizerConfig:
    """
    Load optimizer configuration from a YAML file.

    The file holds OptimizerConfig fields either at top level or under an
    'optimizer' key.

    Args:
        config_path: Path to config YAML file

    Returns:
        Validated OptimizerConfig

    Raises:
        FileNotFoundError: If config file doesn't exist
        InvalidConfigurationError: If the YAML is invalid or settings are bad
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidConfigurationError(f"Invalid YAML in configuration file: {e}")

    if data is None:
        return OptimizerConfig()
    if not isinstance(data, dict):
        raise InvalidConfigurationError("Optimizer configuration must be a mapping")

    return OptimizerConfig.from_dict(data.get('optimizer', data))


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
