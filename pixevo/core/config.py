"""
Configuration management for the PixEvo system.

Settings come from dataclass defaults, then an optional JSON file, then
environment variables (a .env file is loaded with python-dotenv first).
"""

import os
import json
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, asdict

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .logging import get_logger
from ..utils.helpers import date_seed


ENV_TARGET_IMAGE = "PIXEVO_TARGET_IMAGE"
ENV_SEED = "PIXEVO_SEED"
ENV_LOG_LEVEL = "PIXEVO_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ImageConfig:
    """Target image and output location."""
    target_path: str = "data/target_image.jpeg"
    width: int = 3
    height: int = 3
    output_dir: str = "results"


@dataclass
class EvolutionSettings:
    """Genetic algorithm parameters."""
    population_size: int = 10
    max_generations: int = 1000
    cross_rate: float = 0.2
    seed: Optional[int] = None
    crossover_seed: Optional[int] = None
    checkpoint_interval: int = 10
    n_jobs: int = 1


@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_file: str = "logs/pixevo.log"


class Config:
    """
    Main configuration class for PixEvo.

    A missing seed is filled with today's date (YYYYMMDD) so a run is
    reproducible within a day unless an explicit seed is given.
    """

    def __init__(self, config_file: Optional[Path] = None, env_file: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to JSON configuration file
            env_file: Path to .env file with PIXEVO_* overrides
        """
        self.logger = get_logger(__name__)

        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        self.image = ImageConfig()
        self.evolution = EvolutionSettings()
        self.logging = LoggingConfig()

        if config_file is not None:
            config_file = Path(config_file)
            if config_file.exists():
                self._load_from_file(config_file)
            else:
                self.logger.warning(f"Config file {config_file} not found, using defaults")

        self._load_env_overrides()

        if self.evolution.seed is None:
            self.evolution.seed = date_seed()
            self.logger.debug(f"No seed configured, using date seed {self.evolution.seed}")

        self.validate()

        self.logger.info("Configuration loaded successfully")

    def _load_from_file(self, config_file: Path):
        """Load configuration from JSON file."""
        try:
            with open(config_file, 'r') as f:
                config_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to load config file {config_file}: {str(e)}")

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config file {config_file} must contain a JSON object")

        for section_name, section_data in config_data.items():
            if section_name not in ("image", "evolution", "logging"):
                self.logger.warning(f"Ignoring unknown config section: {section_name}")
                continue
            if not isinstance(section_data, dict):
                raise ConfigurationError(f"Config section '{section_name}' must be an object")
            section = getattr(self, section_name)
            for key, value in section_data.items():
                if hasattr(section, key):
                    setattr(section, key, value)
                else:
                    self.logger.warning(f"Ignoring unknown setting: {section_name}.{key}")

        self.logger.info(f"Loaded configuration from {config_file}")

    def _load_env_overrides(self):
        """Apply PIXEVO_* environment variables."""
        target = os.getenv(ENV_TARGET_IMAGE)
        if target:
            self.image.target_path = target

        seed = os.getenv(ENV_SEED)
        if seed:
            try:
                self.evolution.seed = int(seed)
            except ValueError:
                raise ConfigurationError(f"{ENV_SEED} must be an integer, got {seed!r}")

        level = os.getenv(ENV_LOG_LEVEL)
        if level:
            self.logging.level = level.upper()

        self.logger.debug("Environment overrides applied")

    def validate(self):
        """Validate configuration settings."""
        errors = []

        if not _positive_int(self.image.width) or not _positive_int(self.image.height):
            errors.append("Image width and height must be positive integers")

        if not self.image.target_path:
            errors.append("Target image path cannot be empty")

        evolution = self.evolution
        if not _int(evolution.population_size) or evolution.population_size < 2:
            errors.append("Population size must be at least 2")

        if not _positive_int(evolution.max_generations):
            errors.append("Max generations must be positive and greater than 0")

        if not isinstance(evolution.cross_rate, (int, float)) or not 0 <= evolution.cross_rate <= 1:
            errors.append("Cross rate must be between 0 and 1")

        if not _int(evolution.seed) or evolution.seed < 0:
            errors.append("Seed must be a non-negative integer")

        if evolution.crossover_seed is not None and (
            not _int(evolution.crossover_seed) or evolution.crossover_seed < 0
        ):
            errors.append("Crossover seed must be a non-negative integer")

        if not _positive_int(evolution.checkpoint_interval):
            errors.append("Checkpoint interval must be positive and greater than 0")

        if not _positive_int(evolution.n_jobs):
            errors.append("Number of jobs must be positive and greater than 0")

        if str(self.logging.level).upper() not in LOG_LEVELS:
            errors.append(f"Log level must be one of {', '.join(LOG_LEVELS)}")

        if errors:
            raise ConfigurationError("Configuration validation failed", details=errors)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "image": asdict(self.image),
            "evolution": asdict(self.evolution),
            "logging": asdict(self.logging),
        }

    def save(self, config_file: Path):
        """Save configuration to JSON file."""
        config_file = Path(config_file)
        try:
            config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(config_file, 'w') as f:
                json.dump(self.to_dict(), f, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Failed to save config file {config_file}: {str(e)}")
        self.logger.info(f"Configuration saved to {config_file}")

    def get_target_path(self) -> Path:
        return Path(self.image.target_path)

    def get_output_dir(self) -> Path:
        return Path(self.image.output_dir)

    def __repr__(self) -> str:
        return (
            f"Config(target={self.image.target_path}, "
            f"size={self.image.width}x{self.image.height}, "
            f"population={self.evolution.population_size}, seed={self.evolution.seed})"
        )


def _int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _positive_int(value: Any) -> bool:
    return _int(value) and value > 0
