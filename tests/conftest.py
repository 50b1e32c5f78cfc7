"""
Pytest configuration and common fixtures for PixEvo testing.

This file contains shared fixtures and configuration that can be used
across all test modules.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
import numpy as np

# Add the project root to Python path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from pixevo.core import setup_logging
from pixevo.core.logging import get_logger
from pixevo.optimization.genetic.individual import Individual


@pytest.fixture(scope="session")
def test_logger():
    """Set up logging for tests."""
    # Configure logging for tests (console only, no files)
    setup_logging(level="DEBUG", enable_file=False, enable_console=True)
    return get_logger("test")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_dir = Path(tempfile.mkdtemp())
    yield temp_dir
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def clean_env(monkeypatch, temp_dir):
    """Remove PIXEVO_* overrides and return a .env path that does not exist."""
    for name in ("PIXEVO_TARGET_IMAGE", "PIXEVO_SEED", "PIXEVO_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return temp_dir / "missing.env"


@pytest.fixture
def sample_config_data():
    """Sample configuration data for testing."""
    return {
        "image": {
            "target_path": "images/cat.png",
            "width": 16,
            "height": 12,
            "output_dir": "out"
        },
        "evolution": {
            "population_size": 20,
            "max_generations": 50,
            "cross_rate": 0.5,
            "seed": 1234,
            "checkpoint_interval": 5
        },
        "logging": {
            "level": "DEBUG"
        }
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Create a temporary config file for testing."""
    import json
    config_path = temp_dir / "test_config.json"
    with open(config_path, 'w') as f:
        json.dump(sample_config_data, f, indent=2)
    return config_path


def make_solid_image(width, height, color):
    """(height, width, 3) uint8 image filled with one RGB colour."""
    image = np.empty((height, width, 3), dtype=np.uint8)
    image[:, :] = color
    return image


@pytest.fixture
def solid_image():
    """Factory for single-colour images."""
    return make_solid_image


@pytest.fixture
def gradient_image():
    """8x6 image with horizontal and vertical colour ramps."""
    height, width = 6, 8
    ys, xs = np.mgrid[0:height, 0:width]
    image = np.stack([
        xs * 30,
        ys * 40,
        (xs + ys) * 15
    ], axis=-1)
    return image.astype(np.uint8)


@pytest.fixture
def random_rgb():
    """Factory for seeded random images."""
    def _make(width, height, seed=0):
        rng = np.random.default_rng(seed)
        return rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
    return _make


@pytest.fixture
def scored_generation(random_rgb):
    """Factory for generations with given fitness values."""
    def _make(fitness_values, width=4, height=4):
        return [
            Individual(random_rgb(width, height, seed=i), fitness=value)
            for i, value in enumerate(fitness_values)
        ]
    return _make


# Test markers for organizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    for marker, description in (
        ("unit", "mark test as a unit test"),
        ("integration", "mark test as an integration test"),
        ("slow", "mark test as slow running"),
        ("core", "mark test as testing core functionality"),
        ("config", "mark test as testing configuration"),
        ("logging", "mark test as testing logging"),
        ("exceptions", "mark test as testing the exception hierarchy"),
        ("utils", "mark test as testing utilities"),
        ("optimization", "mark test as testing optimization"),
        ("genetic", "mark test as testing the genetic algorithm"),
        ("data", "mark test as testing image I/O"),
        ("cli", "mark test as testing the command line"),
    ):
        config.addinivalue_line("markers", f"{marker}: {description}")
