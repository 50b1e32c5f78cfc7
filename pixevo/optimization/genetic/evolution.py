"""
Generational loop evolving random images toward a target image.

Each generation is scored against the fixed target, the two fittest
individuals are selected, and the whole population is replaced by their
pixel-wise crossovers. The loop runs for exactly `max_generations`
generations; there is no early stopping, elitism or mutation.
"""

import itertools
import json
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from pixevo.core.exceptions import ConfigurationError, ValidationError
from pixevo.core.logging import get_logger, generate_correlation_id, set_correlation_id, set_generation
from pixevo.utils.decorators import log_execution_time
from pixevo.utils.helpers import format_percentage
from pixevo.utils.validators import validate_image, validate_evolution_config
from .individual import Individual, UNSCORED
from .population import initialize
from .selection import select_top_two
from .crossover import generate_next_generation
from .similarity import similarity, pixel_difference_sum

logger = get_logger(__name__)

CheckpointCallback = Callable[[int, Individual], None]


@dataclass
class EvolutionConfig:
    """Configuration for the image evolution loop."""

    # Population parameters
    population_size: int = 10
    max_generations: int = 1000

    # Recombination
    cross_rate: float = 0.2

    # Reproducibility; crossover_seed=None keeps recombination unseeded
    seed: int = 0
    crossover_seed: Optional[int] = None

    # Reporting
    checkpoint_interval: int = 10
    log_interval: int = 10

    # Parallel processing
    n_jobs: int = 1
    use_multiprocessing: bool = False


@dataclass
class GenerationResult:
    """Summary of a single generation."""

    generation: int
    best_fitness: float
    avg_fitness: float
    worst_fitness: float
    best_individual: Individual
    metadata: Dict[str, Any] = field(default_factory=dict)


class ImageEvolution:
    """
    Genetic algorithm driver for image reconstruction.

    The host supplies the target image and, optionally, a checkpoint
    callback that receives `(generation, best_individual)` every
    `checkpoint_interval` generations, starting with generation 1.
    """

    def __init__(
        self,
        target: np.ndarray,
        config: Optional[EvolutionConfig] = None,
        checkpoint_callback: Optional[CheckpointCallback] = None
    ):
        """
        Initialize the evolution driver.

        Args:
            target: Target RGB image, shape (height, width, 3), dtype uint8
            config: Evolution configuration
            checkpoint_callback: Receives the best individual at checkpoints

        Raises:
            ConfigurationError: If the configuration or target is unusable
        """
        self.config = config or EvolutionConfig()
        validate_evolution_config(self.config)

        try:
            validate_image(target, "target")
        except ValidationError as e:
            raise ConfigurationError(f"Invalid target image: {e.message}", details=e.details)

        self.target = target.copy()
        self.target.flags.writeable = False
        self.checkpoint_callback = checkpoint_callback

        # Initialize state
        self.population: List[Individual] = []
        self.generation_history: List[GenerationResult] = []
        self.best_individual: Optional[Individual] = None
        self.best_fitness: float = UNSCORED
        self.generation: int = 0
        self.run_id: Optional[str] = None

        self._crossover_rng = np.random.default_rng(self.config.crossover_seed)

    @property
    def width(self) -> int:
        return self.target.shape[1]

    @property
    def height(self) -> int:
        return self.target.shape[0]

    def initialize_population(self) -> None:
        """Build generation 0 from the run seed."""
        self.population = initialize(
            self.config.population_size,
            self.width,
            self.height,
            self.config.seed,
            n_jobs=self._worker_count()
        )

    @log_execution_time()
    def run(self) -> Tuple[Individual, float]:
        """
        Run the evolution loop to completion.

        Returns:
            Tuple of (best individual seen in any generation, its fitness)
        """
        self.run_id = generate_correlation_id()
        set_correlation_id(self.run_id)
        logger.info(
            f"Starting image evolution: {self.width}x{self.height}, "
            f"population={self.config.population_size}, "
            f"generations={self.config.max_generations}, "
            f"cross_rate={self.config.cross_rate}"
        )

        self.generation_history = []
        self.best_individual = None
        self.best_fitness = UNSCORED
        self._crossover_rng = np.random.default_rng(self.config.crossover_seed)
        self.initialize_population()

        try:
            for generation in range(1, self.config.max_generations + 1):
                self.generation = generation
                set_generation(generation)
                self._run_generation(generation)
        finally:
            set_generation(None)

        self._finalize_search()

        return self.best_individual, self.best_fitness

    def _run_generation(self, generation: int) -> None:
        """Score, select, report, then replace the population."""
        logger.debug(f"Generation {generation}/{self.config.max_generations}")

        self._evaluate_population()

        best, second_best = select_top_two(self.population)
        self._update_best_solution(best)

        result = self._create_generation_result(best)
        self.generation_history.append(result)

        if generation % self.config.log_interval == 0:
            self._log_generation_progress(result)

        if self._is_checkpoint(generation):
            self._checkpoint(generation, best)

        self.population = generate_next_generation(
            best,
            second_best,
            self.config.cross_rate,
            self.config.population_size,
            rng=self._crossover_rng
        )

    def _worker_count(self) -> int:
        if self.config.use_multiprocessing and self.config.n_jobs > 1:
            return self.config.n_jobs
        return 1

    def _evaluate_population(self) -> None:
        """Score every individual of the current generation against the target."""
        if self._worker_count() > 1:
            self._evaluate_population_parallel()
        else:
            for individual in self.population:
                individual.evaluate(self.target)

    def _evaluate_population_parallel(self) -> None:
        images = [individual.image for individual in self.population]
        with ProcessPoolExecutor(max_workers=self.config.n_jobs) as executor:
            scores = list(executor.map(similarity, itertools.repeat(self.target), images))
        for individual, score in zip(self.population, scores):
            individual.fitness = score

    def _update_best_solution(self, best: Individual) -> None:
        """Track the best individual across all generations."""
        if best.fitness > self.best_fitness:
            self.best_fitness = best.fitness
            self.best_individual = best
            logger.debug(f"New best fitness: {self.best_fitness:.6f}")
        elif self.best_individual is None:
            # Generation 1 can be all NaN or unscored
            self.best_individual = best

    def _create_generation_result(self, best: Individual) -> GenerationResult:
        fitness_scores = np.array([individual.fitness for individual in self.population])

        return GenerationResult(
            generation=self.generation,
            best_fitness=best.fitness,
            avg_fitness=float(np.mean(fitness_scores)),
            worst_fitness=float(np.min(fitness_scores)),
            best_individual=best,
            metadata={
                "fitness_std": float(np.std(fitness_scores)),
                "num_evaluations": len(fitness_scores)
            }
        )

    def _log_generation_progress(self, result: GenerationResult) -> None:
        logger.info(
            f"Generation {result.generation}: "
            f"Best={result.best_fitness:.4f}, "
            f"Avg={result.avg_fitness:.4f}, "
            f"Worst={result.worst_fitness:.4f}"
        )

    def _is_checkpoint(self, generation: int) -> bool:
        return (generation - 1) % self.config.checkpoint_interval == 0

    def _checkpoint(self, generation: int, best: Individual) -> None:
        """Report the generation's best individual to the host."""
        difference = pixel_difference_sum(self.target, best.image)
        logger.info(
            f"Generation {generation}: the best similarity to target image: "
            f"{best.fitness} ({format_percentage(best.fitness)}), "
            f"pixel difference: {difference:.0f}",
            extra={"extra_fields": {
                "generation": generation,
                "best_fitness": best.fitness,
                "pixel_difference": difference
            }}
        )
        if self.checkpoint_callback is not None:
            self.checkpoint_callback(generation, best)

    def _finalize_search(self) -> None:
        logger.info("=== Image Evolution Completed ===")
        logger.info(f"Generations run: {self.generation}")
        logger.info(f"Best fitness: {self.best_fitness:.6f}")

    def history_frame(self) -> pd.DataFrame:
        """Per-generation fitness statistics, one row per generation."""
        return pd.DataFrame(
            [
                {
                    "generation": result.generation,
                    "best_fitness": result.best_fitness,
                    "avg_fitness": result.avg_fitness,
                    "worst_fitness": result.worst_fitness,
                    "fitness_std": result.metadata.get("fitness_std"),
                }
                for result in self.generation_history
            ],
            columns=["generation", "best_fitness", "avg_fitness", "worst_fitness", "fitness_std"]
        )

    def save_history(self, path: Union[str, Path]) -> Path:
        """
        Save the search history to a JSON file.

        Args:
            path: Destination file; parent directories are created

        Returns:
            The path written
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump({
                "run_id": self.run_id,
                "timestamp": str(pd.Timestamp.now()),
                "history": self.history_frame().to_dict(orient="records"),
                "config": asdict(self.config),
                "final_best_fitness": self.best_fitness
            }, f, indent=2)

        logger.info(f"Search history saved to {path}")
        return path

    def get_search_summary(self) -> Dict[str, Any]:
        """Get a summary of the search results."""
        return {
            "best_fitness": self.best_fitness,
            "total_generations": self.generation,
            "population_size": self.config.population_size,
            "image_size": (self.width, self.height),
            "fitness_history": [result.best_fitness for result in self.generation_history],
            "config": asdict(self.config)
        }
