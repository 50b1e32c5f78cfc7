"""
Image evolution CLI for PixEvo.

This module provides a command-line interface for evolving random images
toward a target image file.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from ..core.config import Config, ENV_TARGET_IMAGE
from ..core.exceptions import PixEvoException, ConfigurationError
from ..core.logging import setup_logging, get_logger
from ..data.images import load_image, resize_image, save_png, PngCheckpointWriter
from ..optimization.genetic import ImageEvolution, EvolutionConfig


def _load_config(parsed_args: argparse.Namespace) -> Config:
    config = Config(config_file=parsed_args.config, env_file=parsed_args.env_file)

    if parsed_args.target is not None:
        config.image.target_path = str(parsed_args.target)
    if parsed_args.width is not None:
        config.image.width = parsed_args.width
    if parsed_args.height is not None:
        config.image.height = parsed_args.height
    if parsed_args.output_dir is not None:
        config.image.output_dir = str(parsed_args.output_dir)

    evolution = config.evolution
    for name in (
        "population_size", "max_generations", "cross_rate", "seed",
        "crossover_seed", "checkpoint_interval", "n_jobs"
    ):
        value = getattr(parsed_args, name)
        if value is not None:
            setattr(evolution, name, value)

    if parsed_args.log_level is not None:
        config.logging.level = parsed_args.log_level

    config.validate()

    if not config.get_target_path().is_file():
        raise ConfigurationError(
            f"Target image not found: {config.image.target_path}",
            details=f"pass --target or set {ENV_TARGET_IMAGE} or image.target_path in the config file"
        )
    return config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pixevo evolve",
        description="Evolve random images toward a target image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Evolve a 3x3 thumbnail of data/target_image.jpeg with default settings
  pixevo evolve

  # Target taken from the environment
  PIXEVO_TARGET_IMAGE=photos/cat.png pixevo evolve --seed 7

  # Larger image, bigger population, fixed seed
  pixevo evolve --target data/target_image.jpeg --width 64 --height 64 --population-size 50 --seed 7
        """
    )

    # -- Configuration ------------------------------------
    config_group = parser.add_argument_group('Configuration')
    config_group.add_argument(
        '--config', '-c',
        type=Path,
        help='Path to configuration file (JSON)'
    )
    config_group.add_argument(
        '--env-file', '-e',
        type=Path,
        help='Path to .env file with PIXEVO_* overrides'
    )

    # -- Image --------------------------------------------
    image_group = parser.add_argument_group('Image')
    image_group.add_argument(
        '--target', '-t',
        type=Path,
        default=None,
        help=f'Path to the target image (default: {ENV_TARGET_IMAGE}, then image.target_path)'
    )
    image_group.add_argument('--width', type=int, help='Width the target is resized to (default: 3)')
    image_group.add_argument('--height', type=int, help='Height the target is resized to (default: 3)')

    # -- Genetic Algorithm --------------------------------
    genetic_group = parser.add_argument_group('Genetic Algorithm')
    genetic_group.add_argument('--population-size', type=int, help='Individuals per generation (default: 10)')
    genetic_group.add_argument('--max-generations', type=int, help='Generations to run (default: 1000)')
    genetic_group.add_argument('--cross-rate', type=float, help='Probability of taking a pixel from the best parent (default: 0.2)')
    genetic_group.add_argument('--seed', type=int, help="Seed for generation 0 (default: today's date)")
    genetic_group.add_argument('--crossover-seed', type=int, help='Seed for recombination (default: unseeded)')
    genetic_group.add_argument('--checkpoint-interval', type=int, help='Save the best image every N generations (default: 10)')

    # -- Parallelism -------------------------------------
    parallel_group = parser.add_argument_group('Parallelism')
    parallel_group.add_argument('--n-jobs', type=int, help='Worker processes for initialization and scoring (default: 1)')

    # -- Output ------------------------------------------
    output_group = parser.add_argument_group('Output')
    output_group.add_argument('--output-dir', type=Path, help='Directory for checkpoint images (default: results)')
    output_group.add_argument('--save-history', action='store_true', help='Write the fitness history as JSON')
    output_group.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Logging level')
    output_group.add_argument('--no-log-file', action='store_true', help='Log to the console only')

    return parser


def evolve_command(args: Optional[list] = None) -> None:
    parsed_args = build_parser().parse_args(args)

    try:
        config = _load_config(parsed_args)
    except PixEvoException as e:
        setup_logging(level=parsed_args.log_level or "INFO", enable_file=False)
        get_logger(__name__).error(f"Configuration error: {e}")
        sys.exit(1)

    setup_logging(
        level=config.logging.level,
        log_file=Path(config.logging.log_file),
        enable_file=not parsed_args.no_log_file
    )
    logger = get_logger(__name__)
    logger.info(f"Configuration: {config}")

    try:
        output_dir = config.get_output_dir()
        target = load_image(config.get_target_path())
        target = resize_image(target, config.image.width, config.image.height)
        save_png(target, output_dir / "resized_target_image.png")

        evolution_config = EvolutionConfig(
            population_size=config.evolution.population_size,
            max_generations=config.evolution.max_generations,
            cross_rate=config.evolution.cross_rate,
            seed=config.evolution.seed,
            crossover_seed=config.evolution.crossover_seed,
            checkpoint_interval=config.evolution.checkpoint_interval,
            log_interval=config.evolution.checkpoint_interval,
            n_jobs=config.evolution.n_jobs,
            use_multiprocessing=config.evolution.n_jobs > 1
        )

        checkpoint_writer = PngCheckpointWriter(output_dir)
        evolution = ImageEvolution(
            target,
            config=evolution_config,
            checkpoint_callback=checkpoint_writer
        )
        best_individual, best_fitness = evolution.run()

        if parsed_args.save_history:
            evolution.save_history(output_dir / "search_history.json")

        save_png(best_individual.image, output_dir / "best.png")
    except PixEvoException as e:
        logger.error(f"Evolution failed: {e}")
        sys.exit(1)

    print("\n=== Image Evolution Completed ===")
    print(f"Generations: {evolution.generation}")
    print(f"Best fitness: {best_fitness:.6f}")
    print(f"Checkpoints written: {len(checkpoint_writer.written)}")
    print(f"Results saved to: {output_dir}")


if __name__ == "__main__":
    evolve_command()
