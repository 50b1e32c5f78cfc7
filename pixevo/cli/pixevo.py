import sys
import argparse


def clean_command(args):
    import os
    import shutil

    def prompt_confirm():
        warning = (
            "WARNING: This will permanently delete the following:\n"
            "- results/\n- logs/\n\nContinue? [y/N]: "
        )
        return input(warning).strip().lower() in ('y', 'yes')

    if args.yes or prompt_confirm():
        for d in ["results", "logs"]:
            if os.path.isdir(d):
                print(f"Removing {d}/ ...")
                shutil.rmtree(d, ignore_errors=True)
        print("Clean complete.")
    else:
        print("Clean Aborted.")
        sys.exit(1)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="PixEvo unified CLI: evolve, clean"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Evolve subcommand, options are parsed by evolve_command itself
    subparsers.add_parser("evolve", help="Evolve random images toward a target image", add_help=False)

    # Clean subcommand
    clean_parser = subparsers.add_parser("clean", help="Remove generated files (results, logs)")
    clean_parser.add_argument('--yes', '-y', action='store_true', help='Skip the confirmation prompt')

    args, extra = parser.parse_known_args(argv)

    if args.command == "evolve":
        from .evolve import evolve_command
        evolve_command(extra)
    elif extra:
        parser.error(f"unrecognized arguments: {' '.join(extra)}")
    elif args.command == "clean":
        clean_command(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
