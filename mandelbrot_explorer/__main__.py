"""
Command line entry point: python -m mandelbrot_explorer
"""
import argparse
import logging

from .colormaps import list_palette_ids
from .settings import load_settings


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="mandelbrot-explorer",
        description="Interactive Mandelbrot set explorer",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--settings",
        default=None,
        help="JSON settings file to load instead of the packaged one",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="window width in pixels (overrides the settings file)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="window height in pixels (overrides the settings file)",
    )
    parser.add_argument(
        "--max-iter",
        type=int,
        default=None,
        help="initial iteration budget",
    )
    parser.add_argument(
        "--max-iter-cap",
        type=int,
        default=None,
        help="upper bound for the iteration budget when doubling it",
    )
    parser.add_argument(
        "--palette",
        type=int,
        choices=list_palette_ids(),
        default=None,
        help="initial palette",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log debug output",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings(args.settings).with_overrides(
        width=args.width,
        height=args.height,
        iteration_budget=args.max_iter,
        max_iteration_budget=args.max_iter_cap,
        palette_id=args.palette,
    )

    # pygame is only needed once we actually open a window
    from .app import run
    run(settings)


if __name__ == "__main__":
    main()
