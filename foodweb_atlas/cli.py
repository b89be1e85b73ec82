"""
foodweb_atlas/cli.py — Command-line interface for the Food Web Atlas pipeline.

Provides a single entry point that:
  1. Builds a food web from two CSV files (or the built-in example)
  2. Computes degree, connectance, clustering, betweenness, topological order
  3. Detects communities and renders the network figures
  4. Prints a console summary and writes Markdown / JSON / CSV reports

Usage:
    python -m foodweb_atlas analyze --species species.csv --interactions links.csv
    python -m foodweb_atlas example            # six-species coastal web
    foodweb-atlas analyze --seed 7 --method greedy_modularity --html

CSV formats:
    species.csv       one column named "species"
    interactions.csv  two columns named "predator" and "prey"
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import sys
import time

from foodweb_atlas.config import DEFAULT_CONFIG, FoodWebConfig
from foodweb_atlas.graph.builder import SpeciesValidationError
from foodweb_atlas.metrics.communities import COMMUNITY_METHODS


# ── Logging setup ─────────────────────────────────────────────────────────────

def _setup_logging(level: str = "INFO") -> None:
    """Configure root logger with timestamps and level names."""
    numeric = getattr(logging, level.upper(), logging.INFO)
    fmt = "%(asctime)s  %(levelname)-8s  %(name)s — %(message)s"
    datefmt = "%H:%M:%S"
    logging.basicConfig(level=numeric, format=fmt, datefmt=datefmt, stream=sys.stderr)
    # Silence matplotlib font-manager chatter
    logging.getLogger("matplotlib").setLevel(logging.WARNING)


logger = logging.getLogger("foodweb_atlas.cli")


def _config_from_args(args: argparse.Namespace) -> FoodWebConfig:
    overrides = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.method:
        overrides["community_method"] = args.method
    if args.normalized:
        overrides["betweenness_normalized"] = True
    if args.allow_implicit:
        overrides["allow_implicit_species"] = True
    if args.output_dir:
        overrides["output_dir"] = args.output_dir
    return dataclasses.replace(DEFAULT_CONFIG, **overrides)


def _run(args: argparse.Namespace, species_path: str | None, interactions_path: str | None) -> int:
    from foodweb_atlas.pipeline import run_full_pipeline
    from foodweb_atlas.reports.summary import format_summary_lines

    config = _config_from_args(args)

    logger.info("=" * 60)
    logger.info("Food Web Atlas — Analysis Run")
    logger.info("  Species file      : %s", species_path or "(built-in example)")
    logger.info("  Interactions file : %s", interactions_path or "(built-in example)")
    logger.info("  Seed              : %d", config.seed)
    logger.info("  Communities       : %s", config.community_method)
    logger.info("  Output dir        : %s", config.output_dir)
    logger.info("=" * 60)

    t0 = time.monotonic()
    try:
        result = run_full_pipeline(
            species_path=species_path,
            interactions_path=interactions_path,
            config=config,
            generate_figures=not args.no_figures,
        )
    except SpeciesValidationError as exc:
        logger.error("Invalid food web input: %s", exc)
        return 2
    except FileNotFoundError as exc:
        logger.error("Input file not found: %s", exc.filename or exc)
        return 2

    if args.html:
        from foodweb_atlas.metrics.centrality import rank_by_centrality
        from foodweb_atlas.viz.plotly_graph import (
            build_centrality_chart,
            build_plotly_figure,
            save_figure_html,
        )
        os.makedirs(config.output_dir, exist_ok=True)
        fig = build_plotly_figure(result.G, result.betweenness, result.communities, config)
        chart = build_centrality_chart(rank_by_centrality(result.G, result.betweenness))
        for name, figure in (
            ("foodweb_interactive.html", fig),
            ("foodweb_centrality.html", chart),
        ):
            html_path = save_figure_html(figure, os.path.join(config.output_dir, name))
            result.figure_paths[name] = os.path.abspath(html_path)

    elapsed = time.monotonic() - t0

    print()
    for line in format_summary_lines(result.summary):
        print(line)
    print(f"  Elapsed           : {elapsed:.1f}s")
    for name, path in sorted({**result.figure_paths, **result.report_paths}.items()):
        print(f"    + {name:<26} {path}")
    print("=" * 60)
    return 0


# ── Subcommand: analyze ───────────────────────────────────────────────────────

def cmd_analyze(args: argparse.Namespace) -> int:
    """Full analysis of a food web given as two CSV files."""
    _setup_logging(args.log_level)
    if bool(args.species) != bool(args.interactions):
        logger.error("--species and --interactions must be given together.")
        return 2
    return _run(args, args.species, args.interactions)


# ── Subcommand: example ───────────────────────────────────────────────────────

def cmd_example(args: argparse.Namespace) -> int:
    """Full analysis of the built-in six-species coastal web."""
    _setup_logging(args.log_level)
    return _run(args, None, None)


def _add_common_options(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--output-dir", default=None, metavar="PATH",
        help=f"Directory for figures and reports (default: {DEFAULT_CONFIG.output_dir})",
    )
    p.add_argument(
        "--seed", type=int, default=None, metavar="N",
        help=f"Random seed for layout and community detection (default: {DEFAULT_CONFIG.seed})",
    )
    p.add_argument(
        "--method", choices=COMMUNITY_METHODS, default=None,
        help=f"Community detection algorithm (default: {DEFAULT_CONFIG.community_method})",
    )
    p.add_argument(
        "--normalized", action="store_true",
        help="Normalize betweenness by (N-1)(N-2) instead of reporting raw path counts",
    )
    p.add_argument(
        "--allow-implicit", action="store_true",
        help="Insert species that appear only in interactions instead of rejecting them",
    )
    p.add_argument(
        "--no-figures", action="store_true",
        help="Skip PNG figure generation",
    )
    p.add_argument(
        "--html", action="store_true",
        help="Also write an interactive Plotly HTML view",
    )
    p.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="foodweb-atlas",
        description="Food Web Atlas — network analysis of ecological interaction graphs.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # analyze
    p_analyze = subparsers.add_parser(
        "analyze",
        help="Analyze a food web from species and interaction CSV files",
    )
    p_analyze.add_argument(
        "--species", default=None, metavar="PATH",
        help="CSV with a 'species' column",
    )
    p_analyze.add_argument(
        "--interactions", default=None, metavar="PATH",
        help="CSV with 'predator' and 'prey' columns",
    )
    _add_common_options(p_analyze)
    p_analyze.set_defaults(func=cmd_analyze)

    # example
    p_example = subparsers.add_parser(
        "example",
        help="Analyze the built-in six-species coastal food web",
    )
    _add_common_options(p_example)
    p_example.set_defaults(func=cmd_example)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
