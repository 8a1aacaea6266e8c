"""
Command-line entry point.

Generates one blueprint from the built-in templates or a directory of
template metadata files and writes it as JSON (and optionally DOT).

Exit codes: 0 success, 1 generation failed, 2 templates could not be loaded.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .generators.segments import BlockPos
from .generators.templates import default_catalog, load_templates_from_dir
from .pipeline import GenerationPipeline, GenerationSettings, PipelineError, load_settings_from_path
from .pipeline.debug import export_blueprint_dot

logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sotgen",
        description="Generate a segment dungeon blueprint.",
    )
    parser.add_argument("--templates", type=Path, default=None,
                        help="Directory of template JSON files (default: built-in templates)")
    parser.add_argument("--settings", type=Path, default=None,
                        help="Settings JSON file; command-line options override it")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--max-distance", type=int, default=None,
                        help="Maximum distance of a segment origin from the hub")
    parser.add_argument("--max-segments", type=int, default=None, help="Cap on placed segments")
    parser.add_argument("--max-tries", type=int, default=None,
                        help="Candidates tried per entry point")
    parser.add_argument("--max-depth", type=int, default=None,
                        help="Deepest segment depth below the hub (default: unlimited)")
    parser.add_argument("--prioritize-features", action="store_true",
                        help="Expand feature segments before other candidates")
    parser.add_argument("--require-vault", action="append", default=[], metavar="COLOR",
                        help="Vault colour the blueprint must contain (repeatable)")
    parser.add_argument("--require-key", action="append", default=[], metavar="COLOR",
                        help="Key colour the blueprint must contain (repeatable)")
    parser.add_argument("--attempts", type=int, default=None, help="Generation attempts")
    parser.add_argument("--origin", type=int, nargs=3, default=(0, 0, 0), metavar=("X", "Y", "Z"),
                        help="World position of the hub origin")
    parser.add_argument("--output", type=Path, default=None,
                        help="Write the blueprint JSON here (default: stdout)")
    parser.add_argument("--dot", type=Path, default=None, help="Write a Graphviz DOT graph here")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _build_settings(args: argparse.Namespace) -> GenerationSettings:
    settings = GenerationSettings()
    if args.settings is not None:
        loaded = load_settings_from_path(args.settings)
        if loaded is None:
            raise PipelineError(f"Cannot read settings file {args.settings}")
        settings = loaded
    overrides = {
        'seed': args.seed,
        'max_distance': args.max_distance,
        'max_segments': args.max_segments,
        'max_tries_per_entrance': args.max_tries,
        'max_depth': args.max_depth,
        'max_attempts': args.attempts,
    }
    for name, value in overrides.items():
        if value is not None:
            setattr(settings, name, value)
    if args.prioritize_features:
        settings.prioritize_features = True
    settings.required_vaults += tuple(args.require_vault)
    settings.required_keys += tuple(args.require_key)
    settings.verbose = settings.verbose or args.verbose
    return settings


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.templates is not None:
        report = load_templates_from_dir(args.templates)
        for issue in report.result.errors:
            logger.error(issue.format())
        if not report.templates:
            logger.error("No usable templates in %s", args.templates)
            return 2
        catalog = report.to_catalog()
    else:
        catalog = default_catalog()

    try:
        settings = _build_settings(args)
        if settings.verbose:
            logging.getLogger().setLevel(logging.DEBUG)
        pipeline = GenerationPipeline(catalog, settings)
    except PipelineError as e:
        logger.error("%s", e)
        return 1

    result = pipeline.generate(BlockPos(*args.origin))
    for warning in result.warnings:
        logger.warning(warning)
    if result.blueprint is None:
        for error in result.errors:
            logger.error(error)
        return 1

    payload = json.dumps(result.blueprint.to_dict(), indent=2)
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(payload, encoding='utf-8')
        logger.info("Blueprint written: %s", args.output)
    else:
        sys.stdout.write(payload + "\n")

    if args.dot is not None:
        args.dot.parent.mkdir(parents=True, exist_ok=True)
        args.dot.write_text(export_blueprint_dot(result.blueprint), encoding='utf-8')
        logger.info("Graph written: %s", args.dot)

    if not result.success:
        for error in result.errors:
            logger.error(error)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
