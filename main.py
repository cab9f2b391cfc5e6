"""CLI entrypoint for the arithmetic crossword level generator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from crossmath.core.exceptions import GenerationError
from crossmath.engine.generator import generate_level
from crossmath.engine.grid import answers_by_position
from crossmath.engine.tile_solver import count_solutions, solve_from_tiles
from crossmath.engine.validator import validate_grid
from crossmath.utils.logger import configure_logging
from crossmath.utils.pretty import pretty_print_level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate arithmetic crossword levels",
    )
    parser.add_argument("--level", type=int, default=1, help="Level number (>= 1)")
    parser.add_argument("--seed", type=int, default=42, help="Base seed for the level sequence")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Print a text rendering of the grid to stderr",
    )
    parser.add_argument(
        "--reveal",
        action="store_true",
        help="Show blank answers in the text rendering",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check the level with the validator and the CP-SAT tile solver",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def verify_level(level) -> Dict[str, Any]:
    """Run the self-checks reported under ``verification`` in the output."""
    live = level.live_copy()
    answers = answers_by_position(live)
    for (r, c), answer in answers.items():
        live[r][c].value = answer
    wrong = validate_grid(live, level)
    tile_assignment = solve_from_tiles(level)
    return {
        "answers_validate": wrong == set(),
        "tiles_solvable": tile_assignment is not None,
        "solutions_found": count_solutions(level, limit=5),
    }


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level_value = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level_value)

    if args.level < 1:
        parser.error("--level must be at least 1")

    level = generate_level(args.level, args.seed)
    if level is None:
        raise GenerationError(f"Unable to generate level {args.level} with seed {args.seed}")

    if args.pretty:
        pretty_print_level(level, reveal=args.reveal, stream=sys.stderr)

    payload: Dict[str, Any] = level.to_jsonable()
    if args.verify:
        payload["verification"] = verify_level(level)

    output_text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)


if __name__ == "__main__":  # pragma: no cover
    main()
