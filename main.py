"""CLI entrypoint for the crossword solver."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from crossfill.core.constants import Backend, PropagationMode
from crossfill.core.exceptions import CrosswordError
from crossfill.data.dictionary import DictionaryConfig, WordDictionary
from crossfill.engine.solver import CrosswordSolver, SolverConfig
from crossfill.engine.trace import ListTraceSink, LoggingTraceSink, TraceSink
from crossfill.io.render import pretty_print_solution, save_solution, save_steps
from crossfill.io.structure import load_structure
from crossfill.utils.logger import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fill a crossword structure with words from a word list",
    )
    parser.add_argument("structure", type=Path, help="Structure file ('?' marks a fillable cell)")
    parser.add_argument("words", type=Path, help="Word list, one word per line")
    parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        default=Path("output.txt"),
        help="Where to save the filled grid (default: output.txt)",
    )
    parser.add_argument(
        "--propagation",
        type=str,
        choices=[m.value for m in PropagationMode],
        default=PropagationMode.FORWARD_CHECKING.value,
        help="Domain pruning strategy used with backtracking",
    )
    parser.add_argument(
        "--backend",
        type=str,
        choices=[b.value for b in Backend],
        default=Backend.BACKTRACKING.value,
        help="Search backend",
    )
    parser.add_argument(
        "--max-assignments",
        type=int,
        default=None,
        help="Give up after this many attempted assignments",
    )
    parser.add_argument("--steps", type=Path, help="Optional path for the solver decision trace")
    parser.add_argument("--print", action="store_true", help="Print the filled grid to stdout")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    try:
        grid = load_structure(args.structure)
        dictionary = WordDictionary(DictionaryConfig(path=args.words))
        config = SolverConfig(
            propagation=args.propagation,
            backend=args.backend,
            max_assignments=args.max_assignments,
        )
    except CrosswordError as exc:
        parser.exit(2, f"error: {exc}\n")

    if args.steps:
        trace: Optional[TraceSink] = ListTraceSink()
    elif level <= logging.DEBUG:
        trace = LoggingTraceSink()
    else:
        trace = None
    solver = CrosswordSolver(grid, dictionary, config=config, trace=trace)
    try:
        result = solver.solve()
    except CrosswordError as exc:
        parser.exit(2, f"error: {exc}\n")

    if isinstance(trace, ListTraceSink):
        save_steps(trace.lines(), args.steps)

    if result.limit_reached:
        print("Search limit reached without a verdict.")
        return 3

    if result.assignment is None:
        print("No solution.")
        return 1

    print(f"Solution found. Saving to {args.output}")
    save_solution(grid, result.assignment, args.output)
    if args.print:
        pretty_print_solution(grid, result.assignment)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
