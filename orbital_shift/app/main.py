"""
Command-line front end for the Orbital Shift generator.

    orbital-shift daily 2026-10-19 --solution
    orbital-shift free --difficulty hard --output puzzle.json
    orbital-shift tutorial 1
    orbital-shift verify puzzle.json
    orbital-shift analyze
"""
import argparse
import json
import logging
import sys
from typing import Dict, Optional

from orbital_shift.core.analysis import orbit_ambiguity, target_ranges_are_exclusive, target_space_report
from orbital_shift.core.board import OrbitBoard
from orbital_shift.core.generator import generate_daily_result, generate_puzzle, random_seed, tutorial_step
from orbital_shift.core.scrambler import unscramble
from orbital_shift.core.types import Difficulty, GenerationResult, Puzzle, ValidationError
from orbital_shift.utils.coords import values_from_json, values_to_json

logger = logging.getLogger("orbital_shift")


def setup_logging(level: str = "WARNING") -> None:
    """Configure root logging for command-line use."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def result_to_json(result: GenerationResult, include_solution: bool) -> Dict:
    """Puzzle export; with `include_solution` also the solved layout, digits and rotations."""
    data = result.puzzle.to_dict()
    if not include_solution:
        return data
    return {
        "puzzle": data,
        "difficulty": result.difficulty.value,
        "seed": result.seed,
        "usedFallback": result.used_fallback,
        "solution": {
            "blackHexagons": [{"q": q, "r": r} for (q, r) in result.solution_black_hexagons],
            "values": values_to_json(result.solution_values),
            "rotations": [list(rotation) for rotation in result.rotations],
        },
    }


def _emit(data: Dict, output: Optional[str]) -> None:
    text = json.dumps(data, indent=2)
    if output:
        with open(output, 'w') as f:
            f.write(text + "\n")
        logger.info("Wrote %s", output)
    else:
        print(text)


def _emit_result(args, result: GenerationResult) -> int:
    if result.used_fallback:
        logger.warning("Generation fell back to the static puzzle")
    _emit(result_to_json(result, args.solution), args.output)
    return 0


def cmd_daily(args) -> int:
    return _emit_result(args, generate_daily_result(args.date))


def cmd_free(args) -> int:
    seed = args.seed if args.seed is not None else random_seed()
    return _emit_result(args, generate_puzzle(seed, Difficulty.parse(args.difficulty)))


def cmd_tutorial(args) -> int:
    seed, difficulty = tutorial_step(args.step)
    return _emit_result(args, generate_puzzle(seed, difficulty))


def cmd_verify(args) -> int:
    """Check a --solution export: structure of both layouts, the solved digits and the rotation sequence."""
    with open(args.file, 'r') as f:
        data = json.load(f)
    if "puzzle" not in data or "solution" not in data:
        print("Error: expected a file written with --solution", file=sys.stderr)
        return 2

    puzzle = Puzzle.from_dict(data["puzzle"])
    solution = data["solution"]
    solved_layout = [(int(h["q"]), int(h["r"])) for h in solution.get("blackHexagons", [])]
    values = values_from_json(solution.get("values", {}))

    start_board = OrbitBoard.from_puzzle(puzzle)
    solved_board = OrbitBoard.from_puzzle(puzzle, blocked=solved_layout)

    errors = start_board.validate_puzzle() + solved_board.validate_puzzle()
    errors += solved_board.validate_assignment(values)

    rotations = [(int(index), int(steps)) for index, steps in solution.get("rotations", [])]
    centers = [c.coord for c in puzzle.centers]
    if set(unscramble(centers, puzzle.black_hexagons, rotations)) != set(solved_layout):
        errors.append(ValidationError("error", "Undoing the rotations does not reach the solved layout"))

    for error in errors:
        print(error)

    for i in range(len(solved_board.centers)):
        print(solved_board.describe_orbit(i))
    print(f"Digit sets per orbit: {orbit_ambiguity(solved_board)}")

    hard_errors = [e for e in errors if e.severity == "error"]
    print("VALID" if not hard_errors else f"INVALID ({len(hard_errors)} errors)")
    return 0 if not hard_errors else 1


def cmd_analyze(args) -> int:
    print(f"{'cells':>5} {'sums':>7} {'targets':>7} {'sets':>5}  {'band':>8} {'targets':>7} {'sets':>5}")
    for row in target_space_report():
        band = "-" if row["band"] is None else f"{row['band'][0]}-{row['band'][1]}"
        print(
            f"{row['fillable']:>5} {row['min_sum']:>3}-{row['max_sum']:<3} "
            f"{row['reachable_targets']:>7} {row['combinations']:>5}  "
            f"{band:>8} {row['band_targets']:>7} {row['band_combinations']:>5}"
        )
    exclusive = target_ranges_are_exclusive()
    print(f"Target bands exclusive: {'yes' if exclusive else 'NO'}")
    return 0 if exclusive else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="orbital-shift", description="Generate and check Orbital Shift puzzles")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...)")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_output_options(p):
        p.add_argument("--solution", action="store_true", help="Include the solved layout and digits")
        p.add_argument("--output", "-o", help="Write JSON to this file instead of stdout")

    p = sub.add_parser("daily", help="Daily challenge for a date (YYYY-MM-DD)")
    p.add_argument("date")
    add_output_options(p)
    p.set_defaults(func=cmd_daily)

    p = sub.add_parser("free", help="Free-play puzzle")
    p.add_argument("--difficulty", "-d", default="medium", choices=[d.value for d in Difficulty])
    p.add_argument("--seed", type=int, help="Reproduce a specific puzzle")
    add_output_options(p)
    p.set_defaults(func=cmd_free)

    p = sub.add_parser("tutorial", help="Tutorial step puzzle")
    p.add_argument("step", type=int)
    add_output_options(p)
    p.set_defaults(func=cmd_tutorial)

    p = sub.add_parser("verify", help="Validate a --solution export")
    p.add_argument("file")
    p.set_defaults(func=cmd_verify)

    p = sub.add_parser("analyze", help="Show the digit-sum target space")
    p.set_defaults(func=cmd_analyze)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    try:
        return args.func(args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
