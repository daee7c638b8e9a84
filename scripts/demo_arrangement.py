# scripts/demo_arrangement.py
"""
Command-line demo for the Classroom Seating Planner.
Loads two roster files (or the bundled sample rosters), applies keep-apart
constraints given as class numbers, optimizes the seating and prints the grid.
"""
import sys
import json
import asyncio
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from backend.app.config import get_settings, setup_logging
from backend.app.core.exceptions import AppError
from backend.app.services.roster import DEMO_GROUP_A, DEMO_GROUP_B
from backend.app.services.seating import ClassroomState, SeatingService
from seating_engine.core.exceptions import SeatingEngineError

logger = logging.getLogger(__name__)


def read_roster(path: Optional[str], fallback: str) -> str:
    if path is None:
        return fallback
    return Path(path).read_text(encoding="utf-8")


def parse_class_numbers(value: str) -> List[int]:
    try:
        return [int(token) for token in value.split(",") if token.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma separated class numbers, got {value!r}")


def render_grid(state: ClassroomState) -> str:
    """Rows from the back of the room to the front, board last."""
    width = 16
    lines = []
    for row in range(state.rows):
        cells = []
        for column in range(state.columns):
            student = state.grid[state.grid.index_of(row, column)]
            label = f"{student.display_class_no}. {student.display_name}" if student else "-"
            cells.append(label[:width].ljust(width))
        lines.append(" | ".join(cells))
    lines.append("=" * len(lines[0]) if lines else "")
    lines.append("BOARD".center(len(lines[0])))
    return "\n".join(lines)


async def run(args: argparse.Namespace) -> int:
    settings = get_settings().model_copy(
        update={
            "DEFAULT_ROWS": args.rows,
            "DEFAULT_COLUMNS": args.columns,
            "ARRANGEMENT_SEED": args.seed,
        }
    )
    service = SeatingService(settings)

    await service.load_roster(
        read_roster(args.group_a, DEMO_GROUP_A), read_roster(args.group_b, DEMO_GROUP_B)
    )
    by_class_no = {s.class_no: s.id for s in service.state.registry}

    for class_numbers in args.separate:
        unknown = [n for n in class_numbers if n not in by_class_no]
        if unknown:
            logger.warning(f"Ignoring unknown class numbers {unknown}")
        await service.add_constraint(
            [by_class_no[n] for n in class_numbers if n in by_class_no],
            label=",".join(str(n) for n in class_numbers),
        )

    before = service.evaluate().violation_count
    outcome = await service.optimize()
    state = outcome.state

    if args.json:
        print(
            json.dumps(
                {
                    "rows": state.rows,
                    "columns": state.columns,
                    "seats": service.export(),
                    "run": outcome.result.to_dict() if outcome.result else None,
                },
                ensure_ascii=False,
                indent=2,
            )
        )
    else:
        print(render_grid(state))
        print(
            f"\nViolations: {before} before, {state.last_score.violation_count} after "
            f"({len(state.constraints)} constraints, {len(state.registry)} students)"
        )
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Classroom seating demo")
    parser.add_argument("--group-a", help="Roster file for group A (default: sample roster)")
    parser.add_argument("--group-b", help="Roster file for group B (default: sample roster)")
    parser.add_argument("--rows", type=int, default=5, help="Rows of seats (clamped)")
    parser.add_argument("--columns", type=int, default=6, help="Seats per row (clamped)")
    parser.add_argument(
        "--separate",
        type=parse_class_numbers,
        action="append",
        default=[],
        help="Class numbers to keep apart, e.g. --separate 1,2,3 (repeatable)",
    )
    parser.add_argument("--seed", type=int, help="Seed for shuffles and restarts")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    args = parser.parse_args()

    setup_logging(get_settings())

    try:
        sys.exit(asyncio.run(run(args)))
    except (AppError, SeatingEngineError) as e:
        logger.error(f"Demo failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
