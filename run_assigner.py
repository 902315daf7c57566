#!/usr/bin/env python3
"""
AttendeeAssigner CLI — assigns attendees to timeslots.

Every attendee has to visit exactly --visits timeslots; no timeslot may hold
more attendees than its capacity.

Usage:
  # Optional: check the counting bounds without solving
  python run_assigner.py dry-run example.json --visits 2

  # Solve and print one line per attendee
  python run_assigner.py solve example.json --visits 1

  # Solve with Z3, list every slot and write a workbook
  python run_assigner.py solve example.json --visits 2 --backend z3 \
      --all-slots --out assignments.xlsx
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from assigner.errors import AssignerError, MalformedInput
from assigner.models import BACKEND_NAMES, UNASSIGNED_LABEL, AssignmentConfig
from assigner.parse_inputs import load_context
from assigner.solver import solve
from assigner.validate import dry_run_feasibility, validate_assignments
from assigner.write_assignments import add_conflicts_sheet, write_assignments


def _config_from_args(args) -> AssignmentConfig:
    return AssignmentConfig(
        visits=args.visits,
        backend=getattr(args, "backend", "cpsat"),
        time_limit_seconds=getattr(args, "time_limit", None),
        random_seed=getattr(args, "seed", None),
        all_slots=getattr(args, "all_slots", False),
    )


def cmd_dry_run(args) -> int:
    """Report obvious infeasibility without solving."""
    ctx = load_context(args.input, _config_from_args(args))
    print(f"  Attendees: {len(ctx.attendees)}")
    print(f"  Timeslots: {len(ctx.timeslots)}")
    print(f"  Visits: {ctx.config.visits}")

    ok, msgs = dry_run_feasibility(ctx)
    if ok:
        print("\nFeasibility: OK")
        return 0
    print("\nFeasibility issues:")
    for m in msgs:
        print(f"  {m}")
    return 1


def cmd_solve(args) -> int:
    """Build the model, solve it and print the assignment."""
    ctx = load_context(args.input, _config_from_args(args))
    assignments, status, conflicts = solve(ctx)

    if assignments is None:
        print(f"No valid assignment found ({status.value})")
        for c in conflicts:
            print(f"  {c}")
        if args.out:
            try:
                add_conflicts_sheet(args.out, conflicts)
            except OSError as e:
                print(f"Cannot write output: {e}", file=sys.stderr)
                return 4
            print(f"\nConflicts written to: {args.out}")
        return 1

    for a in assignments:
        if not a.is_assigned:
            print(f"{a.attendee} -> {UNASSIGNED_LABEL}")
        elif ctx.config.all_slots:
            print(f" {a.attendee} -> {', '.join(a.timeslots)}")
        else:
            print(f" {a.attendee} -> {a.timeslot}")

    valid, violations = validate_assignments(assignments, ctx)
    if not valid:
        # Only reachable with a faulty backend
        print(f"Validation: {len(violations)} issue(s)", file=sys.stderr)
        for v in violations:
            print(f"  {v}", file=sys.stderr)

    if args.out:
        try:
            write_assignments(args.out, assignments, ctx.timeslots)
        except OSError as e:
            print(f"Cannot write output: {e}", file=sys.stderr)
            return 4
        print(f"\nAssignments written to: {args.out}")
    return 0 if valid else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Assigns attendees to timeslots with a constraint solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", help="Command")

    # dry-run
    p_dry = sub.add_parser("dry-run", help="Check counting bounds without solving")
    p_dry.add_argument("input", help="JSON input file path")
    p_dry.add_argument("--visits", type=int, default=1)

    # solve
    p_solve = sub.add_parser("solve", help="Run solver and print the assignment")
    p_solve.add_argument("input", help="JSON input file path")
    p_solve.add_argument("--visits", type=int, default=1,
                         help="Timeslots every attendee has to visit")
    p_solve.add_argument("--backend", choices=BACKEND_NAMES, default="cpsat")
    p_solve.add_argument("--time-limit", type=float, default=None)
    p_solve.add_argument("--seed", type=int, default=None)
    p_solve.add_argument("--all-slots", action="store_true",
                         help="Print every assigned timeslot, not only the first")
    p_solve.add_argument("--out", default=None, help="Write an .xlsx workbook")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1
    if args.visits < 0:
        parser.error("--visits must be non-negative")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    dispatch = {
        "dry-run": cmd_dry_run,
        "solve": cmd_solve,
    }
    try:
        return dispatch[args.command](args)
    except OSError as e:
        print(f"Cannot read input: {e}", file=sys.stderr)
        return 2
    except MalformedInput as e:
        print(f"Malformed input: {e}", file=sys.stderr)
        return 2
    except AssignerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 3


if __name__ == "__main__":
    sys.exit(main())
