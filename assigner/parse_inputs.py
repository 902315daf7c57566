"""
Parse inputs for the AttendeeAssigner — reads the JSON input document.
The document holds two ordered lists, attendees and timeslots; their order
becomes the row/column order used everywhere else.
"""

import json
from collections import Counter
from pathlib import Path
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from .errors import MalformedInput
from .models import AssignmentConfig, AssignmentContext, Attendee, Timeslot
from .schemas import AssignmentDocument


def _format_validation_error(err: ValidationError) -> str:
    """One line per failing field, e.g. 'timeslots.0.capacity: Input should be ...'."""
    lines = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e["loc"]) or "<document>"
        lines.append(f"{loc}: {e['msg']}")
    return "; ".join(lines)


def _check_unique(kind: str, names: List[str]) -> None:
    dupes = sorted(n for n, c in Counter(names).items() if c > 1)
    if dupes:
        raise MalformedInput(f"duplicate {kind} name(s): {', '.join(dupes)}")


def parse_document(doc: Any) -> Tuple[List[Attendee], List[Timeslot]]:
    """
    Validate a decoded document and build the attendee and timeslot records.
    Raises MalformedInput on missing fields, wrong types or duplicate names.
    """
    if not isinstance(doc, dict):
        raise MalformedInput(
            f"input document must be an object, got {type(doc).__name__}")
    try:
        parsed = AssignmentDocument.model_validate(doc)
    except ValidationError as e:
        raise MalformedInput(_format_validation_error(e)) from e

    attendees = [Attendee(name=a.name) for a in parsed.attendees]
    timeslots = [Timeslot(name=t.name, capacity=t.capacity) for t in parsed.timeslots]

    _check_unique("attendee", [a.name for a in attendees])
    _check_unique("timeslot", [t.name for t in timeslots])
    return attendees, timeslots


def parse_json(path: str) -> Tuple[List[Attendee], List[Timeslot]]:
    """Read a JSON input file and parse it."""
    p = Path(path)
    try:
        with p.open(encoding="utf-8") as f:
            doc = json.load(f)
    except json.JSONDecodeError as e:
        raise MalformedInput(f"{p}: invalid JSON ({e.msg} at line {e.lineno})") from e
    except UnicodeDecodeError as e:
        raise MalformedInput(f"{p}: not UTF-8 text ({e.reason} at byte {e.start})") from e
    return parse_document(doc)


def load_context(path: str, config: Optional[AssignmentConfig] = None) -> AssignmentContext:
    """Parse the input file into the full AssignmentContext."""
    attendees, timeslots = parse_json(path)
    return AssignmentContext(
        attendees=attendees,
        timeslots=timeslots,
        config=config if config is not None else AssignmentConfig(),
    )
