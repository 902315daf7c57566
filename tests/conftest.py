"""
Pytest configuration and shared fixtures.
"""
import json
import os
import sys

import pytest

# Ensure the project root is importable without installation
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from assigner.cpsat_backend import CpSatBackend
from assigner.models import Attendee, Timeslot
from assigner.z3_backend import Z3Backend
from fakes import FakeBackend


BACKEND_FACTORIES = {
    "cpsat": lambda: CpSatBackend(num_workers=1, random_seed=0),
    "z3": lambda: Z3Backend(),
    "fake": lambda: FakeBackend(),
}


@pytest.fixture(params=sorted(BACKEND_FACTORIES))
def backend(request):
    """Every backend, so each property is checked against each engine."""
    return BACKEND_FACTORIES[request.param]()


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def alice_bob():
    return [Attendee("Alice"), Attendee("Bob")]


@pytest.fixture
def two_rooms():
    return [Timeslot("Room A", 1), Timeslot("Room B", 1)]


@pytest.fixture
def write_input(tmp_path):
    """Write a document to a JSON file and return its path."""
    def _write(doc, name="input.json"):
        p = tmp_path / name
        p.write_text(json.dumps(doc), encoding="utf-8")
        return str(p)
    return _write
