"""Global pytest fixtures & helpers.

Adds project root to path and provides shared rulers and sample lines so the
test modules measure against the same reference latitude.
"""
from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import List

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from cheap_ruler import CheapRuler, Unit

FIXTURES = Path(__file__).resolve().parent / "fixtures"
REFERENCE_LAT = 32.8351


def load_lines() -> List[List[List[float]]]:
    with (FIXTURES / "lines.json").open("r", encoding="utf-8") as handle:
        return json.load(handle)


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def ruler() -> CheapRuler:
    return CheapRuler.from_latitude(REFERENCE_LAT)


@pytest.fixture
def miles_ruler() -> CheapRuler:
    return CheapRuler.from_latitude(REFERENCE_LAT, Unit.MILES)


@pytest.fixture
def lines() -> List[List[List[float]]]:
    return load_lines()


@pytest.fixture
def points(lines) -> List[List[float]]:
    return [point for line in lines for point in line]
