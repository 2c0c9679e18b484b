import os
import sys
from pathlib import Path

import pytest

# Make the project root importable when pytest is run from anywhere
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from form_driver import MemoryDocument, WaitPolicy

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(filename: str) -> str:
    return (FIXTURES_DIR / filename).read_text(encoding="utf-8")


@pytest.fixture
def enrolment_html() -> str:
    """Gravity Forms style enrolment page used across the test-suite."""
    return load_fixture("enrolment_form.html")


@pytest.fixture
def document(enrolment_html: str) -> MemoryDocument:
    """Fresh in-memory copy of the enrolment page."""
    return MemoryDocument.from_html(enrolment_html)


@pytest.fixture
def fast_policy() -> WaitPolicy:
    """Short bound so timeouts stay quick in tests."""
    return WaitPolicy(timeout_ms=300, poll_interval_ms=10)
