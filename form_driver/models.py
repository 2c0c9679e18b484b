from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .normalizer import normalize

DEFAULT_TIMEOUT_MS = 60000
DEFAULT_POLL_INTERVAL_MS = 100


@dataclass(frozen=True)
class WaitPolicy:
    """Bound applied to every resolving or waiting operation."""

    timeout_ms: int = DEFAULT_TIMEOUT_MS
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS

    def __post_init__(self):
        if self.timeout_ms < 0:
            raise ValueError("timeout_ms must not be negative")
        if self.poll_interval_ms <= 0:
            raise ValueError("poll_interval_ms must be positive")

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    @property
    def poll_interval_seconds(self) -> float:
        return self.poll_interval_ms / 1000.0


@dataclass(frozen=True)
class FieldDescriptor:
    """Legend or label text; a candidate matches when it contains the text."""

    text: str

    @property
    def normalized(self) -> str:
        return normalize(self.text)

    def matches(self, candidate: Optional[str]) -> bool:
        return self.normalized in normalize(candidate)


@dataclass(frozen=True)
class OptionDescriptor:
    """Option label text or value; a candidate matches only on equality."""

    text: str

    @property
    def normalized(self) -> str:
        return normalize(self.text)

    def matches(self, candidate: Optional[str]) -> bool:
        return candidate is not None and normalize(candidate) == self.normalized


@dataclass(frozen=True)
class VisibilityState:
    """Visibility of one element, computed fresh on every read."""

    display: str
    visibility: str
    has_layout: bool

    @property
    def visible(self) -> bool:
        return self.display != "none" and self.visibility != "hidden" and self.has_layout


@dataclass(frozen=True)
class ForceDiagnostics:
    """Snapshot returned by a forced value assignment."""

    selector: str
    before_value: Optional[str]
    after_value: Optional[str]
    display: str
    visibility: str
    has_layout: bool

    @property
    def visible(self) -> bool:
        return VisibilityState(self.display, self.visibility, self.has_layout).visible

    def summary(self) -> str:
        return (
            f'{self.selector}: before="{self.before_value}" after="{self.after_value}" '
            f"display={self.display} visibility={self.visibility} "
            f"offsetParent={self.has_layout}"
        )
