from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, model_validator

WaitUntil = Literal["load", "domcontentloaded", "networkidle", "commit"]

StepAction = Literal[
    "select_dropdown",
    "select_option",
    "fill",
    "force_fill",
    "ensure_revealed",
    "wait_visible",
    "click",
]

# Fields each action cannot run without
_REQUIRED_FIELDS = {
    "select_dropdown": ("field", "option"),
    "select_option": ("field", "option"),
    "fill": ("selector", "value"),
    "force_fill": ("selector", "value"),
    "ensure_revealed": ("selector",),
    "wait_visible": ("selector",),
    "click": ("selector",),
}


class FillStep(BaseModel):
    """One declarative operation of a fill plan."""

    action: StepAction
    name: Optional[str] = None
    field: Optional[str] = None  # legend or label text
    option: Optional[str] = None  # option text or value
    selector: Optional[str] = None
    value: Optional[str] = None
    input_selector: Optional[str] = None  # inner input for ensure_revealed
    timeout_ms: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_required_fields(self) -> "FillStep":
        missing = [name for name in _REQUIRED_FIELDS[self.action] if getattr(self, name) is None]
        if missing:
            raise ValueError(f"Action '{self.action}' requires: {', '.join(missing)}")
        return self

    @property
    def label(self) -> str:
        """Name used in logs and diagnostics."""
        return self.name or self.field or self.selector or self.action


class FillPlan(BaseModel):
    """Ordered steps to apply to one form page."""

    url: Optional[str] = None
    wait_until: Optional[WaitUntil] = None  # overrides the browser default for this page
    steps: List[FillStep] = []

    @classmethod
    def from_yaml(cls, path: Path) -> "FillPlan":
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)


@dataclass
class StepOutcome:
    """Result of one plan step."""

    step: FillStep
    succeeded: bool
    error: Optional[str] = None
    error_type: Optional[str] = None
    details: Optional[str] = None


@dataclass
class PlanReport:
    """Result of running a fill plan."""

    outcomes: List[StepOutcome] = dataclass_field(default_factory=list)

    @property
    def succeeded(self) -> List[StepOutcome]:
        return [outcome for outcome in self.outcomes if outcome.succeeded]

    @property
    def failed(self) -> List[StepOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]

    @property
    def completed(self) -> bool:
        return not self.failed
