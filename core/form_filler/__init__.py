from .base import FailureHook
from .models import FillPlan, FillStep, PlanReport, StepOutcome
from .service import FillPlanRunner

__all__ = [
    "FailureHook",
    "FillPlan",
    "FillStep",
    "FillPlanRunner",
    "PlanReport",
    "StepOutcome",
]
