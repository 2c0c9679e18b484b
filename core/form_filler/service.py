import time
from typing import Optional

from playwright.async_api import Error as PlaywrightError

from core.logger import bind_context, get_structured_logger
from form_driver import (
    DocumentAdapter,
    FormDriverError,
    WaitPolicy,
    ensure_revealed,
    fill_visible_input,
    force_set_value,
    select_dropdown,
    select_option,
    wait_until_visible,
)

from .base import FailureHook
from .models import FillPlan, FillStep, PlanReport, StepOutcome

# Errors that are scoped to one field: logged, recorded, and never abort the plan
FIELD_ERRORS = (FormDriverError, PlaywrightError)


class FillPlanRunner:
    """
    Applies a fill plan to one page, one step at a time.

    Each step is isolated: a failure is logged, recorded in the report and
    handed to the optional failure hook, then the next step runs.
    """

    def __init__(
        self,
        adapter: DocumentAdapter,
        default_policy: Optional[WaitPolicy] = None,
        on_failure: Optional[FailureHook] = None,
    ):
        """
        Args:
            adapter: Document the plan is applied to
            default_policy: Wait bound for steps without their own ``timeout_ms``
            on_failure: Awaitable called with (step, error) after a step fails
        """
        self._adapter = adapter
        self._default_policy = default_policy or WaitPolicy()
        self._on_failure = on_failure
        self._logger = get_structured_logger(__name__)

    def _policy_for(self, step: FillStep) -> WaitPolicy:
        if step.timeout_ms is None:
            return self._default_policy
        return WaitPolicy(
            timeout_ms=step.timeout_ms,
            poll_interval_ms=self._default_policy.poll_interval_ms,
        )

    async def run_step(self, step: FillStep) -> Optional[str]:
        """Executes one step and returns optional details for the report."""
        adapter = self._adapter
        policy = self._policy_for(step)

        if step.action == "select_dropdown":
            await select_dropdown(adapter, step.field, step.option, policy)
        elif step.action == "select_option":
            await select_option(adapter, step.field, step.option, policy)
        elif step.action == "fill":
            await fill_visible_input(adapter, step.selector, step.value, policy)
        elif step.action == "force_fill":
            diagnostics = await force_set_value(adapter, step.selector, step.value, policy)
            return diagnostics.summary()
        elif step.action == "ensure_revealed":
            await ensure_revealed(adapter, step.selector, policy, input_selector=step.input_selector)
        elif step.action == "wait_visible":
            await wait_until_visible(adapter, step.selector, policy)
        elif step.action == "click":
            element = await wait_until_visible(adapter, step.selector, policy)
            await adapter.click(element)
        return None

    async def run(self, plan: FillPlan) -> PlanReport:
        report = PlanReport()

        for index, step in enumerate(plan.steps, start=1):
            step_logger = bind_context(
                self._logger, step=step.label, action=step.action, index=index
            )
            started = time.monotonic()
            try:
                details = await self.run_step(step)
            except FIELD_ERRORS as e:
                step_logger.warning(
                    "step_failed",
                    error=str(e),
                    error_type=type(e).__name__,
                    duration_ms=round((time.monotonic() - started) * 1000),
                )
                report.outcomes.append(
                    StepOutcome(step=step, succeeded=False, error=str(e), error_type=type(e).__name__)
                )
                if self._on_failure is not None:
                    await self._on_failure(step, e)
                continue

            step_logger.info(
                "step_succeeded",
                duration_ms=round((time.monotonic() - started) * 1000),
                details=details,
            )
            report.outcomes.append(StepOutcome(step=step, succeeded=True, details=details))

        self._logger.info(
            "plan_finished",
            total=len(report.outcomes),
            succeeded=len(report.succeeded),
            failed=len(report.failed),
        )
        return report
