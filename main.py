import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from playwright.async_api import Page, async_playwright

# It's important to set up logging before other imports that might use it.
from core.logger import setup_logging
from config import AppConfig, config

setup_logging()
logger = logging.getLogger(__name__)


def build_failure_hook(page: Page, app_config: AppConfig):
    """Returns the plan runner hook that captures diagnostics for a failed step."""
    from diagnostics import DiagnosticContext, DiagnosticOptions, capture_on_failure

    options = DiagnosticOptions(
        enable_on_failure=app_config.diagnostics.enable_on_failure,
        capture_screenshot=app_config.diagnostics.capture_screenshot,
        capture_html=app_config.diagnostics.capture_html,
        output_dir=app_config.diagnostics.output_dir,
        max_artifacts_per_run=app_config.diagnostics.max_artifacts_per_run,
        pii_mask_patterns=app_config.diagnostics.pii_mask_patterns,
    )

    async def on_failure(step, error: BaseException) -> None:
        out_dir = await capture_on_failure(
            page,
            options,
            DiagnosticContext(step=step.label, action=step.action, error=error, url=page.url),
        )
        if out_dir:
            logger.info(f"Diagnostics for '{step.label}' saved to {out_dir}")

    return on_failure


async def run_plan(page: Page, app_config: AppConfig, plan_path: Path):
    """Loads the plan, opens its page and applies it."""
    from core.form_filler import FillPlan, FillPlanRunner
    from form_driver import PlaywrightDocumentAdapter, WaitPolicy

    plan = FillPlan.from_yaml(plan_path)
    logger.info(f"Loaded plan '{plan_path}' with {len(plan.steps)} steps.")

    if plan.url:
        await page.goto(
            plan.url,
            wait_until=plan.wait_until or app_config.browser.wait_until,
            timeout=app_config.browser.navigation_timeout_ms,
        )

    runner = FillPlanRunner(
        adapter=PlaywrightDocumentAdapter(page, form_id=app_config.gravity_forms.form_id),
        default_policy=WaitPolicy(
            timeout_ms=app_config.wait.timeout_ms,
            poll_interval_ms=app_config.wait.poll_interval_ms,
        ),
        on_failure=build_failure_hook(page, app_config),
    )
    report = await runner.run(plan)

    for outcome in report.failed:
        logger.warning(f"Step '{outcome.step.label}' failed: {outcome.error}")
    logger.info(
        f"Plan finished: {len(report.succeeded)} succeeded, {len(report.failed)} failed."
    )
    return report


# --- Main Orchestrator ---
async def main(plan_path: Optional[Path] = None):
    """Launches the browser, applies the fill plan and leaves the page for review."""
    plan_path = plan_path or config.plan.plan_path
    if not plan_path.exists():
        logger.error(f"Plan file not found: {plan_path}")
        return

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=config.browser.headless)
        try:
            page = await browser.new_page()
            await run_plan(page, config, plan_path)

            if config.browser.keep_browser_open and not config.browser.headless:
                logger.info("Leaving the browser open for manual review. Press Ctrl+C to exit.")
                await page.wait_for_event("close", timeout=0)
        finally:
            await browser.close()


def cli():
    """Console entry point: an optional plan path overrides the configured one."""
    asyncio.run(main(Path(sys.argv[1]) if len(sys.argv) > 1 else None))


if __name__ == "__main__":
    cli()
