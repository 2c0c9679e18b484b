from pathlib import Path
from typing import List, Literal

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class LoggingConfig(BaseSettings):
    """Configuration for logging."""

    log_level: str = "DEBUG"  # DEBUG, INFO, WARNING, ERROR
    log_file_path: Path = Path("./logs/form_driver.log")


class WaitConfig(BaseSettings):
    """Bounds applied to every resolving and waiting operation."""

    timeout_ms: int = 60000
    poll_interval_ms: int = 100

    @field_validator("timeout_ms")
    @classmethod
    def timeout_not_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("timeout_ms must not be negative")
        return v

    @field_validator("poll_interval_ms")
    @classmethod
    def poll_interval_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("poll_interval_ms must be positive")
        return v


class GravityFormsConfig(BaseSettings):
    """Settings of the host Gravity Forms deployment."""

    form_id: int = 1  # passed to gform.applyConditions


class BrowserConfig(BaseSettings):
    """Browser settings for the command line runner."""

    headless: bool = False
    keep_browser_open: bool = True  # leave the page up for manual review
    navigation_timeout_ms: int = 0  # 0 disables the timeout
    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = "domcontentloaded"


class PlanConfig(BaseSettings):
    """Location of the declarative fill plan."""

    plan_path: Path = Path("config/enrolment_plan.yaml")


class DiagnosticsConfig(BaseSettings):
    """Diagnostics collection settings for failed plan steps."""

    enable_on_failure: bool = False
    capture_screenshot: bool = True
    capture_html: bool = True
    output_dir: Path = Path("./logs/diagnostics")
    max_artifacts_per_run: int = 10
    pii_mask_patterns: List[str] = []


class AppConfig(BaseSettings):
    """Root configuration class for the application."""

    logging: LoggingConfig = LoggingConfig()
    wait: WaitConfig = WaitConfig()
    gravity_forms: GravityFormsConfig = GravityFormsConfig()
    browser: BrowserConfig = BrowserConfig()
    plan: PlanConfig = PlanConfig()
    diagnostics: DiagnosticsConfig = DiagnosticsConfig()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Instantiate the main config object
config = AppConfig()
