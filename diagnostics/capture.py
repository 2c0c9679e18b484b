from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from playwright.async_api import Page

from .basic import capture_basic
from .naming import build_artifact_dir
from .storage import ensure_dir, enforce_limit
from .types import DiagnosticContext, DiagnosticOptions

logger = logging.getLogger(__name__)


async def capture_on_failure(
    page: Optional[Page],
    options: DiagnosticOptions,
    dctx: DiagnosticContext,
) -> Optional[Path]:
    """
    Saves artifacts for a failed step and returns their directory.

    Returns None when capture is disabled or the artifacts could not be
    written; capture problems are logged and never raised to the caller.
    """
    if not options.enable_on_failure:
        return None

    error_key = type(dctx.error).__name__ if dctx.error else "UnknownError"
    base = Path(options.output_dir)
    out_dir = build_artifact_dir(base, dctx.step, error_key)
    summary = {
        "step": dctx.step,
        "action": dctx.action,
        "url": dctx.url,
        "error_type": error_key,
        "error": str(dctx.error) if dctx.error else None,
        **dctx.extra,
    }

    try:
        ensure_dir(out_dir)
        await capture_basic(
            page,
            out_dir,
            options.capture_html,
            options.capture_screenshot,
            options.pii_mask_patterns,
        )
        (out_dir / "error.json").write_text(
            json.dumps(summary, ensure_ascii=False, indent=2, default=str), encoding="utf-8"
        )
        # Oldest artifacts go first once the per-run limit is exceeded
        enforce_limit(base, options.max_artifacts_per_run)
    except OSError as e:
        logger.warning(f"Could not write diagnostics for step '{dctx.step}' to {base}: {e}")
        return None
    return out_dir
