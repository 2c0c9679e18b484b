from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from .masking import mask_pii

logger = logging.getLogger(__name__)


async def capture_basic(
    page: Optional[Page],
    out_dir: Path,
    capture_html: bool,
    capture_screenshot: bool,
    pii_patterns: list[str],
) -> None:
    if page is None:
        return
    if capture_screenshot:
        try:
            await page.screenshot(path=str(out_dir / "screenshot.png"), full_page=True)
        except PlaywrightError as e:
            logger.warning(f"Screenshot capture failed: {e}")
    if capture_html:
        try:
            html = await page.content()
            html = mask_pii(html, pii_patterns)
            (out_dir / "page.html").write_text(html, encoding="utf-8")
        except PlaywrightError as e:
            logger.warning(f"HTML capture failed: {e}")
