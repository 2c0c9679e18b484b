import json
import logging
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from playwright.async_api import Error as PlaywrightError

from diagnostics import DiagnosticContext, DiagnosticOptions, capture_on_failure
from diagnostics.masking import mask_pii
from diagnostics.naming import slugify
from diagnostics.storage import enforce_limit, list_artifacts
from form_driver.errors import InputNotFoundError


async def _write_screenshot(path: str, full_page: bool = False) -> bytes:
    Path(path).write_bytes(b"\x89PNG")
    return b"\x89PNG"


def _page(html: str = "<html><body>Agent: agent@example.com, 0400 123 456</body></html>") -> AsyncMock:
    page = AsyncMock()
    page.content = AsyncMock(return_value=html)
    page.screenshot = AsyncMock(side_effect=_write_screenshot)
    return page


@pytest.mark.asyncio
async def test_capture_basic_artifacts(tmp_path: Path):
    options = DiagnosticOptions(enable_on_failure=True, output_dir=tmp_path)
    dctx = DiagnosticContext(
        step="agent_email",
        action="force_fill",
        error=InputNotFoundError("#input_1_593"),
        url="https://enrol.example.com/",
    )

    out_dir = await capture_on_failure(_page(), options, dctx)

    assert out_dir is not None
    assert out_dir.parent == tmp_path
    assert out_dir.name.endswith("_agent_email_InputNotFoundError")
    assert (out_dir / "screenshot.png").exists()

    html = (out_dir / "page.html").read_text(encoding="utf-8")
    assert "agent@example.com" not in html
    assert "0400 123 456" not in html
    assert "***" in html

    summary = json.loads((out_dir / "error.json").read_text(encoding="utf-8"))
    assert summary["step"] == "agent_email"
    assert summary["action"] == "force_fill"
    assert summary["error_type"] == "InputNotFoundError"
    assert summary["url"] == "https://enrol.example.com/"


@pytest.mark.asyncio
async def test_capture_disabled(tmp_path: Path):
    page = _page()
    options = DiagnosticOptions(enable_on_failure=False, output_dir=tmp_path)
    dctx = DiagnosticContext(step="x", action="fill", error=None)

    assert await capture_on_failure(page, options, dctx) is None
    page.screenshot.assert_not_called()
    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_capture_survives_closed_page(tmp_path: Path):
    page = _page()
    page.screenshot.side_effect = PlaywrightError("Target page, context or browser has been closed")
    page.content.side_effect = PlaywrightError("Target page, context or browser has been closed")
    options = DiagnosticOptions(enable_on_failure=True, output_dir=tmp_path)
    dctx = DiagnosticContext(step="agency_phone", action="fill", error=TimeoutError("late"))

    out_dir = await capture_on_failure(page, options, dctx)

    assert (out_dir / "error.json").exists()
    assert not (out_dir / "page.html").exists()


@pytest.mark.asyncio
async def test_capture_without_page_writes_summary_only(tmp_path: Path):
    options = DiagnosticOptions(enable_on_failure=True, output_dir=tmp_path)
    dctx = DiagnosticContext(step="s", action="click", error=None, extra={"attempt": 2})

    out_dir = await capture_on_failure(None, options, dctx)

    summary = json.loads((out_dir / "error.json").read_text(encoding="utf-8"))
    assert summary["error_type"] == "UnknownError"
    assert summary["attempt"] == 2
    assert [p.name for p in out_dir.iterdir()] == ["error.json"]


def test_enforce_limit_drops_oldest(tmp_path: Path):
    for name in ["20250101_000000_a", "20250102_000000_b", "20250103_000000_c"]:
        (tmp_path / name).mkdir()

    enforce_limit(tmp_path, 2)

    assert [p.name for p in list_artifacts(tmp_path)] == ["20250102_000000_b", "20250103_000000_c"]


def test_mask_pii_ignores_invalid_pattern():
    assert mask_pii("ID 12345", [r"\d{5}", "("]) == "ID ***"


def test_slugify():
    assert slugify("Do you have an Agent?") == "Do_you_have_an_Agent"
    assert slugify("???") == "step"


@pytest.mark.asyncio
async def test_unwritable_output_dir_is_logged_not_raised(tmp_path: Path, caplog):
    not_a_dir = tmp_path / "diagnostics"
    not_a_dir.write_text("occupied", encoding="utf-8")
    options = DiagnosticOptions(enable_on_failure=True, output_dir=not_a_dir)
    dctx = DiagnosticContext(step="No such legend", action="select_option", error=LookupError("x"))

    with caplog.at_level(logging.WARNING, logger="diagnostics.capture"):
        out_dir = await capture_on_failure(_page(), options, dctx)

    assert out_dir is None
    assert any("Could not write diagnostics" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_screenshot_not_invented_when_page_writes_nothing(tmp_path: Path):
    page = _page()
    page.screenshot = AsyncMock()
    options = DiagnosticOptions(enable_on_failure=True, output_dir=tmp_path)
    dctx = DiagnosticContext(step="s", action="fill", error=None)

    out_dir = await capture_on_failure(page, options, dctx)

    page.screenshot.assert_awaited_once()
    assert not (out_dir / "screenshot.png").exists()


@pytest.mark.parametrize(
    "text",
    [
        '<script>window.gf_timestamp = 1697712345678; var id = "20261019175850";</script>',
        "<span>Course starts 2026-10-19</span>",
        '<input name="input_1_386_3" value="">',
        "<p>Version 10.4.12.1</p>",
    ],
)
def test_mask_pii_keeps_ids_and_timestamps(text):
    assert mask_pii(text, []) == text


@pytest.mark.parametrize(
    "phone",
    ["0400 123 456", "03-0000-0000", "+61 7 5555 1234", "+61400123456", "(07) 5555 1234"],
)
def test_mask_pii_masks_phone_numbers(phone):
    assert mask_pii(f"<td>Agency phone: {phone}</td>", []) == "<td>Agency phone: ***</td>"
