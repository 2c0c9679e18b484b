import logging
from typing import Dict, List, Optional

from playwright.async_api import ElementHandle, Page

from .base import DocumentAdapter

logger = logging.getLogger(__name__)


class PlaywrightDocumentAdapter(DocumentAdapter):
    """
    DocumentAdapter over a live Playwright page.

    Handles are ``ElementHandle`` objects; every call is a fresh round trip
    to the page, so nothing survives a re-render between calls.
    """

    def __init__(self, page: Page, form_id: int = 1):
        """
        Args:
            page: Playwright Page holding the form
            form_id: Gravity Forms form id passed to ``gform.applyConditions``
        """
        self.page = page
        self.form_id = form_id

    async def query_all(self, selector: str, root: Optional[ElementHandle] = None) -> List[ElementHandle]:
        container = root if root is not None else self.page
        return await container.query_selector_all(selector)

    async def query(self, selector: str, root: Optional[ElementHandle] = None) -> Optional[ElementHandle]:
        container = root if root is not None else self.page
        return await container.query_selector(selector)

    async def get_by_id(self, element_id: str) -> Optional[ElementHandle]:
        handle = await self.page.evaluate_handle("(id) => document.getElementById(id)", element_id)
        return handle.as_element()

    async def closest(self, element: ElementHandle, selector: str) -> Optional[ElementHandle]:
        handle = await element.evaluate_handle("(el, sel) => el.closest(sel)", selector)
        return handle.as_element()

    async def parent(self, element: ElementHandle) -> Optional[ElementHandle]:
        handle = await element.evaluate_handle("(el) => el.parentElement")
        return handle.as_element()

    async def text_content(self, element: ElementHandle) -> str:
        return (await element.text_content()) or ""

    async def tag_name(self, element: ElementHandle) -> str:
        return await element.evaluate("(el) => el.tagName.toLowerCase()")

    async def get_attribute(self, element: ElementHandle, name: str) -> Optional[str]:
        return await element.get_attribute(name)

    async def get_value(self, element: ElementHandle) -> Optional[str]:
        return await element.evaluate("(el) => el.value")

    async def has_class(self, element: ElementHandle, class_name: str) -> bool:
        return await element.evaluate(
            "(el, cls) => !!(el.classList && el.classList.contains(cls))", class_name
        )

    async def computed_style(self, element: ElementHandle) -> Dict[str, str]:
        return await element.evaluate(
            """(el) => {
                const style = getComputedStyle(el);
                return { display: style.display, visibility: style.visibility };
            }"""
        )

    async def has_layout(self, element: ElementHandle) -> bool:
        return await element.evaluate("(el) => el.offsetParent !== null")

    async def set_value(self, element: ElementHandle, value: str) -> None:
        await element.evaluate("(el, value) => { el.value = value; }", value)

    async def set_disabled(self, element: ElementHandle, disabled: bool) -> None:
        await element.evaluate("(el, disabled) => { el.disabled = disabled; }", disabled)

    async def remove_attribute(self, element: ElementHandle, name: str) -> None:
        await element.evaluate("(el, name) => el.removeAttribute(name)", name)

    async def remove_class(self, element: ElementHandle, class_name: str) -> None:
        await element.evaluate("(el, cls) => { el.classList?.remove(cls); }", class_name)

    async def remove_style(self, element: ElementHandle, prop: str) -> None:
        await element.evaluate("(el, prop) => { el.style?.removeProperty(prop); }", prop)

    async def set_style(self, element: ElementHandle, prop: str, value: str, important: bool = False) -> None:
        await element.evaluate(
            "(el, [prop, value, priority]) => { el.style?.setProperty(prop, value, priority); }",
            [prop, value, "important" if important else ""],
        )

    async def dispatch_event(self, element: ElementHandle, event_type: str) -> None:
        # Playwright dispatches composed, cancelable, bubbling events by default
        await element.dispatch_event(event_type)

    async def click(self, element: ElementHandle) -> None:
        # DOM click: themed radios are often covered by their label, which
        # fails Playwright's actionability checks
        await element.evaluate("(el) => el.click()")

    async def fill(self, element: ElementHandle, value: str) -> None:
        await element.fill(value)

    async def supports_reapply_conditions(self) -> bool:
        return await self.page.evaluate(
            "() => !!(window.gform && typeof window.gform.applyConditions === 'function')"
        )

    async def reapply_conditions(self) -> None:
        logger.debug(f"Calling gform.applyConditions({self.form_id}, true)")
        await self.page.evaluate(
            "(formId) => window.gform.applyConditions(formId, true)", self.form_id
        )
