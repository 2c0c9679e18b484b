import logging
from typing import Optional

from .adapters.base import DocumentAdapter, Handle
from .models import VisibilityState, WaitPolicy

logger = logging.getLogger(__name__)


async def read_visibility(adapter: DocumentAdapter, element: Handle) -> VisibilityState:
    """Computes the element's visibility from its computed style and layout."""
    style = await adapter.computed_style(element)
    return VisibilityState(
        display=style.get("display", ""),
        visibility=style.get("visibility", ""),
        has_layout=await adapter.has_layout(element),
    )


async def is_visible(adapter: DocumentAdapter, element: Handle) -> bool:
    return (await read_visibility(adapter, element)).visible


async def wait_until_visible(
    adapter: DocumentAdapter,
    selector: str,
    policy: Optional[WaitPolicy] = None,
) -> Handle:
    """
    Waits until the first element matching ``selector`` exists and is visible:
    not ``display: none``, not ``visibility: hidden`` and laid out.

    Returns:
        The visible element.

    Raises:
        WaitTimeoutError: If the element is not visible within ``policy.timeout_ms``.
    """
    policy = policy or WaitPolicy()

    async def _visible_element() -> Optional[Handle]:
        element = await adapter.query(selector)
        if element is None or not await is_visible(adapter, element):
            return None
        return element

    element = await adapter.wait_for(
        _visible_element, policy, description=f"'{selector}' to become visible"
    )
    logger.debug(f"Element '{selector}' is visible.")
    return element
