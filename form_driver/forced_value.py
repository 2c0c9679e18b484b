"""
ForcedValueInjector: last-resort assignment for fields the host form keeps hidden.

Use only when cooperative visibility cannot be reached in time, e.g. when
Gravity Forms conditional logic lags behind the field it depends on. It
bypasses the framework's own visibility rules in exchange for determinism.
"""

import logging
from typing import Optional

from core.selectors import HIDDEN_CLASS, HIDING_STYLE_PROPERTIES, selectors

from .adapters.base import DocumentAdapter, Handle
from .errors import InputNotFoundError, WaitTimeoutError
from .models import ForceDiagnostics, WaitPolicy
from .visibility import read_visibility

logger = logging.getLogger(__name__)


async def _strip_hiding(adapter: DocumentAdapter, element: Handle) -> None:
    await adapter.remove_class(element, HIDDEN_CLASS)
    for prop in HIDING_STYLE_PROPERTIES:
        await adapter.remove_style(element, prop)


async def force_set_value(
    adapter: DocumentAdapter,
    selector: str,
    value: str,
    policy: Optional[WaitPolicy] = None,
) -> ForceDiagnostics:
    """
    Assigns ``value`` to the element matching ``selector`` regardless of visibility.

    Steps:
    1. Strip the hidden class and inline display/visibility/opacity from the
       element and each of its ancestors.
    2. Force the enclosing field wrapper to ``display: block !important``.
    3. Clear ``disabled`` and ``readonly``, assign the value, then dispatch
       ``input`` and ``change``.

    Only the element, its ancestor chain and its field wrapper are touched.

    Args:
        adapter: Document to act on
        selector: CSS selector of the target input
        value: Value to assign
        policy: When given, first wait for the element to be attached

    Returns:
        ForceDiagnostics with before/after values and final visibility.

    Raises:
        InputNotFoundError: If no element matches ``selector``.
    """
    if policy is not None:
        async def _attached() -> Optional[Handle]:
            return await adapter.query(selector)

        try:
            await adapter.wait_for(_attached, policy, description=f"'{selector}' to be attached")
        except WaitTimeoutError as e:
            raise InputNotFoundError(selector) from e

    element = await adapter.query(selector)
    if element is None:
        raise InputNotFoundError(selector)

    current = element
    while current is not None:
        await _strip_hiding(adapter, current)
        current = await adapter.parent(current)

    field_group = await adapter.closest(element, selectors["field_group"])
    if field_group is not None:
        await adapter.set_style(field_group, "display", "block", important=True)
        await adapter.remove_style(field_group, "visibility")

    before_value = await adapter.get_value(element)
    await adapter.set_disabled(element, False)
    await adapter.remove_attribute(element, "readonly")
    await adapter.set_value(element, value)
    await adapter.dispatch_event(element, "input")
    await adapter.dispatch_event(element, "change")

    state = await read_visibility(adapter, element)
    diagnostics = ForceDiagnostics(
        selector=selector,
        before_value=before_value,
        after_value=await adapter.get_value(element),
        display=state.display,
        visibility=state.visibility,
        has_layout=state.has_layout,
    )
    logger.info(f"force_set_value {diagnostics.summary()}")
    if not diagnostics.visible:
        logger.warning(f"Forced field '{selector}' is still not visible after assignment.")
    return diagnostics
