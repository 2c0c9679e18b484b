"""
DocumentAdapter: capability interface between the form driver and a live document.

The resolution logic never touches a browser API directly. Everything it
needs from the host document goes through an adapter, so the same logic
runs against Playwright in production and against an in-memory document
in tests.
"""

import abc
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from tenacity import AsyncRetrying, RetryError, retry_if_result, stop_after_delay, wait_fixed

from ..errors import WaitTimeoutError
from ..models import WaitPolicy

T = TypeVar("T")

# Opaque reference into the adapter's document. Never cached across calls.
Handle = Any


class DocumentAdapter(abc.ABC):
    """Abstract base class every document backend implements."""

    # --- Lookup ---

    @abc.abstractmethod
    async def query_all(self, selector: str, root: Optional[Handle] = None) -> List[Handle]:
        """All elements matching ``selector`` in document order."""

    async def query(self, selector: str, root: Optional[Handle] = None) -> Optional[Handle]:
        """First element matching ``selector``, or None."""
        matches = await self.query_all(selector, root=root)
        return matches[0] if matches else None

    @abc.abstractmethod
    async def get_by_id(self, element_id: str) -> Optional[Handle]:
        ...

    @abc.abstractmethod
    async def closest(self, element: Handle, selector: str) -> Optional[Handle]:
        """Nearest inclusive ancestor matching ``selector``."""

    @abc.abstractmethod
    async def parent(self, element: Handle) -> Optional[Handle]:
        ...

    # --- Reads ---

    @abc.abstractmethod
    async def text_content(self, element: Handle) -> str:
        ...

    @abc.abstractmethod
    async def tag_name(self, element: Handle) -> str:
        """Lower-cased tag name."""

    @abc.abstractmethod
    async def get_attribute(self, element: Handle, name: str) -> Optional[str]:
        ...

    @abc.abstractmethod
    async def get_value(self, element: Handle) -> Optional[str]:
        """Current ``value`` property of a control or option."""

    @abc.abstractmethod
    async def has_class(self, element: Handle, class_name: str) -> bool:
        ...

    @abc.abstractmethod
    async def computed_style(self, element: Handle) -> Dict[str, str]:
        """Computed ``display`` and ``visibility`` of the element."""

    @abc.abstractmethod
    async def has_layout(self, element: Handle) -> bool:
        """Whether the element has a rendering parent (``offsetParent``)."""

    # --- Mutations ---

    @abc.abstractmethod
    async def set_value(self, element: Handle, value: str) -> None:
        ...

    @abc.abstractmethod
    async def set_disabled(self, element: Handle, disabled: bool) -> None:
        ...

    @abc.abstractmethod
    async def remove_attribute(self, element: Handle, name: str) -> None:
        ...

    @abc.abstractmethod
    async def remove_class(self, element: Handle, class_name: str) -> None:
        ...

    @abc.abstractmethod
    async def remove_style(self, element: Handle, prop: str) -> None:
        """Drop an inline style property."""

    @abc.abstractmethod
    async def set_style(self, element: Handle, prop: str, value: str, important: bool = False) -> None:
        """Set an inline style property, optionally with ``!important``."""

    # --- Interaction ---

    @abc.abstractmethod
    async def dispatch_event(self, element: Handle, event_type: str) -> None:
        """Dispatch a bubbling synthetic event such as ``input`` or ``change``."""

    @abc.abstractmethod
    async def click(self, element: Handle) -> None:
        """Simulated click that runs the element's activation behaviour and bubbles."""

    @abc.abstractmethod
    async def fill(self, element: Handle, value: str) -> None:
        """Type ``value`` into a text control the way a user would."""

    # --- Host framework capability (optional) ---

    async def supports_reapply_conditions(self) -> bool:
        """Whether the host form framework can re-run its conditional logic."""
        return False

    async def reapply_conditions(self) -> None:
        raise NotImplementedError("This document does not expose a reapply-conditions hook")

    # --- Waiting ---

    async def wait_for(
        self,
        predicate: Callable[[], Awaitable[T]],
        policy: WaitPolicy,
        description: str = "condition",
    ) -> T:
        """
        Poll ``predicate`` until it returns a truthy value and return that value.

        Raises:
            WaitTimeoutError: If the predicate stays falsy for ``policy.timeout_ms``.
        """
        async def _attempt() -> T:
            # tenacity only awaits callables it recognises as coroutine functions
            return await predicate()

        retrying = AsyncRetrying(
            stop=stop_after_delay(policy.timeout_seconds),
            wait=wait_fixed(policy.poll_interval_seconds),
            retry=retry_if_result(lambda result: not result),
        )
        try:
            return await retrying(_attempt)
        except RetryError as e:
            raise WaitTimeoutError(description, policy.timeout_ms) from e
