from typing import Awaitable, Protocol

from .models import FillStep


class FailureHook(Protocol):
    """Awaitable called by the plan runner after a step failed."""

    def __call__(self, step: FillStep, error: BaseException) -> Awaitable[None]:
        ...
