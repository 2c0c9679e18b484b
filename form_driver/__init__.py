"""
Resilient form driver: locates Gravity Forms fields by their visible text
and forces conditionally hidden fields into an interactable state.
"""

from .adapters import DocumentAdapter, MemoryDocument, PlaywrightDocumentAdapter
from .container import resolve_container
from .dropdown import select_dropdown
from .errors import (
    ContainerNotFoundError,
    FormDriverError,
    InputNotFoundError,
    LabelNotFoundError,
    LegendNotFoundError,
    OptionNotFoundError,
    SelectNotFoundError,
    WaitTimeoutError,
)
from .fill_text import fill_visible_input
from .forced_value import force_set_value
from .legend_option import select_option
from .models import FieldDescriptor, ForceDiagnostics, OptionDescriptor, VisibilityState, WaitPolicy
from .normalizer import normalize
from .reveal import ensure_revealed
from .visibility import wait_until_visible

__all__ = [
    "DocumentAdapter",
    "MemoryDocument",
    "PlaywrightDocumentAdapter",
    "normalize",
    "resolve_container",
    "select_option",
    "select_dropdown",
    "wait_until_visible",
    "force_set_value",
    "ensure_revealed",
    "fill_visible_input",
    "WaitPolicy",
    "FieldDescriptor",
    "OptionDescriptor",
    "VisibilityState",
    "ForceDiagnostics",
    "FormDriverError",
    "LegendNotFoundError",
    "LabelNotFoundError",
    "ContainerNotFoundError",
    "OptionNotFoundError",
    "SelectNotFoundError",
    "InputNotFoundError",
    "WaitTimeoutError",
]
