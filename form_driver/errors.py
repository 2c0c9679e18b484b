from typing import List, Optional


class FormDriverError(Exception):
    """Base class for every field-scoped failure raised by the form driver."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class LegendNotFoundError(FormDriverError):
    """Raised when no legend contains the requested text within the timeout."""

    def __init__(self, legend_text: str, timeout_ms: Optional[int] = None):
        self.legend_text = legend_text
        message = f"Legend not found: {legend_text!r}"
        if timeout_ms is not None:
            message += f" (waited {timeout_ms} ms)"
        super().__init__(message)


class LabelNotFoundError(FormDriverError):
    """Raised when no label contains the requested text within the timeout."""

    def __init__(self, label_text: str, timeout_ms: Optional[int] = None):
        self.label_text = label_text
        message = f"Label not found: {label_text!r}"
        if timeout_ms is not None:
            message += f" (waited {timeout_ms} ms)"
        super().__init__(message)


class ContainerNotFoundError(FormDriverError):
    """Raised when a legend has no enclosing field group, fieldset or parent."""

    def __init__(self, legend_text: str):
        self.legend_text = legend_text
        super().__init__(f"Container not found for legend: {legend_text!r}")


class OptionNotFoundError(FormDriverError):
    """Raised when a resolved group or select has no option matching the request."""

    def __init__(
        self,
        option_text: str,
        field_text: str,
        available: Optional[List[str]] = None,
        suggestion: Optional[str] = None,
    ):
        self.option_text = option_text
        self.field_text = field_text
        self.available = available or []
        self.suggestion = suggestion
        message = f"Option {option_text!r} not found for field {field_text!r}"
        if self.available:
            message += f". Available: {self.available}"
        if suggestion:
            message += f". Closest: {suggestion!r}"
        super().__init__(message)


class SelectNotFoundError(FormDriverError):
    """Raised when a label does not lead to a select-like control."""

    def __init__(self, label_text: str):
        self.label_text = label_text
        super().__init__(f"Select element not found for label: {label_text!r}")


class InputNotFoundError(FormDriverError):
    """Raised when the selector of a forced assignment matches nothing."""

    def __init__(self, selector: str):
        self.selector = selector
        super().__init__(f"Input not found: {selector}")


class WaitTimeoutError(FormDriverError, TimeoutError):
    """Raised when a visibility or reveal condition never holds within its bound."""

    def __init__(self, description: str, timeout_ms: int):
        self.description = description
        self.timeout_ms = timeout_ms
        super().__init__(f"Timed out after {timeout_ms} ms waiting for {description}")
