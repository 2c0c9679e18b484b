from __future__ import annotations

import logging
import re
from typing import Iterable

logger = logging.getLogger(__name__)

# Enrolment pages echo e-mail addresses and phone numbers back into the markup
EMAIL_PATTERN = r"[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}"

# Digit groups joined by one repeated separator ("0400 123 456", "03-0000-0000",
# "+61 7 5555 1234"), or a "+" followed by digits only ("+61400123456")
PHONE_RX = re.compile(
    r"(?<![\w+.\-])"
    r"(?:\+?\(?\d{1,4}\)?([ \-])\(?\d{1,4}\)?(?:\1\(?\d{1,5}\)?){1,3}|\+\d{9,15})"
    r"(?![\w.\-])"
)
PHONE_MIN_DIGITS = 9
PHONE_MAX_DIGITS = 15


def _mask_phone(match: re.Match) -> str:
    digits = sum(char.isdigit() for char in match.group(0))
    if PHONE_MIN_DIGITS <= digits <= PHONE_MAX_DIGITS:
        return "***"
    return match.group(0)


def mask_pii(text: str, patterns: Iterable[str]) -> str:
    masked = re.sub(EMAIL_PATTERN, "***", text, flags=re.IGNORECASE)
    masked = PHONE_RX.sub(_mask_phone, masked)
    for pat in list(patterns or []):
        try:
            masked = re.sub(pat, "***", masked, flags=re.IGNORECASE)
        except re.error:
            logger.warning(f"Ignoring invalid PII mask pattern: {pat!r}")
    return masked
