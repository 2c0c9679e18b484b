from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path

_UNSAFE_RX = re.compile(r"[^\w.-]+")


def slugify(text: str, max_length: int = 40) -> str:
    slug = _UNSAFE_RX.sub("_", text).strip("_")
    return slug[:max_length] or "step"


def build_artifact_dir(base: Path, step: str, error_key: str) -> Path:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    return base / f"{ts}_{slugify(step)}_{error_key}"
