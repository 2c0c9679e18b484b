from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass
class DiagnosticOptions:
    enable_on_failure: bool = False
    capture_screenshot: bool = True
    capture_html: bool = True
    output_dir: Path = Path("./logs/diagnostics")
    max_artifacts_per_run: int = 10
    pii_mask_patterns: list[str] = field(default_factory=list)


@dataclass
class DiagnosticContext:
    step: str
    action: str
    error: Optional[BaseException]
    url: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)
