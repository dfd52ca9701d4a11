"""
Advisory diagnostics.

Some operations succeed but do something the caller may not expect, e.g.
writing a colour value into a grayscale image. Those operations report a
Diagnostic to a sink supplied by the caller instead of printing. The default
sink forwards to the logging module at WARNING level.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List

from image_access.enums import DiagnosticCode

logger = logging.getLogger(__name__)


@dataclass
class Diagnostic:
    """Single advisory record"""

    code: DiagnosticCode
    message: str
    operation: str
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)


DiagnosticSink = Callable[[Diagnostic], None]


def log_diagnostic(diagnostic: Diagnostic) -> None:
    """Default sink: emit the diagnostic as a log warning"""
    logger.warning(f"{diagnostic.operation}: {diagnostic.message}")


class DiagnosticCollector:
    """Sink that keeps every diagnostic it receives"""

    def __init__(self):
        self.records: List[Diagnostic] = []

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.records.append(diagnostic)

    def __len__(self) -> int:
        return len(self.records)

    def codes(self) -> List[DiagnosticCode]:
        """Codes of the collected diagnostics, in emission order"""
        return [record.code for record in self.records]

    def clear(self):
        """Drop all collected diagnostics"""
        self.records.clear()
