"""
Diagnostics shared by the TeachLang parser, analyzer and command line tool.

Author: TeachLang contributors
"""

from dataclasses import dataclass
from typing import List, Optional

from .lexer.tokens import SourceLocation


@dataclass
class Diagnostic:
    """A rendered error or warning with an optional source location."""
    message: str
    location: Optional[SourceLocation]
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"

        if self.location is not None:
            result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result
