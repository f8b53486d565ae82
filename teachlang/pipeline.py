"""
Tokenize-then-parse pipeline used by the command line tool.

Unlike ``parse_string`` this never raises for a fatal parse error: the
error is captured in the returned CheckReport together with whatever the
parser had collected before it stopped.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .lexer import Lexer, Token, TokenType
from .parser import Parser, ParseError

logger = logging.getLogger(__name__)


@dataclass
class CheckReport:
    """Everything one run of the front end produced."""
    filename: str
    tokens: List[Token]
    variables: Dict[str, TokenType] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    fatal: Optional[ParseError] = None

    @property
    def succeeded(self) -> bool:
        """True when the parse ran to completion (soft errors allowed)."""
        return self.fatal is None

    def has_errors(self) -> bool:
        return self.fatal is not None or len(self.errors) > 0


def check_source(source: str, filename: str = "<string>") -> CheckReport:
    """Tokenize and parse ``source``, capturing a fatal error in the report."""
    tokens = Lexer(source, filename).tokenize()
    parser = Parser(tokens)
    fatal = None

    try:
        parser.parse()
    except ParseError as e:
        logger.debug("Parsing %s failed: %s", filename, e)
        fatal = e

    return CheckReport(
        filename=filename,
        tokens=tokens,
        variables=dict(parser.variables),
        errors=list(parser.errors),
        fatal=fatal,
    )


def check_file(filepath: str, encoding: str = "utf-8",
               filename: Optional[str] = None) -> CheckReport:
    """
    Read ``filepath`` and run check_source on it.

    ``filename`` replaces the path in token locations and the report.

    Raises:
        OSError: If the file cannot be read
    """
    with open(filepath, "r", encoding=encoding) as f:
        source = f.read()

    return check_source(source, filename or filepath)
