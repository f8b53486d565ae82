"""
TeachLang Parser Package

Implements the recursive descent grammar walker for TeachLang.

Key Features:
- Statement dispatch on the first token (plus one token for identifier-led statements)
- Five-level expression grammar (boolean, comparison, additive, multiplicative, unary)
- Fatal ParseError on structural mismatch, soft errors collected as strings
- Resynchronization to the next statement after a soft error
"""

from .parser import Parser, ParseResult, ArrayShape, parse_tokens, parse_string, parse_file
from .errors import ParseError, SyntaxErrorRecovery

__all__ = [
    # Core parser
    "Parser",
    "ParseResult",
    "ArrayShape",
    "parse_tokens",
    "parse_string",
    "parse_file",

    # Error handling
    "ParseError",
    "SyntaxErrorRecovery",
]
