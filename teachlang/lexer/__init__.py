"""
TeachLang Lexer Package

Implements the lexical analyzer (tokenizer) for the TeachLang teaching
language.

Key Features:
- Total tokenization: unrecognized characters are skipped, never fatal
- Keyword table lookup for var/int/float/if/else/for/func/...
- Table-driven identifier lookahead ("new =", identifier-prefixed strings)
- Source location tracking for diagnostics
"""

from .tokens import Token, TokenType, SourceLocation
from .lexer import Lexer, tokenize, tokenize_file, format_tokens

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "tokenize",
    "tokenize_file",
    "format_tokens",
]
