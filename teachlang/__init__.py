"""
TeachLang Front End Package

Tokenizer and recursive descent parser for TeachLang, a small imperative
teaching language. The parser reports fatal syntax errors as ParseError and
collects soft semantic errors about variable declarations.

Architecture:
    teachlang/
    ├── lexer/           # Tokenization
    ├── parser/          # Grammar walker, fatal and soft errors
    ├── analyzer/        # Symbol table, occurrence index, semantic sweep
    ├── pipeline.py      # Tokenize-then-parse with captured fatal errors
    ├── config.py        # Environment-driven settings
    └── cli.py           # `teachlang` command line tool

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, tokenize
from .parser import Parser, ParseError, ParseResult, parse_string
from .analyzer import SymbolTable
from .pipeline import CheckReport, check_source

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "Token",
    "TokenType",
    "SymbolTable",
    "ParseError",

    # Convenience API
    "tokenize",
    "parse_string",
    "ParseResult",
    "check_source",
    "CheckReport",

    # Version info
    "__version__",
    "__license__",
]
