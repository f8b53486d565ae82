"""
Token definitions for the TeachLang lexer.

This module defines the closed set of token types understood by the
TeachLang front end:
- Keywords (var, int, float, if, else, for, func, ...)
- Identifiers
- Literals (integers, floats, strings)
- Operators and punctuation
- Special tokens (EOF, ERROR)

Author: TeachLang contributors
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Dict, Optional


class TokenType(Enum):
    """
    Enumeration of all token types in TeachLang.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Keywords
    # ========================================================================
    VAR = auto()                    # var
    INT = auto()                    # int
    FLOAT = auto()                  # float
    IF = auto()                     # if
    ELSE = auto()                   # else
    FOR = auto()                    # for
    FUNC = auto()                   # func
    RETURN = auto()                 # return
    ARRAY = auto()                  # array
    TRUE = auto()                   # true
    FALSE = auto()                  # false
    NEW = auto()                    # new (only as "new =", see lexer)

    # ========================================================================
    # Identifiers and Literals
    # ========================================================================
    IDENTIFIER = auto()             # counter, total2
    INTEGER_LITERAL = auto()        # 42
    FLOAT_LITERAL = auto()          # 3.14, 7.
    STRING_LITERAL = auto()         # s"hello" (identifier-prefixed)

    # ========================================================================
    # Operators
    # ========================================================================
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /
    ASSIGN = auto()                 # =
    EQUAL = auto()                  # ==
    NOT_EQUAL = auto()              # !=
    LESS_THAN = auto()              # <
    LESS_THAN_OR_EQUAL = auto()     # <=
    GREATER_THAN = auto()           # >
    GREATER_THAN_OR_EQUAL = auto()  # >=
    NOT = auto()                    # !
    OR = auto()                     # ||
    AND = auto()                    # &&
    INCREMENT = auto()              # ++
    DECREMENT = auto()              # --

    # ========================================================================
    # Punctuation
    # ========================================================================
    SEMICOLON = auto()              # ;
    COMMA = auto()                  # ,
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }
    LEFT_BRACKET = auto()           # [
    RIGHT_BRACKET = auto()          # ]

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input
    ERROR = auto()                  # Unterminated string after an identifier


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and the token dump of the command line tool.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    A lexical token: its kind and the literal text captured for it.

    The location is informational only and does not take part in equality,
    so ``Token(TokenType.VAR, "var")`` compares equal to a lexed ``var``.
    """
    type: TokenType
    lexeme: str
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r})"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.location!r})"

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in LITERAL_TYPES

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type in KEYWORDS.values() or self.type == TokenType.NEW

    @property
    def is_type_keyword(self) -> bool:
        """Check if this token names a scalar type (``int`` or ``float``)."""
        return self.type in SCALAR_TYPES

    @property
    def is_identifier(self) -> bool:
        """Check if this token is an identifier."""
        return self.type == TokenType.IDENTIFIER


# Lookup tables used by the lexer for keyword/operator recognition

KEYWORDS: Dict[str, TokenType] = {
    "var": TokenType.VAR,
    "int": TokenType.INT,
    "float": TokenType.FLOAT,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "for": TokenType.FOR,
    "func": TokenType.FUNC,
    "return": TokenType.RETURN,
    "array": TokenType.ARRAY,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

# Single-character operators and punctuation
OPERATORS: Dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "=": TokenType.ASSIGN,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,
    "!": TokenType.NOT,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
}

# Two-character operators, keyed by their spelling
COMPOUND_OPERATORS: Dict[str, TokenType] = {
    "++": TokenType.INCREMENT,
    "--": TokenType.DECREMENT,
    "==": TokenType.EQUAL,
    "<=": TokenType.LESS_THAN_OR_EQUAL,
    ">=": TokenType.GREATER_THAN_OR_EQUAL,
    "!=": TokenType.NOT_EQUAL,
    "&&": TokenType.AND,
    "||": TokenType.OR,
}

# First characters that are only valid as half of a compound operator
PAIRED_ONLY_CHARS = {"&", "|"}

SCALAR_TYPES = {TokenType.INT, TokenType.FLOAT}

LITERAL_TYPES = {
    TokenType.INTEGER_LITERAL,
    TokenType.FLOAT_LITERAL,
    TokenType.STRING_LITERAL,
}
