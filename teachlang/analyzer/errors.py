"""
Soft (semantic) error messages for TeachLang.

Soft errors are recorded as plain strings in the parser's error log and do
not stop parsing. The helpers here keep the wording in one place.

Author: TeachLang contributors
"""

from ..lexer.tokens import TokenType


def already_declared(name: str) -> str:
    return f"Variable {name} is already declared."


def not_declared(name: str) -> str:
    return f"Variable {name} is not declared."


def declared_with_different_type(name: str) -> str:
    return f"Variable {name} is declared with a different type."


def array_length_mismatch(name: str, declared: int, observed: int) -> str:
    """Initializer count differs from the bracketed array length."""
    return (f"ArrayOutOfBounds Exception: array {name} has length {declared} "
            f"but {observed} initializer values")


def expected_token(expected: str, found: TokenType) -> str:
    """
    Soft variant of the parser's expected-token message.

    ``expected`` is a token type name or an alternative such as "INT or FLOAT".
    """
    return f"Expected token type {expected} but found {found.name}"
