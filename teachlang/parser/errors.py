"""
Error handling for the TeachLang parser.

Fatal structural errors are raised as ParseError and abort the whole parse.
Soft errors are plain strings collected by the parser; SyntaxErrorRecovery
moves the cursor to a well-defined statement boundary after one of them.

Author: TeachLang contributors
"""

import logging
from typing import List, Optional, Union

from ..diagnostics import Diagnostic
from ..lexer.tokens import Token, TokenType

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """
    Exception raised when the parser encounters a fatal syntax error.

    Contains diagnostic information for error reporting. ``str()`` gives the
    bare message, e.g. "Expected token type SEMICOLON but found EOF".
    """

    def __init__(
        self,
        message: str,
        token: Optional[Token] = None,
        expected: Optional[TokenType] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.token = token
        self.expected = expected
        self.found = token.type if token is not None else None
        self.diagnostic = Diagnostic(
            message=message,
            location=token.location if token is not None else None,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    def __str__(self) -> str:
        return self.message


class SyntaxErrorRecovery:
    """
    Utilities for continuing after a soft error in a statement.
    """

    @staticmethod
    def suggest_missing_token(expected: TokenType) -> List[str]:
        """Suggest what token might be missing."""
        token_suggestions = {
            TokenType.SEMICOLON: ["Add a semicolon ';' to end the statement"],
            TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
            TokenType.RIGHT_BRACKET: ["Add a closing bracket ']'"],
            TokenType.RIGHT_BRACE: ["Add a closing brace '}'"],
            TokenType.LEFT_BRACE: ["Add an opening brace '{' to start a block"],
            TokenType.ASSIGN: ["Add an assignment operator '='"],
        }

        return token_suggestions.get(expected, [])

    @staticmethod
    def synchronize_to_statement_boundary(tokens: List[Token], current_pos: int) -> int:
        """
        Find where the next statement starts.

        Skips past the next ';' at the current brace depth, or stops in front
        of a '}' that closes the enclosing block, or in front of EOF. Braces
        opened inside the skipped region are balanced.

        Returns the position to resume parsing from.
        """
        depth = 0
        start = current_pos

        while current_pos < len(tokens):
            token_type = tokens[current_pos].type

            if token_type == TokenType.EOF:
                break
            if token_type == TokenType.LEFT_BRACE:
                depth += 1
            elif token_type == TokenType.RIGHT_BRACE:
                if depth == 0:
                    break
                depth -= 1
            elif token_type == TokenType.SEMICOLON and depth == 0:
                current_pos += 1
                break

            current_pos += 1

        logger.debug("Resynchronized from token %d to token %d", start, current_pos)
        return current_pos


def create_expected_token_error(expected: TokenType, found: Token) -> ParseError:
    """Create the error for a token of the wrong kind at the current position."""
    return ParseError(
        message=f"Expected token type {expected.name} but found {found.type.name}",
        token=found,
        expected=expected,
        code="P001",
        help_text=f"The parser expected to see {expected.name} at this position.",
        suggestions=SyntaxErrorRecovery.suggest_missing_token(expected)
    )


def create_unexpected_token_error(found: Token, context: Union[str, None] = None) -> ParseError:
    """Create the error for a token that starts none of the allowed alternatives."""
    help_text = f"{found.type.name} cannot start {context}." if context else None

    return ParseError(
        message=f"Unexpected token: {found.type.name}",
        token=found,
        code="P002",
        help_text=help_text
    )
