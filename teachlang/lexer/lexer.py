"""
TeachLang Lexer - turns source text into a token stream

Single left-to-right scan with a cursor. The lexer never fails: characters
it does not recognize are skipped without producing a token. The stream
always ends with exactly one EOF token.

Identifier scanning has two pieces of raw-character lookahead (``new``
followed by `` =`` and an identifier followed by a double quote). Both live
in IDENTIFIER_LOOKAHEAD so the whole state machine can be read in one place.
"""

import logging
from typing import Dict, List, Optional, Tuple

from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS, OPERATORS, COMPOUND_OPERATORS,
    PAIRED_ONLY_CHARS,
)

logger = logging.getLogger(__name__)

# Wildcard for IDENTIFIER_LOOKAHEAD keys; never a single character
ANY = "<any>"

# (keyword candidate, next raw character) -> name of the Lexer method that
# finishes the token. Lookup order: exact pair, (candidate, ANY),
# (ANY, character). No entry means a plain identifier.
IDENTIFIER_LOOKAHEAD: Dict[Tuple[str, str], str] = {
    ("new", " "): "_finish_new_assignment",
    ("new", ANY): "_finish_identifier",
    (ANY, '"'): "_finish_prefixed_string",
}


class Lexer:
    """
    TeachLang lexical analyzer.

    Converts source code text into a list of tokens terminated by EOF.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file, used in token locations
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self.skipped = 0

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens including the EOF token
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.skipped = 0
        self.tokens = []

        while self.pos < len(self.source):
            current_char = self.source[self.pos]

            if current_char.isspace():
                self._advance()
            elif current_char.isalpha():
                self.tokens.append(self._scan_identifier_or_keyword())
            elif current_char.isdecimal():
                self.tokens.append(self._scan_number())
            else:
                token = self._scan_operator_or_punctuation()
                if token is not None:
                    self.tokens.append(token)

        self.tokens.append(Token(TokenType.EOF, "EOF", self._location()))

        logger.debug(
            "Tokenized %s: %d tokens, %d characters skipped",
            self.filename, len(self.tokens), self.skipped,
        )
        return self.tokens

    def _scan_identifier_or_keyword(self) -> Token:
        """Scan a letter-led run and classify it."""
        location = self._location()
        start = self.pos

        while self.pos < len(self.source) and self._is_identifier_continue(self.source[self.pos]):
            self._advance()

        text = self.source[start:self.pos]

        keyword = KEYWORDS.get(text)
        if keyword is not None:
            return Token(keyword, text, location)

        finisher = self._lookup_finisher(text, self._current_char())
        return getattr(self, finisher)(text, location)

    def _lookup_finisher(self, text: str, next_char: Optional[str]) -> str:
        """Resolve the identifier lookahead table for (text, next_char)."""
        for key in ((text, next_char), (text, ANY), (ANY, next_char)):
            if key in IDENTIFIER_LOOKAHEAD:
                return IDENTIFIER_LOOKAHEAD[key]
        return "_finish_identifier"

    def _finish_identifier(self, text: str, location: SourceLocation) -> Token:
        return Token(TokenType.IDENTIFIER, text, location)

    def _finish_new_assignment(self, text: str, location: SourceLocation) -> Token:
        """``new`` followed by a space: NEW only when the space is followed by ``=``."""
        self._advance()  # the space

        if self._current_char() == "=":
            self._advance()
            return Token(TokenType.NEW, text, location)

        return Token(TokenType.IDENTIFIER, text, location)

    def _finish_prefixed_string(self, text: str, location: SourceLocation) -> Token:
        """
        Identifier immediately followed by a double quote.

        The identifier text is dropped and the quoted content becomes a
        STRING_LITERAL. Without a closing quote the result is an ERROR token
        carrying the identifier text.
        """
        self._advance()  # opening quote
        start = self.pos

        while self.pos < len(self.source) and self.source[self.pos] != '"':
            self._advance()

        if self.pos >= len(self.source):
            logger.debug("Unterminated string after identifier %r at %s", text, location)
            return Token(TokenType.ERROR, text, location)

        content = self.source[start:self.pos]
        self._advance()  # closing quote
        return Token(TokenType.STRING_LITERAL, content, location)

    def _scan_number(self) -> Token:
        """Tokenize integer or float literals (digits, optionally '.' and digits)."""
        location = self._location()
        start = self.pos

        self._consume_digits()

        if self._current_char() == ".":
            self._advance()
            self._consume_digits()
            return Token(TokenType.FLOAT_LITERAL, self.source[start:self.pos], location)

        return Token(TokenType.INTEGER_LITERAL, self.source[start:self.pos], location)

    def _scan_operator_or_punctuation(self) -> Optional[Token]:
        """
        Scan an operator or punctuation character.

        Returns None (after consuming the character) for characters that do
        not start a token, including a bare '&' or '|'.
        """
        location = self._location()
        first = self.source[self.pos]
        self._advance()

        next_char = self._current_char()
        if next_char is not None and first + next_char in COMPOUND_OPERATORS:
            self._advance()
            spelling = first + next_char
            return Token(COMPOUND_OPERATORS[spelling], spelling, location)

        if first in OPERATORS:
            return Token(OPERATORS[first], first, location)

        if first in PAIRED_ONLY_CHARS:
            logger.debug("Skipping bare %r at %s", first, location)
        else:
            logger.debug("Skipping unrecognized character %r at %s", first, location)
        self.skipped += 1
        return None

    def _consume_digits(self):
        while self.pos < len(self.source) and self.source[self.pos].isdecimal():
            self._advance()

    def _is_identifier_continue(self, char: str) -> bool:
        """Check if character can continue an identifier."""
        return char.isalpha() or char.isdecimal()

    def _current_char(self) -> Optional[str]:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return None

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1


def tokenize(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename recorded in token locations

    Returns:
        List of tokens ending with EOF
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str, encoding: str = "utf-8") -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        OSError: If the file cannot be read
    """
    with open(filepath, "r", encoding=encoding) as f:
        source = f.read()

    return tokenize(source, filepath)


def format_tokens(tokens: List[Token]) -> str:
    """Render a token stream one token per line, as the token dump shows it."""
    return "\n".join(str(token) for token in tokens)
