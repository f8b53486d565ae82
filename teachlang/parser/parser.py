"""
TeachLang Recursive Descent Parser

Walks the token stream statement by statement. Nothing is built: the parser
validates structure, records declared variables in a SymbolTable and
collects soft errors as strings. A structural mismatch raises ParseError and
aborts the whole parse. After the last statement the semantic sweep checks
the declarations against the complete token stream.

Author: TeachLang contributors
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..lexer.tokens import Token, TokenType, LITERAL_TYPES, SCALAR_TYPES
from ..analyzer.symbol_table import SymbolTable
from ..analyzer.semantic_analyzer import check_variable_declarations
from ..analyzer.errors import (
    already_declared, not_declared, array_length_mismatch, expected_token,
)
from .errors import (
    SyntaxErrorRecovery, create_expected_token_error,
    create_unexpected_token_error,
)

logger = logging.getLogger(__name__)


BOOLEAN_OPERATORS = {TokenType.AND, TokenType.OR}

COMPARISON_OPERATORS = {
    TokenType.EQUAL, TokenType.NOT_EQUAL,
    TokenType.LESS_THAN, TokenType.LESS_THAN_OR_EQUAL,
    TokenType.GREATER_THAN, TokenType.GREATER_THAN_OR_EQUAL,
}

ADDITIVE_OPERATORS = {TokenType.PLUS, TokenType.MINUS}

MULTIPLICATIVE_OPERATORS = {TokenType.MULTIPLY, TokenType.DIVIDE}


@dataclass
class ArrayShape:
    """Declared length and initializer count of one array declaration."""
    declared_length: int
    initializer_count: int = 0

    @property
    def matches(self) -> bool:
        return self.declared_length == self.initializer_count


class Parser:
    """
    TeachLang recursive descent parser.

    After ``parse()`` returns (or raises), ``variables`` holds the declared
    variables and ``errors`` the soft errors collected so far.
    """

    def __init__(self, tokens: List[Token]):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer, ending with EOF
        """
        self.tokens = tokens
        self.current = 0
        self.variables = SymbolTable()
        self.errors: List[str] = []

        self._init_dispatch_tables()

    def _init_dispatch_tables(self):
        """Initialize statement dispatch tables."""

        # Statements selected by their first token
        self.statement_parsers: Dict[TokenType, Callable[[], None]] = {
            TokenType.VAR: self._parse_variable_declaration,
            TokenType.IF: self._parse_if_statement,
            TokenType.FOR: self._parse_for_loop,
            TokenType.FUNC: self._parse_function_declaration,
        }

        # Identifier-led statements, selected by the token after the identifier
        self.identifier_statement_parsers: Dict[TokenType, Callable[[], None]] = {
            TokenType.LEFT_BRACKET: self._parse_array_assignment,
            TokenType.INCREMENT: self._parse_increment_statement,
            TokenType.DECREMENT: self._parse_decrement_statement,
            TokenType.ASSIGN: self._parse_assignment,
        }

    def parse(self) -> None:
        """
        Parse the whole token stream, then run the semantic sweep.

        Raises:
            ParseError: On the first structural error
        """
        while not self._check(TokenType.EOF):
            self._parse_statement()

        findings = check_variable_declarations(self.variables, self.tokens)
        self.errors.extend(findings)

        logger.debug(
            "Parsed %d tokens: %d variables, %d soft errors",
            len(self.tokens), len(self.variables), len(self.errors),
        )

    # Statements

    def _parse_statement(self):
        token = self._peek()

        if token.type == TokenType.IDENTIFIER:
            statement = self.identifier_statement_parsers.get(
                self._peek_next().type, self._parse_assignment_with_arithmetic
            )
        else:
            statement = self.statement_parsers.get(token.type)

        if statement is None:
            raise create_unexpected_token_error(token, "a statement")

        logger.debug("%s at %s", statement.__name__.lstrip("_"), token.location)
        statement()

    def _parse_variable_declaration(self):
        """var NAME (int|float) [= expr] ;  |  var NAME = [N] [type] { expr, ... } ;"""
        self._consume(TokenType.VAR)
        name_token = self._consume(TokenType.IDENTIFIER)
        name = name_token.lexeme

        if name in self.variables:
            self._recover(already_declared(name))
            return

        if self._peek().type in SCALAR_TYPES:
            type_token = self._advance()

            if self._match(TokenType.ASSIGN):
                self._parse_expression()

            if not self._check(TokenType.SEMICOLON):
                self._recover(expected_token("SEMICOLON", self._peek().type))
                return

            self._consume(TokenType.SEMICOLON)
            self.variables.declare(name, type_token.type, name_token.location)

        elif self._match(TokenType.ASSIGN):
            shape = self._parse_array_declaration()
            if shape is None:
                return

            self._parse_array_initializer(shape)

            if not shape.matches:
                self._recover(array_length_mismatch(
                    name, shape.declared_length, shape.initializer_count
                ))
                return

            if not self._check(TokenType.SEMICOLON):
                self._recover(expected_token("SEMICOLON", self._peek().type))
                return
            self._consume(TokenType.SEMICOLON)

        else:
            self._recover(expected_token("INT or FLOAT", self._peek().type))

    def _parse_array_declaration(self) -> Optional[ArrayShape]:
        """[ INTEGER_LITERAL ] [int|float]; None after a soft error."""
        self._consume(TokenType.LEFT_BRACKET)

        if not self._check(TokenType.INTEGER_LITERAL):
            self._recover(expected_token("INTEGER_LITERAL", self._peek().type))
            return None

        size_token = self._consume(TokenType.INTEGER_LITERAL)
        self._consume(TokenType.RIGHT_BRACKET)

        if self._peek().type in SCALAR_TYPES:
            self._advance()

        return ArrayShape(declared_length=int(size_token.lexeme))

    def _parse_array_initializer(self, shape: ArrayShape):
        """{ expr, expr, ... } counting the expressions into ``shape``."""
        self._consume(TokenType.LEFT_BRACE)

        while not self._check(TokenType.RIGHT_BRACE):
            self._parse_expression()
            if not self._check(TokenType.RIGHT_BRACE):
                self._consume(TokenType.COMMA)
            shape.initializer_count += 1

        self._consume(TokenType.RIGHT_BRACE)

    def _parse_function_declaration(self):
        self._consume(TokenType.FUNC)
        self._consume(TokenType.IDENTIFIER)
        self._consume(TokenType.LEFT_PAREN)
        self._consume(TokenType.RIGHT_PAREN)
        self._parse_block()

    def _parse_array_assignment(self):
        self._consume(TokenType.IDENTIFIER)
        self._consume(TokenType.LEFT_BRACKET)
        self._parse_expression()
        self._consume(TokenType.RIGHT_BRACKET)
        self._consume(TokenType.ASSIGN)
        self._parse_expression()
        self._consume(TokenType.SEMICOLON)

    def _parse_assignment(self):
        """NAME = expr ; where NAME must already be declared."""
        name_token = self._consume(TokenType.IDENTIFIER)

        if name_token.lexeme not in self.variables:
            self._recover(not_declared(name_token.lexeme))
            return

        self._consume(TokenType.ASSIGN)
        self._parse_expression()
        self._consume(TokenType.SEMICOLON)

    def _parse_assignment_with_arithmetic(self):
        self._consume(TokenType.IDENTIFIER)
        self._consume(TokenType.ASSIGN)
        self._parse_expression()
        self._consume(TokenType.SEMICOLON)

    def _parse_increment_statement(self):
        self._consume(TokenType.IDENTIFIER)
        self._consume(TokenType.INCREMENT)
        self._consume(TokenType.SEMICOLON)

    def _parse_decrement_statement(self):
        self._consume(TokenType.IDENTIFIER)
        self._consume(TokenType.DECREMENT)
        self._consume(TokenType.SEMICOLON)

    def _parse_if_statement(self):
        """if [NAME [(==|!=) expr]] block [else (if ... | block)]"""
        self._consume(TokenType.IF)

        if self._match(TokenType.IDENTIFIER):
            if self._match(TokenType.EQUAL) or self._match(TokenType.NOT_EQUAL):
                self._parse_expression()

        self._parse_block()

        if self._match(TokenType.ELSE):
            if self._check(TokenType.IF):
                self._parse_if_statement()
            else:
                self._parse_block()

    def _parse_for_loop(self):
        """
        for ( init condition ; NAME [++|--] ) block

        ``init`` is a variable declaration followed by its own ';' plus one
        more, or a simple assignment.
        """
        self._consume(TokenType.FOR)
        self._consume(TokenType.LEFT_PAREN)

        if self._check(TokenType.VAR):
            self._parse_variable_declaration()
            self._consume(TokenType.SEMICOLON)
        else:
            self._parse_assignment()

        self._parse_expression()
        self._consume(TokenType.SEMICOLON)
        self._consume(TokenType.IDENTIFIER)

        if not self._match(TokenType.INCREMENT):
            self._match(TokenType.DECREMENT)

        self._consume(TokenType.RIGHT_PAREN)
        self._parse_block()

    def _parse_block(self):
        self._consume(TokenType.LEFT_BRACE)

        while not self._check(TokenType.RIGHT_BRACE):
            self._parse_statement()

        self._consume(TokenType.RIGHT_BRACE)

    # Expressions, lowest precedence first

    def _parse_expression(self):
        self._parse_boolean_expression()

    def _parse_boolean_expression(self):
        self._parse_comparison_expression()

        while self._peek().type in BOOLEAN_OPERATORS:
            self._advance()
            self._parse_comparison_expression()

    def _parse_comparison_expression(self):
        # Non-chaining: at most one comparison operator at this level
        self._parse_additive_expression()

        if self._peek().type in COMPARISON_OPERATORS:
            self._advance()
            self._parse_additive_expression()

    def _parse_additive_expression(self):
        self._parse_multiplicative_expression()

        while self._peek().type in ADDITIVE_OPERATORS:
            self._advance()
            self._parse_multiplicative_expression()

    def _parse_multiplicative_expression(self):
        self._parse_unary_expression()

        while self._peek().type in MULTIPLICATIVE_OPERATORS:
            self._advance()
            self._parse_unary_expression()

    def _parse_unary_expression(self):
        """[-] primary. A postfix ++ is only a statement, never part of an expression."""
        self._match(TokenType.MINUS)
        self._parse_primary_expression()

    def _parse_primary_expression(self):
        token = self._peek()

        if token.type in LITERAL_TYPES:
            self._advance()

        elif token.type == TokenType.IDENTIFIER:
            self._advance()

            # NAME = expr inside an expression (embedded re-assignment)
            if self._match(TokenType.ASSIGN):
                self._parse_expression()
            elif self._match(TokenType.LEFT_BRACKET):
                self._parse_expression()
                self._consume(TokenType.RIGHT_BRACKET)

        elif token.type == TokenType.NEW:
            self._advance()
            self._consume(TokenType.IDENTIFIER)
            self._consume(TokenType.LEFT_PAREN)
            self._consume(TokenType.RIGHT_PAREN)

        elif token.type == TokenType.LEFT_PAREN:
            self._advance()
            self._parse_expression()
            self._consume(TokenType.RIGHT_PAREN)

        else:
            raise create_unexpected_token_error(token, "an expression")

    # Utility methods

    def _recover(self, message: str):
        """Record a soft error and skip to the start of the next statement."""
        logger.debug("Soft error at token %d: %s", self.current, message)
        self.errors.append(message)
        self.current = SyntaxErrorRecovery.synchronize_to_statement_boundary(
            self.tokens, self.current
        )

    def _consume(self, token_type: TokenType) -> Token:
        """Consume token of expected type or raise error."""
        if self._check(token_type):
            return self._advance()

        raise create_expected_token_error(token_type, self._peek())

    def _match(self, token_type: TokenType) -> bool:
        """Check if current token matches type and consume if so."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        return self._peek().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self._peek()
        if self.current < len(self.tokens):
            self.current += 1
        return token

    def _peek(self) -> Token:
        """Return current token without consuming."""
        if self.current < len(self.tokens):
            return self.tokens[self.current]
        # Past the end reads as EOF
        return Token(TokenType.EOF, "")

    def _peek_next(self) -> Token:
        """Return the token after the current one."""
        if self.current + 1 < len(self.tokens):
            return self.tokens[self.current + 1]
        return Token(TokenType.EOF, "")


@dataclass
class ParseResult:
    """Outcome of a parse that completed without a fatal error."""
    tokens: List[Token]
    variables: SymbolTable
    errors: List[str]

    def has_errors(self) -> bool:
        """Check if the parse recorded any soft errors."""
        return len(self.errors) > 0


def parse_tokens(tokens: List[Token]) -> ParseResult:
    """
    Parse a token stream.

    Raises:
        ParseError: If parsing fails fatally
    """
    parser = Parser(tokens)
    parser.parse()
    return ParseResult(tokens, parser.variables, parser.errors)


def parse_string(source: str, filename: str = "<string>") -> ParseResult:
    """
    Convenience function to parse a source string.

    Raises:
        ParseError: If parsing fails fatally
    """
    from ..lexer import tokenize

    return parse_tokens(tokenize(source, filename))


def parse_file(filepath: str, encoding: str = "utf-8") -> ParseResult:
    """
    Convenience function to parse a source file.

    Raises:
        ParseError: If parsing fails fatally
        OSError: If file cannot be read
    """
    from ..lexer import tokenize_file

    return parse_tokens(tokenize_file(filepath, encoding))
