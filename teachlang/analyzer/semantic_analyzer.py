"""
Post-parse semantic sweep for TeachLang.

Runs once after the statement loop has consumed the whole program and
checks each declared variable against every place its name appears in the
token stream:

- two declarations of the name where one is visible from the other (same
  block, or one block nested in the other) are a duplicate declaration;
  declarations in sibling blocks do not conflict
- otherwise, a missing declaration or a declaration whose type token differs
  from the type recorded in the symbol table is a type mismatch

The parser fills the symbol table from the same declarations the index
sees, so a type mismatch is only reported for tables built outside Parser.

Author: TeachLang contributors
"""

import logging
from itertools import combinations
from typing import List

from ..lexer.tokens import Token
from .symbol_table import SymbolTable, Occurrence, OccurrenceIndex
from .errors import already_declared, declared_with_different_type

logger = logging.getLogger(__name__)


def _visible_from(outer: Occurrence, inner: Occurrence) -> bool:
    """Check if ``inner`` sits in the block of ``outer`` or in one nested in it."""
    return inner.scope[:len(outer.scope)] == outer.scope


def _conflicting(declarations: List[Occurrence]) -> bool:
    return any(
        _visible_from(first, second) or _visible_from(second, first)
        for first, second in combinations(declarations, 2)
    )


class SemanticAnalyzer:
    """
    Declaration checks over a symbol table and its token stream.
    """

    def __init__(self, symbol_table: SymbolTable, tokens: List[Token]):
        self.symbol_table = symbol_table
        self.tokens = tokens
        self.index = OccurrenceIndex.build(tokens)
        self.errors: List[str] = []

    def check_variable_declarations(self) -> List[str]:
        """
        Check every declared variable independently.

        Returns:
            The soft errors found, in symbol table order
        """
        self.errors = []

        for symbol in self.symbol_table.symbols():
            declarations = self.index.declarations(symbol.name)

            if _conflicting(declarations):
                logger.debug(
                    "%s declared %d times (%s)", symbol.name, len(declarations),
                    ", ".join(str(d.location) for d in declarations),
                )
                self.errors.append(already_declared(symbol.name))
            elif not declarations or any(
                d.type_kind != symbol.symbol_type for d in declarations
            ):
                logger.debug("%s does not match its declaration", symbol.name)
                self.errors.append(declared_with_different_type(symbol.name))

        return self.errors


def check_variable_declarations(symbol_table: SymbolTable, tokens: List[Token]) -> List[str]:
    """Convenience wrapper around SemanticAnalyzer."""
    return SemanticAnalyzer(symbol_table, tokens).check_variable_declarations()
