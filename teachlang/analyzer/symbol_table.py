"""
Symbol table and occurrence index for TeachLang semantic checks.

The SymbolTable holds the variables accepted by `var` declarations, keyed by
name, first declaration wins. The OccurrenceIndex records every identifier
in a token stream together with its role (declaration or use), the type
token tied to it and the block it sits in.

Author: TeachLang contributors
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from ..lexer.tokens import Token, TokenType, SourceLocation, SCALAR_TYPES


@dataclass(frozen=True)
class Symbol:
    """A declared scalar variable."""
    name: str
    symbol_type: TokenType  # TokenType.INT or TokenType.FLOAT
    location: Optional[SourceLocation] = None

    def __str__(self) -> str:
        return f"{self.name}: {self.symbol_type.name.lower()}"


class SymbolTable(Mapping):
    """
    Declared variables of one parse, readable as ``name -> TokenType``.

    Keys are unique by construction: ``declare`` refuses a name that is
    already present.
    """

    def __init__(self):
        self._symbols: Dict[str, Symbol] = {}

    def declare(self, name: str, symbol_type: TokenType,
                location: Optional[SourceLocation] = None) -> bool:
        """Insert a variable. Returns False, leaving the table unchanged, if it exists."""
        if symbol_type not in SCALAR_TYPES:
            raise ValueError(f"Not a scalar type: {symbol_type.name}")
        if name in self._symbols:
            return False

        self._symbols[name] = Symbol(name, symbol_type, location)
        return True

    def lookup_symbol(self, name: str) -> Optional[Symbol]:
        return self._symbols.get(name)

    def symbols(self) -> List[Symbol]:
        """Symbols in declaration order."""
        return list(self._symbols.values())

    def __getitem__(self, name: str) -> TokenType:
        return self._symbols[name].symbol_type

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __repr__(self) -> str:
        entries = ", ".join(str(symbol) for symbol in self._symbols.values())
        return f"SymbolTable({entries})"


class OccurrenceRole(Enum):
    """How an identifier is used at one position in the token stream."""
    DECLARATION = "declaration"
    USE = "use"


@dataclass(frozen=True)
class Occurrence:
    """One identifier token, with the context it appears in."""
    name: str
    position: int                       # Index into the token stream
    role: OccurrenceRole
    type_kind: Optional[TokenType]      # Type token tied to a declaration
    scope: Tuple[int, ...]              # Block ids from outermost to innermost
    location: Optional[SourceLocation] = None

    @property
    def is_declaration(self) -> bool:
        return self.role == OccurrenceRole.DECLARATION


@dataclass
class OccurrenceIndex:
    """
    Per-name list of identifier occurrences over a whole token stream.

    Blocks are delimited by braces; the global block has id 0 and every
    '{' opens a block with the next free id.
    """
    occurrences: Dict[str, List[Occurrence]] = field(default_factory=dict)

    @classmethod
    def build(cls, tokens: List[Token]) -> "OccurrenceIndex":
        index = cls()
        scope: List[int] = [0]
        next_block = 1

        for position, token in enumerate(tokens):
            if token.type == TokenType.LEFT_BRACE:
                scope.append(next_block)
                next_block += 1
            elif token.type == TokenType.RIGHT_BRACE:
                # Unbalanced '}' never pops the global block
                if len(scope) > 1:
                    scope.pop()
            elif token.type == TokenType.IDENTIFIER:
                is_declaration = position > 0 and tokens[position - 1].type == TokenType.VAR
                role = OccurrenceRole.DECLARATION if is_declaration else OccurrenceRole.USE
                type_kind = _declared_type_after(tokens, position) if is_declaration else None

                index.occurrences.setdefault(token.lexeme, []).append(Occurrence(
                    name=token.lexeme,
                    position=position,
                    role=role,
                    type_kind=type_kind,
                    scope=tuple(scope),
                    location=token.location,
                ))

        return index

    def of(self, name: str) -> List[Occurrence]:
        return self.occurrences.get(name, [])

    def declarations(self, name: str) -> List[Occurrence]:
        return [occurrence for occurrence in self.of(name) if occurrence.is_declaration]

    def uses(self, name: str) -> List[Occurrence]:
        return [occurrence for occurrence in self.of(name) if not occurrence.is_declaration]


def _declared_type_after(tokens: List[Token], position: int) -> Optional[TokenType]:
    """
    Type token of the declaration whose name sits at ``position``.

    ``var x int`` gives INT; the array form ``var a = [3]float{...}`` gives
    the element type when one is written; anything else gives None.
    """
    def kind_at(offset: int) -> Optional[TokenType]:
        if position + offset < len(tokens):
            return tokens[position + offset].type
        return None

    if kind_at(1) in SCALAR_TYPES:
        return kind_at(1)

    # name = [ size ] type
    if (kind_at(1) == TokenType.ASSIGN and kind_at(2) == TokenType.LEFT_BRACKET
            and kind_at(4) == TokenType.RIGHT_BRACKET and kind_at(5) in SCALAR_TYPES):
        return kind_at(5)

    return None
