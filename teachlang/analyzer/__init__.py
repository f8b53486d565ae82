"""
TeachLang Semantic Analyzer Package

Implements the declaration checks run after parsing:
- Symbol table of declared scalar variables (first declaration wins)
- Scope-aware occurrence index over the token stream
- Duplicate declaration and declared type checks
"""

from .semantic_analyzer import SemanticAnalyzer, check_variable_declarations
from .symbol_table import SymbolTable, Symbol, Occurrence, OccurrenceIndex, OccurrenceRole

__all__ = [
    # Main analyzer
    "SemanticAnalyzer",
    "check_variable_declarations",

    # Symbol management
    "SymbolTable", "Symbol",
    "Occurrence", "OccurrenceIndex", "OccurrenceRole",
]
