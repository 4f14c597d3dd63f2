"""
Core types for the BPE simulator.
"""

from typing import TypeAlias

Symbol: TypeAlias = str
SymbolPair: TypeAlias = tuple[Symbol, Symbol]
SymbolSequence: TypeAlias = tuple[Symbol, ...]
Vocabulary: TypeAlias = tuple[Symbol, ...]
