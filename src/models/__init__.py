"""
Models package for mdsh

Contains data structures and type definitions for the regeneration pipeline.
"""

from .state import ProgramState, pipeline
from .directives import (
    BlockStyle,
    DirectiveKind,
    DirectiveSpec,
    DIRECTIVE_SPECS,
    INCLUDE_ERROR_MARKER,
)
from .grammar import DirectiveMatch, PairMatch, IncludeResult
from .diff import DiffTag, DiffLine

__all__ = [
    "ProgramState",
    "pipeline",
    "BlockStyle",
    "DirectiveKind",
    "DirectiveSpec",
    "DIRECTIVE_SPECS",
    "INCLUDE_ERROR_MARKER",
    "DirectiveMatch",
    "PairMatch",
    "IncludeResult",
    "DiffTag",
    "DiffLine",
]
