"""
Line diff models used by frozen mode
"""

from enum import Enum
from dataclasses import dataclass


class DiffTag(Enum):
    """Where a diffed line is present"""
    LEFT = "-"     # only in the original
    RIGHT = "+"    # only in the regenerated output
    BOTH = " "     # unchanged


@dataclass(frozen=True)
class DiffLine:
    """
    One classified line of a three-way line diff

    Attributes:
        tag: Which side(s) the line belongs to
        text: Line content without its newline
    """
    tag: DiffTag
    text: str
