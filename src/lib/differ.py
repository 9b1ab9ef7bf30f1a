"""
Frozen-mode consistency check

In frozen mode the regenerated document is compared with the document as
it was read. Any drift is reported as a line-numbered diff and the run
fails without writing.

Report format: the counter tracks the position in the ORIGINAL document.
It advances on every unchanged or removed line; removed lines print as
``<n>- <line>``, added lines as ``<n>+ <line>`` using the counter's
current value, and unchanged lines are not printed.

Example:
    original     regenerated      report
    -----------  ---------------  -------
    a            a                2- b
    b            c                2+ c
    d            d
"""

import difflib
from dataclasses import dataclass
from typing import List

from ..models.diff import DiffLine, DiffTag
from .errors import FrozenMismatchError


def lines_split(text: str) -> List[str]:
    """
    Split text into lines.

    A final newline does not create an empty last line, and a trailing
    carriage return is dropped from each line.

    Example:
        >>> lines_split("a\\r\\nb\\n")
        ['a', 'b']
        >>> lines_split("")
        []
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def lines_diff(original: str, regenerated: str) -> List[DiffLine]:
    """
    Classify every line as original-only, regenerated-only or unchanged.

    Within a changed region the original-only lines come first.

    Lines are matched by difflib.SequenceMatcher, which is not a minimal
    (longest common subsequence) diff: it anchors on the longest
    contiguous run of matching lines and recurses on either side. When
    lines repeat, the report can therefore list more changed lines than
    strictly needed. Any report still marks every line that differs,
    so it never hides drift.

    Args:
        original: Document before regeneration
        regenerated: Document after regeneration

    Returns:
        DiffLine sequence covering both documents
    """
    left = lines_split(original)
    right = lines_split(regenerated)
    matcher = difflib.SequenceMatcher(None, left, right, autojunk=False)

    result: List[DiffLine] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            result.extend(DiffLine(DiffTag.BOTH, line) for line in left[i1:i2])
            continue
        result.extend(DiffLine(DiffTag.LEFT, line) for line in left[i1:i2])
        result.extend(DiffLine(DiffTag.RIGHT, line) for line in right[j1:j2])
    return result


def report_render(diff: List[DiffLine]) -> List[str]:
    """Number the changed lines of a diff (see module docstring)"""
    line = 0
    report: List[str] = []
    for entry in diff:
        if entry.tag is DiffTag.LEFT:
            line += 1
            report.append(f"{line}- {entry.text}")
        elif entry.tag is DiffTag.BOTH:
            line += 1
        else:
            report.append(f"{line}+ {entry.text}")
    return report


@dataclass(frozen=True)
class FrozenCheck:
    """
    Original and regenerated text of one frozen run

    Attributes:
        original: Document as read, before any pass
        regenerated: Document after cleaning and regeneration
    """
    original: str
    regenerated: str

    @property
    def consistent(self) -> bool:
        return self.original == self.regenerated

    def report(self) -> List[str]:
        """Numbered diff lines; empty when consistent"""
        if self.consistent:
            return []
        return report_render(lines_diff(self.original, self.regenerated))

    def verify(self) -> None:
        """
        Raise if regeneration changed the document.

        Raises:
            FrozenMismatchError: carrying the numbered report
        """
        if not self.consistent:
            raise FrozenMismatchError(self.report())
