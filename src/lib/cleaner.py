"""
Block cleaner - strips stale generated blocks

Every managed pair is replaced by its directive portion alone, so the
regeneration pass always starts from bare directives and stale output
never leaks into a new block. Pure text transform.
"""

from typing import List

from ..models.directives import BlockStyle
from .grammar import pairs_find
from .log import LOG


def pairs_strip(contents: str, style: BlockStyle) -> str:
    """
    Remove the generated block of every managed pair of one directive style.

    Blocks in either delimiter style are removed.

    Args:
        contents: Document text
        style: Directive style whose pairs to strip

    Returns:
        Document text with those blocks erased

    Example:
        >>> pairs_strip("`$ ls`\\n```\\nold\\n```\\nrest", BlockStyle.FENCE)
        '`$ ls`\\nrest'
    """
    parts: List[str] = []
    pos = 0
    for pair in pairs_find(contents, style):
        start, end = pair.span
        if not pair.is_native:
            LOG(f"Stripping {pair.block_style.name.lower()} block after {pair.directive.strip()}", level=3)
        parts.append(contents[pos:start])
        parts.append(pair.directive)
        pos = end
    parts.append(contents[pos:])
    return "".join(parts)


def blocks_clean(contents: str) -> str:
    """Strip every generated block: `$` pairs first, then `>` pairs"""
    contents = pairs_strip(contents, BlockStyle.FENCE)
    contents = pairs_strip(contents, BlockStyle.MARKDOWN)
    return contents
