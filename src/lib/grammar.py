"""
Pattern grammar for mdsh directives and generated blocks

Recognizes the four directive line forms and the two block delimiter
forms. Everything is matched over the whole document in multi-line,
dot-matches-newline mode.

A managed pair is a directive, some whitespace, then a generated block:

    `$ ls`
    ```
    a.txt
    ```

The block may use either delimiter style no matter which sigil the
directive carries (an earlier run or a hand edit may have produced the
other one). Rather than folding that into one alternation, each
directive style gets one compiled pair pattern per BlockStyle and
pair_next() tries both, reporting which style it found.

Patterns are compiled on first use and shared read-only afterwards.

Example:
    >>> pair = pair_next("`$ ls`\\n```\\nold\\n```\\n", 0, BlockStyle.FENCE)
    >>> pair.directive, pair.block_style
    ('`$ ls`', <BlockStyle.FENCE: ('$', '```', '```')>)
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterator, List, Optional, Tuple

from ..models.directives import (
    BLOCK_PATTERNS,
    DIRECTIVE_SPECS,
    BlockStyle,
    DirectiveKind,
    DirectiveSpec,
    spec_get,
)
from ..models.grammar import DirectiveMatch, PairMatch

FLAGS = re.MULTILINE | re.DOTALL


@dataclass(frozen=True)
class Grammar:
    """
    Compiled patterns, built once by grammar_get()

    Attributes:
        directives: One pattern per (kind, style) directive form
        pairs: One pattern per (directive style, block style) combination.
               Each exposes a ``directive`` group (kept by the cleaner)
               and a ``block`` group (discarded).
    """
    directives: Dict[Tuple[DirectiveKind, BlockStyle], re.Pattern[str]]
    pairs: Dict[Tuple[BlockStyle, BlockStyle], re.Pattern[str]]


def pairPattern_make(directive_style: BlockStyle, block_style: BlockStyle) -> str:
    """
    Build the pattern text for a directive followed by a block.

    Args:
        directive_style: Sigil family of the directive (`$` or `>`)
        block_style: Delimiter style of the block to pair it with

    Returns:
        Uncompiled pattern text
    """
    command = spec_get(DirectiveKind.COMMAND, directive_style).pattern
    link = spec_get(DirectiveKind.LINK, directive_style).pattern
    block = BLOCK_PATTERNS[block_style]
    return rf"(?P<directive>{command}|{link})[\s\n]+(?P<block>{block})"


@lru_cache(maxsize=1)
def grammar_get() -> Grammar:
    """Compile the whole grammar (once per process)"""
    directives = {
        key: re.compile(spec.pattern, FLAGS) for key, spec in DIRECTIVE_SPECS.items()
    }
    pairs = {
        (directive_style, block_style): re.compile(
            pairPattern_make(directive_style, block_style), FLAGS
        )
        for directive_style in BlockStyle
        for block_style in BlockStyle
    }
    return Grammar(directives=directives, pairs=pairs)


def directive_pattern(kind: DirectiveKind, style: BlockStyle) -> re.Pattern[str]:
    """Compiled pattern for one directive form"""
    return grammar_get().directives[(kind, style)]


def directive_fromMatch(spec: DirectiveSpec, match: re.Match[str]) -> DirectiveMatch:
    """
    Describe one matched directive line.

    Args:
        spec: Directive form the pattern belongs to
        match: Match of that form's pattern

    Returns:
        DirectiveMatch with the payload (command text or link target) and
        the description used in operator notices
    """
    payload = match.group(spec.payload_group)
    if spec.kind is DirectiveKind.LINK:
        description = match.group("link")
    else:
        description = payload
    return DirectiveMatch(
        spec=spec,
        text=match.group(0),
        payload=payload,
        description=description,
        span=match.span(),
    )


def pair_fromMatch(match: re.Match[str], style: BlockStyle, block_style: BlockStyle) -> PairMatch:
    return PairMatch(
        directive=match.group("directive"),
        directive_style=style,
        block_style=block_style,
        span=match.span(),
    )


def pair_next(text: str, pos: int, style: BlockStyle) -> Optional[PairMatch]:
    """
    Find the next managed pair for a directive style.

    Both block styles are tried. The earliest pair wins; when both start
    at the same directive the block in the directive's own style wins.
    The block is matched non-greedily, so it ends at the first closing
    delimiter and adjacent pairs never merge.

    Args:
        text: Document to scan
        pos: Offset to start scanning from
        style: Directive style (`$` directives for FENCE, `>` for MARKDOWN)

    Returns:
        PairMatch, or None if no more pairs
    """
    grammar = grammar_get()
    candidates = []
    for block_style in (style, style.opposite):
        match = grammar.pairs[(style, block_style)].search(text, pos)
        if match:
            candidates.append((match, block_style))

    if not candidates:
        return None

    # min() keeps the first of equal keys, and the native style is tried first
    match, block_style = min(candidates, key=lambda candidate: candidate[0].start())
    return pair_fromMatch(match, style, block_style)


def pairs_find(text: str, style: BlockStyle) -> Iterator[PairMatch]:
    """
    Yield every non-overlapping managed pair for a directive style, in order.

    Gives the same pairs as calling pair_next() from the end of each
    previous pair, but each block style's pattern is only searched again
    once its last match has been passed. A style whose pattern found
    nothing is never searched again, so the document is not rescanned to
    its end once per pair.
    """
    grammar = grammar_get()
    block_styles = (style, style.opposite)
    pending: Dict[BlockStyle, Optional[re.Match[str]]] = {}
    exhausted = set()
    pos = 0

    while pos <= len(text):
        candidates = []
        for block_style in block_styles:
            if block_style in exhausted:
                continue
            match = pending.get(block_style)
            if match is None or match.start() < pos:
                match = grammar.pairs[(style, block_style)].search(text, pos)
                pending[block_style] = match
            if match is None:
                exhausted.add(block_style)
                continue
            candidates.append((match, block_style))

        if not candidates:
            return

        # min() keeps the first of equal keys, and the native style comes first
        match, block_style = min(candidates, key=lambda candidate: candidate[0].start())
        yield pair_fromMatch(match, style, block_style)
        pos = match.end()


def directives_find(text: str) -> List[DirectiveMatch]:
    """
    Find every directive line in a document, in document order.

    Args:
        text: Document to scan

    Returns:
        List of DirectiveMatch, sorted by position
    """
    found = []
    for key, spec in DIRECTIVE_SPECS.items():
        for match in grammar_get().directives[key].finditer(text):
            found.append(directive_fromMatch(spec, match))
    return sorted(found, key=lambda directive: directive.span[0])
