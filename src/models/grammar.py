"""
Grammar-specific data models

Type-safe structures for directive/block matching and per-directive results.
"""

from dataclasses import dataclass
from typing import Tuple

from .directives import BlockStyle, DirectiveSpec, INCLUDE_ERROR_MARKER


@dataclass(frozen=True)
class DirectiveMatch:
    """
    A single directive line found in a document

    Built by grammar.directive_fromMatch(), both for directives_find()
    and for each directive the regenerator fills.

    Attributes:
        spec: Which of the four directive forms matched
        text: The matched line (including any trailing whitespace the
              pattern consumed)
        payload: Command text, or the link target path
        description: Link description, or the command text for commands
        span: (start, end) character offsets in the document

    Example:
        For the document "`$ echo hi`\\n":
        DirectiveMatch(spec=<fenced command>, text="`$ echo hi`",
                       payload="echo hi", description="echo hi", span=(0, 11))
    """
    spec: DirectiveSpec
    text: str
    payload: str
    description: str
    span: Tuple[int, int]


@dataclass(frozen=True)
class PairMatch:
    """
    A managed pair: a directive followed by its generated block

    Returned by grammar.pair_next(). The block may be in either delimiter
    style; ``block_style`` records which one was actually found so callers
    can tell a native block from a foreign one.

    Attributes:
        directive: Text of the directive portion (what survives cleaning)
        directive_style: Native style of the directive (sigil `$` or `>`)
        block_style: Delimiter style of the block that followed it
        span: (start, end) character offsets of the whole pair
    """
    directive: str
    directive_style: BlockStyle
    block_style: BlockStyle
    span: Tuple[int, int]

    @property
    def is_native(self) -> bool:
        """True when the block uses the directive's own delimiter style"""
        return self.directive_style is self.block_style


@dataclass(frozen=True)
class IncludeResult:
    """
    Outcome of reading one link target

    A failed read never propagates; it is collapsed into the fixed error
    marker right here, so one broken include cannot stop the others.

    Attributes:
        content: File content on success
        ok: Whether the read succeeded
    """
    content: str = ""
    ok: bool = True

    @classmethod
    def failed(cls) -> "IncludeResult":
        return cls(content="", ok=False)

    @property
    def text(self) -> str:
        """Text to insert into the generated block"""
        return self.content if self.ok else INCLUDE_ERROR_MARKER
