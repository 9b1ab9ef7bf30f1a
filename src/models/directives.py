"""
Directive specification and block style models

Defines the kinds of mdsh directives, the two generated-block delimiter
styles, and the pattern text for each of the four directive line forms.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Dict, Tuple


class DirectiveKind(Enum):
    """
    What a directive asks for

    Used to pick between running a shell command and reading a file.
    """
    COMMAND = "command"    # `$ ls` / `> ls`
    LINK = "link"          # [$ file](file) / [> file](file)


class BlockStyle(Enum):
    """
    Delimiter convention of a generated block

    FENCE blocks are wrapped in triple backtick lines and belong to `$`
    directives. MARKDOWN blocks are wrapped in sentinel HTML comments and
    belong to `>` directives, so their content is rendered as markdown.

    Each member is a (sigil, opening delimiter, closing delimiter) tuple.
    """
    FENCE = ("$", "```", "```")
    MARKDOWN = (">", "<!-- BEGIN mdsh -->", "<!-- END mdsh -->")

    @property
    def sigil(self) -> str:
        return self.value[0]

    @property
    def start_delimiter(self) -> str:
        return self.value[1]

    @property
    def end_delimiter(self) -> str:
        return self.value[2]

    @property
    def opposite(self) -> "BlockStyle":
        """The other delimiter style (a block may use either when cleaning)"""
        return BlockStyle.MARKDOWN if self is BlockStyle.FENCE else BlockStyle.FENCE


@dataclass(frozen=True)
class DirectiveSpec:
    """
    Specification for one directive line form

    Attributes:
        kind: Command or link
        style: Native block style of the directive
        pattern: Regular expression text matching the whole directive line.
                 Command patterns expose a ``command`` group, link patterns
                 expose ``link`` (description) and ``path`` groups.
        description: Human-readable description
    """
    kind: DirectiveKind
    style: BlockStyle
    pattern: str
    description: str

    @property
    def payload_group(self) -> str:
        """Name of the regex group holding the payload"""
        return "command" if self.kind is DirectiveKind.COMMAND else "path"

    def notice_make(self, text: str) -> str:
        """
        Build the operator notice announced when the directive is followed

        Example:
            >>> DIRECTIVE_SPECS[(DirectiveKind.COMMAND, BlockStyle.FENCE)].notice_make("ls")
            '$ ls'
            >>> DIRECTIVE_SPECS[(DirectiveKind.LINK, BlockStyle.MARKDOWN)].notice_make("a.md")
            '[> a.md]'
        """
        if self.kind is DirectiveKind.COMMAND:
            return f"{self.style.sigil} {text}"
        return f"[{self.style.sigil} {text}]"


# Delimited block bodies, one per style
BLOCK_PATTERNS: Dict[BlockStyle, str] = {
    BlockStyle.FENCE: r"^```.+?^```",
    BlockStyle.MARKDOWN: r"^<!-- BEGIN mdsh -->.+?^<!-- END mdsh -->",
}


DIRECTIVE_SPECS: Dict[Tuple[DirectiveKind, BlockStyle], DirectiveSpec] = {
    (DirectiveKind.LINK, BlockStyle.FENCE): DirectiveSpec(
        kind=DirectiveKind.LINK,
        style=BlockStyle.FENCE,
        pattern=r"^\[\$ (?P<link>[^\]]+)\]\((?P<path>[^\)]+)\)\s*$",
        description="Link text block include of form [$ description](./filename)",
    ),
    (DirectiveKind.LINK, BlockStyle.MARKDOWN): DirectiveSpec(
        kind=DirectiveKind.LINK,
        style=BlockStyle.MARKDOWN,
        pattern=r"^\[> (?P<link>[^\]]+)\]\((?P<path>[^\)]+)\)\s*$",
        description="Link markdown block include of form [> description](./filename)",
    ),
    (DirectiveKind.COMMAND, BlockStyle.FENCE): DirectiveSpec(
        kind=DirectiveKind.COMMAND,
        style=BlockStyle.FENCE,
        pattern=r"^`\$ (?P<command>[^`]+)`\s*$",
        description="Command text block include of form `$ command`",
    ),
    (DirectiveKind.COMMAND, BlockStyle.MARKDOWN): DirectiveSpec(
        kind=DirectiveKind.COMMAND,
        style=BlockStyle.MARKDOWN,
        pattern=r"^`> (?P<command>[^`]+)`\s*$",
        description="Command markdown block include of form `> command`",
    ),
}


# Substituted for a link whose target cannot be read
INCLUDE_ERROR_MARKER: str = "[mdsh error]: failed to read file"


def spec_get(kind: DirectiveKind, style: BlockStyle) -> DirectiveSpec:
    """Look up the directive specification for a kind and style"""
    return DIRECTIVE_SPECS[(kind, style)]
