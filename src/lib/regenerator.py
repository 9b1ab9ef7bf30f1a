"""
Regenerator for mdsh documents

Fills every directive with a fresh generated block: commands first,
then file includes, each for `$` (fence) and then `>` (markdown)
directives.
"""

import re
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from ..models.directives import BlockStyle, DirectiveKind, spec_get
from ..models.grammar import IncludeResult
from .cleaner import blocks_clean
from .fileio import include_read
from .grammar import directive_fromMatch, directive_pattern
from .log import LOG
from .normalize import block_build
from .shell import CommandResult, command_run


class Regenerator:
    """
    Regenerates the generated blocks of a document

    Responsibilities:
    - Run command directives and embed their stdout
    - Read link directives and embed the file content
    - Keep counts of what was run and included

    Commands and reads happen synchronously inside the pattern replacement,
    one directive at a time.
    """

    def __init__(
        self,
        work_dir: Path = Path("."),
        runner: Optional[Callable[[str, Path], CommandResult]] = None,
        reader: Optional[Callable[[str], IncludeResult]] = None,
    ) -> None:
        """
        Initialize regenerator

        Args:
            work_dir: Directory commands run in
            runner: Command runner (defaults to shell.command_run)
            reader: Link reader (defaults to fileio.include_read)
        """
        self.work_dir = Path(work_dir)
        self.runner = runner or command_run
        self.reader = reader or include_read

        self.commands_count = 0
        self.commands_failed = 0
        self.links_count = 0
        self.links_failed = 0

    def regenerate(self, contents: str) -> str:
        """
        Clean, then refill every block

        Args:
            contents: Document text

        Returns:
            Document text with every directive followed by a fresh block
        """
        contents = blocks_clean(contents)
        contents = self.commands_run(contents)
        contents = self.links_include(contents)
        return contents

    def commands_run(self, contents: str) -> str:
        """Fill `$` command blocks, then `>` command blocks"""
        contents = self.commands_fill(contents, BlockStyle.FENCE)
        contents = self.commands_fill(contents, BlockStyle.MARKDOWN)
        return contents

    def links_include(self, contents: str) -> str:
        """Fill `$` link blocks, then `>` link blocks"""
        contents = self.links_fill(contents, BlockStyle.FENCE)
        contents = self.links_fill(contents, BlockStyle.MARKDOWN)
        return contents

    def commands_fill(self, contents: str, style: BlockStyle) -> str:
        """
        Run every command directive of one style and insert its output.

        A non-zero exit status is reported but does not stop the run;
        whatever the command printed on stdout is embedded regardless.

        Args:
            contents: Document text (already cleaned)
            style: Directive style to process

        Returns:
            Document text with those command blocks filled
        """
        spec = spec_get(DirectiveKind.COMMAND, style)

        def command_replace(match: re.Match[str]) -> str:
            directive = directive_fromMatch(spec, match)
            LOG(spec.notice_make(directive.description), level=1)

            result = self.runner(directive.payload, self.work_dir)
            self.commands_count += 1
            if not result.succeeded:
                self.commands_failed += 1
                LOG(f"`{directive.payload}` exited with status {result.returncode}", level=2)

            return block_build(directive.text, style, result.stdout)

        return directive_pattern(DirectiveKind.COMMAND, style).sub(command_replace, contents)

    def links_fill(self, contents: str, style: BlockStyle) -> str:
        """
        Read every link directive of one style and insert the file content.

        An unreadable target is replaced by the fixed error marker and the
        remaining links are still processed.

        Args:
            contents: Document text
            style: Directive style to process

        Returns:
            Document text with those link blocks filled
        """
        spec = spec_get(DirectiveKind.LINK, style)

        def link_replace(match: re.Match[str]) -> str:
            directive = directive_fromMatch(spec, match)
            LOG(spec.notice_make(directive.description), level=1)

            result = self.reader(directive.payload)
            self.links_count += 1
            if not result.ok:
                self.links_failed += 1

            return block_build(directive.text, style, result.text)

        return directive_pattern(DirectiveKind.LINK, style).sub(link_replace, contents)

    def stats_get(self) -> Dict[str, Any]:
        """Counts gathered so far"""
        return {
            'commands': self.commands_count,
            'commands_failed': self.commands_failed,
            'links': self.links_count,
            'links_failed': self.links_failed,
        }
