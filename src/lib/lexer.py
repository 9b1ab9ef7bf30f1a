"""
Custom Pygments lexer for mdsh frozen-mode reports

Highlights the line-numbered diff printed when a document drifted from
what regeneration produces.

Token types:
- Generic.Heading: The "Found differences in output:" banner
- Number: Line counter prefix
- Generic.Deleted: Lines only in the original (``12- text``)
- Generic.Inserted: Lines only in the regenerated output (``12+ text``)
"""

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import RegexLexer, bygroups
from pygments.token import Generic, Number, Text


class MdshDiffLexer(RegexLexer):
    """
    Lexer for mdsh numbered diff reports

    Example:
        3- old output
        3+ new output

    Tokens:
        3 → Number
        - old output → Generic.Deleted
        + new output → Generic.Inserted
    """

    name = 'mdsh diff'
    aliases = ['mdsh-diff']
    filenames = []

    tokens = {
        'root': [
            (r'^Found differences in output:', Generic.Heading),

            # Removed line
            (r'^(\d+)(- )([^\n]*)', bygroups(Number, Generic.Deleted, Generic.Deleted)),

            # Added line
            (r'^(\d+)(\+ )([^\n]*)', bygroups(Number, Generic.Inserted, Generic.Inserted)),

            (r'\n', Text),
            (r'[^\n]+', Text),
        ],
    }


def get_lexer() -> MdshDiffLexer:
    """
    Get the MdshDiffLexer instance

    Returns:
        MdshDiffLexer instance ready for use with Pygments
    """
    return MdshDiffLexer()


def report_highlight(text: str) -> str:
    """
    Colour a report for a terminal.

    Args:
        text: Report text (newline separated)

    Returns:
        Text with ANSI colour sequences
    """
    return highlight(text, get_lexer(), TerminalFormatter())
