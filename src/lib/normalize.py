"""
Newline normalization and generated-block assembly
"""

from ..models.directives import BlockStyle


def newline_trail(text: str) -> str:
    """Make sure text ends with a newline"""
    if text.endswith("\n"):
        return text
    return f"{text}\n"


def newline_wrap(text: str) -> str:
    """
    Make sure text starts and ends with a newline.

    Empty text becomes a single blank line.

    Example:
        >>> newline_wrap("hi")
        '\\nhi\\n'
        >>> newline_wrap("")
        '\\n\\n'
    """
    if text.startswith("\n"):
        return newline_trail(text)
    if text.endswith("\n"):
        return f"\n{text}"
    return f"\n{text}\n"


def block_build(directive: str, style: BlockStyle, body: str) -> str:
    """
    Assemble a managed pair: directive line, delimiters, wrapped body.

    Args:
        directive: Matched directive text
        style: Style whose delimiters to emit
        body: Command output or included file content

    Returns:
        Replacement text for the directive

    Example:
        >>> block_build("`$ echo hi`", BlockStyle.FENCE, "hi\\n")
        '`$ echo hi`\\n```\\nhi\\n```'
    """
    return (
        f"{newline_trail(directive)}"
        f"{style.start_delimiter}"
        f"{newline_wrap(body)}"
        f"{style.end_delimiter}"
    )
