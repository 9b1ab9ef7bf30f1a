"""
mdsh - Markdown shell pre-processor

Keeps the output of shell commands and the content of linked files
embedded, and fresh, in markdown documents.
"""

__version__ = "0.1.0"

from .cleaner import blocks_clean, pairs_strip
from .regenerator import Regenerator
from .differ import FrozenCheck
from .fileio import FileArg
from .errors import MdshError, FrozenMismatchError
from .log import LOG, state_connectToLogger

__all__ = [
    "blocks_clean",
    "pairs_strip",
    "Regenerator",
    "FrozenCheck",
    "FileArg",
    "MdshError",
    "FrozenMismatchError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
