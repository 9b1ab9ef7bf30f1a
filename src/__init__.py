"""
mdsh - Markdown shell pre-processor

Keeps the output of shell commands and the content of linked files
embedded, and fresh, in markdown documents.
"""

__version__ = "0.1.0"

from .lib import Regenerator, FrozenCheck, blocks_clean, LOG, state_connectToLogger

__all__ = ["Regenerator", "FrozenCheck", "blocks_clean", "LOG", "state_connectToLogger", "__version__"]
