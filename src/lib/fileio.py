"""
Whole-file read/write for paths and standard streams

A FileArg is either a filesystem path or the standard handle sentinel
("-" by default): standard input when reading, standard output when
writing.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import appsettings
from ..models.grammar import IncludeResult
from .errors import InputReadError, OutputWriteError, WorkDirError
from .log import LOG


@dataclass(frozen=True)
class FileArg:
    """
    A path argument that may name a standard stream

    Attributes:
        path: Filesystem path, or None for the standard handle
    """
    path: Optional[Path] = None

    @classmethod
    def from_str(cls, value: str) -> "FileArg":
        """
        Parse a CLI or link path.

        Example:
            >>> FileArg.from_str("-").is_std
            True
            >>> FileArg.from_str("docs/README.md").path
            PosixPath('docs/README.md')
        """
        if appsettings.stdHandle_is(value):
            return cls()
        return cls(path=Path(value))

    @property
    def is_std(self) -> bool:
        return self.path is None

    def parent(self) -> Path:
        """Directory containing the file (process cwd for the standard handle)"""
        if self.path is None:
            return Path.cwd()
        return self.path.parent

    def read(self) -> str:
        """
        Read the whole file as UTF-8.

        Line endings are kept as they are on disk.

        Raises:
            InputReadError: File cannot be opened, read, or is not UTF-8
        """
        try:
            if self.path is None:
                return sys.stdin.read()
            with open(self.path, "r", encoding="utf-8", newline="") as handle:
                return handle.read()
        except (OSError, UnicodeDecodeError) as e:
            raise InputReadError(f"failed to read input {self}: {e}") from e

    def write(self, contents: str) -> None:
        """
        Write the whole file as UTF-8, syncing it to disk for paths.

        Raises:
            OutputWriteError: Target cannot be created or written
        """
        try:
            if self.path is None:
                sys.stdout.write(contents)
                sys.stdout.flush()
                return
            with open(self.path, "w", encoding="utf-8", newline="") as handle:
                handle.write(contents)
                handle.flush()
                os.fsync(handle.fileno())
        except OSError as e:
            raise OutputWriteError(f"failed to write output {self}: {e}") from e

    def __str__(self) -> str:
        return appsettings.std_handle if self.path is None else str(self.path)


def workDir_resolve(input_arg: FileArg, work_dir: Optional[str] = None) -> Path:
    """
    Pick the directory commands run in.

    Args:
        input_arg: The input document
        work_dir: Explicit directory, or None for the input's parent

    Returns:
        Existing directory

    Raises:
        WorkDirError: The directory does not exist
    """
    if work_dir:
        resolved = Path(work_dir)
        if not resolved.is_dir():
            raise WorkDirError(f"work directory not found: {resolved}")
        return resolved

    resolved = input_arg.parent()
    if not resolved.is_dir():
        raise WorkDirError(f"your input file has no parent directory: {input_arg}")
    return resolved


def include_read(target: str) -> IncludeResult:
    """
    Read a link target for inclusion, never raising.

    Args:
        target: Path from the link, or the standard handle sentinel

    Returns:
        IncludeResult with the content, or a failed result if the target
        could not be read
    """
    try:
        return IncludeResult(content=FileArg.from_str(target).read())
    except InputReadError as e:
        LOG(str(e), level=2)
        return IncludeResult.failed()
