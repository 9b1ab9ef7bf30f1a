"""
Exceptions raised by the mdsh engine

Everything here is fatal for a run, except an InputReadError raised
while reading a link target: fileio.include_read() turns that into a
failed IncludeResult so the other links are still processed.
"""

from pathlib import Path
from typing import List, Optional


class MdshError(Exception):
    """Base class for mdsh errors"""
    pass


class InputReadError(MdshError):
    """The input document could not be read"""
    pass


class OutputWriteError(MdshError):
    """The output target could not be written"""
    pass


class WorkDirError(MdshError):
    """No usable working directory for commands"""
    pass


class CommandLaunchError(MdshError):
    """The shell interpreter itself could not be started"""

    def __init__(self, command: str, work_dir: Path, reason: Optional[str] = None):
        self.command = command
        self.work_dir = work_dir
        message = f"fatal: failed to execute command `{command}` in {work_dir}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class CommandOutputError(MdshError):
    """A command wrote something other than UTF-8 to stdout"""
    pass


class FrozenMismatchError(MdshError):
    """Regenerating the document changed it while running in frozen mode"""

    def __init__(self, report: List[str]):
        self.report = report
        super().__init__("--frozen: input is not the same")
