"""
Command execution for `$ command` and `> command` directives

Runs a command string through the configured shell in a working
directory. Standard input is connected to an empty source, standard
error goes straight to the invoking terminal, and standard output is
captured as text.

The exit status is returned but is not an error: a failing command
still has its stdout embedded in the document.
"""

import subprocess
from dataclasses import dataclass
from pathlib import Path

from ..config import appsettings
from .errors import CommandLaunchError, CommandOutputError


@dataclass(frozen=True)
class CommandResult:
    """
    Captured result of one command

    Attributes:
        stdout: Standard output decoded as UTF-8
        returncode: Exit status (informational only)
    """
    stdout: str
    returncode: int

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


def command_run(command: str, work_dir: Path) -> CommandResult:
    """
    Run a directive's command and capture its stdout.

    Args:
        command: Command text from the directive
        work_dir: Directory to run it in

    Returns:
        CommandResult

    Raises:
        CommandLaunchError: The shell could not be started (missing
                            interpreter, missing work directory, ...)
        CommandOutputError: The command's stdout is not valid UTF-8
    """
    argv = appsettings.shellCommand_make(command)
    try:
        completed = subprocess.run(
            argv,
            cwd=work_dir,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            check=False,
        )
    except OSError as e:
        raise CommandLaunchError(command, work_dir, str(e)) from e

    try:
        stdout = completed.stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CommandOutputError(f"fatal: output of `{command}` is not valid UTF-8: {e}") from e

    return CommandResult(stdout=stdout, returncode=completed.returncode)
