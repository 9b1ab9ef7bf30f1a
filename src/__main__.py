#!/usr/bin/env python3
"""
mdsh - Markdown shell pre-processor

Keeps generated content in markdown documents fresh. Directive lines
declare a shell command to run or a file to embed, and mdsh maintains a
delimited block right after each one holding its latest output.

Directives:
    `$ command`             run command, output in a ``` fenced block
    `> command`             run command, output rendered as markdown
    [$ description](path)   embed file in a ``` fenced block
    [> description](path)   embed file rendered as markdown

Markdown-style output sits between <!-- BEGIN mdsh --> and
<!-- END mdsh --> comment lines.

Usage:
    mdsh [--input README.md] [--output OUT.md] [--work_dir DIR] [--clean] [--frozen]

Examples:
    # Regenerate README.md in place
    mdsh

    # Strip all generated blocks
    mdsh --clean

    # CI check: fail if README.md is out of date
    mdsh --frozen

    # Filter
    cat doc.md | mdsh -i - -o - --work_dir .
"""

import sys
from typing import List, Optional
from argparse import ArgumentParser, ArgumentDefaultsHelpFormatter

from .config import appsettings
from .lib import __version__, LOG, state_connectToLogger
from .lib.cleaner import blocks_clean
from .lib.differ import FrozenCheck
from .lib.errors import FrozenMismatchError, MdshError
from .lib.fileio import FileArg, workDir_resolve
from .lib.grammar import directives_find
from .lib.lexer import report_highlight
from .lib.regenerator import Regenerator
from .models import ProgramState, pipeline


# Define CLI arguments
parser = ArgumentParser(
    prog="mdsh",
    description="mdsh - Markdown shell pre-processor",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "-i",
    "--input",
    default=appsettings.default_input,
    type=str,
    help=f"Path to the markdown file, '{appsettings.std_handle}' for stdin",
)

parser.add_argument(
    "-o",
    "--output",
    default=None,
    type=str,
    help=f"Path to the output file, '{appsettings.std_handle}' for stdout. Defaults to the input file",
)

parser.add_argument(
    "--work_dir",
    default=None,
    type=str,
    help="Directory to execute the scripts under. Defaults to the input file's directory",
)

parser.add_argument(
    "--clean",
    action="store_true",
    help="Remove all generated blocks and exit",
)

parser.add_argument(
    "--frozen",
    action="store_true",
    help="Fail if the output would differ from the input; never write",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def fatal(message: str) -> None:
    """Report a fatal error on stderr and exit"""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Resolve input, output and working directory.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputArg: FileArg for the input document
            - outputArg: FileArg for the output (the input when not given)
            - workDir: Directory commands run in
            - envOK: True if environment is valid

    Exits:
        1 if the working directory does not exist
    """
    state = inputstate.copy()

    state.inputArg = FileArg.from_str(state.input)
    state.outputArg = FileArg.from_str(state.output) if state.output else state.inputArg

    try:
        state.workDir = workDir_resolve(state.inputArg, state.work_dir)
    except MdshError as e:
        fatal(str(e))

    LOG(f"Using clean={state.clean} input={state.inputArg} output={state.outputArg}", level=1)
    LOG(f"Work directory: {state.workDir}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the input document.

    Returns:
        ProgramState with added fields:
            - originalContents: Document as read
            - contents: Working copy

    Exits:
        1 if the input cannot be read
    """
    state = inputstate.copy()

    try:
        state.originalContents = state.inputArg.read()
    except MdshError as e:
        fatal(str(e))

    state.contents = state.originalContents
    LOG(f"Read {len(state.contents)} characters from {state.inputArg}", level=2)
    for directive in directives_find(state.contents):
        LOG(f"{directive.spec.description}: {directive.payload}", level=3)
    return state


def blocks_strip(inputstate: ProgramState) -> ProgramState:
    """Remove every generated block, leaving the bare directives"""
    state = inputstate.copy()
    state.contents = blocks_clean(state.contents)
    return state


def commands_fill(inputstate: ProgramState) -> ProgramState:
    """
    Run every command directive and embed its output.

    Skipped in clean mode.

    Exits:
        1 if the shell cannot be started or writes non-UTF-8 output
    """
    state = inputstate.copy()
    if state.clean:
        return state

    regenerator = Regenerator(work_dir=state.workDir)
    try:
        state.contents = regenerator.commands_run(state.contents)
    except MdshError as e:
        fatal(str(e))

    stats = regenerator.stats_get()
    LOG(f"Ran {stats['commands']} commands ({stats['commands_failed']} non-zero exits)", level=2)
    return state


def links_fill(inputstate: ProgramState) -> ProgramState:
    """
    Embed every linked file. Skipped in clean mode.

    Unreadable links become an inline error marker; they never stop the run.
    """
    state = inputstate.copy()
    if state.clean:
        return state

    regenerator = Regenerator(work_dir=state.workDir)
    state.contents = regenerator.links_include(state.contents)

    stats = regenerator.stats_get()
    LOG(f"Included {stats['links']} links ({stats['links_failed']} unreadable)", level=2)
    return state


def report_print(report: List[str]) -> None:
    """Print a frozen-mode report on stderr, coloured on a terminal"""
    text = "\n".join(["Found differences in output:", *report]) + "\n"
    if appsettings.diff_color and sys.stderr.isatty():
        text = report_highlight(text)
    sys.stderr.write(text)
    sys.stderr.flush()


def frozen_check(inputstate: ProgramState) -> ProgramState:
    """
    Compare the regenerated document with the original (frozen mode only).

    Returns:
        ProgramState unchanged when consistent

    Exits:
        1 after printing the numbered diff when the document drifted
    """
    state = inputstate.copy()
    if state.clean or not state.frozen:
        return state

    check = FrozenCheck(original=state.originalContents, regenerated=state.contents)
    try:
        check.verify()
    except FrozenMismatchError as e:
        state.frozenReport = e.report
        report_print(e.report)
        fatal(str(e))

    LOG("Document is up to date", level=2)
    return state


def output_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the document to the output target. Never writes in frozen mode.

    Exits:
        1 if the output cannot be written
    """
    state = inputstate.copy()
    if state.frozen and not state.clean:
        return state

    try:
        state.outputArg.write(state.contents)
    except MdshError as e:
        fatal(str(e))

    state.written = True
    LOG(f"Wrote {state.outputArg}", level=2)
    return state


def run(argv: Optional[List[str]] = None) -> ProgramState:
    """
    Regenerate one markdown document.

    Orchestrates the full pipeline:
        1. env_check: Resolve paths and working directory
        2. source_read: Read the document
        3. blocks_strip: Remove stale generated blocks
        4. commands_fill: Run commands (skipped with --clean)
        5. links_fill: Include linked files (skipped with --clean)
        6. frozen_check: Diff instead of write (--frozen only)
        7. output_write: Persist the result (not with --frozen)

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Final ProgramState
    """
    options = parser.parse_args(argv)

    state: ProgramState = ProgramState.state_createFromNamespace(options=options)

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    return pipeline(
        state,
        env_check,
        source_read,
        blocks_strip,
        commands_fill,
        links_fill,
        frozen_check,
        output_write,
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point (console script); exits non-zero on failure"""
    run(argv)


if __name__ == "__main__":
    main()
