"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the regeneration pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the run progresses.

    Pipeline stages and their state additions:
        - Initial: input, output, work_dir, clean, frozen, verbosity
        - env_check: inputArg, outputArg, workDir, envOK
        - source_read: originalContents, contents
        - blocks_strip: contents (generated blocks removed)
        - commands_fill: contents (command blocks regenerated)
        - links_fill: contents (link blocks regenerated)
        - frozen_check: frozenReport
        - output_write: written

    Attributes:
        input: Input document path, or "-" for standard input
        output: Output document path, "-" for standard output, None for input
        work_dir: Working directory for commands, None for input's parent
        clean: Strip generated blocks and stop
        frozen: Compare instead of writing; fail on differences
        verbosity: Logging verbosity level (0-3)
        envOK: Environment validation passed
        inputArg: Resolved input FileArg
        outputArg: Resolved output FileArg
        workDir: Resolved command working directory
        originalContents: Document text as read, before any pass
        contents: Document text as transformed so far
        frozenReport: Numbered diff lines when frozen mode found drift
        written: Whether the output target was written
    """

    # CLI arguments
    input: str = field(default="README.md")
    output: Optional[str] = field(default=None)
    work_dir: Optional[str] = field(default=None)
    clean: bool = field(default=False)
    frozen: bool = field(default=False)
    verbosity: int = field(default=1)

    # Pipeline state
    envOK: bool = field(default=False)
    inputArg: Optional[Any] = field(default=None)  # FileArg at runtime
    outputArg: Optional[Any] = field(default=None)  # FileArg at runtime
    workDir: Path = field(default=Path("."))
    originalContents: str = field(default="")
    contents: str = field(default="")
    frozenReport: List[str] = field(default_factory=list)
    written: bool = field(default=False)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace.

        Args:
            options: Parsed CLI arguments (input, output, work_dir, etc.)

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Drop anything argparse knows about that the state does not
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        return cls(**filtered_options)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            blocks_strip,
            output_write
        )

    This is equivalent to:
        output_write(blocks_strip(source_read(env_check(initial_state))))

    But reads left-to-right instead of inside-out.
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
