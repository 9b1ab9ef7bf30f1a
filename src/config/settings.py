"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use MDSH_ prefix (e.g., MDSH_SHELL=zsh).

Settings can also be loaded from a .env file in the project root.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use MDSH_ prefix.

    Examples:
        MDSH_SHELL=sh
        MDSH_SHELL_FLAG=-c
        MDSH_DIFF_COLOR=false
    """

    model_config = SettingsConfigDict(
        env_prefix="MDSH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Command execution
    shell: str = Field(
        default="bash",
        description="Shell interpreter used to run `$ command` and `> command` directives",
    )

    shell_flag: str = Field(
        default="-c",
        description="Flag passing the command string to the shell",
    )

    # File arguments
    std_handle: str = Field(
        default="-",
        description="Path sentinel meaning standard input (reads) or standard output (writes)",
    )

    default_input: str = Field(
        default="README.md",
        description="Input document used when --input is not given",
    )

    # Frozen mode reporting
    diff_color: bool = Field(
        default=True,
        description="Highlight the frozen-mode diff when stderr is a terminal",
    )

    def shellCommand_make(self, command: str) -> List[str]:
        """
        Build the argv used to run a directive's command.

        Args:
            command: Command text from the directive

        Returns:
            Argument vector for subprocess

        Example:
            >>> settings = AppSettings()
            >>> settings.shellCommand_make("echo hi")
            ['bash', '-c', 'echo hi']
        """
        return [self.shell, self.shell_flag, command]

    def stdHandle_is(self, path: str) -> bool:
        """
        Check whether a path argument names a standard stream.

        Example:
            >>> AppSettings().stdHandle_is("-")
            True
        """
        return path == self.std_handle


# Singleton instance - import this in your code
appsettings = AppSettings()
