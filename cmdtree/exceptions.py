# Cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used in the cmdtree CLI framework.

These exceptions provide structured error handling for the failure cases of
command resolution and option validation: malformed option tokens, unknown
sub-commands, violated option requirements, and invalid command declarations.

All exceptions inherit from `CmdTreeError`, the base exception for the framework.

Exception Hierarchy:
- CmdTreeError
    ├── OptionParseError
    ├── UnknownCommandError
    ├── RequirementViolationError
    ├── ConfigurationError
    └── CommandActionError

`OptionParseError`, `UnknownCommandError` and `RequirementViolationError` are
user-facing and surface as plain error text. `ConfigurationError` is
developer-facing: it is raised while the command tree is being declared and
should never reach an end user.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from cmdtree.requirements.rules import OptionRequirementError


class CmdTreeError(Exception):
    """Base exception for the cmdtree framework."""


class OptionParseError(CmdTreeError):
    """Exception raised when option tokens are truncated or repeated."""


class UnknownCommandError(CmdTreeError):
    """Exception raised when a sub-command token is missing or not found."""

    def __init__(self, path: str, token: str | None = None) -> None:
        self.path = path
        self.token = token
        if token is None:
            message = f"{path}: a command name is required."
        else:
            message = f"{path}: '{token}' is not a valid command."
        super().__init__(message)


class RequirementViolationError(CmdTreeError):
    """Exception raised when parsed options violate one or more requirements."""

    def __init__(self, path: str, errors: Sequence[OptionRequirementError]) -> None:
        self.path = path
        self.errors = list(errors)
        lines = [f"{path}: invalid options."]
        lines.extend(f"  {error.message}" for error in self.errors)
        super().__init__("\n".join(lines))


class ConfigurationError(CmdTreeError):
    """Exception raised when a command, option, or requirement is declared wrong."""


class CommandActionError(CmdTreeError):
    """Exception raised by command actions to report a command-level failure."""
