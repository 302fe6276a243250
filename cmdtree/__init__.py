"""
Cmdtree CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .app import CommandLineApp
from .command import CommandNode
from .context import CommandContext
from .exceptions import (
    CmdTreeError,
    CommandActionError,
    ConfigurationError,
    OptionParseError,
    RequirementViolationError,
    UnknownCommandError,
)
from .io_service import BufferIoService, ConsoleIoService
from .parser import ArgKind, OptionDefinition, ParsedOption, ParsedOptions
from .registry import CommandDescriptor, CommandRegistry
from .requirements import Exclusive, IfPresentThen, Range, RequireOneOf
from .version import __version__

logger = logging.getLogger("cmdtree")


__all__ = [
    "ArgKind",
    "BufferIoService",
    "CmdTreeError",
    "CommandActionError",
    "CommandContext",
    "CommandDescriptor",
    "CommandLineApp",
    "CommandNode",
    "CommandRegistry",
    "ConfigurationError",
    "ConsoleIoService",
    "Exclusive",
    "IfPresentThen",
    "OptionDefinition",
    "OptionParseError",
    "ParsedOption",
    "ParsedOptions",
    "Range",
    "RequireOneOf",
    "RequirementViolationError",
    "UnknownCommandError",
    "__version__",
]
