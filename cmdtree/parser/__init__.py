"""
Cmdtree CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .arg_kind import ArgKind
from .option import OptionDefinition, normalize_option_name
from .option_parser import OptionParser
from .parsed_option import ParsedOption, ParsedOptions, ParseResult
from .utils import coerce_bool, coerce_value

__all__ = [
    "ArgKind",
    "OptionDefinition",
    "OptionParser",
    "ParsedOption",
    "ParsedOptions",
    "ParseResult",
    "coerce_bool",
    "coerce_value",
    "normalize_option_name",
]
