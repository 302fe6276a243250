"""
Cmdtree CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .engine import check_requirements, find_option_by_name, help_line, validate
from .rules import (
    Exclusive,
    IfPresentThen,
    OptionRequirement,
    OptionRequirementError,
    Range,
    RequireOneOf,
)

__all__ = [
    "Exclusive",
    "IfPresentThen",
    "OptionRequirement",
    "OptionRequirementError",
    "Range",
    "RequireOneOf",
    "check_requirements",
    "find_option_by_name",
    "help_line",
    "validate",
]
