# Cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Help text rendering for cmdtree commands.

`render_help(command)` is a pure function of a command node and the registry it
is bound to. The text is laid out in a fixed order:

    docker image
    Manage images

    Usage:  docker [DOCKER_OPTIONS] image [IMAGE_OPTIONS] COMMAND

    Commands:
      ls      List images
      pull    Pull an image or a repository from a registry

    Options:
      -a, --all              Show all images
          --limit integer    Maximum number of images

    Option requirements:
      --limit has value in range [1, 100].

    Run 'docker image -h' or 'docker image --help' to print help.
    Run 'docker image COMMAND -h' or 'docker image COMMAND --help' for more information on a command.

Column widths of the command and option blocks are computed independently as
the longest label plus four spaces. Options are listed in declaration order,
sub-commands in name order.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from cmdtree.requirements.engine import help_line

if TYPE_CHECKING:
    from cmdtree.command import CommandNode

COLUMN_PADDING = 4


def get_usage(command: CommandNode) -> str:
    """Usage line body: each path node with its options marker, then the args placeholder."""
    parts: list[str] = []
    for node in command.command_path():
        parts.append(node.name)
        if node.has_options:
            marker = f"{node.name.upper()}_OPTIONS"
            parts.append(marker if node.has_required_options else f"[{marker}]")
    if command.command_args_help:
        parts.append(command.command_args_help)
    return " ".join(part for part in parts if part)


def get_commands_text(command: CommandNode) -> list[str]:
    sub_commands = command.get_sub_commands()
    if not sub_commands:
        return []
    width = max(len(sub_command.name) for sub_command in sub_commands) + COLUMN_PADDING
    lines = ["Commands:"]
    for sub_command in sub_commands:
        lines.append(f"  {sub_command.name:<{width}}{sub_command.description}".rstrip())
    return lines


def get_options_text(command: CommandNode) -> list[str]:
    definitions = command.definitions
    if not definitions:
        return []
    width = max(len(option.get_label()) for option in definitions) + COLUMN_PADDING
    lines = ["Options:"]
    for option in definitions:
        short = f"{option.short_name}, " if option.short_name else "    "
        lines.append(f"  {short}{option.get_label():<{width}}{option.description}".rstrip())
    return lines


def get_requirements_text(command: CommandNode) -> list[str]:
    if not command.requirements:
        return []
    lines = ["Option requirements:"]
    for rule in command.requirements:
        lines.append(f"  {help_line(rule, command.definitions)}")
    return lines


def get_hints_text(command: CommandNode) -> list[str]:
    path = command.path_names
    lines = [f"Run '{path} -h' or '{path} --help' to print help."]
    if command.has_sub_commands:
        lines.append(
            f"Run '{path} COMMAND -h' or '{path} COMMAND --help' "
            "for more information on a command."
        )
    return lines


def render_help(command: CommandNode) -> str:
    """
    Render the full help text of `command`.

    Raises:
        ConfigurationError: If a requirement rule references an undeclared option.
    """
    sections = [
        [command.path_names, command.description],
        [f"Usage:  {get_usage(command)}"],
        get_commands_text(command),
        get_options_text(command),
        get_requirements_text(command),
        get_hints_text(command),
    ]
    blocks = ["\n".join(section) for section in sections if section]
    return "\n\n".join(blocks) + "\n"
