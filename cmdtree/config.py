# Cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for cmdtree command trees.

A command tree can be declared in YAML or TOML instead of Python. The top-level
mapping is the root command; nested `commands` lists are its sub-commands:

    name: docker
    description: A container tool
    options:
      - {long_name: --debug, short_name: -D, description: Debug mode}
    commands:
      - name: image
        description: Manage images
        commands:
          - name: pull
            description: Pull an image
            action: mypkg.actions.pull
            args_help: NAME
            options:
              - {long_name: --tag, short_name: -t, arg_kinds: [string]}
            requirements:
              - {require_one_of: [--tag]}
      - config: network.yaml

Requirement entries are one of `{exclusive: [...]}`, `{require_one_of: [...]}`,
`{range: name, min: x, max: y}` or `{if_present: name, then: <entry>}`.
A `config` entry loads a sub-tree from another file, relative to this one.
"""
from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Callable

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from cmdtree.command import CommandNode
from cmdtree.exceptions import ConfigurationError
from cmdtree.logger import logger
from cmdtree.parser.option import OptionDefinition
from cmdtree.protocols import CommandFactory, IoService
from cmdtree.registry import CommandDescriptor, CommandRegistry
from cmdtree.requirements.rules import (
    Exclusive,
    IfPresentThen,
    OptionRequirement,
    Range,
    RequireOneOf,
)

MAX_DEPTH = 5


def import_action(dotted_path: str) -> Callable[..., Any]:
    """Dynamically imports a callable from a dotted path like 'my.module.func'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise ConfigurationError(f"Invalid action path: {dotted_path}")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise ConfigurationError(
            f"Could not import '{dotted_path}': {error}. Ensure the module is "
            "installed and discoverable via PYTHONPATH."
        ) from error
    try:
        action = getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        raise ConfigurationError(
            f"Module '{module_path}' has no attribute '{attr}'"
        ) from error
    if not callable(action):
        raise ConfigurationError(f"Action '{dotted_path}' is not callable")
    return action


class RawOption(BaseModel):
    """Option entry of a command."""

    long_name: str
    short_name: str | None = None
    description: str = ""
    arg_kinds: list[str] = Field(default_factory=list)

    def to_definition(self) -> OptionDefinition:
        return OptionDefinition(
            long_name=self.long_name,
            short_name=self.short_name,
            description=self.description,
            arg_kinds=tuple(self.arg_kinds),
        )


class RawRequirement(BaseModel):
    """Requirement entry; exactly one rule key must be set."""

    exclusive: list[str] | None = None
    require_one_of: list[str] | None = None
    range: str | None = None
    min: float | None = None
    max: float | None = None
    if_present: str | None = None
    then: RawRequirement | None = None

    @model_validator(mode="after")
    def validate_single_rule(self) -> RawRequirement:
        kinds = [
            key
            for key in ("exclusive", "require_one_of", "range", "if_present")
            if getattr(self, key) is not None
        ]
        if len(kinds) != 1:
            raise ValueError(
                "Requirement must set exactly one of exclusive, require_one_of, "
                f"range or if_present, got {kinds or 'none'}"
            )
        if self.range is not None and (self.min is None or self.max is None):
            raise ValueError(f"Range requirement on '{self.range}' needs min and max")
        if self.if_present is not None and self.then is None:
            raise ValueError(f"if_present requirement on '{self.if_present}' needs then")
        return self

    def to_rule(self) -> OptionRequirement:
        if self.exclusive is not None:
            return Exclusive(*self.exclusive)
        if self.require_one_of is not None:
            return RequireOneOf(*self.require_one_of)
        if self.range is not None:
            return Range(self.range, self.min, self.max)  # type: ignore[arg-type]
        if self.if_present is None or self.then is None:
            raise ConfigurationError(f"Requirement entry sets no rule: {self!r}")
        return IfPresentThen(self.if_present, self.then.to_rule())


class RawCommand(BaseModel):
    """Raw command model for cmdtree configuration."""

    name: str | None = None
    description: str = ""
    action: str | None = None
    options: list[RawOption] = Field(default_factory=list)
    requirements: list[RawRequirement] = Field(default_factory=list)
    options_required: bool = False
    print_help_with_no_args: bool = True
    args_help: str = ""
    commands: list[RawCommand] = Field(default_factory=list)
    config: str | None = None

    @model_validator(mode="after")
    def validate_entry(self) -> RawCommand:
        if self.config is not None:
            if self.name or self.action or self.options or self.commands:
                raise ValueError("A 'config' entry cannot declare a command itself")
            return self
        if not self.name:
            raise ValueError("Command entry needs a name")
        if not self.description:
            raise ValueError(f"Command '{self.name}' needs a description")
        return self


def build_factory(raw_command: RawCommand) -> CommandFactory:
    """Return a closure building the node for `raw_command`, failing fast on bad input."""
    options = [raw_option.to_definition() for raw_option in raw_command.options]
    requirements = [raw.to_rule() for raw in raw_command.requirements]
    action = import_action(raw_command.action) if raw_command.action else None
    fields: dict[str, Any] = {
        "name": raw_command.name,
        "description": raw_command.description,
        "options": options,
        "requirements": requirements,
        "options_required": raw_command.options_required,
        "print_help_with_no_args": raw_command.print_help_with_no_args,
        "args_help": raw_command.args_help,
        "action": action,
    }

    # Validates option names and rules now rather than on first dispatch.
    CommandNode(**fields)

    def factory() -> CommandNode:
        return CommandNode(**fields)

    return factory


def convert_commands(
    registry: CommandRegistry,
    raw_command: RawCommand,
    *,
    parent: CommandDescriptor | None,
    config_path: Path,
    depth: int,
) -> CommandDescriptor:
    if depth > MAX_DEPTH:
        raise ConfigurationError(
            f"Maximum command depth exceeded ({MAX_DEPTH} levels deep)"
        )
    if raw_command.config is not None:
        sub_path = (config_path.parent / raw_command.config).resolve()
        return convert_commands(
            registry,
            read_config(sub_path),
            parent=parent,
            config_path=sub_path,
            depth=depth + 1,
        )

    descriptor = registry.register(
        build_factory(raw_command),
        parent=parent,
        name=raw_command.name,
    )
    for raw_child in raw_command.commands:
        convert_commands(
            registry,
            raw_child,
            parent=descriptor,
            config_path=config_path,
            depth=depth + 1,
        )
    return descriptor


def read_config(file_path: Path) -> RawCommand:
    """Parse a YAML or TOML file into a validated `RawCommand`."""
    if not file_path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = file_path.suffix
    with file_path.open("r", encoding="UTF-8") as config_file:
        try:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise ConfigurationError(f"Unsupported config format: {suffix}")
        except (yaml.YAMLError, toml.TomlDecodeError) as error:
            raise ConfigurationError(f"Could not parse {file_path}: {error}") from error

    if not isinstance(raw_config, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping describing the root command.\n"
            "Example:\n"
            "name: 'mytool'\n"
            "description: 'My tool'\n"
            "commands:\n"
            "  - name: 'hello'\n"
            "    description: 'Say hello'\n"
            "    action: 'my_module.hello'"
        )
    try:
        return RawCommand.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(f"Invalid config file {file_path}:\n{error}") from error


def loader(
    file_path: Path | str, io_service: IoService | None = None
) -> CommandRegistry:
    """
    Load a command tree from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the config file.
        io_service (IoService | None): I/O service shared by every command.

    Returns:
        CommandRegistry: A registry whose root is the file's top-level command.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the format is unsupported or the content is invalid.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    registry = CommandRegistry(io_service=io_service)
    convert_commands(
        registry,
        read_config(path),
        parent=None,
        config_path=path,
        depth=0,
    )
    logger.debug("Loaded %d command(s) from %s", len(registry), path)
    return registry
