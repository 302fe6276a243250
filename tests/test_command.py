import pytest

from cmdtree import (
    BufferIoService,
    CommandContext,
    CommandNode,
    ConfigurationError,
    Exclusive,
    OptionDefinition,
    Range,
    RequireOneOf,
)


def test_command_defaults():
    node = CommandNode(description="plain")
    assert node.options == []
    assert node.requirements == []
    assert node.print_help_with_no_args
    assert not node.options_required
    assert not node.has_options
    assert not node.has_sub_commands
    assert node.action is None
    assert node.get_sub_commands() == []
    assert node.command_path() == [node]


def test_command_builds_option_parser():
    node = CommandNode(
        description="pull",
        name="pull",
        options=[OptionDefinition("--tag", "-t", arg_kinds=("string",))],
    )
    assert node.has_options
    assert node.option_parser.command_name == "pull"
    assert node.definitions[0].long_name == "--tag"


def test_required_options_imply_options():
    with pytest.raises(ConfigurationError, match="requires options but declares none"):
        CommandNode(description="x", name="x", options_required=True)

    node = CommandNode(
        description="x",
        name="x",
        options_required=True,
        options=[OptionDefinition("--a")],
    )
    assert node.has_required_options
    assert node.has_options


def test_requirements_must_reference_declared_options():
    with pytest.raises(ConfigurationError, match="undeclared option"):
        CommandNode(
            description="x",
            options=[OptionDefinition("--a"), OptionDefinition("--b")],
            requirements=[Exclusive("a", "c")],
        )


def test_requirements_must_be_rules():
    with pytest.raises(ConfigurationError, match="Not an option requirement"):
        CommandNode(description="x", requirements=["--a"])


def test_duplicate_option_names_rejected():
    with pytest.raises(ConfigurationError, match="already used"):
        CommandNode(
            description="x",
            options=[OptionDefinition("--all", "-a"), OptionDefinition("--any", "-a")],
        )


def test_range_on_flag_rejected():
    with pytest.raises(ConfigurationError):
        CommandNode(
            description="x",
            options=[OptionDefinition("--all")],
            requirements=[Range("--all", 0, 1)],
        )


def test_io_service_must_implement_protocol():
    with pytest.raises(TypeError):
        CommandNode(description="x", io_service=object())


def test_action_must_be_callable():
    with pytest.raises(TypeError):
        CommandNode(description="x", action="not callable")


@pytest.mark.asyncio
async def test_sync_action_is_wrapped():
    def action(context: CommandContext) -> str:
        return f"ran with {context.args}"

    node = CommandNode(
        description="x",
        name="x",
        action=action,
        print_help_with_no_args=False,
        io_service=BufferIoService(),
    )
    assert await node.run(["a", "b"]) == "ran with ['a', 'b']"


@pytest.mark.asyncio
async def test_action_receives_context():
    async def action(context: CommandContext) -> CommandContext:
        return context

    node = CommandNode(
        description="x",
        name="x",
        options=[OptionDefinition("--count", "-c", arg_kinds=("integer",))],
        action=action,
        io_service=BufferIoService(),
    )
    context = await node.run(["-c", "3", "file.txt"])
    assert context.command is node
    assert context.args == ["file.txt"]
    assert context.options.value("--count") == 3
    assert context.parent is None
    assert context.success
    assert context.duration is not None
    assert context.result is context


@pytest.mark.asyncio
async def test_action_exception_propagates():
    async def action(context: CommandContext) -> None:
        raise RuntimeError("boom")

    node = CommandNode(
        description="x",
        name="x",
        action=action,
        print_help_with_no_args=False,
        io_service=BufferIoService(),
    )
    with pytest.raises(RuntimeError, match="boom"):
        await node.run([])


@pytest.mark.asyncio
async def test_leaf_without_action_is_configuration_error():
    node = CommandNode(
        description="x", name="x", print_help_with_no_args=False, io_service=BufferIoService()
    )
    with pytest.raises(ConfigurationError, match="neither an action nor sub-commands"):
        await node.run([])


@pytest.mark.asyncio
async def test_node_can_serve_several_invocations():
    async def action(context: CommandContext) -> CommandContext:
        return context

    node = CommandNode(
        description="x",
        name="x",
        options=[OptionDefinition("--name", arg_kinds=("string",))],
        requirements=[RequireOneOf("--name")],
        action=action,
        io_service=BufferIoService(),
    )
    first = await node.run(["--name", "a"])
    second = await node.run(["--name", "b"])
    assert first.options.value("name") == "a"
    assert second.options.value("name") == "b"


def test_str():
    node = CommandNode(
        description="List images",
        name="ls",
        options=[OptionDefinition("--all")],
    )
    assert str(node) == (
        "CommandNode(name='ls', description='List images', options=1, requirements=0)"
    )
