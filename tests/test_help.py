import pytest

from cmdtree import CommandNode, OptionDefinition
from cmdtree.help import get_usage, render_help


def test_root_help(docker):
    assert render_help(docker) == (
        "docker\n"
        "A self-sufficient runtime for containers\n"
        "\n"
        "Usage:  docker [DOCKER_OPTIONS] COMMAND\n"
        "\n"
        "Commands:\n"
        "  container    Manage containers\n"
        "  image        Manage images\n"
        "\n"
        "Options:\n"
        "  -D, --debug" + " " * 12 + "Enable debug mode\n"
        "      --config string    Location of client config files\n"
        "\n"
        "Run 'docker -h' or 'docker --help' to print help.\n"
        "Run 'docker COMMAND -h' or 'docker COMMAND --help' "
        "for more information on a command.\n"
    )


def test_leaf_help_with_requirements(registry):
    ls = registry.get("image", "ls")
    assert ls.get_help_text() == (
        "docker image ls\n"
        "List images\n"
        "\n"
        "Usage:  docker [DOCKER_OPTIONS] image ls [LS_OPTIONS]\n"
        "\n"
        "Options:\n"
        "  -a, --all" + " " * 14 + "Show all images\n"
        "  -f, --filter string    Filter output\n"
        "      --limit integer    Maximum rows\n"
        "\n"
        "Option requirements:\n"
        "  --all, --filter are mutually exclusive.\n"
        "  If --limit is present then --limit has value in range [1, 100].\n"
        "\n"
        "Run 'docker image ls -h' or 'docker image ls --help' to print help.\n"
    )


def test_intermediate_help_lists_sorted_commands(registry):
    text = render_help(registry.get("image"))
    assert "Usage:  docker [DOCKER_OPTIONS] image COMMAND\n" in text
    assert "Commands:\n  ls      List images\n  pull    Download" in text
    assert "  push    Upload an image to a registry\n" in text
    assert "Options:" not in text
    assert "Option requirements:" not in text


def test_usage_required_options_and_args_placeholder(registry):
    stop = registry.get("container", "stop")
    assert get_usage(stop) == (
        "docker [DOCKER_OPTIONS] container stop STOP_OPTIONS CONTAINER..."
    )
    assert get_usage(registry.get("image", "pull")) == (
        "docker [DOCKER_OPTIONS] image pull [PULL_OPTIONS] NAME"
    )


def test_options_keep_declared_order():
    node = CommandNode(
        description="Sort test",
        name="tool",
        options=[
            OptionDefinition("--zeta", "-z", "Last letter"),
            OptionDefinition("--alpha", None, "First letter", arg_kinds=("int", "int")),
            OptionDefinition("--mid", "-m", "Middle"),
        ],
    )
    text = render_help(node)
    assert text.index("--zeta") < text.index("--alpha") < text.index("--mid")
    assert "      --alpha integer integer    First letter\n" in text


def test_unbound_node_help():
    node = CommandNode(description="Standalone tool", name="tool")
    assert render_help(node) == (
        "tool\n"
        "Standalone tool\n"
        "\n"
        "Usage:  tool\n"
        "\n"
        "Run 'tool -h' or 'tool --help' to print help.\n"
    )


def test_option_without_description():
    node = CommandNode(description="x", name="x", options=[OptionDefinition("--bare")])
    assert "  Options:" not in render_help(node)
    assert "      --bare\n" in render_help(node)


@pytest.mark.asyncio
async def test_help_printed_to_console(capsys):
    node = CommandNode(
        description="Show [brackets] verbatim",
        name="tool",
        options=[OptionDefinition("--all", "-a", "All [items]")],
    )
    await node.run(["--help"])
    captured = capsys.readouterr()
    assert "Usage:  tool [TOOL_OPTIONS]" in captured.out
    assert "Show [brackets] verbatim" in captured.out
    assert "All [items]" in captured.out
