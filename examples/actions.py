"""actions.py

Actions referenced by cmdtree.yaml.
"""
from cmdtree import CommandContext


def greet(context: CommandContext) -> str:
    name = context.args[0] if context.args else "world"
    greeting = f"Hello, {name}!"
    if context.value("--shout"):
        greeting = greeting.upper()
    for _ in range(context.value("--times", default=1)):
        context.command.io_service.write_line(greeting)
    return greeting


async def farewell(context: CommandContext) -> str:
    message = f"Goodbye, {' '.join(context.args) or 'world'}."
    context.command.io_service.write_line(message)
    return message
