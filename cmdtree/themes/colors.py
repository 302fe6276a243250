# Cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Color palette and rich theme used by cmdtree console output.

Help text is printed without styling so it reads the same through any
`IoService`. Only error output is colored, through the `error` style.
"""
from rich.theme import Theme


class OneColors:
    """One Dark colors used by cmdtree."""

    DARK_RED = "#BE5046"
    DARK_RED_b = f"bold {DARK_RED}"


def get_cmdtree_theme() -> Theme:
    """Return the rich theme with the semantic styles used by cmdtree."""
    return Theme({"error": OneColors.DARK_RED_b})
