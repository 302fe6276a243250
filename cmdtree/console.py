# Cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instances for cmdtree CLI applications."""
from rich.console import Console

from cmdtree.themes import get_cmdtree_theme

console = Console(theme=get_cmdtree_theme())
error_console = Console(theme=get_cmdtree_theme(), stderr=True)
