"""
Cmdtree CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import os
import sys
from pathlib import Path
from typing import Sequence

from cmdtree.app import CommandLineApp
from cmdtree.config import loader
from cmdtree.console import error_console
from cmdtree.utils import setup_logging


def find_cmdtree_config() -> Path | None:
    candidates = [
        Path.cwd() / "cmdtree.yaml",
        Path.cwd() / "cmdtree.toml",
        Path.cwd() / ".cmdtree.yaml",
        Path.cwd() / ".cmdtree.toml",
        Path(os.environ.get("CMDTREE_CONFIG", "cmdtree.yaml")),
        Path.home() / ".config" / "cmdtree" / "cmdtree.yaml",
        Path.home() / ".config" / "cmdtree" / "cmdtree.toml",
    ]
    return next((p for p in candidates if p.exists()), None)


def bootstrap() -> Path | None:
    config_path = find_cmdtree_config()
    if config_path and str(config_path.parent) not in sys.path:
        sys.path.insert(0, str(config_path.parent))
    return config_path


def main(argv: Sequence[str] | None = None) -> None:
    setup_logging()
    config_path = bootstrap()
    if not config_path:
        error_console.print(
            "No cmdtree.yaml or cmdtree.toml found. Create one in the current "
            "directory or point CMDTREE_CONFIG at it.",
            style="error",
            markup=False,
        )
        sys.exit(1)
    CommandLineApp(loader(config_path)).main(argv)


if __name__ == "__main__":
    main()
