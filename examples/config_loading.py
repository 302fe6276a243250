"""config_loading.py"""
import sys
from pathlib import Path

from cmdtree.app import CommandLineApp
from cmdtree.config import loader
from cmdtree.utils import setup_logging

setup_logging()

HERE = Path(__file__).parent
sys.path.insert(0, str(HERE))

registry = loader(HERE / "cmdtree.yaml")

if __name__ == "__main__":
    CommandLineApp(registry).main()
