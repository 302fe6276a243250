import logging
import shutil
import sys
import tempfile
from pathlib import Path

import pytest

from cmdtree.__main__ import bootstrap, find_cmdtree_config, main

CONFIG = """
name: tool
description: A tool
commands:
  - name: greet
    description: Greet
    action: main_actions.greet
    print_help_with_no_args: false
"""

ACTIONS = """
def greet(context):
    context.command.io_service.write_line("hi")
"""


@pytest.fixture(autouse=True)
def fake_home(monkeypatch):
    """Redirect Path.home() to a temporary directory for all tests."""
    temp_home = Path(tempfile.mkdtemp())
    monkeypatch.setattr(Path, "home", lambda: temp_home)
    yield temp_home
    shutil.rmtree(temp_home, ignore_errors=True)


@pytest.fixture(autouse=True)
def work_dir(tmp_path, monkeypatch, restore_root_logger):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CMDTREE_CONFIG", raising=False)
    monkeypatch.setenv("CMDTREE_LOG_MODE", "cli")
    sys_path_before = list(sys.path)
    yield tmp_path
    sys.path[:] = sys_path_before


def test_find_cmdtree_config(work_dir):
    config_file = work_dir / "cmdtree.yaml"
    config_file.touch()
    assert find_cmdtree_config() == config_file


def test_find_cmdtree_config_prefers_cwd_yaml(work_dir):
    (work_dir / "cmdtree.toml").touch()
    (work_dir / "cmdtree.yaml").touch()
    assert find_cmdtree_config() == work_dir / "cmdtree.yaml"


def test_find_cmdtree_config_from_env(tmp_path, monkeypatch):
    config_file = tmp_path / "elsewhere" / "tree.yaml"
    config_file.parent.mkdir()
    config_file.touch()
    monkeypatch.chdir(tmp_path / "elsewhere")
    monkeypatch.setenv("CMDTREE_CONFIG", str(config_file))
    assert find_cmdtree_config() == config_file


def test_find_global_config(fake_home):
    config_file = fake_home / ".config" / "cmdtree" / "cmdtree.toml"
    config_file.parent.mkdir(parents=True)
    config_file.touch()
    assert find_cmdtree_config() == config_file


def test_bootstrap_adds_config_dir_to_path(fake_home):
    config_file = fake_home / ".config" / "cmdtree" / "cmdtree.yaml"
    config_file.parent.mkdir(parents=True)
    config_file.touch()
    assert bootstrap() == config_file
    assert str(config_file.parent) in sys.path


def test_bootstrap_no_config():
    sys_path_before = list(sys.path)
    assert bootstrap() is None
    assert sys.path == sys_path_before


def test_main_without_config(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 1
    assert "No cmdtree.yaml or cmdtree.toml found" in capsys.readouterr().err


def test_main_runs_config(work_dir, capsys):
    (work_dir / "cmdtree.yaml").write_text(CONFIG)
    (work_dir / "main_actions.py").write_text(ACTIONS)
    with pytest.raises(SystemExit) as exc_info:
        main(["greet"])
    assert exc_info.value.code == 0
    assert capsys.readouterr().out == "hi\n"


def test_main_sets_up_logging(work_dir, restore_root_logger):
    (work_dir / "cmdtree.yaml").write_text(CONFIG)
    (work_dir / "main_actions.py").write_text(ACTIONS)
    with pytest.raises(SystemExit) as exc_info:
        main(["--verbose", "greet"])
    assert exc_info.value.code == 0
    file_handlers = [
        handler
        for handler in restore_root_logger.handlers
        if isinstance(handler, logging.FileHandler)
    ]
    assert len(file_handlers) == 1
    log_text = (work_dir / "cmdtree.log").read_text()
    assert "Verbose logging enabled" in log_text
    assert "[tool] Dispatching to 'greet'" in log_text
