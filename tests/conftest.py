"""
Shared fixtures for todo tests
"""

import logging

import pytest

from todo_manager import TodoConfig, TodoStore


@pytest.fixture(autouse=True)
def reset_todo_logger():
    """Drop handlers added by main() so each test logs to its own streams"""
    yield
    logger = logging.getLogger("Todo")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.fixture
def config(tmp_path):
    """Config pointing at a task file and backup inside tmp_path"""
    return TodoConfig(
        todo_path=tmp_path / '.todo',
        backup_path=tmp_path / 'todo.bak',
        color=False
    )


@pytest.fixture
def make_store(config):
    """Write lines to the task file and load a store from it"""
    def _make(lines, cfg=None):
        cfg = cfg or config
        cfg.todo_path.write_text(''.join(f"{line}\n" for line in lines), encoding='utf-8')
        return TodoStore.load(cfg)
    return _make


@pytest.fixture
def todo_env(tmp_path, monkeypatch):
    """Point the CLI at tmp_path through the environment"""
    monkeypatch.setenv('HOME', str(tmp_path))
    monkeypatch.setenv('TODO_PATH', str(tmp_path / '.todo'))
    monkeypatch.setenv('TODO_BAK_DIR', str(tmp_path / 'todo.bak'))
    monkeypatch.delenv('TODO_NOBACKUP', raising=False)
    monkeypatch.delenv('TODO_CONFIG', raising=False)
    monkeypatch.delenv('TODO_LOG_LEVEL', raising=False)
    return tmp_path
