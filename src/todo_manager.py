#!/usr/bin/env python3
"""
Todo

Personal task list kept in a single flat text file:
1. Each line is one task, prefixed with "[ ] " (pending) or "[*] " (done)
2. Commands load the file once, transform the lines, and rewrite the file
3. `reset` backs the file up before deleting it, `restore` brings it back
"""

import os
import sys
import yaml
import logging
from enum import Enum
from pathlib import Path
from typing import Dict, List, Any, Iterable, Iterator, Optional, Set, TextIO, Tuple
from dataclasses import dataclass

from colorama import Style, just_fix_windows_console

from todo_io import TaskFile, BackupFile


DEFAULT_BACKUP_PATH = '/tmp/todo.bak'
DEFAULT_CONFIG_PATH = '.config/todo/config.yaml'

# Shorter lines are blank or malformed and never count as tasks
MIN_TASK_LENGTH = 6


# ==================== Errors ====================

class TodoError(Exception):
    """Base error for todo commands"""
    exit_code = 1


class TodoUsageError(TodoError):
    """Missing or invalid command arguments; raised before any write"""
    exit_code = 1


class TodoFileError(TodoError):
    """Task, backup or config file cannot be used"""
    exit_code = 2


# ==================== Task Lines ====================

class Status(Enum):
    """Task status and its on-disk marker"""
    PENDING = '[ ] '
    DONE = '[*] '

    @property
    def marker(self) -> str:
        return self.value

    @classmethod
    def parse(cls, line: str) -> Optional['Status']:
        """Return the status whose marker starts the line, or None"""
        for status in cls:
            if line.startswith(status.marker):
                return status
        return None

    def toggled(self) -> 'Status':
        return Status.DONE if self is Status.PENDING else Status.PENDING


@dataclass(frozen=True)
class TaskLine:
    """One valid task line: a status and a free-text description"""
    status: Status
    description: str

    @classmethod
    def parse(cls, line: str) -> Optional['TaskLine']:
        """
        Parse a raw line from the task file

        Returns:
            TaskLine, or None for blank, short or unmarked lines
        """
        if len(line) < MIN_TASK_LENGTH:
            return None

        status = Status.parse(line)
        if status is None:
            return None

        return cls(status=status, description=line[len(status.marker):])

    @property
    def is_done(self) -> bool:
        return self.status is Status.DONE

    def toggled(self) -> 'TaskLine':
        return TaskLine(status=self.status.toggled(), description=self.description)

    def render(self) -> str:
        return f"{self.status.marker}{self.description}"


# ==================== Configuration ====================

@dataclass
class TodoConfig:
    """Paths and switches resolved once at startup"""
    todo_path: Path
    backup_path: Path
    no_backup: bool = False
    log_level: str = 'WARNING'
    color: bool = True
    source: Optional[Path] = None  # config file the settings came from

    @classmethod
    def resolve(
        cls,
        config_path: Optional[str] = None,
        environ: Optional[Dict[str, str]] = None
    ) -> 'TodoConfig':
        """
        Resolve configuration from the environment and an optional YAML file

        Environment variables win over the config file, which wins over
        the built-in defaults.

        Args:
            config_path: Explicit config file (must exist if given)
            environ: Environment mapping (default: os.environ)

        Returns:
            Fully resolved TodoConfig
        """
        env = os.environ if environ is None else environ
        home = Path(env.get('HOME') or Path.home())
        source, settings = cls._load_file(config_path, env, home)

        if env.get('TODO_PATH'):
            todo_path = Path(env['TODO_PATH'])
        elif settings.get('todo_path'):
            todo_path = _expand_home(settings['todo_path'], home)
        else:
            # look for a legacy TODO file first
            legacy_todo = home / 'TODO'
            todo_path = legacy_todo if legacy_todo.exists() else home / '.todo'

        if env.get('TODO_BAK_DIR'):
            backup_path = Path(env['TODO_BAK_DIR'])
        elif settings.get('backup_path'):
            backup_path = _expand_home(settings['backup_path'], home)
        else:
            backup_path = Path(DEFAULT_BACKUP_PATH)

        # Any value of TODO_NOBACKUP, even empty, disables backups
        no_backup = 'TODO_NOBACKUP' in env or bool(settings.get('no_backup', False))

        log_level = env.get('TODO_LOG_LEVEL') or settings.get('log_level') or 'WARNING'

        return cls(
            todo_path=todo_path,
            backup_path=backup_path,
            no_backup=no_backup,
            log_level=str(log_level).upper(),
            color=bool(settings.get('color', True)),
            source=source
        )

    @staticmethod
    def _load_file(
        config_path: Optional[str],
        env: Dict[str, str],
        home: Path
    ) -> Tuple[Optional[Path], Dict[str, Any]]:
        """Load the YAML config file, if one is named or present"""
        explicit = config_path or env.get('TODO_CONFIG')
        if explicit:
            path = _expand_home(explicit, home)
            if not path.exists():
                raise TodoFileError(f"Config file not found: {path}")
        else:
            path = home / DEFAULT_CONFIG_PATH
            if not path.exists():
                return None, {}

        try:
            with open(path, 'r', encoding='utf-8') as f:
                settings = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise TodoFileError(f"Couldn't read config file {path}: {e}") from e

        if settings is None:
            return path, {}
        if not isinstance(settings, dict):
            raise TodoFileError(f"Config file {path} must contain a mapping")

        return path, settings


def _expand_home(value: Any, home: Path) -> Path:
    """Expand a leading ~ against the resolved home directory"""
    text = str(value)
    if text == '~' or text.startswith('~/'):
        return home / text[2:]
    return Path(text)


def setup_logging(level: str = 'WARNING') -> logging.Logger:
    """Setup logging for todo commands (stderr only, stdout is for output)"""
    logger = logging.getLogger("Todo")

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - Todo - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    return logger


# ==================== Task Store ====================

class TodoStore:
    """
    Snapshot of the task file plus the commands that rewrite it

    The snapshot is taken by load()/reload() and is not refreshed after
    a command writes the file; call reload() before running another
    command in the same process.
    """

    def __init__(self, config: TodoConfig, lines: Optional[Iterable[str]] = None):
        self.config = config
        self.logger = logging.getLogger("Todo")
        self.task_file = TaskFile(config.todo_path)
        self.backup = BackupFile(config.backup_path)
        self.lines: List[str] = list(lines) if lines is not None else []

    @classmethod
    def load(cls, config: TodoConfig) -> 'TodoStore':
        """Open (creating if needed) and read the task file"""
        store = cls(config)
        store.reload()
        return store

    def reload(self) -> None:
        try:
            self.lines = self.task_file.read_lines()
        except (OSError, UnicodeDecodeError) as e:
            raise TodoFileError(f"Couldn't open the todofile {self.todo_path}: {e}") from e

    @property
    def todo_path(self) -> Path:
        return self.config.todo_path

    @property
    def backup_path(self) -> Path:
        return self.config.backup_path

    @property
    def no_backup(self) -> bool:
        return self.config.no_backup

    def tasks(self) -> Iterator[Tuple[int, TaskLine]]:
        """Yield (1-based index, TaskLine) for every valid line"""
        for number, line in enumerate(self.lines, 1):
            task = TaskLine.parse(line)
            if task is not None:
                yield number, task

    def _write(self, lines: Iterable[str]) -> int:
        try:
            return self.task_file.write_lines(lines)
        except OSError as e:
            raise TodoFileError(f"Couldn't write the todofile {self.todo_path}: {e}") from e

    def _parse_indices(self, tokens: Iterable[str], command: str) -> Set[int]:
        """
        Convert index tokens to ints, warning about anything else

        Leading zeros are accepted: "02" selects task 2.
        """
        indices = set()
        for token in tokens:
            token = token.strip()
            if token.isdecimal():
                indices.add(int(token))
            else:
                self.logger.warning(f"todo {command}: ignoring '{token}', not a task number")
        return indices

    # ==================== Commands ====================

    def render_list(self) -> Iterator[str]:
        """
        Render valid tasks as '<index> <description>'

        Done and pending tasks render the same way; the index is bold
        unless color is disabled in the config.
        No trailing space follows the description.
        """
        for number, task in self.tasks():
            label = str(number)
            if self.config.color:
                label = f"{Style.BRIGHT}{label}{Style.RESET_ALL}"
            yield f"{label} {task.description}"

    def list(self, stream: Optional[TextIO] = None) -> None:
        """Print every task to stdout"""
        stream = stream or sys.stdout
        for line in self.render_list():
            stream.write(f"{line}\n")
        stream.flush()

    def raw(self, kind: Optional[str], stream: Optional[TextIO] = None) -> None:
        """
        Print bare descriptions of pending ('todo') or done ('done') tasks

        Meant for scripting: no index and no styling.
        """
        wanted = {'todo': Status.PENDING, 'done': Status.DONE}
        if kind not in wanted:
            raise TodoUsageError("todo raw takes 'todo' or 'done' as argument")

        stream = stream or sys.stdout
        for _, task in self.tasks():
            if task.status is wanted[kind]:
                stream.write(f"{task.description}\n")
        stream.flush()

    def add(self, tasks: List[str]) -> int:
        """
        Append new pending tasks

        Returns:
            Number of tasks added
        """
        new_tasks = [t.strip() for t in tasks if t.strip()]
        if not new_tasks:
            raise TodoUsageError("todo add takes at least 1 argument")

        lines = self.lines + [TaskLine(Status.PENDING, t).render() for t in new_tasks]
        self._write(lines)
        self.logger.info(f"Added {len(new_tasks)} task(s)")
        return len(new_tasks)

    def done(self, indices: List[str]) -> List[int]:
        """
        Toggle the status of the tasks at the given 1-based indices

        Every other line is written back unchanged.

        Returns:
            Indices whose status was toggled
        """
        if not indices:
            raise TodoUsageError("todo done takes at least 1 argument")

        wanted = self._parse_indices(indices, 'done')
        toggled = []
        lines = []

        for number, line in enumerate(self.lines, 1):
            task = TaskLine.parse(line) if number in wanted else None
            if task is not None:
                line = task.toggled().render()
                toggled.append(number)
            lines.append(line)

        missed = sorted(wanted.difference(toggled))
        if missed:
            self.logger.warning(f"todo done: no task at {', '.join(map(str, missed))}")

        self._write(lines)
        self.logger.info(f"Toggled {len(toggled)} task(s)")
        return toggled

    def remove(self, args: List[str]) -> int:
        """
        Remove tasks by 1-based index, or every done task with 'done'

        Lines that are not removed are kept verbatim, whatever their length.

        Returns:
            Number of lines removed
        """
        if not args:
            raise TodoUsageError("todo rm takes at least 1 argument")

        drop_done = 'done' in args
        wanted = self._parse_indices([a for a in args if a != 'done'], 'rm')
        kept = []

        for number, line in enumerate(self.lines, 1):
            if drop_done and Status.parse(line) is Status.DONE:
                continue
            if number in wanted:
                continue
            kept.append(line)

        self._write(kept)
        removed = len(self.lines) - len(kept)
        self.logger.info(f"Removed {removed} line(s)")
        return removed

    def sort(self) -> List[str]:
        """
        Move done tasks below pending ones, keeping order within each group

        Invalid lines are dropped.

        Returns:
            The lines written
        """
        pending = []
        done = []
        for _, task in self.tasks():
            (done if task.is_done else pending).append(task.render())

        lines = pending + done
        self._write(lines)
        self.logger.info(f"Sorted {len(pending)} pending and {len(done)} done task(s)")
        return lines

    def reset(self) -> bool:
        """
        Delete all tasks, backing the file up first unless disabled

        The task file is left alone if the backup fails.

        Returns:
            True if the task file was removed
        """
        if not self.no_backup:
            if not self.backup.save(self.todo_path):
                return False

        return self.task_file.delete()

    def restore(self) -> None:
        """Overwrite the task file with the backup from the last reset"""
        try:
            self.backup.restore(self.todo_path)
        except OSError as e:
            raise TodoFileError(f"Couldn't restore backup file: {e}") from e


# ==================== CLI Interface ====================

TODO_HELP = """Usage: todo [command] [Arguments]
Todo is a super fast and simple tasks organizer
Example: todo list
Available commands:
    - add [TASK/s]
        adds new task/s
        Example: todo add "buy carrots"
    - list
        lists all tasks
        Example: todo list
    - done [INDEX]
        marks task as done
        Example: todo done 2 3 (marks second and third tasks as completed)
    - rm [INDEX]
        removes a task
        Example: todo rm 4
        Example: todo rm done (removes every completed task)
    - reset
        deletes all tasks
    - restore
        restore recent backup after reset
    - sort
        sorts completed and uncompleted tasks
        Example: todo sort
    - raw [todo/done]
        prints nothing but done/incompleted tasks in plain text, useful for scripting
        Example: todo raw done
"""

COMMANDS = ['list', 'add', 'done', 'rm', 'reset', 'restore', 'sort', 'raw', 'help']


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point"""
    import argparse

    parser = argparse.ArgumentParser(
        prog='todo',
        description="Todo: simple task list kept in a flat text file"
    )
    parser.add_argument(
        'command',
        nargs='?',
        default='list',
        choices=COMMANDS,
        help='Command to execute (default: list)'
    )
    parser.add_argument(
        'args',
        nargs='*',
        help='Command arguments (tasks, indices, or todo/done)'
    )
    parser.add_argument(
        '--config',
        help='Path to config file'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log what each command does'
    )

    args = parser.parse_args(argv)

    if args.command == 'help':
        print(TODO_HELP)
        return 0

    just_fix_windows_console()

    try:
        config = TodoConfig.resolve(config_path=args.config)
    except TodoError as e:
        print(f"❌ Failed to load configuration: {e}", file=sys.stderr)
        return e.exit_code

    setup_logging('INFO' if args.verbose else config.log_level)

    try:
        store = TodoStore.load(config)

        if args.command == 'list':
            store.list()
        elif args.command == 'add':
            store.add(args.args)
        elif args.command == 'done':
            store.done(args.args)
        elif args.command == 'rm':
            store.remove(args.args)
        elif args.command == 'reset':
            # backup failures are reported by the store and leave the file in place
            store.reset()
        elif args.command == 'restore':
            store.restore()
        elif args.command == 'sort':
            store.sort()
        elif args.command == 'raw':
            store.raw(args.args[0] if args.args else None)
    except TodoError as e:
        print(f"❌ {e}", file=sys.stderr)
        return e.exit_code

    return 0


if __name__ == '__main__':
    sys.exit(main())
