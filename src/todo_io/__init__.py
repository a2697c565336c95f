"""
File access for the todo list: the task file itself and its reset backup
"""

from .taskfile import TaskFile
from .backup import BackupFile

__all__ = ['TaskFile', 'BackupFile']
