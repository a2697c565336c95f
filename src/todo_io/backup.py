"""
Backup File

Keeps a single copy of the task file so that `reset` can be undone.
"""

import logging
import shutil
from pathlib import Path


class BackupFile:
    """The backup written by reset and read by restore"""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.logger = logging.getLogger("Todo.Backup")

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, source: Path) -> bool:
        """
        Copy the task file to the backup location

        Args:
            source: Task file to back up

        Returns:
            True if the copy succeeded, False otherwise
        """
        try:
            shutil.copyfile(source, self.path)
        except OSError as e:
            self.logger.error(f"Couldn't create backup todo file: {e}")
            return False

        self.logger.info(f"Backed up {source} to {self.path}")
        return True

    def restore(self, target: Path) -> None:
        """
        Overwrite the task file with the backup contents

        Raises:
            FileNotFoundError: If no backup has been written yet
            OSError: If the copy fails
        """
        if not self.exists():
            raise FileNotFoundError(f"Backup file not found: {self.path}")

        shutil.copyfile(self.path, target)
        self.logger.info(f"Restored {target} from {self.path}")
