"""
Task File

Reads and rewrites the flat task file via direct file access.
"""

import logging
from pathlib import Path
from typing import Iterable, List


class TaskFile:
    """Line-oriented access to the task file"""

    def __init__(self, path: Path):
        """
        Initialize task file access

        Args:
            path: Location of the task file (created on first read)
        """
        self.path = Path(path)
        self.logger = logging.getLogger("Todo.TaskFile")

    def read_lines(self) -> List[str]:
        """
        Read every line of the task file, creating it if absent

        Returns:
            Lines without their trailing newline

        Raises:
            OSError: If the file cannot be opened or created
            UnicodeDecodeError: If the file is not valid UTF-8
        """
        # a+ creates the file without truncating it
        with open(self.path, 'a+', encoding='utf-8', newline='') as f:
            f.seek(0)
            content = f.read()

        return self.split_lines(content)

    def split_lines(self, content: str) -> List[str]:
        """Split on \\n only; other line breaks belong to the description"""
        if not content:
            lines = []
        else:
            lines = content.split('\n')
            if content.endswith('\n'):
                lines.pop()
            lines = [line[:-1] if line.endswith('\r') else line for line in lines]

        self.logger.info(f"Loaded {len(lines)} lines from {self.path}")
        return lines

    def write_lines(self, lines: Iterable[str]) -> int:
        """
        Overwrite the task file, one line per entry with a trailing newline

        Returns:
            Number of lines written
        """
        count = 0
        with open(self.path, 'w', encoding='utf-8') as f:
            for line in lines:
                f.write(f"{line}\n")
                count += 1

        self.logger.info(f"Wrote {count} lines to {self.path}")
        return count

    def delete(self) -> bool:
        """Remove the task file; failures are logged, not raised"""
        try:
            self.path.unlink()
        except OSError as e:
            self.logger.error(f"Couldn't remove file: {e}")
            return False

        self.logger.info(f"Removed {self.path}")
        return True
