#!/usr/bin/env python3
"""
todo CLI

Simple task list kept in a single flat text file.

Usage:
    ./todo-manager.py                      # List all tasks
    ./todo-manager.py add "buy carrots"    # Add a task
    ./todo-manager.py done 2 3             # Toggle tasks 2 and 3
    ./todo-manager.py rm done              # Remove completed tasks

Examples:
    # Move completed tasks to the bottom
    ./todo-manager.py sort

    # Delete everything (backed up to $TODO_BAK_DIR first)
    ./todo-manager.py reset

    # Undo the last reset
    ./todo-manager.py restore
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / 'src'))

from todo_manager import main

if __name__ == '__main__':
    sys.exit(main())
