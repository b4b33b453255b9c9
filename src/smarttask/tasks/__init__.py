"""
Task module for SmartTask.

Handles task batch files and the draft records built for new tasks.
"""

from .config import load_tasks, save_tasks
from .draft import TaskDraft, prepare_task, parse_due_date, summarize_statuses, TASK_STATUSES

__all__ = [
    # Batch files
    "load_tasks",
    "save_tasks",
    # Drafts
    "TaskDraft",
    "prepare_task",
    "parse_due_date",
    "summarize_statuses",
    "TASK_STATUSES",
]
