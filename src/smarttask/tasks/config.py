"""
Task batch file management.

Handles loading and saving of tasks.yaml batch files.
"""

import yaml
from pathlib import Path
from typing import Dict, Any


TASK_FIELDS = ("title", "description", "assigned_to", "due_date", "category", "priority")


def load_tasks(path: str) -> Dict[str, Any]:
    """
    Load a batch of tasks from a YAML file.

    Args:
        path: Path to tasks.yaml

    Returns:
        Dictionary with a "tasks" key holding a list of task dictionaries

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        ValueError: If required fields are missing
    """
    tasks_path = Path(path)

    if not tasks_path.exists():
        raise FileNotFoundError(f"Tasks file not found: {path}")

    with open(tasks_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data:
        raise ValueError(f"Tasks file is empty: {path}")

    if not isinstance(data, dict) or "tasks" not in data:
        raise ValueError("Missing required 'tasks' key in tasks file")

    if not isinstance(data["tasks"], list):
        raise ValueError("'tasks' must be a list")

    for idx, task in enumerate(data["tasks"]):
        if not isinstance(task, dict):
            raise ValueError(f"Task at index {idx} is not a dictionary")

        if not task.get("title"):
            raise ValueError(f"Task at index {idx} missing required field: title")

        unknown = [key for key in task if key not in TASK_FIELDS]
        if unknown:
            raise ValueError(
                f"Task at index {idx} has unknown field(s): {', '.join(sorted(unknown))}"
            )

    return data


def save_tasks(path: str, data: Dict[str, Any]) -> None:
    """
    Save a batch of tasks to a YAML file, overwriting it.

    Args:
        path: Path to save tasks.yaml
        data: Dictionary with a "tasks" list
    """
    tasks_path = Path(path)

    tasks_path.parent.mkdir(parents=True, exist_ok=True)

    with open(tasks_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)
