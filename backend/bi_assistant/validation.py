"""Pre-dispatch checks run by the UI before a request reaches the orchestrator."""

from __future__ import annotations

from typing import Any

from .errors import InputValidationError
from .tasks import Task, TaskType, get_task


def validate_submission(task: TaskType | str, text: str | None, file: Any | None) -> Task:
    task_info = get_task(task)
    if task_info.accepts_file and file is None:
        raise InputValidationError("Please upload a file for this task.")
    if not task_info.accepts_file and not (text or "").strip():
        raise InputValidationError("Input text cannot be empty.")
    return task_info


def is_submittable(task: TaskType | str, text: str | None, file: Any | None) -> bool:
    """True when `validate_submission` would pass; drives the submit button state."""
    try:
        validate_submission(task, text, file)
    except InputValidationError:
        return False
    return True
