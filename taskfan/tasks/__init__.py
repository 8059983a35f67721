from .reader import read_tasks, unique_task_ids
from .types import InputError, InputTask

__all__ = ["read_tasks", "unique_task_ids", "InputTask", "InputError"]
