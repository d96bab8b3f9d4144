from .task import MAX_TEXT_LENGTH, Task, TaskValidationError, clean_task_text, is_valid_task_id, new_task_id

__all__ = [
    "MAX_TEXT_LENGTH",
    "Task",
    "TaskValidationError",
    "clean_task_text",
    "is_valid_task_id",
    "new_task_id",
]
