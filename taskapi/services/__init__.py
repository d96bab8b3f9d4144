from .task_store import TaskStore, TaskStoreError

__all__ = ["TaskStore", "TaskStoreError"]
