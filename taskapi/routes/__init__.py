from .tasks import create_tasks_blueprint

__all__ = ["create_tasks_blueprint"]
