from taskhub.models.org import Organization
from taskhub.models.task import Task
from taskhub.models.user import User

__all__ = ["Organization", "User", "Task"]
