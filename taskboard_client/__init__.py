from .client import TaskboardClient
from .exceptions import ApiError

__all__ = ["TaskboardClient", "ApiError"]
