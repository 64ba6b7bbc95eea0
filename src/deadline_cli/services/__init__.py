"""Service layer for Deadline CLI.

Services hold the business rules; commands call them and never touch
storage directly.
"""

from .app_context import AppContext
from .config_service import ConfigService, get_config_service
from .identity_service import IdentityService
from .task_service import TaskService, build_group_link

__all__ = [
    "AppContext",
    "ConfigService",
    "get_config_service",
    "IdentityService",
    "TaskService",
    "build_group_link",
]
