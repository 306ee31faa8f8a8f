# ncportal/database/models/__init__.py
# -*- coding: utf-8 -*-
"""
Models Package Initialization.

Exposes model classes for easier importing throughout the application,
e.g., `from ncportal.database.models import AgentModel`.
"""

from .agent import AgentModel
from .activity_log import ActivityLogModel

__all__ = [
    'AgentModel',
    'ActivityLogModel',
]
