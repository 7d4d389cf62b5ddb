"""
Taskboard API - Tasks Module

Per-user task records with a three-value status.
"""

from taskboard.tasks.router import router as tasks_router

__all__ = ["tasks_router"]
