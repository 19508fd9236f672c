# mentorme/services/__init__.py

"""
MentorMe services

Stateless calculators that work on model records.
"""

from .habit_service import HabitService

__all__ = ["HabitService"]
