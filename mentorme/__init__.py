"""
MentorMe - wellness tracking data models
"""

__version__ = "3.0.0"

from mentorme.config import config

__all__ = ["config", "__version__"]
