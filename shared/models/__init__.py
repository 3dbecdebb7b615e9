"""
Models package - Logger value type and severity levels.
"""
from shared.models.logger_model import Level, Logger

__all__ = [
    "Level",
    "Logger",
]
