"""Doctor shift scheduling, roster management, schedule views and performance reports."""

__version__ = "0.1.0"

__all__ = ["cli", "doctors", "report", "scheduler", "views"]