"""skillsync — discover agent skills and keep IDE skill folders in sync."""

__version__ = "0.1.0"
