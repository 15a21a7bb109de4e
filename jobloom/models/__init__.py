"""
Database models package.
"""

from jobloom.models.job import Job

__all__ = ["Job"]
