"""
Data models for File Courier.

This module contains the core data structures used throughout the system.
"""

from .config import CourierConfig
from .search_task import SearchTask

__all__ = ['CourierConfig', 'SearchTask']
