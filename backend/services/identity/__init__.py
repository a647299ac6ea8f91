"""
Identity directory service.

This module handles:
    - Registering riders and drivers
    - Resolving users by phone number or id
"""

from .directory import register, find_by_phone, find_by_id
from .exceptions import DuplicatePhoneError

__all__ = [
    "register",
    "find_by_phone",
    "find_by_id",
    "DuplicatePhoneError",
]
