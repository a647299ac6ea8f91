"""
Identity directory.

Owns registration of riders and drivers and the lookups the ride core
needs. Phone numbers are unique across all users; the uniqueness check is
backed by a database constraint so two concurrent registrations with the
same phone cannot both succeed.
"""

import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from .exceptions import DuplicatePhoneError

User = get_user_model()
logger = logging.getLogger(__name__)


def register(name: str, phone: str, role: str) -> User:
    """
    Register a new user.

    Args:
        name: Display name
        phone: Phone number, unique across all users
        role: ``User.RIDER`` or ``User.DRIVER``

    Returns:
        The created User

    Raises:
        DuplicatePhoneError: If a user with this phone already exists
        ValueError: If role is not a known role
    """
    if role not in dict(User.ROLE_CHOICES):
        raise ValueError(f"Unknown role: {role!r}")

    if User.objects.filter(phone_number=phone).exists():
        raise DuplicatePhoneError()

    try:
        with transaction.atomic():
            user = User(username=phone, name=name, phone_number=phone, role=role)
            user.set_unusable_password()
            user.save()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same phone
        raise DuplicatePhoneError()

    logger.info("Registered %s user_id=%s", role, user.id)
    return user


def find_by_phone(phone: str) -> Optional[User]:
    return User.objects.filter(phone_number=phone).first()


def find_by_id(user_id) -> Optional[User]:
    try:
        return User.objects.filter(id=user_id).first()
    except (TypeError, ValueError):
        # Not a well-formed id, so it cannot name a user
        return None
