# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
WordPress user lookup and role checks.

Assumptions:
- Users log in with either user_login or user_email
- Roles are stored in usermeta "<prefix>capabilities" as a PHP-serialized
  array such as a:1:{s:13:"administrator";b:1;}
- Several historical prefixes exist on the same install, any of them counts
"""
from typing import Optional

import phpserialize
from sqlalchemy import or_
from sqlalchemy.orm import Session

from lppm.auth.password import verify_password
from lppm.config import settings
from lppm.database.schema import UserMeta, WPUser

LEGACY_CAPABILITY_KEYS = (
    "2022_capabilities",
    "wp_capabilities",
    "lppm_capabilities",
)


def capability_keys() -> list[str]:
    """Return the usermeta keys that may hold a user's roles."""
    keys = list(LEGACY_CAPABILITY_KEYS)
    configured = f"{settings.wp_table_prefix}capabilities"
    if configured not in keys:
        keys.append(configured)
    return keys


def get_user_by_login(session: Session, username: str) -> Optional[WPUser]:
    """Get a user by login name or email address.

    Args:
        session: Database session
        username: user_login or user_email

    Returns:
        WPUser: First matching user or None
    """
    return (
        session.query(WPUser)
        .filter(or_(WPUser.user_login == username, WPUser.user_email == username))
        .order_by(WPUser.id)
        .first()
    )


def has_administrator_role(serialized: Optional[str]) -> bool:
    """Decide whether a capabilities meta value grants the administrator role.

    Args:
        serialized: Raw meta_value

    Returns:
        bool: True when the "administrator" capability is set

    Assumptions:
    - A value that does not unserialize to an array falls back to a plain
      substring check, as WordPress plugins sometimes store plain strings
    """
    if not serialized:
        return False

    try:
        roles = phpserialize.loads(serialized.encode("utf-8"), decode_strings=True)
    except ValueError:
        roles = None

    if isinstance(roles, dict):
        return bool(roles.get("administrator"))

    return "administrator" in serialized


def is_administrator(session: Session, user_id: int) -> bool:
    """Check whether a WordPress user has the administrator role.

    Args:
        session: Database session
        user_id: WordPress user ID

    Returns:
        bool: True if the first capabilities row grants administrator
    """
    serialized = (
        session.query(UserMeta.meta_value)
        .filter(UserMeta.user_id == user_id, UserMeta.meta_key.in_(capability_keys()))
        .order_by(UserMeta.umeta_id)
        .limit(1)
        .scalar()
    )
    return has_administrator_role(serialized)


def authenticate_user(session: Session, username: str, password: str) -> Optional[WPUser]:
    """Authenticate a user by login/email and password.

    Args:
        session: Database session
        username: user_login or user_email
        password: Plain text password

    Returns:
        WPUser: User if credentials are valid, None otherwise

    Assumptions:
    - Role is not checked here, see is_administrator
    """
    user = get_user_by_login(session, username)
    if user is None:
        return None

    if not verify_password(password, user.user_pass):
        return None

    return user
