"""
Restaurant API — Roles and the per-request permission check
"""
from enum import Enum as PyEnum
from typing import Iterable


class Role(str, PyEnum):
    ADMIN = "admin"
    STAFF = "staff"
    CUSTOMER = "customer"


STAFF_ROLES = (Role.ADMIN, Role.STAFF)


def is_allowed(role: str | Role | None, required: Iterable[Role]) -> bool:
    """True when `role` is one of `required`. An empty `required` admits any known role."""
    try:
        role = Role(role)
    except ValueError:
        return False
    required = tuple(required)
    return not required or role in required
