"""
Role and ownership checks shared by every router.

The authenticated caller is passed around explicitly as a ``Caller``; there
is no request-global "current user".
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from app.exceptions import Forbidden


@dataclass(frozen=True)
class Caller:
    user_id: int
    username: str
    is_admin: bool = False


class Capability(str, Enum):
    MANAGE_CATALOG = "manage_catalog"  # trips, destinations, guides
    VIEW_USERS = "view_users"
    VIEW_LOGS = "view_logs"
    VIEW_ALL_REGISTRATIONS = "view_all_registrations"
    BOOK_FOR_OTHERS = "book_for_others"
    SET_REGISTRATION_STATUS = "set_registration_status"
    ACT_ON_REGISTRATION = "act_on_registration"
    VIEW_USER_REGISTRATIONS = "view_user_registrations"


# Granted to the owner of the resource as well as to admins
OWNER_CAPABILITIES = {
    Capability.ACT_ON_REGISTRATION,
    Capability.VIEW_USER_REGISTRATIONS,
}


def has_capability(
    caller: Caller, capability: Capability, owner_id: Optional[int] = None
) -> bool:
    if caller.is_admin:
        return True
    if capability in OWNER_CAPABILITIES:
        return owner_id is not None and owner_id == caller.user_id
    return False


def authorize(
    caller: Caller, capability: Capability, owner_id: Optional[int] = None
) -> None:
    if not has_capability(caller, capability, owner_id):
        raise Forbidden()
