from enum import Enum


class RegistrationStatus(str, Enum):
    """Lifecycle of a trip registration"""

    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"


# Allowed moves between states. Cancelled is terminal.
ALLOWED_TRANSITIONS = {
    RegistrationStatus.PENDING: {
        RegistrationStatus.CONFIRMED,
        RegistrationStatus.CANCELLED,
    },
    RegistrationStatus.CONFIRMED: {
        RegistrationStatus.PENDING,
        RegistrationStatus.CANCELLED,
    },
    RegistrationStatus.CANCELLED: set(),
}


def can_transition(current: RegistrationStatus, new: RegistrationStatus) -> bool:
    if current == new:
        return True
    return new in ALLOWED_TRANSITIONS[current]


# Statuses whose participants are counted against a trip's capacity
ACTIVE_STATUSES = (RegistrationStatus.PENDING, RegistrationStatus.CONFIRMED)
