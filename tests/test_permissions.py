"""
Capability checks shared by the routers.
"""
import pytest

from app.exceptions import Forbidden
from app.utils.permissions import Caller, Capability, authorize, has_capability

USER = Caller(user_id=1, username="alice")
ADMIN = Caller(user_id=2, username="admin", is_admin=True)


@pytest.mark.parametrize("capability", list(Capability))
def test_admin_has_every_capability(capability):
    assert has_capability(ADMIN, capability)
    assert has_capability(ADMIN, capability, owner_id=USER.user_id)


@pytest.mark.parametrize(
    "capability",
    [
        Capability.MANAGE_CATALOG,
        Capability.VIEW_USERS,
        Capability.VIEW_LOGS,
        Capability.VIEW_ALL_REGISTRATIONS,
        Capability.BOOK_FOR_OTHERS,
        Capability.SET_REGISTRATION_STATUS,
    ],
)
def test_user_lacks_admin_capabilities(capability):
    assert not has_capability(USER, capability)
    # Owning something does not unlock an admin-only capability
    assert not has_capability(USER, capability, owner_id=USER.user_id)
    with pytest.raises(Forbidden):
        authorize(USER, capability)


def test_owner_capabilities():
    assert has_capability(USER, Capability.ACT_ON_REGISTRATION, owner_id=1)
    assert has_capability(USER, Capability.VIEW_USER_REGISTRATIONS, owner_id=1)
    assert not has_capability(USER, Capability.ACT_ON_REGISTRATION, owner_id=99)
    assert not has_capability(USER, Capability.ACT_ON_REGISTRATION)

    authorize(USER, Capability.ACT_ON_REGISTRATION, owner_id=1)
    with pytest.raises(Forbidden):
        authorize(USER, Capability.VIEW_USER_REGISTRATIONS, owner_id=99)
