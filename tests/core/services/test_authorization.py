"""Unit tests for capability checks."""

import pytest

from canteiro.core.entities.user import Role, UserContext
from canteiro.core.exceptions import PermissionDeniedError
from canteiro.core.services.authorization import can_access, require_capability


class TestCanAccess:
    def test_admins_reach_everything(self):
        for role in (Role.ADMIN, Role.SUPER_ADMIN):
            user = UserContext(user_id="a", role=role)
            assert can_access(user, "financeiro")

    def test_sub_user_needs_flag(self):
        user = UserContext(user_id="u", permissions={"obras": True, "veiculos": False})
        assert can_access(user, "obras")
        assert not can_access(user, "veiculos")
        assert not can_access(user, "colaboradores")

    def test_anonymous_is_denied(self):
        assert not can_access(None, "dashboard")


class TestRequireCapability:
    def test_returns_user(self):
        user = UserContext(user_id="u", permissions={"dashboard": True})
        assert require_capability(user, "dashboard") is user

    def test_raises_when_missing(self):
        user = UserContext(user_id="u")
        with pytest.raises(PermissionDeniedError) as exc_info:
            require_capability(user, "obras")
        assert exc_info.value.details == {"user_id": "u", "capability": "obras"}

    def test_raises_for_anonymous(self):
        with pytest.raises(PermissionDeniedError):
            require_capability(None, "obras")
