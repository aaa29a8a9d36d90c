"""
Role-Based Access Control (RBAC) Unit Tests
============================================

Tests for RBAC functionality including:
- Single-role hierarchy checks
- List-form literal membership checks
- has_any_role
- Role flags
- require_screen, require_role and require_role_or_higher dependencies
"""

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from oms.core.dependencies.rbac import (
    ROLE_INHERITANCE,
    RoleFlags,
    has_any_role,
    has_role,
    require_role,
    require_role_or_higher,
    require_screen,
)
from oms.core.permissions import Screen
from oms.models.role_enum import Role
from oms.schemas.user import CurrentUser


pytestmark = pytest.mark.rbac


class TestHasRoleSingle:
    """Tests for has_role with a single required role."""

    @pytest.mark.parametrize(
        "current,required,expected",
        [
            # Equality
            (Role.USER, Role.USER, True),
            (Role.FITTER, Role.FITTER, True),
            (Role.SUPPLIER, Role.SUPPLIER, True),
            (Role.ADMIN, Role.ADMIN, True),
            (Role.SUPERVISOR, Role.SUPERVISOR, True),
            # Supervisor inherits admin
            (Role.SUPERVISOR, Role.ADMIN, True),
            (Role.ADMIN, Role.SUPERVISOR, False),
            # Admin and supervisor inherit fitter and supplier
            (Role.ADMIN, Role.FITTER, True),
            (Role.ADMIN, Role.SUPPLIER, True),
            (Role.SUPERVISOR, Role.FITTER, True),
            (Role.SUPERVISOR, Role.SUPPLIER, True),
            # Every role satisfies USER
            (Role.FITTER, Role.USER, True),
            (Role.SUPPLIER, Role.USER, True),
            (Role.ADMIN, Role.USER, True),
            (Role.SUPERVISOR, Role.USER, True),
            # No sideways or upward inheritance
            (Role.FITTER, Role.SUPPLIER, False),
            (Role.SUPPLIER, Role.FITTER, False),
            (Role.USER, Role.FITTER, False),
            (Role.FITTER, Role.ADMIN, False),
        ],
    )
    def test_hierarchy(self, current, required, expected):
        """Test the single-role hierarchy."""
        # Act & Assert
        assert has_role(current, required) is expected

    def test_missing_role_is_denied(self):
        """Test that a missing current role never satisfies anything."""
        # Assert
        for role in Role:
            assert has_role(None, role) is False

    def test_unknown_required_role_is_denied(self):
        """Test that an unknown required role is denied."""
        # Assert
        assert has_role(Role.SUPERVISOR, "OWNER") is False
        assert has_role(Role.SUPERVISOR, None) is False

    def test_string_roles_are_accepted(self):
        """Test that exact claims are accepted and bare names are not."""
        # Assert
        assert has_role("ROLE_ADMIN", "ROLE_FITTER") is True
        assert has_role("ADMIN", "ROLE_FITTER") is False
        assert has_role("ROLE_ADMIN", "FITTER") is False

    def test_inheritance_table_is_read_only(self):
        """Test that the inheritance table cannot be modified."""
        # Act & Assert
        with pytest.raises(TypeError):
            ROLE_INHERITANCE[Role.USER] = frozenset(Role)


class TestHasRoleList:
    """Tests for has_role with a list of roles."""

    def test_admin_not_in_user_fitter_list(self):
        """Test that the list form does not apply the hierarchy."""
        # Assert
        assert has_role(Role.ADMIN, [Role.USER, Role.FITTER]) is False
        assert has_role(Role.ADMIN, Role.FITTER) is True

    def test_literal_membership(self):
        """Test that a role contained in the list passes."""
        # Assert
        assert has_role(Role.ADMIN, [Role.ADMIN, Role.FITTER]) is True
        assert has_role(Role.SUPERVISOR, [Role.SUPERVISOR]) is True

    def test_supervisor_not_in_admin_list(self):
        """Test that SUPERVISOR does not inherit ADMIN in the list form."""
        # Assert
        assert has_role(Role.SUPERVISOR, [Role.ADMIN]) is False

    @pytest.mark.parametrize("collection", [tuple, set, frozenset])
    def test_other_collections(self, collection):
        """Test tuples and sets behave like lists."""
        # Assert
        assert has_role(Role.FITTER, collection([Role.FITTER])) is True
        assert has_role(Role.ADMIN, collection([Role.FITTER])) is False

    def test_empty_list_is_denied(self):
        """Test that an empty list is never satisfied."""
        # Assert
        assert has_role(Role.SUPERVISOR, []) is False

    def test_missing_role_is_denied(self):
        """Test that a missing current role is denied."""
        # Assert
        assert has_role(None, [Role.USER]) is False


class TestHasAnyRole:
    """Tests for has_any_role."""

    @pytest.mark.parametrize(
        "current,roles,expected",
        [
            (Role.ADMIN, [Role.USER, Role.FITTER], True),
            (Role.ADMIN, [Role.SUPERVISOR], False),
            (Role.USER, [Role.USER], True),
            (Role.SUPERVISOR, [Role.ADMIN], True),
            (Role.FITTER, [Role.SUPPLIER, Role.ADMIN], False),
            (None, [Role.USER], False),
            (Role.ADMIN, [], False),
            (Role.ADMIN, Role.ADMIN, False),
        ],
    )
    def test_any_role(self, current, roles, expected):
        """Test that each entry is checked with the hierarchy."""
        # Act & Assert
        assert has_any_role(current, roles) is expected


class TestRoleFlags:
    """Tests for RoleFlags."""

    def test_admin_flags(self):
        """Test flags for ADMIN."""
        # Act
        flags = RoleFlags.from_role(Role.ADMIN)

        # Assert
        assert flags == RoleFlags(is_admin=True)

    def test_supervisor_flags(self):
        """Test that SUPERVISOR also counts as admin."""
        # Act
        flags = RoleFlags.from_role(Role.SUPERVISOR)

        # Assert
        assert flags.is_admin is True
        assert flags.is_supervisor is True
        assert flags.is_fitter is False

    @pytest.mark.parametrize(
        "role,attribute",
        [
            (Role.FITTER, "is_fitter"),
            (Role.SUPPLIER, "is_supplier"),
            (Role.USER, "is_user"),
        ],
    )
    def test_exact_flags(self, role, attribute):
        """Test that non-admin roles raise only their own flag."""
        # Act
        flags = RoleFlags.from_role(role)

        # Assert
        assert getattr(flags, attribute) is True
        assert flags.is_admin is False

    def test_missing_role_flags(self):
        """Test that every flag is False without a role."""
        # Assert
        assert RoleFlags.from_role(None) == RoleFlags()


# =====================================
# Dependency Tests
# =====================================

@pytest.fixture
def guarded_client() -> TestClient:
    """Small app exercising the RBAC dependencies."""
    app = FastAPI()

    @app.get("/reports")
    def reports(user: CurrentUser = Depends(require_screen(Screen.REPORTS))):
        return {"username": user.username}

    @app.get("/fitters-only")
    def fitters_only(user: CurrentUser = Depends(require_role(Role.FITTER))):
        return {"role": user.role.value}

    @app.get("/fitter-or-higher")
    def fitter_or_higher(user: CurrentUser = Depends(require_role_or_higher(Role.FITTER))):
        return {"role": user.role.value}

    return TestClient(app)


class TestRequireScreen:
    """Tests for the require_screen dependency."""

    def test_allowed_role_passes(self, guarded_client, auth_headers):
        """Test that ADMIN can open REPORTS."""
        # Act
        response = guarded_client.get("/reports", headers=auth_headers(Role.ADMIN, "laurengilbert"))

        # Assert
        assert response.status_code == 200
        assert response.json() == {"username": "laurengilbert"}

    def test_supervisor_inherits(self, guarded_client, auth_headers):
        """Test that SUPERVISOR can open REPORTS through ADMIN."""
        # Act
        response = guarded_client.get("/reports", headers=auth_headers(Role.SUPERVISOR))

        # Assert
        assert response.status_code == 200

    def test_denied_role_gets_403(self, guarded_client, auth_headers):
        """Test that FITTER cannot open REPORTS."""
        # Act
        response = guarded_client.get("/reports", headers=auth_headers(Role.FITTER))

        # Assert
        assert response.status_code == 403
        assert response.json()["detail"] == "Insufficient permissions for this action"

    def test_missing_token_gets_401(self, guarded_client):
        """Test that an anonymous request is rejected."""
        # Act
        response = guarded_client.get("/reports")

        # Assert
        assert response.status_code == 401


class TestRequireRole:
    """Tests for require_role and require_role_or_higher."""

    def test_exact_role_passes(self, guarded_client, auth_headers):
        """Test that FITTER passes require_role(FITTER)."""
        # Act
        response = guarded_client.get("/fitters-only", headers=auth_headers(Role.FITTER))

        # Assert
        assert response.status_code == 200

    def test_admin_fails_exact_role(self, guarded_client, auth_headers):
        """Test that require_role does not apply the hierarchy."""
        # Act
        response = guarded_client.get("/fitters-only", headers=auth_headers(Role.ADMIN))

        # Assert
        assert response.status_code == 403

    def test_admin_passes_or_higher(self, guarded_client, auth_headers):
        """Test that require_role_or_higher applies the hierarchy."""
        # Act
        response = guarded_client.get("/fitter-or-higher", headers=auth_headers(Role.ADMIN))

        # Assert
        assert response.status_code == 200
        assert response.json() == {"role": "ADMIN"}

    def test_supplier_fails_or_higher(self, guarded_client, auth_headers):
        """Test that SUPPLIER does not satisfy FITTER."""
        # Act
        response = guarded_client.get("/fitter-or-higher", headers=auth_headers(Role.SUPPLIER))

        # Assert
        assert response.status_code == 403
