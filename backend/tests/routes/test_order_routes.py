"""
Order Routes Tests
==================

Tests for GET /api/v1/enriched-orders including:
- Fitter scoping of the listing
- Screen access per role
- Collection shape and pagination links
- Filter validation
"""

from datetime import timedelta

import pytest

from oms.models.role_enum import Role
from oms.services.auth_service import AuthService


pytestmark = pytest.mark.integration

ORDERS_URL = "/api/v1/enriched-orders"


def member_ids(response) -> list:
    return [member["orderId"] for member in response.json()["hydra:member"]]


class TestFitterScoping:
    """Tests for the automatic fitter filter on the listing."""

    def test_fitter_sees_only_own_orders(self, client, fitter_headers, sample_orders):
        """Test that a fitter without filters only gets its own orders."""
        # Act
        response = client.get(ORDERS_URL, headers=fitter_headers)

        # Assert
        assert response.status_code == 200
        assert member_ids(response) == [1005, 1003, 1001]
        assert response.json()["hydra:totalItems"] == 3

    def test_fitter_scope_combines_with_filters(self, client, fitter_headers, sample_orders):
        """Test that other filters narrow within the fitter scope."""
        # Act
        response = client.get(
            ORDERS_URL,
            params={"orderStatus": "pending"},
            headers=fitter_headers,
        )

        # Assert
        assert member_ids(response) == [1005, 1001]

    def test_explicit_fitter_username_is_kept(self, client, fitter_headers, sample_orders):
        """Test that an explicit fitterUsername is not overridden."""
        # Act
        response = client.get(
            ORDERS_URL,
            params={"fitterUsername": "bob.fitter"},
            headers=fitter_headers,
        )

        # Assert
        assert member_ids(response) == [1004, 1002]

    def test_empty_fitter_username_is_replaced(self, client, fitter_headers, sample_orders):
        """Test that an empty fitterUsername still scopes to the fitter."""
        # Act
        response = client.get(
            ORDERS_URL,
            params={"fitterUsername": ""},
            headers=fitter_headers,
        )

        # Assert
        assert member_ids(response) == [1005, 1003, 1001]

    def test_fitter_token_without_username(self, client, auth_headers, sample_orders):
        """Test that a fitter token without a username is not scoped."""
        # Act
        response = client.get(ORDERS_URL, headers=auth_headers(Role.FITTER, username=None))

        # Assert
        assert response.status_code == 200
        assert response.json()["hydra:totalItems"] == 5

    @pytest.mark.parametrize("headers_fixture", ["admin_headers", "supervisor_headers", "user_headers"])
    def test_other_roles_see_everything(self, client, request, headers_fixture, sample_orders):
        """Test that non-fitter roles get the unscoped listing."""
        # Arrange
        headers = request.getfixturevalue(headers_fixture)

        # Act
        response = client.get(ORDERS_URL, headers=headers)

        # Assert
        assert response.status_code == 200
        assert member_ids(response) == [1005, 1004, 1003, 1002, 1001]


class TestAccess:
    """Tests for screen access on the listing."""

    def test_supplier_is_forbidden(self, client, supplier_headers, sample_orders):
        """Test that suppliers cannot open the order listing."""
        # Act
        response = client.get(ORDERS_URL, headers=supplier_headers)

        # Assert
        assert response.status_code == 403

    def test_missing_token(self, client, sample_orders):
        """Test that the listing requires authentication."""
        # Act
        response = client.get(ORDERS_URL)

        # Assert
        assert response.status_code == 401

    def test_expired_token(self, client, sample_orders):
        """Test that an expired token is rejected with its own message."""
        # Arrange
        token = AuthService.create_access_token(
            1, "laurengilbert", Role.ADMIN, expires_delta=timedelta(seconds=-10)
        )

        # Act
        response = client.get(ORDERS_URL, headers={"Authorization": f"Bearer {token}"})

        # Assert
        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"


class TestCollectionShape:
    """Tests for the collection body."""

    def test_member_fields_are_camel_case(self, client, admin_headers, sample_orders):
        """Test the member field names."""
        # Act
        response = client.get(ORDERS_URL, params={"orderId": "1002"}, headers=admin_headers)

        # Assert
        member = response.json()["hydra:member"][0]
        assert member["orderId"] == 1002
        assert member["orderStatus"] == "approved"
        assert member["customerName"] == "Bob Horseman"
        assert member["fitterName"] == "Bob Fitter"
        assert member["fitterUsername"] == "bob.fitter"
        assert member["supplierName"] == "Acme Saddlery"
        assert member["urgent"] is True
        assert "createdAt" in member

    def test_pagination_and_links(self, client, admin_headers, sample_orders):
        """Test pagination metadata and hydra view links."""
        # Act
        response = client.get(ORDERS_URL, params={"page": 2, "limit": 2}, headers=admin_headers)

        # Assert
        data = response.json()
        assert member_ids(response) == [1003, 1002]
        assert data["pagination"] == {
            "totalItems": 5,
            "totalPages": 3,
            "currentPage": 2,
            "itemsPerPage": 2,
            "hasNext": True,
            "hasPrevious": True,
        }

        view = data["hydra:view"]
        assert view["@id"].startswith(ORDERS_URL)
        assert "page=2" in view["@id"]
        assert "page=1" in view["hydra:first"]
        assert "page=3" in view["hydra:last"]
        assert "page=3" in view["hydra:next"]
        assert "page=1" in view["hydra:previous"]
        assert "limit=2" in view["hydra:next"]

    def test_last_page_has_no_next(self, client, admin_headers, sample_orders):
        """Test that the last page has no next link."""
        # Act
        response = client.get(ORDERS_URL, params={"page": 3, "limit": 2}, headers=admin_headers)

        # Assert
        view = response.json()["hydra:view"]
        assert view["hydra:next"] is None
        assert member_ids(response) == [1001]

    def test_search_and_sort(self, client, admin_headers, sample_orders):
        """Test search with an ascending sort."""
        # Act
        response = client.get(
            ORDERS_URL,
            params={"searchTerm": "Acme", "orderBy": "orderId", "order": "asc"},
            headers=admin_headers,
        )

        # Assert
        assert member_ids(response) == [1001, 1002, 1005]

    def test_superscript_digit_search(self, client, admin_headers, sample_orders):
        """Test that a non-ASCII digit search term is a plain text search."""
        # Act
        response = client.get(ORDERS_URL, params={"searchTerm": "²"}, headers=admin_headers)

        # Assert
        assert response.status_code == 200
        assert response.json()["hydra:totalItems"] == 0

    def test_wildcard_search(self, client, admin_headers, sample_orders):
        """Test that a percent sign does not match every order."""
        # Act
        response = client.get(ORDERS_URL, params={"searchTerm": "%"}, headers=admin_headers)

        # Assert
        assert response.status_code == 200
        assert response.json()["hydra:totalItems"] == 0

    def test_empty_listing(self, client, admin_headers, db_session):
        """Test the listing with no orders."""
        # Act
        response = client.get(ORDERS_URL, headers=admin_headers)

        # Assert
        data = response.json()
        assert data["hydra:member"] == []
        assert data["hydra:totalItems"] == 0
        assert data["pagination"]["totalPages"] == 0


class TestValidation:
    """Tests for invalid listing parameters."""

    def test_invalid_order_id(self, client, admin_headers, sample_orders):
        """Test that a non-numeric orderId is rejected."""
        # Act
        response = client.get(ORDERS_URL, params={"orderId": "abc"}, headers=admin_headers)

        # Assert
        assert response.status_code == 422

    def test_invalid_urgent(self, client, admin_headers, sample_orders):
        """Test that a non-boolean urgent value is rejected."""
        # Act
        response = client.get(ORDERS_URL, params={"urgent": "maybe"}, headers=admin_headers)

        # Assert
        assert response.status_code == 422

    def test_invalid_sort_direction(self, client, admin_headers, sample_orders):
        """Test that an unknown sort direction is rejected."""
        # Act
        response = client.get(ORDERS_URL, params={"order": "sideways"}, headers=admin_headers)

        # Assert
        assert response.status_code == 422

    def test_page_must_be_positive(self, client, admin_headers, sample_orders):
        """Test that page 0 is rejected."""
        # Act
        response = client.get(ORDERS_URL, params={"page": 0}, headers=admin_headers)

        # Assert
        assert response.status_code == 422
