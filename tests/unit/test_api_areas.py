"""HTTP tests for the wellness area actions."""

import pytest

BASE = "/v1/actions"


def _create_area(client, headers, **fields):
    body = {"name": "Health", **fields}
    response = client.post(f"{BASE}/createWellnessArea", json=body, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["data"]["area"]


@pytest.mark.unit
class TestAreaEndpoints:
    """createWellnessArea / listWellnessAreas / updateWellnessArea / deleteWellnessArea."""

    def test_create_area_envelope(self, client, auth_headers, user_a):
        response = client.post(
            f"{BASE}/createWellnessArea",
            json={"name": "Health", "description": "Body", "icon": "🏃", "sortOrder": 2},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        area = body["data"]["area"]
        assert area["name"] == "Health"
        assert area["sortOrder"] == 2
        assert area["userId"] == user_a
        assert area["createdAt"] == area["updatedAt"]
        assert "created_at" not in area

    def test_snake_case_input_is_accepted(self, client, auth_headers):
        area = _create_area(client, auth_headers, sort_order=5)

        assert area["sortOrder"] == 5

    def test_list_areas(self, client, auth_headers, other_auth_headers):
        _create_area(client, auth_headers, name="Health")
        _create_area(client, auth_headers, name="Finance")
        _create_area(client, other_auth_headers, name="Career")

        response = client.post(f"{BASE}/listWellnessAreas", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total"] == 2
        assert sorted(a["name"] for a in data["items"]) == ["Finance", "Health"]

    def test_list_without_token_is_unauthorized(self, client):
        response = client.post(f"{BASE}/listWellnessAreas")

        assert response.status_code == 401
        assert response.headers["content-type"] == "application/problem+json"
        problem = response.json()
        assert problem["success"] is False
        assert problem["code"] == "UNAUTHORIZED"
        assert problem["detail"] == "You must be signed in to perform this action."

    def test_update_area_partial(self, client, auth_headers):
        area = _create_area(client, auth_headers, description="Body", icon="💪")

        response = client.post(
            f"{BASE}/updateWellnessArea",
            json={"id": area["id"], "name": "Fitness"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        updated = response.json()["data"]["area"]
        assert updated["name"] == "Fitness"
        assert updated["description"] == "Body"
        assert updated["icon"] == "💪"
        assert updated["createdAt"] == area["createdAt"]

    def test_update_with_null_name_is_validation_error(self, client, auth_headers):
        area = _create_area(client, auth_headers)

        response = client.post(
            f"{BASE}/updateWellnessArea",
            json={"id": area["id"], "name": None},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_update_foreign_area_is_not_found(self, client, auth_headers, other_auth_headers):
        area = _create_area(client, auth_headers)

        response = client.post(
            f"{BASE}/updateWellnessArea",
            json={"id": area["id"], "name": "Mine"},
            headers=other_auth_headers,
        )

        assert response.status_code == 404
        problem = response.json()
        assert problem["code"] == "NOT_FOUND"
        assert problem["detail"] == "Wellness area not found."

    def test_create_without_name_is_validation_error(self, client, auth_headers):
        response = client.post(
            f"{BASE}/createWellnessArea", json={"description": "nameless"}, headers=auth_headers
        )

        assert response.status_code == 422
        problem = response.json()
        assert problem["code"] == "VALIDATION_ERROR"
        assert problem["success"] is False
        assert problem["errors"]

    def test_delete_area(self, client, auth_headers):
        area = _create_area(client, auth_headers)

        response = client.post(
            f"{BASE}/deleteWellnessArea", json={"id": area["id"]}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}
        listed = client.post(f"{BASE}/listWellnessAreas", headers=auth_headers).json()
        assert listed["data"]["items"] == []

    def test_delete_with_malformed_id(self, client, auth_headers):
        response = client.post(
            f"{BASE}/deleteWellnessArea", json={"id": "not-a-uuid"}, headers=auth_headers
        )

        assert response.status_code == 422
