"""End-to-end flows through the HTTP action API."""

import pytest

BASE = "/v1/actions"


@pytest.mark.e2e
class TestWellnessPlannerFlow:
    """A user organises areas, goals and reflections, then cleans up."""

    def _post(self, client, action, headers, body=None):
        response = client.post(f"{BASE}/{action}", json=body, headers=headers)
        return response

    def test_area_goal_delete_flow(self, client, auth_headers):
        area = self._post(
            client, "createWellnessArea", auth_headers, {"name": "Health", "icon": "🏃"}
        ).json()["data"]["area"]

        goal_response = self._post(
            client,
            "createWellnessGoal",
            auth_headers,
            {"areaId": area["id"], "title": "Walk 8000 steps"},
        )
        goal = goal_response.json()["data"]["goal"]
        assert goal["status"] == "not-started"
        assert goal["priority"] == "medium"

        reflection = self._post(
            client,
            "createWellnessReflection",
            auth_headers,
            {"areaId": area["id"], "goalId": goal["id"], "mood": "great", "energyLevel": 8},
        )
        assert reflection.status_code == 200

        deleted = self._post(client, "deleteWellnessArea", auth_headers, {"id": area["id"]})
        assert deleted.json() == {"success": True}

        goals = self._post(client, "listWellnessGoals", auth_headers).json()
        assert goals == {"success": True, "data": {"items": [], "total": 0}}
        reflections = self._post(client, "listWellnessReflections", auth_headers).json()["data"]
        assert reflections["items"] == []
        areas = self._post(client, "listWellnessAreas", auth_headers).json()["data"]
        assert areas["total"] == 0

    def test_two_users_never_see_each_other(self, client, auth_headers, other_auth_headers):
        mine = self._post(client, "createWellnessArea", auth_headers, {"name": "Health"}).json()
        self._post(client, "createWellnessArea", other_auth_headers, {"name": "Finance"})
        area_id = mine["data"]["area"]["id"]

        theirs = self._post(client, "listWellnessAreas", other_auth_headers).json()["data"]
        assert [a["name"] for a in theirs["items"]] == ["Finance"]

        # Every action on someone else's area looks exactly like a missing one
        for action, body in (
            ("updateWellnessArea", {"id": area_id, "name": "Hijacked"}),
            ("deleteWellnessArea", {"id": area_id}),
            ("createWellnessGoal", {"areaId": area_id, "title": "Sneaky"}),
            ("listWellnessGoals", {"areaId": area_id}),
            ("createWellnessReflection", {"areaId": area_id}),
            ("listWellnessReflections", {"areaId": area_id}),
        ):
            response = self._post(client, action, other_auth_headers, body)
            assert response.status_code == 404, action
            assert response.json()["detail"] == "Wellness area not found."

        still_mine = self._post(client, "listWellnessAreas", auth_headers).json()["data"]
        assert [a["name"] for a in still_mine["items"]] == ["Health"]

    def test_goal_lifecycle(self, client, auth_headers):
        goal = self._post(
            client, "createWellnessGoal", auth_headers, {"title": "Meditate daily"}
        ).json()["data"]["goal"]

        for status, progress in (("in-progress", 30), ("paused", 30), ("completed", 100)):
            updated = self._post(
                client,
                "updateWellnessGoal",
                auth_headers,
                {"id": goal["id"], "status": status, "progressPercent": progress},
            ).json()["data"]["goal"]
            assert updated["status"] == status
            assert updated["progressPercent"] == progress
            assert updated["title"] == "Meditate daily"

        listed = self._post(client, "listWellnessGoals", auth_headers).json()["data"]
        assert listed["items"][0]["status"] == "completed"
