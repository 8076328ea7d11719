"""HTTP tests for /api/radr/update and /api/radr/nearby."""

import pytest

NEW_YORK = {"lat": 40.7128, "lng": -74.0060}
BROOKLYN = {"lat": 40.7306, "lng": -73.9352}
LOS_ANGELES = {"lat": 34.0522, "lng": -118.2437}


@pytest.fixture
def alice(make_user):
    return make_user("alice", profile_icon="rocket")


@pytest.fixture
def bob(make_user):
    return make_user("bob", profile_icon="globe")


class TestUpdate:
    def test_requires_auth(self, client):
        resp = client.post("/api/radr/update", json=NEW_YORK)
        assert resp.status_code == 401

    def test_bad_token(self, client):
        resp = client.post("/api/radr/update", json=NEW_YORK, headers={"Authorization": "Bearer nope"})
        assert resp.status_code == 401

    def test_records_presence_with_profile_icon(self, client, registry, alice, headers_for):
        resp = client.post("/api/radr/update", json=NEW_YORK, headers=headers_for(alice))

        assert resp.status_code == 200
        assert resp.json() == {"message": "Location updated"}

        rec = registry.get(alice.id)
        assert rec.display_name == "alice"
        assert rec.profile_icon == "rocket"
        assert (rec.latitude, rec.longitude) == (NEW_YORK["lat"], NEW_YORK["lng"])

    def test_integer_coordinates_accepted(self, client, alice, headers_for):
        resp = client.post("/api/radr/update", json={"lat": 10, "lng": 20}, headers=headers_for(alice))
        assert resp.status_code == 200

    @pytest.mark.parametrize(
        "body",
        [
            {"lat": "40.7", "lng": -74.0},
            {"lat": 40.7},
            {},
            {"lat": True, "lng": -74.0},
            {"lat": None, "lng": -74.0},
            {"lat": 200, "lng": -74.0},
            {"lat": 40.7, "lng": -181},
        ],
    )
    def test_invalid_coordinates_rejected(self, client, registry, alice, headers_for, body):
        resp = client.post("/api/radr/update", json=body, headers=headers_for(alice))

        assert resp.status_code == 400
        assert len(registry) == 0


class TestNearby:
    def test_requires_auth(self, client):
        resp = client.get("/api/radr/nearby", params=NEW_YORK)
        assert resp.status_code == 401

    def test_missing_coordinates(self, client, alice, headers_for):
        resp = client.get("/api/radr/nearby", params={"lat": 40.7}, headers=headers_for(alice))
        assert resp.status_code == 400

    def test_non_numeric_coordinates(self, client, alice, headers_for):
        resp = client.get("/api/radr/nearby", params={"lat": "abc", "lng": 1}, headers=headers_for(alice))
        assert resp.status_code == 400

    def test_empty(self, client, alice, headers_for):
        resp = client.get("/api/radr/nearby", params=NEW_YORK, headers=headers_for(alice))

        assert resp.status_code == 200
        assert resp.json() == {"nearby": []}

    def test_new_york_scenario(self, client, make_user, alice, bob, headers_for):
        carol = make_user("carol")

        client.post("/api/radr/update", json=NEW_YORK, headers=headers_for(alice))
        client.post("/api/radr/update", json=BROOKLYN, headers=headers_for(bob))
        client.post("/api/radr/update", json=LOS_ANGELES, headers=headers_for(carol))

        resp = client.get("/api/radr/nearby", params=NEW_YORK, headers=headers_for(alice))
        assert resp.status_code == 200

        nearby = resp.json()["nearby"]
        assert [u["userId"] for u in nearby] == [bob.id]
        assert nearby[0]["username"] == "bob"
        assert nearby[0]["profile_icon"] == "globe"
        assert nearby[0]["distance"] == pytest.approx(6.3, abs=0.5)
        assert nearby[0]["lat"] == BROOKLYN["lat"]

    def test_custom_radius_reaches_further(self, client, make_user, alice, headers_for):
        carol = make_user("carol")
        client.post("/api/radr/update", json=LOS_ANGELES, headers=headers_for(carol))

        resp = client.get(
            "/api/radr/nearby",
            params={**NEW_YORK, "radius_km": 5000},
            headers=headers_for(alice),
        )
        assert [u["userId"] for u in resp.json()["nearby"]] == [carol.id]

    def test_never_returns_self(self, client, alice, headers_for):
        client.post("/api/radr/update", json=NEW_YORK, headers=headers_for(alice))

        resp = client.get("/api/radr/nearby", params=NEW_YORK, headers=headers_for(alice))
        assert resp.json() == {"nearby": []}

    def test_stale_users_dropped_after_next_update(self, client, clock, alice, bob, headers_for):
        client.post("/api/radr/update", json=BROOKLYN, headers=headers_for(bob))
        clock.advance(minutes=3)
        client.post("/api/radr/update", json=NEW_YORK, headers=headers_for(alice))

        resp = client.get("/api/radr/nearby", params=NEW_YORK, headers=headers_for(alice))
        assert resp.json() == {"nearby": []}
