"""Tests for lineup, swimmer, result, and import endpoints."""

from fastapi.testclient import TestClient


class TestLineup:
    """Tests for lineup endpoints."""

    def test_reseed_and_get(self, client: TestClient):
        response = client.post("/api/v1/meets/Dual A/lineup/reseed")
        assert response.status_code == 200
        assert [row["position"] for row in response.json()] == [1, 2, 3, 4]

        rows = client.get("/api/v1/meets/Dual A/lineup").json()
        assert rows[0]["event_name"] == "200 Medley Relay"

    def test_save_and_check(self, client: TestClient):
        lineup = [
            {"active": True, "event_name": "200 Medley Relay", "type": "Relay", "relay_legs": ["Avery", "Avery", "Blake", ""]},
            {"active": True, "event_name": "50 Freestyle (JV)", "type": "Individual", "individual_swimmer": "Casey"},
        ]
        response = client.put("/api/v1/meets/Dual A/lineup", json=lineup)
        assert response.status_code == 200, response.text

        report = client.get("/api/v1/meets/Dual A/lineup/check").json()
        assert report["has_violations"] is True
        assert report["duplicate_leg"] == [
            {"row": 1, "event_name": "200 Medley Relay", "duplicate_names": ["Avery"]}
        ]
        assert report["level_mismatch"] == [
            {"row": 2, "event_name": "50 Freestyle (JV)", "swimmer": "Casey"}
        ]
        assert report["over_limit"] == []
        assert len(report["utilization"]) == 4

    def test_too_many_legs_rejected(self, client: TestClient):
        lineup = [{"active": True, "event_name": "200 Medley Relay", "type": "Relay", "relay_legs": ["A", "B", "C", "D", "E"]}]
        assert client.put("/api/v1/meets/Dual A/lineup", json=lineup).status_code == 422

    def test_apply_presets(self, client: TestClient, daos):
        client.post("/api/v1/presets/ensure")
        client.post("/api/v1/meets/Dual A/lineup/reseed")
        client.patch("/api/v1/meets/Dual A/presets/200 Medley Relay", json={"active": False})

        response = client.post("/api/v1/meets/Dual A/lineup/apply-presets")
        assert response.status_code == 200
        assert [row["active"] for row in response.json()] == [False, True, False, True]

    def test_packet(self, client: TestClient):
        response = client.get("/api/v1/meets/Dual A/lineup/packet")
        assert response.status_code == 200
        assert response.json()[0]["event"] == "(no active events)"

    def test_unknown_meet(self, client: TestClient):
        assert client.get("/api/v1/meets/Nowhere/lineup/check").status_code == 404
        assert client.post("/api/v1/meets/Nowhere/lineup/reseed").status_code == 404


class TestSwimmersAndResults:
    """Tests for swimmer, result, and PR endpoints."""

    def test_save_swimmer_with_prs(self, client: TestClient):
        payload = {"name": "Emery", "level": "JV", "date": "2025-09-01", "prs": {"50 Freestyle": "29.10"}}
        response = client.post("/api/v1/swimmers", json=payload)
        assert response.status_code == 200, response.text
        assert response.json() == {"created": True, "pr_count": 1}

        dashboard = client.get("/api/v1/swimmers/Emery/dashboard").json()
        assert dashboard[0]["best_meet"] == "PR Baseline"
        assert dashboard[0]["best_time_formatted"] == "29.10"

    def test_result_and_prs(self, client: TestClient):
        for final, day in (("27.00", "2025-12-01"), ("26.50", "2025-12-08")):
            response = client.post(
                "/api/v1/results",
                json={"meet": "Dual A", "event": "50 Freestyle", "swimmer": "Avery", "final_time": final, "date": day},
            )
            assert response.status_code == 201, response.text

        [record] = client.get("/api/v1/prs").json()
        assert record["best_time_formatted"] == "26.50"
        assert record["race_count"] == 2

        assert len(client.get("/api/v1/results", params={"swimmer": "Avery"}).json()) == 2
        assert client.get("/api/v1/prs/Avery/50 Freestyle").status_code == 200
        assert client.get("/api/v1/prs/Avery/100 Butterfly").status_code == 404

    def test_bad_time_rejected(self, client: TestClient, daos):
        response = client.post(
            "/api/v1/results",
            json={"meet": "Dual A", "event": "50 Freestyle", "swimmer": "Avery", "final_time": "fast"},
        )
        assert response.status_code == 400
        assert daos["results"].count() == 0


class TestImport:
    def test_import_meets(self, client: TestClient):
        payload = {
            "rows": [["Meet", "Date", "Location", "Course", "Notes", "Has JV?"], ["Dual B", "2026-01-09", "", "", "", "n"], ["Dual A"]],
            "has_header": True,
        }
        response = client.post("/api/v1/import/meets", json=payload)
        assert response.status_code == 200
        body = response.json()
        assert body["inserted"] == 1
        assert body["skipped"][0]["row_number"] == 3

    def test_unknown_kind(self, client: TestClient):
        assert client.post("/api/v1/import/teams", json={"rows": []}).status_code == 422
