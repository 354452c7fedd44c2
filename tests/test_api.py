"""
Tests for the HTTP API.
"""

import sys
import os

from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sportsday.main import app

client = TestClient(app)


def team_payload(count):
    return [{"id": f"T{i}", "name": f"{i}-A"} for i in range(1, count + 1)]


def match_payload(count):
    return [
        {"id": f"m{i}", "team1Id": f"T{2 * i - 1}", "team2Id": f"T{2 * i}", "matchNumber": i}
        for i in range(1, count + 1)
    ]


def test_health_and_root():
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"

    assert client.get("/").json()["endpoints"]["schedule"] == "/api/schedule"


def test_create_blocks():
    response = client.post("/api/blocks", json={"teams": team_payload(6), "blockCount": 2, "seed": 1})
    assert response.status_code == 200

    body = response.json()
    assert [len(block["teamIds"]) for block in body["blocks"]] == [3, 3]
    assert [len(block["matches"]) for block in body["blocks"]] == [3, 3]
    assert body["blocks"][0]["matches"][0]["status"] == "scheduled"
    assert all(team["blockId"] in ("block_1", "block_2") for team in body["teams"])


def test_standings():
    response = client.post("/api/standings", json={
        "teamIds": ["A", "B"],
        "matches": [{"id": "m1", "team1Id": "A", "team2Id": "B", "team1Score": 0,
                     "team2Score": 2, "status": "completed", "winnerId": "B"}],
    })
    body = response.json()
    assert body["ranking"] == ["B", "A"]
    assert body["standings"][0]["points"] == 3
    assert body["standings"][0]["goalDifference"] == 2

    bad = client.post("/api/standings", json={"teamIds": [], "matches": [], "settings": {"rankingMethod": "luck"}})
    assert bad.status_code == 422


def test_playoff_generation_and_update():
    blocks = [
        {"id": "block_1", "name": "Block A", "teamIds": ["A1", "A2"], "matches": [
            {"id": "match_block_1_1", "team1Id": "A1", "team2Id": "A2", "team1Score": 1,
             "team2Score": 0, "status": "completed", "blockId": "block_1"}]},
        {"id": "block_2", "name": "Block B", "teamIds": ["B1", "B2"], "matches": [
            {"id": "match_block_2_1", "team1Id": "B1", "team2Id": "B2", "team1Score": 3,
             "team2Score": 1, "status": "completed", "blockId": "block_2"}]},
    ]
    response = client.post("/api/playoff", json={"blocks": blocks, "advancingTeams": 2, "hasThirdPlaceMatch": True})
    body = response.json()

    assert response.status_code == 200
    assert body["success"]
    assert len(body["matches"]) == 4
    assert sum(1 for m in body["matches"] if m["matchNumber"] == 0) == 1

    matches = body["matches"]
    for match in matches:
        if match["round"] == 1:
            match["team1Score"], match["team2Score"], match["status"] = 1, 0, "completed"
            match["winnerId"] = match["team1Id"]
    updated = client.post("/api/playoff/update", json={"matches": matches}).json()["matches"]

    final = next(m for m in updated if m["id"] == "playoff_match_2_1")
    third = next(m for m in updated if m["matchNumber"] == 0)
    assert (final["team1Id"], final["team2Id"]) == ("A1", "B1")
    assert (third["team1Id"], third["team2Id"]) == ("B2", "A2")


def test_playoff_failure_is_not_an_http_error():
    response = client.post("/api/playoff", json={"blocks": [], "advancingTeams": 2})
    assert response.status_code == 200
    assert response.json()["success"] is False
    assert response.json()["matches"] == []


def test_schedule():
    response = client.post("/api/schedule", json={
        "sport": {"id": "s1", "name": "Futsal", "type": "roundRobin",
                  "teams": team_payload(4), "matches": match_payload(2)},
        "settings": {"startTime": "09:00", "endTime": "10:00", "courtCount": 2,
                     "lunchBreak": {"startTime": "09:40", "endTime": "10:00", "title": "Lunch"}},
        "seed": 3,
    })
    assert response.status_code == 200

    body = response.json()
    assert body["totalMatches"] == 2
    assert [slot["type"] for slot in body["timeSlots"]] == ["match", "match", "lunch"]
    assert {slot["courtId"] for slot in body["timeSlots"][:2]} == {"court1", "court2"}


def test_schedule_failure_maps_to_422():
    response = client.post("/api/schedule", json={
        "sport": {"id": "s1", "name": "Futsal", "type": "roundRobin",
                  "teams": team_payload(6), "matches": match_payload(3)},
        "settings": {"startTime": "09:00", "endTime": "10:00", "matchDuration": 20, "breakDuration": 5},
        "shuffle": False,
    })
    assert response.status_code == 422
    assert "Cannot fit all matches" in response.json()["detail"]

    response = client.post("/api/schedule", json={
        "sport": {"id": "s1", "name": "Futsal", "type": "tournament"},
    })
    assert response.status_code == 422


def test_swap_and_validate():
    slots = [
        {"startTime": "09:00", "endTime": "09:20", "type": "match", "courtId": "court1", "matchId": "m1"},
        {"startTime": "09:25", "endTime": "09:45", "type": "match", "courtId": "court1", "matchId": "m2"},
    ]
    swapped = client.post("/api/schedule/swap", json={"timeSlots": slots, "first": 0, "second": 1}).json()
    assert [s["matchId"] for s in swapped["timeSlots"]] == ["m2", "m1"]
    assert swapped["timeSlots"][0]["startTime"] == "09:00"

    assert client.post("/api/schedule/swap", json={"timeSlots": slots, "first": 0, "second": 7}).status_code == 400

    result = client.post("/api/schedule/validate", json={
        "timeSlots": swapped["timeSlots"],
        "matches": match_payload(2),
        "teams": team_payload(4),
    }).json()
    assert result["isValid"] is True

    clash = [dict(slots[0]), dict(slots[1], startTime="09:10", endTime="09:30")]
    result = client.post("/api/schedule/validate", json={
        "timeSlots": clash, "matches": match_payload(2), "teams": team_payload(4),
    }).json()
    assert result["isValid"] is False
    assert result["hardViolations"][0]["constraintType"] == "court_conflict"


def test_malformed_times_map_to_422():
    bad_slot = {"startTime": "9:60", "endTime": "09:20", "type": "match", "courtId": "court1", "matchId": "m1"}
    response = client.post("/api/schedule/validate", json={
        "timeSlots": [bad_slot], "matches": match_payload(1), "teams": team_payload(2),
    })
    assert response.status_code == 422

    response = client.post("/api/schedule", json={
        "sport": {"id": "s1", "name": "Futsal", "type": "roundRobin",
                  "teams": team_payload(2), "matches": match_payload(1)},
        "settings": {"timeSlots": [dict(bad_slot, startTime="bogus")]},
        "shuffle": False,
    })
    assert response.status_code == 422
    assert "bogus" in response.json()["detail"]


def test_league_settings_fill_in_missing_fields():
    response = client.post("/api/blocks", json={"teams": team_payload(6), "leagueSettings": {"blockCount": 3}, "seed": 2})
    assert [len(block["teamIds"]) for block in response.json()["blocks"]] == [2, 2, 2]

    blocks = client.post("/api/blocks", json={"teams": team_payload(4), "blockCount": 2, "seed": 2}).json()["blocks"]
    response = client.post("/api/playoff", json={"blocks": blocks, "leagueSettings": {"hasPlayoff": False}})
    assert response.status_code == 200
    assert response.json()["success"] is False
    assert response.json()["message"] == "This league has no playoff."

    # Nothing played yet, so every entrant is a placeholder
    response = client.post("/api/playoff", json={"blocks": blocks, "leagueSettings": {"advancingTeams": 1}})
    assert response.json()["success"] is False
    assert "At least one block must have finished" in response.json()["message"]
