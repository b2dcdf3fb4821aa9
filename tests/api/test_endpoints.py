"""
HTTP tests for the recovery and up-next endpoints.

Payloads are posted in camelCase, the way clients send them.
"""

import pytest
from fastapi.testclient import TestClient

from app.core.exceptions import InvalidSnapshotError, WorkoutGenerationError
from app.main import app

client = TestClient(app)

AS_OF = "2026-10-19T12:00:00Z"


# ======================================================================
# Helpers
# ======================================================================


def _post_snapshot(last_7_days: dict, baseline_total: dict) -> dict:
    response = client.post("/api/v1/recovery/snapshot", json={
        "last7Days": last_7_days,
        "baselineTotal": baseline_total,
        "generatedAt": AS_OF,
        "lastWorkoutAt": "2026-10-17T18:00:00Z",
    })
    assert response.status_code == 200
    return response.json()


def _muscle(group: str, score: float, status: str, **extra) -> dict:
    payload = {
        "muscleGroup": group,
        "last7DaysVolume": score * 10,
        "baselineVolume": 1000.0,
        "fatigueScore": score,
        "status": status,
    }
    payload.update(extra)
    return payload


def _snapshot_payload(*muscles: dict) -> dict:
    return {
        "generatedAt": AS_OF,
        "perMuscle": list(muscles),
        "readinessScore": 50,
        "totals": {"last7DaysVolume": 0, "fatigueScore": 0},
    }


# ======================================================================
# Service
# ======================================================================


class TestService:

    def test_root(self):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_health(self):
        assert client.get("/health").json()["service"] == "recovery-engine"


# ======================================================================
# Recovery
# ======================================================================


class TestReadinessEndpoint:

    def test_score_ninety(self):
        response = client.get("/api/v1/recovery/readiness/90")
        assert response.status_code == 200
        assert response.json() == {
            "percent": 96,
            "label": "Fresh",
            "color": "rgba(255, 222, 222, 0.432)",
        }

    @pytest.mark.parametrize("score", ["-50", "0", "153.3", "999"])
    def test_bounded(self, score):
        percent = client.get(f"/api/v1/recovery/readiness/{score}").json()["percent"]
        assert 0 <= percent <= 100

    def test_non_numeric_rejected(self):
        assert client.get("/api/v1/recovery/readiness/abc").status_code == 422


class TestSnapshotEndpoint:

    def test_builds_ranked_snapshot(self):
        body = _post_snapshot({"chest": 1200}, {"chest": 4000})
        first = body["perMuscle"][0]
        assert first["muscleGroup"] == "chest"
        assert first["status"] == "moderate-fatigue"
        assert first["last7DaysVolume"] == 1200
        assert body["readinessScore"] == 30
        assert body["deloadWeekDetected"] is False

    def test_negative_volume_rejected(self):
        response = client.post("/api/v1/recovery/snapshot", json={"last7Days": {"chest": -1}})
        assert response.status_code == 422


class TestOverviewEndpoint:

    def test_snapshot_roundtrip(self):
        snapshot = _post_snapshot({"chest": 1500, "biceps": 300}, {"chest": 4000, "biceps": 4000})
        response = client.post(f"/api/v1/recovery/overview?as_of={AS_OF}", json=snapshot)
        assert response.status_code == 200
        body = response.json()
        assert body["weakestMuscle"]["muscle"]["muscleGroup"] == "chest"
        assert [m["muscle"]["muscleGroup"] for m in body["fatiguedMuscles"]] == ["chest"]
        assert body["emptyState"] is False
        assert body["lastWorkoutDays"] == 1
        assert {e["muscleGroup"] for e in body["heatmap"]} == {"chest", "biceps"}

    def test_empty_snapshot(self):
        response = client.post("/api/v1/recovery/overview", json=_snapshot_payload())
        body = response.json()
        assert response.status_code == 200
        assert body["averageReadiness"] is None
        assert body["averageLabel"] == "Calibrating"
        assert body["weakestMuscle"] is None
        assert body["ranked"] == []
        assert body["emptyState"] is True

    def test_duplicate_muscle_rejected(self):
        payload = _snapshot_payload(
            _muscle("chest", 90, "optimal"),
            _muscle("chest", 140, "high-fatigue"),
        )
        response = client.post("/api/v1/recovery/overview", json=payload)
        assert response.status_code == 422

    def test_flagless_high_fatigue_entry(self):
        payload = _snapshot_payload(_muscle("chest", 150, "high-fatigue"))
        body = client.post(f"/api/v1/recovery/overview?as_of={AS_OF}", json=payload).json()
        assert body["ranked"][0]["hint"] == "Needs rest"
        assert body["ranked"][0]["muscle"]["fatigued"] is True
        assert [m["muscle"]["muscleGroup"] for m in body["fatiguedMuscles"]] == ["chest"]


class TestHeatmapEndpoint:

    def test_regions_and_buckets(self):
        payload = _snapshot_payload(
            _muscle("chest", 150, "high-fatigue"),
            {"muscleGroup": "legs", "last7DaysVolume": 0, "fatigueScore": 0, "status": "no-data"},
        )
        response = client.post(f"/api/v1/recovery/heatmap?as_of={AS_OF}", json=payload)
        assert response.status_code == 200
        assert response.json() == [{"slug": "chest", "muscleGroup": "chest", "intensity": 4}]


class TestTrainingRecommendationEndpoint:

    def test_targets_avoid_and_workouts(self):
        response = client.post("/api/v1/recovery/training-recommendation", json={
            "snapshot": _snapshot_payload(
                _muscle("chest", 140, "high-fatigue"),
                _muscle("biceps", 30, "under-trained"),
            ),
            "templates": [
                {"templateId": "push", "templateName": "Push A", "muscleGroups": ["chest", "triceps"]},
                {"templateId": "pull", "templateName": "Pull A", "muscleGroups": ["lats", "biceps"]},
            ],
        })
        assert response.status_code == 200
        body = response.json()
        assert body["targetMuscles"] == ["biceps"]
        assert body["avoidMuscles"] == ["chest"]
        assert body["recommendedWorkouts"] == [{
            "templateId": "pull",
            "templateName": "Pull A",
            "muscleGroups": ["back", "biceps"],
            "reason": "Targets biceps",
        }]

    def test_full_body_fallback(self):
        response = client.post("/api/v1/recovery/training-recommendation", json={
            "snapshot": _snapshot_payload(_muscle("chest", 140, "high-fatigue")),
        })
        workouts = response.json()["recommendedWorkouts"]
        assert [w["templateId"] for w in workouts] == ["fallback-full-body"]


# ======================================================================
# Up next
# ======================================================================


class TestUpNextCardEndpoint:

    def test_loading(self):
        response = client.post("/api/v1/up-next/card", json={"isLoading": True})
        assert response.json()["state"] == "loading"

    def test_no_recommendation(self):
        assert client.post("/api/v1/up-next/card", json={}).json()["state"] == "empty"

    def test_recommended_with_match(self):
        response = client.post("/api/v1/up-next/card", json={
            "recommendation": {
                "recommendedSplit": {
                    "splitKey": "push", "label": "Push", "tags": ["Fresh", "Push focus"],
                },
                "matchedTemplate": {
                    "templateId": "t1", "templateName": "Push A",
                    "exerciseCount": 5, "matchScore": 85, "matchReason": "Matches your split",
                },
                "fatigueStatus": "fresh",
                "canGenerateAI": False,
                "daysSinceLastSplit": 2,
            },
            "isPro": False,
        })
        body = response.json()
        assert body["state"] == "recommended"
        assert body["hasMatchedTemplate"] is True
        assert body["tags"] == ["Push focus"]
        assert body["fatigueLabel"] == "Fresh • 2d since last"
        assert [a["kind"] for a in body["actions"]] == ["start", "edit", "swap"]

    def test_free_user_upgrade(self):
        response = client.post("/api/v1/up-next/card", json={
            "recommendation": {"recommendedSplit": {"splitKey": "legs", "label": "Legs"}},
        })
        body = response.json()
        assert body["canGenerate"] is False
        assert body["actions"][0]["kind"] == "upgrade"
        assert body["actions"][0]["badge"] == "PRO"


class TestGenerationRequestEndpoint:

    def test_instruction(self):
        response = client.post("/api/v1/up-next/generation-request", json={
            "targetMuscles": ["biceps"],
            "perMuscle": [_muscle("legs", 140, "high-fatigue", fatigued=True)],
        })
        assert response.json() == {
            "specificRequest": "Prioritize: Biceps | Limit volume for: Legs | Stay near recent baseline volume",
        }

    def test_flagless_high_fatigue_entry(self):
        response = client.post("/api/v1/up-next/generation-request", json={
            "targetMuscles": [],
            "perMuscle": [_muscle("legs", 140, "high-fatigue")],
        })
        assert response.json() == {
            "specificRequest": "Limit volume for: Legs | Stay near recent baseline volume",
        }

    def test_targets_derived_when_omitted(self):
        response = client.post("/api/v1/up-next/generation-request", json={
            "perMuscle": [
                _muscle("legs", 140, "high-fatigue"),
                _muscle("biceps", 30, "under-trained"),
            ],
        })
        assert response.json() == {
            "specificRequest": "Prioritize: Biceps | Limit volume for: Legs | Stay near recent baseline volume",
        }


# ======================================================================
# Error rendering
# ======================================================================


@app.get("/_test/generation-error", include_in_schema=False)
def _raise_generation_error():
    raise WorkoutGenerationError()


@app.get("/_test/invalid-snapshot", include_in_schema=False)
def _raise_invalid_snapshot():
    raise InvalidSnapshotError("Muscle group 'chest' appears more than once in the snapshot")


class TestErrorHandler:

    def test_generation_failure(self):
        response = client.get("/_test/generation-error")
        assert response.status_code == 502
        assert response.json() == {"error": "generation_failed", "message": "Please try again."}

    def test_invalid_snapshot(self):
        response = client.get("/_test/invalid-snapshot")
        assert response.status_code == 422
        assert response.json()["error"] == "invalid_snapshot"
