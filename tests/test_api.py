"""Tests for the labels, points, evaluation and session endpoints.

The test app uses a 300px canvas, so with two labels the boundary is x=150.
"""

from __future__ import annotations

import httpx
import pytest


async def _add_labels(client: httpx.AsyncClient, *names: str) -> None:
    for name in names:
        response = await client.post("/labels", json={"name": name})
        assert response.status_code == 201


async def _cat_dog_session(client: httpx.AsyncClient) -> None:
    """Place the four points of the Cat/Dog scenario."""
    await _add_labels(client, "Cat", "Dog")
    await client.post("/labels/Cat/select")
    for x in (10, 200):
        response = await client.post("/points", json={"x": x, "y": 10})
        assert response.status_code == 201
    await client.post("/labels/Dog/select")
    for x in (160, 290):
        response = await client.post("/points", json={"x": x, "y": 10})
        assert response.status_code == 201


# ------------------------------------------------------------------ #
# Labels
# ------------------------------------------------------------------ #


class TestLabelsAPI:
    async def test_create_and_list_labels(self, app_client: httpx.AsyncClient) -> None:
        response = await app_client.post("/labels", json={"name": "Cat"})
        assert response.status_code == 201
        assert response.json() == {"name": "Cat", "color": "#f56565"}

        await app_client.post("/labels", json={"name": "Dog"})
        data = (await app_client.get("/labels")).json()
        assert [label["name"] for label in data["labels"]] == ["Cat", "Dog"]
        assert data["selected_label"] is None

    async def test_blank_label_rejected(self, app_client: httpx.AsyncClient) -> None:
        response = await app_client.post("/labels", json={"name": "   "})
        assert response.status_code == 422

    async def test_duplicate_label_conflict(self, app_client: httpx.AsyncClient) -> None:
        await _add_labels(app_client, "Cat")
        response = await app_client.post("/labels", json={"name": "Cat"})
        assert response.status_code == 409
        assert "already exists" in response.json()["detail"]

    async def test_label_limit(self, app_client: httpx.AsyncClient) -> None:
        await _add_labels(app_client, *(f"L{i}" for i in range(6)))
        response = await app_client.post("/labels", json={"name": "L6"})
        assert response.status_code == 409
        assert "Maximum" in response.json()["detail"]

    async def test_select_label(self, app_client: httpx.AsyncClient) -> None:
        await _add_labels(app_client, "Cat")
        response = await app_client.post("/labels/Cat/select")
        assert response.status_code == 200
        assert (await app_client.get("/labels")).json()["selected_label"] == "Cat"

    async def test_select_unknown_label(self, app_client: httpx.AsyncClient) -> None:
        response = await app_client.post("/labels/Cat/select")
        assert response.status_code == 404

    async def test_select_label_with_slash(self, app_client: httpx.AsyncClient) -> None:
        await _add_labels(app_client, "cat/dog")
        response = await app_client.post("/labels/cat/dog/select")
        assert response.status_code == 200
        assert response.json()["name"] == "cat/dog"
        assert (await app_client.get("/labels")).json()["selected_label"] == "cat/dog"


# ------------------------------------------------------------------ #
# Points
# ------------------------------------------------------------------ #


class TestPointsAPI:
    async def test_point_requires_labels(self, app_client: httpx.AsyncClient) -> None:
        response = await app_client.post("/points", json={"x": 10, "y": 10})
        assert response.status_code == 409

    async def test_point_requires_selection(self, app_client: httpx.AsyncClient) -> None:
        await _add_labels(app_client, "Cat")
        response = await app_client.post("/points", json={"x": 10, "y": 10})
        assert response.status_code == 409
        assert "Select a label" in response.json()["detail"]

    async def test_point_gets_region_ground_truth(
        self, app_client: httpx.AsyncClient
    ) -> None:
        await _add_labels(app_client, "Cat", "Dog")
        await app_client.post("/labels/Cat/select")

        response = await app_client.post("/points", json={"x": 150, "y": 20})
        assert response.status_code == 201
        assert response.json() == {
            "x": 150.0,
            "y": 20.0,
            "predicted_label": "Cat",
            "ground_truth_label": "Dog",
        }

    async def test_explicit_canvas_width(self, app_client: httpx.AsyncClient) -> None:
        await _add_labels(app_client, "Cat", "Dog")
        response = await app_client.post(
            "/points",
            json={"x": 150, "y": 0, "canvas_width": 1000, "predicted_label": "Dog"},
        )
        assert response.json()["ground_truth_label"] == "Cat"

    async def test_out_of_range_click_is_clamped(
        self, app_client: httpx.AsyncClient
    ) -> None:
        await _add_labels(app_client, "Cat", "Dog")
        await app_client.post("/labels/Dog/select")
        left = await app_client.post("/points", json={"x": -40, "y": 0})
        right = await app_client.post("/points", json={"x": 5000, "y": 0})
        assert left.json()["ground_truth_label"] == "Cat"
        assert right.json()["ground_truth_label"] == "Dog"

    async def test_subnormal_canvas_width(self, app_client: httpx.AsyncClient) -> None:
        await _add_labels(app_client, "Cat", "Dog")
        response = await app_client.post(
            "/points",
            json={"x": 1, "y": 1, "canvas_width": 5e-324, "predicted_label": "Cat"},
        )
        assert response.status_code == 201
        assert response.json()["ground_truth_label"] == "Dog"

    async def test_empty_predicted_label_is_not_replaced(
        self, app_client: httpx.AsyncClient
    ) -> None:
        await _add_labels(app_client, "Cat")
        await app_client.post("/labels/Cat/select")
        response = await app_client.post(
            "/points", json={"x": 1, "y": 1, "predicted_label": ""}
        )
        assert response.status_code == 404
        assert (await app_client.get("/points")).json()["count"] == 0

    async def test_unknown_predicted_label(self, app_client: httpx.AsyncClient) -> None:
        await _add_labels(app_client, "Cat")
        response = await app_client.post(
            "/points", json={"x": 1, "y": 1, "predicted_label": "Bird"}
        )
        assert response.status_code == 404

    @pytest.mark.parametrize("width", [0, -300])
    async def test_invalid_canvas_width(
        self, app_client: httpx.AsyncClient, width: float
    ) -> None:
        await _add_labels(app_client, "Cat")
        response = await app_client.post(
            "/points",
            json={"x": 1, "y": 1, "canvas_width": width, "predicted_label": "Cat"},
        )
        assert response.status_code == 422

    async def test_list_points(self, app_client: httpx.AsyncClient) -> None:
        await _cat_dog_session(app_client)
        data = (await app_client.get("/points")).json()
        assert data["count"] == 4
        assert [p["predicted_label"] for p in data["points"]] == [
            "Cat", "Cat", "Dog", "Dog",
        ]


# ------------------------------------------------------------------ #
# Evaluation
# ------------------------------------------------------------------ #


class TestEvaluationAPI:
    async def test_confusion_matrix(self, app_client: httpx.AsyncClient) -> None:
        await _cat_dog_session(app_client)
        data = (await app_client.get("/evaluation/confusion-matrix")).json()

        assert data["labels"] == ["Cat", "Dog"]
        assert data["matrix"] == [[1, 0], [1, 2]]
        assert data["counts"] == {
            "Cat": {"Cat": 1, "Dog": 0},
            "Dog": {"Cat": 1, "Dog": 2},
        }
        assert data["total"] == 4

    async def test_metrics(self, app_client: httpx.AsyncClient) -> None:
        await _cat_dog_session(app_client)
        data = (await app_client.get("/evaluation/metrics")).json()

        cat, dog = data["per_class_metrics"]
        assert cat == {
            "label": "Cat", "tp": 1, "fp": 1, "fn": 0, "tn": 2,
            "precision": 0.5, "recall": 1.0, "accuracy": 0.75, "f1": 0.67,
        }
        assert dog == {
            "label": "Dog", "tp": 2, "fp": 0, "fn": 1, "tn": 1,
            "precision": 1.0, "recall": 0.67, "accuracy": 0.75, "f1": 0.8,
        }
        assert data["average"]["accuracy"] == 0.75

    async def test_full_evaluation(self, app_client: httpx.AsyncClient) -> None:
        await _cat_dog_session(app_client)
        data = (await app_client.get("/evaluation")).json()

        assert data["point_count"] == 4
        assert data["excluded_point_count"] == 0
        assert data["confusion_matrix"]["matrix"] == [[1, 0], [1, 2]]
        assert data["metrics"]["average"]["precision"] == 0.75

    async def test_empty_evaluation(self, app_client: httpx.AsyncClient) -> None:
        data = (await app_client.get("/evaluation")).json()

        assert data["confusion_matrix"]["labels"] == []
        assert data["confusion_matrix"]["matrix"] == []
        assert data["metrics"]["per_class_metrics"] == []
        assert data["metrics"]["average"] == {
            "precision": 0.0, "recall": 0.0, "accuracy": 0.0, "f1": 0.0,
        }

    async def test_label_without_points(self, app_client: httpx.AsyncClient) -> None:
        """A label added after points were placed scores zero, not an error."""
        await _cat_dog_session(app_client)
        await _add_labels(app_client, "Bird")

        data = (await app_client.get("/evaluation/metrics")).json()
        bird = data["per_class_metrics"][2]
        assert bird["label"] == "Bird"
        assert (bird["tp"], bird["fp"], bird["fn"], bird["tn"]) == (0, 0, 0, 4)
        assert (bird["precision"], bird["recall"], bird["f1"]) == (0.0, 0.0, 0.0)
        assert bird["accuracy"] == 1.0


# ------------------------------------------------------------------ #
# Session
# ------------------------------------------------------------------ #


class TestSessionAPI:
    async def test_canvas_config(self, app_client: httpx.AsyncClient) -> None:
        data = (await app_client.get("/session/canvas")).json()
        assert data["width"] == 300.0
        assert data["height"] == 384.0
        assert data["max_labels"] == 6
        assert len(data["palette"]) == 6

    async def test_get_session(self, app_client: httpx.AsyncClient) -> None:
        await _cat_dog_session(app_client)
        data = (await app_client.get("/session")).json()
        assert len(data["labels"]) == 2
        assert len(data["points"]) == 4
        assert data["selected_label"] == "Dog"

    async def test_reset(self, app_client: httpx.AsyncClient) -> None:
        await _cat_dog_session(app_client)

        response = await app_client.post("/session/reset")
        assert response.status_code == 204

        session = (await app_client.get("/session")).json()
        assert session == {"labels": [], "points": [], "selected_label": None}

        evaluation = (await app_client.get("/evaluation")).json()
        assert evaluation["confusion_matrix"]["matrix"] == []
        assert evaluation["metrics"]["average"]["accuracy"] == 0.0
