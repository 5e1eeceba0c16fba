import json
import uuid

import pytest

from scoreboard.schema.account import Role


def score_payload(name, module_number, activeness_score, notes=""):
    return {
        "student_name": name,
        "module_number": module_number,
        "activeness_score": activeness_score,
        "notes": notes,
        "recorded_date": "2024-06-01",
    }


@pytest.fixture
def board(client, admin_headers):
    response = client.post(
        "/activeness-boards/",
        json={"name": "Cohort 7"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.json()["data"]


def add_scores(client, headers, board_id, scores):
    created = []
    for payload in scores:
        response = client.post(
            f"/activeness-boards/{board_id}/scores", json=payload, headers=headers
        )
        assert response.status_code == 201, response.text
        created.append(response.json()["data"])
    return created


def test_create_requires_name(client, admin_headers):
    response = client.post("/activeness-boards/", json={"name": "   "}, headers=admin_headers)
    assert response.status_code == 422
    assert response.json()["message"] == "Please enter a name"


def test_dashboard(client, admin_headers, board):
    add_scores(
        client,
        admin_headers,
        board["id"],
        [
            score_payload("A", 1, 8),
            score_payload("A", 2, 6),
            score_payload("B", 1, 9),
        ],
    )

    data = client.get(f"/activeness-boards/{board['id']}", headers=admin_headers).json()["data"]
    assert data["modules"] == list(range(1, 11))
    assert data["batch_metrics"] == {
        "total_students": 2,
        "average_batch_activeness": 7.67,
        "total_modules_completed": 3,
        "most_active_student": "A",
        "highest_score": 14,
    }

    # Default sort is total score, highest first
    assert [s["name"] for s in data["students"]] == ["A", "B"]
    student_a = data["students"][0]
    assert student_a["completion_percentage"] == 20
    assert student_a["average_score"] == 7
    assert student_a["module_scores"] == {"1": 8, "2": 6}


def test_module_number_out_of_range(client, admin_headers, board):
    response = client.post(
        f"/activeness-boards/{board['id']}/scores",
        json=score_payload("A", 11, 5),
        headers=admin_headers,
    )
    assert response.status_code == 422


def test_blank_student_name(client, admin_headers, board):
    response = client.post(
        f"/activeness-boards/{board['id']}/scores",
        json=score_payload(" ", 1, 5),
        headers=admin_headers,
    )
    assert response.status_code == 422
    assert response.json()["message"] == "Please enter student name"


def test_update_and_delete_score(client, admin_headers, board):
    (score,) = add_scores(client, admin_headers, board["id"], [score_payload("A", 3, 4)])
    url = f"/activeness-boards/{board['id']}/scores/{score['id']}"

    response = client.put(url, json=score_payload("A", 3, 9, notes="Asked questions"), headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["data"]["activeness_score"] == 9
    assert response.json()["data"]["notes"] == "Asked questions"

    assert client.delete(url, headers=admin_headers).status_code == 200
    assert client.delete(url, headers=admin_headers).status_code == 404


def test_editor_can_update_but_not_delete(client, admin_headers, make_headers, board):
    (score,) = add_scores(client, admin_headers, board["id"], [score_payload("A", 3, 4)])
    url = f"/activeness-boards/{board['id']}/scores/{score['id']}"
    editor = make_headers(Role.EDITOR)

    assert client.put(url, json=score_payload("A", 3, 7), headers=editor).status_code == 200
    assert client.delete(url, headers=editor).status_code == 403


def test_student_modules(client, admin_headers, board):
    add_scores(
        client,
        admin_headers,
        board["id"],
        [score_payload("A", 4, 5), score_payload("A", 2, 7)],
    )
    data = client.get(
        f"/activeness-boards/{board['id']}/students/A", headers=admin_headers
    ).json()["data"]
    assert [s["module_number"] for s in data["scores"]] == [2, 4]
    assert data["metrics"]["modules_completed"] == 2


def test_public_view(client, admin_headers, board):
    add_scores(client, admin_headers, board["id"], [score_payload("A", 1, 8)])

    link = client.get(
        f"/activeness-boards/{board['id']}/share", headers=admin_headers
    ).json()["data"]["url"]
    assert link == f"http://testserver/activeness/{board['public_id']}"

    data = client.get(f"/activeness/{board['public_id']}").json()["data"]
    assert data["batch_metrics"]["most_active_student"] == "A"
    assert client.get(f"/activeness/{board['public_id']}/students/A").status_code == 200
    assert client.get("/activeness/unknown").status_code == 404


def test_export_and_import(client, admin_headers, board):
    add_scores(
        client,
        admin_headers,
        board["id"],
        [score_payload("A", 1, 8), score_payload("B", 2, 6)],
    )
    response = client.get(f"/activeness-boards/{board['id']}/export", headers=admin_headers)
    assert 'filename="Cohort_7_activeness.json"' in response.headers["content-disposition"]
    exported = response.json()
    assert len(exported["scores"]) == 2

    target = client.post(
        "/activeness-boards/", json={"name": "Cohort 8"}, headers=admin_headers
    ).json()["data"]
    response = client.post(
        f"/activeness-boards/{target['id']}/import",
        content=response.content,
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Import successful!"
    assert response.json()["data"]["imported"] == 2

    data = client.get(f"/activeness-boards/{target['id']}", headers=admin_headers).json()["data"]
    assert data["batch_metrics"]["total_modules_completed"] == 2


def test_import_stops_at_bad_record(client, admin_headers, board):
    body = {
        "scores": [
            {"student_name": "A", "module_number": 1, "activeness_score": 0},
            {"student_name": "B"},
        ]
    }
    response = client.post(
        f"/activeness-boards/{board['id']}/import",
        content=json.dumps(body),
        headers=admin_headers,
    )
    assert response.status_code == 400

    data = client.get(f"/activeness-boards/{board['id']}", headers=admin_headers).json()["data"]
    assert len(data["students"]) == 1
    # Zero is replaced by the default score
    assert data["students"][0]["total_score"] == 5


def test_scores_listed_by_student_name(client, make_headers, admin_headers, board):
    add_scores(
        client,
        admin_headers,
        board["id"],
        [
            score_payload("Maya", 1, 6),
            score_payload("Arjun", 2, 7),
            score_payload("Maya", 2, 8),
            score_payload("Dev", 1, 5),
        ],
    )
    viewer = make_headers(Role.VIEWER)

    response = client.get(f"/activeness-boards/{board['id']}/scores", headers=viewer)
    assert response.status_code == 200
    scores = response.json()["data"]
    assert [s["student_name"] for s in scores] == ["Arjun", "Dev", "Maya", "Maya"]
    # Same student keeps insertion order
    assert [s["module_number"] for s in scores if s["student_name"] == "Maya"] == [1, 2]


def test_scores_list_unknown_board(client, admin_headers):
    response = client.get(f"/activeness-boards/{uuid.uuid4()}/scores", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Activeness board not found"
