import json
import uuid

import pytest

from scoreboard.schema.account import Role


def round_payload(name, score, interview_date="2024-05-01", round_number=1):
    return {
        "student_name": name,
        "round_number": round_number,
        "score": score,
        "interview_date": interview_date,
        "interviewer_name": "Priya",
        "feedback": "Solid",
    }


@pytest.fixture
def leaderboard(client, admin_headers):
    response = client.post(
        "/leaderboards/",
        json={"name": "Spring Batch", "description": "Mock interviews"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.json()["data"]


def add_rounds(client, headers, leaderboard_id, rounds):
    for payload in rounds:
        response = client.post(
            f"/leaderboards/{leaderboard_id}/rounds", json=payload, headers=headers
        )
        assert response.status_code == 201, response.text


def test_create_and_list(client, admin_headers, leaderboard):
    assert leaderboard["public_id"]
    listed = client.get("/leaderboards/", headers=admin_headers).json()["data"]
    assert [board["name"] for board in listed] == ["Spring Batch"]


def test_dashboard_metrics(client, admin_headers, leaderboard):
    add_rounds(
        client,
        admin_headers,
        leaderboard["id"],
        [round_payload("A", 7), round_payload("A", 9, "2024-05-03", 2), round_payload("B", 5)],
    )

    data = client.get(f"/leaderboards/{leaderboard['id']}", headers=admin_headers).json()["data"]
    assert data["batch_metrics"] == {
        "total_students": 2,
        "total_interviews": 3,
        "average_score": 7,
        "highest_individual_score": 9,
    }
    students = {s["name"]: s for s in data["students"]}
    assert students["A"]["average_score"] == 8
    assert students["A"]["total_score"] == 16
    assert students["A"]["interviews_given"] == 2
    assert students["A"]["last_interview_date"] == "2024-05-03"
    # Default sort is average score, highest first
    assert [s["name"] for s in data["students"]] == ["A", "B"]


def test_dashboard_search_and_sort(client, admin_headers, leaderboard):
    add_rounds(
        client,
        admin_headers,
        leaderboard["id"],
        [round_payload("Zara", 9), round_payload("Adam", 4), round_payload("Zoe", 6)],
    )
    url = f"/leaderboards/{leaderboard['id']}"

    data = client.get(url, params={"search": "z"}, headers=admin_headers).json()["data"]
    assert [s["name"] for s in data["students"]] == ["Zara", "Zoe"]

    data = client.get(
        url, params={"sort_by": "name", "descending": "false"}, headers=admin_headers
    ).json()["data"]
    assert [s["name"] for s in data["students"]] == ["Adam", "Zara", "Zoe"]

    response = client.get(url, params={"sort_by": "bogus"}, headers=admin_headers)
    assert response.status_code == 400


def test_round_validation(client, admin_headers, leaderboard):
    payload = round_payload("A", 5)
    payload["interviewer_name"] = "  "
    response = client.post(
        f"/leaderboards/{leaderboard['id']}/rounds", json=payload, headers=admin_headers
    )
    assert response.status_code == 422
    assert response.json()["message"] == "Please fill in all required fields"

    response = client.post(
        f"/leaderboards/{leaderboard['id']}/rounds",
        json=round_payload("A", 11),
        headers=admin_headers,
    )
    assert response.status_code == 422


def test_student_rounds_and_delete(client, admin_headers, leaderboard):
    add_rounds(
        client,
        admin_headers,
        leaderboard["id"],
        [round_payload("A", 6, round_number=2), round_payload("A", 8, round_number=1)],
    )
    url = f"/leaderboards/{leaderboard['id']}/students/A"
    detail = client.get(url, headers=admin_headers).json()["data"]
    assert [r["round_number"] for r in detail["rounds"]] == [1, 2]
    assert detail["metrics"]["average_score"] == 7

    round_id = detail["rounds"][0]["id"]
    response = client.delete(
        f"/leaderboards/{leaderboard['id']}/rounds/{round_id}", headers=admin_headers
    )
    assert response.status_code == 200
    detail = client.get(url, headers=admin_headers).json()["data"]
    assert len(detail["rounds"]) == 1

    assert client.get(
        f"/leaderboards/{leaderboard['id']}/students/Nobody", headers=admin_headers
    ).status_code == 404


def test_viewer_is_read_only(client, make_headers, leaderboard):
    viewer = make_headers(Role.VIEWER)
    assert client.get(f"/leaderboards/{leaderboard['id']}", headers=viewer).status_code == 200

    response = client.post(
        f"/leaderboards/{leaderboard['id']}/rounds", json=round_payload("A", 5), headers=viewer
    )
    assert response.status_code == 403


def test_editor_cannot_delete(client, make_headers, leaderboard):
    editor = make_headers(Role.EDITOR)
    assert client.delete(f"/leaderboards/{leaderboard['id']}", headers=editor).status_code == 403


def test_delete_leaderboard_removes_rounds(client, admin_headers, leaderboard):
    add_rounds(client, admin_headers, leaderboard["id"], [round_payload("A", 5)])
    assert client.delete(
        f"/leaderboards/{leaderboard['id']}", headers=admin_headers
    ).status_code == 200
    assert client.get(
        f"/leaderboards/{leaderboard['id']}", headers=admin_headers
    ).status_code == 404


def test_public_view(client, admin_headers, leaderboard):
    add_rounds(client, admin_headers, leaderboard["id"], [round_payload("A", 7)])

    link = client.get(
        f"/leaderboards/{leaderboard['id']}/share", headers=admin_headers
    ).json()["data"]["url"]
    assert link == f"http://testserver/public/{leaderboard['public_id']}"

    data = client.get(f"/public/{leaderboard['public_id']}").json()["data"]
    assert data["batch_metrics"]["total_interviews"] == 1
    assert data["students"][0]["name"] == "A"

    detail = client.get(f"/public/{leaderboard['public_id']}/students/A")
    assert detail.status_code == 200

    missing = client.get("/public/does-not-exist")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Leaderboard not found"


def test_export(client, admin_headers, leaderboard):
    add_rounds(client, admin_headers, leaderboard["id"], [round_payload("A", 7)])

    response = client.get(f"/leaderboards/{leaderboard['id']}/export", headers=admin_headers)
    assert response.status_code == 200
    assert 'filename="Spring_Batch_rounds.json"' in response.headers["content-disposition"]

    exported = response.json()
    assert exported["leaderboard"]["name"] == "Spring Batch"
    assert exported["rounds"][0]["student_name"] == "A"


def test_import_applies_defaults(client, admin_headers, leaderboard):
    body = {
        "leaderboard": {"name": "elsewhere"},
        "rounds": [
            {"student_name": "A", "interview_date": "2024-02-01", "score": 8},
            {"student_name": "B", "interview_date": "2024-02-02T10:00:00", "score": 0},
        ],
    }
    response = client.post(
        f"/leaderboards/{leaderboard['id']}/import",
        content=json.dumps(body),
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["imported"] == 2

    detail = client.get(
        f"/leaderboards/{leaderboard['id']}/students/B", headers=admin_headers
    ).json()["data"]
    imported = detail["rounds"][0]
    # A zero score is falsy and takes the default
    assert imported["score"] == 5
    assert imported["round_number"] == 1
    assert imported["interviewer_name"] == ""


def test_import_failure_keeps_earlier_rows(client, admin_headers, leaderboard):
    body = {
        "rounds": [
            {"student_name": "A", "interview_date": "2024-02-01", "score": 8},
            {"student_name": "B", "score": 6},
            {"student_name": "C", "interview_date": "2024-02-03", "score": 7},
        ]
    }
    response = client.post(
        f"/leaderboards/{leaderboard['id']}/import",
        content=json.dumps(body),
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Failed to import file. Please check the format."

    data = client.get(f"/leaderboards/{leaderboard['id']}", headers=admin_headers).json()["data"]
    assert [s["name"] for s in data["students"]] == ["A"]


def test_import_rejects_invalid_json(client, admin_headers, leaderboard):
    response = client.post(
        f"/leaderboards/{leaderboard['id']}/import",
        content=b"not json",
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_import_without_rounds_imports_nothing(client, admin_headers, leaderboard):
    response = client.post(
        f"/leaderboards/{leaderboard['id']}/import",
        content=json.dumps({"leaderboard": {}}),
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["imported"] == 0


def test_rounds_listed_newest_interview_first(client, make_headers, admin_headers, leaderboard):
    add_rounds(
        client,
        admin_headers,
        leaderboard["id"],
        [
            round_payload("A", 7, "2024-05-01"),
            round_payload("B", 6, "2024-05-09"),
            round_payload("C", 8, "2024-05-04"),
        ],
    )
    viewer = make_headers(Role.VIEWER)

    response = client.get(f"/leaderboards/{leaderboard['id']}/rounds", headers=viewer)
    assert response.status_code == 200
    rounds = response.json()["data"]
    assert [r["interview_date"] for r in rounds] == ["2024-05-09", "2024-05-04", "2024-05-01"]
    assert [r["student_name"] for r in rounds] == ["B", "C", "A"]


def test_rounds_list_needs_sign_in_and_known_board(client, admin_headers, leaderboard):
    assert client.get(f"/leaderboards/{leaderboard['id']}/rounds").status_code == 401

    response = client.get(f"/leaderboards/{uuid.uuid4()}/rounds", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Leaderboard not found"
