"""
Tests for main.py routes through Flask's test client.
"""

import psycopg

from persistence.facade import INSERT_QUIZ_RESULT
from structures import get_structure


class TestPage:
    def test_index_renders_default_structure(self, client):
        res = client.get("/")
        assert res.status_code == 200
        body = res.get_data(as_text=True)
        assert "DataStruct" in body
        assert "Linear Structures" in body
        assert "Non-Linear Structures" in body
        assert "Contiguous memory" in body
        assert "[4]" in body

    def test_health(self, client):
        assert client.get("/api/health").get_json() == {"status": "ok", "message": "Server is running"}

    def test_state_defaults_to_array(self, client):
        data = client.get("/api/state").get_json()
        assert data["active_id"] == "array"
        assert data["state"]["values"] == [10, 20, 30, 40, 50]


class TestSelect:
    def test_select_switches_panels(self, client):
        data = client.post("/api/select", json={"id": "tree"}).get_json()
        assert data["active_id"] == "tree"
        assert data["interactive"] is False
        assert "O(log n)" in data["complexity"]
        assert "Static representation of a Binary Tree" in data["visualizer"]
        assert "connect to many" in data["tip"]

    def test_unknown_id_is_404(self, client):
        res = client.post("/api/select", json={"id": "heap"})
        assert res.status_code == 404
        assert "heap" in res.get_json()["error"]
        assert client.get("/api/state").get_json()["active_id"] == "array"

    def test_missing_id_is_400(self, client):
        assert client.post("/api/select", json={}).status_code == 400

    def test_non_object_body_is_400(self, client):
        res = client.post("/api/select", json=["tree"])
        assert res.status_code == 400
        assert "JSON object" in res.get_json()["error"]

    def test_switch_discards_edits(self, client):
        client.post("/api/visualizer/push", json={"value": 7})
        client.post("/api/select", json={"id": "stack"})
        client.post("/api/select", json={"id": "array"})
        assert client.get("/api/state").get_json()["state"]["values"] == [10, 20, 30, 40, 50]


class TestOperations:
    def test_array_push_pop_scenario(self, client):
        data = client.post("/api/visualizer/push", json={"value": 7}).get_json()
        assert data["state"]["values"] == [10, 20, 30, 40, 50, 7]
        data = client.post("/api/visualizer/pop").get_json()
        assert data["state"]["values"] == [10, 20, 30, 40, 50]

    def test_queue_scenario(self, client):
        client.post("/api/select", json={"id": "queue"})
        client.post("/api/visualizer/push", json={"value": 99})
        data = client.post("/api/visualizer/pop").get_json()
        assert data["state"]["values"] == [20, 30, 99]
        assert "FRONT" in data["svg"]

    def test_push_without_value_uses_value_source(self, client):
        data = client.post("/api/visualizer/push", json={}).get_json()
        assert data["state"]["values"][-1] == 42

    def test_non_integer_value_rejected(self, client):
        assert client.post("/api/visualizer/push", json={"value": "7"}).status_code == 400
        assert client.post("/api/visualizer/push", json={"value": True}).status_code == 400
        assert client.post("/api/visualizer/push", json={"value": 1.5}).status_code == 400

    def test_array_body_rejected(self, client):
        assert client.post("/api/visualizer/push", json=[5]).status_code == 400
        assert client.get("/api/state").get_json()["state"]["values"] == [10, 20, 30, 40, 50]

    def test_pop_empty_stays_empty(self, client):
        client.post("/api/select", json={"id": "stack"})
        for _ in range(5):
            data = client.post("/api/visualizer/pop").get_json()
        assert data["state"]["values"] == []

    def test_fixture_rejects_push(self, client):
        client.post("/api/select", json={"id": "graph"})
        res = client.post("/api/visualizer/push", json={"value": 1})
        assert res.status_code == 400
        assert "error" in res.get_json()

    def test_reset(self, client):
        client.post("/api/visualizer/pop")
        data = client.post("/api/visualizer/reset").get_json()
        assert data["state"]["values"] == [10, 20, 30, 40, 50]


class TestPersistenceRoutes:
    def test_structures(self, client, fake_pool):
        fake_pool.rows = [{"id": "array"}]
        assert client.get("/api/structures").get_json() == [{"id": "array"}]

    def test_structures_db_down(self, client, fake_pool):
        fake_pool.fail_with = psycopg.OperationalError("down")
        res = client.get("/api/structures")
        assert res.status_code == 500
        assert "Database connection failed" in res.get_json()["error"]
        # the page still renders
        assert client.get("/").status_code == 200

    def test_quiz_result_saved(self, client, fake_pool):
        res = client.post("/api/quiz-results",
                          json={"structure_id": "stack", "score": 3, "user_email": "s@example.com"})
        assert res.get_json() == {"success": True}
        assert fake_pool.executed == [(INSERT_QUIZ_RESULT, ("stack", 3, "s@example.com"))]

    def test_quiz_result_write_failure(self, client, fake_pool):
        fake_pool.fail_with = psycopg.OperationalError("down")
        res = client.post("/api/quiz-results",
                          json={"structure_id": "stack", "score": 3, "user_email": "s@example.com"})
        assert res.status_code == 500
        assert res.get_json() == {"error": "Failed to save result"}

    def test_quiz_result_validation(self, client, fake_pool):
        bad = [
            {"structure_id": "heap", "score": 1, "user_email": "a@b"},
            {"structure_id": "tree", "score": "1", "user_email": "a@b"},
            {"structure_id": "tree", "score": True, "user_email": "a@b"},
            {"structure_id": "tree", "score": 1, "user_email": "  "},
            {"structure_id": "tree", "score": 1, "user_email": "a@b", "submission_key": ["a"]},
            {"structure_id": "tree", "score": 1, "user_email": "a@b", "submission_key": 5},
            {},
        ]
        for payload in bad:
            assert client.post("/api/quiz-results", json=payload).status_code == 400
        assert client.post("/api/quiz-results", json=[1, 2]).status_code == 400
        assert fake_pool.executed == []


class TestQuizRoutes:
    def test_quiz_hides_answers(self, client):
        data = client.get("/api/quiz/queue").get_json()
        assert data["structure_id"] == "queue"
        assert data["max_score"] == 4
        assert all("answer" not in q for q in data["questions"])
        assert "quiz-form" in data["html"]

    def test_unknown_structure_quiz(self, client):
        assert client.get("/api/quiz/heap").status_code == 404

    def test_submit_grades_and_records(self, client, fake_pool):
        client.get("/api/quiz/tree")
        c = get_structure("tree").complexity
        answers = {"access": c.access, "search": c.search, "insertion": c.insertion, "deletion": "O(1)"}
        data = client.post("/api/quiz/tree/submit",
                           json={"answers": answers, "user_email": "t@example.com"}).get_json()
        assert data["score"] == 3
        assert data["success"] is True
        assert fake_pool.executed == [(INSERT_QUIZ_RESULT, ("tree", 3, "t@example.com"))]

    def test_submit_without_quiz(self, client):
        res = client.post("/api/quiz/tree/submit", json={"answers": {}, "user_email": "t@example.com"})
        assert res.status_code == 400

    def test_submit_for_other_structure(self, client):
        client.get("/api/quiz/tree")
        res = client.post("/api/quiz/graph/submit", json={"answers": {}, "user_email": "t@example.com"})
        assert res.status_code == 400

    def test_submit_db_down_still_scores(self, client, fake_pool):
        client.get("/api/quiz/array")
        fake_pool.fail_with = psycopg.OperationalError("down")
        data = client.post("/api/quiz/array/submit",
                           json={"answers": {}, "user_email": "t@example.com"}).get_json()
        assert data["score"] == 0
        assert data["success"] is False
        assert data["error"] == "Failed to save result"

    def test_session_keeps_no_answers(self, client):
        client.get("/api/quiz/stack")
        with client.session_transaction() as sess:
            stored = sess["quiz"]
        assert set(stored) == {"structure_id", "seed"}
        assert stored["structure_id"] == "stack"

    def test_regenerated_quiz_is_graded(self, client, fake_pool):
        # a second quiz replaces the first; grading follows the latest one
        client.get("/api/quiz/queue")
        client.get("/api/quiz/array")
        c = get_structure("array").complexity
        answers = {"access": c.access, "search": c.search, "insertion": c.insertion, "deletion": c.deletion}
        data = client.post("/api/quiz/array/submit",
                           json={"answers": answers, "user_email": "t@example.com"}).get_json()
        assert data["score"] == 4

    def test_submit_rejects_non_string_submission_key(self, client, fake_pool):
        client.get("/api/quiz/tree")
        res = client.post("/api/quiz/tree/submit",
                          json={"answers": {}, "user_email": "t@example.com", "submission_key": {"k": 1}})
        assert res.status_code == 400
        assert "submission_key" in res.get_json()["error"]
        assert fake_pool.executed == []

    def test_submit_rejects_non_object_body(self, client):
        client.get("/api/quiz/tree")
        assert client.post("/api/quiz/tree/submit", json=["x"]).status_code == 400
