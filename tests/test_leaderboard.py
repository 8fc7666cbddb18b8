"""Tests for leaderboard ordering and per-student ranking."""

import pytest

from boostly.core.errors import NotFound
from boostly.services import endorsement_service, leaderboard_service, recognition_service


@pytest.fixture
def populated(session, make_student):
    """S3 has 50 received, S1 and S2 tie at 30, S4 has none."""

    for student_id in ("S1", "S2", "S3", "S4"):
        make_student(student_id, name=f"Name {student_id}")

    first = recognition_service.create_recognition(session, sender_id="S1", receiver_id="S3", credits=20)
    recognition_service.create_recognition(session, sender_id="S2", receiver_id="S3", credits=30)
    recognition_service.create_recognition(session, sender_id="S3", receiver_id="S1", credits=30)
    recognition_service.create_recognition(session, sender_id="S4", receiver_id="S2", credits=30)
    endorsement_service.create_endorsement(session, recognition_id=first.recognition.recognition_id, endorser_id="S2")
    endorsement_service.create_endorsement(session, recognition_id=first.recognition.recognition_id, endorser_id="S4")
    session.commit()


class TestTopRecipients:
    def test_order_and_counts(self, session, populated):
        entries = leaderboard_service.top_recipients(session, limit=10)

        assert [e.student_id for e in entries] == ["S3", "S1", "S2", "S4"]
        assert [e.rank for e in entries] == [1, 2, 3, 4]
        assert [e.total_credits_received for e in entries] == [50, 30, 30, 0]
        assert [e.recognition_count for e in entries] == [2, 1, 1, 0]
        assert [e.endorsement_count for e in entries] == [2, 0, 0, 0]
        assert entries[0].name == "Name S3"

    def test_ties_broken_by_student_id(self, session, make_student):
        for student_id in ("zed", "amy", "Bob", "kim"):
            make_student(student_id, total_credits_received=25)

        entries = leaderboard_service.top_recipients(session)

        assert [e.student_id for e in entries] == sorted(["zed", "amy", "Bob", "kim"])

    def test_limit_window(self, session, populated):
        entries = leaderboard_service.top_recipients(session, limit=2)
        assert [e.student_id for e in entries] == ["S3", "S1"]

    def test_limit_is_clamped(self, session, populated):
        assert len(leaderboard_service.top_recipients(session, limit=0)) == 1
        assert len(leaderboard_service.top_recipients(session, limit=1000)) == 4

    def test_read_only(self, session, populated):
        first = leaderboard_service.top_recipients(session)
        second = leaderboard_service.top_recipients(session)
        assert first == second
        assert not session.dirty


class TestStudentRanking:
    def test_ranking_agrees_with_full_sort(self, session, populated):
        board = {e.student_id: e for e in leaderboard_service.top_recipients(session, limit=100)}

        for student_id, entry in board.items():
            assert leaderboard_service.student_ranking(session, student_id) == entry

    def test_ranking_with_many_ties(self, session, make_student):
        totals = {"a": 10, "b": 10, "c": 30, "d": 10, "e": 0}
        for student_id, total in totals.items():
            make_student(student_id, total_credits_received=total)

        ranks = {sid: leaderboard_service.student_ranking(session, sid).rank for sid in totals}

        assert ranks == {"c": 1, "a": 2, "b": 3, "d": 4, "e": 5}

    def test_unknown_student(self, session):
        with pytest.raises(NotFound, match="Student not found"):
            leaderboard_service.student_ranking(session, "ghost")


class TestLeaderboardApi:
    def test_leaderboard(self, client, populated):
        response = client.get("/api/leaderboard", params={"limit": 3})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["limit"] == 3
        assert data["total"] == 3
        assert data["leaderboard"][0] == {
            "rank": 1,
            "studentId": "S3",
            "name": "Name S3",
            "totalCreditsReceived": 50,
            "recognitionCount": 2,
            "endorsementCount": 2,
        }

    def test_student_ranking(self, client, populated):
        data = client.get("/api/leaderboard/student/S2").json()["data"]

        assert data["rank"] == 3
        assert data["totalCreditsReceived"] == 30

    def test_student_ranking_not_found(self, client):
        response = client.get("/api/leaderboard/student/ghost")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Student not found"}

    def test_limit_out_of_range(self, client):
        assert client.get("/api/leaderboard", params={"limit": 101}).status_code == 400
