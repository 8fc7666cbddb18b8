"""Tests for the endorsement tracker."""

import uuid

import pytest

from boostly.core.errors import NotFound, ValidationFailed
from boostly.models import Endorsement
from boostly.services import endorsement_service, recognition_service
from boostly.services.endorsement_service import EndorsementRuleViolation


@pytest.fixture
def recognition(session, make_student):
    make_student("A", name="Alex Rao")
    make_student("B", name="Bianca Liu")
    make_student("C", name="Carlos Menon")
    result = recognition_service.create_recognition(session, sender_id="A", receiver_id="B", credits=10)
    session.commit()
    return result.recognition


class TestCreateEndorsement:
    def test_create(self, session, recognition):
        endorsement = endorsement_service.create_endorsement(
            session, recognition_id=str(recognition.recognition_id), endorser_id="C"
        )
        session.commit()

        assert endorsement.endorsement_id is not None
        assert endorsement.recognition_id == recognition.recognition_id
        assert endorsement.endorser_id == "C"

    def test_self_endorsement_allowed(self, session, recognition):
        endorsement_service.create_endorsement(session, recognition_id=recognition.recognition_id, endorser_id="A")
        endorsement_service.create_endorsement(session, recognition_id=recognition.recognition_id, endorser_id="B")
        session.commit()

        assert session.query(Endorsement).count() == 2

    def test_duplicate_rejected(self, session, recognition):
        endorsement_service.create_endorsement(session, recognition_id=recognition.recognition_id, endorser_id="C")
        session.commit()

        with pytest.raises(EndorsementRuleViolation, match="already endorsed") as excinfo:
            endorsement_service.create_endorsement(session, recognition_id=recognition.recognition_id, endorser_id="C")
        assert excinfo.value.status_code == 400

    def test_duplicate_caught_by_unique_constraint(self, session, recognition, monkeypatch):
        endorsement_service.create_endorsement(session, recognition_id=recognition.recognition_id, endorser_id="C")
        session.commit()
        # simulate a concurrent request that passed the lookup
        monkeypatch.setattr(endorsement_service, "_find", lambda *args: None)

        with pytest.raises(EndorsementRuleViolation, match="already endorsed"):
            endorsement_service.create_endorsement(session, recognition_id=recognition.recognition_id, endorser_id="C")

        assert session.query(Endorsement).count() == 1

    def test_missing_fields(self, session):
        with pytest.raises(ValidationFailed, match="recognitionId and endorserId are required"):
            endorsement_service.create_endorsement(session, recognition_id=None, endorser_id="C")

    def test_unknown_recognition(self, session, make_student):
        make_student("C")
        with pytest.raises(NotFound, match="Recognition not found"):
            endorsement_service.create_endorsement(session, recognition_id=str(uuid.uuid4()), endorser_id="C")

    def test_unknown_endorser(self, session, recognition):
        with pytest.raises(NotFound, match="Endorser not found"):
            endorsement_service.create_endorsement(session, recognition_id=recognition.recognition_id, endorser_id="ghost")

    def test_malformed_recognition_id(self, session):
        with pytest.raises(ValidationFailed, match="Invalid ID format"):
            endorsement_service.create_endorsement(session, recognition_id="abc", endorser_id="C")


class TestDeleteAndRead:
    def test_delete(self, session, recognition):
        endorsement = endorsement_service.create_endorsement(
            session, recognition_id=recognition.recognition_id, endorser_id="C"
        )
        session.commit()

        endorsement_service.delete_endorsement(session, str(endorsement.endorsement_id))
        session.commit()

        assert endorsement_service.check_endorsement(session, recognition.recognition_id, "C") is None
        # endorsing again after removal is allowed
        endorsement_service.create_endorsement(session, recognition_id=recognition.recognition_id, endorser_id="C")

    def test_delete_missing(self, session):
        with pytest.raises(NotFound, match="Endorsement not found"):
            endorsement_service.delete_endorsement(session, str(uuid.uuid4()))

    def test_list_and_check(self, session, recognition):
        endorsement_service.create_endorsement(session, recognition_id=recognition.recognition_id, endorser_id="C")
        endorsement_service.create_endorsement(session, recognition_id=recognition.recognition_id, endorser_id="A")
        session.commit()

        listed = endorsement_service.list_by_recognition(session, str(recognition.recognition_id))

        assert {e.endorser_id for e in listed} == {"A", "C"}
        assert {e.endorser.name for e in listed} == {"Alex Rao", "Carlos Menon"}
        assert endorsement_service.check_endorsement(session, recognition.recognition_id, "C") is not None
        assert endorsement_service.check_endorsement(session, recognition.recognition_id, "B") is None


class TestEndorsementApi:
    def test_lifecycle(self, client, session, recognition):
        recognition_id = str(recognition.recognition_id)

        created = client.post("/api/endorsement", json={"recognitionId": recognition_id, "endorserId": "C"})
        assert created.status_code == 201
        body = created.json()
        assert body["message"] == "Endorsement created successfully"
        endorsement = body["data"]["endorsement"]
        assert endorsement["recognitionId"] == recognition_id
        assert endorsement["endorserId"] == "C"

        duplicate = client.post("/api/endorsement", json={"recognitionId": recognition_id, "endorserId": "C"})
        assert duplicate.status_code == 400
        assert duplicate.json() == {"success": False, "message": "You have already endorsed this recognition"}

        listed = client.get(f"/api/endorsement/recognition/{recognition_id}").json()["data"]
        assert listed["count"] == 1
        assert listed["endorsements"][0]["endorser"] == {"studentId": "C", "name": "Carlos Menon"}

        check = client.get(f"/api/endorsement/check/{recognition_id}/C").json()["data"]
        assert check["hasEndorsed"] is True
        assert check["endorsement"]["id"] == endorsement["id"]

        deleted = client.delete(f"/api/endorsement/{endorsement['id']}")
        assert deleted.status_code == 200
        assert deleted.json()["message"] == "Endorsement removed successfully"

        check = client.get(f"/api/endorsement/check/{recognition_id}/C").json()["data"]
        assert check == {"hasEndorsed": False, "endorsement": None}

    def test_delete_not_found(self, client):
        response = client.delete(f"/api/endorsement/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["message"] == "Endorsement not found"

    def test_recognition_not_found(self, client, make_student):
        make_student("C")

        response = client.post("/api/endorsement", json={"recognitionId": str(uuid.uuid4()), "endorserId": "C"})

        assert response.status_code == 404

    def test_missing_fields(self, client):
        response = client.post("/api/endorsement", json={})

        assert response.status_code == 400
        assert response.json()["message"] == "recognitionId and endorserId are required"
