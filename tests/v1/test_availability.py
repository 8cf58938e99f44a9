# tests/v1/test_availability.py
"""Tests for meeting-date availability endpoints."""

from __future__ import annotations

from fastapi import status

from bookclub.models import MeetingVote
from bookclub.services import adjusted_counts, availability_service, peak


def _submit(member, book_id: int, dates: list[str], **extra):
    return member.client.post(
        "/api/availability", json={"bookId": book_id, "dates": dates, **extra}
    )


def _counts(client, book_id: int) -> dict[str, int]:
    response = client.get(f"/api/availability/{book_id}")
    assert response.status_code == status.HTTP_200_OK
    return {d["proposed_date"]: d["vote_count"] for d in response.json()["dates"]}


def test_no_dates_yet(client, book) -> None:
    assert client.get(f"/api/availability/{book.id}").json() == {"dates": []}


def test_submit_creates_dates_and_counts(client, member, other_member, book) -> None:
    assert _submit(member, book.id, ["2025-03-05", "2025-03-12"]).status_code == 200
    assert _submit(other_member, book.id, ["2025-03-12"]).status_code == 200

    assert _counts(client, book.id) == {"2025-03-05": 1, "2025-03-12": 2}


def test_resubmission_replaces_votes(client, member, book) -> None:
    _submit(member, book.id, ["2025-03-05", "2025-03-12"])
    _submit(member, book.id, ["2025-03-19"])

    # Dates stay listed with zero votes after the last vote is withdrawn.
    assert _counts(client, book.id) == {
        "2025-03-05": 0,
        "2025-03-12": 0,
        "2025-03-19": 1,
    }
    assert member.client.get(f"/api/availability/{book.id}/user/{member.user_id}").json() == {
        "dates": ["2025-03-19"]
    }


def test_submission_is_idempotent(client, member, book, db_session) -> None:
    for _ in range(2):
        _submit(member, book.id, ["2025-03-12", "2025-03-05", "2025-03-12"])

    assert _counts(client, book.id) == {"2025-03-05": 1, "2025-03-12": 1}
    assert db_session.query(MeetingVote).filter_by(user_id=member.user_id).count() == 2


def test_empty_submission_withdraws_everything(client, member, book) -> None:
    _submit(member, book.id, ["2025-03-05"])
    assert _submit(member, book.id, []).status_code == status.HTTP_200_OK
    assert client.get(f"/api/availability/{book.id}/user/{member.user_id}").json() == {
        "dates": []
    }


def test_votes_are_scoped_per_book(client, member, book, make_book) -> None:
    other_book = make_book("Emma", read_on="2025-04")
    _submit(member, book.id, ["2025-03-05"])
    _submit(member, other_book.id, ["2025-04-02"])
    _submit(member, book.id, [])

    assert _counts(client, other_book.id) == {"2025-04-02": 1}


def test_details_lists_voters(client, member, other_member, book) -> None:
    _submit(member, book.id, ["2025-03-05"])
    _submit(other_member, book.id, ["2025-03-05", "2025-03-12"])
    _submit(other_member, book.id, ["2025-03-05"])

    response = client.get(f"/api/availability/{book.id}/details")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "dates": [
            {
                "proposed_date": "2025-03-05",
                "users": [
                    {"id": member.user_id, "username": "alice"},
                    {"id": other_member.user_id, "username": "bob"},
                ],
            },
            {"proposed_date": "2025-03-12", "users": []},
        ]
    }


def test_invalid_dates_are_rejected(member, book, db_session) -> None:
    for dates in (["2025-03"], ["next tuesday"], ["2025-02-30"]):
        assert _submit(member, book.id, dates).status_code == status.HTTP_400_BAD_REQUEST
    assert db_session.query(MeetingVote).count() == 0


def test_missing_dates_field(member, book) -> None:
    response = member.client.post("/api/availability", json={"bookId": book.id})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_member_cannot_submit_for_another_user(member, other_member, book) -> None:
    response = _submit(member, book.id, ["2025-03-05"], userId=other_member.user_id)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_submit_requires_session(client, book) -> None:
    response = client.post(
        "/api/availability", json={"userId": 1, "bookId": book.id, "dates": ["2025-03-05"]}
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_submit_for_unknown_book(member) -> None:
    assert _submit(member, 9999, ["2025-03-05"]).status_code == status.HTTP_404_NOT_FOUND


def test_two_voters_scenario(client, member, other_member, book) -> None:
    _submit(member, book.id, ["2025-06-10"])
    _submit(other_member, book.id, ["2025-06-10", "2025-06-12"])
    assert _counts(client, book.id) == {"2025-06-10": 2, "2025-06-12": 1}

    # Withdrawing drops each of the member's dates by exactly one.
    _submit(other_member, book.id, [])
    assert _counts(client, book.id) == {"2025-06-10": 1, "2025-06-12": 0}


def test_snapshot_feeds_optimistic_counts(db_session, member, other_member, book) -> None:
    _submit(member, book.id, ["2025-03-05"])
    _submit(other_member, book.id, ["2025-03-05", "2025-03-12"])

    snapshot = availability_service.get_vote_counts(db_session, book.id)
    initial = availability_service.get_user_votes(db_session, book.id, member.user_id)
    counts = adjusted_counts(snapshot, initial, {"2025-03-12"})

    assert counts == {"2025-03-05": 1, "2025-03-12": 2}
    assert peak(counts, "2025-03") == (2, ["2025-03-12"])


def test_peak_lists_most_popular_dates(client, member, other_member, book) -> None:
    _submit(member, book.id, ["2025-03-05", "2025-04-02"])
    _submit(other_member, book.id, ["2025-03-05", "2025-03-12", "2025-04-02"])

    response = client.get(f"/api/availability/{book.id}/peak")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"maxCount": 2, "dates": ["2025-03-05", "2025-04-02"]}

    march = client.get(f"/api/availability/{book.id}/peak", params={"month": "2025-03"})
    assert march.json() == {"maxCount": 2, "dates": ["2025-03-05"]}


def test_peak_is_empty_without_votes(client, member, book) -> None:
    _submit(member, book.id, ["2025-03-05"])
    _submit(member, book.id, [])

    response = client.get(f"/api/availability/{book.id}/peak")
    assert response.json() == {"maxCount": 0, "dates": []}


def test_peak_rejects_bad_month(client, book) -> None:
    response = client.get(f"/api/availability/{book.id}/peak", params={"month": "2025-3"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "error" in response.json()
