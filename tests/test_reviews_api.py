import pytest
from sqlalchemy.exc import IntegrityError

from unistay.core.exceptions import ConflictError, ErrorCode
from unistay.models.enums import BookingStatus
from unistay.schemas.review import ReviewCreate
from unistay.services.review_service import ReviewService
from tests.helpers import auth_headers, principal_for

REVIEWS = "/api/v1/reviews"


@pytest.fixture()
def stayed(factory, marketplace):
    """The marketplace student holds a completed booking at the hostel."""
    factory.booking(marketplace["student"], marketplace["room_type"], status=BookingStatus.COMPLETED)
    return marketplace


def test_student_with_a_stay_can_review(client, stayed):
    response = client.post(
        REVIEWS,
        json={"hostel_id": stayed["hostel"].id, "rating": 5, "comment": "Great staff"},
        headers=auth_headers(stayed["student"]),
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["rating"] == 5
    assert body["student"]["id"] == stayed["student"].id


@pytest.mark.parametrize("status", [BookingStatus.PENDING, BookingStatus.CANCELLED])
def test_review_requires_confirmed_or_completed_stay(client, factory, marketplace, status):
    factory.booking(marketplace["student"], marketplace["room_type"], status=status)

    response = client.post(
        REVIEWS,
        json={"hostel_id": marketplace["hostel"].id, "rating": 4},
        headers=auth_headers(marketplace["student"]),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


def test_second_review_is_a_conflict(client, factory, stayed):
    factory.review(stayed["student"], stayed["hostel"], rating=4)

    response = client.post(
        REVIEWS,
        json={"hostel_id": stayed["hostel"].id, "rating": 2},
        headers=auth_headers(stayed["student"]),
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ALREADY_REVIEWED"


def test_review_for_unknown_hostel_is_not_found(client, marketplace):
    response = client.post(
        REVIEWS,
        json={"hostel_id": "missing", "rating": 3},
        headers=auth_headers(marketplace["student"]),
    )

    assert response.status_code == 404


@pytest.mark.parametrize("rating", [0, 6])
def test_rating_must_be_between_one_and_five(client, stayed, rating):
    response = client.post(
        REVIEWS,
        json={"hostel_id": stayed["hostel"].id, "rating": rating},
        headers=auth_headers(stayed["student"]),
    )

    assert response.status_code == 400
    assert "rating" in response.json()["error"]["details"]["field_errors"]


def test_owner_cannot_review(client, stayed):
    response = client.post(
        REVIEWS,
        json={"hostel_id": stayed["hostel"].id, "rating": 5},
        headers=auth_headers(stayed["owner"]),
    )

    assert response.status_code == 403


def test_list_reviews_filters_by_hostel(client, factory, marketplace):
    other_hostel = factory.hostel(marketplace["owner"])
    factory.review(marketplace["student"], marketplace["hostel"], rating=5)
    factory.review(marketplace["student"], other_hostel, rating=1)

    response = client.get(REVIEWS, params={"hostel_id": marketplace["hostel"].id})

    assert response.status_code == 200
    body = response.json()
    assert body["pagination"]["total"] == 1
    assert body["items"][0]["rating"] == 5


def test_unique_constraint_race_maps_to_already_reviewed(db_session, stayed, monkeypatch):
    service = ReviewService(db_session)

    def lose_race(review):
        raise IntegrityError("INSERT INTO reviews", {}, Exception("UNIQUE constraint failed"))

    monkeypatch.setattr(service.reviews, "create", lose_race)

    with pytest.raises(ConflictError) as exc_info:
        service.create_review(principal_for(stayed["student"]), ReviewCreate(hostel_id=stayed["hostel"].id, rating=4))

    assert exc_info.value.error_code == ErrorCode.ALREADY_REVIEWED
