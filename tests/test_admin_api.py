from decimal import Decimal

import pytest

from unistay.models.enums import BookingStatus
from tests.helpers import auth_headers

ADMIN = "/api/v1/admin"


@pytest.mark.parametrize("path", ["/stats", "/users", "/hostels", "/bookings"])
def test_non_admins_are_forbidden(client, marketplace, path):
    for user in (marketplace["student"], marketplace["owner"]):
        response = client.get(f"{ADMIN}{path}", headers=auth_headers(user))
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"


def test_stats_summarise_the_platform(client, factory, marketplace):
    room_type = factory.room_type(marketplace["hostel"], total_count=3)
    factory.booking(marketplace["student"], room_type, status=BookingStatus.CONFIRMED)
    factory.booking(marketplace["student"], room_type, status=BookingStatus.COMPLETED)
    factory.booking(marketplace["other_student"], room_type, status=BookingStatus.PENDING)
    factory.review(marketplace["student"], marketplace["hostel"], rating=4)
    factory.student(is_verified=False)

    response = client.get(f"{ADMIN}/stats", headers=auth_headers(marketplace["admin"]))

    assert response.status_code == 200, response.text
    stats = response.json()
    assert stats["total_users"] == 5
    assert stats["total_hostels"] == 1
    assert stats["total_bookings"] == 3
    assert stats["active_bookings"] == 1
    assert stats["pending_verifications"] == 1
    # two paid bookings at 2 x 300000
    assert Decimal(stats["total_revenue"]) == Decimal("1200000")
    assert stats["average_rating"] == 4.0


def test_list_users_filters_by_role_and_search(client, factory, marketplace):
    factory.student(first_name="Zelda", last_name="Quill")

    by_role = client.get(f"{ADMIN}/users", params={"role": "hostel_owner"}, headers=auth_headers(marketplace["admin"]))
    by_name = client.get(f"{ADMIN}/users", params={"search": "zelda"}, headers=auth_headers(marketplace["admin"]))

    assert [u["id"] for u in by_role.json()["items"]] == [marketplace["owner"].id]
    assert [u["first_name"] for u in by_name.json()["items"]] == ["Zelda"]


def test_admin_verifies_user(client, factory, marketplace):
    pending_owner = factory.owner(is_verified=False)

    response = client.put(
        f"{ADMIN}/users/{pending_owner.id}",
        json={"is_verified": True},
        headers=auth_headers(marketplace["admin"]),
    )

    assert response.status_code == 200, response.text
    assert response.json()["is_verified"] is True
    assert response.json()["is_active"] is True


def test_deactivated_user_loses_access(client, marketplace):
    student = marketplace["student"]
    client.put(
        f"{ADMIN}/users/{student.id}",
        json={"is_active": False},
        headers=auth_headers(marketplace["admin"]),
    )

    response = client.get("/api/v1/bookings", headers=auth_headers(student))

    assert response.status_code == 401


def test_moderating_unknown_user_is_not_found(client, marketplace):
    response = client.put(
        f"{ADMIN}/users/missing",
        json={"is_verified": True},
        headers=auth_headers(marketplace["admin"]),
    )

    assert response.status_code == 404


def test_admin_lists_all_hostels(client, factory, marketplace):
    closed = factory.hostel(marketplace["owner"], is_active=False)

    everything = client.get(f"{ADMIN}/hostels", headers=auth_headers(marketplace["admin"])).json()
    inactive = client.get(
        f"{ADMIN}/hostels",
        params={"is_active": "false"},
        headers=auth_headers(marketplace["admin"]),
    ).json()

    assert {h["id"] for h in everything["items"]} == {marketplace["hostel"].id, closed.id}
    assert [h["id"] for h in inactive["items"]] == [closed.id]


def test_admin_searches_bookings(client, factory, marketplace):
    named = factory.student(first_name="Ophelia")
    target = factory.booking(named, marketplace["room_type"], status=BookingStatus.CONFIRMED)
    factory.booking(marketplace["student"], marketplace["room_type"])

    response = client.get(
        f"{ADMIN}/bookings",
        params={"search": "ophelia", "status": "confirmed"},
        headers=auth_headers(marketplace["admin"]),
    )

    assert response.status_code == 200, response.text
    assert [b["id"] for b in response.json()["items"]] == [target.id]


def test_admin_search_treats_wildcards_literally(client, factory, marketplace):
    factory.booking(marketplace["student"], marketplace["room_type"])
    headers = auth_headers(marketplace["admin"])

    def user_ids(term):
        return [u["id"] for u in client.get(f"{ADMIN}/users", params={"search": term}, headers=headers).json()["items"]]

    def booking_ids(term):
        return [b["id"] for b in client.get(f"{ADMIN}/bookings", params={"search": term}, headers=headers).json()["items"]]

    # only the owner's email ("hostel_owner...") holds a literal underscore
    assert user_ids("_") == [marketplace["owner"].id]
    assert user_ids("%") == []
    assert user_ids("\\") == []
    assert booking_ids("_") == []
    assert booking_ids("%") == []
