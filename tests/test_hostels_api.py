from decimal import Decimal

from tests.helpers import auth_headers

HOSTELS = "/api/v1/hostels"


def new_hostel_payload(**overrides):
    payload = {
        "name": "Riverside Lodge",
        "address": "12 River Lane",
        "description": "Quiet rooms by the water",
        "room_types": [
            {"name": "Single", "price_per_month": "250000", "total_count": 4, "amenities": ["wifi", "wifi", " desk "]},
            {"name": "Shared", "capacity": 2, "price_per_month": "150000", "total_count": 6, "available_count": 2},
        ],
    }
    payload.update(overrides)
    return payload


# ---------------------------------------------------------------------------
# Public search
# ---------------------------------------------------------------------------


def test_search_lists_only_active_hostels_of_verified_owners(client, factory, marketplace):
    factory.hostel(marketplace["owner"], is_active=False)
    unverified = factory.owner(is_verified=False)
    factory.hostel(unverified)

    response = client.get(HOSTELS)

    assert response.status_code == 200, response.text
    body = response.json()
    assert [item["id"] for item in body["items"]] == [marketplace["hostel"].id]
    assert body["pagination"] == {"page": 1, "limit": 10, "total": 1, "pages": 1}


def test_search_hides_full_room_types(client, factory, marketplace):
    factory.room_type(marketplace["hostel"], name="Suite", total_count=2, available_count=0)

    item = client.get(HOSTELS).json()["items"][0]

    assert [rt["name"] for rt in item["room_types"]] == ["Single"]


def test_search_matches_text_and_price(client, factory, marketplace):
    cheap = factory.hostel(marketplace["owner"], name="Budget Corner")
    factory.room_type(cheap, price_per_month="90000")

    by_text = client.get(HOSTELS, params={"search": "budget"}).json()["items"]
    by_price = client.get(HOSTELS, params={"max_price": "100000"}).json()["items"]
    above = client.get(HOSTELS, params={"min_price": "200000"}).json()["items"]

    assert [h["id"] for h in by_text] == [cheap.id]
    assert [h["id"] for h in by_price] == [cheap.id]
    assert [h["id"] for h in above] == [marketplace["hostel"].id]


def test_search_filters_by_university(client, factory, marketplace):
    university = factory.university()
    near = factory.hostel(marketplace["owner"], university_id=university.id)

    items = client.get(HOSTELS, params={"university_id": university.id}).json()["items"]

    assert [h["id"] for h in items] == [near.id]
    assert items[0]["university"]["short_code"] == university.short_code


def test_inverted_price_range_is_rejected(client, marketplace):
    response = client.get(HOSTELS, params={"min_price": "500", "max_price": "100"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_search_reports_rating_aggregate(client, factory, marketplace):
    factory.review(marketplace["student"], marketplace["hostel"], rating=5)
    factory.review(marketplace["other_student"], marketplace["hostel"], rating=4)

    item = client.get(HOSTELS).json()["items"][0]

    assert item["average_rating"] == 4.5
    assert item["review_count"] == 2


def test_hostel_detail_includes_reviews(client, factory, marketplace):
    factory.review(marketplace["student"], marketplace["hostel"], rating=3, comment="Fine")

    response = client.get(f"{HOSTELS}/{marketplace['hostel'].id}")

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["owner"]["id"] == marketplace["owner"].id
    assert [r["comment"] for r in body["reviews"]] == ["Fine"]
    assert body["review_count"] == 1


def test_inactive_hostel_detail_is_not_found(client, factory, marketplace):
    closed = factory.hostel(marketplace["owner"], is_active=False)

    response = client.get(f"{HOSTELS}/{closed.id}")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


# ---------------------------------------------------------------------------
# Owner management
# ---------------------------------------------------------------------------


def test_owner_creates_hostel_with_room_types(client, marketplace):
    response = client.post(HOSTELS, json=new_hostel_payload(), headers=auth_headers(marketplace["owner"]))

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["owner_id"] == marketplace["owner"].id
    assert body["is_active"] is True
    room_types = {rt["name"]: rt for rt in body["room_types"]}
    assert room_types["Single"]["available_count"] == 4
    assert room_types["Single"]["amenities"] == ["wifi", "desk"]
    assert room_types["Shared"]["available_count"] == 2
    assert Decimal(room_types["Shared"]["price_per_month"]) == Decimal("150000")


def test_student_cannot_create_hostel(client, marketplace):
    response = client.post(HOSTELS, json=new_hostel_payload(), headers=auth_headers(marketplace["student"]))

    assert response.status_code == 403


def test_room_type_inventory_must_fit(client, marketplace):
    payload = new_hostel_payload(
        room_types=[{"name": "Single", "price_per_month": "1000", "total_count": 1, "available_count": 3}]
    )

    response = client.post(HOSTELS, json=payload, headers=auth_headers(marketplace["owner"]))

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_unknown_university_is_rejected(client, marketplace):
    response = client.post(
        HOSTELS,
        json=new_hostel_payload(university_id="nowhere"),
        headers=auth_headers(marketplace["owner"]),
    )

    assert response.status_code == 400
    assert "university_id" in response.json()["error"]["details"]["field_errors"]


def test_owner_updates_own_hostel(client, marketplace):
    response = client.put(
        f"{HOSTELS}/{marketplace['hostel'].id}",
        json={"name": "Renamed Hall"},
        headers=auth_headers(marketplace["owner"]),
    )

    assert response.status_code == 200, response.text
    assert response.json()["name"] == "Renamed Hall"
    assert response.json()["address"] == marketplace["hostel"].address


def test_other_owner_cannot_update_hostel(client, factory, marketplace):
    response = client.put(
        f"{HOSTELS}/{marketplace['hostel'].id}",
        json={"name": "Taken Over"},
        headers=auth_headers(factory.owner()),
    )

    assert response.status_code == 403


def test_admin_can_update_any_hostel(client, marketplace):
    response = client.put(
        f"{HOSTELS}/{marketplace['hostel'].id}",
        json={"description": "Checked by staff"},
        headers=auth_headers(marketplace["admin"]),
    )

    assert response.status_code == 200
    assert response.json()["description"] == "Checked by staff"


def test_inventory_cannot_be_edited_through_hostel_update(client, marketplace):
    response = client.put(
        f"{HOSTELS}/{marketplace['hostel'].id}",
        json={"available_count": 10},
        headers=auth_headers(marketplace["owner"]),
    )

    assert response.status_code == 400


def test_delete_deactivates_hostel(client, db_session, marketplace):
    hostel = marketplace["hostel"]

    response = client.delete(f"{HOSTELS}/{hostel.id}", headers=auth_headers(marketplace["owner"]))

    assert response.status_code == 204
    db_session.refresh(hostel)
    assert hostel.is_active is False
    assert client.get(HOSTELS).json()["items"] == []


def test_delete_missing_hostel_is_not_found(client, marketplace):
    response = client.delete(f"{HOSTELS}/missing", headers=auth_headers(marketplace["owner"]))

    assert response.status_code == 404


def test_owner_adds_room_type(client, marketplace):
    response = client.post(
        f"{HOSTELS}/{marketplace['hostel'].id}/room-types",
        json={"name": "Double", "capacity": 2, "price_per_month": "180000", "total_count": 3},
        headers=auth_headers(marketplace["owner"]),
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["hostel_id"] == marketplace["hostel"].id
    assert body["total_count"] == 3
    assert body["available_count"] == 3


def test_search_wildcards_are_matched_literally(client, factory, marketplace):
    discounted = factory.hostel(marketplace["owner"], name="Hall 50% Off")
    factory.room_type(discounted)

    def found(term):
        return [h["id"] for h in client.get(HOSTELS, params={"search": term}).json()["items"]]

    assert found("%") == [discounted.id]
    assert found("_") == []
    assert found("\\") == []
    assert found("50% off") == [discounted.id]
