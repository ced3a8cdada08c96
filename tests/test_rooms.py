from decimal import Decimal
import pytest
from fastapi import status
from hotel_booking.models.hotel import Hotel
from hotel_booking.models.room import Room, RoomImage
from tests.conf_tests import client, clear_db, test_db, test_hotel, test_room


@pytest.fixture
def rooms(test_db, test_hotel, test_room): # pylint: disable=redefined-outer-name
    beach_hotel = Hotel(hotel_name="Beach Resort", city="Da Nang", country="Vietnam")
    test_db.add(beach_hotel)
    test_db.flush()
    test_db.add_all(
        [
            Room(
                hotel_id=test_hotel.id,
                room_type="Standard Room",
                price=Decimal("300000"),
                capacity=1,
                description="Cozy room",
            ),
            Room(
                hotel_id=beach_hotel.id,
                room_type="Family Suite",
                price=Decimal("1200000"),
                capacity=4,
                description="Sea view suite",
                images=[RoomImage(image_url="https://example.com/suite.jpg")],
            ),
        ]
    )
    test_db.commit()
    return test_db.query(Room).order_by(Room.id).all()


# Search
def test_search_rooms_no_criteria(rooms): # pylint: disable=redefined-outer-name
    response = client.post("/api/rooms/search", json={})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data["totalElements"] == 3
    assert data["currentPage"] == 0
    assert data["pageSize"] == 10
    assert data["isFirst"] is True
    assert data["isLast"] is True
    assert [room["roomId"] for room in data["rooms"]] == [room.id for room in rooms]


def test_search_rooms_by_keyword(rooms): # pylint: disable=redefined-outer-name
    response = client.post("/api/rooms/search", json={"keyword": "suite"})
    data = response.json()["data"]
    assert data["totalElements"] == 1
    assert data["rooms"][0]["roomType"] == "Family Suite"
    assert data["rooms"][0]["thumbnailImage"] == "https://example.com/suite.jpg"

    # hotel name matches too
    response = client.post("/api/rooms/search", json={"keyword": "grand"})
    assert response.json()["data"]["totalElements"] == 2


def test_search_rooms_by_city_ignores_case(rooms): # pylint: disable=redefined-outer-name
    response = client.post("/api/rooms/search", json={"city": "da nang"})
    data = response.json()["data"]
    assert data["totalElements"] == 1
    assert data["rooms"][0]["hotel"]["hotelName"] == "Beach Resort"


def test_search_rooms_pagination(rooms): # pylint: disable=redefined-outer-name
    response = client.post("/api/rooms/search", json={"page": 1, "size": 2})
    data = response.json()["data"]
    assert data["totalElements"] == 3
    assert data["totalPages"] == 2
    assert data["currentPage"] == 1
    assert data["isFirst"] is False
    assert data["isLast"] is True
    assert len(data["rooms"]) == 1


def test_search_rooms_invalid_page_size():
    response = client.post("/api/rooms/search", json={"size": 0})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Validation failed"


# Filter
def test_filter_rooms_by_price_range(rooms): # pylint: disable=redefined-outer-name
    response = client.post("/api/rooms/filter", json={"minPrice": 400000, "maxPrice": 1500000})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert [room["price"] for room in data["rooms"]] == [500000, 1200000]


def test_filter_rooms_sorted_desc(rooms): # pylint: disable=redefined-outer-name
    response = client.post("/api/rooms/filter", json={"sortBy": "price", "sortDirection": "DESC"})
    prices = [room["price"] for room in response.json()["data"]["rooms"]]
    assert prices == [1200000, 500000, 300000]


def test_filter_rooms_by_capacity(rooms): # pylint: disable=redefined-outer-name
    response = client.post("/api/rooms/filter", json={"minCapacity": 2, "sortBy": "capacity"})
    capacities = [room["capacity"] for room in response.json()["data"]["rooms"]]
    assert capacities == [2, 4]


def test_filter_rooms_unknown_sort_field_uses_price(rooms): # pylint: disable=redefined-outer-name
    response = client.post("/api/rooms/filter", json={"sortBy": "password_hash"})
    assert response.status_code == status.HTTP_200_OK
    prices = [room["price"] for room in response.json()["data"]["rooms"]]
    assert prices == [300000, 500000, 1200000]


def test_filter_rooms_by_room_type_and_city(rooms): # pylint: disable=redefined-outer-name
    response = client.post("/api/rooms/filter", json={"roomType": "room", "city": "HO CHI MINH"})
    data = response.json()["data"]
    assert data["totalElements"] == 2


# Detail
def test_get_room_detail(test_room): # pylint: disable=redefined-outer-name
    response = client.get(f"/api/rooms/{test_room.id}")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data["roomId"] == test_room.id
    assert data["price"] == 500000
    assert data["images"] == ["https://example.com/room1.jpg"]
    assert data["hotel"]["description"] == "Luxury hotel in the heart of the city"
    assert data["hotel"]["images"] == [
        "https://example.com/hotel1.jpg",
        "https://example.com/hotel2.jpg",
    ]


def test_get_room_detail_not_found():
    response = client.get("/api/rooms/9999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Room not found with ID: 9999"
