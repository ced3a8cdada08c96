# pylint: disable=redefined-outer-name
import pytest
from fastapi import status
from hotel_booking.models.hotel import Hotel
from hotel_booking.models.review import Review
from tests.conf_tests import (
    client,
    clear_db,
    test_db,
    test_user,
    auth_headers,
    other_user,
    other_auth_headers,
    test_hotel,
    test_room,
)


@pytest.fixture
def test_review(auth_headers, test_hotel):
    response = client.post(
        "/api/reviews",
        json={"hotelId": test_hotel.id, "rating": 4, "comment": "Great stay"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()["data"]


def test_create_review_unauthorized(test_hotel):
    response = client.post("/api/reviews", json={"hotelId": test_hotel.id, "rating": 5})
    assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)


def test_create_review_success(test_review, test_hotel, test_user):
    assert test_review["hotelId"] == test_hotel.id
    assert test_review["hotelName"] == "Grand Hotel"
    assert test_review["rating"] == 4
    assert test_review["comment"] == "Great stay"
    assert test_review["user"]["userId"] == test_user.id
    assert test_review["user"]["firstName"] == "Test"


def test_create_review_twice(test_review, auth_headers, test_hotel, test_db):
    response = client.post(
        "/api/reviews",
        json={"hotelId": test_hotel.id, "rating": 2},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "You have already reviewed this hotel"
    assert test_db.query(Review).count() == 1


def test_create_review_hotel_not_found(auth_headers):
    response = client.post("/api/reviews", json={"hotelId": 9999, "rating": 3}, headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.parametrize("rating", [0, 6])
def test_create_review_rating_out_of_range(auth_headers, test_hotel, rating):
    response = client.post(
        "/api/reviews", json={"hotelId": test_hotel.id, "rating": rating}, headers=auth_headers
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "rating" in response.json()["data"]


def test_update_review(test_review, auth_headers, test_hotel):
    response = client.put(
        f"/api/reviews/{test_review['reviewId']}",
        json={"hotelId": test_hotel.id, "rating": 5, "comment": "Even better"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data["rating"] == 5
    assert data["comment"] == "Even better"


def test_update_review_not_owner(test_review, other_auth_headers, test_hotel):
    response = client.put(
        f"/api/reviews/{test_review['reviewId']}",
        json={"hotelId": test_hotel.id, "rating": 1},
        headers=other_auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "You are not allowed to edit this review"


def test_update_review_other_hotel(test_review, auth_headers, test_db):
    hotel = Hotel(hotel_name="Another Hotel")
    test_db.add(hotel)
    test_db.commit()
    response = client.put(
        f"/api/reviews/{test_review['reviewId']}",
        json={"hotelId": hotel.id, "rating": 1},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "The review does not belong to the specified hotel"


def test_update_review_not_found(auth_headers, test_hotel):
    response = client.put(
        "/api/reviews/9999", json={"hotelId": test_hotel.id, "rating": 3}, headers=auth_headers
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_get_reviews_by_hotel_and_room(test_review, other_auth_headers, test_hotel, test_room):
    client.post(
        "/api/reviews",
        json={"hotelId": test_hotel.id, "rating": 3},
        headers=other_auth_headers,
    )

    response = client.get(f"/api/reviews/hotel/{test_hotel.id}")
    assert response.status_code == status.HTTP_200_OK
    by_hotel = response.json()["data"]
    assert len(by_hotel) == 2

    response = client.get(f"/api/reviews/room/{test_room.id}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"] == by_hotel


def test_get_reviews_by_room_not_found():
    response = client.get("/api/reviews/room/9999")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_get_my_review_by_room(auth_headers, test_room, test_hotel):
    response = client.get(f"/api/reviews/my-review/room/{test_room.id}", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "You have not reviewed this hotel yet"

    client.post(
        "/api/reviews", json={"hotelId": test_hotel.id, "rating": 5}, headers=auth_headers
    )
    response = client.get(f"/api/reviews/my-review/room/{test_room.id}", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["rating"] == 5
