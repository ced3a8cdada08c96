from fastapi import status
from tests.conf_tests import client, clear_db, test_db, test_hotel, test_room


def test_get_all_hotels_empty():
    response = client.get("/api/hotels")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"] == []


def test_get_all_hotels(test_hotel, test_room): # pylint: disable=redefined-outer-name
    response = client.get("/api/hotels")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["success"] is True
    assert len(body["data"]) == 1
    hotel = body["data"][0]
    assert hotel["hotelId"] == test_hotel.id
    assert hotel["hotelName"] == "Grand Hotel"
    assert hotel["roomCount"] == 1
    assert hotel["thumbnailImage"] == "https://example.com/hotel1.jpg"
