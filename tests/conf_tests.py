import os
from datetime import date, datetime, timedelta
from decimal import Decimal
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

os.environ["SCHEDULER_ENABLED"] = "false"

from hotel_booking import config  # noqa: E402
from hotel_booking.main import app  # noqa: E402
from hotel_booking.db import Base, get_db  # noqa: E402
from hotel_booking.models import (  # noqa: E402
    Booking,
    BookingStatus,
    Gender,
    Hotel,
    HotelImage,
    Role,
    Room,
    RoomImage,
    User,
)
from hotel_booking.utils.auth import get_password_hash  # noqa: E402

# never talk to a real SMTP server from tests
config.SMTP_USER = None
config.SMTP_PASSWORD = None

# Test database setup
if not os.path.exists("./out"):
    os.makedirs("./out")

SQLALCHEMY_DATABASE_URL = "sqlite:///./out/tests.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create test tables
Base.metadata.create_all(bind=engine)

TEST_PASSWORD = "testpassword"
TEST_ROOM_PRICE = Decimal("500000.00")


# Dependency override
def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db

client = TestClient(app)


# Fixtures
@pytest.fixture(autouse=True)
def clear_db():
    """Clear all data from all tables after each test"""
    with engine.connect() as conn:
        trans = conn.begin()
        conn.execute(text("PRAGMA foreign_keys = OFF"))
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
        conn.execute(text("PRAGMA foreign_keys = ON"))
        trans.commit()


@pytest.fixture
def test_db():
    """Provide a database session for testing"""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_next_user():
    """Helper function to generate unique emails"""
    if not hasattr(get_next_user, "user_count"):
        get_next_user.user_count = 0
    get_next_user.user_count += 1
    return get_next_user.user_count


def create_user(db, verified=True, password=TEST_PASSWORD, created_at=None):
    """Insert a user directly in the database"""
    number = get_next_user()
    role = db.query(Role).filter(Role.role_name == "CUSTOMER").first()
    if role is None:
        role = Role(role_name="CUSTOMER")
        db.add(role)
        db.flush()
    user = User(
        first_name="Test",
        last_name=f"User{number}",
        email=f"user_{number}@example.com",
        password_hash=get_password_hash(password),
        phone_number="0123456789",
        date_of_birth=date(1990, 1, 1),
        gender=Gender.OTHER,
        is_verified=verified,
        role=role,
    )
    if created_at is not None:
        user.created_at = created_at
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def login_headers(email, password=TEST_PASSWORD):
    """Log in through the API and return bearer headers"""
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    token = response.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}


def create_booking_row(db, user, room, check_in, nights=2, status=BookingStatus.PENDING):
    """Insert a booking directly, bypassing the date checks of the service"""
    booking = Booking(
        user_id=user.id,
        room_id=room.id,
        check_in=check_in,
        check_out=check_in + timedelta(days=nights),
        total_price=room.price * nights,
        status=status,
        adults_count=1,
        children_count=0,
        infants_count=0,
        created_at=datetime.now(),
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking


@pytest.fixture
def test_user_data():
    """Fixture for registration data with a unique email"""
    number = get_next_user()
    return {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": f"new_user_{number}@example.com",
        "phoneNumber": "0987654321",
        "password": TEST_PASSWORD,
        "dateOfBirth": "1995-05-20",
        "gender": "FEMALE",
    }


@pytest.fixture
def test_user(test_db):
    """Fixture to create a verified test user in the database"""
    return create_user(test_db)


@pytest.fixture
def auth_headers(test_user):
    """Fixture to get authentication headers for test_user"""
    return login_headers(test_user.email)


@pytest.fixture
def other_user(test_db):
    return create_user(test_db)


@pytest.fixture
def other_auth_headers(other_user):
    return login_headers(other_user.email)


@pytest.fixture
def test_hotel(test_db):
    hotel = Hotel(
        hotel_name="Grand Hotel",
        address="123 Main Street",
        city="Ho Chi Minh",
        country="Vietnam",
        description="Luxury hotel in the heart of the city",
        images=[
            HotelImage(image_url="https://example.com/hotel1.jpg"),
            HotelImage(image_url="https://example.com/hotel2.jpg"),
        ],
    )
    test_db.add(hotel)
    test_db.commit()
    test_db.refresh(hotel)
    return hotel


@pytest.fixture
def test_room(test_db, test_hotel):
    room = Room(
        hotel_id=test_hotel.id,
        room_type="Deluxe Room",
        price=TEST_ROOM_PRICE,
        capacity=2,
        description="Spacious room with city view",
        images=[RoomImage(image_url="https://example.com/room1.jpg")],
    )
    test_db.add(room)
    test_db.commit()
    test_db.refresh(room)
    return room
