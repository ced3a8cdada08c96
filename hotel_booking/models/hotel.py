from datetime import datetime
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from hotel_booking.db import Base


class Hotel(Base):
    __tablename__ = "hotels"

    id = Column(Integer, primary_key=True, index=True)
    hotel_name = Column(String(255), index=True, nullable=False)
    address = Column(String(255), nullable=True)
    city = Column(String(100), index=True, nullable=True)
    country = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    images = relationship(
        "HotelImage",
        back_populates="hotel",
        cascade="all, delete-orphan",
        order_by="HotelImage.id",
    )
    rooms = relationship(
        "Room", back_populates="hotel", cascade="all, delete-orphan"
    )
    reviews = relationship(
        "Review", back_populates="hotel", cascade="all, delete-orphan"
    )


class HotelImage(Base):
    __tablename__ = "hotel_images"

    id = Column(Integer, primary_key=True, index=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id"), nullable=False)
    image_url = Column(String(500), nullable=False)

    hotel = relationship("Hotel", back_populates="images")
