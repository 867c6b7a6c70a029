"""数据库实体模型"""
import datetime
from sqlalchemy import (
    Column, Integer, String, Float, Date, DateTime, ForeignKey, Boolean,
    ForeignKeyConstraint, UniqueConstraint
)
from sqlalchemy.orm import relationship
from .base import Base

USER_TYPE_CUSTOMER = 'customer'
USER_TYPE_MANAGER = 'manager'


class User(Base):
    __tablename__ = 'users'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False)
    password_hash = Column(String(200), nullable=False)
    user_type = Column(String(20), nullable=False, default=USER_TYPE_CUSTOMER)
    created_at = Column(DateTime, default=datetime.datetime.now)


class Hotel(Base):
    __tablename__ = 'hotels'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    manager_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.now)

    manager = relationship("User")
    rooms = relationship("Room", back_populates="hotel")


class Room(Base):
    __tablename__ = 'rooms'
    hotel_id = Column(Integer, ForeignKey('hotels.id'), primary_key=True)
    room_number = Column(Integer, primary_key=True, autoincrement=False)
    price = Column(Float, nullable=False)
    image_url = Column(String(30))

    hotel = relationship("Hotel", back_populates="rooms")


class RoomBooking(Base):
    __tablename__ = 'room_bookings'
    __table_args__ = (
        ForeignKeyConstraint(['hotel_id', 'room_number'], ['rooms.hotel_id', 'rooms.room_number']),
        UniqueConstraint('hotel_id', 'room_number', 'booking_date', name='uq_booking_room_date'),
    )
    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    hotel_id = Column(Integer, nullable=False)
    room_number = Column(Integer, nullable=False)
    booking_date = Column(Date, nullable=False)

    customer = relationship("User")


class RoomUpdateLog(Base):
    __tablename__ = 'room_update_logs'
    __table_args__ = (
        ForeignKeyConstraint(['hotel_id', 'room_number'], ['rooms.hotel_id', 'rooms.room_number']),
    )
    id = Column(Integer, primary_key=True, autoincrement=True)
    manager_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    hotel_id = Column(Integer, nullable=False)
    room_number = Column(Integer, nullable=False)
    updated_on = Column(DateTime, nullable=False, default=datetime.datetime.now)


class MaintenanceCompany(Base):
    __tablename__ = 'maintenance_companies'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    address = Column(String(200))
    is_certified = Column(Boolean, default=False)


class RoomRepair(Base):
    __tablename__ = 'room_repairs'
    __table_args__ = (
        ForeignKeyConstraint(['hotel_id', 'room_number'], ['rooms.hotel_id', 'rooms.room_number']),
    )
    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey('maintenance_companies.id'), nullable=False)
    hotel_id = Column(Integer, nullable=False)
    room_number = Column(Integer, nullable=False)
    repair_date = Column(Date, nullable=False, default=datetime.date.today)

    company = relationship("MaintenanceCompany")


class RoomRepairRequest(Base):
    __tablename__ = 'room_repair_requests'
    id = Column(Integer, primary_key=True, autoincrement=True)
    manager_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    repair_id = Column(Integer, ForeignKey('room_repairs.id'), nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.now)

    repair = relationship("RoomRepair")
