"""数据模型模块"""
from .base import Base, SessionLocal, get_engine, init_db, use_database
from .entities import (
    User, Hotel, Room, RoomBooking, RoomUpdateLog,
    MaintenanceCompany, RoomRepair, RoomRepairRequest,
    USER_TYPE_CUSTOMER, USER_TYPE_MANAGER
)

__all__ = [
    'Base', 'SessionLocal', 'get_engine', 'init_db', 'use_database',
    'User', 'Hotel', 'Room', 'RoomBooking', 'RoomUpdateLog',
    'MaintenanceCompany', 'RoomRepair', 'RoomRepairRequest',
    'USER_TYPE_CUSTOMER', 'USER_TYPE_MANAGER'
]
