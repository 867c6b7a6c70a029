"""测试公共夹具"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from models import SessionLocal, init_db, use_database, Hotel, Room, MaintenanceCompany
from models.base import dispose_engine
from services.auth import AuthService
from services.session import SessionContext


@pytest.fixture()
def db():
    """每个测试使用独立的内存数据库"""
    use_database("sqlite://")
    dispose_engine()
    init_db()
    yield
    dispose_engine()


@pytest.fixture()
def hotel_data(db):
    """经理M管理酒店1，经理M2管理酒店2，顾客Alice"""
    m = AuthService.create_manager("M", "mgr-pass")
    m2 = AuthService.create_manager("M2", "mgr-pass")
    alice = AuthService.register("Alice", "secret")
    s = SessionLocal()
    try:
        h1 = Hotel(name="Hotel One", latitude=0.0, longitude=0.0, manager_id=m)
        h2 = Hotel(name="Hotel Two", latitude=30.0, longitude=40.0, manager_id=m2)
        s.add_all([h1, h2])
        s.flush()
        s.add_all([
            Room(hotel_id=h1.id, room_number=101, price=100, image_url="img/101.png"),
            Room(hotel_id=h1.id, room_number=102, price=120, image_url="img/102.png"),
            Room(hotel_id=h1.id, room_number=103, price=140, image_url="img/103.png"),
            Room(hotel_id=h2.id, room_number=201, price=90, image_url="img/201.png"),
        ])
        company = MaintenanceCompany(name="FixIt", address="1 Main St", is_certified=True)
        s.add(company)
        s.commit()
        data = {"m": m, "m2": m2, "alice": alice, "h1": h1.id, "h2": h2.id, "company": company.id}
    finally:
        s.close()
    return data


@pytest.fixture()
def manager_ctx(hotel_data):
    return SessionContext(user_id=hotel_data["m"], name="M", user_type="manager")


@pytest.fixture()
def other_manager_ctx(hotel_data):
    return SessionContext(user_id=hotel_data["m2"], name="M2", user_type="manager")


@pytest.fixture()
def customer_ctx(hotel_data):
    return SessionContext(user_id=hotel_data["alice"], name="Alice", user_type="customer")
