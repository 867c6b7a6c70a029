#!/usr/bin/env python3
"""演示数据初始化脚本"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select, func
from models import SessionLocal, init_db, use_database, Hotel, Room, MaintenanceCompany, RoomBooking
from services.auth import AuthService
from services.gateway import StoreGateway

HOTELS = [
    ("海景大酒店", 10.0, 20.0),
    ("山城宾馆", 25.0, 35.0),
    ("机场快捷酒店", 80.0, 90.0),
]

COMPANIES = [
    ("安居维修", "工业路1号", True),
    ("速修工程", "建设大道88号", False),
]


def init_managers():
    """初始化两名经理"""
    ids = [AuthService.create_manager("经理甲", "manager123"),
           AuthService.create_manager("经理乙", "manager123")]
    print(f"✅ 经理账号初始化完成: {ids} (密码 manager123)")
    return ids


def init_hotels(s, manager_ids):
    """初始化酒店与房间，每家酒店101-105五间房"""
    gw = StoreGateway(s)
    hotel_ids = []
    for idx, (name, lat, lon) in enumerate(HOTELS):
        hotel_id = gw.insert_returning_id(Hotel(
            name=name, latitude=lat, longitude=lon,
            manager_id=manager_ids[idx % len(manager_ids)]
        ))
        for no in range(101, 106):
            s.add(Room(hotel_id=hotel_id, room_number=no, price=100 + (no - 100) * 20,
                       image_url=f"img/{hotel_id}/{no}.png"))
        hotel_ids.append(hotel_id)
    s.commit()
    print(f"✅ 酒店初始化完成: {hotel_ids}")
    return hotel_ids


def init_companies(s):
    gw = StoreGateway(s)
    ids = [gw.insert_returning_id(MaintenanceCompany(name=n, address=a, is_certified=c))
           for n, a, c in COMPANIES]
    s.commit()
    print(f"✅ 维修公司初始化完成: {ids}")
    return ids


def main():
    if len(sys.argv) > 1:
        use_database(sys.argv[1])
    init_db()

    manager_ids = init_managers()
    customer_id = AuthService.register("测试顾客", "customer123")
    print(f"✅ 顾客账号: {customer_id} (密码 customer123)")

    s = SessionLocal()
    try:
        init_hotels(s, manager_ids)
        init_companies(s)
        gw = StoreGateway(s)
        print(f"\n酒店数: {gw.query_scalar_int(select(func.count(Hotel.id)))}, "
              f"房间数: {gw.query_scalar_int(select(func.count()).select_from(Room))}, "
              f"预订数: {gw.query_scalar_int(select(func.count(RoomBooking.id)))}")
    finally:
        s.close()


if __name__ == "__main__":
    main()
