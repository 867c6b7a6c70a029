#!/usr/bin/env python3
"""
端到端工作流测试
覆盖注册、登录、预订、经理维护与报表的完整流程
"""
import datetime
import pytest
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError

from models import SessionLocal, Room, RoomBooking, RoomUpdateLog, RoomRepair, RoomRepairRequest
from services.auth import AuthService
from services.availability import AvailabilityService
from services.gateway import StoreGateway
from services.reservation import ReservationService
from services.session import SessionState
from utils.exceptions import (
    AuthenticationError, AuthorizationError, ConflictError, NotFoundError, StoreError, ValidationError
)
from utils.transaction import transaction_scope

DAY = "05/01/2024"


def _count(model, *criteria):
    with transaction_scope() as s:
        stmt = select(func.count()).select_from(model)
        if criteria:
            stmt = stmt.where(*criteria)
        return StoreGateway(s).query_scalar_int(stmt)


def _room(hotel_id, room_number):
    s = SessionLocal()
    try:
        return s.get(Room, (hotel_id, room_number))
    finally:
        s.close()


class TestBookingWorkflow:
    """测试预订流程"""

    def test_register_login_and_book(self, hotel_data):
        """注册 -> 登录 -> 预订，重复预订冲突，换房成功"""
        session = SessionState()
        uid = AuthService.register("Carol", "secret")
        session.sign_in(AuthService.login(uid, "secret"))
        ctx = session.require()
        h1 = hotel_data["h1"]

        assert ReservationService.book(ctx, h1, 101, DAY) == 100

        with pytest.raises(ConflictError):
            ReservationService.book(ctx, h1, 101, DAY)
        day = datetime.date(2024, 5, 1)
        assert _count(RoomBooking, RoomBooking.hotel_id == h1, RoomBooking.room_number == 101,
                      RoomBooking.booking_date == day) == 1

        assert ReservationService.book(ctx, h1, 102, DAY) == 120
        with transaction_scope() as s:
            assert not AvailabilityService.is_room_free(StoreGateway(s), h1, 101, day)

    def test_book_unknown_room(self, customer_ctx, hotel_data):
        with pytest.raises(NotFoundError):
            ReservationService.book(customer_ctx, hotel_data["h1"], 999, DAY)
        assert _count(RoomBooking) == 0

    def test_book_invalid_input(self, customer_ctx, hotel_data):
        with pytest.raises(ValidationError):
            ReservationService.book(customer_ctx, "--1", 101, DAY)
        with pytest.raises(ValidationError):
            ReservationService.book(customer_ctx, hotel_data["h1"], 101, "not-a-date")
        with pytest.raises(ValidationError):
            ReservationService.book(customer_ctx, "abc", 101, DAY)

    def test_book_requires_login(self, hotel_data):
        with pytest.raises(AuthenticationError):
            ReservationService.book(None, hotel_data["h1"], 101, DAY)

    def test_unique_constraint_is_conflict_signal(self, customer_ctx, hotel_data, monkeypatch):
        """检查与写入之间被抢订时，由唯一约束转换为冲突"""
        ReservationService.book(customer_ctx, hotel_data["h1"], 101, DAY)
        monkeypatch.setattr(AvailabilityService, "is_room_free", staticmethod(lambda *args: True))
        with pytest.raises(ConflictError):
            ReservationService.book(customer_ctx, hotel_data["h1"], 101, DAY)
        assert _count(RoomBooking) == 1

    def test_recent_bookings_newest_first(self, customer_ctx, hotel_data):
        for day in ("05/01/2024", "05/03/2024", "05/02/2024"):
            ReservationService.book(customer_ctx, hotel_data["h1"], 101, day)
        rows = ReservationService.recent_bookings(customer_ctx)
        assert [r["date"] for r in rows] == [
            datetime.date(2024, 5, 3), datetime.date(2024, 5, 2), datetime.date(2024, 5, 1)
        ]
        assert rows[0]["price"] == 100

    def test_view_rooms(self, customer_ctx, hotel_data):
        ReservationService.book(customer_ctx, hotel_data["h1"], 103, DAY)
        available, booked = ReservationService.view_rooms(hotel_data["h1"], DAY)
        assert [no for no, _ in available] == [101, 102]
        assert [no for no, _ in booked] == [103]


class TestRoomUpdateWorkflow:
    """测试房间维护流程"""

    def test_manager_updates_room(self, manager_ctx, hotel_data):
        ReservationService.update_room(manager_ctx, hotel_data["h1"], 101, 150, "http://img/101.png")
        room = _room(hotel_data["h1"], 101)
        assert room.price == 150
        assert room.image_url == "http://img/101.png"
        with transaction_scope() as s:
            logs = s.query(RoomUpdateLog).all()
            assert len(logs) == 1
            assert logs[0].manager_id == hotel_data["m"]

    def test_other_manager_is_denied(self, other_manager_ctx, hotel_data):
        with pytest.raises(AuthorizationError):
            ReservationService.update_room(other_manager_ctx, hotel_data["h1"], 101, 150, "http://img/101.png")
        assert _room(hotel_data["h1"], 101).price == 100
        assert _count(RoomUpdateLog) == 0

    def test_boundary_values(self, manager_ctx, hotel_data):
        ReservationService.update_room(manager_ctx, hotel_data["h1"], 101, "1", "x" * 30)
        assert _room(hotel_data["h1"], 101).price == 1

        for price, image in ((0, "a.png"), (-10, "a.png"), ("10.5", "a.png"), (100, ""), (100, "x" * 31)):
            with pytest.raises(ValidationError):
                ReservationService.update_room(manager_ctx, hotel_data["h1"], 101, price, image)
        assert _count(RoomUpdateLog) == 1

    def test_unknown_room(self, manager_ctx, hotel_data):
        with pytest.raises(NotFoundError):
            ReservationService.update_room(manager_ctx, hotel_data["h1"], 999, 100, "a.png")

    def test_log_failure_rolls_back_room_update(self, manager_ctx, hotel_data, monkeypatch):
        """更新日志写入失败时房价保持不变"""
        def failing_add(self, entity):
            raise SQLAlchemyError("日志写入失败")
        monkeypatch.setattr(StoreGateway, "add", failing_add)
        with pytest.raises(StoreError):
            ReservationService.update_room(manager_ctx, hotel_data["h1"], 101, 150, "a.png")
        monkeypatch.undo()
        assert _room(hotel_data["h1"], 101).price == 100
        assert _count(RoomUpdateLog) == 0

    def test_recent_updates_newest_first(self, manager_ctx, hotel_data):
        for no in (101, 102, 103, 101, 102, 103):
            ReservationService.update_room(manager_ctx, hotel_data["h1"], no, 200, "a.png")
        rows = ReservationService.recent_updates(manager_ctx)
        assert len(rows) == 5
        assert [r["room"] for r in rows] == [103, 102, 101, 103, 102]


class TestRepairWorkflow:
    """测试维修申请流程"""

    def test_repair_chain_references_created_record(self, manager_ctx, hotel_data):
        repair_id, request_id = ReservationService.request_repair(
            manager_ctx, hotel_data["h1"], 102, hotel_data["company"])
        s = SessionLocal()
        try:
            request = s.get(RoomRepairRequest, request_id)
            assert request.repair_id == repair_id
            assert request.manager_id == hotel_data["m"]
            repair = s.get(RoomRepair, repair_id)
            assert (repair.hotel_id, repair.room_number) == (hotel_data["h1"], 102)
            assert repair.repair_date == datetime.date.today()
        finally:
            s.close()

    def test_unknown_company(self, manager_ctx, hotel_data):
        with pytest.raises(NotFoundError):
            ReservationService.request_repair(manager_ctx, hotel_data["h1"], 102, 9999)
        assert _count(RoomRepair) == 0
        assert _count(RoomRepairRequest) == 0

    def test_request_failure_rolls_back_repair(self, manager_ctx, hotel_data, monkeypatch):
        """维修申请写入失败时维修记录一并回滚"""
        original = StoreGateway.insert_returning_id
        calls = []

        def failing_insert(self, entity):
            calls.append(entity)
            if len(calls) == 2:
                raise SQLAlchemyError("申请写入失败")
            return original(self, entity)

        monkeypatch.setattr(StoreGateway, "insert_returning_id", failing_insert)
        with pytest.raises(StoreError):
            ReservationService.request_repair(manager_ctx, hotel_data["h1"], 102, hotel_data["company"])
        assert len(calls) == 2
        assert _count(RoomRepair) == 0
        assert _count(RoomRepairRequest) == 0

    def test_repair_history(self, manager_ctx, other_manager_ctx, hotel_data):
        ReservationService.request_repair(manager_ctx, hotel_data["h1"], 101, hotel_data["company"])
        ReservationService.request_repair(manager_ctx, hotel_data["h1"], 103, hotel_data["company"])
        ReservationService.request_repair(other_manager_ctx, hotel_data["h2"], 201, hotel_data["company"])
        rows = ReservationService.repair_history(manager_ctx)
        assert [r["room"] for r in rows] == [103, 101]
        assert all(r["company"] == hotel_data["company"] for r in rows)


class TestManagerReports:
    """测试经理报表"""

    def test_booking_history_in_range(self, manager_ctx, customer_ctx, hotel_data):
        for day in ("04/30/2024", "05/01/2024", "05/05/2024"):
            ReservationService.book(customer_ctx, hotel_data["h1"], 101, day)
        ReservationService.book(customer_ctx, hotel_data["h2"], 201, "05/02/2024")

        rows = ReservationService.booking_history(manager_ctx, "05/01/2024", "05/31/2024")
        assert [r["date"] for r in rows] == [datetime.date(2024, 5, 5), datetime.date(2024, 5, 1)]
        assert rows[0]["customer"] == "Alice"

        with pytest.raises(ValidationError):
            ReservationService.booking_history(manager_ctx, "05/31/2024", "05/01/2024")

    def test_regular_customers(self, manager_ctx, customer_ctx, other_manager_ctx, hotel_data):
        bob_id = AuthService.register("Bob", "pw")
        bob = AuthService.login(bob_id, "pw")
        for day in ("05/01/2024", "05/02/2024"):
            ReservationService.book(customer_ctx, hotel_data["h1"], 101, day)
        ReservationService.book(bob, hotel_data["h1"], 102, "05/01/2024")

        rows = ReservationService.regular_customers(manager_ctx, hotel_data["h1"])
        assert [(r["name"], r["bookings"]) for r in rows] == [("Alice", 2), ("Bob", 1)]

        with pytest.raises(AuthorizationError):
            ReservationService.regular_customers(other_manager_ctx, hotel_data["h1"])

    def test_regular_customers_top_five(self, manager_ctx, hotel_data):
        """超过五名顾客时只取前五，次数相同按编号排序"""
        counts = [1, 3, 1, 2, 1, 1]
        ids = []
        day = datetime.date(2024, 6, 1)
        for idx, n in enumerate(counts):
            uid = AuthService.register(f"Guest{idx}", "pw")
            ids.append(uid)
            ctx = AuthService.login(uid, "pw")
            for _ in range(n):
                ReservationService.book(ctx, hotel_data["h1"], 101, day)
                day += datetime.timedelta(days=1)

        rows = ReservationService.regular_customers(manager_ctx, hotel_data["h1"])
        assert len(rows) == 5
        assert [(r["id"], r["bookings"]) for r in rows] == [
            (ids[1], 3), (ids[3], 2), (ids[0], 1), (ids[2], 1), (ids[4], 1)
        ]
        assert ReservationService.regular_customers(manager_ctx, hotel_data["h1"], limit=0) == []


class TestCustomerIsDenied:
    """顾客调用经理功能一律拒绝，与参数是否合法无关"""

    @pytest.mark.parametrize("call", [
        lambda ctx, d: ReservationService.update_room(ctx, d["h1"], 101, 150, "a.png"),
        lambda ctx, d: ReservationService.update_room(ctx, "bad", "bad", -1, ""),
        lambda ctx, d: ReservationService.request_repair(ctx, d["h1"], 101, d["company"]),
        lambda ctx, d: ReservationService.request_repair(ctx, "bad", None, "x"),
        lambda ctx, d: ReservationService.recent_updates(ctx),
        lambda ctx, d: ReservationService.booking_history(ctx, "05/01/2024", "05/31/2024"),
        lambda ctx, d: ReservationService.booking_history(ctx, "junk", "junk"),
        lambda ctx, d: ReservationService.regular_customers(ctx, d["h1"]),
        lambda ctx, d: ReservationService.repair_history(ctx),
    ])
    def test_customer_denied(self, customer_ctx, hotel_data, call):
        with pytest.raises(AuthorizationError):
            call(customer_ctx, hotel_data)
        assert _count(RoomUpdateLog) == 0
        assert _count(RoomRepair) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
