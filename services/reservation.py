"""预订业务流程模块

所有操作显式接收当前会话身份 SessionContext，并在单个事务内完成。
多步写入（房间更新+更新日志、维修记录+维修申请）同成同败。
"""
import datetime
from typing import List, Optional, Tuple
from sqlalchemy import select, update, func, desc
from sqlalchemy.exc import IntegrityError
from config import config, get_logger
from models import (
    User, Hotel, Room, RoomBooking, RoomUpdateLog,
    MaintenanceCompany, RoomRepair, RoomRepairRequest
)
from utils.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from utils.helpers import parse_date, parse_id, validate_price, validate_image_url
from utils.transaction import transaction_scope
from .availability import AvailabilityService
from .gateway import StoreGateway
from .guard import AuthorizationGuard
from .session import SessionContext

logger = get_logger(__name__)


def _require_session(ctx: Optional[SessionContext]) -> SessionContext:
    if ctx is None:
        raise AuthenticationError("请先登录")
    return ctx


def _require_room(gw, hotel_id: int, room_number: int) -> Room:
    room = gw.get(Room, (hotel_id, room_number))
    if room is None:
        raise NotFoundError(f"酒店 #{hotel_id} 不存在房间 #{room_number}")
    return room


class ReservationService:
    # ---------- 顾客功能 ----------

    @staticmethod
    def view_rooms(hotel_id, date) -> Tuple[List[Tuple[int, float]], List[Tuple[int, float]]]:
        """指定日期的空闲房间与已订房间"""
        hotel_id = parse_id(hotel_id, "酒店编号")
        date = parse_date(date)
        with transaction_scope() as s:
            gw = StoreGateway(s)
            available = AvailabilityService.list_available_rooms(gw, hotel_id, date)
            booked = AvailabilityService.list_booked_rooms(gw, hotel_id, date)
        return available, booked

    @staticmethod
    def book(ctx: SessionContext, hotel_id, room_number, date) -> float:
        """预订房间，成功后返回房价"""
        ctx = _require_session(ctx)
        hotel_id = parse_id(hotel_id, "酒店编号")
        room_number = parse_id(room_number, "房间号")
        date = parse_date(date)

        with transaction_scope() as s:
            gw = StoreGateway(s)
            _require_room(gw, hotel_id, room_number)
            if not AvailabilityService.is_room_free(gw, hotel_id, room_number, date):
                logger.warning(f"预订冲突: 酒店={hotel_id}, 房间={room_number}, 日期={date}")
                raise ConflictError(f"房间 #{room_number} 在 {date:%m/%d/%Y} 已被预订")
            try:
                gw.add(RoomBooking(
                    customer_id=ctx.user_id, hotel_id=hotel_id,
                    room_number=room_number, booking_date=date
                ))
            except IntegrityError as e:
                # 并发预订由唯一约束兜底
                logger.warning(f"预订唯一约束冲突: 酒店={hotel_id}, 房间={room_number}, 日期={date}: {e}")
                raise ConflictError(f"房间 #{room_number} 在 {date:%m/%d/%Y} 已被预订") from e
        logger.info(f"预订成功: 顾客={ctx.user_id}, 酒店={hotel_id}, 房间={room_number}, 日期={date}")

        with transaction_scope() as s:
            rows = StoreGateway(s).query(
                select(Room.price).where(Room.hotel_id == hotel_id, Room.room_number == room_number)
            )
        return rows[0]['price'] if rows else None

    @staticmethod
    def recent_bookings(ctx: SessionContext, limit: int = None) -> List[dict]:
        ctx = _require_session(ctx)
        with transaction_scope() as s:
            rows = StoreGateway(s).query(
                select(
                    RoomBooking.hotel_id.label('hotel'), RoomBooking.room_number.label('room'),
                    Room.price.label('price'), RoomBooking.booking_date.label('date')
                )
                .join(Room, (Room.hotel_id == RoomBooking.hotel_id) & (Room.room_number == RoomBooking.room_number))
                .where(RoomBooking.customer_id == ctx.user_id)
                .order_by(desc(RoomBooking.booking_date), desc(RoomBooking.id))
                .limit(config.RECENT_LIMIT if limit is None else limit)
            )
            return [dict(r) for r in rows]

    # ---------- 经理功能 ----------

    @staticmethod
    def update_room(ctx: SessionContext, hotel_id, room_number, new_price, new_image: str):
        """更新房价与图片，并追加一条更新日志"""
        ctx = _require_session(ctx)
        with transaction_scope() as s:
            gw = StoreGateway(s)
            AuthorizationGuard.ensure_manager(gw, ctx.user_id)
            hotel_id = parse_id(hotel_id, "酒店编号")
            AuthorizationGuard.ensure_hotel_manager(gw, ctx.user_id, hotel_id)
            room_number = parse_id(room_number, "房间号")
            _require_room(gw, hotel_id, room_number)
            price = validate_price(new_price)
            image = validate_image_url(new_image)

            gw.execute(
                update(Room)
                .where(Room.hotel_id == hotel_id, Room.room_number == room_number)
                .values(price=float(price), image_url=image)
            )
            gw.add(RoomUpdateLog(
                manager_id=ctx.user_id, hotel_id=hotel_id, room_number=room_number,
                updated_on=datetime.datetime.now()
            ))
        logger.info(f"房间已更新: 经理={ctx.user_id}, 酒店={hotel_id}, 房间={room_number}, 价格={price}")

    @staticmethod
    def request_repair(ctx: SessionContext, hotel_id, room_number, company_id) -> Tuple[int, int]:
        """登记维修并向维修公司发起申请，返回 (维修编号, 申请编号)"""
        ctx = _require_session(ctx)
        with transaction_scope() as s:
            gw = StoreGateway(s)
            AuthorizationGuard.ensure_manager(gw, ctx.user_id)
            hotel_id = parse_id(hotel_id, "酒店编号")
            AuthorizationGuard.ensure_hotel_manager(gw, ctx.user_id, hotel_id)
            room_number = parse_id(room_number, "房间号")
            _require_room(gw, hotel_id, room_number)
            company_id = parse_id(company_id, "公司编号")
            if gw.get(MaintenanceCompany, company_id) is None:
                raise NotFoundError(f"维修公司 #{company_id} 不存在")

            repair_id = gw.insert_returning_id(RoomRepair(
                company_id=company_id, hotel_id=hotel_id, room_number=room_number,
                repair_date=datetime.date.today()
            ))
            request_id = gw.insert_returning_id(RoomRepairRequest(
                manager_id=ctx.user_id, repair_id=repair_id
            ))
        logger.info(f"维修申请: 经理={ctx.user_id}, 酒店={hotel_id}, 房间={room_number}, "
                    f"公司={company_id}, 维修={repair_id}, 申请={request_id}")
        return repair_id, request_id

    @staticmethod
    def recent_updates(ctx: SessionContext, limit: int = None) -> List[dict]:
        ctx = _require_session(ctx)
        with transaction_scope() as s:
            gw = StoreGateway(s)
            AuthorizationGuard.ensure_manager(gw, ctx.user_id)
            rows = gw.query(
                select(
                    RoomUpdateLog.id.label('update'), RoomUpdateLog.hotel_id.label('hotel'),
                    RoomUpdateLog.room_number.label('room'), RoomUpdateLog.updated_on.label('update_time')
                )
                .where(RoomUpdateLog.manager_id == ctx.user_id)
                .order_by(desc(RoomUpdateLog.updated_on), desc(RoomUpdateLog.id))
                .limit(config.RECENT_LIMIT if limit is None else limit)
            )
            return [dict(r) for r in rows]

    @staticmethod
    def booking_history(ctx: SessionContext, start, end) -> List[dict]:
        """本人管理的酒店在日期区间内的预订记录"""
        ctx = _require_session(ctx)
        with transaction_scope() as s:
            gw = StoreGateway(s)
            AuthorizationGuard.ensure_manager(gw, ctx.user_id)
            start, end = parse_date(start), parse_date(end)
            if start > end:
                raise ValidationError("开始日期不能晚于结束日期")
            rows = gw.query(
                select(
                    RoomBooking.id.label('booking'), User.name.label('customer'),
                    RoomBooking.hotel_id.label('hotel'), RoomBooking.room_number.label('room'),
                    RoomBooking.booking_date.label('date')
                )
                .join(Hotel, Hotel.id == RoomBooking.hotel_id)
                .join(User, User.id == RoomBooking.customer_id)
                .where(Hotel.manager_id == ctx.user_id)
                .where(RoomBooking.booking_date.between(start, end))
                .order_by(desc(RoomBooking.booking_date), desc(RoomBooking.id))
            )
            return [dict(r) for r in rows]

    @staticmethod
    def regular_customers(ctx: SessionContext, hotel_id, limit: int = None) -> List[dict]:
        """预订次数最多的顾客"""
        ctx = _require_session(ctx)
        with transaction_scope() as s:
            gw = StoreGateway(s)
            AuthorizationGuard.ensure_manager(gw, ctx.user_id)
            hotel_id = parse_id(hotel_id, "酒店编号")
            AuthorizationGuard.ensure_hotel_manager(gw, ctx.user_id, hotel_id)
            bookings = func.count(RoomBooking.id).label('bookings')
            rows = gw.query(
                select(User.id.label('id'), User.name.label('name'), bookings)
                .join(RoomBooking, RoomBooking.customer_id == User.id)
                .where(RoomBooking.hotel_id == hotel_id)
                .group_by(User.id, User.name)
                .order_by(desc(bookings), User.id)
                .limit(config.RECENT_LIMIT if limit is None else limit)
            )
            return [dict(r) for r in rows]

    @staticmethod
    def repair_history(ctx: SessionContext) -> List[dict]:
        ctx = _require_session(ctx)
        with transaction_scope() as s:
            gw = StoreGateway(s)
            AuthorizationGuard.ensure_manager(gw, ctx.user_id)
            rows = gw.query(
                select(
                    RoomRepairRequest.id.label('request'), RoomRepair.company_id.label('company'),
                    RoomRepair.hotel_id.label('hotel'), RoomRepair.room_number.label('room'),
                    RoomRepair.repair_date.label('date')
                )
                .join(RoomRepair, RoomRepair.id == RoomRepairRequest.repair_id)
                .where(RoomRepairRequest.manager_id == ctx.user_id)
                .order_by(desc(RoomRepair.repair_date), desc(RoomRepairRequest.id))
            )
            return [dict(r) for r in rows]
