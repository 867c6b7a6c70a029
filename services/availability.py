"""房态服务模块"""
import datetime
from typing import List, Tuple
from sqlalchemy import select, and_
from models import Room, RoomBooking


def _booked_filter(date: datetime.date):
    return and_(
        RoomBooking.hotel_id == Room.hotel_id,
        RoomBooking.room_number == Room.room_number,
        RoomBooking.booking_date == date
    )


class AvailabilityService:
    @staticmethod
    def is_room_free(gw, hotel_id: int, room_number: int, date: datetime.date) -> bool:
        """该房间在指定日期没有任何预订"""
        return not gw.exists(
            select(RoomBooking.id).where(
                RoomBooking.hotel_id == hotel_id,
                RoomBooking.room_number == room_number,
                RoomBooking.booking_date == date
            )
        )

    @staticmethod
    def list_available_rooms(gw, hotel_id: int, date: datetime.date) -> List[Tuple[int, float]]:
        rows = gw.query(
            select(Room.room_number, Room.price)
            .where(Room.hotel_id == hotel_id)
            .where(~select(RoomBooking.id).where(_booked_filter(date)).exists())
            .order_by(Room.room_number)
        )
        return [(r['room_number'], r['price']) for r in rows]

    @staticmethod
    def list_booked_rooms(gw, hotel_id: int, date: datetime.date) -> List[Tuple[int, float]]:
        rows = gw.query(
            select(Room.room_number, Room.price)
            .join(RoomBooking, _booked_filter(date))
            .where(Room.hotel_id == hotel_id)
            .order_by(Room.room_number)
        )
        return [(r['room_number'], r['price']) for r in rows]
