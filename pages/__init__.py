"""页面模块导出"""
from .hotels import page_nearby_hotels
from .rooms import page_rooms, page_book_room, page_my_bookings
from .manager import (
    page_update_room, page_recent_updates, page_booking_history,
    page_regular_customers, page_repair_request, page_repair_history
)

__all__ = [
    'page_nearby_hotels', 'page_rooms', 'page_book_room', 'page_my_bookings',
    'page_update_room', 'page_recent_updates', 'page_booking_history',
    'page_regular_customers', 'page_repair_request', 'page_repair_history'
]
