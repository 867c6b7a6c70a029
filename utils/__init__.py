"""工具函数模块"""
from .helpers import to_decimal, format_money, parse_date, parse_id, validate_price, validate_image_url
from .transaction import transaction_scope

__all__ = [
    'to_decimal', 'format_money', 'parse_date', 'parse_id',
    'validate_price', 'validate_image_url', 'transaction_scope'
]
