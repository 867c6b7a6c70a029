"""通用工具函数"""
import datetime
from decimal import Decimal, InvalidOperation
from config import config
from .exceptions import ValidationError

DATE_FORMATS = ("%m/%d/%Y", "%Y-%m-%d")


def to_decimal(val) -> Decimal:
    if val is None:
        return Decimal('0.00')
    return Decimal(str(val))


def format_money(val) -> str:
    if val is None:
        return "未知"
    return f"${to_decimal(val):,.2f}"


def parse_date(val) -> datetime.date:
    """解析日期，支持 MM/DD/YYYY 与 YYYY-MM-DD"""
    if isinstance(val, datetime.datetime):
        return val.date()
    if isinstance(val, datetime.date):
        return val
    text = str(val or "").strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValidationError(f"日期格式错误: {text!r}，应为 MM/DD/YYYY")


def parse_id(val, label: str = "编号") -> int:
    """解析正整数编号"""
    if isinstance(val, bool):
        raise ValidationError(f"{label}必须是整数")
    if isinstance(val, int):
        num = val
    else:
        text = str(val or "").strip()
        try:
            num = int(text)
        except ValueError:
            raise ValidationError(f"{label}必须是整数: {text!r}") from None
    if num <= 0:
        raise ValidationError(f"{label}必须大于0")
    return num


def parse_price(val) -> Decimal:
    try:
        return to_decimal(str(val).strip())
    except InvalidOperation:
        raise ValidationError(f"价格必须是数字: {val!r}")


def validate_price(val) -> Decimal:
    """价格必须为正整数金额"""
    price = parse_price(val)
    if not price.is_finite() or price <= 0 or price % 1 != 0:
        raise ValidationError("价格无效，必须为大于0的整数")
    return price


def validate_image_url(val) -> str:
    url = val or ""
    if len(url) == 0:
        raise ValidationError("图片地址不能为空")
    if len(url) > config.IMAGE_URL_MAX_LEN:
        raise ValidationError(f"图片地址过长，不能超过{config.IMAGE_URL_MAX_LEN}个字符")
    return url
