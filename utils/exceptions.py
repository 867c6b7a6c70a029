"""自定义异常类"""


class HotelError(Exception):
    """酒店系统基础异常"""
    pass


class AuthenticationError(HotelError):
    """认证错误"""
    pass


class AuthorizationError(HotelError):
    """授权错误"""
    pass


class ValidationError(HotelError):
    """数据验证错误"""
    pass


class ConflictError(HotelError):
    """预订冲突错误"""
    pass


class NotFoundError(HotelError):
    """引用的酒店/房间/公司/用户不存在"""
    pass


class StoreError(HotelError):
    """数据库操作错误"""
    pass
