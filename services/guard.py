"""权限校验模块 - 每次都按数据库当前状态判断，不做缓存"""
from sqlalchemy import select
from config import get_logger
from models import User, Hotel, USER_TYPE_MANAGER
from utils.exceptions import AuthorizationError

logger = get_logger(__name__)


class AuthorizationGuard:
    @staticmethod
    def require_manager(gw, user_id: int) -> bool:
        """用户存在且为经理；用户不存在时返回False"""
        return gw.exists(
            select(User.id).where(User.id == user_id, User.user_type == USER_TYPE_MANAGER)
        )

    @staticmethod
    def require_hotel_manager(gw, user_id: int, hotel_id: int) -> bool:
        """用户为经理且是该酒店的负责人"""
        return gw.exists(
            select(Hotel.id)
            .join(User, User.id == Hotel.manager_id)
            .where(
                Hotel.id == hotel_id,
                Hotel.manager_id == user_id,
                User.user_type == USER_TYPE_MANAGER
            )
        )

    @staticmethod
    def ensure_manager(gw, user_id: int):
        if not AuthorizationGuard.require_manager(gw, user_id):
            logger.warning(f"非经理用户尝试经理操作: user_id={user_id}")
            raise AuthorizationError("权限不足，仅经理可使用该功能")

    @staticmethod
    def ensure_hotel_manager(gw, user_id: int, hotel_id: int):
        if not AuthorizationGuard.require_hotel_manager(gw, user_id, hotel_id):
            logger.warning(f"经理 {user_id} 尝试操作非本人管理的酒店 {hotel_id}")
            raise AuthorizationError("权限不足，您不是该酒店的经理")
