"""认证服务模块"""
import bcrypt
from config import get_logger
from models import User, USER_TYPE_CUSTOMER, USER_TYPE_MANAGER
from utils.exceptions import AuthenticationError, ValidationError
from utils.helpers import parse_id
from utils.transaction import transaction_scope
from .gateway import StoreGateway
from .session import SessionContext

logger = get_logger(__name__)


class AuthService:
    @staticmethod
    def hash_password(password: str) -> str:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()

    @staticmethod
    def check_password(plain: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(plain.encode(), hashed.encode())
        except ValueError as e:
            logger.error(f"密码校验失败: {e}")
            return False

    @staticmethod
    def _create_user(name: str, password: str, user_type: str) -> int:
        name = (name or "").strip()
        if not name:
            raise ValidationError("用户名不能为空")
        if not password:
            raise ValidationError("密码不能为空")
        with transaction_scope() as s:
            gw = StoreGateway(s)
            user_id = gw.insert_returning_id(User(
                name=name, password_hash=AuthService.hash_password(password), user_type=user_type
            ))
        logger.info(f"创建用户: id={user_id}, 类型={user_type}")
        return user_id

    @staticmethod
    def register(name: str, password: str) -> int:
        """注册顾客账号，返回数据库生成的用户编号"""
        return AuthService._create_user(name, password, USER_TYPE_CUSTOMER)

    @staticmethod
    def create_manager(name: str, password: str) -> int:
        return AuthService._create_user(name, password, USER_TYPE_MANAGER)

    @staticmethod
    def login(user_id, password: str) -> SessionContext:
        """按用户编号和密码登录，成功返回会话身份"""
        user_id = parse_id(user_id, "用户编号")
        with transaction_scope() as s:
            user = StoreGateway(s).get(User, user_id)
            if user is None or not AuthService.check_password(password or "", user.password_hash):
                logger.info(f"登录失败: user_id={user_id}")
                raise AuthenticationError("用户编号或密码错误")
            ctx = SessionContext(user_id=user.id, name=user.name, user_type=user.user_type)
        logger.info(f"用户登录: user_id={ctx.user_id}")
        return ctx
