"""会话状态模块"""
from dataclasses import dataclass
from typing import Optional
from models import USER_TYPE_MANAGER
from utils.exceptions import AuthenticationError


@dataclass(frozen=True)
class SessionContext:
    """已登录用户的身份，显式传入每个业务操作"""
    user_id: int
    name: str
    user_type: str

    @property
    def is_manager(self) -> bool:
        return self.user_type == USER_TYPE_MANAGER


class SessionState:
    """单个交互会话内的当前用户（零个或一个）"""

    def __init__(self):
        self._current: Optional[SessionContext] = None

    @property
    def current(self) -> Optional[SessionContext]:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    def sign_in(self, ctx: SessionContext):
        self._current = ctx

    def sign_out(self):
        self._current = None

    def require(self) -> SessionContext:
        if self._current is None:
            raise AuthenticationError("请先登录")
        return self._current
