"""业务服务模块"""
from .auth import AuthService
from .availability import AvailabilityService
from .gateway import StoreGateway
from .guard import AuthorizationGuard
from .proximity import ProximityService, distance
from .reservation import ReservationService
from .session import SessionContext, SessionState

__all__ = [
    'AuthService', 'AvailabilityService', 'StoreGateway', 'AuthorizationGuard',
    'ProximityService', 'distance', 'ReservationService', 'SessionContext', 'SessionState'
]
