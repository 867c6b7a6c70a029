"""事务管理模块"""
from contextlib import contextmanager
from sqlalchemy.exc import SQLAlchemyError
from models import SessionLocal
from config import get_logger
from utils.exceptions import StoreError

logger = get_logger(__name__)


@contextmanager
def transaction_scope():
    """事务上下文管理器，确保原子性操作"""
    s = SessionLocal()
    try:
        yield s
        s.commit()
    except SQLAlchemyError as e:
        s.rollback()
        logger.error(f"数据库操作失败: {e}")
        raise StoreError(f"数据库操作失败: {e}") from e
    except Exception:
        s.rollback()
        raise
    finally:
        s.close()
