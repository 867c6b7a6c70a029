"""数据库基础配置"""
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool
from config import config

Base = declarative_base()

# 数据库引擎缓存
_engines = {}
_session_factories = {}
_current_url = config.DB_URL


def _is_memory_sqlite(db_url: str) -> bool:
    return db_url in ('sqlite://', 'sqlite:///:memory:')


def _setup_engine(db_url: str):
    """创建并配置数据库引擎"""
    if _is_memory_sqlite(db_url):
        # 内存库只能共享同一个连接
        eng = create_engine(
            db_url,
            connect_args={'check_same_thread': False},
            poolclass=StaticPool
        )
    elif db_url.startswith('sqlite'):
        eng = create_engine(
            db_url,
            connect_args={'check_same_thread': False},
            poolclass=QueuePool,
            pool_size=config.POOL_SIZE,
            max_overflow=config.MAX_OVERFLOW,
            pool_timeout=config.POOL_TIMEOUT
        )
    else:
        eng = create_engine(
            db_url,
            poolclass=QueuePool,
            pool_size=config.POOL_SIZE,
            max_overflow=config.MAX_OVERFLOW,
            pool_timeout=config.POOL_TIMEOUT,
            pool_pre_ping=True
        )

    if eng.dialect.name == 'sqlite':
        @event.listens_for(eng, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
    return eng


def use_database(db_url: str):
    """切换默认数据库（启动参数或测试使用）"""
    global _current_url
    _current_url = db_url


def get_engine(db_url: str = None):
    """获取数据库引擎"""
    db_url = db_url or _current_url
    if db_url not in _engines:
        _engines[db_url] = _setup_engine(db_url)
    return _engines[db_url]


def get_session_factory(db_url: str = None):
    """获取数据库会话工厂"""
    db_url = db_url or _current_url
    if db_url not in _session_factories:
        eng = get_engine(db_url)
        _session_factories[db_url] = sessionmaker(autocommit=False, autoflush=False, bind=eng)
    return _session_factories[db_url]


def SessionLocal():
    """打开默认数据库的会话"""
    return get_session_factory()()


def init_db(db_url: str = None):
    """初始化数据库表结构"""
    Base.metadata.create_all(get_engine(db_url))


def dispose_engine(db_url: str = None):
    """释放数据库连接"""
    db_url = db_url or _current_url
    eng = _engines.pop(db_url, None)
    _session_factories.pop(db_url, None)
    if eng is not None:
        eng.dispose()
