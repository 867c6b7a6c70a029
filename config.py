"""配置管理模块"""
import os
import logging
from dataclasses import dataclass

# 配置日志
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(os.getenv('HOTEL_LOG_PATH', 'hotel.log'), encoding='utf-8'),
        logging.StreamHandler()
    ]
)

def get_logger(name: str) -> logging.Logger:
    """获取模块日志器"""
    return logging.getLogger(name)

@dataclass
class Config:
    # 应用配置
    APP_NAME: str = os.getenv('HOTEL_APP_NAME', '酒店预订管理系统')

    # 数据库配置
    DB_URL: str = os.getenv('HOTEL_DB_URL', 'sqlite:///hotel.db')
    DB_HOST: str = os.getenv('HOTEL_DB_HOST', 'localhost')

    # 连接池配置
    POOL_SIZE: int = int(os.getenv('HOTEL_POOL_SIZE', '5'))
    MAX_OVERFLOW: int = int(os.getenv('HOTEL_MAX_OVERFLOW', '10'))
    POOL_TIMEOUT: int = int(os.getenv('HOTEL_POOL_TIMEOUT', '30'))

    # 业务配置
    NEARBY_DISTANCE: float = float(os.getenv('HOTEL_NEARBY_DISTANCE', '30'))
    RECENT_LIMIT: int = int(os.getenv('HOTEL_RECENT_LIMIT', '5'))
    IMAGE_URL_MAX_LEN: int = int(os.getenv('HOTEL_IMAGE_URL_MAX_LEN', '30'))

    def build_db_url(self, dbname: str, port: str, user: str) -> str:
        """按 <dbname> <port> <user> 启动参数生成PostgreSQL连接串"""
        return f"postgresql+psycopg2://{user}@{self.DB_HOST}:{port}/{dbname}"

config = Config()
