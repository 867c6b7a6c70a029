"""数据访问网关 - 所有语句均使用绑定参数"""
from typing import List, Optional
from sqlalchemy import select


class StoreGateway:
    def __init__(self, s):
        self.s = s

    def execute(self, statement) -> int:
        """执行写操作，返回影响行数"""
        return self.s.execute(statement).rowcount

    def query(self, statement) -> List:
        """执行查询，返回带列名的有序结果"""
        return list(self.s.execute(statement).mappings().all())

    def query_scalar_int(self, statement) -> Optional[int]:
        """返回第一行第一列的整数值，无结果时返回None"""
        val = self.s.execute(statement).scalar()
        return None if val is None else int(val)

    def exists(self, statement) -> bool:
        return self.s.execute(select(statement.exists())).scalar()

    def insert_returning_id(self, entity) -> int:
        """插入实体并在同一事务内返回数据库生成的主键"""
        self.s.add(entity)
        self.s.flush()
        return entity.id

    def add(self, entity):
        self.s.add(entity)
        self.s.flush()
        return entity

    def get(self, model, key):
        return self.s.get(model, key)
