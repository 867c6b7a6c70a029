"""附近酒店查询模块

距离按经纬度原始数值计算平面欧氏距离，不做球面修正。
酒店数量不大，直接全表扫描后在进程内过滤。
"""
import math
from typing import List, Tuple
from sqlalchemy import select
from config import config
from models import Hotel


def distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    """两点 (纬度, 经度) 之间的欧氏距离"""
    return math.sqrt((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2)


class ProximityService:
    @staticmethod
    def hotels_within_detail(gw, origin: Tuple[float, float], threshold: float = None) -> List[dict]:
        """返回距离不超过阈值的酒店（编号、名称、距离），按距离排序"""
        if threshold is None:
            threshold = config.NEARBY_DISTANCE
        rows = gw.query(select(Hotel.id, Hotel.name, Hotel.latitude, Hotel.longitude))
        result = []
        for r in rows:
            d = distance(origin, (r['latitude'], r['longitude']))
            if d <= threshold:
                result.append({"id": r['id'], "name": r['name'], "distance": d})
        result.sort(key=lambda h: (h["distance"], h["name"]))
        return result

    @staticmethod
    def hotels_within(gw, origin: Tuple[float, float], threshold: float = None) -> List[str]:
        return [h["name"] for h in ProximityService.hotels_within_detail(gw, origin, threshold)]
