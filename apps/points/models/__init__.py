from .event import PointsEvent

__all__ = [
    'PointsEvent',
]
