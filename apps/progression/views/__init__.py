"""
Progression views module.
"""
from .buff_views import ProgressionBuffsView, ApplyProgressionBuffsView
from .reward_views import SegmentRewardsView

__all__ = [
    'ProgressionBuffsView',
    'ApplyProgressionBuffsView',
    'SegmentRewardsView',
]
