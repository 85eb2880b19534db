"""
Progression serializers module.
"""
from .buff_serializers import (
    ProgressionBuffSerializer, ApplyBuffsSerializer, ProgressionSummarySerializer
)
from .reward_serializers import ProgressionRewardSerializer

__all__ = [
    'ProgressionBuffSerializer',
    'ApplyBuffsSerializer',
    'ProgressionSummarySerializer',
    'ProgressionRewardSerializer',
]
