from .reward import ProgressionReward
from .buff import ProgressionBuff

__all__ = [
    'ProgressionReward',
    'ProgressionBuff',
]
