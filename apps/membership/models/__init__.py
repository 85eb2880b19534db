"""
Membership models module.

All models are exported from this module to maintain backward compatibility.
"""
from .membership import Membership
from .tier_change_log import TierChangeLog

__all__ = [
    'Membership',
    'TierChangeLog',
]
