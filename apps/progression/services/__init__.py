"""
Progression services module.
"""
from .progression_service import ProgressionService

__all__ = [
    'ProgressionService',
]
