"""
Points services module.

All services are exported from this module to maintain backward compatibility.
"""
from .points_service import PointsService
from .points_integration_service import PointsIntegrationService

__all__ = [
    'PointsService',
    'PointsIntegrationService',
]
