"""
Impact point event serializers for list and detail operations.
"""
from rest_framework import serializers
from ..models import PointsEvent


class PointsEventListSerializer(serializers.ModelSerializer):
    """
    Serializer for ledger list view - minimal fields for list display.
    Used for: GET /api/points/events/
    """
    event_type_display = serializers.CharField(source='get_event_type_display', read_only=True)

    class Meta:
        model = PointsEvent
        fields = ['id', 'event_type', 'event_type_display', 'points', 'description', 'created_at']
        read_only_fields = fields


class PointsEventSerializer(serializers.ModelSerializer):
    """Serializer for a single ledger event with its references"""
    event_type_display = serializers.CharField(source='get_event_type_display', read_only=True)

    class Meta:
        model = PointsEvent
        fields = [
            'id', 'event_type', 'event_type_display', 'points', 'related_user',
            'related_order_id', 'description', 'created_at'
        ]
        read_only_fields = fields
