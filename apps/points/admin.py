from django.contrib import admin
from .models import PointsEvent


@admin.register(PointsEvent)
class PointsEventAdmin(admin.ModelAdmin):
    list_display = ['user', 'event_type', 'points', 'related_user', 'related_order_id', 'description', 'created_at']
    list_filter = ['event_type', 'created_at']
    search_fields = ['user__username', 'user__email', 'description', 'related_order_id', 'dedup_key']
    readonly_fields = [
        'user', 'event_type', 'points', 'related_user', 'related_order_id',
        'description', 'dedup_key', 'created_at'
    ]

    def has_add_permission(self, request):
        return False  # Events are written by the ledger service

    def has_change_permission(self, request, obj=None):
        return False  # The ledger is append-only

    def has_delete_permission(self, request, obj=None):
        return False
