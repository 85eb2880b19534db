from django.contrib import admin
from .models import ProgressionReward, ProgressionBuff


@admin.register(ProgressionReward)
class ProgressionRewardAdmin(admin.ModelAdmin):
    """Admin interface for progression reward definitions"""

    list_display = ['level_segment', 'ip_threshold', 'reward_type', 'reward_value', 'is_active', 'sort_order']
    list_filter = ['level_segment', 'reward_type', 'is_active']
    search_fields = ['reward_description', 'reward_value']
    list_editable = ['is_active']
    ordering = ['level_segment', 'ip_threshold', 'sort_order']

    fieldsets = (
        ('Trigger', {
            'fields': ('level_segment', 'ip_threshold', 'sort_order')
        }),
        ('Reward', {
            'fields': ('reward_type', 'reward_value', 'reward_description', 'is_active')
        }),
    )


@admin.register(ProgressionBuff)
class ProgressionBuffAdmin(admin.ModelAdmin):
    """Admin interface for user buffs"""

    list_display = ['user', 'buff_percentage', 'level_segment', 'status', 'earned_at', 'used_at', 'used_on_order_id']
    list_filter = ['level_segment', 'earned_at', 'used_at']
    search_fields = ['user__username', 'user__email', 'used_on_order_id']
    readonly_fields = [
        'user', 'buff_percentage', 'buff_description', 'level_segment', 'reward',
        'related_event', 'earned_at', 'used_at', 'used_on_order_id', 'cleared_at', 'expires_on_use'
    ]

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('user', 'reward')

    def has_add_permission(self, request):
        return False  # Buffs are issued by the progression engine
