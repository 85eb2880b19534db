from django.contrib import admin
from django.utils.html import format_html
from django.urls import reverse

from .models import Membership, TierChangeLog
from .models.membership import current_month_start


@admin.register(Membership)
class MembershipAdmin(admin.ModelAdmin):
    """Admin interface for memberships"""

    list_display = [
        'user_link', 'tier', 'impact_points', 'level_segment',
        'invite_usage', 'tier_start_date', 'created_at'
    ]
    list_filter = ['tier', 'tier_start_date', 'created_at']
    search_fields = ['user__username', 'user__email']
    ordering = ['-impact_points']
    # Points and tier only change through the ledger and tier services
    readonly_fields = [
        'tier', 'impact_points', 'level_segment', 'invites_used_this_month',
        'last_quota_reset', 'tier_start_date', 'points_to_next_tier',
        'created_at', 'updated_at'
    ]

    fieldsets = (
        ('User Information', {
            'fields': ('user', 'tier', 'tier_start_date')
        }),
        ('Impact Points & Progress', {
            'fields': ('impact_points', 'level_segment', 'points_to_next_tier')
        }),
        ('Invites', {
            'fields': ('invites_used_this_month', 'last_quota_reset')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def user_link(self, obj):
        """Link to user admin page"""
        url = reverse('admin:auth_user_change', args=[obj.user.id])
        return format_html('<a href="{}">{}</a>', url, obj.user.username)
    user_link.short_description = 'User'
    user_link.admin_order_field = 'user__username'

    def invite_usage(self, obj):
        return f"{obj.effective_invites_used}/{obj.invite_quota_monthly}"
    invite_usage.short_description = 'Invites'

    def points_to_next_tier(self, obj):
        """Points still needed for the next tier"""
        next_level = obj.get_next_level_info()
        if next_level is None:
            return 'Highest tier reached'
        return format_html(
            '{} IP to reach <strong>{}</strong>',
            next_level['points_needed'], next_level['name']
        )
    points_to_next_tier.short_description = 'Next Tier Progress'

    def get_queryset(self, request):
        """Optimize queryset with related objects"""
        return super().get_queryset(request).select_related('user')

    def has_delete_permission(self, request, obj=None):
        return False

    actions = ['reset_invite_quota']

    def reset_invite_quota(self, request, queryset):
        """Admin action to reset this month's invite usage"""
        now = current_month_start()
        reset_count = queryset.update(invites_used_this_month=0, last_quota_reset=now)
        self.message_user(
            request,
            f'Successfully reset invite quota for {reset_count} members.'
        )
    reset_invite_quota.short_description = 'Reset invite quota for selected members'


@admin.register(TierChangeLog)
class TierChangeLogAdmin(admin.ModelAdmin):
    """Admin interface for tier change logs"""

    list_display = [
        'user', 'from_tier', 'to_tier', 'reason',
        'impact_points', 'created_at'
    ]
    list_filter = ['from_tier', 'to_tier', 'created_at']
    search_fields = ['user__username', 'user__email', 'reason']
    ordering = ['-created_at']
    readonly_fields = ['user', 'from_tier', 'to_tier', 'reason', 'impact_points', 'created_at']

    fieldsets = (
        ('Change Information', {
            'fields': ('user', 'from_tier', 'to_tier', 'reason')
        }),
        ('Details', {
            'fields': ('impact_points', 'created_at')
        }),
    )

    def has_add_permission(self, request):
        return False
