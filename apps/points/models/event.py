from django.db import models
from django.conf import settings


class PointsEvent(models.Model):
    """
    One immutable entry in a user's impact point ledger.

    A membership's impact_points always equals the sum of its events.
    Events are never edited or removed; corrections are new manual events.
    """
    EVENT_TYPES = [
        ('invite_signup', 'Friend Signup'),
        ('invite_reservation', 'Friend Reservation'),
        ('own_order', 'Own Order'),
        ('pallet_milestone', 'Pallet Milestone'),
        ('manual_adjustment', 'Manual Adjustment'),
        ('level_upgrade', 'Level Upgrade'),
        ('migration', 'Migration'),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='impact_point_events')
    event_type = models.CharField(max_length=30, choices=EVENT_TYPES)
    points = models.IntegerField()  # Signed; only manual adjustments and migrations may be negative
    related_user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='+'
    )
    related_order_id = models.CharField(max_length=100, blank=True, null=True)
    description = models.CharField(max_length=200, blank=True)
    # Idempotency key; NULL never collides
    dedup_key = models.CharField(max_length=100, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'impact_point_events'
        ordering = ['-created_at', '-id']
        verbose_name = 'Impact Point Event'
        verbose_name_plural = 'Impact Point Events'
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'event_type', 'dedup_key'],
                name='unique_impact_point_event_dedup',
            ),
        ]
        indexes = [
            models.Index(fields=['user', 'event_type'], name='impact_event_user_type_idx'),
            models.Index(fields=['user', 'related_user'], name='impact_event_related_idx'),
        ]

    def __str__(self):
        return f"{self.user} - {self.points:+d} IP ({self.get_event_type_display()})"

    @classmethod
    def valid_event_types(cls):
        return {value for value, _ in cls.EVENT_TYPES}

    def save(self, *args, **kwargs):
        if self.pk is not None and not self._state.adding:
            raise ValueError("Impact point events are immutable")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Impact point events are immutable")
