from django.db import migrations, models
import django.db.models.deletion
from django.conf import settings


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='PointsEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('event_type', models.CharField(choices=[
                    ('invite_signup', 'Friend Signup'),
                    ('invite_reservation', 'Friend Reservation'),
                    ('own_order', 'Own Order'),
                    ('pallet_milestone', 'Pallet Milestone'),
                    ('manual_adjustment', 'Manual Adjustment'),
                    ('level_upgrade', 'Level Upgrade'),
                    ('migration', 'Migration'),
                ], max_length=30)),
                ('points', models.IntegerField()),
                ('related_order_id', models.CharField(blank=True, max_length=100, null=True)),
                ('description', models.CharField(blank=True, max_length=200)),
                ('dedup_key', models.CharField(blank=True, max_length=100, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('related_user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='impact_point_events', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Impact Point Event',
                'verbose_name_plural': 'Impact Point Events',
                'db_table': 'impact_point_events',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['user', 'event_type'], name='impact_event_user_type_idx'),
                    models.Index(fields=['user', 'related_user'], name='impact_event_related_idx'),
                ],
            },
        ),
        migrations.AddConstraint(
            model_name='pointsevent',
            constraint=models.UniqueConstraint(fields=('user', 'event_type', 'dedup_key'), name='unique_impact_point_event_dedup'),
        ),
    ]
