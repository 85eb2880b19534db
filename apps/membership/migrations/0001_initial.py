from django.db import migrations, models
import django.db.models.deletion
from django.conf import settings
import django.utils.timezone


TIER_CHOICES = [
    ('requester', 'Requester'),
    ('basic', 'Basic'),
    ('bronze', 'Bronze'),
    ('silver', 'Silver'),
    ('gold', 'Gold'),
    ('admin', 'Admin'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Membership',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('tier', models.CharField(choices=TIER_CHOICES, default='basic', max_length=20)),
                ('impact_points', models.PositiveIntegerField(default=0)),
                ('invites_used_this_month', models.PositiveIntegerField(default=0)),
                ('last_quota_reset', models.DateTimeField(default=django.utils.timezone.now)),
                ('tier_start_date', models.DateTimeField(default=django.utils.timezone.now)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='membership', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Membership',
                'verbose_name_plural': 'Memberships',
                'db_table': 'user_memberships',
                'indexes': [
                    models.Index(fields=['tier'], name='membership_tier_idx'),
                    models.Index(fields=['last_quota_reset'], name='membership_quota_reset_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='TierChangeLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('from_tier', models.CharField(blank=True, choices=TIER_CHOICES, max_length=20, null=True)),
                ('to_tier', models.CharField(choices=TIER_CHOICES, max_length=20)),
                ('reason', models.CharField(max_length=200)),
                ('impact_points', models.IntegerField(null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tier_changes', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'tier_change_logs',
                'ordering': ['-created_at'],
            },
        ),
    ]
