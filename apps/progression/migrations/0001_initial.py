from django.db import migrations, models
import django.db.models.deletion
from django.conf import settings


SEGMENT_CHOICES = [
    ('basic-bronze', 'Basic to Bronze'),
    ('bronze-silver', 'Bronze to Silver'),
    ('silver-gold', 'Silver to Gold'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('points', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ProgressionReward',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('level_segment', models.CharField(choices=SEGMENT_CHOICES, max_length=20)),
                ('ip_threshold', models.PositiveIntegerField()),
                ('reward_type', models.CharField(choices=[
                    ('buff_percentage', 'Discount Buff'),
                    ('badge', 'Badge'),
                    ('early_access_token', 'Early Access Token'),
                    ('fee_waiver', 'Fee Waiver'),
                    ('celebration', 'Celebration'),
                ], max_length=30)),
                ('reward_value', models.CharField(max_length=50)),
                ('reward_description', models.CharField(max_length=200)),
                ('is_active', models.BooleanField(default=True)),
                ('sort_order', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Progression Reward',
                'verbose_name_plural': 'Progression Rewards',
                'db_table': 'progression_rewards',
                'ordering': ['level_segment', 'ip_threshold', 'sort_order'],
            },
        ),
        migrations.AddConstraint(
            model_name='progressionreward',
            constraint=models.UniqueConstraint(fields=('level_segment', 'ip_threshold', 'reward_type'), name='unique_progression_reward'),
        ),
        migrations.CreateModel(
            name='ProgressionBuff',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('buff_percentage', models.DecimalField(decimal_places=2, max_digits=5)),
                ('buff_description', models.CharField(max_length=200)),
                ('level_segment', models.CharField(choices=SEGMENT_CHOICES, max_length=20)),
                ('earned_at', models.DateTimeField(auto_now_add=True)),
                ('used_at', models.DateTimeField(blank=True, null=True)),
                ('used_on_order_id', models.CharField(blank=True, max_length=100, null=True)),
                ('cleared_at', models.DateTimeField(blank=True, null=True)),
                ('expires_on_use', models.BooleanField(default=True)),
                ('related_event', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='progression_buffs', to='points.pointsevent')),
                ('reward', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='buffs', to='progression.progressionreward')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='progression_buffs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Progression Buff',
                'verbose_name_plural': 'Progression Buffs',
                'db_table': 'user_progression_buffs',
                'ordering': ['earned_at', 'id'],
                'indexes': [
                    models.Index(fields=['user', 'used_at'], name='progression_buff_active_idx'),
                ],
            },
        ),
    ]
