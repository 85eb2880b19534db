from django.urls import path
from . import views

urlpatterns = [
    path('buffs/', views.ProgressionBuffsView.as_view(), name='progression-buffs'),
    path('buffs/apply/', views.ApplyProgressionBuffsView.as_view(), name='progression-apply-buffs'),
    path('rewards/<str:segment>/', views.SegmentRewardsView.as_view(), name='progression-segment-rewards'),
]
