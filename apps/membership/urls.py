from django.urls import path
from . import views

urlpatterns = [
    path('status/', views.MembershipStatusView.as_view(), name='membership-status'),
    path('invites/', views.InviteQuotaView.as_view(), name='membership-invites'),
    path('invites/consume/', views.ConsumeInviteView.as_view(), name='membership-consume-invite'),
    path('tier-history/', views.TierHistoryView.as_view(), name='membership-tier-history'),
    path('admin/<int:user_id>/tier/', views.AdminSetTierView.as_view(), name='membership-admin-set-tier'),
]
