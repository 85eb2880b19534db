from django.urls import path
from . import views

app_name = 'points'

urlpatterns = [
    # User-facing endpoints
    path('events/', views.get_points_events, name='events'),
    path('summary/', views.get_points_summary, name='summary'),

    # Internal endpoints (for integration with the storefront)
    path('internal/award-invite-signup/', views.internal_award_invite_signup, name='internal_award_invite_signup'),
    path('internal/award-invite-reservation/', views.internal_award_invite_reservation,
         name='internal_award_invite_reservation'),
    path('internal/award-own-order/', views.internal_award_own_order, name='internal_award_own_order'),
    path('internal/award-pallet-milestone/', views.internal_award_pallet_milestone,
         name='internal_award_pallet_milestone'),

    # Staff endpoints
    path('admin/adjust/', views.admin_adjust_points, name='admin_adjust'),
]
