from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    # Authentication
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),

    # User profile
    path('user/', views.get_current_user, name='current-user'),

    # Staff tools
    path('confirm-email/', views.confirm_email, name='confirm-email'),

    # Legacy records
    path('legacy/', views.legacy_status, name='legacy-status'),
    path('legacy/claim/', views.claim_legacy, name='legacy-claim'),
    path('legacy/release/', views.release_owned, name='legacy-release'),
]
