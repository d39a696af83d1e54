from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Financial figures
    path('summary/', views.financial_summary, name='summary'),
    path('monthly/', views.monthly_report, name='monthly'),

    # Breakdowns
    path('payment-methods/', views.payment_methods, name='payment-methods'),
    path('top-customers/', views.top_customers_report, name='top-customers'),
    path('brownie-types/', views.brownie_types, name='brownie-types'),

    # Combined
    path('reports/', views.reports, name='reports'),
    path('dashboard/', views.dashboard, name='dashboard'),
]
