from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'customers'

router = DefaultRouter()
router.register(r'', views.CustomerViewSet, basename='customer')

urlpatterns = [
    # GET    /api/customers/              - List customers (?search=)
    # GET    /api/customers/{id}/         - Customer details with sales
    # POST   /api/customers/recompute/    - Rebuild customers from sales
    path('', include(router.urls)),
]
