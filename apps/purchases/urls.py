from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'purchases'

router = DefaultRouter()
router.register(r'', views.PurchaseViewSet, basename='purchase')

urlpatterns = [
    # GET    /api/purchases/              - List purchases
    # POST   /api/purchases/              - Record purchase
    # GET    /api/purchases/{id}/         - Get purchase details
    # PUT    /api/purchases/{id}/         - Update purchase
    # PATCH  /api/purchases/{id}/         - Partial update
    # DELETE /api/purchases/{id}/         - Delete purchase
    path('', include(router.urls)),
]
