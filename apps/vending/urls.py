from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'vending'

router = DefaultRouter()
router.register(r'', views.CollectionViewSet, basename='collection')

urlpatterns = [
    # Collection ViewSet routes
    # GET    /api/collections/               - List collections (filters + pagination)
    # POST   /api/collections/               - Record a collection
    # GET    /api/collections/{id}/          - Get collection with metrics
    # PUT    /api/collections/{id}/          - Partial update
    # PATCH  /api/collections/{id}/          - Partial update
    # DELETE /api/collections/{id}/          - Delete collection

    # Custom actions
    # GET    /api/collections/current-week/  - Current week number
    # GET    /api/collections/summary/       - Totals for filtered collections

    path('', include(router.urls)),
]
