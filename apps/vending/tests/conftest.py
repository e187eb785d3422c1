import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.vending.models import Collection


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def collector(db):
    """Create and return a collector account."""
    return User.objects.create_user(
        email='collector@example.com',
        password='TestPass123!',
        display_name='Field Collector',
    )


@pytest.fixture
def collector_client(api_client, collector):
    """Return API client authenticated as the collector."""
    refresh = RefreshToken.for_user(collector)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def collection_payload():
    """Valid request body for a new collection."""
    return {
        'collection_date': '2024-03-15',
        'round_number': 1,
        'week_number': 11,
        'machine_location': 'Central World - Level 2',
        'machine_coins_10baht': 400,
        'exchange_note_1000baht': 12,
        'postcards_remaining': 150,
    }


@pytest.fixture
def make_collection(db, collector):
    """Factory creating collections with sensible defaults."""
    def _make(**overrides):
        fields = {
            'collection_date': date(2024, 3, 15),
            'round_number': 1,
            'week_number': 11,
            'machine_location': 'Central World - Level 2',
            'machine_coins_10baht': 400,
            'exchange_note_1000baht': 12,
            'postcards_remaining': 150,
            'cost_per_postcard': Decimal('13.766'),
            'created_by': collector,
        }
        fields.update(overrides)
        return Collection.objects.create(**fields)
    return _make


@pytest.fixture
def collection(make_collection):
    """Create and return a single balanced collection."""
    return make_collection()
