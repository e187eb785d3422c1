import pytest
from datetime import date
from django.core.management import call_command
from django.urls import reverse
from rest_framework import status
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.accounts.services import authenticate_user, InvalidCredentialsError
from apps.vending.models import Collection


def login(client, email, password):
    return client.post(reverse('users:login'), {'email': email, 'password': password}, format='json')


# =============================================================================
# Login / logout
# =============================================================================

@pytest.mark.django_db
class TestLoginFlow:

    def test_token_from_login_opens_collections(self, api_client, user):
        response = login(api_client, 'TESTUSER@example.com', 'TestPass123!')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['email'] == user.email

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        assert api_client.get(reverse('vending:collection-list')).status_code == status.HTTP_200_OK

    def test_wrong_password_and_unknown_email_look_alike(self, api_client, user):
        wrong_password = login(api_client, user.email, 'nope')
        unknown_email = login(api_client, 'ghost@example.com', 'TestPass123!')

        assert wrong_password.status_code == status.HTTP_401_UNAUTHORIZED
        assert wrong_password.data == unknown_email.data == {'error': 'Invalid email or password'}

    def test_deactivated_collector_refused(self, api_client, user_inactive):
        response = login(api_client, user_inactive.email, 'TestPass123!')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {'error': 'Account is deactivated'}

    def test_malformed_email_uses_validation_shape(self, api_client):
        response = login(api_client, 'not-an-email', 'x')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Validation failed'
        assert 'email' in response.data['details']

    def test_logout_checks_refresh_token_shape(self, authenticated_client, user):
        url = reverse('users:logout')

        good = authenticated_client.post(url, {'refresh': str(RefreshToken.for_user(user))}, format='json')
        bad = authenticated_client.post(url, {'refresh': 'garbage'}, format='json')

        assert good.status_code == status.HTTP_200_OK
        assert bad.status_code == status.HTTP_400_BAD_REQUEST

    def test_token_refresh(self, api_client, user):
        refresh = login(api_client, user.email, 'TestPass123!').data['refresh']

        response = api_client.post(reverse('token_refresh'), {'refresh': refresh}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data

    @pytest.mark.parametrize('name', ['users:logout', 'users:current-user'])
    def test_requires_token(self, api_client, name):
        response = api_client.post(reverse(name)) if name == 'users:logout' else api_client.get(reverse(name))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
def test_current_user(authenticated_client, user):
    response = authenticated_client.get(reverse('users:current-user'))

    assert response.data['id'] == str(user.id)
    assert response.data['is_staff'] is False


@pytest.mark.django_db
def test_failed_login_leaves_last_login_unset(user):
    with pytest.raises(InvalidCredentialsError):
        authenticate_user(email=user.email, password='wrong')

    user.refresh_from_db()
    assert user.last_login is None


# =============================================================================
# seed_admin
# =============================================================================

@pytest.mark.django_db
class TestSeedAdmin:

    def test_default_admin_can_log_in(self, api_client):
        call_command('seed_admin')

        admin = User.objects.get(email='admin@minimystery.com')
        assert admin.is_superuser and admin.is_staff
        assert login(api_client, 'admin@minimystery.com', 'admin123').status_code == status.HTTP_200_OK

    def test_rerun_keeps_first_password(self):
        call_command('seed_admin', email='boss@example.com', password='First123!')
        call_command('seed_admin', email='boss@example.com', password='Second123!')

        assert User.objects.filter(email='boss@example.com').count() == 1
        assert User.objects.get(email='boss@example.com').check_password('First123!')


# =============================================================================
# Admin site
# =============================================================================

@pytest.mark.django_db
def test_admin_lists_collection_counts(client, user):
    admin = User.objects.create_superuser(email='root@example.com', password='RootPass123!')
    Collection.objects.create(
        collection_date=date(2024, 3, 15),
        round_number=1,
        week_number=11,
        machine_location='Terminal 21',
        postcards_remaining=10,
        created_by=user,
    )
    client.force_login(admin)

    changelist = client.get(reverse('admin:accounts_user_changelist'))
    change = client.get(reverse('admin:accounts_user_change', args=[user.id]))

    assert changelist.status_code == 200
    assert changelist.context['cl'].queryset.get(id=user.id)._collection_count == 1
    assert change.status_code == 200
    assert 'Terminal 21' in change.content.decode()
