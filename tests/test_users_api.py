"""
Registration, token login and profile endpoints.
"""
import pytest

from users.models import CustomUser

pytestmark = pytest.mark.django_db

REGISTER_URL = '/api/v1/auth/register/'
TOKEN_URL = '/api/v1/auth/token/'
PROFILE_URL = '/api/v1/auth/profile/'


@pytest.fixture
def registration():
    return {
        'username': 'newhost',
        'email': 'NewHost@Example.com ',
        'first_name': 'New',
        'last_name': 'Host',
        'role': 'host',
        'password': 'longenough1',
        'password_confirm': 'longenough1',
    }


def test_register_returns_tokens(api_client, registration):
    response = api_client.post(REGISTER_URL, registration, format='json')

    assert response.status_code == 201
    assert response.data['access']
    assert response.data['refresh']
    assert response.data['user']['role'] == 'host'
    user = CustomUser.objects.get(username='newhost')
    assert user.email == 'newhost@example.com'
    assert user.is_host


def test_register_password_mismatch(api_client, registration):
    registration['password_confirm'] = 'different1'
    response = api_client.post(REGISTER_URL, registration, format='json')
    assert response.status_code == 400
    assert 'password' in response.data


def test_register_cannot_claim_admin(api_client, registration):
    registration['role'] = 'admin'
    assert api_client.post(REGISTER_URL, registration, format='json').status_code == 400


def test_token_login_and_profile(api_client, renter):
    response = api_client.post(TOKEN_URL, {'username': 'renter', 'password': 'renterpass123'}, format='json')
    assert response.status_code == 200

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
    profile = api_client.get(PROFILE_URL)
    assert profile.status_code == 200
    assert profile.data['username'] == 'renter'


def test_profile_update_keeps_role(renter_client, renter):
    response = renter_client.put(PROFILE_URL, {'first_name': 'Rita', 'role': 'host'}, format='json')

    assert response.status_code == 200
    renter.refresh_from_db()
    assert renter.first_name == 'Rita'
    assert renter.role == 'user'


def test_profile_requires_login(api_client):
    assert api_client.get(PROFILE_URL).status_code == 401
