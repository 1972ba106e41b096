import pytest
from django.apps import apps

from apps.contact.models import ContactMessage

pytestmark = pytest.mark.django_db


def test_health(api_client):
    response = api_client.get('/api/health/')
    assert response.status_code == 200
    data = response.json()
    assert data['status'] == 'ok'
    assert data['database'] == 'healthy'
    assert data['service'] == 'TickTee Style API'
    assert data['timestamp']


class TestContact:
    payload = {
        'name': 'Bilal <b>Raza</b>',
        'email': 'bilal@example.com',
        'subject': 'Warranty',
        'message': 'Is the warranty international?',
    }

    def test_submit(self, api_client):
        response = api_client.post('/api/contact/', self.payload, format='json')
        assert response.status_code == 200
        assert response.json() == {
            'success': True,
            'message': 'Thank you for your message. We will get back to you soon.',
        }
        message = ContactMessage.objects.get()
        assert message.name == 'Bilal Raza'
        assert message.is_resolved is False

    @pytest.mark.parametrize('changes', [{'subject': '  '}, {'name': None}, {'message': ''}])
    def test_missing_field(self, api_client, changes):
        response = api_client.post('/api/contact/', {**self.payload, **changes}, format='json')
        assert response.status_code == 400
        assert response.json()['error'] == 'All fields are required'
        assert not ContactMessage.objects.exists()

    def test_absent_field(self, api_client):
        payload = {key: value for key, value in self.payload.items() if key != 'message'}
        response = api_client.post('/api/contact/', payload, format='json')
        assert response.status_code == 400
        assert response.json()['error'] == 'All fields are required'
        assert 'message' in response.json()['details']

    def test_invalid_email(self, api_client):
        response = api_client.post('/api/contact/', {**self.payload, 'email': 'bilal'}, format='json')
        assert response.status_code == 400
        assert response.json()['error'] == 'Invalid email address'


class TestLogError:
    def test_records_client_error(self, api_client):
        response = api_client.post('/api/log-error/', {
            'message': 'Cannot read properties of undefined',
            'level': 'warning',
            'stack': 'TypeError at CartDrawer',
            'context': {'component': 'CartDrawer'},
            'url': 'https://ticktee-style.pk/cart',
        }, format='json', HTTP_USER_AGENT='Mozilla/5.0')

        assert response.status_code == 200
        assert response.json() == {'success': True}

        entry = apps.get_app_config('core').error_log.recent()[-1]
        assert entry.level == 'warning'
        assert entry.context == {'component': 'CartDrawer'}
        assert entry.user_agent == 'Mozilla/5.0'
        assert entry.user_id is None

    def test_attaches_signed_in_user(self, customer_client, customer):
        customer_client.post('/api/log-error/', {'message': 'Checkout failed'}, format='json')
        entry = apps.get_app_config('core').error_log.recent()[-1]
        assert entry.level == 'error'
        assert entry.user_id == str(customer.pk)

    def test_message_required(self, api_client):
        response = api_client.post('/api/log-error/', {'level': 'info'}, format='json')
        assert response.status_code == 400
        assert response.json()['error'] == 'Error message is required'
