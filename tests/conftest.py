from decimal import Decimal

import pytest
from django.apps import apps
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from apps.accounts.models import Profile
from apps.accounts.roles import ADMIN
from apps.catalog.models import Product, MENS


@pytest.fixture(autouse=True)
def reset_store_services():
    core = apps.get_app_config('core')
    core.rate_limiter.reset()
    core.error_log.clear()
    yield


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    User = get_user_model()

    def _make_user(email='customer@example.com', password='Secret@123', role=None, **profile_fields):
        user = User.objects.create_user(username=email, email=email, password=password)
        updates = dict(profile_fields)
        if role:
            updates['role'] = role
        if updates:
            Profile.objects.filter(user=user).update(**updates)
            user = User.objects.get(pk=user.pk)
        return user

    return _make_user


@pytest.fixture
def customer(make_user):
    return make_user('ayesha@example.com', full_name='Ayesha Khan', phone='03001234567')


@pytest.fixture
def admin_user(make_user):
    return make_user('admin@example.com', role=ADMIN, full_name='Store Admin')


@pytest.fixture
def customer_client(customer):
    client = APIClient()
    client.force_authenticate(user=customer)
    return client


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def make_product(db):
    def _make_product(name='Chronograph Black', brand='Seiko', price='2500.00', stock=10,
                      category=MENS, image_urls=None, description='Steel case, sapphire crystal'):
        return Product.objects.create(
            name=name,
            brand=brand,
            price=Decimal(price),
            stock=stock,
            category=category,
            description=description,
            image_urls=image_urls if image_urls is not None else ['/media/product-images/chrono-1.jpg'],
        )

    return _make_product


@pytest.fixture
def shipping_address():
    return {
        'fullName': 'Ayesha Khan',
        'phone': '03001234567',
        'streetAddress': 'House 12, Street 4, F-7/2',
        'city': 'Islamabad',
        'postalCode': '44000',
        'country': 'Pakistan',
    }
