import uuid
from smtplib import SMTPException

import pytest
from django.core import mail
from django.core.files.uploadedfile import SimpleUploadedFile

from apps.orders.models import Order
from apps.orders.services import CheckoutRequest, CheckoutService
from apps.payments.models import PaymentReview

pytestmark = pytest.mark.django_db

VERIFY_URL = '/api/admin/verify-payment/'


@pytest.fixture
def place_order(customer, make_product, shipping_address):
    product = make_product(price='2500.00', stock=20)

    def _place_order(payment_method='jazzcash', transaction_id='TXN12345678', user=None):
        request = CheckoutRequest(
            shipping_address=dict(shipping_address),
            items=[(product.id, 1)],
            payment_method=payment_method,
            transaction_id=transaction_id if payment_method != 'cod' else None,
        )
        order = CheckoutService().place_order(user or customer, request)
        mail.outbox.clear()
        return order

    return _place_order


class TestPendingPayments:
    def test_lists_awaiting_orders_oldest_first(self, admin_client, place_order):
        first = place_order()
        second = place_order(payment_method='easypaisa', transaction_id='EP987654321')
        place_order(payment_method='cod')

        response = admin_client.get('/api/admin/pending-payments/')
        assert response.status_code == 200
        assert [row['id'] for row in response.json()['orders']] == [str(first.id), str(second.id)]


class TestVerifyPayment:
    def test_verify(self, admin_client, admin_user, place_order):
        order = place_order()
        response = admin_client.post(
            VERIFY_URL, {'orderId': str(order.id), 'verified': True, 'adminNotes': 'Matched statement'}, format='json'
        )

        assert response.status_code == 200
        assert response.json() == {'success': True, 'message': 'Payment verified successfully'}

        order.refresh_from_db()
        assert order.status == 'processing'
        assert order.payment_verified is True

        review = PaymentReview.objects.get(order=order)
        assert (review.decision, review.reviewer, review.notes) == ('verified', admin_user, 'Matched statement')

        assert len(mail.outbox) == 1
        assert mail.outbox[0].subject == 'Payment Verified - TickTee Style'
        assert mail.outbox[0].to == ['ayesha@example.com']

    @pytest.mark.parametrize('payload,status,verified', [
        ({'verified': True}, 'processing', True),
        ({'verified': False, 'rejectionReason': 'Amount does not match'}, 'payment_rejected', False),
    ])
    def test_mail_failure_keeps_the_decision(self, admin_client, place_order, monkeypatch, payload, status, verified):
        def refuse(**kwargs):
            raise SMTPException("Connection refused")

        monkeypatch.setattr('apps.notifications.emails.send_mail', refuse)
        order = place_order()
        response = admin_client.post(VERIFY_URL, {'orderId': str(order.id), **payload}, format='json')

        assert response.status_code == 200
        assert response.json()['success'] is True
        order.refresh_from_db()
        assert order.status == status
        assert order.payment_verified is verified
        assert PaymentReview.objects.filter(order=order).count() == 1
        assert mail.outbox == []

    def test_reject_requires_reason(self, admin_client, place_order):
        order = place_order()
        response = admin_client.post(VERIFY_URL, {'orderId': str(order.id), 'verified': False}, format='json')

        assert response.status_code == 400
        assert response.json() == {'error': 'Rejection reason is required'}
        order.refresh_from_db()
        assert order.status == 'awaiting_payment'

    def test_reject_then_verify(self, admin_client, place_order):
        order = place_order()
        response = admin_client.post(
            VERIFY_URL,
            {'orderId': str(order.id), 'verified': False, 'rejectionReason': 'Amount does not match'},
            format='json',
        )
        assert response.json()['message'] == 'Payment rejected'
        order.refresh_from_db()
        assert order.status == 'payment_rejected'
        assert order.payment_verified is False
        assert mail.outbox[0].subject == 'Payment Verification Issue - TickTee Style'
        assert 'Reason: Amount does not match' in mail.outbox[0].body

        response = admin_client.post(VERIFY_URL, {'orderId': str(order.id), 'verified': True}, format='json')
        assert response.status_code == 200
        order.refresh_from_db()
        assert order.status == 'processing'
        assert PaymentReview.objects.filter(order=order).count() == 2

    def test_cash_on_delivery_order_cannot_be_reviewed(self, admin_client, place_order):
        order = place_order(payment_method='cod')
        response = admin_client.post(VERIFY_URL, {'orderId': str(order.id), 'verified': True}, format='json')
        assert response.status_code == 400
        assert response.json() == {'error': "Cannot change order status from 'pending' to 'processing'"}

    def test_verified_order_cannot_be_reviewed_again(self, admin_client, place_order):
        order = place_order()
        admin_client.post(VERIFY_URL, {'orderId': str(order.id), 'verified': True}, format='json')

        response = admin_client.post(
            VERIFY_URL, {'orderId': str(order.id), 'verified': False, 'rejectionReason': 'late'}, format='json'
        )
        assert response.status_code == 400

    @pytest.mark.parametrize('payload', [{}, {'orderId': str(uuid.uuid4())}, {'verified': True}])
    def test_missing_fields(self, admin_client, payload):
        response = admin_client.post(VERIFY_URL, payload, format='json')
        assert response.status_code == 400
        assert response.json() == {'error': 'Order ID and verification status are required'}

    def test_unknown_order(self, admin_client):
        response = admin_client.post(VERIFY_URL, {'orderId': str(uuid.uuid4()), 'verified': True}, format='json')
        assert response.status_code == 404
        assert response.json() == {'error': 'Order not found'}

    def test_customer_forbidden(self, customer_client, place_order):
        order = place_order()
        response = customer_client.post(VERIFY_URL, {'orderId': str(order.id), 'verified': True}, format='json')
        assert response.status_code == 403
        order.refresh_from_db()
        assert order.status == 'awaiting_payment'


class TestPaymentProofUpload:
    url = '/api/uploads/payment-proof/'

    def test_upload_for_own_order(self, customer_client, customer, place_order):
        order = place_order()
        proof = SimpleUploadedFile('receipt.pdf', b'%PDF-1.4 fake', content_type='application/pdf')
        response = customer_client.post(self.url, {'orderId': str(order.id), 'file': proof}, format='multipart')

        assert response.status_code == 201
        url = response.json()['url']
        assert url.startswith(f'/media/payment-proofs/{customer.pk}/{order.id}-')
        assert url.endswith('.pdf')
        order.refresh_from_db()
        assert order.payment_proof_url == url

    def test_someone_elses_order(self, api_client, make_user, place_order):
        order = place_order()
        api_client.force_authenticate(user=make_user('bilal@example.com'))
        proof = SimpleUploadedFile('receipt.png', b'\x89PNG fake', content_type='image/png')
        response = api_client.post(self.url, {'orderId': str(order.id), 'file': proof}, format='multipart')

        assert response.status_code == 404
        assert Order.objects.get(pk=order.pk).payment_proof_url is None

    def test_wrong_file_type(self, customer_client, place_order):
        order = place_order()
        proof = SimpleUploadedFile('receipt.webp', b'RIFF fake', content_type='image/webp')
        response = customer_client.post(self.url, {'orderId': str(order.id), 'file': proof}, format='multipart')
        assert response.status_code == 400
        assert response.json() == {'error': 'Invalid file type. Please upload a JPG, PNG, or PDF file.'}

    def test_missing_file(self, customer_client, place_order):
        order = place_order()
        response = customer_client.post(self.url, {'orderId': str(order.id)}, format='multipart')
        assert response.status_code == 400
        assert response.json()['error'] == 'No file provided'
