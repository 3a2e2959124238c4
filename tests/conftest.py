"""Pytest fixtures for the NETbilling gateway tests."""
from unittest.mock import MagicMock

import pytest
import requests

from config import NetbillingSettings
from services.netbilling_integration import NetbillingClient
from services.netbilling_order import Address, CaptureDetails, OrderData, PaymentDetails, PaymentType


def make_http_response(status_code=200, body='', reason='OK', headers=None):
    """A real requests.Response without a network round-trip."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.headers.update(headers or {'Content-Type': 'application/x-www-form-urlencoded'})
    response._content = body.encode('utf-8')
    response.encoding = 'utf-8'
    return response


@pytest.fixture
def settings():
    return NetbillingSettings(account_id='104901072025', site_tag='shop', environment='test')


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(settings, session):
    return NetbillingClient(settings, session=session)


@pytest.fixture
def billing_address():
    return Address(
        first_name='Jane',
        last_name='Doe',
        address_1='1 Market St',
        address_2='Suite 5',
        city='San Francisco',
        state='CA',
        postcode='94105',
        country='US',
    )


@pytest.fixture
def card_order(billing_address):
    return OrderData(
        order_id='1001',
        amount='10.00',
        tax_total='0.80',
        shipping_total=5,
        billing=billing_address,
        email='jane@example.com',
        phone='555-0100',
        customer_ip='203.0.113.7',
        user_agent='Mozilla/5.0',
        description='Order 1001',
        payment=PaymentDetails(
            type=PaymentType.CREDIT_CARD,
            account_number='4111111111111111',
            exp_month='01',
            exp_year='27',
            csc='123',
        ),
    )


@pytest.fixture
def echeck_order(billing_address):
    return OrderData(
        order_id='2002',
        amount='25.50',
        billing=billing_address,
        payment=PaymentDetails(
            type=PaymentType.ECHECK,
            account_number='8675309',
            routing_number='123456789',
            assent_key='89999991234567',
        ),
    )


@pytest.fixture
def capture_order(card_order):
    card_order.capture = CaptureDetails(trans_id='114000000001', amount='10.00')
    return card_order


@pytest.fixture
def http_response():
    return make_http_response
