import json

import pytest

from services.netbilling_response import NetbillingResponse, PaymentToken, StatusCode


@pytest.mark.parametrize('code', ['1', 'T', 'I', 'D', 'Z', '', None])
def test_everything_but_decline_codes_is_approved(code):
    body = '' if code is None else f'status_code={code}'
    assert NetbillingResponse(body).transaction_approved() is True


@pytest.mark.parametrize('code', ['0', 'F'])
def test_decline_codes(code):
    assert NetbillingResponse(f'status_code={code}').transaction_approved() is False


@pytest.mark.parametrize('code,held', [('I', True), ('1', False), ('0', False), ('T', False)])
def test_only_pending_is_held(code, held):
    assert NetbillingResponse(f'status_code={code}').transaction_held() is held


def test_missing_status_code_is_not_held():
    response = NetbillingResponse('trans_id=1')
    assert response.status_code is None
    assert response.transaction_held() is False


def test_status_messages():
    cases = {
        '1': 'Successful transaction (APPROVED)',
        'I': 'Pending transaction (APPROVED)',
        'T': 'Successful auth only transaction (APPROVED)',
        '0': 'Failed transaction (APPROVED)',
        'F': 'Settlement failure or returned eCheck transaction (APPROVED)',
        'D': 'Duplicate transaction (APPROVED)',
        'Q': 'Unknown transaction (APPROVED)',
    }
    for code, expected in cases.items():
        assert NetbillingResponse(f'status_code={code}&auth_msg=APPROVED').status_message == expected


def test_status_message_with_reason_and_fallback():
    response = NetbillingResponse('status_code=0&reason_code2=CVV2%20MISMATCH')
    assert response.status_message == 'Failed transaction (N/A - CVV2 MISMATCH)'

    response = NetbillingResponse('status_code=0&auth_msg=BAD%20CARD&reason_code2=EXPIRED')
    assert response.status_message == 'Failed transaction (BAD CARD - EXPIRED)'


def test_field_accessors():
    response = NetbillingResponse(
        'status_code=1&auth_msg=TEST+APPROVED&trans_id=114000000123'
        '&auth_code=999999&avs_code=X&cvv_code=M'
    )
    assert response.transaction_id == '114000000123'
    assert response.authorization_code == '999999'
    assert response.avs_result == 'X'
    assert response.csc_result == 'M'
    assert response.csc_match() is True
    assert response.status_message == 'Successful transaction (TEST APPROVED)'


def test_empty_and_missing_fields_are_absent():
    response = NetbillingResponse('status_code=1&trans_id=&auth_code=')
    assert response.transaction_id is None
    assert response.authorization_code is None
    assert response.avs_result is None
    assert response.csc_result is None
    assert response.csc_match() is False


def test_csc_mismatch():
    assert NetbillingResponse('cvv_code=N').csc_match() is False


def test_duplicate_keys_last_wins():
    assert NetbillingResponse('trans_id=1&trans_id=2').transaction_id == '2'


def test_garbage_body_degrades_to_absent_fields():
    response = NetbillingResponse('<html>oops</html>')
    assert response.transaction_id is None
    assert response.transaction_approved() is True


def test_parameters_are_read_only():
    response = NetbillingResponse('status_code=1')
    with pytest.raises(TypeError):
        response.parameters['status_code'] = '0'


def test_card_payment_token(card_order):
    response = NetbillingResponse('status_code=1&trans_id=114000000321', card_order)
    token = response.payment_token()

    assert isinstance(token, PaymentToken)
    assert token.token_id == '114000000321'
    assert token.is_default is True
    assert token.data == {
        'default': True,
        'type': 'credit_card',
        'last_four': '1111',
        'account_number': '4111111111111111',
        'exp_month': '01',
        'exp_year': '27',
    }


def test_echeck_payment_token_has_no_expiry(echeck_order):
    token = NetbillingResponse('status_code=1&trans_id=114000000999').payment_token(echeck_order)
    assert token.data['type'] == 'echeck'
    assert token.data['last_four'] == '5309'
    assert 'exp_month' not in token.data


def test_payment_token_requires_order():
    with pytest.raises(ValueError):
        NetbillingResponse('status_code=1&trans_id=1').payment_token()


def test_payment_type(card_order):
    assert NetbillingResponse('', card_order).payment_type == 'credit_card'
    assert NetbillingResponse('').payment_type is None


def test_string_forms_are_identical():
    response = NetbillingResponse('status_code=1&trans_id=114000000123')
    assert response.to_string() == response.to_string_safe()
    assert json.loads(response.to_string()) == {'status_code': '1', 'trans_id': '114000000123'}


def test_to_dict():
    result = NetbillingResponse('status_code=I&auth_msg=PENDING&trans_id=7').to_dict()
    assert result['approved'] is True
    assert result['held'] is True
    assert result['transaction_id'] == '7'
    assert result['status_message'] == 'Pending transaction (PENDING)'


def test_status_codes_compare_as_wire_values():
    response = NetbillingResponse(f"status_code={StatusCode.PENDING.value}")

    assert StatusCode(response.status_code) is StatusCode.PENDING
    assert response.transaction_held()
    assert response.status_message == 'Pending transaction (N/A)'
