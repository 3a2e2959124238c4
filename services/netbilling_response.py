"""NETbilling direct-mode response parser."""
import json
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional
from urllib.parse import parse_qsl

from services.netbilling_order import OrderData, PaymentType


class StatusCode(str, Enum):
    SUCCESS = '1'
    AUTH_SUCCESS = 'T'
    PENDING = 'I'
    FAILED = '0'
    ECHECK_FAILED = 'F'
    DUPLICATE = 'D'


# Codes that decline a transaction. Anything else, including codes the
# gateway may add later, is treated as approved.
DECLINE_CODES = frozenset({StatusCode.FAILED.value, StatusCode.ECHECK_FAILED.value})

CSC_MATCH = 'M'

STATUS_MESSAGES = {
    StatusCode.SUCCESS.value: 'Successful transaction ({})',
    StatusCode.PENDING.value: 'Pending transaction ({})',
    StatusCode.AUTH_SUCCESS.value: 'Successful auth only transaction ({})',
    StatusCode.FAILED.value: 'Failed transaction ({})',
    StatusCode.ECHECK_FAILED.value: 'Settlement failure or returned eCheck transaction ({})',
    StatusCode.DUPLICATE.value: 'Duplicate transaction ({})',
}
UNKNOWN_STATUS_MESSAGE = 'Unknown transaction ({})'


@dataclass
class PaymentToken:
    """A stored payment method; NETbilling's token is the tokenize call's transaction id."""
    token_id: Optional[str]
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_default(self) -> bool:
        return bool(self.data.get('default'))


class NetbillingResponse:
    """
    Parsed reply of one direct-mode call.

    The body is decoded once; the resulting mapping is read-only. The
    optional order is only consulted to build a payment token.
    """

    def __init__(self, raw_response_body: str, order: Optional[OrderData] = None):
        self.order = order
        self.parameters: Mapping[str, str] = MappingProxyType(
            dict(parse_qsl(raw_response_body or '', keep_blank_values=True))
        )

    def _get(self, key: str) -> Optional[str]:
        # empty values read as absent
        return self.parameters.get(key) or None

    @property
    def status_code(self) -> Optional[str]:
        return self.parameters.get('status_code')

    @property
    def status_message(self) -> str:
        message = self._get('auth_msg') or 'N/A'

        # sometimes carries more detail about a decline
        reason = self._get('reason_code2')
        if reason:
            message = f"{message} - {reason}"

        template = STATUS_MESSAGES.get(self.status_code, UNKNOWN_STATUS_MESSAGE)
        return template.format(message)

    def transaction_approved(self) -> bool:
        return self.status_code not in DECLINE_CODES

    def transaction_held(self) -> bool:
        return self.status_code == StatusCode.PENDING.value

    @property
    def transaction_id(self) -> Optional[str]:
        return self._get('trans_id')

    @property
    def authorization_code(self) -> Optional[str]:
        return self._get('auth_code')

    @property
    def avs_result(self) -> Optional[str]:
        return self._get('avs_code')

    @property
    def csc_result(self) -> Optional[str]:
        return self._get('cvv_code')

    def csc_match(self) -> bool:
        return self.csc_result == CSC_MATCH

    @property
    def payment_type(self) -> Optional[str]:
        if self.order is None:
            return None
        return PaymentType(self.order.payment.type).value

    @property
    def user_message(self) -> Optional[str]:
        # the gateway has no customer-safe message
        return None

    def payment_token(self, order: Optional[OrderData] = None) -> PaymentToken:
        """
        Build the payment token after a tokenize call.

        Args:
            order: Order whose payment details were tokenized; defaults to the
                order given at parse time

        Raises:
            ValueError: If no order is available
        """
        order = order or self.order
        if order is None:
            raise ValueError("Order payment details are required to build a payment token")

        payment = order.payment
        data: Dict[str, Any] = {
            'default': True,
            'type': PaymentType(payment.type).value,
            'last_four': payment.last_four,
            'account_number': payment.account_number,
        }
        if payment.is_credit_card:
            data['exp_month'] = payment.exp_month
            data['exp_year'] = payment.exp_year

        return PaymentToken(token_id=self.transaction_id, data=data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'approved': self.transaction_approved(),
            'held': self.transaction_held(),
            'status_code': self.status_code,
            'status_message': self.status_message,
            'transaction_id': self.transaction_id,
            'authorization_code': self.authorization_code,
            'avs_result': self.avs_result,
            'csc_result': self.csc_result,
            'csc_match': self.csc_match(),
        }

    def to_string(self) -> str:
        return json.dumps(dict(self.parameters), indent=2, sort_keys=True)

    def to_string_safe(self) -> str:
        # the response carries no card or account data
        return self.to_string()
