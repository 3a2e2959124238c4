"""
Order data handed to the NETbilling request builder.

Only the fields the direct-mode protocol needs are carried here, so the
gateway code never depends on a particular shop/order model. Controllers
build these from JSON with ``OrderData.from_dict``.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Union

Amount = Union[str, int, float, Decimal]


class PaymentType(str, Enum):
    CREDIT_CARD = 'credit_card'
    ECHECK = 'echeck'


@dataclass
class Address:
    first_name: str = ''
    last_name: str = ''
    address_1: str = ''
    address_2: str = ''
    city: str = ''
    state: str = ''
    postcode: str = ''
    country: str = ''

    @property
    def street(self) -> str:
        return f"{self.address_1} {self.address_2}".strip()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['Address']:
        if not data:
            return None
        return cls(**{
            name: str(data.get(name) or '')
            for name in cls.__dataclass_fields__
        })


@dataclass
class PaymentDetails:
    type: PaymentType = PaymentType.CREDIT_CARD
    account_number: str = ''
    exp_month: str = ''
    exp_year: str = ''
    csc: str = ''
    routing_number: str = ''
    token: str = ''                     # stored token, replaces account data when set
    assent_key: str = ''                # eCheck only, posted from the payment form

    @property
    def is_credit_card(self) -> bool:
        return self.type == PaymentType.CREDIT_CARD

    @property
    def last_four(self) -> str:
        return self.account_number[-4:]

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'PaymentDetails':
        data = data or {}
        try:
            payment_type = PaymentType(data.get('type') or PaymentType.CREDIT_CARD.value)
        except ValueError:
            raise ValueError(f"Unsupported payment type: {data.get('type')}") from None
        values = {
            name: str(data.get(name) or '')
            for name in cls.__dataclass_fields__
            if name != 'type'
        }
        return cls(type=payment_type, **values)


@dataclass
class CaptureDetails:
    trans_id: str                       # transaction id of the original authorization
    amount: Amount


@dataclass
class OrderData:
    order_id: str
    amount: Amount
    billing: Address
    payment: PaymentDetails
    tax_total: Amount = 0
    shipping_total: Amount = 0
    shipping: Optional[Address] = None
    email: str = ''
    phone: str = ''
    customer_ip: str = ''
    user_agent: str = ''
    description: str = ''
    capture: Optional[CaptureDetails] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_shipping_address(self) -> bool:
        return self.shipping is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OrderData':
        """
        Build order data from a JSON payload.

        Raises:
            ValueError: If a required key is missing
        """
        if not isinstance(data, dict):
            raise ValueError("Order payload must be a JSON object")

        missing = [key for key in ('order_id', 'amount') if data.get(key) in (None, '')]
        if missing:
            raise ValueError(f"Missing required fields: {', '.join(missing)}")

        for key in ('billing', 'shipping', 'payment', 'metadata'):
            if data.get(key) is not None and not isinstance(data[key], dict):
                raise ValueError(f"{key} must be an object")

        capture = None
        capture_data = data.get('capture')
        if capture_data:
            if not isinstance(capture_data, dict) or not capture_data.get('trans_id'):
                raise ValueError("capture.trans_id is required")
            capture = CaptureDetails(
                trans_id=str(capture_data['trans_id']),
                amount=capture_data.get('amount', data['amount']),
            )

        return cls(
            order_id=str(data['order_id']),
            amount=data['amount'],
            tax_total=data.get('tax_total') or 0,
            shipping_total=data.get('shipping_total') or 0,
            billing=Address.from_dict(data.get('billing')) or Address(),
            shipping=Address.from_dict(data.get('shipping')),
            email=data.get('email') or '',
            phone=data.get('phone') or '',
            customer_ip=data.get('customer_ip') or '',
            user_agent=data.get('user_agent') or '',
            description=data.get('description') or '',
            payment=PaymentDetails.from_dict(data.get('payment')),
            capture=capture,
            metadata=data.get('metadata') or {},
        )
