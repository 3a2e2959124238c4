"""NETbilling direct-mode request builder."""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Callable, Dict, Iterable, Optional
from urllib.parse import urlencode

from services.netbilling_fields import truncate_parameters
from services.netbilling_order import Amount, OrderData

# (parameters, order) -> parameters, run just before serialization
ParameterFilter = Callable[[Dict[str, str], Optional[OrderData]], Dict[str, str]]

TOKEN_PREFIX = 'CS:'
MASK_CHAR = 'X'


class PayType(str, Enum):
    CREDIT_CARD = 'C'
    ECHECK = 'K'


class TranType(str, Enum):
    AUTH = 'A'
    CAPTURE = 'D'
    SALE = 'S'
    # Quasi-transaction tokenize; tokenize() sends a $0 AUTH instead so the
    # issuing bank actually checks the card.
    TOKENIZE = 'Q'


def format_amount(value: Amount) -> str:
    """Format a monetary amount as a fixed 2-decimal string (e.g. '10.00')."""
    try:
        amount = Decimal(str(value if value not in (None, '') else 0))
        if not amount.is_finite():
            raise ValueError(f"Invalid amount: {value!r}")
        return str(amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        # unparseable, or too large for the decimal context
        raise ValueError(f"Invalid amount: {value!r}") from None


def mask_parameters(parameters: Dict[str, str]) -> Dict[str, str]:
    """Return a copy of the parameters with account id, card number and CVV masked."""
    masked = dict(parameters)

    if masked.get('account_id'):
        masked['account_id'] = MASK_CHAR * len(masked['account_id'])

    card_number = masked.get('card_number')
    if card_number:
        masked['card_number'] = MASK_CHAR * (len(card_number) - 4) + card_number[-4:]

    if masked.get('card_cvv2'):
        masked['card_cvv2'] = MASK_CHAR * len(masked['card_cvv2'])

    return masked


class NetbillingRequest:
    """
    Builds the parameter set for one direct-mode API call.

    A request is created fresh for every call, filled by exactly one of the
    ``create_*``/``tokenize`` methods and then serialized with
    ``to_query_string()``.
    """

    def __init__(
        self,
        account_id: str,
        site_tag: str = '',
        parameter_filters: Iterable[ParameterFilter] = (),
    ):
        self.account_id = account_id
        self.site_tag = site_tag
        self.parameter_filters = list(parameter_filters)
        self.parameters: Dict[str, str] = {}
        self.order: Optional[OrderData] = None
        self.finalized = False

    def create_credit_card_auth(self, order: OrderData) -> None:
        self.create_transaction(order, PayType.CREDIT_CARD, TranType.AUTH)

    def create_credit_card_charge(self, order: OrderData) -> None:
        self.create_transaction(order, PayType.CREDIT_CARD, TranType.SALE)

    def create_credit_card_capture(self, order: OrderData) -> None:
        """Capture a prior authorization; only the reference and amount are sent."""
        if order.capture is None:
            raise ValueError(f"Order {order.order_id} has no capture details")

        self.order = order
        self._add_parameters({
            'pay_type': PayType.CREDIT_CARD.value,
            'tran_type': TranType.CAPTURE.value,
            'orig_id': order.capture.trans_id,
            'amount': format_amount(order.capture.amount),
        })

    def tokenize(self, order: OrderData) -> None:
        """
        Tokenize the order's payment method with a $0.00 authorization.

        NETbilling uses the transaction id of this call as the token.
        """
        pay_type = PayType.CREDIT_CARD if order.payment.is_credit_card else PayType.ECHECK
        self.create_transaction(order, pay_type, TranType.AUTH, amount=0)

    def create_transaction(
        self,
        order: OrderData,
        pay_type: PayType,
        tran_type: TranType,
        amount: Optional[Amount] = None,
    ) -> None:
        """
        Add the shared sale/authorization parameters followed by the
        payment-method fields.

        Args:
            order: Order data
            pay_type: Credit card or eCheck
            tran_type: Transaction type sent on the wire
            amount: Overrides ``order.amount`` when given
        """
        self.order = order
        billing = order.billing

        parameters = {
            'pay_type': PayType(pay_type).value,
            'tran_type': TranType(tran_type).value,
            'amount': format_amount(order.amount if amount is None else amount),
            'tax_amount': format_amount(order.tax_total),
            'ship_amount': format_amount(order.shipping_total),
            'bill_name1': billing.first_name,
            'bill_name2': billing.last_name,
            'bill_street': billing.street,
            'bill_city': billing.city,
            'bill_state': billing.state,
            'bill_zip': billing.postcode,
            'bill_country': billing.country,
        }

        if order.has_shipping_address:
            shipping = order.shipping
            parameters.update({
                'ship_name1': shipping.first_name,
                'ship_name2': shipping.last_name,
                'ship_street': shipping.street,
                'ship_city': shipping.city,
                'ship_state': shipping.state,
                'ship_zip': shipping.postcode,
                'ship_country': shipping.country,
            })

        parameters.update({
            'cust_email': order.email,
            'cust_phone': order.phone,
            'cust_ip': order.customer_ip,
            'cust_browser': order.user_agent,
            'description': order.description,
        })
        self._add_parameters(parameters)

        if PayType(pay_type) == PayType.CREDIT_CARD:
            self._add_credit_card_parameters(order)
        else:
            self._add_echeck_parameters(order)

        # no CVV is kept for stored instruments
        if order.payment.token:
            self._add_parameter('disable_cvv2', 'true')

    def _add_credit_card_parameters(self, order: OrderData) -> None:
        payment = order.payment

        if payment.token:
            self._add_parameter('card_number', f"{TOKEN_PREFIX}{payment.token}")
            return

        self._add_parameter('card_number', payment.account_number)
        self._add_parameter('card_expire', f"{payment.exp_month}{payment.exp_year}")
        if payment.csc:
            self._add_parameter('card_cvv2', payment.csc)

    def _add_echeck_parameters(self, order: OrderData) -> None:
        payment = order.payment

        if payment.token:
            self._add_parameter('card_number', f"{TOKEN_PREFIX}{payment.token}")
            return

        # <routing number>:<account number>
        self._add_parameter('account_number', f"{payment.routing_number}:{payment.account_number}")
        self._add_parameter('assent_key', payment.assent_key)

    def _add_parameter(self, key: str, value) -> None:
        if self.finalized:
            raise RuntimeError("Request has already been serialized")
        self.parameters[key] = '' if value is None else str(value)

    def _add_parameters(self, parameters: Dict[str, str]) -> None:
        for key, value in parameters.items():
            self._add_parameter(key, value)

    def _finalize(self) -> Dict[str, str]:
        """Append credentials, run the filters and truncate, once per request."""
        if self.finalized:
            return self.parameters

        parameters = self.parameters
        parameters['account_id'] = self.account_id
        parameters['site_tag'] = self.site_tag

        for parameter_filter in self.parameter_filters:
            parameters = parameter_filter(parameters, self.order)

        self.parameters = truncate_parameters(parameters)
        self.finalized = True
        return self.parameters

    @staticmethod
    def _encode(parameters: Dict[str, str]) -> str:
        # spaces must go out as %20, not +
        return urlencode(parameters).replace('+', '%20')

    def to_query_string(self) -> str:
        """Serialize the request for transmission."""
        return self._encode(self._finalize())

    def to_string(self) -> str:
        return self.to_query_string()

    def to_string_safe(self) -> str:
        """Serialize with sensitive values masked; for logs only, never sent."""
        return self._encode(mask_parameters(self._finalize()))
