"""NETbilling Direct-Mode Payment Gateway Integration."""
import logging
import re
import time
from typing import Any, Iterable, Optional

import requests

from config import NetbillingSettings
from services.netbilling_order import OrderData
from services.netbilling_request import NetbillingRequest, ParameterFilter
from services.netbilling_response import NetbillingResponse

logger = logging.getLogger(__name__)

PRODUCTION_ENDPOINT = 'https://secure.netbilling.com:1402/gw/sas/direct3.2'
TEST_ENDPOINT = 'https://secure.netbilling.com:1401/gw/sas/direct3.2'
TRANSACTION_URL = 'https://secure.netbilling.com/merchant/viewtrans?trans_id={}'


class NetbillingError(Exception):
    """Raised when a gateway call fails before a transaction result is available."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional[Any] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


def get_custom_status_message(raw_headers: str, status_code: int) -> str:
    """
    Pull NETbilling's custom message out of the HTTP status line.

    On errors the gateway puts the detail in the reason phrase, e.g.
    ``HTTP/1.0 604 Missing Parameter (pay_type)``.

    Args:
        raw_headers: Raw status line and headers (not the body)
        status_code: HTTP status code of the response

    Returns:
        The status line with the ``HTTP/1.0 <code>`` prefix removed
    """
    raw_headers = (raw_headers or '').replace('\r\n', '\n')
    # fold continuation lines
    raw_headers = re.sub(r'\n[ \t]', ' ', raw_headers)

    message = raw_headers.split('\n')[0]
    return message.replace(f"HTTP/1.0 {status_code}", '').strip()


def raw_status_headers(response: requests.Response) -> str:
    """Rebuild the raw status line and header block of a requests response."""
    version = getattr(response.raw, 'version', None)
    if not isinstance(version, int) or not version:
        # the direct-mode gateway speaks HTTP/1.0
        version = 10
    status_line = f"HTTP/{version // 10}.{version % 10} {response.status_code} {response.reason or ''}"
    header_lines = [f"{name}: {value}" for name, value in response.headers.items()]
    return '\r\n'.join([status_line] + header_lines)


class NetbillingClient:
    """Client for the NETbilling direct-mode API (one POST per transaction, no retries)."""

    def __init__(
        self,
        settings: NetbillingSettings,
        session: Optional[requests.Session] = None,
        parameter_filters: Iterable[ParameterFilter] = (),
    ):
        """
        Initialize NETbilling client.

        Args:
            settings: Account id, site tag, environment and timeout
            session: Optional requests session owned by the caller
            parameter_filters: Callables that may adjust request parameters
                before they are serialized
        """
        self.settings = settings
        self.session = session or requests.Session()
        self.parameter_filters = list(parameter_filters)
        self.request_uri = PRODUCTION_ENDPOINT if settings.is_production else TEST_ENDPOINT

        logger.info(
            "[NetbillingClient] Initialized (environment=%s, endpoint=%s, site_tag=%s)",
            settings.environment, self.request_uri, settings.site_tag or 'none',
        )

    def get_new_request(self) -> NetbillingRequest:
        return NetbillingRequest(
            self.settings.account_id,
            self.settings.site_tag,
            parameter_filters=self.parameter_filters,
        )

    def credit_card_charge(self, order: OrderData) -> NetbillingResponse:
        request = self.get_new_request()
        request.create_credit_card_charge(order)
        return self.perform_request(request, order, 'Charge')

    def credit_card_authorization(self, order: OrderData) -> NetbillingResponse:
        request = self.get_new_request()
        request.create_credit_card_auth(order)
        return self.perform_request(request, order, 'Authorization')

    def credit_card_capture(self, order: OrderData) -> NetbillingResponse:
        request = self.get_new_request()
        request.create_credit_card_capture(order)
        return self.perform_request(request, order, 'Capture')

    def tokenize_payment_method(self, order: OrderData) -> NetbillingResponse:
        request = self.get_new_request()
        request.tokenize(order)
        return self.perform_request(request, order, 'Tokenize')

    def perform_request(
        self,
        request: NetbillingRequest,
        order: Optional[OrderData] = None,
        operation: str = 'Request',
    ) -> NetbillingResponse:
        """
        Send one request and parse the reply.

        Raises:
            NetbillingError: On transport failure or a non-200 HTTP status
        """
        tag = f"[NetbillingClient] [{operation}]"
        body = request.to_query_string()
        logger.info("%s POST %s", tag, self.request_uri)
        logger.debug("%s Request: %s", tag, request.to_string_safe())

        request_start = time.time()
        try:
            response = self.session.post(
                self.request_uri,
                data=body.encode('utf-8'),
                headers={'Content-Type': 'application/x-www-form-urlencoded'},
                timeout=self.settings.timeout,
            )
        except requests.exceptions.Timeout as exc:
            logger.error("%s ❌ Timeout after %s seconds", tag, self.settings.timeout)
            raise NetbillingError(
                "Payment gateway timed out. The transaction may still have been processed.",
                status_code=504,
            ) from exc
        except requests.exceptions.RequestException as exc:
            logger.error("%s ❌ Request error: %s", tag, exc)
            raise NetbillingError(str(exc), status_code=503) from exc

        logger.info(
            "%s Response status: %s (%.3fs)",
            tag, response.status_code, time.time() - request_start,
        )

        if response.status_code != 200:
            message = get_custom_status_message(raw_status_headers(response), response.status_code)
            logger.error("%s ❌ Gateway error %s: %s", tag, response.status_code, message)
            raise NetbillingError(
                message or f"Gateway request failed (HTTP {response.status_code})",
                status_code=response.status_code,
                response=response.text,
            )

        parsed = NetbillingResponse(response.text, order)
        logger.debug("%s Response: %s", tag, parsed.to_string_safe())
        logger.info(
            "%s %s %s (trans_id=%s)",
            tag,
            '✅' if parsed.transaction_approved() else '❌',
            parsed.status_message,
            parsed.transaction_id,
        )
        return parsed

    def get_transaction_url(self, trans_id: Optional[str]) -> Optional[str]:
        """Merchant console link for a transaction."""
        if not trans_id:
            return None
        return TRANSACTION_URL.format(trans_id)

    def tokenize_with_sale(self) -> bool:
        # sale and tokenize share one protocol
        return True

    def supports_get_tokenized_payment_methods(self) -> bool:
        return False

    def supports_update_tokenized_payment_method(self) -> bool:
        return False

    def supports_remove_tokenized_payment_method(self) -> bool:
        return False
