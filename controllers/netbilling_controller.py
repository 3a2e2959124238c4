"""NETbilling payment controller."""
import logging

from flask import current_app, jsonify, request

from services.netbilling_integration import NetbillingError
from services.netbilling_order import OrderData

logger = logging.getLogger(__name__)


class NetbillingController:
    """Turns JSON order payloads into gateway calls and gateway results into JSON."""

    def __init__(self, client):
        self.client = client

    def charge(self):
        return self._run('charge', self.client.credit_card_charge if self.client else None)

    def authorize(self):
        return self._run('authorize', self.client.credit_card_authorization if self.client else None)

    def capture(self):
        return self._run('capture', self.client.credit_card_capture if self.client else None)

    def tokenize(self):
        return self._run('tokenize', self.client.tokenize_payment_method if self.client else None, tokenize=True)

    def _run(self, operation, call, tokenize=False):
        if call is None:
            logger.error("[netbilling_%s] ❌ NETbilling client not configured", operation)
            return jsonify({
                'success': False,
                'error': 'NETbilling gateway is not configured',
            }), 503

        data = request.get_json(silent=True)
        try:
            order = OrderData.from_dict(data)
        except ValueError as e:
            logger.warning("[netbilling_%s] ❌ Invalid order payload: %s", operation, e)
            return jsonify({'success': False, 'error': str(e)}), 400

        logger.info("[netbilling_%s] Order %s, amount %s", operation, order.order_id, order.amount)

        try:
            response = call(order)
        except ValueError as e:
            # bad amount, missing capture details
            return jsonify({'success': False, 'error': str(e), 'order_id': order.order_id}), 400
        except NetbillingError as e:
            # timeouts and connection failures keep their 504/503, gateway rejections become 502
            status = e.status_code if e.status_code in (503, 504) else 502
            return jsonify({
                'success': False,
                'error': str(e),
                'gateway_status': e.status_code,
                'order_id': order.order_id,
            }), status

        result = response.to_dict()
        result['order_id'] = order.order_id
        result['success'] = response.transaction_approved()
        result['transaction_url'] = self.client.get_transaction_url(response.transaction_id)

        if tokenize and response.transaction_approved() and response.transaction_id:
            token = response.payment_token()
            result['payment_token'] = {
                'token_id': token.token_id,
                'default': token.is_default,
                'type': token.data['type'],
                'last_four': token.data['last_four'],
                'exp_month': token.data.get('exp_month'),
                'exp_year': token.data.get('exp_year'),
            }

        return jsonify(result), 200


def get_controller():
    return NetbillingController(current_app.config.get('NETBILLING_CLIENT'))
