"""NETbilling payment routes."""
from flask import Blueprint

from controllers.netbilling_controller import get_controller

bp = Blueprint('netbilling', __name__, url_prefix='/api/netbilling')


@bp.route('/charge', methods=['POST'])
def charge():
    """Credit card sale."""
    return get_controller().charge()


@bp.route('/authorize', methods=['POST'])
def authorize():
    """Credit card authorization only."""
    return get_controller().authorize()


@bp.route('/capture', methods=['POST'])
def capture():
    """Capture a prior authorization."""
    return get_controller().capture()


@bp.route('/tokenize', methods=['POST'])
def tokenize():
    """Store a card or bank account via a $0 authorization."""
    return get_controller().tokenize()
