"""Config info routes for exposing runtime configuration needed by clients."""
from flask import Blueprint, current_app, jsonify

bp = Blueprint('config_info', __name__, url_prefix='/api/config')


@bp.route('/info', methods=['GET'])
def info():
    """Return minimal configuration info for client verification."""
    client = current_app.config.get('NETBILLING_CLIENT')
    if client is None:
        return jsonify({
            'configured': False,
            'service': 'NETbilling Gateway Backend'
        })

    settings = client.settings
    return jsonify({
        'configured': True,
        'environment': settings.environment,
        'endpoint': client.request_uri,
        'account_id': 'X' * len(settings.account_id),
        'site_tag': settings.site_tag,
        'service': 'NETbilling Gateway Backend'
    })
