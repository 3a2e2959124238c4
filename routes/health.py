from flask import Blueprint, jsonify, current_app

bp = Blueprint('health', __name__, url_prefix='/api/health')


@bp.route('/live', methods=['GET'])
def live():
    return jsonify({'status': 'ok'}), 200


@bp.route('/ready', methods=['GET'])
def ready():
    client = current_app.config.get('NETBILLING_CLIENT')
    ready = client is not None
    return jsonify({'ready': ready}), (200 if ready else 503)
