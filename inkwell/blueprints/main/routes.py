from datetime import datetime, timezone

from flask import jsonify

from inkwell.blueprints.main import main_bp


@main_bp.route('/health')
def health():
    """存活探针"""
    return jsonify({'status': 'OK', 'timestamp': datetime.now(timezone.utc).isoformat()})
