"""
Health check route.

Endpoints:
- GET /api/v1/health - Backend reachability probe
"""
from flask import jsonify

from blueprints.api_v1 import api_v1_bp


@api_v1_bp.route('/health', methods=['GET'])
def api_health():
    """Lets clients check the backend is reachable without touching rates."""
    return jsonify({'status': 'ok'})
