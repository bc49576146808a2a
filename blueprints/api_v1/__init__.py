"""
API v1 Blueprint.

Provides the JSON endpoints consumed by the web and mobile clients.
"""
from flask import Blueprint

api_v1_bp = Blueprint('api_v1', __name__, url_prefix='/api/v1')

# Import routes to register them with the blueprint
from blueprints.api_v1 import currency  # noqa: F401, E402
from blueprints.api_v1 import health  # noqa: F401, E402
