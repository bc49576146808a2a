"""
Flask blueprints for organizing routes by domain.
"""
from blueprints.api_v1 import api_v1_bp


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    app.register_blueprint(api_v1_bp)
