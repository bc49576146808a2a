"""
Main Flask application for the shared budget currency service.
"""
import os
import logging
import click
from flask import Flask, current_app
from flask.cli import AppGroup

from extensions import limiter
from config import config, get_config_name
from blueprints import register_blueprints
from services.currency_service import CurrencyService
from services.conversion import UnsupportedCurrencyError
from utils import round_money

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(config_name=None, currency_service=None):
    """Create and configure the Flask app.

    Args:
        config_name (str, optional): Key into config; defaults to get_config_name()
        currency_service (CurrencyService, optional): Prebuilt service, otherwise
            one is built from the app config

    Returns:
        Flask: The configured app
    """
    app = Flask(__name__)

    # Load configuration from centralized config module
    app.config.from_object(config[config_name or get_config_name()])

    # Initialize extensions with app
    limiter.init_app(app)  # Reads RATELIMIT_* from app.config

    # One service per process, shared by all requests
    if currency_service is None:
        currency_service = CurrencyService.from_config(app.config)
    app.extensions['currency_service'] = currency_service
    logger.info(f"Currency service ready (base currency {currency_service.base_currency})")

    register_blueprints(app)
    register_security_middleware(app)
    app.cli.add_command(rates_cli)

    return app


# ============================================================================
# Security Middleware
# ============================================================================

def register_security_middleware(app):
    """Attach security headers to every response."""

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses."""
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'

        csp_policy = app.config.get('CSP_POLICY')
        if csp_policy:
            response.headers['Content-Security-Policy'] = csp_policy

        # Strict Transport Security (HTTPS only in production)
        if not app.debug and not app.testing:
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        return response


# ============================================================================
# CLI
# ============================================================================

rates_cli = AppGroup('rates', help='Inspect and refresh exchange rates.')


def _print_resolution(service, resolution):
    snapshot, status = resolution
    print(f"Base currency: {service.base_currency}")
    print(f"Status: {status} (source date {snapshot.source_date})")
    for code in sorted(snapshot.rates):
        print(f"  {code}: {snapshot.rates[code]}")


@rates_cli.command('show')
def show_rates_command():
    """Show the rates conversions would use right now."""
    service = current_app.extensions['currency_service']
    _print_resolution(service, service.resolve_rates())


@rates_cli.command('refresh')
def refresh_rates_command():
    """Fetch live rates, bypassing the cache.

    Example:
        flask rates refresh
    """
    service = current_app.extensions['currency_service']
    resolution = service.refresh_rates()
    if resolution.status != 'live':
        print(f"Live fetch failed, serving {resolution.status} rates")
    _print_resolution(service, resolution)


@rates_cli.command('convert')
@click.argument('amount', type=float)
@click.argument('from_currency')
@click.argument('to_currency')
def convert_command(amount, from_currency, to_currency):
    """Convert AMOUNT from FROM_CURRENCY to TO_CURRENCY.

    Example:
        flask rates convert 100 USD PHP
    """
    service = current_app.extensions['currency_service']
    try:
        converted = service.convert(amount, from_currency, to_currency)
    except UnsupportedCurrencyError as e:
        raise click.ClickException(str(e))

    print(f"{amount} {from_currency.upper()} = {round_money(converted, 2)} {to_currency.upper()}")


if __name__ == '__main__':
    app = create_app()

    # Get port from environment variable (Render provides this)
    # Default to 5001 for local development (avoids macOS AirPlay Receiver conflict)
    port = int(os.environ.get('PORT', 5001))

    # Debug mode is set by config (True for development, False for production)
    app.run(debug=app.debug, host='0.0.0.0', port=port)
