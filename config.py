"""
Configuration classes for Flask application.

Usage:
    from config import config
    app.config.from_object(config[config_name])
"""
import os


class Config:
    """Base configuration with defaults."""

    # Currency: all amounts are stored in this currency
    CURRENCY_BASE = os.environ.get('CURRENCY_BASE', 'PHP')

    # Exchange rate API. The keyed (v6) endpoint is used only when a key is set.
    EXCHANGE_RATE_API_KEY = os.environ.get('EXCHANGE_RATE_API_KEY')
    EXCHANGE_RATE_API_URL = os.environ.get(
        'EXCHANGE_RATE_API_URL',
        'https://api.exchangerate-api.com/v4/latest'
    )
    EXCHANGE_RATE_API_KEYED_URL = os.environ.get(
        'EXCHANGE_RATE_API_KEYED_URL',
        'https://v6.exchangerate-api.com/v6'
    )

    # Seconds
    CURRENCY_CACHE_TTL = int(os.environ.get('CURRENCY_CACHE_TTL', 3600))
    CURRENCY_REQUEST_TIMEOUT = float(os.environ.get('CURRENCY_REQUEST_TIMEOUT', 5))

    # Rate limiting (Flask-Limiter config keys)
    RATELIMIT_DEFAULT = "200 per day; 50 per hour"
    # Use Redis for persistent rate limiting if REDIS_URL is set, otherwise memory
    RATELIMIT_STORAGE_URI = os.environ.get('REDIS_URL', 'memory://')


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False

    # Content Security Policy (JSON API only)
    CSP_POLICY = "default-src 'none'; frame-ancestors 'none';"


class TestingConfig(Config):
    """Testing configuration."""

    TESTING = True

    # Never reach the real rate API from tests
    EXCHANGE_RATE_API_KEY = None
    EXCHANGE_RATE_API_URL = 'http://rates.invalid/v4/latest'

    # Disable rate limiting for tests
    RATELIMIT_ENABLED = False


# Configuration dictionary for easy access
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig,
}


def get_config_name():
    """Get configuration name from environment."""
    flask_env = os.environ.get('FLASK_ENV', 'development')
    if flask_env == 'production':
        return 'production'
    elif os.environ.get('TESTING'):
        return 'testing'
    return 'development'
