"""
Flask extensions instantiated without app binding.

These are initialized later in create_app() to support the application factory pattern.
"""
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Rate Limiter (will be configured with app)
limiter = Limiter(key_func=get_remote_address)
