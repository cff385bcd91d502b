"""Flask extensions."""
from flask_sqlalchemy import SQLAlchemy
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_jwt_extended import JWTManager

# SQLAlchemy instance
db = SQLAlchemy()

# Rate limiter - storage comes from RATELIMIT_STORAGE_URI (Redis outside tests)
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["2000 per day", "500 per hour"],
    strategy="fixed-window",
)

# JWT bearer tokens for API authentication
jwt = JWTManager()
