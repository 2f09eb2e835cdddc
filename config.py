import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'a-very-secret-key'

    # Writes from a signed-in session need an X-CSRFToken header (GET /api/csrf-token)
    WTF_CSRF_ENABLED = True
    WTF_CSRF_CHECK_DEFAULT = False
    WTF_CSRF_TIME_LIMIT = None

    SESSION_COOKIE_NAME = 'school_session'
    PERMANENT_SESSION_LIFETIME = int(os.environ.get('PERMANENT_SESSION_LIFETIME', 86400))

    # Flask-Session keeps session data in an in-memory cachelib cache; entries
    # expire after PERMANENT_SESSION_LIFETIME and the cache prunes itself past
    # SESSION_CACHE_THRESHOLD entries
    SESSION_TYPE = 'cachelib'
    SESSION_PERMANENT = True
    SESSION_USE_SIGNER = False
    SESSION_KEY_PREFIX = 'session:'
    SESSION_CACHE_THRESHOLD = int(os.environ.get('SESSION_CACHE_THRESHOLD', 500))

    # Populate a demo school on startup
    SEED_SAMPLE_DATA = os.environ.get('SEED_SAMPLE_DATA', 'False').lower() in ('true', '1', 'yes', 'on')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # Debug mode - only enable in development environment
    DEBUG = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')

    # Max request body size (1MB is plenty for JSON payloads)
    MAX_CONTENT_LENGTH = 1 * 1024 * 1024


class ProductionConfig(Config):
    """Production configuration with enhanced security."""
    DEBUG = False
    TESTING = False

    SESSION_COOKIE_SECURE = True  # Only send cookies over HTTPS
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False
    SEED_SAMPLE_DATA = os.environ.get('SEED_SAMPLE_DATA', 'True').lower() in ('true', '1', 'yes', 'on')
    LOG_LEVEL = 'DEBUG'


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = True
    TESTING = True
    WTF_CSRF_ENABLED = False
    SEED_SAMPLE_DATA = False
