import os
import logging
from datetime import date

from flask import Flask, jsonify
from flask.json.provider import DefaultJSONProvider
from flask_login import current_user

from config import ProductionConfig, DevelopmentConfig, TestingConfig

# Import extensions to avoid circular imports
from extensions import login_manager, csrf, server_session, storage
from error_handler import error_response, register_error_handlers
from sample_data import seed_sample_data


class IsoDateJSONProvider(DefaultJSONProvider):
    """Serialize dates and datetimes as ISO-8601 rather than HTTP dates."""

    @staticmethod
    def default(o):
        if isinstance(o, date):
            return o.isoformat()
        return DefaultJSONProvider.default(o)


def configure_logging(app):
    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))


def create_app(config_class=None):
    """
    Factory function to create the Flask application.
    Automatically selects configuration based on environment.
    """
    if config_class is None:
        # Auto-detect environment and select appropriate config
        env = os.environ.get('FLASK_ENV', 'production').lower()
        if env == 'development':
            config_class = DevelopmentConfig
        elif env == 'testing':
            config_class = TestingConfig
        else:
            config_class = ProductionConfig  # Default to production for security

    app = Flask(__name__)
    app.config.from_object(config_class)
    app.json = IsoDateJSONProvider(app)
    configure_logging(app)

    # Storage hands its cache to Flask-Session before the interface is built
    storage.init_app(app)
    server_session.init_app(app)
    login_manager.init_app(app)
    csrf.init_app(app)

    # User loader function for Flask-Login
    @login_manager.user_loader
    def load_user(user_id):
        return storage.get_user(int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return error_response('Authentication required', 401)

    @app.before_request
    def protect_session_writes():
        # Cookie-authenticated writes must carry a CSRF token
        if app.config.get('WTF_CSRF_ENABLED') and current_user.is_authenticated:
            csrf.protect()

    register_error_handlers(app)

    from api_routes import api_blueprint
    app.register_blueprint(api_blueprint, url_prefix='/api')

    @app.route('/')
    def home():
        return jsonify({'name': 'School Management API', 'status': 'ok'})

    if app.config.get('SEED_SAMPLE_DATA'):
        seed_sample_data(storage)

    app.logger.info(f"Application started with {config_class.__name__}")
    return app
