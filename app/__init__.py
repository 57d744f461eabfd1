"""Application package for Shelfkeep."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import Flask
from flask_talisman import Talisman

from app.cli import register_cli
from app.config import Config
from app.db import get_db
from app.extensions import csrf, limiter, login_manager
from app.repositories import ApiTokenRepository, PermissionRepository, UserRepository
from app.routes import (
    create_api_blueprint,
    create_api_tokens_blueprint,
    create_auth_blueprint,
    create_health_blueprint,
)
from app.services import ApiTokenService, AuthService, PermissionService

VERSION = "0.1.0"


def _configure_logging(level: str) -> logging.Logger:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    return logging.getLogger('app')


def _configure_security_headers(app: Flask, logger: logging.Logger) -> None:
    # Only enforce HTTPS if explicitly enabled (for reverse proxy setups)
    if app.config.get('FORCE_HTTPS'):
        Talisman(
            app,
            force_https=True,
            strict_transport_security=True,
            content_security_policy={'default-src': "'self'"},
        )
        logger.info('HTTPS enforcement enabled')
        return

    @app.after_request
    def set_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response


def create_app(
    config_class: type[Config] = Config,
    config_overrides: Optional[Mapping[str, Any]] = None,
) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    if config_overrides:
        app.config.update(config_overrides)

    logger = _configure_logging(app.config['LOG_LEVEL'])

    if not app.config.get('SECRET_KEY'):
        logger.warning("SECRET_KEY not set! Using insecure default. Generate a secure key with: python -c 'import secrets; print(secrets.token_hex(32))'")
        app.config['SECRET_KEY'] = 'dev-secret-key-change-in-production'

    csrf.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'Please log in to access this page.'
    limiter.init_app(app)
    _configure_security_headers(app, logger)

    database_path = app.config['DATABASE_PATH']

    def db_factory():
        return get_db(database_path)

    user_repo = UserRepository(db_factory)
    token_repo = ApiTokenRepository(db_factory)
    permission_repo = PermissionRepository(db_factory)
    permission_service = PermissionService(permission_repo)
    auth_service = AuthService(user_repo, token_repo, permission_service)
    api_token_service = ApiTokenService(
        token_repo,
        user_repo,
        permission_service,
        max_attempts=app.config['API_TOKEN_MAX_ISSUE_ATTEMPTS'],
        hash_rounds=app.config['BCRYPT_ROUNDS'],
        default_expiry_years=app.config['API_TOKEN_DEFAULT_EXPIRY_YEARS'],
    )

    @login_manager.user_loader
    def load_user(user_id):
        """Load user by ID for Flask-Login."""
        try:
            return auth_service.get_user_by_id(int(user_id))
        except Exception as e:
            logger.error(f"Error loading user: {e}")
            return None

    app.register_blueprint(create_auth_blueprint(
        user_repo=user_repo,
        limiter=limiter,
        csrf=csrf,
        logger=logger,
    ))
    app.register_blueprint(create_api_tokens_blueprint(
        api_token_service=api_token_service,
        logger=logger,
    ))
    app.register_blueprint(create_api_blueprint(
        auth_service=auth_service,
        csrf=csrf,
        logger=logger,
    ))
    app.register_blueprint(create_health_blueprint(db_factory, VERSION))

    register_cli(app, user_repo=user_repo, permission_repo=permission_repo)

    app.extensions['shelfkeep'] = {
        'api_token_service': api_token_service,
        'auth_service': auth_service,
        'db_factory': db_factory,
    }

    return app
