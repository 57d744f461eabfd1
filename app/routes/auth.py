from __future__ import annotations

from datetime import datetime

import bcrypt
from flask import Blueprint, jsonify, redirect, request, url_for
from flask_login import current_user, login_required, login_user, logout_user

from app.utils.validators import sanitize_string


def create_auth_blueprint(*, user_repo, limiter, csrf, logger):
    """Create authentication routes with injected dependencies."""
    blueprint = Blueprint('auth', __name__)

    def _check_credentials():
        username = sanitize_string(request.form.get('username', ''), max_length=50).strip()
        password = request.form.get('password', '')
        if not username or not password:
            return None, 'Username and password are required'

        user_data = user_repo.get_for_login(username)
        if user_data and bcrypt.checkpw(password.encode('utf-8'), user_data[2].encode('utf-8')):
            user_repo.update_last_login(user_data[0], datetime.now())
            return user_repo.get_by_id(user_data[0]), None

        logger.warning(f"Failed login attempt for {username}")
        return None, 'Invalid username or password'

    def _landing_url() -> str:
        return url_for('api_tokens.list_tokens', user_id=current_user.id)

    @blueprint.route('/login', methods=['GET', 'POST'])
    @limiter.limit('10 per minute')
    def login():
        """Form login; redirects on success."""
        if current_user.is_authenticated:
            return redirect(_landing_url())

        if request.method == 'GET':
            return jsonify({'message': 'Please log in to access this page.'})

        try:
            user, error = _check_credentials()
        except Exception as e:
            logger.error(f"Login error: {e}")
            return jsonify({'error': 'An error occurred during login'}), 500

        if user is None:
            return jsonify({'error': error}), 401 if error.startswith('Invalid') else 400

        login_user(user)
        logger.info(f"User {user.username} logged in")
        next_page = request.args.get('next')
        # Only follow local redirects
        if next_page and next_page.startswith('/') and not next_page.startswith('//'):
            return redirect(next_page)
        return redirect(_landing_url())

    @blueprint.route('/api/login', methods=['POST'])
    @limiter.limit('10 per minute')
    def api_login():
        """API login for SPA clients."""
        if current_user.is_authenticated:
            return jsonify({'success': True, 'username': current_user.username})

        try:
            user, error = _check_credentials()
        except Exception as e:
            logger.error(f"API login error: {e}")
            return jsonify({'error': 'Login failed'}), 500

        if user is None:
            return jsonify({'error': error}), 401 if error.startswith('Invalid') else 400

        login_user(user)
        logger.info(f"User {user.username} logged in via API")
        return jsonify({'success': True, 'username': user.username})

    csrf.exempt(login)
    csrf.exempt(api_login)

    @blueprint.route('/logout')
    @login_required
    def logout():
        """Logout."""
        username = current_user.username
        logout_user()
        logger.info(f"User {username} logged out")
        return redirect(url_for('auth.login'))

    @blueprint.route('/api/logout', methods=['POST'])
    def api_logout():
        """API logout for SPA clients."""
        if not current_user.is_authenticated:
            return jsonify({'success': True})
        username = current_user.username
        logout_user()
        logger.info(f"User {username} logged out via API")
        return jsonify({'success': True})

    csrf.exempt(api_logout)

    return blueprint
