from __future__ import annotations

from flask import Blueprint, jsonify, redirect, request, session, url_for
from flask_login import current_user, login_required

from app.services import SecretSlotStore, ServiceError


def create_api_tokens_blueprint(*, api_token_service, logger):
    """Create user API token routes with injected dependencies."""
    blueprint = Blueprint('api_tokens', __name__)

    def _payload():
        if request.is_json:
            data = request.get_json(silent=True)
            return data if isinstance(data, dict) else {}
        return request.form

    def _token_url(user_id: int, token_id: int) -> str:
        return url_for('api_tokens.view_token', user_id=user_id, token_id=token_id)

    @blueprint.errorhandler(ServiceError)
    def handle_service_error(error: ServiceError):
        logger.info(f"API token request rejected ({error.status_code}): {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @blueprint.route('/users/<int:user_id>/api-tokens', methods=['GET'])
    @login_required
    def list_tokens(user_id: int):
        """List a user's API tokens (secrets are never included)."""
        tokens = api_token_service.list_for_user(current_user, user_id)
        return jsonify([token.to_dict() for token in tokens])

    @blueprint.route('/users/<int:user_id>/api-tokens/create', methods=['GET'])
    @login_required
    def create_token_form(user_id: int):
        """Context for the create-token form."""
        user = api_token_service.get_owner(current_user, user_id)
        return jsonify({
            'user': user.to_dict(),
            'default_expires_at': api_token_service.default_expiry(),
        })

    @blueprint.route('/users/<int:user_id>/api-tokens', methods=['POST'])
    @login_required
    def store_token(user_id: int):
        """Issue a new API token and redirect to its detail view."""
        data = _payload()
        try:
            issued = api_token_service.issue(
                current_user,
                user_id,
                data.get('name'),
                data.get('expires_at'),
                slots=SecretSlotStore(session),
            )
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"Failed to create API token: {e}")
            return jsonify({'error': 'Failed to create token'}), 500

        return redirect(_token_url(user_id, issued.token.id))

    @blueprint.route('/users/<int:user_id>/api-tokens/<int:token_id>', methods=['GET'])
    @login_required
    def view_token(user_id: int, token_id: int):
        """Show a token; the plaintext secret is included once after issuance."""
        token, secret = api_token_service.retrieve(
            current_user,
            user_id,
            token_id,
            slots=SecretSlotStore(session),
        )
        body = token.to_dict()
        body['secret'] = secret
        return jsonify(body)

    @blueprint.route('/users/<int:user_id>/api-tokens/<int:token_id>', methods=['PUT', 'POST'])
    @login_required
    def update_token(user_id: int, token_id: int):
        """Update the name and expiry of a token."""
        data = _payload()
        try:
            token = api_token_service.update(
                current_user,
                user_id,
                token_id,
                data.get('name'),
                data.get('expires_at'),
            )
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"Failed to update API token {token_id}: {e}")
            return jsonify({'error': 'Failed to update token'}), 500

        return redirect(_token_url(user_id, token.id))

    @blueprint.route('/users/<int:user_id>/api-tokens/<int:token_id>/delete', methods=['GET'])
    @login_required
    def confirm_delete_token(user_id: int, token_id: int):
        """Context for the delete confirmation."""
        token, _ = api_token_service.retrieve(current_user, user_id, token_id)
        user = api_token_service.get_owner(current_user, user_id)
        return jsonify({'user': user.to_dict(), 'token': token.to_dict()})

    @blueprint.route('/users/<int:user_id>/api-tokens/<int:token_id>/delete', methods=['DELETE', 'POST'])
    @login_required
    def destroy_token(user_id: int, token_id: int):
        """Delete a token permanently."""
        try:
            api_token_service.delete(current_user, user_id, token_id)
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"Failed to delete API token {token_id}: {e}")
            return jsonify({'error': 'Failed to delete token'}), 500

        return redirect(url_for('api_tokens.list_tokens', user_id=user_id))

    return blueprint
