# File: vocabdrill_app/modules/auth/routes.py
from flask import current_app, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user

from vocabdrill_app.core.error_handlers import success_response
from vocabdrill_app.utils.validation import validate_payload
from . import auth_bp
from .decorators import admin_required
from .schemas import AdminUserCreate, AdminUserUpdate, ChangePasswordRequest, LoginRequest
from .services.auth_service import AuthService


@auth_bp.route('/user', methods=['POST'])
def login():
    """Log in by username, registering the account on first use."""
    from ..study.services.study_store import SqlStudyStore

    payload = validate_payload(LoginRequest, request.get_json(silent=True), 'Username is required')
    user, is_new = SqlStudyStore().login(payload.username, payload.password)
    login_user(user, remember=True)
    current_app.logger.info("User %s logged in (new=%s)", user.username, is_new)
    return jsonify(success_response(user=user.to_dict(), isNew=is_new))


@auth_bp.route('/user', methods=['GET'])
def check_user():
    username = (request.args.get('username') or '').strip()
    user = AuthService.get_by_username(username) if username else None
    return jsonify(success_response(
        exists=user is not None,
        hasPassword=bool(user and user.has_password),
    ))


@auth_bp.route('/user/me', methods=['GET'])
@login_required
def me():
    return jsonify(success_response(user=current_user.to_dict()))


@auth_bp.route('/user/password', methods=['POST'])
@login_required
def change_password():
    payload = validate_payload(ChangePasswordRequest, request.get_json(silent=True), 'New password is required')
    AuthService.change_password(current_user, payload.current_password, payload.new_password)
    return jsonify(success_response(message='Password updated'))


@auth_bp.route('/user/logout', methods=['POST'])
@login_required
def logout():
    current_app.logger.info("User %s logged out", current_user.username)
    logout_user()
    return jsonify(success_response())


# === Admin user management ===

@auth_bp.route('/admin/users', methods=['GET'])
@admin_required
def list_users():
    return jsonify(success_response(users=[u.to_dict() for u in AuthService.list_users()]))


@auth_bp.route('/admin/users', methods=['POST'])
@admin_required
def create_user():
    payload = validate_payload(AdminUserCreate, request.get_json(silent=True))
    user = AuthService.create_user(payload.username, payload.password, payload.is_admin)
    return jsonify(success_response(user=user.to_dict())), 201


@auth_bp.route('/admin/users/<int:user_id>', methods=['PUT'])
@admin_required
def update_user(user_id):
    payload = validate_payload(AdminUserUpdate, request.get_json(silent=True))
    user = AuthService.update_user(user_id, payload.username, payload.password, payload.is_admin)
    return jsonify(success_response(user=user.to_dict()))


@auth_bp.route('/admin/users/<int:user_id>', methods=['DELETE'])
@admin_required
def delete_user(user_id):
    AuthService.delete_user(user_id, acting_user_id=current_user.id)
    return jsonify(success_response(message='User deleted'))
