# -*- coding: utf-8 -*-
"""
Authentication API Routes
Agent login, admin login, logout and session status.
"""
from flask import Blueprint, jsonify, current_app, abort
from flask_login import login_user, logout_user, login_required, current_user

from ncportal.extensions import db
from ncportal.services.auth_service import AuthService, AdminIdentity
from ncportal.utils.exceptions import AuthError
from ncportal.utils.request_helpers import load_json, commit_or_abort
from ncportal.api.schemas.agent_schemas import (
    AgentSchema, LoginSchema, AdminLoginSchema, AdminIdentitySchema
)

# Create Blueprint
auth_bp = Blueprint('auth_api', __name__)

# Instantiate schemas
login_request_schema = LoginSchema()
admin_login_request_schema = AdminLoginSchema()
agent_response_schema = AgentSchema()
admin_response_schema = AdminIdentitySchema()


def _identity_dump(identity):
    if isinstance(identity, AdminIdentity):
        return admin_response_schema.dump(identity)
    return agent_response_schema.dump(identity)


@auth_bp.route('/login', methods=['POST'])
def login():
    """Agent Login Endpoint."""
    data = load_json(login_request_schema)
    agent_id = data['agentId']

    try:
        agent = AuthService.authenticate_agent(agent_id, data['password'])
    except AuthError as e:
        db.session.rollback()
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Unexpected error during login for agent '{agent_id}': {e}")
        abort(500, description="Login failed")

    commit_or_abort("login")  # persists last_login
    login_user(agent)
    current_app.logger.info(f"Agent '{agent_id}' logged in successfully.")
    return jsonify(agent_response_schema.dump(agent)), 200


@auth_bp.route('/admin-login', methods=['POST'])
def admin_login():
    """Admin Login Endpoint."""
    data = load_json(admin_login_request_schema)

    try:
        admin = AuthService.authenticate_admin(data['username'], data['password'])
    except AuthError as e:
        return jsonify(e.to_dict()), e.status_code

    login_user(admin)
    current_app.logger.info("Admin logged in successfully.")
    return jsonify(admin_response_schema.dump(admin)), 200


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """Logout Endpoint."""
    identity_id = current_user.id
    logout_user()
    current_app.logger.info(f"'{identity_id}' logged out.")
    return jsonify({"message": "Logout successful."}), 200


@auth_bp.route('/status', methods=['GET'])
@login_required
def status():
    """Check Login Status Endpoint."""
    return jsonify({
        "message": "Logged in.",
        "logged_in": True,
        "user": _identity_dump(current_user._get_current_object()),
    }), 200
