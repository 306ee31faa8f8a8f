# ncportal/services/auth_service.py
# -*- coding: utf-8 -*-
"""
Auth Service
Handles agent and admin authentication logic.
"""
import hmac
from dataclasses import dataclass
from datetime import datetime, timezone

from flask import current_app
from flask_login import UserMixin

from ncportal.database.models.agent import AgentModel
from ncportal.extensions import db, bcrypt
from ncportal.utils.exceptions import AuthError

ADMIN_ID = 'ADMIN'
ADMIN_NAME = 'Administrator'


@dataclass(eq=False)
class AdminIdentity(UserMixin):
    """The single configured administrator. Never persisted."""
    id: str
    name: str
    role: str
    email: str

    @property
    def status(self):
        return 'active'

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'role': self.role, 'email': self.email}


def _same(a, b) -> bool:
    return hmac.compare_digest(str(a).encode('utf-8'), str(b).encode('utf-8'))


class AuthService:

    @staticmethod
    def authenticate_agent(agent_id, password) -> AgentModel:
        """
        Authenticates an active agent by ID and password and stamps last_login.

        Raises:
            AuthError: If no active agent has that ID, or the password does not match.
        """
        agent = db.session.query(AgentModel).filter_by(id=agent_id, status='active').one_or_none()

        if not agent:
            current_app.logger.warning(f"Login failed: no active agent with ID '{agent_id}'.")
            raise AuthError("Invalid credentials or inactive account")

        if not agent.check_password(password):
            current_app.logger.warning(f"Login failed: wrong password for agent '{agent_id}'.")
            raise AuthError("Invalid credentials")

        agent.last_login = datetime.now(timezone.utc)
        db.session.flush()
        current_app.logger.info(f"Agent '{agent_id}' authenticated successfully.")
        return agent

    @staticmethod
    def admin_identity() -> AdminIdentity:
        return AdminIdentity(
            id=ADMIN_ID,
            name=ADMIN_NAME,
            role='admin',
            email=current_app.config.get('ADMIN_EMAIL'),
        )

    @staticmethod
    def authenticate_admin(username, password) -> AdminIdentity:
        """
        Checks the single admin credential pair injected through configuration.
        ADMIN_PASSWORD_HASH (bcrypt) takes precedence over a plaintext ADMIN_PASSWORD.

        Raises:
            AuthError: On any mismatch, or when no admin credential is configured.
        """
        config = current_app.config
        expected_username = config.get('ADMIN_USERNAME')
        password_hash = config.get('ADMIN_PASSWORD_HASH')
        plain_password = config.get('ADMIN_PASSWORD')

        if not expected_username or not (password_hash or plain_password):
            current_app.logger.error("Admin login attempted but no admin credential is configured.")
            raise AuthError("Invalid admin credentials")

        username_ok = _same(username or '', expected_username)
        if password_hash:
            password_ok = bool(password) and bcrypt.check_password_hash(password_hash, password)
        else:
            password_ok = _same(password or '', plain_password)

        if not (username_ok and password_ok):
            current_app.logger.warning("Admin login failed: invalid credentials.")
            raise AuthError("Invalid admin credentials")

        current_app.logger.info("Admin authenticated successfully.")
        return AuthService.admin_identity()
