# ncportal/extensions.py
# -*- coding: utf-8 -*-
"""
Flask extensions instances and configuration.
Central place to initialize extensions to avoid circular imports.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
import os

from ncportal.gateway import NotificationGateway

# Database ORM: agents and activity logs
db = SQLAlchemy()

# Database Migrations: Handles schema migrations using Alembic
# extensions.py lives in ncportal/, migrations/ sits next to it at the project root
migrations_dir = os.path.join(os.path.dirname(__file__), '..', 'migrations')

migrate = Migrate(directory=migrations_dir)

# Password Hashing: agent passwords and the optional admin password hash
bcrypt = Bcrypt()

# Session Management: remembers the logged-in agent (or admin) between requests
login_manager = LoginManager()

# Cross-origin access for the browser dashboard
cors = CORS()

# Outbound vendor calls (push / SMS / WhatsApp) and the proxy relay share this HTTP session holder
notification_gateway = NotificationGateway()

# --- Flask-Login Configuration ---

# API-only application: no login page to redirect to, unauthorized_handler answers 401.
login_manager.login_view = None


# The user loader tells Flask-Login how to rebuild the session identity
# from the ID stored in the session cookie.
@login_manager.user_loader
def load_user(user_id):
    """Load an agent (or the configured admin identity) by ID for Flask-Login."""
    # Lazy imports to avoid circular imports during initialization
    from ncportal.database.models.agent import AgentModel
    from ncportal.services.auth_service import AuthService, ADMIN_ID

    if user_id == ADMIN_ID:
        return AuthService.admin_identity()
    agent = db.session.get(AgentModel, user_id)
    # Deactivated agents lose their session on the next request
    if agent is None or not agent.is_active:
        return None
    return agent
