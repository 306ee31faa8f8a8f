# ncportal/database/models/agent.py
# -*- coding: utf-8 -*-
"""Agent model representing call-center staff accounts."""

from datetime import datetime, timezone

from flask_login import UserMixin

from ncportal.extensions import db, bcrypt


def utcnow():
    return datetime.now(timezone.utc)


class AgentModel(UserMixin, db.Model):
    """
    Agent Model: a call-center account allowed to process number-change requests.
    Includes Flask-Login integration properties and password hashing.
    """
    __tablename__ = 'agents'

    id = db.Column(db.String(20), primary_key=True)  # e.g. 'AG001', immutable
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)  # stored lowercase
    phone = db.Column(db.String(10), nullable=False)
    password_hash = db.Column(db.String(128), nullable=False)
    role = db.Column(db.String(10), nullable=False, default='agent')
    status = db.Column(db.String(10), nullable=False, default='active', index=True)  # 'active', 'inactive'
    created_at = db.Column(db.TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    last_login = db.Column(db.TIMESTAMP(timezone=True), nullable=True)

    def __init__(self, id, name, email, phone, password, **kwargs):
        """Create instance and hash password."""
        self.id = id
        self.name = name
        self.email = email
        self.phone = phone
        self.role = 'agent'
        self.status = 'active'
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
        self.set_password(password)

    def set_password(self, password):
        """Set password hash from plaintext password."""
        if not password:
            raise ValueError("Password cannot be empty")
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        """Check plaintext password against the stored hash."""
        if not self.password_hash or not password:
            return False
        return bcrypt.check_password_hash(self.password_hash, password)

    # --- Flask-Login Properties ---
    @property
    def is_active(self):
        """Required by Flask-Login. Inactive agents cannot log in."""
        return self.status == 'active'

    def __repr__(self):
        return f"<Agent(id='{self.id}', email='{self.email}', status='{self.status}')>"
