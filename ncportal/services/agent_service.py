# ncportal/services/agent_service.py
# -*- coding: utf-8 -*-
"""
Agent Service
Handles business logic for the agent directory (CRUD, status toggling).
Service methods modify the session but DO NOT COMMIT.
"""
import re

from sqlalchemy.exc import IntegrityError
from flask import current_app

from ncportal.database.models.agent import AgentModel
from ncportal.extensions import db
from ncportal.utils.exceptions import (
    NotFoundError,
    ConflictError,
    ServiceError,
    ValidationError,
)
from ncportal.utils.validators import agent_data_errors

AGENT_ID_PREFIX = 'AG'
AGENT_ID_RE = re.compile(r'AG(\d+)', re.ASCII)
AGENT_STATUSES = ('active', 'inactive')

# Satisfies the password rule when an update leaves the password unchanged
_UNCHANGED_PASSWORD_PLACEHOLDER = 'unchanged'

DEFAULT_AGENTS = (
    {'id': 'AG001', 'name': 'John Doe', 'email': 'john.doe@khatabook.com', 'phone': '9876543210'},
    {'id': 'AG002', 'name': 'Jane Smith', 'email': 'jane.smith@khatabook.com', 'phone': '9876543211'},
)


def next_agent_id(existing_ids) -> str:
    """
    Next free AG### id: highest numeric suffix among `existing_ids` plus one.
    Ids without a numeric AG suffix count as 0, so an empty directory starts at AG001.
    """
    highest = 0
    for agent_id in existing_ids:
        match = AGENT_ID_RE.fullmatch(agent_id or '')
        if match:
            highest = max(highest, int(match.group(1)))
    return f"{AGENT_ID_PREFIX}{highest + 1:03d}"


class AgentService:

    @staticmethod
    def list_agents() -> list[AgentModel]:
        """Fetches every agent, ordered by ID."""
        return db.session.query(AgentModel).order_by(AgentModel.id).all()

    @staticmethod
    def get_agent(agent_id: str) -> AgentModel | None:
        """Fetches an agent by ID using the current session."""
        return db.session.get(AgentModel, agent_id)

    @staticmethod
    def create_agent(data: dict) -> AgentModel:
        """
        Adds a new agent to the session (DOES NOT COMMIT).

        Args:
            data (dict): agentId (optional), name, email, phone, password.

        Returns:
            AgentModel: The newly created agent, flushed to the session.

        Raises:
            ValidationError: Listing every violated rule.
            ConflictError: If the email or agent ID already exists.
            ServiceError: If an unexpected error occurs during flush.
        """
        data = dict(data)
        agent_id = (data.get('agentId') or '').strip()
        if not agent_id:
            existing_ids = [row.id for row in db.session.query(AgentModel.id)]
            agent_id = next_agent_id(existing_ids)
            current_app.logger.debug(f"No agent ID supplied, generated '{agent_id}'.")
        data['agentId'] = agent_id

        errors = agent_data_errors(data)
        if errors:
            raise ValidationError(errors=errors)

        email = data['email'].lower()

        # Best-effort uniqueness checks; the unique index settles races at flush
        if db.session.query(AgentModel.id).filter_by(email=email).first():
            raise ConflictError("Email already exists")
        if db.session.get(AgentModel, agent_id):
            raise ConflictError("Agent ID already exists")

        new_agent = AgentModel(
            id=agent_id,
            name=data['name'].strip(),
            email=email,
            phone=data['phone'],
            password=data['password'],  # __init__ hashes it
        )
        try:
            db.session.add(new_agent)
            db.session.flush()
            current_app.logger.info(f"Agent '{agent_id}' added to session.")
            return new_agent
        except IntegrityError as e:
            db.session.rollback()
            current_app.logger.warning(f"Integrity error creating agent '{agent_id}' (concurrent insert?): {e.orig}")
            raise ConflictError("Agent ID or email already exists")
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Unexpected error adding agent '{agent_id}' to session: {e}", exc_info=True)
            raise ServiceError(f"Failed to add agent to session: {e}")

    @staticmethod
    def update_agent(agent_id: str, data: dict) -> AgentModel:
        """
        Updates name, email, phone and (optionally) password in the session (DOES NOT COMMIT).

        Raises:
            NotFoundError: If the agent does not exist.
            ValidationError: Listing every violated rule.
            ConflictError: If the new email belongs to another agent.
            ServiceError: If an unexpected error occurs during flush.
        """
        agent = db.session.get(AgentModel, agent_id)
        if not agent:
            raise NotFoundError("Agent not found")

        new_password = data.get('password')
        validation_data = dict(data, agentId=agent_id)
        if not new_password:
            validation_data['password'] = _UNCHANGED_PASSWORD_PLACEHOLDER
        errors = agent_data_errors(validation_data)
        if errors:
            raise ValidationError(errors=errors)

        email = data['email'].lower()
        clash = db.session.query(AgentModel.id).filter(
            AgentModel.id != agent_id, AgentModel.email == email
        ).first()
        if clash:
            raise ConflictError("Email already exists")

        try:
            agent.name = data['name'].strip()
            agent.email = email
            agent.phone = data['phone']
            if new_password:
                agent.set_password(new_password)
            db.session.flush()
            current_app.logger.info(f"Agent '{agent_id}' updated in session (password changed: {bool(new_password)}).")
            return agent
        except IntegrityError as e:
            db.session.rollback()
            current_app.logger.warning(f"Integrity error updating agent '{agent_id}': {e.orig}")
            raise ConflictError("Email already exists")
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Unexpected error updating agent '{agent_id}': {e}", exc_info=True)
            raise ServiceError(f"Failed to update agent in session: {e}")

    @staticmethod
    def delete_agent(agent_id: str) -> None:
        """
        Deletes the agent if present (DOES NOT COMMIT).
        Deleting an unknown ID is not an error.
        """
        deleted = db.session.query(AgentModel).filter_by(id=agent_id).delete(synchronize_session='fetch')
        current_app.logger.info(f"Delete agent '{agent_id}': {deleted} row(s) staged for deletion.")

    @staticmethod
    def set_status(agent_id: str, status: str) -> AgentModel:
        """
        Sets an agent's status to 'active' or 'inactive' (DOES NOT COMMIT).

        Raises:
            ValidationError: If the status is not recognised.
            NotFoundError: If no agent row was updated.
        """
        if status not in AGENT_STATUSES:
            raise ValidationError("Invalid status")

        updated = db.session.query(AgentModel).filter_by(id=agent_id).update(
            {'status': status}, synchronize_session='fetch'
        )
        if not updated:
            raise NotFoundError("Agent not found")

        agent = db.session.get(AgentModel, agent_id)
        current_app.logger.info(f"Agent '{agent_id}' status set to '{status}' in session.")
        return agent

    @staticmethod
    def seed_defaults(password: str) -> int:
        """
        Adds the sample agents when the directory is empty (DOES NOT COMMIT).
        Returns the number of agents added.
        """
        if db.session.query(AgentModel.id).first():
            return 0
        for sample in DEFAULT_AGENTS:
            db.session.add(AgentModel(password=password, **sample))
        db.session.flush()
        current_app.logger.info(f"Seeded {len(DEFAULT_AGENTS)} default agents.")
        return len(DEFAULT_AGENTS)
