# -*- coding: utf-8 -*-
"""
Agent Directory API Routes (CRUD and status toggling).
Route handlers own the transaction: commit on success, roll back on any error.
"""
from flask import Blueprint, jsonify, current_app, abort

from ncportal.extensions import db
from ncportal.services.agent_service import AgentService
from ncportal.utils.exceptions import ServiceError
from ncportal.utils.request_helpers import load_json, commit_or_abort
from ncportal.api.schemas.agent_schemas import (
    AgentSchema, AgentCreateSchema, AgentUpdateSchema, AgentStatusSchema
)


# Create Blueprint
agents_bp = Blueprint('agents_api', __name__)

# Instantiate schemas
agent_schema = AgentSchema()
agents_schema = AgentSchema(many=True)
agent_create_schema = AgentCreateSchema()
agent_update_schema = AgentUpdateSchema()
agent_status_schema = AgentStatusSchema()


@agents_bp.route('', methods=['GET'])
def list_agents():
    """List all agents (password hashes are never serialized)."""
    try:
        agents = AgentService.list_agents()
    except Exception as e:
        current_app.logger.exception(f"Unexpected error fetching agents: {e}")
        abort(500, description="Failed to fetch agents")
    return jsonify(agents_schema.dump(agents)), 200


@agents_bp.route('', methods=['POST'])
def create_agent():
    """Create a new agent."""
    data = load_json(agent_create_schema)
    try:
        new_agent = AgentService.create_agent(data)
    except ServiceError as e:
        db.session.rollback()
        current_app.logger.warning(f"Create agent rejected ({e.status_code}): {e}")
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Unexpected error creating agent: {e}")
        abort(500, description="Failed to create agent")

    commit_or_abort("create agent")
    current_app.logger.info(f"Agent '{new_agent.id}' created.")
    return jsonify(agent_schema.dump(new_agent)), 201


@agents_bp.route('/<agent_id>', methods=['PUT'])
def update_agent(agent_id):
    """Update an agent's name, email, phone and optionally password."""
    data = load_json(agent_update_schema)
    try:
        updated_agent = AgentService.update_agent(agent_id, data)
    except ServiceError as e:
        db.session.rollback()
        current_app.logger.warning(f"Update agent '{agent_id}' rejected ({e.status_code}): {e}")
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Unexpected error updating agent '{agent_id}': {e}")
        abort(500, description="Failed to update agent")

    commit_or_abort("update agent")
    return jsonify(agent_schema.dump(updated_agent)), 200


@agents_bp.route('/<agent_id>', methods=['DELETE'])
def delete_agent(agent_id):
    """Delete an agent. Unknown IDs succeed as well."""
    try:
        AgentService.delete_agent(agent_id)
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Unexpected error deleting agent '{agent_id}': {e}")
        abort(500, description="Failed to delete agent")

    commit_or_abort("delete agent")
    return jsonify({"message": "Agent deleted successfully"}), 200


@agents_bp.route('/<agent_id>/status', methods=['PATCH'])
def set_agent_status(agent_id):
    """Activate or deactivate an agent."""
    data = load_json(agent_status_schema)
    try:
        updated_agent = AgentService.set_status(agent_id, data['status'])
    except ServiceError as e:
        db.session.rollback()
        current_app.logger.warning(f"Status change for agent '{agent_id}' rejected ({e.status_code}): {e}")
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Unexpected error updating status of agent '{agent_id}': {e}")
        abort(500, description="Failed to update agent status")

    commit_or_abort("update agent status")
    return jsonify(agent_schema.dump(updated_agent)), 200
