# tests/integration/api/test_agent_api.py
# -*- coding: utf-8 -*-
"""Integration tests for the agent directory endpoints (/api/agents)."""
import json

import pytest


def create_agent_via_api(client, **overrides):
    payload = {"agentId": "AG010", "name": "Kiran Das", "email": "kiran@example.com",
               "phone": "9876543210", "password": "kiran-pass"}
    payload.update(overrides)
    return client.post('/api/agents', json=payload)


def test_create_agent(client):
    """
    GIVEN an empty directory
    WHEN POST /api/agents with valid data
    THEN 201 and the stored agent (no password) is returned.
    """
    response = create_agent_via_api(client)

    assert response.status_code == 201
    data = json.loads(response.data)
    assert data['id'] == 'AG010'
    assert data['role'] == 'agent'
    assert data['status'] == 'active'
    assert data['createdAt'] is not None
    assert data['lastLogin'] is None
    assert 'password' not in data


def test_create_agent_generates_id(client):
    """
    GIVEN an empty directory
    WHEN POST /api/agents with a blank agentId
    THEN 201 and the first generated ID, AG001.
    """
    response = create_agent_via_api(client, agentId="")
    assert response.status_code == 201
    assert json.loads(response.data)['id'] == 'AG001'


def test_create_agent_validation_errors(client):
    """
    GIVEN a payload breaking two rules
    WHEN POST /api/agents
    THEN 400 listing both messages in field order.
    """
    response = create_agent_via_api(client, name="K", phone="+919876543210")
    assert response.status_code == 400
    assert json.loads(response.data) == {"errors": [
        'Name must be at least 2 characters long',
        'Phone number must be a 10-digit number',
    ]}


def test_create_agent_admin_id_is_reserved(client):
    """
    GIVEN the agent ID 'admin'
    WHEN POST /api/agents
    THEN 400 with the reserved-ID error and the directory stays empty.
    """
    response = create_agent_via_api(client, agentId="admin")
    assert response.status_code == 400
    assert json.loads(response.data) == {"errors": ["Agent ID ADMIN is reserved"]}
    assert json.loads(client.get('/api/agents').data) == []


@pytest.mark.parametrize("overrides, message", [
    ({"agentId": "AG011"}, "Email already exists"),
    ({"email": "other@example.com"}, "Agent ID already exists"),
])
def test_create_agent_conflicts(client, overrides, message):
    """
    GIVEN an existing agent
    WHEN another agent reuses its email or its ID
    THEN 400 with the matching conflict message.
    """
    assert create_agent_via_api(client).status_code == 201
    response = create_agent_via_api(client, **overrides)
    assert response.status_code == 400
    assert json.loads(response.data) == {"error": message}


def test_list_agents(client, agent):
    """
    GIVEN two stored agents
    WHEN GET /api/agents
    THEN both are returned ordered by ID and without passwords.
    """
    create_agent_via_api(client)
    response = client.get('/api/agents')
    assert response.status_code == 200
    data = json.loads(response.data)
    assert [a['id'] for a in data] == ['AG001', 'AG010']
    assert all('password' not in a for a in data)


def test_update_agent(client, agent):
    """
    GIVEN a stored agent
    WHEN PUT /api/agents/<id> without a password
    THEN the profile changes and the old password still logs in.
    """
    response = client.put('/api/agents/AG001', json={
        "name": "Priya S", "email": "priya.s@example.com", "phone": "9876500009"})
    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['name'] == 'Priya S'
    assert data['email'] == 'priya.s@example.com'

    # password untouched
    login = client.post('/api/auth/login', json={'agentId': 'AG001', 'password': agent['password']})
    assert login.status_code == 200


def test_update_agent_not_found(client):
    """
    GIVEN an unknown agent ID
    WHEN PUT /api/agents/<id>
    THEN a JSON 404.
    """
    response = client.put('/api/agents/AG404', json={
        "name": "Nobody", "email": "n@example.com", "phone": "9876500009"})
    assert response.status_code == 404
    assert json.loads(response.data) == {"error": "Agent not found"}


def test_delete_agent(client, agent):
    """
    GIVEN a stored agent
    WHEN it is deleted twice
    THEN both calls answer 200 and the directory is empty.
    """
    response = client.delete('/api/agents/AG001')
    assert response.status_code == 200
    assert json.loads(response.data) == {"message": "Agent deleted successfully"}
    assert json.loads(client.get('/api/agents').data) == []

    # unknown ID also succeeds
    assert client.delete('/api/agents/AG001').status_code == 200


def test_set_agent_status(client, agent):
    """
    GIVEN an active agent
    WHEN PATCH its status to inactive and back
    THEN each answer carries the new status.
    """
    response = client.patch('/api/agents/AG001/status', json={'status': 'inactive'})
    assert response.status_code == 200
    assert json.loads(response.data)['status'] == 'inactive'

    response = client.patch('/api/agents/AG001/status', json={'status': 'active'})
    assert json.loads(response.data)['status'] == 'active'


def test_set_agent_status_invalid(client, agent):
    """
    GIVEN an unsupported status, then an unknown agent
    WHEN PATCH /api/agents/<id>/status
    THEN 400 and 404 respectively.
    """
    response = client.patch('/api/agents/AG001/status', json={'status': 'paused'})
    assert response.status_code == 400
    assert json.loads(response.data) == {"error": "Invalid status"}

    response = client.patch('/api/agents/AG404/status', json={'status': 'active'})
    assert response.status_code == 404
