# -*- coding: utf-8 -*-
"""
Schemas for Agent and Auth API requests and responses.
Rule checks (lengths, patterns) live in the agent service so that every
violation is reported together; these schemas only shape the payloads.
"""
from marshmallow import Schema, fields, EXCLUDE


# Agent output schema: never includes the password or its hash
class AgentSchema(Schema):
    id = fields.Str(dump_only=True)
    name = fields.Str()
    email = fields.Str()
    phone = fields.Str()
    role = fields.Str()
    status = fields.Str()
    created_at = fields.DateTime(dump_only=True, data_key="createdAt")
    last_login = fields.DateTime(dump_only=True, allow_none=True, data_key="lastLogin")


class AgentCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    agentId = fields.Str(allow_none=True, load_default=None)
    name = fields.Str(allow_none=True, load_default=None)
    email = fields.Str(allow_none=True, load_default=None)
    phone = fields.Str(allow_none=True, load_default=None)
    password = fields.Str(allow_none=True, load_default=None, load_only=True)


class AgentUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(allow_none=True, load_default=None)
    email = fields.Str(allow_none=True, load_default=None)
    phone = fields.Str(allow_none=True, load_default=None)
    password = fields.Str(allow_none=True, load_default=None, load_only=True)


class AgentStatusSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    status = fields.Str(allow_none=True, load_default=None)


# --- Auth ---

class LoginSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    agentId = fields.Str(required=True)
    password = fields.Str(required=True, load_only=True)


class AdminLoginSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    username = fields.Str(required=True)
    password = fields.Str(required=True, load_only=True)


class AdminIdentitySchema(Schema):
    id = fields.Str()
    name = fields.Str()
    role = fields.Str()
    email = fields.Str(allow_none=True)
