# ncportal/utils/validators.py
# -*- coding: utf-8 -*-
"""Input validation helpers shared by the agent and notification services."""

import re

from ncportal.utils.exceptions import ValidationError

EMAIL_RE = re.compile(r'[^\s@]+@[^\s@]+\.[^\s@]+')
TEN_DIGITS_RE = re.compile(r'\d{10}', re.ASCII)
WHITESPACE_RE = re.compile(r'\s')

RESERVED_AGENT_IDS = frozenset({'ADMIN'})  # admin session identity
COUNTRY_PREFIX = '+91'
INVALID_PHONE_MESSAGE = "Invalid phone number format. Please enter a 10-digit number without +91 prefix"


def _text(value):
    return value if isinstance(value, str) else ''


def agent_data_errors(agent_data: dict) -> list[str]:
    """
    Check agent input against every rule and return all violations, in order.
    An empty list means the data is valid.
    """
    errors = []

    agent_id = _text(agent_data.get('agentId')).strip()
    if len(agent_id) < 2:
        errors.append('Agent ID must be at least 2 characters long')
    elif agent_id.upper() in RESERVED_AGENT_IDS:
        errors.append('Agent ID ADMIN is reserved')

    if len(_text(agent_data.get('name')).strip()) < 2:
        errors.append('Name must be at least 2 characters long')

    if not EMAIL_RE.fullmatch(_text(agent_data.get('email'))):
        errors.append('Valid email is required')

    if not TEN_DIGITS_RE.fullmatch(_text(agent_data.get('phone'))):
        errors.append('Phone number must be a 10-digit number')

    if len(_text(agent_data.get('password'))) < 6:
        errors.append('Password must be at least 6 characters long')

    return errors


def normalize_phone(raw: str) -> str:
    """
    Strip whitespace and a leading +91 country code, then require exactly 10 digits.

    Raises:
        ValidationError: If the result is not a 10-digit number.
    """
    phone = WHITESPACE_RE.sub('', _text(raw))
    if phone.startswith(COUNTRY_PREFIX):
        phone = phone[len(COUNTRY_PREFIX):]
    if not TEN_DIGITS_RE.fullmatch(phone):
        raise ValidationError(INVALID_PHONE_MESSAGE)
    return phone
