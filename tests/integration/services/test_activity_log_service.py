# tests/integration/services/test_activity_log_service.py
from datetime import date, datetime, timezone
from types import SimpleNamespace

import pytest

from ncportal.extensions import db
from ncportal.services.activity_log_service import ActivityLogService
from ncportal.services.auth_service import AuthService
from ncportal.utils.exceptions import ValidationError


def _entry(**overrides):
    entry = {"channel": "sms", "message_type": "OTP", "status": "success"}
    entry.update(overrides)
    return entry


def test_append_fills_defaults(ctx):
    """
    GIVEN an entry with only channel, type, status and its own timestamp
    WHEN it is appended
    THEN missing fields default, attribution is ADMIN / Admin and the server clock is used.
    """
    log = ActivityLogService.append(_entry(timestamp="1999-01-01T00:00:00Z"))

    assert log.id is not None
    assert log.agent_name == "Admin"
    assert log.agent_id == "ADMIN"
    assert log.customer_id == "N/A"
    assert log.old_phone == "N/A"
    assert log.new_phone == "N/A"
    assert log.otp == "N/A"
    assert log.language == ""
    # server clock, never the caller's value
    assert log.timestamp.year >= 2025


def test_append_attribution_prefers_actor(ctx):
    """
    GIVEN body attribution, with and without a session actor
    WHEN entries are appended
    THEN the actor wins when present, otherwise the body is used.
    """
    actor = SimpleNamespace(id="AG007", name="Session Agent")
    log = ActivityLogService.append(_entry(agent_id="AG999", agent_name="Body Agent"), actor=actor)
    assert (log.agent_id, log.agent_name) == ("AG007", "Session Agent")

    log = ActivityLogService.append(_entry(agent_id="AG999", agent_name="Body Agent"))
    assert (log.agent_id, log.agent_name) == ("AG999", "Body Agent")


def test_append_attribution_for_admin_and_anonymous(ctx):
    """
    GIVEN an admin session, and separately no identity at all
    WHEN an entry is appended
    THEN the admin entry reads ADMIN / Administrator and the anonymous one ADMIN / Admin.
    """
    log = ActivityLogService.append(_entry(), actor=AuthService.admin_identity())
    assert (log.agent_id, log.agent_name) == ("ADMIN", "Administrator")

    log = ActivityLogService.append(_entry())
    assert (log.agent_id, log.agent_name) == ("ADMIN", "Admin")


@pytest.mark.parametrize("missing", ["channel", "message_type", "status"])
def test_append_requires_fields(ctx, missing):
    """
    GIVEN an entry missing a required field
    WHEN it is appended
    THEN ValidationError names that field.
    """
    entry = _entry()
    del entry[missing]
    with pytest.raises(ValidationError, match=missing):
        ActivityLogService.append(entry)


def test_list_logs_newest_first(ctx):
    """
    GIVEN two entries an hour apart
    WHEN the log is listed
    THEN the later one comes first.
    """
    first = ActivityLogService.append(_entry(otp="1111"))
    second = ActivityLogService.append(_entry(otp="2222"))
    first.timestamp = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)
    second.timestamp = datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc)
    db.session.flush()

    assert [log.otp for log in ActivityLogService.list_logs()] == ["2222", "1111"]


def test_list_logs_search_is_case_insensitive(ctx):
    """
    GIVEN entries for different agents and channels
    WHEN the log is searched
    THEN name, customer ID and channel all match in any case.
    """
    ActivityLogService.append(_entry(agent_name="Meera Iyer", agent_id="AG003"))
    ActivityLogService.append(_entry(channel="whatsapp", agent_name="Other", agent_id="AG004", customer_id="CUST-42"))

    assert [log.agent_id for log in ActivityLogService.list_logs(search="meera")] == ["AG003"]
    assert [log.agent_id for log in ActivityLogService.list_logs(search="cust-4")] == ["AG004"]
    assert [log.agent_id for log in ActivityLogService.list_logs(search="WHATSAPP")] == ["AG004"]
    assert ActivityLogService.list_logs(search="nobody") == []


def test_list_logs_by_utc_day(ctx):
    """
    GIVEN entries either side of a UTC midnight
    WHEN the log is filtered by day
    THEN only that UTC day's entries are returned.
    """
    on_day = ActivityLogService.append(_entry(otp="on-day"))
    day_before = ActivityLogService.append(_entry(otp="before"))
    on_day.timestamp = datetime(2025, 2, 10, 23, 59, tzinfo=timezone.utc)
    day_before.timestamp = datetime(2025, 2, 9, 23, 59, tzinfo=timezone.utc)
    db.session.flush()

    assert [log.otp for log in ActivityLogService.list_logs(date=date(2025, 2, 10))] == ["on-day"]
    assert ActivityLogService.list_logs(date=date(2025, 2, 11)) == []
