# tests/conftest.py
# -*- coding: utf-8 -*-
"""
Pytest fixtures.

Each test gets a fresh Flask application in testing mode backed by an
in-memory SQLite database, a test client, and a fake vendor HTTP session
so no test ever reaches a real push/SMS/WhatsApp endpoint.
"""

import json
import logging
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlsplit

import pytest

from ncportal import create_app
from ncportal.extensions import db as _db, notification_gateway
from ncportal.database import models  # noqa: F401 registers tables with the metadata


log = logging.getLogger(__name__)

VENDOR_OK_BODY = {"status": "success", "response": {"status": "success", "id": "MSG-1", "details": ""}}

TEST_AGENT = {
    "agentId": "AG001",
    "name": "Priya Sharma",
    "email": "priya.sharma@example.com",
    "phone": "9876500001",
    "password": "agent-pass-1",
}


# ---- Fake vendor HTTP ----

class FakeResponse:
    """Minimal streamed response: iter_content, encoding and close."""
    encoding = 'utf-8'

    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(body if body is not None else VENDOR_OK_BODY)
        self.closed = False

    def iter_content(self, chunk_size=1):
        content = self.text.encode(self.encoding)
        for start in range(0, len(content), chunk_size):
            yield content[start:start + chunk_size]

    def close(self):
        self.closed = True


class FakeSession:
    """
    Stands in for requests.Session. Records every call; answers with queued
    responses (or a default success), or raises `error` when set.
    """

    def __init__(self):
        self.calls = []
        self.responses = []
        self.error = None
        self.closed = False

    def respond_with(self, status_code=200, body=None, text=None):
        self.responses.append(FakeResponse(status_code, body, text))

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        if self.responses:
            return self.responses.pop(0)
        return FakeResponse()

    def get(self, url, **kwargs):
        return self.request("GET", url, **kwargs)

    def close(self):
        self.closed = True


# ---- Application Fixtures ----

@pytest.fixture
def app():
    """Fresh app per test with tables created in its in-memory database."""
    _app = create_app(config_name='testing')
    with _app.app_context():
        _db.create_all()
    yield _app
    with _app.app_context():
        _db.session.remove()
        _db.drop_all()
    notification_gateway.close(_app)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    """Application context for service-level tests (no HTTP requests inside)."""
    with app.app_context():
        yield
        _db.session.rollback()


@pytest.fixture
def vendor(app):
    """Fake HTTP session installed in the notification gateway."""
    fake = FakeSession()
    notification_gateway.use_session(app, fake)
    return fake


# ---- Data & Authentication Fixtures ----

@pytest.fixture
def agent(app):
    """An active agent committed to the database; returns its credentials."""
    from ncportal.services.agent_service import AgentService

    with app.app_context():
        AgentService.create_agent(TEST_AGENT)
        _db.session.commit()
    log.debug(f"Created agent '{TEST_AGENT['agentId']}' for test.")
    return dict(TEST_AGENT)


@pytest.fixture
def agent_client(client, agent):
    """Test client with a logged-in agent session."""
    res = client.post('/api/auth/login', json={'agentId': agent['agentId'], 'password': agent['password']})
    if res.status_code != 200:
        pytest.fail(f"Agent login failed in fixture: {res.status_code} {res.data.decode()}")
    return client


@pytest.fixture
def admin_client(client, app):
    """Test client with a logged-in admin session."""
    res = client.post('/api/auth/admin-login', json={
        'username': app.config['ADMIN_USERNAME'],
        'password': app.config['ADMIN_PASSWORD'],
    })
    if res.status_code != 200:
        pytest.fail(f"Admin login failed in fixture: {res.status_code} {res.data.decode()}")
    return client


# ---- Local upstream server ----

class UpstreamHandler(BaseHTTPRequestHandler):
    """
    Real HTTP upstream on 127.0.0.1:
      /slow   headers at once, then one byte every 0.2 s for 6 s
      /login  JSON success body plus a session cookie
      other   JSON success body
    Every request's Cookie header is recorded on the server.
    """
    protocol_version = 'HTTP/1.0'

    def do_GET(self):
        self.server.seen_cookies.append(self.headers.get('Cookie'))
        path = urlsplit(self.path).path

        if path == '/slow':
            self.send_response(200)
            self.send_header('Content-Type', 'text/plain')
            self.end_headers()
            for _ in range(30):
                try:
                    self.wfile.write(b'x')
                    self.wfile.flush()
                except OSError:
                    return  # caller hung up
                time.sleep(0.2)
            return

        body = json.dumps(VENDOR_OK_BODY).encode('utf-8')
        self.send_response(200)
        if path == '/login':
            self.send_header('Set-Cookie', 'SESSIONID=agent-a-secret; Path=/')
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        log.debug("upstream: " + format, *args)


@pytest.fixture
def upstream():
    """Starts UpstreamHandler on a free port; yields the server (base URL in `.url`)."""
    server = ThreadingHTTPServer(('127.0.0.1', 0), UpstreamHandler)
    server.daemon_threads = True
    server.seen_cookies = []
    server.url = f"http://127.0.0.1:{server.server_address[1]}"
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


@pytest.fixture
def direct_session(app):
    """The app's real requests.Session, ignoring any proxy settings from the environment."""
    session = notification_gateway.get_session(app)
    session.trust_env = False
    return session
