# =============================================================================
# tests/test_middleware.py - CORS and Security Middleware Tests
# =============================================================================
# Uses a small standalone app so route invocations can be counted.
#
# Run with: poetry run pytest tests/test_middleware.py -v
# =============================================================================

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.middleware import CorsConfig, CorsPolicy, SecurityConfig, install_middleware

ALLOWED = "http://localhost:3000"
EVIL = "http://evil.example"

SECURITY_HEADERS = [
    "content-security-policy",
    "x-frame-options",
    "x-content-type-options",
    "x-xss-protection",
    "referrer-policy",
    "permissions-policy",
    "strict-transport-security",
]


def build_app(cors_config: CorsConfig | None = None):
    app = FastAPI()
    app.state.calls = 0
    install_middleware(app, cors_config=cors_config)

    @app.get("/ping")
    async def ping():
        app.state.calls += 1
        return {"ok": True}

    @app.options("/ping")
    async def ping_options():
        app.state.calls += 1
        return {"ok": True}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    return app


@pytest.fixture
def app():
    return build_app()


@pytest.fixture
def test_client(app):
    return TestClient(app)


# =============================================================================
# CorsPolicy
# =============================================================================

class TestCorsPolicy:

    def test_exact_match(self):
        policy = CorsPolicy(CorsConfig(allowed_origins=[ALLOWED]))

        assert policy.is_origin_allowed(ALLOWED)
        assert not policy.is_origin_allowed(ALLOWED + "/")
        assert not policy.is_origin_allowed(EVIL)

    def test_missing_origin_not_allowed(self):
        policy = CorsPolicy(CorsConfig(allowed_origins=["*"]))

        assert not policy.is_origin_allowed(None)
        assert not policy.is_origin_allowed("")

    def test_wildcard_allows_everything(self):
        policy = CorsPolicy(CorsConfig(allowed_origins=["*"]))
        assert policy.is_origin_allowed(EVIL)

    def test_defaults(self):
        config = CorsConfig()

        assert config.allowed_origins == ["http://localhost:3000", "https://localhost:3000"]
        assert config.max_age == 86400
        assert config.credentials is True


# =============================================================================
# Preflight
# =============================================================================

class TestPreflight:

    def test_allowed_origin_gets_200_with_headers(self, app, test_client):
        response = test_client.options("/ping", headers={"Origin": ALLOWED})

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == ALLOWED
        assert response.headers["access-control-allow-methods"] == "GET, POST, PUT, DELETE, OPTIONS"
        assert response.headers["access-control-allow-headers"] == "Content-Type, Authorization, X-API-Key"
        assert response.headers["access-control-expose-headers"] == "Content-Length, X-Total-Count"
        assert response.headers["access-control-max-age"] == "86400"
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_disallowed_origin_gets_403(self, test_client):
        response = test_client.options("/ping", headers={"Origin": EVIL})

        assert response.status_code == 403
        assert "access-control-allow-origin" not in response.headers

    def test_missing_origin_gets_403(self, test_client):
        assert test_client.options("/ping").status_code == 403

    def test_preflight_never_invokes_route(self, app, test_client):
        test_client.options("/ping", headers={"Origin": ALLOWED})
        test_client.options("/ping", headers={"Origin": EVIL})

        assert app.state.calls == 0

    def test_preflight_still_gets_security_headers(self, test_client):
        for origin in (ALLOWED, EVIL):
            response = test_client.options("/ping", headers={"Origin": origin})
            for header in SECURITY_HEADERS:
                assert header in response.headers

    def test_credentials_header_omitted_when_disabled(self):
        client = TestClient(build_app(CorsConfig(credentials=False)))

        response = client.options("/ping", headers={"Origin": ALLOWED})

        assert response.status_code == 200
        assert "access-control-allow-credentials" not in response.headers


# =============================================================================
# Simple Requests
# =============================================================================

class TestSimpleRequests:

    def test_allowed_origin_gets_cors_headers(self, test_client):
        response = test_client.get("/ping", headers={"Origin": ALLOWED})

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == ALLOWED
        assert response.headers["access-control-allow-credentials"] == "true"
        assert response.headers["access-control-expose-headers"] == "Content-Length, X-Total-Count"
        # Preflight-only headers
        assert "access-control-allow-methods" not in response.headers
        assert "access-control-max-age" not in response.headers

    def test_disallowed_origin_still_processed(self, app, test_client):
        response = test_client.get("/ping", headers={"Origin": EVIL})

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert app.state.calls == 1
        assert "access-control-allow-origin" not in response.headers

    def test_no_origin_still_processed(self, test_client):
        response = test_client.get("/ping")

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers

    def test_wildcard_echoes_request_origin(self):
        client = TestClient(build_app(CorsConfig(allowed_origins=["*"])))

        response = client.get("/ping", headers={"Origin": EVIL})

        assert response.headers["access-control-allow-origin"] == EVIL

    def test_credentials_false_is_reported(self):
        client = TestClient(build_app(CorsConfig(credentials=False)))

        response = client.get("/ping", headers={"Origin": ALLOWED})

        assert response.headers["access-control-allow-credentials"] == "false"


# =============================================================================
# Security Headers
# =============================================================================

class TestSecurityHeaders:

    def test_default_values(self, test_client):
        response = test_client.get("/ping")
        defaults = SecurityConfig()

        assert response.headers["x-frame-options"] == "DENY"
        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-xss-protection"] == "1; mode=block"
        assert response.headers["referrer-policy"] == "strict-origin-when-cross-origin"
        assert response.headers["strict-transport-security"] == "max-age=31536000; includeSubDomains; preload"
        assert response.headers["content-security-policy"] == defaults.content_security_policy
        assert "frame-ancestors 'none'" in response.headers["content-security-policy"]
        assert "camera=()" in response.headers["permissions-policy"]

    def test_both_header_sets_present(self, test_client):
        response = test_client.get("/ping", headers={"Origin": ALLOWED})

        assert response.headers["access-control-allow-origin"] == ALLOWED
        for header in SECURITY_HEADERS:
            assert header in response.headers

    def test_custom_config(self):
        app = FastAPI()
        install_middleware(app, security_config=SecurityConfig(x_frame_options="SAMEORIGIN"))

        @app.get("/ping")
        async def ping():
            return {}

        response = TestClient(app).get("/ping")

        assert response.headers["x-frame-options"] == "SAMEORIGIN"

    def test_headers_added_to_errors(self, test_client):
        response = test_client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.headers["x-frame-options"] == "DENY"

    def test_headers_added_to_unhandled_errors(self, test_client):
        response = test_client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {
            "message": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
        for header in SECURITY_HEADERS:
            assert header in response.headers
