# =============================================================================
# core/models/auth_credentials.py - Authentication Credential Schemas
# =============================================================================
# Credentials stored for websites that need a login. They are kept and
# returned as data only; nothing here checks them against the real site.
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AuthMethod(str, Enum):
    """How a website is logged into."""
    EMAIL = "email"
    OAUTH = "oauth"
    SSO = "sso"


class AuthenticationCredentials(BaseModel):
    """
    Stored login details for one website.

    Example:
        {
            "websiteId": "dashboard-app",
            "method": "email",
            "username": "demo@example.com",
            "password": "..."
        }
    """

    website_id: str = Field(..., min_length=1, description="Website these credentials belong to")
    method: AuthMethod = Field(..., description="Login method")
    username: str | None = None
    password: str | None = None
    oauth_provider: str | None = None
    additional_fields: dict[str, Any] | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def validation_errors(self) -> list[str]:
        """Fields each login method needs before the credentials can be saved."""
        errors = []
        if self.method == AuthMethod.EMAIL:
            if not self.username:
                errors.append("username is required for email authentication")
            if not self.password:
                errors.append("password is required for email authentication")
        if self.method == AuthMethod.OAUTH and not self.oauth_provider:
            errors.append("oauthProvider is required for OAuth authentication")
        return errors


class AuthStatus(BaseModel):
    """
    What the API exposes about a website's login, without the secrets.

    Returned by GET /api/websites/{id}/auth.
    """
    website_id: str
    requires_auth: bool
    has_credentials: bool
    method: AuthMethod | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthCredentialsCollection:
    """Credentials loaded for one request, keyed by website id."""

    def __init__(self, credentials: list[AuthenticationCredentials] | None = None):
        # Later records replace earlier ones for the same website
        self._by_website: dict[str, AuthenticationCredentials] = {}
        for cred in credentials or []:
            self._by_website[cred.website_id] = cred

    def get_all(self) -> list[AuthenticationCredentials]:
        return list(self._by_website.values())

    def get_by_website_id(self, website_id: str) -> AuthenticationCredentials | None:
        return self._by_website.get(website_id)

    def has_credentials(self, website_id: str) -> bool:
        return website_id in self._by_website
