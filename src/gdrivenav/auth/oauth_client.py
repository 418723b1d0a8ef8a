"""OAuth client: sign-in, token refresh and bearer headers for gdrivenav."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

import requests
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from gdrivenav.errors import AuthError
from gdrivenav.util.time import expiry_from_now, from_naive_utc, now_utc

from .config import ClientConfig
from .device_flow import DeviceCode, DeviceFlow, log_prompt
from .endpoints import DRIVE_FILE_SCOPE, TOKEN_URL
from .token_state import TokenState

logger = logging.getLogger(__name__)


class OAuthClient:
    """Own the OAuth credentials and token lifecycle of one Drive session."""

    def __init__(
        self,
        config: ClientConfig,
        session: Optional[requests.Session] = None,
        *,
        scope: str = DRIVE_FILE_SCOPE,
        prompt: Callable[[DeviceCode], None] = log_prompt,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self._config = config
        self._session = session if session is not None else requests.Session()
        self._scope = scope
        self._prompt = prompt
        self._clock = clock
        self._token = TokenState(refresh_token=config.refresh_token)

    @classmethod
    def from_token(
        cls,
        config: ClientConfig,
        token: TokenState,
        session: requests.Session,
        *,
        clock: Callable[[], datetime] = now_utc,
    ) -> OAuthClient:
        """Create a client around an existing token (useful for tests)."""
        obj = cls(config, session, clock=clock)
        obj._token = token
        return obj

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def token(self) -> TokenState:
        return self._token

    # ----------------------------
    # Lifecycle
    # ----------------------------
    def authenticate(self) -> None:
        """
        Obtain a usable access token.

        With a stored refresh token, exchange it right away; otherwise run the
        device authorization grant and persist the new refresh token.

        Raises:
            AuthError: refresh or sign-in failed.
            ConfigError: the new refresh token could not be persisted.
        """
        if self._token.refresh_token:
            self.refresh()
            return
        self.sign_in()

    def sign_in(self) -> None:
        flow = DeviceFlow(
            self._session,
            self._config.client_id,
            self._config.client_secret,
            scope=self._scope,
            clock=self._clock,
        )
        grant = flow.run(self._prompt)
        self._token.update(
            grant.access_token,
            expiry_from_now(grant.expires_in, self._clock()),
            refresh_token=grant.refresh_token,
        )

        if grant.refresh_token:
            self._config = self._config.save_refresh_token(grant.refresh_token)
        else:
            logger.warning("Sign-in response carried no refresh token.")

    def token_is_valid(self) -> bool:
        return self._token.is_valid(self._clock())

    def refresh(self) -> None:
        """
        Exchange the refresh token for a new access token.

        Raises:
            AuthError: no refresh token, error response, or missing fields.
        """
        if not self._token.refresh_token:
            raise AuthError("No refresh token available")

        creds = Credentials(
            token=None,
            refresh_token=self._token.refresh_token,
            token_uri=TOKEN_URL,
            client_id=self._config.client_id,
            client_secret=self._config.client_secret,
        )
        try:
            creds.refresh(Request(session=self._session))
        except GoogleAuthError as exc:
            logger.error("Failed to refresh access token: %s", exc)
            raise AuthError("Failed to refresh OAuth credentials", cause=exc) from exc

        if not creds.token or creds.expiry is None:
            logger.error("Refresh response is missing access_token or expires_in.")
            raise AuthError("Refresh response is missing access_token or expires_in")

        self._token.update(creds.token, from_naive_utc(creds.expiry))
        logger.info("Access token refreshed.")

    def ensure_valid(self) -> None:
        """Refresh the access token when it is within the grace period of expiry."""
        if not self.token_is_valid():
            self.refresh()

    def authorization_header(self) -> dict[str, str]:
        """Return a fresh copy of the bearer header, refreshing first if needed."""
        self.ensure_valid()
        return dict(self._token.auth_header)
