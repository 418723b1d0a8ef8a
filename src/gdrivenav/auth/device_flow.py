"""OAuth2 device authorization grant (RFC 8628) against Google's endpoints."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

import requests

from gdrivenav.errors import AuthError
from gdrivenav.util.http import read_json, require_field, send
from gdrivenav.util.time import now_utc

from .endpoints import DEVICE_CODE_URL, DEVICE_GRANT_TYPE, DRIVE_FILE_SCOPE, TOKEN_URL

logger = logging.getLogger(__name__)

_PENDING = "authorization_pending"
_SLOW_DOWN = "slow_down"
_SLOW_DOWN_STEP_SEC = 5


@dataclass(slots=True, frozen=True)
class DeviceCode:
    """Device-code issuance response."""

    device_code: str
    user_code: str
    verification_url: str
    expires_in: int
    interval: int

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> DeviceCode:
        what = "device code response"
        return cls(
            device_code=require_field(payload, "device_code", str, what=what),
            user_code=require_field(payload, "user_code", str, what=what),
            verification_url=require_field(payload, "verification_url", str, what=what),
            expires_in=int(require_field(payload, "expires_in", (int, float), what=what)),
            interval=int(require_field(payload, "interval", (int, float), what=what)),
        )


@dataclass(slots=True, frozen=True)
class TokenGrant:
    """Successful token endpoint response."""

    access_token: str
    expires_in: int
    refresh_token: Optional[str] = None

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> TokenGrant:
        what = "token response"
        refresh_token = payload.get("refresh_token")
        return cls(
            access_token=require_field(payload, "access_token", str, what=what),
            expires_in=int(require_field(payload, "expires_in", (int, float), what=what)),
            refresh_token=refresh_token if isinstance(refresh_token, str) else None,
        )


def log_prompt(code: DeviceCode) -> None:
    """Default operator prompt: write the sign-in instructions to the log."""
    logger.warning(
        "Sign in within %d seconds at %s using code %s.",
        code.expires_in,
        code.verification_url,
        code.user_code,
    )


class DeviceFlow:
    """
    Run the device authorization grant.

    1. POST client_id + scope to the device-code endpoint.
    2. Present verification_url and user_code to the operator.
    3. Poll the token endpoint every `interval` seconds until a response
       without an "error" field arrives or the code expires.
    """

    def __init__(
        self,
        session: requests.Session,
        client_id: str,
        client_secret: str,
        *,
        scope: str = DRIVE_FILE_SCOPE,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self._session = session
        self._client_id = client_id
        self._client_secret = client_secret
        self._scope = scope
        self._clock = clock

    def run(self, prompt: Callable[[DeviceCode], None] = log_prompt) -> TokenGrant:
        """
        Request a code, prompt the operator, and wait for authorization.

        Raises:
            AuthError: denied, expired, or timed out.
            ProtocolError / NetworkError: malformed response or transport failure.
        """
        code = self.request_code()
        deadline = self._clock() + timedelta(seconds=code.expires_in)
        prompt(code)
        return self.poll(code, deadline)

    def request_code(self) -> DeviceCode:
        response = send(
            self._session,
            "POST",
            DEVICE_CODE_URL,
            data={"client_id": self._client_id, "scope": self._scope},
        )
        return DeviceCode.from_json(read_json(response))

    def poll(self, code: DeviceCode, deadline: datetime) -> TokenGrant:
        interval = code.interval
        body = {
            "client_id": self._client_id,
            "client_secret": self._client_secret,
            "device_code": code.device_code,
            "grant_type": DEVICE_GRANT_TYPE,
        }

        while self._clock() < deadline:
            response = send(self._session, "POST", TOKEN_URL, data=body)
            payload = _parse_poll_response(response)

            error = payload.get("error")
            if error is None:
                logger.info("Device sign-in authorized.")
                return TokenGrant.from_json(payload)

            if error == _SLOW_DOWN:
                interval += _SLOW_DOWN_STEP_SEC
            elif error != _PENDING:
                description = payload.get("error_description")
                logger.error("Google Drive error: %s: %s.", error, description)
                raise AuthError(
                    "Device sign-in failed",
                    details={"error": error, "error_description": description},
                )

            logger.info("Still waiting for device sign-in...")
            time.sleep(interval)

        logger.error("Device sign-in timed out after %d seconds.", code.expires_in)
        raise AuthError(
            "Device sign-in timed out",
            details={"expires_in": code.expires_in},
        )


def _parse_poll_response(response: requests.Response) -> dict[str, Any]:
    # Pending polls answer 428 with an OAuth error object; only the body matters.
    try:
        payload = response.json()
    except ValueError:
        return read_json(response)
    if not isinstance(payload, dict):
        return read_json(response)
    return payload
