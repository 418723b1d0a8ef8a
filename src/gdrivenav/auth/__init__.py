"""Public auth exports for gdrivenav."""

from __future__ import annotations

from .config import ClientConfig
from .device_flow import DeviceCode, DeviceFlow, TokenGrant
from .oauth_client import OAuthClient
from .token_state import GRACE_PERIOD, TokenState

__all__ = [
    "ClientConfig",
    "DeviceCode",
    "DeviceFlow",
    "TokenGrant",
    "OAuthClient",
    "TokenState",
    "GRACE_PERIOD",
]
