"""Access token state for an authenticated session."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from gdrivenav.util.time import normalize_dt

# Requests started just before expiry must not arrive after it.
GRACE_PERIOD: timedelta = timedelta(seconds=10)


@dataclass(slots=True)
class TokenState:
    """Access/refresh token pair plus the bearer header built from it."""

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expiry: Optional[datetime] = None
    auth_header: dict[str, str] = field(default_factory=dict)

    def is_valid(self, now: datetime) -> bool:
        """True only while now < expiry - GRACE_PERIOD."""
        if not self.access_token or self.expiry is None:
            return False
        return normalize_dt(now) < self.expiry - GRACE_PERIOD

    def update(
        self,
        access_token: str,
        expiry: datetime,
        *,
        refresh_token: Optional[str] = None,
    ) -> None:
        self.access_token = access_token
        self.expiry = normalize_dt(expiry)
        if refresh_token:
            self.refresh_token = refresh_token
        self.auth_header = {"Authorization": f"Bearer {access_token}"}
