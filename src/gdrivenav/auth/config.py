"""Client credential configuration (client_secret.json) for gdrivenav."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, replace
from typing import Any, Optional

from gdrivenav.errors import ConfigError

logger = logging.getLogger(__name__)

INSTALLED_KEY: str = "installed"


@dataclass(slots=True, frozen=True)
class ClientConfig:
    """
    OAuth client credentials read from a Google "installed app" JSON file.

    Layout:
        {"installed": {"client_id": ..., "client_secret": ...,
                       "refresh_token": ... (optional), ...}}
    """

    path: str
    client_id: str
    client_secret: str
    refresh_token: Optional[str] = None

    @classmethod
    def load(cls, path: str) -> ClientConfig:
        """
        Read and validate the credential file.

        Raises:
            ConfigError: missing/unreadable file, invalid JSON, missing
                "installed" object, or missing client_id/client_secret.
        """
        installed = _read_installed(path)

        values: dict[str, str] = {}
        for key in ("client_id", "client_secret"):
            value = installed.get(key)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(
                    f"Drive configuration is missing '{key}'",
                    details={"path": path},
                )
            values[key] = value

        refresh_token = installed.get("refresh_token")
        if not isinstance(refresh_token, str) or not refresh_token.strip():
            refresh_token = None

        return cls(
            path=path,
            client_id=values["client_id"],
            client_secret=values["client_secret"],
            refresh_token=refresh_token,
        )

    def save_refresh_token(self, refresh_token: str) -> ClientConfig:
        """
        Persist refresh_token into the file, keeping every other field.

        The file is rewritten atomically (temp file + os.replace).

        Returns:
            A ClientConfig carrying the new refresh token.
        """
        document = _read_document(self.path)
        installed = document.get(INSTALLED_KEY)
        if not isinstance(installed, dict):
            raise ConfigError(
                "Drive configuration is invalid",
                details={"path": self.path},
            )
        installed["refresh_token"] = refresh_token

        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(prefix=".client_secret.", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise ConfigError(
                "Failed to write refresh token to configuration",
                details={"path": self.path},
                cause=exc,
            ) from exc

        logger.info("Refresh token written to %s.", self.path)
        return replace(self, refresh_token=refresh_token)


def _read_document(path: str) -> dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            document = json.load(f)
    except FileNotFoundError as exc:
        raise ConfigError(
            "Drive configuration file not found",
            details={"path": path},
            cause=exc,
        ) from exc
    except (OSError, ValueError) as exc:
        raise ConfigError(
            "Error reading Drive configuration",
            details={"path": path},
            cause=exc,
        ) from exc

    if not isinstance(document, dict):
        raise ConfigError("Drive configuration is invalid", details={"path": path})
    return document


def _read_installed(path: str) -> dict[str, Any]:
    installed = _read_document(path).get(INSTALLED_KEY)
    if not isinstance(installed, dict):
        raise ConfigError(
            "Drive configuration has no 'installed' object",
            details={"path": path},
        )
    return installed
