"""OAuth2 endpoints and constants for Google sign-in."""

from __future__ import annotations

DEVICE_CODE_URL: str = "https://oauth2.googleapis.com/device/code"
TOKEN_URL: str = "https://oauth2.googleapis.com/token"

DRIVE_FILE_SCOPE: str = "https://www.googleapis.com/auth/drive.file"

DEVICE_GRANT_TYPE: str = "urn:ietf:params:oauth:grant-type:device_code"
