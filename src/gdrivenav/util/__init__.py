from .mime import DEFAULT_UPLOAD_MIME, FOLDER_MIME, is_folder
from .time import expiry_from_now, from_naive_utc, normalize_dt, now_utc

__all__ = [
    "FOLDER_MIME",
    "DEFAULT_UPLOAD_MIME",
    "is_folder",
    "now_utc",
    "normalize_dt",
    "from_naive_utc",
    "expiry_from_now",
]
