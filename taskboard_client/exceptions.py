from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ApiError(Exception):
    """Error answer from the Taskboard API ({"success": false, "error": ...})."""

    status_code: int
    message: str
    details: Any = None
    url: Optional[str] = None
    method: Optional[str] = None

    def __str__(self) -> str:
        where = f"{self.method} {self.url} -> " if self.method and self.url else ""
        return f"{where}[{self.status_code}] {self.message}"

    @property
    def is_unauthorized(self) -> bool:
        # missing, expired or invalid token, or bad credentials at login
        return self.status_code == 401

    @property
    def is_forbidden(self) -> bool:
        return self.status_code == 403

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_locked(self) -> bool:
        return self.status_code == 423
