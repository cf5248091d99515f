"""JSON problem payloads returned by the API blueprints."""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Mapping

from flask import jsonify


@dataclass(frozen=True)
class ProblemResponse:
    """RFC 7807-style error body; ``title`` is the status phrase."""

    error: str
    status: HTTPStatus
    message: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "error": self.error,
            "status": int(self.status),
            "title": self.status.phrase,
        }
        if self.message:
            payload["message"] = self.message
        payload.update(self.extra)
        return payload

    def to_response(self) -> tuple[Any, int]:
        return jsonify(self.as_dict()), int(self.status)


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    **extra: Any,
) -> ProblemResponse:
    """Build a :class:`ProblemResponse`; keyword extras are merged into the payload."""

    return ProblemResponse(error=error, status=HTTPStatus(status), message=message, extra=extra)


__all__ = ["ProblemResponse", "problem_response"]
