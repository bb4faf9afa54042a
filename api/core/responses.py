"""
Uniform response envelope: {"success": bool, "data"?: ..., "message"?: str}.
"""

from __future__ import annotations

from typing import Any


def ok(data: Any = None, message: str | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return body


def failure(message: str, **extra: Any) -> dict[str, Any]:
    return {"success": False, "message": message, **extra}
