"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipient_id: int
    title: str
    message: str
    severity: Literal["info", "warning", "success", "error"]
    link: str | None = None
    read: bool = False
    created_at: datetime


class UnreadCountRead(BaseModel):
    """Number of unread notifications for the authenticated user."""

    count: int = Field(..., ge=0)


class NotificationActionResponse(BaseModel):
    """Acknowledgement returned by mutating notification endpoints."""

    message: str
    notification: NotificationRead | None = None
    updated: int | None = None


__all__ = ["NotificationActionResponse", "NotificationRead", "UnreadCountRead"]
