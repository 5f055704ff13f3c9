"""Backup document contract.

One JSON document aggregating every collection plus the export timestamp.
Restore replaces each collection wholesale.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class BackupDocument(BaseModel):
    backup_date: datetime
    orders: list[dict[str, Any]] = Field(default_factory=list)
    clients: list[dict[str, Any]] = Field(default_factory=list)
    parts: list[dict[str, Any]] = Field(default_factory=list)
    suppliers: list[dict[str, Any]] = Field(default_factory=list)
    branches: list[dict[str, Any]] = Field(default_factory=list)
    users: list[dict[str, Any]] = Field(default_factory=list)
    notifications: list[dict[str, Any]] = Field(default_factory=list)


class RestoreResponse(BaseModel):
    backup_date: datetime
    restored: dict[str, int]
