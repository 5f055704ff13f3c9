"""Caller identity passed from the API layer into domain mutations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Actor:
    user_id: str
    user_name: str
