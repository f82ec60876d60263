"""Shared types and enums."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OptionType(str, Enum):
    CALL = "call"
    PUT = "put"


@dataclass(frozen=True)
class Quote:
    """Scalar market or model parameter."""

    value: float
    name: str = ""
