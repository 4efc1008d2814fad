"""Shared core type aliases used across contracts, dispatch, and ports."""

from __future__ import annotations

from typing import Any, Dict, Mapping

NamedParams = Dict[str, Any]

RowMapping = Mapping[str, Any]
