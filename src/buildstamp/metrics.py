"""Snapshot helper for the introspection registry.

Provides a dependency-free, JSON-ready view of every registered bean, suitable
for exposure through a host's status endpoint or logging. Avoids mutating the
registry.
"""
from __future__ import annotations

from typing import Dict, Optional

from .registry import IntrospectionRegistry, platform_registry


def registry_snapshot(registry: Optional[IntrospectionRegistry] = None) -> Dict[str, Dict[str, str]]:
    registry = registry if registry is not None else platform_registry()
    return {
        str(name): bean.model_dump(by_alias=True)
        for name, bean in sorted(registry.beans().items(), key=lambda item: str(item[0]))
    }

__all__ = ["registry_snapshot"]
