"""Read-only access to the build provenance of this distribution.

``VersionInfo`` wraps one immutable ``BuildMetadata`` record. The process-wide
instance is loaded once on first use; every accessor is total and returns the
``"Unknown"`` sentinel instead of failing when the record is missing.
"""
from __future__ import annotations

import threading
from typing import Optional

from .config import ProvenanceConfig
from .logutil import get_logger
from .record import BuildMetadata, load_metadata
from .registry import IntrospectionRegistry, ObjectName, RegistryError, VersionBean, platform_registry


class VersionInfo:
    def __init__(self, metadata: BuildMetadata, product_name: str = "Buildstamp") -> None:
        self.metadata = metadata
        self.product_name = product_name

    @classmethod
    def load(cls, cfg: Optional[ProvenanceConfig] = None) -> "VersionInfo":
        cfg = cfg or ProvenanceConfig.from_env()
        return cls(load_metadata(cfg), product_name=cfg.product_name)

    def get_version(self) -> str:
        """Release identifier, e.g. "1.2.0"."""
        return self.metadata.version

    def get_revision(self) -> str:
        """Source-control revision the build was cut from."""
        return self.metadata.revision

    def get_date(self) -> str:
        return self.metadata.date

    def get_user(self) -> str:
        return self.metadata.user

    def get_url(self) -> str:
        """Repository location used for the build."""
        return self.metadata.url

    def get_build_version(self) -> str:
        return (
            self.get_version()
            + " from " + self.get_revision()
            + " by " + self.get_user()
            + " on " + self.get_date()
        )

    def version_string(self) -> str:
        return f"{self.product_name} {self.get_version()}"

    def source_info(self) -> str:
        return f"Source {self.get_url()} -r {self.get_revision()}"

    def compiled_by(self) -> str:
        return f"Compiled by {self.get_user()} on {self.get_date()}"

    def __repr__(self) -> str:
        return f"VersionInfo({self.get_build_version()!r})"


_DEFAULT: Optional[VersionInfo] = None
_DEFAULT_LOCK = threading.Lock()


def get_version_info() -> VersionInfo:
    """Process-wide instance; the first caller loads the record, exactly once."""
    global _DEFAULT
    if _DEFAULT is None:
        with _DEFAULT_LOCK:
            if _DEFAULT is None:
                _DEFAULT = VersionInfo.load()
    return _DEFAULT


def reset_version_info() -> None:
    """Forget the cached instance (tests only)."""
    global _DEFAULT
    with _DEFAULT_LOCK:
        _DEFAULT = None


def get_version() -> str:
    return get_version_info().get_version()


def get_revision() -> str:
    return get_version_info().get_revision()


def get_date() -> str:
    return get_version_info().get_date()


def get_user() -> str:
    return get_version_info().get_user()


def get_url() -> str:
    return get_version_info().get_url()


def get_build_version() -> str:
    return get_version_info().get_build_version()


def register(
    component_name: str,
    registry: Optional[IntrospectionRegistry] = None,
    info: Optional[VersionInfo] = None,
    category: Optional[str] = None,
) -> Optional[ObjectName]:
    """Publish the version bean for ``component_name``.

    Returns the registered name, or None if the registry rejected the entry.
    Registry failures are logged and never raised to the caller.
    """
    registry = registry if registry is not None else platform_registry()
    info = info or get_version_info()
    category = category or ProvenanceConfig.from_env().category
    try:
        return registry.register_bean(component_name, category, VersionBean.from_info(info))
    except RegistryError:
        get_logger().warning("could not register %s bean for %r", category, component_name, exc_info=True)
        return None


__all__ = [
    "VersionInfo",
    "get_build_version",
    "get_date",
    "get_revision",
    "get_url",
    "get_user",
    "get_version",
    "get_version_info",
    "register",
    "reset_version_info",
]
