"""In-process introspection registry.

Named, read-only attribute bags that an operator or a monitoring agent can
look up in a running process. Names follow the ``domain:service=...,name=...``
shape of a platform bean server so a host can mirror entries into whatever
status or metrics surface it already exposes.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .config import ProvenanceConfig

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .info import VersionInfo

_RESERVED = (":", ",", "=")


class RegistryError(Exception):
    """Base class for registry failures."""


class InstanceAlreadyExistsError(RegistryError):
    pass


class InstanceNotFoundError(RegistryError):
    pass


class AttributeNotFoundError(RegistryError):
    pass


class MalformedNameError(RegistryError):
    pass


class RegistryUnavailableError(RegistryError):
    pass


def _check_part(label: str, value: str) -> str:
    if not value or any(ch in value for ch in _RESERVED):
        raise MalformedNameError(f"invalid {label} {value!r}")
    return value


@dataclass(frozen=True)
class ObjectName:
    domain: str
    service: str
    name: str

    def __post_init__(self) -> None:
        _check_part("domain", self.domain)
        _check_part("service", self.service)
        _check_part("name", self.name)

    def __str__(self) -> str:
        return f"{self.domain}:service={self.service},name={self.name}"


class VersionBean(BaseModel):
    """Read-only build provenance attributes, exposed under camelCase names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: str
    source_info: str = Field(alias="sourceInfo")
    compiled_by: str = Field(alias="compiledBy")

    @classmethod
    def from_info(cls, info: "VersionInfo") -> "VersionBean":
        return cls(
            version=info.version_string(),
            source_info=info.source_info(),
            compiled_by=info.compiled_by(),
        )

    def attributes(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


class IntrospectionRegistry:
    def __init__(self, domain: str = "buildstamp") -> None:
        self.domain = domain
        self._beans: Dict[ObjectName, BaseModel] = {}
        self._closed = False
        # Single lock protecting the table; every operation is a dict lookup.
        self._lock = threading.Lock()

    def register_bean(self, service: str, name: str, bean: BaseModel) -> ObjectName:
        object_name = ObjectName(self.domain, service, name)
        with self._lock:
            if self._closed:
                raise RegistryUnavailableError("registry is closed")
            if object_name in self._beans:
                raise InstanceAlreadyExistsError(str(object_name))
            self._beans[object_name] = bean
        return object_name

    def unregister(self, object_name: ObjectName) -> None:
        with self._lock:
            if self._beans.pop(object_name, None) is None:
                raise InstanceNotFoundError(str(object_name))

    def get_attribute(self, object_name: ObjectName, attribute: str) -> str:
        with self._lock:
            bean = self._beans.get(object_name)
        if bean is None:
            raise InstanceNotFoundError(str(object_name))
        attrs = bean.model_dump(by_alias=True)
        if attribute not in attrs:
            raise AttributeNotFoundError(f"{object_name} has no attribute {attribute!r}")
        return attrs[attribute]

    def beans(self) -> Dict[ObjectName, BaseModel]:
        with self._lock:
            return dict(self._beans)

    def names(self) -> List[ObjectName]:
        with self._lock:
            return sorted(self._beans, key=str)

    def is_registered(self, object_name: ObjectName) -> bool:
        with self._lock:
            return object_name in self._beans

    def close(self) -> None:
        with self._lock:
            self._closed = True
            self._beans.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._beans)


_PLATFORM: Optional[IntrospectionRegistry] = None
_PLATFORM_LOCK = threading.Lock()


def platform_registry() -> IntrospectionRegistry:
    """Process-wide registry, created on first use."""
    global _PLATFORM
    if _PLATFORM is None:
        with _PLATFORM_LOCK:
            if _PLATFORM is None:
                _PLATFORM = IntrospectionRegistry(ProvenanceConfig.from_env().domain)
    return _PLATFORM


__all__ = [
    "AttributeNotFoundError",
    "InstanceAlreadyExistsError",
    "InstanceNotFoundError",
    "IntrospectionRegistry",
    "MalformedNameError",
    "ObjectName",
    "RegistryError",
    "RegistryUnavailableError",
    "VersionBean",
    "platform_registry",
]
