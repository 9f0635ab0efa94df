"""Build metadata record.

The packaging step writes a small JSON document next to the package
(``build_info.json``) holding the five provenance fields. It is read once and
kept as an immutable value; anything that goes wrong while reading it is
treated as "no metadata" and every field reads as ``"Unknown"``.
"""
from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, PrivateAttr, StrictStr

from .config import ProvenanceConfig
from .logutil import get_logger

UNKNOWN = "Unknown"


class BuildMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", strict=True)

    version: StrictStr
    revision: StrictStr
    date: StrictStr  # opaque, never parsed
    user: StrictStr
    url: StrictStr

    # Not a field: a stamped record can never claim to be the unloaded one.
    _loaded: bool = PrivateAttr(default=True)

    @classmethod
    def unknown(cls) -> "BuildMetadata":
        record = cls(version=UNKNOWN, revision=UNKNOWN, date=UNKNOWN, user=UNKNOWN, url=UNKNOWN)
        record._loaded = False
        return record

    @property
    def available(self) -> bool:
        """False only for the stand-in record returned when nothing could be loaded."""
        return self._loaded


def parse_metadata(text: str) -> BuildMetadata:
    """Parse one JSON object; raises ``pydantic.ValidationError`` if malformed."""
    return BuildMetadata.model_validate_json(text)


def _read_source(cfg: ProvenanceConfig) -> str:
    if cfg.metadata_path:
        return Path(cfg.metadata_path).read_text(encoding="utf-8")
    return resources.files(cfg.resource_package).joinpath(cfg.resource_name).read_text(encoding="utf-8")


def load_metadata(cfg: Optional[ProvenanceConfig] = None) -> BuildMetadata:
    cfg = cfg or ProvenanceConfig.from_env()
    try:
        return parse_metadata(_read_source(cfg))
    except Exception as exc:  # noqa: BLE001 - missing metadata must never fail the host
        get_logger().debug("build metadata unavailable (%s: %s); reporting %r", exc.__class__.__name__, exc, UNKNOWN)
        return BuildMetadata.unknown()


__all__ = ["UNKNOWN", "BuildMetadata", "load_metadata", "parse_metadata"]
