"""Package metadata for buildstamp.

Expose a single source of truth for the package version. Prefer reading from
importlib.metadata so that an editable install or wheel always reports the
version declared in pyproject.toml. Fallback to a hardcoded string when the
distribution metadata is unavailable (direct source usage without install).

The build provenance of the *host* distribution lives in ``buildstamp.info``.
"""

from __future__ import annotations

from importlib import metadata as _metadata

__all__ = ["__version__"]

_FALLBACK_VERSION = "0.1.0"  # MUST match pyproject.toml [project].version

try:  # pragma: no cover - success path covered indirectly via packaging
	__version__ = _metadata.version("buildstamp")  # type: ignore[assignment]
except Exception:  # pragma: no cover - fallback exercised if metadata missing
	__version__ = _FALLBACK_VERSION
