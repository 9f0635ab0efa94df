import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "BUILDSTAMP_"


@dataclass
class ProvenanceConfig:
    # Name printed in front of the version ("<product> <version>")
    product_name: str = "Buildstamp"
    # Explicit metadata file; when unset the embedded package resource is used
    metadata_path: Optional[str] = None
    # Embedded resource written by the packaging step
    resource_package: str = "buildstamp"
    resource_name: str = "build_info.json"
    # Introspection registry namespace and category label
    domain: str = "buildstamp"
    category: str = "Version"
    # Level for the "buildstamp" logger (DEBUG shows metadata load failures)
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProvenanceConfig":
        """Build a config from ``BUILDSTAMP_*`` variables; blank values are ignored."""
        env = os.environ if environ is None else environ
        cfg = cls()
        for attr in ("product_name", "metadata_path", "domain", "log_level"):
            raw = env.get(ENV_PREFIX + attr.upper(), "").strip()
            if raw:
                setattr(cfg, attr, raw)
        return cfg
