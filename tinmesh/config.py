from __future__ import annotations
from dataclasses import dataclass, fields, replace as _replace
import os

DUPLICATE_MODES = ("drop", "error")
BACKENDS = ("internal", "scipy")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_INPUT = "data.csv"
DEFAULT_OUTPUT = "mesh.raw"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # CSV
    delimiter: str = os.getenv("TINMESH_DELIMITER", ",")
    header: bool = _env_bool("TINMESH_HEADER", True)

    # тріангуляція
    duplicates: str = os.getenv("TINMESH_DUPLICATES", "drop")
    backend: str = os.getenv("TINMESH_BACKEND", "internal")

    log_level: str = os.getenv("TINMESH_LOG_LEVEL", "INFO")

    def replace(self, **overrides) -> Settings:
        """Копія з перевизначеннями; None означає «залишити як є» (зручно для argparse)."""
        names = {f.name for f in fields(self)}
        unknown = set(overrides) - names
        if unknown:
            raise ValueError(f"Unknown settings: {sorted(unknown)}")
        return _replace(self, **{k: v for k, v in overrides.items() if v is not None})


settings = Settings()
