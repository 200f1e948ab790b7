"""Configuration model for the statflat pipeline.

Provides ``StatsConfig`` with all tunable parameters and sensible defaults.
Supports loading overrides from YAML or JSON files via the ``from_file()``
classmethod.
"""

from __future__ import annotations

import json
import pathlib

from pydantic import BaseModel


class StatsConfig(BaseModel):
    """All tunable parameters with sensible defaults."""

    # --- Identity ---
    parser_version: str = "statflat:1.0.0"

    # --- Endpoint ---
    host: str = "localhost"
    port: int = 9443
    stats_path: str = "/rest/v1/monitor/stats"
    username: str | None = None
    password: str | None = None
    verify_tls: bool = False
    timeout_seconds: float = 30.0

    # --- Security / Resource Limits ---
    max_body_size_mb: int = 50
    max_depth: int = 100

    # --- Structuring ---
    expected_root: str | None = None
    include_root: bool = False
    strip_namespaces: bool = True
    skip_attribute_prefixes: list[str] = ["xmlns", "xsi"]
    preserve_whitespace: bool = True

    # --- Flattening ---
    path_separator: str = "."
    name_field: str = "Name"

    # --- Logging / PII Safety ---
    log_sample_data: bool = False

    @classmethod
    def from_file(cls, path: str) -> StatsConfig:
        """Load configuration from a YAML or JSON file.

        File format is detected by extension: ``.yaml`` / ``.yml`` for YAML,
        ``.json`` for JSON.  Keys present in the file override the
        corresponding defaults; keys not present retain their defaults.
        """
        file_path = pathlib.Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        suffix = file_path.suffix.lower()

        if suffix in (".yaml", ".yml"):
            import yaml  # type: ignore[import-untyped]

            with open(file_path) as fh:
                data = yaml.safe_load(fh)
        elif suffix == ".json":
            with open(file_path) as fh:
                data = json.load(fh)
        else:
            raise ValueError(
                f"Unsupported config file extension '{suffix}'. "
                "Use .yaml, .yml, or .json."
            )

        if data is None:
            data = {}

        return cls(**data)
