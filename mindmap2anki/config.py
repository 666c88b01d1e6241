from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path

from .utils import load_json


@dataclass(frozen=True)
class ConverterConfig:
    content_class: str = "nodecontent"
    flag_alt: str = "pencil"
    breadcrumb_separator: str = " > "
    batch_tag_prefix: str = "import-"
    timestamp_format: str = "%Y-%m-%d_%H-%M"
    html_parser: str = "lxml"


def load_config(config_path: str | Path | None = None) -> ConverterConfig:
    """Load converter settings from JSON. Missing keys keep their defaults."""
    if config_path is None:
        return ConverterConfig()

    data = load_json(config_path)
    if not isinstance(data, dict):
        raise ValueError(f"config must be a JSON object: {config_path}")

    known = {f.name for f in fields(ConverterConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")

    return ConverterConfig(**{k: str(v) for k, v in data.items()})
