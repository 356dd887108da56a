"""Configuration loading for go2md (.go2md.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .rendering.constants import TemplateVariant
from .source_scanner import DEFAULT_EXTENSION

CONFIG_FILENAME = ".go2md.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ScanConfig:
    """Which files a directory walk picks up."""

    extension: str = DEFAULT_EXTENSION
    exclude_paths: List[str] = field(default_factory=list)


@dataclass
class ParseConfig:
    """Doc attachment options for the Go parser."""

    single_spec_docs: bool = False


@dataclass
class RenderConfig:
    """Template selection for the Markdown renderer."""

    variant: TemplateVariant = TemplateVariant.FIELDS
    passthrough_untagged: bool = True
    templates_dir: Optional[Path] = None


@dataclass
class OutputConfig:
    """Default destination for the rendered document."""

    path: Optional[Path] = None


@dataclass
class Go2MdConfig:
    """Represents the settings defined in .go2md.yml."""

    root: Path
    scan: ScanConfig = field(default_factory=ScanConfig)
    parse: ParseConfig = field(default_factory=ParseConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(config_path: Path) -> Go2MdConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return Go2MdConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    scan = ScanConfig()
    scan_data = _as_dict(data.get("scan"))
    if scan_data:
        extension = _as_str(scan_data.get("extension"))
        if extension:
            scan.extension = extension
        scan.exclude_paths = _as_str_list(scan_data.get("exclude_paths"))

    parse = ParseConfig()
    single_spec_docs = _as_bool(_as_dict(data.get("parse")).get("single_spec_docs"))
    if single_spec_docs is not None:
        parse.single_spec_docs = single_spec_docs

    render = RenderConfig()
    render_data = _as_dict(data.get("render"))
    if render_data:
        variant = _as_str(render_data.get("variant"))
        if variant:
            render.variant = parse_variant(variant)
        passthrough = _as_bool(render_data.get("passthrough_untagged"))
        if passthrough is not None:
            render.passthrough_untagged = passthrough
        templates_dir = _as_str(render_data.get("templates_dir"))
        if templates_dir:
            render.templates_dir = root / templates_dir

    output = OutputConfig()
    output_data = _as_dict(data.get("output"))
    if output_data:
        output_path = _as_str(output_data.get("path"))
        if output_path:
            output.path = root / output_path

    return Go2MdConfig(root=root, scan=scan, parse=parse, render=render, output=output)


def parse_variant(value: str) -> TemplateVariant:
    """Return the template variant named by ``value``."""
    try:
        return TemplateVariant(value.strip().lower())
    except ValueError as exc:
        choices = ", ".join(variant.value for variant in TemplateVariant)
        raise ConfigError(f"Unknown template variant '{value}' (expected one of: {choices})") from exc


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
