"""Load SiteConfig from autosite.yaml / autosite.toml if present.

Merges file config with CLI kwargs. CLI overrides file.

Example ``autosite.yaml``::

    autosite:
      title: Some title
      glob: pages/*.tmpl
      live_domain: example.com
      templates: [base.tmpl, nav.tmpl]
      remap:
        /index: /
      redirects:
        /feed: /blog/feed

"""

from __future__ import annotations

import dataclasses
import tomllib
from collections.abc import Mapping
from pathlib import Path

import yaml

from autosite._errors import ConfigError
from autosite.config import SiteConfig

_FIELDS: frozenset[str] = frozenset(
    f.name for f in dataclasses.fields(SiteConfig) if f.name != "root"
)

# Keys holding (a, b) pairs; accepted as a mapping or a list of pairs
_PAIR_KEYS = ("redirects", "remap")


def load_config(
    root: Path,
    *,
    defaults: Mapping[str, object] | None = None,
    **overrides: object,
) -> SiteConfig:
    """Load SiteConfig from root, optionally merging autosite.yaml/.toml.

    Looks for autosite.yaml, autosite.yml, or autosite.toml in root. If
    found, loads and merges with overrides.  Precedence, lowest first:
    SiteConfig field defaults, *defaults*, the config file, *overrides*.
    ``None`` overrides are ignored so unset CLI flags keep file values.

    Raises:
        ConfigError: If a config file exists but cannot be parsed, or
            carries values of the wrong shape.

    """
    file_config = _read_site_config(root)
    merged = {
        **(defaults or {}),
        **file_config,
        **{k: v for k, v in overrides.items() if v is not None},
    }
    return SiteConfig(root=root, **_normalize(merged))  # type: ignore[arg-type]


def _read_site_config(root: Path) -> dict[str, object]:
    """Read site config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("autosite.yaml", "autosite.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "autosite.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return _flatten_site_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_site_section(data)


def _flatten_site_section(data: dict[str, object]) -> dict[str, object]:
    """Extract autosite.* keys and known top-level keys into one dict."""
    result: dict[str, object] = {}
    for k, v in data.items():
        if k != "autosite" and k in _FIELDS:
            result[k] = v
    section = data.get("autosite")
    if isinstance(section, dict):
        for k, v in section.items():
            if k not in _FIELDS:
                msg = f"unknown autosite config key {k!r}"
                raise ConfigError(msg)
            result[k] = v
    return result


def _normalize(values: dict[str, object]) -> dict[str, object]:
    """Coerce file-shaped values (lists, mappings) into SiteConfig's tuples."""
    result = dict(values)
    templates = result.get("templates")
    if isinstance(templates, str):
        result["templates"] = (templates,)
    elif isinstance(templates, (list, tuple)):
        result["templates"] = tuple(str(t) for t in templates)
    for key in _PAIR_KEYS:
        if key in result:
            result[key] = _pairs(key, result[key])
    return result


def _pairs(key: str, value: object) -> tuple[tuple[str, str], ...]:
    if isinstance(value, dict):
        return tuple((str(a), str(b)) for a, b in value.items())
    if isinstance(value, (list, tuple)):
        pairs: list[tuple[str, str]] = []
        for item in value:
            if not isinstance(item, (list, tuple)) or len(item) != 2:
                msg = f"{key} entries must be [from, to] pairs, got {item!r}"
                raise ConfigError(msg)
            pairs.append((str(item[0]), str(item[1])))
        return tuple(pairs)
    msg = f"{key} must be a mapping or a list of pairs, got {type(value).__name__}"
    raise ConfigError(msg)
