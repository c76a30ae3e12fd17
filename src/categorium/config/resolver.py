"""Override parsing and precedence resolution for Categorium settings.

Overrides arrive as raw strings (environment variables, ``config set``) or as
mappings (the YAML file, CLI flags). Raw strings are parsed with
:func:`parse_value`, mappings are expanded with :func:`expand_dotted`, and
the layers are merged onto the defaults in order before validation.
"""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from copy import deepcopy
from typing import Any, Mapping, Sequence

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import CategoriumConfig

ENV_PREFIX = "CATEGORIUM__"

# Settings that hold plain keyword lists; a comma-separated string is accepted.
KEYWORD_LIST_KEYS = frozenset(
    {
        ("strategies", "artists"),
        ("strategies", "genres"),
        ("palette", "icons"),
        ("palette", "colors"),
    }
)


def parse_value(raw: str, path: Sequence[str] = ()) -> Any:
    """Parse a raw override string for the setting at ``path``.

    Values are read as YAML literals, with two exceptions: a value starting
    with ``#`` is kept as text (YAML would read a hex colour as a comment),
    and keyword lists accept ``"jazz, rock"`` as well as ``[jazz, rock]``.

    Args:
        raw: Raw override text.
        path: Setting path such as ``("strategies", "genres")``.

    Returns:
        Any: The parsed value.

    Raises:
        ConfigError: If the text is not valid YAML.
    """
    text = raw.strip()
    if text.startswith("#"):
        return text

    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Unable to parse value {raw!r}: {exc}") from exc

    if tuple(path) in KEYWORD_LIST_KEYS and isinstance(parsed, str):
        return [item.strip() for item in parsed.split(",") if item.strip()]
    return parsed


def collect_env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    """Collect ``CATEGORIUM__SECTION__KEY`` variables into nested overrides."""
    overrides: dict[str, Any] = {}
    for key, raw_value in env.items():
        if not key.startswith(ENV_PREFIX):
            continue
        path = [segment.lower() for segment in key[len(ENV_PREFIX) :].split("__")]
        if not all(path):
            continue
        assign_nested(overrides, path, parse_value(raw_value, path))
    return overrides


def assign_nested(target: dict[str, Any], path: Sequence[str], value: Any) -> None:
    """Assign ``value`` at ``path`` inside ``target``, creating mappings on the way.

    Raises:
        ConfigError: If a segment along the path already holds a non-mapping.
    """
    node = target
    for segment in path[:-1]:
        child = node.setdefault(segment, {})
        if not isinstance(child, dict):
            raise ConfigError(f"Cannot assign {'.'.join(path)}; {segment} is not a mapping.")
        node = child
    node[path[-1]] = value


def expand_dotted(source: Mapping[str, Any], *, source_name: str) -> dict[str, Any]:
    """Return ``source`` as nested mappings, expanding keys like ``logging.level``."""
    if not isinstance(source, MappingABC):
        raise ConfigError(f"{source_name.capitalize()} overrides must be a mapping.")

    result: dict[str, Any] = {}
    for key, value in source.items():
        if not isinstance(key, str):
            raise ConfigError(f"{source_name.capitalize()} override keys must be strings.")
        if isinstance(value, MappingABC):
            value = expand_dotted(value, source_name=source_name)
        nested: Any = value
        for segment in reversed(key.split(".")):
            nested = {segment: nested}
        result = _deep_merge(result, nested)
    return result


def resolve_with_precedence(
    *,
    defaults: CategoriumConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> CategoriumConfig:
    """Merge override layers onto ``defaults`` and validate the result.

    Later layers win: file, then environment, then CLI.

    Raises:
        ConfigError: If a layer is malformed or the merged values are invalid.
    """
    merged = defaults.model_dump(mode="json")
    for name, layer in (
        ("file", file_overrides),
        ("environment", env_overrides),
        ("cli", cli_overrides),
    ):
        if layer is not None:
            merged = _deep_merge(merged, expand_dotted(layer, source_name=name))

    try:
        return CategoriumConfig.model_validate(merged)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigError(f"Invalid configuration values: {problems}") from exc


def _deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = deepcopy(dict(base))
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(value, MappingABC) and isinstance(current, MappingABC):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


__all__ = [
    "ENV_PREFIX",
    "KEYWORD_LIST_KEYS",
    "assign_nested",
    "collect_env_overrides",
    "expand_dotted",
    "parse_value",
    "resolve_with_precedence",
]
