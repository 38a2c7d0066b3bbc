from __future__ import annotations

"""Shared helpers for configuration loading and validation."""

from typing import Any, Mapping


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return a mapping section from root config.

    Args:
        raw: Root configuration mapping.
        key: Section name.
        required: Whether the section must exist.

    Returns:
        Section mapping, or empty mapping for optional missing sections.

    Raises:
        ValueError: If section is required but missing.
        TypeError: If section is not a mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise ValueError(f"Missing required config: {key}")
        return {}
    if not isinstance(section, Mapping):
        raise TypeError(f"{key} must be an object")
    return section


def get_required_value(section: Mapping[str, Any], field: str, config_key: str) -> Any:
    """Return a required field value, raising ValueError naming `config_key`."""
    if field not in section:
        raise ValueError(f"Missing required config: {config_key}")
    return section[field]


def expect_str(value: Any, config_key: str) -> str:
    """Validate and return string value."""
    if not isinstance(value, str):
        raise TypeError(f"{config_key} must be a string")
    return value


def expect_optional_str(value: Any, config_key: str) -> str | None:
    """Validate a string that may be null; blank strings become None."""
    if value is None:
        return None
    return expect_str(value, config_key).strip() or None


def expect_bool(value: Any, config_key: str) -> bool:
    """Validate and return boolean value."""
    if not isinstance(value, bool):
        raise TypeError(f"{config_key} must be a boolean")
    return value


def expect_int(value: Any, config_key: str) -> int:
    """Validate and return integer value (excluding bool)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{config_key} must be an integer")
    return value


def expect_optional_int(value: Any, config_key: str) -> int | None:
    """Validate an integer that may be null."""
    if value is None:
        return None
    return expect_int(value, config_key)


def expect_int_mapping(value: Any, config_key: str) -> dict[str, int]:
    """Validate a mapping of string keys to integers."""
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"{config_key} must be an object")
    out: dict[str, int] = {}
    for key, item in value.items():
        if not isinstance(key, str):
            raise TypeError(f"{config_key} keys must be strings")
        out[key] = expect_int(item, f"{config_key}.{key}")
    return out
