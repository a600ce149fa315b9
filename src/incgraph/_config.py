"""Graph configuration, optionally loaded from pyproject.toml.

Example:
    [tool.incgraph]
    key-policy = "exact"
    edge-policy = "rebuild"

"""

import tomllib
from dataclasses import dataclass
from enum import StrEnum, auto
from pathlib import Path
from typing import TypeVar

from ._errors import ConfigError

E = TypeVar("E", bound=StrEnum)
from ._keys import KeyPolicy


class EdgePolicy(StrEnum):
    """When a node's dependency edges are torn down before a re-derivation."""

    # Only when re-deriving a dirty node; a clean node keeps the union of the
    # edges used by all of its cached argument keys.
    ACCUMULATE = auto()
    # Before every non-cached evaluation, keeping only the latest call's edges.
    REBUILD = auto()


@dataclass(slots=True, frozen=True)
class GraphConfig:
    """Behavioral knobs of a Graph."""

    key_policy: KeyPolicy = KeyPolicy.TRUNCATE
    edge_policy: EdgePolicy = EdgePolicy.ACCUMULATE


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_choice(section: dict[str, object], key: str, enum_type: type[E], default: E) -> E:
    if key not in section:
        return default
    value = section[key]
    if not isinstance(value, str):
        msg = f"Invalid [tool.incgraph].{key}: expected string"
        raise ConfigError(msg)
    try:
        return enum_type(value.lower())
    except ValueError as e:
        choices = ", ".join(repr(m.value) for m in enum_type)
        msg = f"Invalid [tool.incgraph].{key} '{value}'. Expected one of: {choices}"
        raise ConfigError(msg) from e


def load_config(pyproject_path: Path) -> GraphConfig:
    """Load and validate the [tool.incgraph] section of a pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed GraphConfig. Defaults are used for anything not set.

    Raises:
        ConfigError: If the file is not valid TOML or a value is invalid.

    """
    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("incgraph", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.incgraph]: expected a table"
        raise ConfigError(msg)

    unknown = set(section) - {"key-policy", "edge-policy"}
    if unknown:
        msg = f"Unknown [tool.incgraph] keys: {', '.join(sorted(unknown))}"
        raise ConfigError(msg)

    return GraphConfig(
        key_policy=_parse_choice(section, "key-policy", KeyPolicy, KeyPolicy.TRUNCATE),
        edge_policy=_parse_choice(section, "edge-policy", EdgePolicy, EdgePolicy.ACCUMULATE),
    )


def get_config() -> GraphConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        GraphConfig (defaults if no pyproject.toml or no [tool.incgraph] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return GraphConfig()
    return load_config(pyproject_path)
