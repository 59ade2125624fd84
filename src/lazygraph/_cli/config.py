"""Configuration loading from pyproject.toml."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lazygraph._errors import ConfigError

__all__ = ["ConfigError", "LazygraphConfig", "find_pyproject_toml", "get_config", "load_config"]


class LazygraphConfig(BaseModel):
    """Configuration loaded from the [tool.lazygraph] table of pyproject.toml.

    Attributes:
        precision: Decimal digits used when printing results.
        inputs: Default input values, by input name.
        project_root: Directory containing the pyproject.toml, if one was found.

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    precision: int = Field(default=5, ge=0)
    inputs: dict[str, float] = Field(default_factory=dict)
    project_root: Path | None = None


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


def load_config(pyproject_path: Path) -> LazygraphConfig:
    """Load and validate [tool.lazygraph] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed LazygraphConfig

    Raises:
        ConfigError: If the file is not valid TOML or the table has invalid values.

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("lazygraph", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.lazygraph] configuration: expected a table"
        raise ConfigError(msg)

    try:
        return LazygraphConfig(**section, project_root=project_root)
    except (ValidationError, TypeError) as e:
        msg = f"Invalid [tool.lazygraph] configuration in {pyproject_path}: {e}"
        raise ConfigError(msg) from e


def get_config() -> LazygraphConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        LazygraphConfig (defaults if no pyproject.toml or no [tool.lazygraph] table)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return LazygraphConfig()
    return load_config(pyproject_path)
