"""
Runtime Configuration Store.

Settings are read from the ``[tool.import_switcheroo]`` table of the nearest
``pyproject.toml`` and overridden by explicit (CLI) arguments:

.. code-block:: toml

    [tool.import_switcheroo]
    extensions = [".ts", ".tsx"]
    mapping_file = "migrations/imports.json"
    line_width = 120
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

DEFAULT_EXTENSIONS: Tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx")


class RuntimeConfig(BaseModel):
  """
  Configuration container for the migration engine and the CLI driver.
  """

  extensions: List[str] = Field(
    default_factory=lambda: list(DEFAULT_EXTENSIONS),
    description="File extensions the engine rewrites; anything else passes through.",
  )
  mapping_file: Optional[Path] = Field(None, description="JSON mapping table replacing the built-in one.")
  line_width: int = Field(100, gt=0, description="Width above which rewritten imports wrap.")
  dry_run: bool = Field(False, description="If True, rewritten files are not written back.")
  print_output: bool = Field(False, description="If True, rewritten code is echoed to the console.")

  @field_validator("extensions")
  @classmethod
  def normalize_extensions(cls, v: List[str]) -> List[str]:
    """
    Lower-cases extensions and adds the leading dot.

    Args:
        v (List[str]): Raw extensions, e.g. ``["ts", ".TSX"]``.

    Returns:
        List[str]: e.g. ``[".ts", ".tsx"]``.

    Raises:
        ValueError: If an extension is empty.
    """
    cleaned = []
    for ext in v:
      ext = ext.strip().lower()
      if not ext or ext == ".":
        raise ValueError("File extensions must not be empty.")
      cleaned.append(ext if ext.startswith(".") else f".{ext}")
    return cleaned

  @classmethod
  def load(
    cls,
    extensions: Optional[List[str]] = None,
    mapping_file: Optional[Path] = None,
    line_width: Optional[int] = None,
    dry_run: Optional[bool] = None,
    print_output: Optional[bool] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        extensions (Optional[List[str]]): Override for handled file extensions.
        mapping_file (Optional[Path]): Override for the mapping table file.
        line_width (Optional[int]): Override for the wrap width.
        dry_run (Optional[bool]): Override for dry-run mode.
        print_output (Optional[bool]): Override for echoing rewritten code.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, toml_dir = _load_toml_settings(start_dir)

    final_extensions = extensions or toml_config.get("extensions") or list(DEFAULT_EXTENSIONS)

    final_mapping = mapping_file
    if final_mapping is None and "mapping_file" in toml_config:
      final_mapping = Path(toml_config["mapping_file"])
      if toml_dir and not final_mapping.is_absolute():
        final_mapping = (toml_dir / final_mapping).resolve()

    final_width = line_width if line_width is not None else toml_config.get("line_width", 100)
    final_dry = dry_run if dry_run is not None else toml_config.get("dry_run", False)
    final_print = print_output if print_output is not None else toml_config.get("print_output", False)

    return cls(
      extensions=final_extensions,
      mapping_file=final_mapping,
      line_width=final_width,
      dry_run=final_dry,
      print_output=final_print,
    )


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches the start directory and its parents for 'pyproject.toml' and extracts config.

  An unreadable or malformed file yields no settings.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get("import_switcheroo", {}), parent

  return {}, None
