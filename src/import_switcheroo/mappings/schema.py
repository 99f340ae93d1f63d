"""
Pydantic Schemas for Import Mappings.

This module defines the records that make up a mapping table. Each
``ImportMapping`` describes how one old import (module path + imported name)
is rewritten into a new import, or dropped entirely when ``new`` is ``None``.

The same schema validates both the built-in Python table and JSON tables
loaded from disk (see ``import_switcheroo.mappings.loader``). In JSON, a regex
path is spelled ``{"regex": "<source>"}`` and name markers are spelled
``"<default>"`` / ``"<user-defined>"``.
"""

import re
from typing import Any, Optional, Pattern, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from import_switcheroo.enums import NameMarker

_MARKER_TOKENS = {marker.value for marker in NameMarker}


def _coerce_marker(value: Any) -> Any:
  if isinstance(value, str) and value in _MARKER_TOKENS:
    return NameMarker.from_token(value)
  return value


def format_name(name: Union[NameMarker, str]) -> str:
  """
  Renders an import name (or marker) for human-readable output.

  Args:
      name: A fixed name or a ``NameMarker``.

  Returns:
      str: The fixed name, or the marker token (e.g. ``<default>``).
  """
  if isinstance(name, NameMarker):
    return name.value
  return name


def format_path(path: Union[str, Pattern[str]]) -> str:
  """
  Renders an import path for human-readable output.

  Regex paths are wrapped in slashes (``/@wasp/jobs/(\\w+)/``).
  """
  if isinstance(path, re.Pattern):
    return f"/{path.pattern}/"
  return path


class OldImport(BaseModel):
  """
  The import to look for.

  Attributes:
      path: Module path without extension or ``/index`` suffix, or a regex with
            exactly one capturing group for the user-defined part of the path.
      name: Fixed imported name, ``NameMarker.DEFAULT`` for the default import,
            or ``NameMarker.USER_DEFINED`` for any named import.
  """

  model_config = ConfigDict(frozen=True)

  path: Union[str, Pattern[str]] = Field(..., description="Old module path (literal or single-group regex).")
  name: Union[NameMarker, str] = Field(..., description="Old imported name or marker.")

  @field_validator("path", mode="before")
  @classmethod
  def coerce_regex(cls, v: Any) -> Any:
    """
    Compiles the JSON spelling ``{"regex": "..."}`` into a pattern.

    Raises:
        ValueError: If the object form carries anything besides ``regex``.
    """
    if isinstance(v, dict):
      if set(v) != {"regex"}:
        raise ValueError(f"Regex path must be written as {{'regex': '<source>'}}, got keys {sorted(v)}")
      try:
        return re.compile(v["regex"])
      except re.error as e:
        raise ValueError(f"Invalid regex path '{v['regex']}': {e}")
    return v

  @field_validator("path")
  @classmethod
  def validate_single_group(cls, v: Union[str, Pattern[str]]) -> Union[str, Pattern[str]]:
    """
    Ensures a regex path captures exactly one user-defined segment.

    Raises:
        ValueError: If the regex has zero or several capturing groups.
    """
    if isinstance(v, re.Pattern) and v.groups != 1:
      raise ValueError(f"Regex path '{v.pattern}' must have exactly one capturing group, found {v.groups}.")
    return v

  @field_validator("name", mode="before")
  @classmethod
  def coerce_marker(cls, v: Any) -> Any:
    return _coerce_marker(v)


class NewImport(BaseModel):
  """
  The import to produce.

  Attributes:
      path: New module path.
      name: Fixed new name, or ``NameMarker.USER_DEFINED`` to carry the name over
            from the old specifier or the regex capture.
      is_type: Forces the produced specifier to be (or not be) type-only.
               ``None`` keeps the type-only flag of the old import.
  """

  model_config = ConfigDict(frozen=True, populate_by_name=True)

  path: str = Field(..., description="New module path.")
  name: Union[NameMarker, str] = Field(..., description="New imported name or USER_DEFINED.")
  is_type: Optional[bool] = Field(None, alias="isType", description="Type-only override.")

  @field_validator("name", mode="before")
  @classmethod
  def coerce_marker(cls, v: Any) -> Any:
    return _coerce_marker(v)

  @field_validator("name")
  @classmethod
  def reject_default(cls, v: Union[NameMarker, str]) -> Union[NameMarker, str]:
    """
    New imports are always named imports.

    Raises:
        ValueError: If the name is ``NameMarker.DEFAULT``.
    """
    if v is NameMarker.DEFAULT:
      raise ValueError("New import name cannot be the default marker.")
    return v


class ImportMapping(BaseModel):
  """
  One row of the rewrite table.

  ``new`` must be given explicitly; ``None`` marks a deprecated import that is
  removed without replacement.
  """

  model_config = ConfigDict(frozen=True)

  old: OldImport
  new: Optional[NewImport]

  def describe(self) -> str:
    """
    Stable one-line identity used in error messages and listings.

    Returns:
        str: e.g. ``@wasp/config:<default> -> wasp/server:config``.
    """
    old = f"{format_path(self.old.path)}:{format_name(self.old.name)}"
    if self.new is None:
      return f"{old} -> <removed>"
    suffix = " (type)" if self.new.is_type else ""
    return f"{old} -> {self.new.path}:{format_name(self.new.name)}{suffix}"
