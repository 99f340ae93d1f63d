"""
Enumerations for import-switcheroo.

This module defines the closed sets of markers used by the mapping table and
the syntax tree: name sentinels for rules and the kinds of import specifiers.
"""

from enum import Enum


class NameMarker(Enum):
  """
  Placeholder names usable in an import mapping instead of a fixed name.

  Deliberately not a ``str`` mixin, so a marker can never be confused with a
  literal import name of the same spelling.
  """

  DEFAULT = "<default>"  # import x from "..."
  USER_DEFINED = "<user-defined>"  # name comes from the matched source

  @classmethod
  def from_token(cls, value: str) -> "NameMarker":
    """
    Resolves the JSON spelling of a marker (e.g. ``"<default>"``).

    Args:
        value (str): The raw token.

    Returns:
        NameMarker: The matching marker.

    Raises:
        ValueError: If the token is not a known marker spelling.
    """
    for marker in cls:
      if marker.value == value:
        return marker
    raise ValueError(f"Unknown name marker: '{value}'")


class SpecifierKind(str, Enum):
  """
  Binding forms that can appear inside an import declaration.
  """

  NAMED = "named"  # { a } / { a as b }
  DEFAULT = "default"  # a
  NAMESPACE = "namespace"  # * as a
