"""
Import Matching Logic.

Decides whether an existing import corresponds to a mapping rule:

1.  **Path matching** (`match_path`): compares the import's module path against the
    rule's old path, accepting the extension / index-file variants of the path.
    For regex paths, the single capturing group yields the user-defined segment.
2.  **Specifier classification** (`classify_specifier`): checks whether one binding
    of the declaration matches the rule's old name (fixed name, default marker or
    user-defined marker).
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Pattern, Tuple

from import_switcheroo.core.nodes import Specifier
from import_switcheroo.enums import NameMarker, SpecifierKind
from import_switcheroo.mappings.schema import ImportMapping

# Accepted spellings of the same module. Applies to every rule, in this order.
VALID_SUFFIXES: Tuple[str, ...] = ("", ".js", ".jsx", ".ts", ".tsx", "/index.js", "/index.ts")


@dataclass(frozen=True)
class PathMatch:
  """
  A successful path match.

  Attributes:
      captured (Optional[str]): Text of the regex capturing group, or None for
          literal paths.
  """

  captured: Optional[str] = None


@lru_cache(maxsize=None)
def _suffixed_patterns(pattern: Pattern[str]) -> Tuple[Pattern[str], ...]:
  return tuple(re.compile(pattern.pattern + re.escape(suffix), pattern.flags) for suffix in VALID_SUFFIXES)


def match_path(import_path: object, mapping: ImportMapping) -> Optional[PathMatch]:
  """
  Matches an import's module path against a rule's old path.

  Literal old paths match when the import path equals the old path plus one of
  `VALID_SUFFIXES`. Regex old paths match when the whole import path matches the
  regex with one of the suffixes appended.

  Args:
      import_path: The module path of the declaration. Anything that is not a
          plain string (e.g. a computed source) never matches.
      mapping: The rule to test.

  Returns:
      Optional[PathMatch]: None if there is no match.
  """
  if not isinstance(import_path, str):
    return None

  old_path = mapping.old.path
  if isinstance(old_path, re.Pattern):
    for regex in _suffixed_patterns(old_path):
      found = regex.fullmatch(import_path)
      if found:
        return PathMatch(captured=found.group(1))
    return None

  if any(import_path == old_path + suffix for suffix in VALID_SUFFIXES):
    return PathMatch()
  return None


def classify_specifier(specifier: Specifier, mapping: ImportMapping) -> bool:
  """
  Checks whether one binding matches the rule's old name.

  - ``NameMarker.DEFAULT`` matches default bindings, whatever their local name.
  - ``NameMarker.USER_DEFINED`` matches any named binding.
  - A fixed name matches a named binding whose imported (not local) name is equal.

  Namespace bindings never match.

  Args:
      specifier: The binding to classify.
      mapping: The rule whose old name is tested.

  Returns:
      bool: True if the binding should be rewritten by this rule.
  """
  old_name = mapping.old.name
  if old_name is NameMarker.DEFAULT:
    return specifier.kind == SpecifierKind.DEFAULT
  if old_name is NameMarker.USER_DEFINED:
    return specifier.kind == SpecifierKind.NAMED
  return specifier.kind == SpecifierKind.NAMED and specifier.imported == old_name
