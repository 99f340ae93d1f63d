"""
Import Mapping Tables.

Exposes the rule schema, the built-in Wasp 0.11 -> 0.12 table, and the JSON
loader used for custom tables.
"""

from import_switcheroo.mappings.loader import load_mappings, parse_mappings
from import_switcheroo.mappings.schema import ImportMapping, NewImport, OldImport
from import_switcheroo.mappings.wasp_0_11_to_0_12 import WASP_0_11_TO_0_12

__all__ = [
  "ImportMapping",
  "NewImport",
  "OldImport",
  "WASP_0_11_TO_0_12",
  "load_mappings",
  "parse_mappings",
]
