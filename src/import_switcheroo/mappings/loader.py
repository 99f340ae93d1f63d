"""
File Loading Logic for Mapping Tables.

Deserializes a JSON mapping table from disk and validates every entry against
``ImportMapping``. Two layouts are accepted:

.. code-block:: json

    [{"old": {"path": "@wasp/config", "name": "<default>"}, "new": {"path": "wasp/server", "name": "config"}}]

or an object wrapping the same list under a ``"mappings"`` key.
"""

import json
from pathlib import Path
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from import_switcheroo.mappings.schema import ImportMapping
from import_switcheroo.mappings.wasp_0_11_to_0_12 import WASP_0_11_TO_0_12


def parse_mappings(content: Any) -> Tuple[ImportMapping, ...]:
  """
  Validates raw (already deserialized) table data.

  Args:
      content: A list of rule records, or a dict with a ``mappings`` list.

  Returns:
      Tuple[ImportMapping, ...]: The validated table, order preserved.

  Raises:
      ValueError: If the layout is wrong or any entry fails validation.
  """
  if isinstance(content, dict):
    if "mappings" not in content:
      raise ValueError("Mapping file object must contain a 'mappings' list.")
    content = content["mappings"]

  if not isinstance(content, list):
    raise ValueError(f"Mapping table must be a list, got {type(content).__name__}.")

  rules: List[ImportMapping] = []
  for index, entry in enumerate(content):
    try:
      rules.append(ImportMapping.model_validate(entry))
    except ValidationError as e:
      raise ValueError(f"Invalid mapping at index {index}: {e}")
  return tuple(rules)


def load_mappings(path: Optional[Path] = None) -> Tuple[ImportMapping, ...]:
  """
  Loads a mapping table from a JSON file.

  Args:
      path: JSON file to read. If None, the built-in Wasp 0.11 -> 0.12 table is returned.

  Returns:
      Tuple[ImportMapping, ...]: The validated table.

  Raises:
      ValueError: If the file is not valid JSON or contains invalid entries.
      FileNotFoundError: If the file does not exist.
  """
  if path is None:
    return WASP_0_11_TO_0_12

  with open(path, "r", encoding="utf-8") as f:
    try:
      content = json.load(f)
    except json.JSONDecodeError as e:
      raise ValueError(f"Mapping file {path.name} is not valid JSON: {e}")

  return parse_mappings(content)
