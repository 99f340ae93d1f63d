"""
Replacement Import Aggregation.

Collects the replacement bindings produced while a file is rewritten, keyed by
destination module path. One aggregator lives for exactly one file; the engine
flushes it into new import declarations once every rule has been applied.
"""

from typing import Dict, Iterator, List, Tuple

from import_switcheroo.core.nodes import Specifier


class ImportAggregator:
  """
  Ordered multimap of destination path -> bindings.

  Paths iterate in first-insertion order. Bindings are never deduplicated, so
  two old imports that resolve to the same binding produce it twice.
  """

  def __init__(self) -> None:
    self._by_path: Dict[str, List[Specifier]] = {}

  def add(self, path: str, specifier: Specifier) -> None:
    """
    Appends a binding for ``path``, creating the entry if needed.

    Args:
        path: Destination module path.
        specifier: The replacement binding.
    """
    self._by_path.setdefault(path, []).append(specifier)

  def items(self) -> Iterator[Tuple[str, List[Specifier]]]:
    """Yields (path, bindings) pairs in first-insertion order."""
    for path, specifiers in self._by_path.items():
      yield path, list(specifiers)

  def __len__(self) -> int:
    return len(self._by_path)

  def __contains__(self, path: object) -> bool:
    return path in self._by_path
