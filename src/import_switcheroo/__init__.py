"""
import-switcheroo Package.

A codemod that rewrites JavaScript/TypeScript import declarations according to
an ordered mapping table. The built-in table migrates Wasp 0.11 projects to the
Wasp 0.12 import layout (``@wasp/...`` -> ``wasp/client/...``, ``wasp/server``, ...).

Usage
-----

Simple String Migration
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import import_switcheroo as isw
    code = 'import config from "@wasp/config.js";'
    print(isw.migrate(code, path="main.ts"))
    # import { config } from "wasp/server";

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from import_switcheroo import MigrationEngine, RuntimeConfig

    engine = MigrationEngine(config=RuntimeConfig(line_width=120))
    res = engine.run(code, "main.ts")

    if res.success:
        print(res.code)
    else:
        print(f"Errors: {res.errors}")
"""

from pathlib import Path
from typing import Optional, Sequence, Union

from import_switcheroo.config import RuntimeConfig
from import_switcheroo.core.engine import MigrationEngine
from import_switcheroo.core.planner import MappingConfigurationError
from import_switcheroo.core.result import MigrationResult
from import_switcheroo.mappings.schema import ImportMapping

__version__ = "0.0.1"


def migrate(
  code: str,
  path: Union[str, Path] = "input.ts",
  mappings: Optional[Sequence[ImportMapping]] = None,
) -> str:
  """
  Rewrites the imports of a string of JS/TS code.

  This is a convenience wrapper around `MigrationEngine`. For files or batches,
  use the ``import-switcheroo`` CLI or the engine directly.

  Args:
      code (str): The source code.
      path (str | Path): File name; its extension decides whether the code is handled.
      mappings (Sequence[ImportMapping], optional): Rule table. Defaults to the
          built-in Wasp 0.11 -> 0.12 table.

  Returns:
      str: The migrated source code (``code`` itself if nothing matched).

  Raises:
      ValueError: If the code cannot be parsed or a rule cannot be applied.
  """
  engine = MigrationEngine(mappings=mappings)
  result = engine.run(code, path)

  if not result.success:
    error_msg = "\n".join(result.errors)
    raise ValueError(f"Migration failed:\n{error_msg}")

  return result.code


__all__ = [
  "ImportMapping",
  "MappingConfigurationError",
  "MigrationEngine",
  "MigrationResult",
  "RuntimeConfig",
  "migrate",
  "__version__",
]
