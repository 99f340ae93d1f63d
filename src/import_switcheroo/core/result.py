"""
Data structures representing the output of a migration run.

This module defines the `MigrationResult` Pydantic model, which encapsulates
the rewritten code, any errors encountered, and the execution trace.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class MigrationResult(BaseModel):
  """
  Container for the result of migrating a single file.
  """

  code: str = Field(default="", description="The rewritten (or original) source code.")
  changed: bool = Field(default=False, description="True if any import was rewritten.")
  skipped: bool = Field(default=False, description="True if the file type is not handled.")
  errors: List[str] = Field(default_factory=list, description="List of error messages encountered.")
  success: bool = Field(
    default=True,
    description="True if the file was processed without a parse or configuration error.",
  )
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0

  @property
  def status(self) -> str:
    """
    Summary bucket of this result.

    Returns:
        str: ``error``, ``skipped``, ``ok`` (rewritten) or ``unmodified``.
    """
    if not self.success:
      return "error"
    if self.skipped:
      return "skipped"
    if self.changed:
      return "ok"
    return "unmodified"
