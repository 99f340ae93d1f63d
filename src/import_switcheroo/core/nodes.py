"""
Module-Level Syntax Tree Nodes.

Defines the data structures for a JS/TS source file as seen by the import
rewriter. Only top-level import declarations are structured; every other piece
of source text is kept verbatim in ``RawChunk`` nodes so untouched code
round-trips byte-for-byte.

Nodes are mutable and compared by identity, so a declaration can be located
and removed from the ``Program`` body even when another declaration has the
same content.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Type, TypeVar, Union

from import_switcheroo.enums import SpecifierKind

N = TypeVar("N")


@dataclass
class Specifier:
  """
  One binding inside an import declaration.

  Attributes:
      kind (SpecifierKind): Named, default or namespace binding.
      local (str): The identifier bound in the importing file.
      imported (Optional[str]): The exported name (named specifiers only). May be
          a non-identifier string for ``{ "a-b" as c }``.
      is_type (bool): True for a per-specifier ``type`` marker (``{ type A }``).
  """

  kind: SpecifierKind
  local: str
  imported: Optional[str] = None
  is_type: bool = False

  @property
  def name(self) -> str:
    """Human-facing name: the imported name for named specifiers, the local one otherwise."""
    if self.kind == SpecifierKind.NAMED and self.imported is not None:
      return self.imported
    return self.local

  @classmethod
  def named(cls, imported: str, local: Optional[str] = None, is_type: bool = False) -> "Specifier":
    return cls(SpecifierKind.NAMED, local or imported, imported, is_type)

  @classmethod
  def default(cls, local: str) -> "Specifier":
    return cls(SpecifierKind.DEFAULT, local)

  @classmethod
  def namespace(cls, local: str) -> "Specifier":
    return cls(SpecifierKind.NAMESPACE, local)


@dataclass(eq=False)
class ImportDeclaration:
  """
  A top-level ``import ... from "..."`` statement.

  Attributes:
      source (str): The module path, unquoted.
      specifiers (List[Specifier]): Bindings in source order. Empty for side-effect imports.
      is_type_only (bool): True for ``import type { ... }``.
      quote (str): Quote character used for the module path.
      attributes (Optional[str]): Raw ``with { ... }`` / ``assert { ... }`` clause.
      leading (str): Comment lines directly above the statement, owned by it.
      trailing (str): Same-line trailing comment and the line break.
      raw (Optional[str]): Original statement text. ``None`` once the node was modified
          (or for nodes created by the rewriter), which forces re-printing.
  """

  source: str
  specifiers: List[Specifier] = field(default_factory=list)
  is_type_only: bool = False
  quote: str = '"'
  attributes: Optional[str] = None
  leading: str = ""
  trailing: str = "\n"
  raw: Optional[str] = None

  @property
  def modified(self) -> bool:
    return self.raw is None

  def replace_specifiers(self, specifiers: List[Specifier]) -> None:
    """
    Replaces the specifier list and marks the node for re-printing.

    Args:
        specifiers: The new bindings, in the order they should be printed.
    """
    self.specifiers = list(specifiers)
    self.raw = None


@dataclass(eq=False)
class RawChunk:
  """
  Verbatim source text between (or around) import declarations.
  """

  text: str


Statement = Union[ImportDeclaration, RawChunk]


@dataclass
class Program:
  """
  Root of a parsed source file.

  Attributes:
      header (str): Byte order mark, shebang line and directive prologue
          (``"use client";``). Always printed first; the body begins after it.
      body (List[Statement]): Import declarations and raw chunks in source order.
      comments (List[str]): Program-level line comments added by the rewriter,
          printed at the top of the body.
      newline (str): Line break of the file (LF or CRLF), used for text the
          rewriter adds.
  """

  header: str = ""
  body: List[Statement] = field(default_factory=list)
  comments: List[str] = field(default_factory=list)
  newline: str = "\n"

  def find(self, kind: Type[N], predicate: Optional[Callable[[N], bool]] = None) -> List[N]:
    """
    Returns a snapshot of body nodes of the given type, in source order.

    The returned list is detached from the body, so callers may mutate the
    program while iterating it.

    Args:
        kind: Node class to look for (e.g. ``ImportDeclaration``).
        predicate: Optional filter applied to each candidate.

    Returns:
        List of matching nodes.
    """
    return [n for n in self.body if isinstance(n, kind) and (predicate is None or predicate(n))]

  def remove(self, node: Statement) -> None:
    """
    Excises a node (and any text it owns) from the body.

    Raises:
        ValueError: If the node is not part of this program.
    """
    self.body.remove(node)

  def insert(self, index: int, node: Statement) -> None:
    """Inserts a node at ``index`` of the body."""
    self.body.insert(index, node)

  def add_comment(self, text: str) -> None:
    """
    Appends a program-level line comment.

    Args:
        text: Text following ``//``, usually starting with a space.
    """
    self.comments.append(text)
