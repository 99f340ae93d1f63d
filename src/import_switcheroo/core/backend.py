"""
Source Backend Protocol.

Defines the narrow capability interface through which the rewrite engine
touches source code: parse text into a `Program`, build new import
declarations, and render the tree back to text. Tree queries and mutations
(`find`, `remove`, `insert`, `add_comment`, `replace_specifiers`) live on the
nodes themselves.

`TypeScriptBackend` is the implementation for ``.js``/``.jsx``/``.ts``/``.tsx``
files, built on `ScriptParser` and the printer module.
"""

from abc import ABC, abstractmethod
from typing import List

from import_switcheroo.core.nodes import ImportDeclaration, Program, Specifier
from import_switcheroo.core.parser import ScriptParser
from import_switcheroo.core.printer import DEFAULT_LINE_WIDTH, render


class SourceBackend(ABC):
  """
  Abstract base class for parser/printer backends.
  """

  @abstractmethod
  def parse(self, source: str) -> Program:
    """
    Parses source text into a mutable tree.

    Args:
        source (str): File contents.

    Returns:
        Program: The tree.

    Raises:
        SyntaxError: If the source cannot be parsed.
    """
    pass

  @abstractmethod
  def render(self, program: Program) -> str:
    """
    Renders a (possibly mutated) tree back to source text.
    """
    pass

  @abstractmethod
  def make_import(self, path: str, specifiers: List[Specifier], newline: str = "\n") -> ImportDeclaration:
    """
    Builds a new import declaration ready for insertion.

    Args:
        path (str): Module path.
        specifiers (List[Specifier]): Bindings in print order.
        newline (str): Line break ending the statement (the file's own).
    """
    pass


class TypeScriptBackend(SourceBackend):
  """
  Backend for JavaScript/TypeScript (including JSX/TSX) modules.
  """

  def __init__(self, line_width: int = DEFAULT_LINE_WIDTH):
    """
    Args:
        line_width: Width above which re-printed imports wrap one specifier per line.
    """
    self.line_width = line_width

  def parse(self, source: str) -> Program:
    return ScriptParser(source).parse()

  def render(self, program: Program) -> str:
    return render(program, self.line_width)

  def make_import(self, path: str, specifiers: List[Specifier], newline: str = "\n") -> ImportDeclaration:
    return ImportDeclaration(source=path, specifiers=list(specifiers), quote='"', trailing=newline)
