"""
Source Printer.

Renders a `Program` back to source text. Untouched import declarations and raw
chunks are emitted verbatim; declarations whose specifiers were replaced (or
that were created by the rewriter) are re-printed in a canonical form:

.. code-block:: typescript

    import config, { bar, type Baz, qux as quux } from "wasp/server";

Declarations longer than the configured line width put one specifier per line.
"""

import re
from typing import List

from import_switcheroo.core.nodes import ImportDeclaration, Program, RawChunk, Specifier
from import_switcheroo.enums import SpecifierKind

_IDENTIFIER = re.compile(r"^[A-Za-z_$\u00c0-\uffff][\w$\u00c0-\uffff]*$")

DEFAULT_LINE_WIDTH = 100


def print_specifier(specifier: Specifier, in_type_declaration: bool = False) -> str:
  """
  Renders a single named binding.

  Args:
      specifier: The binding to print.
      in_type_declaration: True when the enclosing declaration is ``import type``,
          which makes a per-specifier ``type`` marker redundant.

  Returns:
      str: e.g. ``type A as B``.
  """
  if specifier.kind == SpecifierKind.DEFAULT:
    return specifier.local
  if specifier.kind == SpecifierKind.NAMESPACE:
    return f"* as {specifier.local}"

  imported = specifier.imported if specifier.imported is not None else specifier.local
  if not _IDENTIFIER.match(imported):
    imported = '"' + imported.replace("\\", "\\\\").replace('"', '\\"') + '"'

  text = imported if imported == specifier.local else f"{imported} as {specifier.local}"
  if specifier.is_type and not in_type_declaration:
    text = f"type {text}"
  return text


def print_import(decl: ImportDeclaration, line_width: int = DEFAULT_LINE_WIDTH, newline: str = "\n") -> str:
  """
  Renders an import declaration (without its leading or trailing trivia).

  Args:
      decl: The declaration.
      line_width: Maximum single-line length before named specifiers are wrapped.
      newline: Line break used between wrapped specifiers.

  Returns:
      str: The statement text, terminated by ``;``.
  """
  keyword = "import type" if decl.is_type_only else "import"
  source = f"{decl.quote}{decl.source}{decl.quote}"
  tail = f" from {source}"
  if decl.attributes:
    tail += f" {decl.attributes}"
  tail += ";"

  if not decl.specifiers:
    attributes = f" {decl.attributes}" if decl.attributes else ""
    return f"{keyword} {source}{attributes};"

  head: List[str] = []
  named: List[str] = []
  for spec in decl.specifiers:
    if spec.kind == SpecifierKind.NAMED:
      named.append(print_specifier(spec, decl.is_type_only))
    else:
      head.append(print_specifier(spec, decl.is_type_only))

  if not named:
    return f"{keyword} {', '.join(head)}{tail}"

  prefix = f"{keyword} {', '.join(head)}, " if head else f"{keyword} "
  single = f"{prefix}{{ {', '.join(named)} }}{tail}"
  if len(single) <= line_width:
    return single

  lines = "".join(f"  {name},{newline}" for name in named)
  return f"{prefix}{{{newline}{lines}}}{tail}"


def render(program: Program, line_width: int = DEFAULT_LINE_WIDTH) -> str:
  """
  Renders a whole program.

  Order: header, program comments, body. Added text uses ``program.newline``.

  Args:
      program: The (possibly mutated) tree.
      line_width: Forwarded to `print_import`.

  Returns:
      str: Source text.
  """
  parts = [program.header]
  parts.extend(f"//{comment}{program.newline}" for comment in program.comments)

  for node in program.body:
    if isinstance(node, RawChunk):
      parts.append(node.text)
      continue
    text = node.raw if node.raw is not None else print_import(node, line_width, program.newline)
    parts.append(f"{node.leading}{text}{node.trailing}")

  return "".join(parts)
