"""
JS/TS Module Parser.

This module provides the `ScriptParser`, which converts a token stream (from
`ScriptLexer`) into a `Program` whose body interleaves structured
`ImportDeclaration` nodes with verbatim `RawChunk` text.

Capabilities:
- Recognises top-level import declarations only (brace depth 0, at statement start).
  An unindented import that parses resets a brace count thrown off by JSX text.
- Parses default, namespace and named bindings, ``as`` aliases, string export names,
  ``import type`` declarations, per-specifier ``type`` markers, side-effect imports
  and ``with { ... }`` / ``assert { ... }`` attribute clauses.
- Ignores ``import(...)``, ``import.meta`` and TypeScript ``import x = require(...)``.
- Splits off a file header (byte order mark, shebang and directive prologue such as ``"use client";``).
- Assigns trivia: contiguous comment lines directly above an import are its
  leading comments; a same-line trailing comment and the line break are its trailing text.
"""

import re
from typing import List, Optional, Tuple

from import_switcheroo.core.nodes import ImportDeclaration, Program, RawChunk, Specifier
from import_switcheroo.core.tokens import BOM, ScriptLexer, Token, TokenType
from import_switcheroo.enums import SpecifierKind

# Rest of a line after a statement: blanks, block comments, an optional line comment, the line break.
_TRAILING = re.compile(r"[ \t]*(?:/\*(?:(?!\*/)[^\n])*\*/[ \t]*)*(?://[^\n]*)?(?:\r?\n|\Z)")
_ESCAPE = re.compile(r"\\(.)", re.DOTALL)


def _detect_newline(code: str) -> str:
  """Line break style of a file, taken from its first line break."""
  first = code.find("\n")
  if first > 0 and code[first - 1] == "\r":
    return "\r\n"
  return "\n"


def unquote(literal: str) -> str:
  """
  Strips the quotes of a JS string literal and resolves simple escapes.

  Args:
      literal: Raw literal text including quotes (e.g. ``"@wasp/config"``).

  Returns:
      str: The string value.
  """
  return _ESCAPE.sub(r"\1", literal[1:-1])


class ScriptParser:
  """
  Module-level parser for JavaScript/TypeScript sources.
  """

  def __init__(self, code: str):
    """
    Initialize the parser.

    Args:
        code: The raw source string.

    Raises:
        SyntaxError: If the lexer meets an unterminated template literal.
    """
    self.code = code
    self.lexer = ScriptLexer()
    self.tokens = list(self.lexer.tokenize(code))
    self.code_tokens = [t for t in self.tokens if t.kind != TokenType.COMMENT]
    self._token_index = {t.start: i for i, t in enumerate(self.tokens)}
    self.pos = 0

  def parse(self) -> Program:
    """
    Parses the whole file.

    Returns:
        Program: Header, body and an empty comment list.

    Raises:
        SyntaxError: On a malformed top-level import declaration.
    """
    header_end = self._header_end()
    program = Program(header=self.code[:header_end], newline=_detect_newline(self.code))

    cursor = header_end
    depth = 0
    prev: Optional[Token] = None
    i = 0

    while i < len(self.code_tokens):
      token = self.code_tokens[i]

      if token.start < header_end:
        prev = token
        i += 1
        continue

      if token.kind == TokenType.PUNCT and token.value == "{":
        depth += 1
      elif token.kind == TokenType.PUNCT and token.value == "}":
        # JSX text is lexed as code, so braces hidden in it can unbalance the count.
        depth = max(depth - 1, 0)
      elif (
        token.kind == TokenType.IDENTIFIER
        and token.value == "import"
        and self._at_statement_start(prev, token)
        and self._starts_declaration(i)
      ):
        if depth == 0:
          parsed = self._parse_import(i)
        else:
          parsed = self._resync_import(i, token)
        if parsed is None:
          prev = token
          i += 1
          continue

        depth = 0
        decl, next_index, stmt_end = parsed
        lead_start = self._leading_start(token, cursor)
        trail_end = self._trailing_end(stmt_end)

        if lead_start > cursor:
          program.body.append(RawChunk(self.code[cursor:lead_start]))

        decl.leading = self.code[lead_start : token.start]
        decl.raw = self.code[token.start : stmt_end]
        decl.trailing = self.code[stmt_end:trail_end]
        program.body.append(decl)

        cursor = trail_end
        prev = self.code_tokens[next_index - 1]
        i = next_index
        continue

      prev = token
      i += 1

    if cursor < len(self.code):
      program.body.append(RawChunk(self.code[cursor:]))

    return program

  def _resync_import(self, index: int, token: Token) -> Optional[Tuple[ImportDeclaration, int, int]]:
    """
    Accepts an import seen while the brace count says "nested".

    Import declarations only exist at module level, so an unindented one that
    parses means the count drifted (e.g. on a ``}`` hidden in JSX text).
    """
    if token.column != 1:
      return None
    try:
      return self._parse_import(index)
    except SyntaxError:
      return None

  # --- Statement Boundaries ---

  def _at_statement_start(self, prev: Optional[Token], token: Token) -> bool:
    if prev is None:
      return True
    if prev.kind == TokenType.PUNCT:
      if prev.value in (";", "}"):
        return True
      if prev.value in (".", "?."):
        return False
    end_line, _ = self.lexer.position(prev.end)
    return end_line < token.line

  def _starts_declaration(self, i: int) -> bool:
    """Filters out ``import(...)``, ``import.meta`` and ``import x = require(...)``."""
    nxt = self._token_at(i + 1)
    if nxt is None:
      return False
    if nxt.kind == TokenType.PUNCT and nxt.value in ("(", "."):
      return False

    j = i + 1
    if nxt.kind == TokenType.IDENTIFIER and nxt.value == "type":
      after = self._token_at(i + 2)
      if after is not None and after.kind == TokenType.IDENTIFIER:
        j = i + 2
    ident = self._token_at(j)
    eq = self._token_at(j + 1)
    if ident is not None and ident.kind == TokenType.IDENTIFIER and eq is not None and eq.value == "=":
      return False
    return True

  def _header_end(self) -> int:
    """
    Finds the end of the byte order mark, shebang line and directive prologue.

    Returns:
        int: Offset where the program body starts (0 when there is no header).
    """
    end = len(BOM) if self.code.startswith(BOM) else 0
    if self.tokens and self.tokens[0].kind == TokenType.COMMENT and self.tokens[0].value.startswith("#!"):
      end = self._trailing_end(self.tokens[0].end)

    j = 0
    while j < len(self.code_tokens) and self.code_tokens[j].kind == TokenType.STRING:
      directive = self.code_tokens[j]
      nxt = self._token_at(j + 1)
      if nxt is not None and nxt.kind == TokenType.PUNCT and nxt.value == ";":
        stmt_end = nxt.end
        j += 2
      elif nxt is None or nxt.line > directive.line:
        stmt_end = directive.end
        j += 1
      else:
        break
      end = self._trailing_end(stmt_end)
    return end

  def _leading_start(self, import_token: Token, floor: int) -> int:
    """
    Collects the comment lines directly above an import.

    A comment belongs to the import if it starts its own line and is separated
    from the import (or from the next owned comment) by a single line break.

    Args:
        import_token: The ``import`` keyword token.
        floor: Offset below which text is already owned by another node.

    Returns:
        int: Offset where the declaration's owned text starts.
    """
    code = self.code
    line_start = code.rfind("\n", 0, import_token.start) + 1
    if line_start < floor or code[line_start : import_token.start].strip():
      return import_token.start

    cut = line_start
    idx = self._token_index[import_token.start] - 1
    while idx >= 0 and self.tokens[idx].kind == TokenType.COMMENT:
      comment = self.tokens[idx]
      comment_line_start = code.rfind("\n", 0, comment.start) + 1
      if comment_line_start < floor or code[comment_line_start : comment.start].strip():
        break
      gap = code[comment.end : cut]
      if gap.count("\n") != 1 or gap.strip():
        break
      cut = comment_line_start
      idx -= 1
    return cut

  def _trailing_end(self, offset: int) -> int:
    match = _TRAILING.match(self.code, offset)
    if match:
      return match.end()
    return offset

  # --- Import Declaration Grammar ---

  def _token_at(self, index: int) -> Optional[Token]:
    if 0 <= index < len(self.code_tokens):
      return self.code_tokens[index]
    return None

  def _peek(self, offset: int = 0) -> Optional[Token]:
    return self._token_at(self.pos + offset)

  def _is(self, token: Optional[Token], kind: TokenType, value: Optional[str] = None) -> bool:
    return token is not None and token.kind == kind and (value is None or token.value == value)

  def _consume(self, kind: Optional[TokenType] = None, value: Optional[str] = None) -> Token:
    """
    Consumes the current token.

    Args:
        kind: If provided, enforces that the current token has this type.
        value: If provided, enforces that the current token has this text.

    Raises:
        SyntaxError: If end of file or mismatch.
    """
    token = self._peek()
    if token is None:
      raise SyntaxError("Unexpected end of file in import declaration")

    if (kind and token.kind != kind) or (value is not None and token.value != value):
      expected = repr(value) if value is not None else kind.name.lower()
      raise SyntaxError(
        f"Malformed import declaration: expected {expected}, got '{token.value}' "
        f"at line {token.line}, col {token.column}"
      )

    self.pos += 1
    return token

  def _parse_import(self, index: int) -> Tuple[ImportDeclaration, int, int]:
    """
    Parses one import declaration starting at the ``import`` keyword.

    Args:
        index: Position of the ``import`` token in the code token list.

    Returns:
        Tuple of (declaration, index of the first token after it, end offset of the statement).
    """
    self.pos = index + 1
    specifiers: List[Specifier] = []
    is_type_only = False

    if not self._is(self._peek(), TokenType.STRING):
      if self._is(self._peek(), TokenType.IDENTIFIER, "type") and self._type_modifies_declaration():
        self._consume()
        is_type_only = True

      if self._is(self._peek(), TokenType.IDENTIFIER):
        specifiers.append(Specifier.default(self._consume().value))
        if self._is(self._peek(), TokenType.PUNCT, ","):
          self._consume()
          specifiers.extend(self._parse_bindings())
      else:
        specifiers.extend(self._parse_bindings())

      self._consume(TokenType.IDENTIFIER, "from")

    source = self._consume(TokenType.STRING)
    end = source.end

    attributes = None
    keyword = self._peek()
    if (
      keyword is not None
      and keyword.kind == TokenType.IDENTIFIER
      and keyword.value in ("with", "assert")
      and self._is(self._peek(1), TokenType.PUNCT, "{")
    ):
      self._consume()
      end = self._skip_braces()
      attributes = self.code[keyword.start : end]

    if self._is(self._peek(), TokenType.PUNCT, ";"):
      end = self._consume().end

    decl = ImportDeclaration(
      source=unquote(source.value),
      specifiers=specifiers,
      is_type_only=is_type_only,
      quote=source.value[0],
      attributes=attributes,
    )
    return decl, self.pos, end

  def _parse_bindings(self) -> List[Specifier]:
    """Parses ``* as ns`` or ``{ a, b as c, type d }``."""
    if self._is(self._peek(), TokenType.PUNCT, "*"):
      self._consume()
      self._consume(TokenType.IDENTIFIER, "as")
      return [Specifier.namespace(self._consume(TokenType.IDENTIFIER).value)]

    self._consume(TokenType.PUNCT, "{")
    specifiers: List[Specifier] = []
    while not self._is(self._peek(), TokenType.PUNCT, "}"):
      is_type = False
      if self._is(self._peek(), TokenType.IDENTIFIER, "type") and self._type_modifies_specifier():
        self._consume()
        is_type = True

      name_token = self._peek()
      if self._is(name_token, TokenType.STRING):
        self._consume()
        imported = unquote(name_token.value)
        self._consume(TokenType.IDENTIFIER, "as")
        local = self._consume(TokenType.IDENTIFIER).value
      else:
        imported = self._consume(TokenType.IDENTIFIER).value
        local = imported
        if self._is(self._peek(), TokenType.IDENTIFIER, "as"):
          self._consume()
          local = self._consume(TokenType.IDENTIFIER).value

      specifiers.append(Specifier(SpecifierKind.NAMED, local, imported, is_type))

      if self._is(self._peek(), TokenType.PUNCT, ","):
        self._consume()
      elif not self._is(self._peek(), TokenType.PUNCT, "}"):
        self._consume(TokenType.PUNCT, "}")

    self._consume(TokenType.PUNCT, "}")
    return specifiers

  def _skip_braces(self) -> int:
    """Consumes a balanced ``{ ... }`` group and returns its end offset."""
    depth = 0
    while True:
      token = self._consume()
      if token.kind == TokenType.PUNCT and token.value == "{":
        depth += 1
      elif token.kind == TokenType.PUNCT and token.value == "}":
        depth -= 1
        if depth == 0:
          return token.end

  def _type_modifies_declaration(self) -> bool:
    """
    Decides whether ``type`` after ``import`` is the type-only modifier.

    ``import type from "x"`` and ``import type, { a } from "x"`` bind a default named ``type``.
    """
    nxt = self._peek(1)
    if nxt is None:
      return False
    if nxt.kind == TokenType.PUNCT:
      return nxt.value in ("{", "*")
    if nxt.kind == TokenType.IDENTIFIER:
      if nxt.value == "from":
        return not self._is(self._peek(2), TokenType.STRING)
      return True
    return False

  def _type_modifies_specifier(self) -> bool:
    """
    Decides whether ``type`` inside braces is a per-specifier modifier.

    ``{ type }`` and ``{ type as t }`` import a binding named ``type``;
    ``{ type A }`` and ``{ type as as t }`` are type-only imports.
    """
    nxt = self._peek(1)
    if nxt is None or nxt.kind not in (TokenType.IDENTIFIER, TokenType.STRING):
      return False
    if nxt.value == "as":
      after = self._peek(2)
      return after is None or after.kind == TokenType.PUNCT or after.value == "as"
    return True
