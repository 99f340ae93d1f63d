"""
JS/TS Tokenizer Definition.

Provides a Regex-based Lexer (`ScriptLexer`) that decomposes JavaScript,
TypeScript and JSX/TSX source into a stream of typed `Token` objects with exact
source offsets. The stream is only precise enough for module-level analysis:
it keeps strings, comments, template literals and regex literals intact so that
braces and the ``import`` keyword inside them are never mistaken for code.

JSX text is not modelled. A quote that is not closed on the same line, or a
``/*`` that is never closed, is treated as lone punctuation, which keeps
apostrophes and globs in JSX text (``<p>Don't touch src/*</p>``) from derailing the scan.
"""

import bisect
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Generator, List, Optional, Tuple


class TokenType(Enum):
  """Enumeration of token types."""

  COMMENT = auto()  # // ..., /* ... */, #!...
  STRING = auto()  # 'a', "b"
  TEMPLATE = auto()  # `a ${b} c`
  REGEX = auto()  # /ab+c/g
  NUMBER = auto()  # 42, 0x1F, .5
  IDENTIFIER = auto()  # import, foo, $bar, #priv
  PUNCT = auto()  # { } ( ) ; , * = => ...


@dataclass
class Token:
  """
  Represents a lexical unit.

  Attributes:
      kind: The type of token.
      value: The raw source text of the token.
      start: Offset of the first character in the source.
      end: Offset one past the last character.
      line: Line number in source (1-based).
      column: Column number in source (1-based).
  """

  kind: TokenType
  value: str
  start: int
  end: int
  line: int
  column: int


BOM = "\ufeff"

# Keywords after which a `/` starts a regex literal rather than a division.
_REGEX_PRECEDING_KEYWORDS = {
  "return",
  "typeof",
  "instanceof",
  "in",
  "of",
  "new",
  "delete",
  "void",
  "throw",
  "case",
  "do",
  "else",
  "yield",
  "await",
}


class ScriptLexer:
  """
  Regex-based Lexer for JavaScript/TypeScript modules.
  """

  _WHITESPACE = re.compile(r"[ \t\r\n\f\v\u00a0\u2028\u2029\ufeff]+")
  _LINE_COMMENT = re.compile(r"//[^\n]*")
  _HASHBANG = re.compile(r"#![^\n]*")
  _STRING = re.compile(r"'(?:[^'\\\n]|\\[\s\S])*'|\"(?:[^\"\\\n]|\\[\s\S])*\"")
  _REGEX = re.compile(r"/(?![*/])(?:[^/\\\[\n]|\\.|\[(?:[^\]\\\n]|\\.)*\])+/[A-Za-z]*")
  _NUMBER = re.compile(r"\.?\d[\w.]*")
  _IDENTIFIER = re.compile(r"#?[A-Za-z_$\u00c0-\uffff][\w$\u00c0-\uffff]*")
  _PUNCT = re.compile(r"=>|\.\.\.|\?\.|\+\+|--|[\s\S]")

  def __init__(self) -> None:
    self._text = ""
    self._line_starts: List[int] = [0]

  def tokenize(self, text: str) -> Generator[Token, None, None]:
    """
    Tokenizes the input string.

    Args:
        text: Raw JS/TS source code.

    Yields:
        Token objects in source order (comments included, whitespace dropped).

    Raises:
        SyntaxError: On an unterminated template literal.
    """
    self._text = text
    self._line_starts = [0] + [m.end() for m in re.finditer(r"\n", text)]
    yield from self._scan(0)

  def position(self, offset: int) -> Tuple[int, int]:
    """
    Converts a source offset into a 1-based (line, column) pair.
    """
    index = bisect.bisect_right(self._line_starts, offset) - 1
    return index + 1, offset - self._line_starts[index] + 1

  def _make(self, kind: TokenType, start: int, end: int) -> Token:
    line, column = self.position(start)
    return Token(kind, self._text[start:end], start, end, line, column)

  def _error(self, message: str, offset: int) -> SyntaxError:
    line, column = self.position(offset)
    return SyntaxError(f"{message} at line {line}, col {column}")

  def _scan(self, pos: int) -> Generator[Token, None, None]:
    text = self._text
    length = len(text)
    prev: Optional[Token] = None

    if pos == 0:
      start = 1 if text.startswith(BOM) else 0
      match = self._HASHBANG.match(text, start)
      if match:
        yield self._make(TokenType.COMMENT, start, match.end())
        pos = match.end()

    while pos < length:
      match = self._WHITESPACE.match(text, pos)
      if match:
        pos = match.end()
        continue

      ch = text[pos]
      token: Optional[Token] = None

      if text.startswith("//", pos):
        match = self._LINE_COMMENT.match(text, pos)
        yield self._make(TokenType.COMMENT, pos, match.end())
        pos = match.end()
        continue

      if text.startswith("/*", pos):
        close = text.find("*/", pos + 2)
        if close != -1:
          yield self._make(TokenType.COMMENT, pos, close + 2)
          pos = close + 2
          continue

      if ch in "'\"":
        match = self._STRING.match(text, pos)
        if match:
          token = self._make(TokenType.STRING, pos, match.end())
      elif ch == "`":
        token = self._make(TokenType.TEMPLATE, pos, self._scan_template(pos))
      elif ch == "/" and self._regex_allowed(prev):
        match = self._REGEX.match(text, pos)
        if match:
          token = self._make(TokenType.REGEX, pos, match.end())
      elif ch.isdigit() or (ch == "." and pos + 1 < length and text[pos + 1].isdigit()):
        match = self._NUMBER.match(text, pos)
        token = self._make(TokenType.NUMBER, pos, match.end())
      else:
        match = self._IDENTIFIER.match(text, pos)
        if match:
          token = self._make(TokenType.IDENTIFIER, pos, match.end())

      if token is None:
        match = self._PUNCT.match(text, pos)
        token = self._make(TokenType.PUNCT, pos, match.end())

      yield token
      prev = token
      pos = token.end

  def _scan_template(self, start: int) -> int:
    """
    Finds the end of a template literal, skipping nested ``${ ... }`` expressions.

    Returns:
        int: Offset one past the closing backtick.
    """
    text = self._text
    pos = start + 1
    while pos < len(text):
      ch = text[pos]
      if ch == "\\":
        pos += 2
        continue
      if ch == "`":
        return pos + 1
      if text.startswith("${", pos):
        pos = self._scan_substitution(pos + 2)
        continue
      pos += 1
    raise self._error("Unterminated template literal", start)

  def _scan_substitution(self, pos: int) -> int:
    depth = 0
    for token in self._scan(pos):
      if token.kind != TokenType.PUNCT:
        continue
      if token.value == "{":
        depth += 1
      elif token.value == "}":
        if depth == 0:
          return token.end
        depth -= 1
    raise self._error("Unterminated template substitution", pos)

  @staticmethod
  def _regex_allowed(prev: Optional[Token]) -> bool:
    if prev is None:
      return True
    if prev.kind == TokenType.PUNCT:
      # `</` closes a JSX tag
      return prev.value not in (")", "]", "}", "++", "--", "<")
    if prev.kind == TokenType.IDENTIFIER:
      return prev.value in _REGEX_PRECEDING_KEYWORDS
    return False
