"""
Rewrite Planning.

For one (rule, declaration) pair, computes what has to change:

- which bindings stay in the old declaration and which move,
- the replacement binding for every moved one (new name, alias, type-only flag),
- the explanatory comment for rules that drop imports without replacement.

Planning is side-effect free; the engine applies the resulting `DeclarationPlan`.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from import_switcheroo.core.matching import classify_specifier, match_path
from import_switcheroo.core.nodes import ImportDeclaration, Specifier
from import_switcheroo.enums import NameMarker, SpecifierKind
from import_switcheroo.mappings.schema import ImportMapping, format_path


class MappingConfigurationError(ValueError):
  """
  Raised when a rule cannot be applied as written.

  Attributes:
      mapping (ImportMapping): The offending rule.
  """

  def __init__(self, mapping: ImportMapping, message: str):
    self.mapping = mapping
    super().__init__(f"{message} (rule: {mapping.describe()})")


@dataclass
class DeclarationPlan:
  """
  Planned edit of one declaration under one rule.

  Attributes:
      declaration: The declaration being rewritten.
      mapping: The rule that matched it.
      kept: Bindings that stay, in original order.
      matched: Bindings that leave the declaration, in original order.
      replacements: New bindings for ``mapping.new.path`` (empty for deprecated rules).
  """

  declaration: ImportDeclaration
  mapping: ImportMapping
  kept: List[Specifier] = field(default_factory=list)
  matched: List[Specifier] = field(default_factory=list)
  replacements: List[Specifier] = field(default_factory=list)

  @property
  def removes_declaration(self) -> bool:
    return not self.kept


def partition_specifiers(
  declaration: ImportDeclaration, mapping: ImportMapping
) -> Tuple[List[Specifier], List[Specifier]]:
  """
  Splits a declaration's bindings into (kept, matched).

  Every binding lands in exactly one of the two lists; relative order is preserved.
  """
  kept: List[Specifier] = []
  matched: List[Specifier] = []
  for specifier in declaration.specifiers:
    if classify_specifier(specifier, mapping):
      matched.append(specifier)
    else:
      kept.append(specifier)
  return kept, matched


def resolve_new_name(mapping: ImportMapping, specifier: Specifier, captured: Optional[str]) -> str:
  """
  Computes the imported name of the replacement binding.

  A fixed new name is used verbatim. A user-defined new name is taken from the
  old binding's imported name when the old name was user-defined as well, and
  otherwise from the path capture.

  Args:
      mapping: Rule with a non-null ``new``.
      specifier: The old binding.
      captured: Segment captured by a regex path, if any.

  Returns:
      str: The new imported name.

  Raises:
      MappingConfigurationError: If the rule asks for a user-defined name that
          no part of the old import provides.
  """
  new_name = mapping.new.name
  if isinstance(new_name, str):
    return new_name

  if (
    mapping.old.name is NameMarker.USER_DEFINED
    and specifier.kind == SpecifierKind.NAMED
    and specifier.imported is not None
  ):
    return specifier.imported
  if captured:
    return captured
  raise MappingConfigurationError(mapping, "Cannot determine the name for the new import")


def build_replacement(
  mapping: ImportMapping,
  specifier: Specifier,
  declaration: ImportDeclaration,
  captured: Optional[str],
) -> Specifier:
  """
  Builds the new named binding for a matched old binding.

  The local name is carried over unchanged. The binding is type-only if the old
  binding or its declaration was, unless the rule sets ``is_type`` explicitly.
  """
  is_type = specifier.is_type or declaration.is_type_only
  if mapping.new.is_type is not None:
    is_type = mapping.new.is_type

  return Specifier(
    kind=SpecifierKind.NAMED,
    local=specifier.local,
    imported=resolve_new_name(mapping, specifier, captured),
    is_type=is_type,
  )


def plan_declaration(declaration: ImportDeclaration, mapping: ImportMapping) -> Optional[DeclarationPlan]:
  """
  Plans the edit of one declaration under one rule.

  Args:
      declaration: A top-level import declaration.
      mapping: The rule to apply.

  Returns:
      Optional[DeclarationPlan]: None when the path does not match or no binding
      matches (the declaration is then left untouched).

  Raises:
      MappingConfigurationError: See `resolve_new_name`.
  """
  path_match = match_path(declaration.source, mapping)
  if path_match is None:
    return None

  kept, matched = partition_specifiers(declaration, mapping)
  if not matched:
    return None

  plan = DeclarationPlan(declaration=declaration, mapping=mapping, kept=kept, matched=matched)
  if mapping.new is not None:
    plan.replacements = [build_replacement(mapping, s, declaration, path_match.captured) for s in matched]
  return plan


def deprecation_comment(mapping: ImportMapping, matched: List[Specifier]) -> str:
  """
  Text of the comment left behind when a deprecated import is dropped.

  Args:
      mapping: Rule with ``new`` set to None.
      matched: The dropped bindings.

  Returns:
      str: Comment content (without ``//``).
  """
  names = ", ".join(f"`{s.name}`" for s in matched)
  old_path = format_path(mapping.old.path)
  return (
    f" TODO: Removed {names} from \"{old_path}\" import because it is deprecated and has no clear"
    " alternative. Please check migration instructions in Wasp docs on how to manually migrate the"
    " code that was using it."
  )
