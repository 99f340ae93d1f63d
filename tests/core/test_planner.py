"""
Tests for Rewrite Planning.

Verifies that:
1. Partitioning is complete, disjoint and order-preserving.
2. New names resolve from the fixed name, the old imported name, or the path capture.
3. An unresolvable user-defined name raises MappingConfigurationError.
4. Local aliases and type-only flags carry over (unless overridden).
5. Deprecation comments list every dropped name.
"""

import re

import pytest

from import_switcheroo.core.nodes import ImportDeclaration, Specifier
from import_switcheroo.core.planner import (
  MappingConfigurationError,
  build_replacement,
  deprecation_comment,
  partition_specifiers,
  plan_declaration,
  resolve_new_name,
)
from import_switcheroo.enums import NameMarker
from import_switcheroo.mappings.schema import ImportMapping

DEFAULT = NameMarker.DEFAULT
USER_DEFINED = NameMarker.USER_DEFINED


def _mapping(old_path, old_name, new_path=None, new_name=None, is_type=None):
  new = None
  if new_path is not None:
    new = {"path": new_path, "name": new_name}
    if is_type is not None:
      new["isType"] = is_type
  return ImportMapping.model_validate({"old": {"path": old_path, "name": old_name}, "new": new})


def test_partition_is_complete_and_ordered():
  decl = ImportDeclaration(
    source="@wasp/entities",
    specifiers=[Specifier.default("d"), Specifier.named("A"), Specifier.namespace("ns"), Specifier.named("B")],
  )
  mapping = _mapping("@wasp/entities", USER_DEFINED, "wasp/entities", USER_DEFINED)
  kept, matched = partition_specifiers(decl, mapping)

  assert [s.local for s in kept] == ["d", "ns"]
  assert [s.local for s in matched] == ["A", "B"]
  assert len(kept) + len(matched) == len(decl.specifiers)
  assert not set(map(id, kept)) & set(map(id, matched))


def test_fixed_new_name():
  mapping = _mapping("@wasp/config", DEFAULT, "wasp/server", "config")
  assert resolve_new_name(mapping, Specifier.default("cfg"), None) == "config"


def test_user_defined_name_from_specifier_wins_over_capture():
  mapping = _mapping(re.compile(r"@wasp/jobs/(\w+)"), USER_DEFINED, "wasp/server/jobs", USER_DEFINED)
  assert resolve_new_name(mapping, Specifier.named("AmazingJob"), "amazingJob") == "AmazingJob"


def test_user_defined_name_from_capture():
  mapping = _mapping(re.compile(r"@wasp/actions/(\w+)"), DEFAULT, "wasp/client/operations", USER_DEFINED)
  assert resolve_new_name(mapping, Specifier.default("doIt"), "doSomething") == "doSomething"


def test_user_defined_name_unresolvable():
  """
  Scenario: Rule asks for a user-defined name, but the old name is fixed and the path is literal.
  Expect: MappingConfigurationError naming the rule.
  """
  mapping = _mapping("@wasp/thing", "thing", "wasp/thing", USER_DEFINED)
  with pytest.raises(MappingConfigurationError, match=r"@wasp/thing:thing -> wasp/thing:<user-defined>") as exc:
    resolve_new_name(mapping, Specifier.named("thing"), None)
  assert exc.value.mapping is mapping
  assert isinstance(exc.value, ValueError)


def test_replacement_keeps_local_alias():
  mapping = _mapping(re.compile(r"@wasp/queries/(\w+)"), DEFAULT, "wasp/client/operations", USER_DEFINED)
  decl = ImportDeclaration(source="@wasp/queries/getSomething", specifiers=[Specifier.default("getSomethingPliz")])
  replacement = build_replacement(mapping, decl.specifiers[0], decl, "getSomething")
  assert replacement == Specifier.named("getSomething", "getSomethingPliz")


@pytest.mark.parametrize(
  "spec_type, decl_type, override, expected",
  [
    (False, False, None, False),
    (True, False, None, True),
    (False, True, None, True),
    (True, False, False, False),
    (False, False, True, True),
    (False, True, False, False),
  ],
)
def test_type_flag_resolution(spec_type, decl_type, override, expected):
  mapping = _mapping("@wasp/x", "X", "wasp/x", "Y", is_type=override)
  spec = Specifier.named("X", is_type=spec_type)
  decl = ImportDeclaration(source="@wasp/x", specifiers=[spec], is_type_only=decl_type)
  assert build_replacement(mapping, spec, decl, None).is_type is expected


def test_plan_none_when_path_differs():
  mapping = _mapping("@wasp/config", DEFAULT, "wasp/server", "config")
  decl = ImportDeclaration(source="@wasp/other", specifiers=[Specifier.default("config")])
  assert plan_declaration(decl, mapping) is None


def test_plan_none_when_no_binding_matches():
  mapping = _mapping("@wasp/config", DEFAULT, "wasp/server", "config")
  decl = ImportDeclaration(source="@wasp/config", specifiers=[Specifier.named("bar")])
  assert plan_declaration(decl, mapping) is None


def test_plan_shrinks_declaration():
  mapping = _mapping("@wasp/config", DEFAULT, "wasp/server", "config")
  decl = ImportDeclaration(source="@wasp/config.js", specifiers=[Specifier.default("config"), Specifier.named("bar")])
  plan = plan_declaration(decl, mapping)

  assert plan.kept == [Specifier.named("bar")]
  assert plan.matched == [Specifier.default("config")]
  assert plan.replacements == [Specifier.named("config")]
  assert plan.removes_declaration is False


def test_plan_for_deprecated_rule_has_no_replacements():
  mapping = _mapping("@wasp/utils", "isPrismaError", None)
  decl = ImportDeclaration(source="@wasp/utils", specifiers=[Specifier.named("isPrismaError")])
  plan = plan_declaration(decl, mapping)

  assert plan.replacements == []
  assert plan.removes_declaration is True


def test_deprecation_comment_text():
  mapping = _mapping("@wasp/utils", "isPrismaError", None)
  text = deprecation_comment(mapping, [Specifier.named("isPrismaError")])
  assert text == (
    ' TODO: Removed `isPrismaError` from "@wasp/utils" import because it is deprecated and has no clear'
    " alternative. Please check migration instructions in Wasp docs on how to manually migrate the code"
    " that was using it."
  )


def test_deprecation_comment_lists_all_names():
  mapping = _mapping("@wasp/types", USER_DEFINED, None)
  text = deprecation_comment(mapping, [Specifier.named("A"), Specifier.named("B", "C")])
  assert text.startswith(' TODO: Removed `A`, `B` from "@wasp/types" import')
