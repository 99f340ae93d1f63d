"""
Tests for the Migration Engine.

Verifies the end-to-end properties of a single-file rewrite:
1. Literal, regex-capture and type-only scenarios.
2. Consolidation of replacements per destination (no deduplication).
3. Deprecated rules drop bindings and leave one comment per declaration.
4. Pass-through for unhandled extensions and unchanged files.
5. Idempotence on already migrated output.
6. Per-file error capture in `run` versus raising in `transform`.
"""

import re

import pytest

from import_switcheroo.config import RuntimeConfig
from import_switcheroo.core.backend import TypeScriptBackend
from import_switcheroo.core.engine import MigrationEngine
from import_switcheroo.core.planner import MappingConfigurationError
from import_switcheroo.core.tracer import TraceEventType
from import_switcheroo.enums import NameMarker
from import_switcheroo.mappings.schema import ImportMapping

DEFAULT = NameMarker.DEFAULT
USER_DEFINED = NameMarker.USER_DEFINED


def _rule(old_path, old_name, new_path=None, new_name=None, is_type=None):
  new = None
  if new_path is not None:
    new = {"path": new_path, "name": new_name, "isType": is_type}
  return ImportMapping.model_validate({"old": {"path": old_path, "name": old_name}, "new": new})


CONFIG_RULE = _rule("@wasp/config", DEFAULT, "wasp/server", "config")
ACTIONS_RULE = _rule(re.compile(r"@wasp/actions/(\w+)"), DEFAULT, "wasp/client/operations", USER_DEFINED)


@pytest.fixture
def engine():
  """Engine with the built-in table."""
  return MigrationEngine()


def test_literal_scenario():
  engine = MigrationEngine(mappings=[CONFIG_RULE])
  out = engine.transform('import config, { bar } from "@wasp/config.js";\n', "main.ts")
  assert out == 'import { config } from "wasp/server";\nimport { bar } from "@wasp/config.js";\n'


def test_regex_capture_scenario():
  engine = MigrationEngine(mappings=[ACTIONS_RULE])
  out = engine.transform('import doSomething from "@wasp/actions/doSomething";\n', "main.ts")
  assert out == 'import { doSomething } from "wasp/client/operations";\n'


def test_regex_capture_keeps_alias():
  engine = MigrationEngine(mappings=[ACTIONS_RULE])
  out = engine.transform('import doIt from "@wasp/actions/doSomething.js";\n', "main.ts")
  assert out == 'import { doSomething as doIt } from "wasp/client/operations";\n'


def test_type_only_carry_through():
  engine = MigrationEngine(mappings=[_rule("@wasp/entities", USER_DEFINED, "wasp/entities", USER_DEFINED)])
  out = engine.transform('import type { Task } from "@wasp/entities";\nimport { User } from "@wasp/entities";\n', "a.ts")
  assert out == 'import { type Task, User } from "wasp/entities";\n'


def test_type_override_wins():
  engine = MigrationEngine(mappings=[_rule("@wasp/middleware", "MiddlewareConfigFn", "wasp/server", "X", True)])
  out = engine.transform('import { MiddlewareConfigFn } from "@wasp/middleware";\n', "a.ts")
  assert out == 'import { type X as MiddlewareConfigFn } from "wasp/server";\n'


def test_consolidation_without_dedup():
  """
  Scenario: Two old imports (different old paths) resolve to the same destination binding.
  Expect: One declaration for the destination, containing both (duplicate) bindings.
  """
  rules = [
    _rule("@wasp/auth/login", DEFAULT, "wasp/client/auth", "login"),
    _rule("@wasp/auth/email/actions", "login", "wasp/client/auth", "login"),
  ]
  code = 'import login from "@wasp/auth/login";\nimport { login } from "@wasp/auth/email/actions";\n'
  out = MigrationEngine(mappings=rules).transform(code, "a.tsx")
  assert out == 'import { login, login } from "wasp/client/auth";\n'


def test_destinations_in_first_encountered_order(engine):
  code = (
    'import { useQuery } from "@wasp/queries";\n'
    'import config from "@wasp/config";\n'
    'import getTasks from "@wasp/queries/getTasks";\n'
  )
  out = engine.transform(code, "a.ts")
  assert out == (
    'import { config } from "wasp/server";\n'
    'import { useQuery, getTasks } from "wasp/client/operations";\n'
  )


def test_deprecated_rule_drops_and_comments():
  rules = [_rule("@wasp/utils", "isPrismaError", None), _rule("@wasp/utils", "prismaErrorToHttpError", None)]
  code = (
    "// removed along with the import\n"
    'import { prismaErrorToHttpError, isPrismaError, sleep } from "@wasp/utils";\n'
    "run();\n"
  )
  out = MigrationEngine(mappings=rules).transform(code, "a.js")
  lines = out.splitlines()

  assert lines[0].startswith('// TODO: Removed `isPrismaError` from "@wasp/utils" import')
  assert lines[1].startswith('// TODO: Removed `prismaErrorToHttpError` from "@wasp/utils" import')
  assert lines[2:] == [
    "// removed along with the import",
    'import { sleep } from "@wasp/utils";',
    "run();",
  ]
  assert 'from "wasp/' not in out


def test_one_comment_per_declaration_listing_all_names():
  rule = _rule("@wasp/types", USER_DEFINED, None)
  code = 'import { A, B } from "@wasp/types";\nimport { C } from "@wasp/types";\n'
  out = MigrationEngine(mappings=[rule]).transform(code, "a.ts")
  comments = [line for line in out.splitlines() if line.startswith("// TODO")]
  assert len(comments) == 2
  assert "`A`, `B`" in comments[0]
  assert "`C`" in comments[1]
  assert not any(line.startswith("import") for line in out.splitlines())


def test_removed_declaration_takes_its_comment(engine):
  code = "// Config\nimport config from '@wasp/config';\n// React\nimport React from 'react';\n"
  out = engine.transform(code, "a.jsx")
  assert out == "import { config } from \"wasp/server\";\n// React\nimport React from 'react';\n"


def test_shrunk_declaration_keeps_quotes_and_trailing_comment(engine):
  code = "import config, { bar } from '@wasp/config'; // note\n"
  out = engine.transform(code, "a.ts")
  assert out == "import { config } from \"wasp/server\";\nimport { bar } from '@wasp/config'; // note\n"


def test_new_imports_go_after_directives(engine):
  code = '"use client";\n\nimport config from "@wasp/config";\nexport default config;\n'
  out = engine.transform(code, "a.tsx")
  assert out == '"use client";\n\nimport { config } from "wasp/server";\nexport default config;\n'


def test_byte_order_mark_stays_first(engine):
  out = engine.transform('\ufeffimport config from "@wasp/config";\n', "a.ts")
  assert out == '\ufeffimport { config } from "wasp/server";\n'


def test_crlf_file_keeps_crlf(engine):
  code = 'import config, { bar } from "@wasp/config";\r\nimport { isPrismaError } from "@wasp/utils";\r\nfoo();\r\n'
  out = engine.transform(code, "a.ts")

  assert out.startswith("// TODO: Removed `isPrismaError`")
  assert 'import { config } from "wasp/server";\r\nimport { bar } from "@wasp/config";\r\nfoo();\r\n' in out
  assert out.count("\n") == out.count("\r\n")


@pytest.mark.parametrize(
  "body",
  [
    # Apostrophe in JSX text pairs with a later quote and swallows a `{`.
    "export function Page({ open }) {\n  return <p>Don't {open ? 'show' : 'hide'} this</p>;\n}\n",
    # A URL in JSX text reads as a line comment that swallows a `{`.
    "export function Help() {\n  return (\n    <p>\n      Docs at https://wasp-lang.dev {\n"
    "        version\n      }\n    </p>\n  );\n}\n",
  ],
)
def test_jsx_text_does_not_break_parsing(engine, body):
  result = engine.run('import config from "@wasp/config";\n' + body, "Page.tsx")
  assert result.success is True
  assert result.errors == []
  assert result.code == 'import { config } from "wasp/server";\n' + body


def test_unindented_import_after_jsx_is_still_found(engine):
  # The URL comment hides a `}`, so the brace count never returns to zero.
  body = "export const Page = () => (\n  <div>{open && <p>See https://wasp-lang.dev</p>}</div>\n);\n"
  out = engine.transform(body + 'import config from "@wasp/config";\n', "Page.tsx")
  assert out == 'import { config } from "wasp/server";\n' + body


def test_namespace_and_side_effect_imports_untouched(engine):
  code = 'import * as cfg from "@wasp/config";\nimport "@wasp/config";\n'
  assert engine.transform(code, "a.ts") is code


def test_nested_imports_not_rewritten(engine):
  code = 'const lazy = () => import("@wasp/config");\n'
  assert engine.transform(code, "a.ts") is code


def test_unhandled_extension_passes_through(engine):
  code = 'import config from "@wasp/config";\n'
  assert engine.transform(code, "styles.css") is code
  result = engine.run(code, "README.md")
  assert result.skipped is True
  assert result.status == "skipped"
  assert result.code == code


def test_extensions_are_configurable():
  engine = MigrationEngine(config=RuntimeConfig(extensions=["mts"]))
  assert engine.accepts("a.mts")
  assert not engine.accepts("a.ts")


def test_unchanged_file_returns_original(engine):
  code = 'import { useState } from "react";\n'
  result = engine.run(code, "a.tsx")
  assert result.code == code
  assert result.changed is False
  assert result.status == "unmodified"


def test_idempotence(engine):
  code = (
    'import config, { bar } from "@wasp/config.js";\n'
    'import { isPrismaError } from "@wasp/utils";\n'
    'import { type Task } from "@wasp/entities";\n'
  )
  once = engine.transform(code, "a.ts")
  assert once != code
  assert engine.transform(once, "a.ts") == once


def test_run_reports_parse_error(engine):
  result = engine.run('import { a b } from "@wasp/config";\n', "a.ts")
  assert result.success is False
  assert result.status == "error"
  assert result.errors[0].startswith("Parse Error:")
  assert result.code == 'import { a b } from "@wasp/config";\n'


def test_transform_raises_parse_error(engine):
  with pytest.raises(SyntaxError):
    engine.transform('import { a b } from "@wasp/config";\n', "a.ts")


def test_configuration_error_aborts_file():
  """
  Scenario: A user-defined target name with nothing to take it from.
  Expect: run() reports a configuration error and leaves the code untouched.
  """
  rules = [CONFIG_RULE, _rule("@wasp/thing", "thing", "wasp/thing", USER_DEFINED)]
  code = 'import config from "@wasp/config";\nimport { thing } from "@wasp/thing";\n'
  engine = MigrationEngine(mappings=rules)

  result = engine.run(code, "a.ts")
  assert result.success is False
  assert "Configuration Error" in result.errors[0]
  assert "@wasp/thing:thing" in result.errors[0]
  assert result.code == code

  with pytest.raises(MappingConfigurationError):
    engine.transform(code, "a.ts")


def test_trace_events_recorded(engine):
  result = engine.run('import config, { bar } from "@wasp/config";\n', "a.ts")
  types = [e["type"] for e in result.trace_events]
  assert TraceEventType.RULE_MATCH in types
  actions = [e["metadata"]["action"] for e in result.trace_events if e["type"] == TraceEventType.IMPORT_ACTION]
  assert actions == ["shrunk", "inserted"]


def test_line_width_from_config():
  engine = MigrationEngine(mappings=[CONFIG_RULE], config=RuntimeConfig(line_width=20))
  out = engine.transform('import config from "@wasp/config";\n', "a.ts")
  assert out == 'import {\n  config,\n} from "wasp/server";\n'


def test_custom_backend_is_used():
  calls = []

  class RecordingBackend(TypeScriptBackend):
    def parse(self, source):
      calls.append("parse")
      return super().parse(source)

  engine = MigrationEngine(mappings=[CONFIG_RULE], backend=RecordingBackend())
  engine.transform('import config from "@wasp/config";\n', "a.ts")
  assert calls == ["parse"]


def test_engine_is_reusable_across_files(engine):
  first = engine.transform('import config from "@wasp/config";\n', "a.ts")
  second = engine.transform('import prisma from "@wasp/dbClient";\n', "b.ts")
  assert first == 'import { config } from "wasp/server";\n'
  assert second == 'import { prisma } from "wasp/server";\n'
