"""
Wasp 0.11 -> 0.12 Import Mapping Table.

Rewrites the old ``@wasp/...`` imports into the ``wasp/...`` package layout
introduced in Wasp 0.12. Rules are applied in the order listed here; the order
is observable in the output through the placement of consolidated imports.

Old paths are written without extensions or ``/index`` suffixes. Regex paths
capture the user-defined part of the path (e.g. the action name in
``@wasp/actions/<name>``).
"""

import re
from typing import Any, Dict, List, Tuple

from import_switcheroo.enums import NameMarker
from import_switcheroo.mappings.schema import ImportMapping

DEFAULT = NameMarker.DEFAULT
USER_DEFINED = NameMarker.USER_DEFINED


def _rule(old_path: Any, old_name: Any, new: Any) -> Dict[str, Any]:
  return {"old": {"path": old_path, "name": old_name}, "new": new}


def _to(path: str, name: Any, is_type: bool = None) -> Dict[str, Any]:
  spec: Dict[str, Any] = {"path": path, "name": name}
  if is_type is not None:
    spec["is_type"] = is_type
  return spec


_RULES: List[Dict[str, Any]] = [
  _rule("@wasp/config", DEFAULT, _to("wasp/server", "config")),
  _rule("@wasp/dbClient", DEFAULT, _to("wasp/server", "prisma")),
  _rule("@wasp/utils", "isPrismaError", None),
  _rule("@wasp/utils", "prismaErrorToHttpError", None),
  _rule("@wasp/auth", "defineAdditionalSignupFields", _to("wasp/server/auth", "defineUserSignupFields")),
  _rule("@wasp/types", "GetUserFieldsFn", None),
  _rule("@wasp/core/auth", "generateAvailableDictionaryUsername", None),
  _rule("@wasp/core/auth", "generateAvailableUsername", None),
  # Operations
  _rule("@wasp/actions", "useAction", _to("wasp/client/operations", "useAction")),
  _rule(
    "@wasp/actions",
    "OptimisticUpdateDefinition",
    _to("wasp/client/operations", "OptimisticUpdateDefinition", is_type=True),
  ),
  _rule(re.compile(r"@wasp/actions/(\w+)"), DEFAULT, _to("wasp/client/operations", USER_DEFINED)),
  _rule("@wasp/actions/types", USER_DEFINED, _to("wasp/server/operations", USER_DEFINED, is_type=True)),
  _rule("@wasp/queryClient", "configureQueryClient", _to("wasp/client/operations", "configureQueryClient")),
  _rule("@wasp/queries", "useQuery", _to("wasp/client/operations", "useQuery")),
  _rule(re.compile(r"@wasp/queries/(\w+)"), DEFAULT, _to("wasp/client/operations", USER_DEFINED)),
  _rule("@wasp/queries/types", USER_DEFINED, _to("wasp/server/operations", USER_DEFINED, is_type=True)),
  # APIs
  _rule("@wasp/api", DEFAULT, _to("wasp/client/api", "api")),
  _rule("@wasp/apis/types", USER_DEFINED, _to("wasp/server/api", USER_DEFINED, is_type=True)),
  # Auth (client)
  _rule("@wasp/auth/login", DEFAULT, _to("wasp/client/auth", "login")),
  _rule("@wasp/auth/logout", DEFAULT, _to("wasp/client/auth", "logout")),
  _rule("@wasp/auth/signup", DEFAULT, _to("wasp/client/auth", "signup")),
  _rule("@wasp/auth/useAuth", DEFAULT, _to("wasp/client/auth", "useAuth")),
  _rule("@wasp/auth/email/actions", "requestPasswordReset", _to("wasp/client/auth", "requestPasswordReset")),
  _rule("@wasp/auth/email/actions", "resetPassword", _to("wasp/client/auth", "resetPassword")),
  _rule("@wasp/auth/email/actions", "verifyEmail", _to("wasp/client/auth", "verifyEmail")),
  _rule("@wasp/auth/email/actions", "login", _to("wasp/client/auth", "login")),
  _rule("@wasp/auth/email/actions", "signup", _to("wasp/client/auth", "signup")),
  # Auth (server)
  _rule(
    "@wasp/auth/providers/email/utils",
    "createEmailVerificationLink",
    _to("wasp/server/auth", "createEmailVerificationLink"),
  ),
  _rule(
    "@wasp/auth/providers/email/utils",
    "sendEmailVerificationEmail",
    _to("wasp/server/auth", "sendEmailVerificationEmail"),
  ),
  _rule(
    "@wasp/types",
    "GetVerificationEmailContentFn",
    _to("wasp/server/auth", "GetVerificationEmailContentFn", is_type=True),
  ),
  _rule(
    "@wasp/types",
    "GetPasswordResetEmailContentFn",
    _to("wasp/server/auth", "GetPasswordResetEmailContentFn", is_type=True),
  ),
  # Auth forms
  _rule("@wasp/auth/forms/ForgotPassword", "ForgotPasswordForm", _to("wasp/client/auth", "ForgotPasswordForm")),
  _rule("@wasp/auth/forms/Login", "LoginForm", _to("wasp/client/auth", "LoginForm")),
  _rule("@wasp/auth/forms/ResetPassword", "ResetPasswordForm", _to("wasp/client/auth", "ResetPasswordForm")),
  _rule("@wasp/auth/forms/Signup", "SignupForm", _to("wasp/client/auth", "SignupForm")),
  _rule("@wasp/auth/forms/VerifyEmail", "VerifyEmailForm", _to("wasp/client/auth", "VerifyEmailForm")),
  _rule(
    "@wasp/auth/forms/types",
    "CustomizationOptions",
    _to("wasp/client/auth", "CustomizationOptions", is_type=True),
  ),
  _rule("@wasp/auth/helpers/GitHub", "SignInButton", _to("wasp/client/auth", "GitHubSignInButton")),
  _rule("@wasp/auth/helpers/GitHub", "signInUrl", _to("wasp/client/auth", "gitHubSignInUrl")),
  _rule("@wasp/auth/helpers/Google", "SignInButton", _to("wasp/client/auth", "GoogleSignInButton")),
  _rule("@wasp/auth/helpers/Google", "signInUrl", _to("wasp/client/auth", "googleSignInUrl")),
  # Server
  _rule("@wasp/core/AuthError", DEFAULT, _to("wasp/server", "AuthError")),
  _rule("@wasp/core/HttpError", DEFAULT, _to("wasp/server", "HttpError")),
  _rule("@wasp/dbSeed/types", "DbSeedFn", _to("wasp/server", "DbSeedFn", is_type=True)),
  _rule("@wasp/middleware", "MiddlewareConfigFn", _to("wasp/server", "MiddlewareConfigFn", is_type=True)),
  _rule("@wasp/types", "ServerSetupFn", _to("wasp/server", "ServerSetupFn", is_type=True)),
  _rule("@wasp/email", "emailSender", _to("wasp/email", "emailSender")),
  _rule("@wasp/entities", USER_DEFINED, _to("wasp/entities", USER_DEFINED, is_type=True)),
  _rule(re.compile(r"@wasp/jobs/(\w+)"), USER_DEFINED, _to("wasp/server/jobs", USER_DEFINED)),
  # Router / test
  _rule("@wasp/router", "Link", _to("wasp/client/router", "Link")),
  _rule("@wasp/router", "routes", _to("wasp/client/router", "routes")),
  _rule("@wasp/test", "mockServer", _to("wasp/client/test", "mockServer")),
  _rule("@wasp/test", "renderInContext", _to("wasp/client/test", "renderInContext")),
  _rule("@wasp/types", "Application", _to("express", "Application", is_type=True)),
  _rule("@wasp/types", "Express", _to("express", "Express", is_type=True)),
  # WebSockets
  _rule(
    "@wasp/webSocket",
    "ServerToClientPayload",
    _to("wasp/client/webSocket", "ServerToClientPayload", is_type=True),
  ),
  _rule(
    "@wasp/webSocket",
    "ClientToServerPayload",
    _to("wasp/client/webSocket", "ClientToServerPayload", is_type=True),
  ),
  _rule("@wasp/webSocket", "useSocket", _to("wasp/client/webSocket", "useSocket")),
  _rule("@wasp/webSocket", "useSocketListener", _to("wasp/client/webSocket", "useSocketListener")),
  _rule(
    "@wasp/webSocket",
    "WebSocketDefinition",
    _to("wasp/server/webSocket", "WebSocketDefinition", is_type=True),
  ),
  _rule("@wasp/webSocket", "WaspSocketData", _to("wasp/server/webSocket", "WaspSocketData", is_type=True)),
  # Auth user helpers
  _rule("@wasp/auth", "defineUserSignupFields", _to("wasp/server/auth", "defineUserSignupFields")),
  _rule("@wasp/auth/user", "getEmail", _to("wasp/auth", "getEmail")),
  _rule("@wasp/auth/user", "getUsername", _to("wasp/auth", "getUsername")),
  _rule("@wasp/auth/user", "getFirstProviderUserId", _to("wasp/auth", "getFirstProviderUserId")),
  _rule("@wasp/auth/user", "findUserIdentity", _to("wasp/auth", "findUserIdentity")),
  _rule("@wasp/auth/types", "User", _to("wasp/auth", "AuthUser", is_type=True)),
  _rule("@wasp/auth/validation", "ensurePasswordIsPresent", _to("wasp/server/auth", "ensurePasswordIsPresent")),
  _rule("@wasp/auth/validation", "ensureValidPassword", _to("wasp/server/auth", "ensureValidPassword")),
  _rule("@wasp/auth/validation", "ensureValidEmail", _to("wasp/server/auth", "ensureValidEmail")),
  _rule("@wasp/auth/validation", "ensureValidUsername", _to("wasp/server/auth", "ensureValidUsername")),
  _rule("@wasp/auth/utils", "createProviderId", _to("wasp/server/auth", "createProviderId")),
  _rule(
    "@wasp/auth/utils",
    "sanitizeAndSerializeProviderData",
    _to("wasp/server/auth", "sanitizeAndSerializeProviderData"),
  ),
  _rule(
    "@wasp/auth/utils",
    "updateAuthIdentityProviderData",
    _to("wasp/server/auth", "updateAuthIdentityProviderData"),
  ),
  _rule(
    "@wasp/auth/utils",
    "deserializeAndSanitizeProviderData",
    _to("wasp/server/auth", "deserializeAndSanitizeProviderData"),
  ),
  _rule("@wasp/auth/utils", "findAuthIdentity", _to("wasp/server/auth", "findAuthIdentity")),
  _rule("@wasp/auth/utils", "createUser", _to("wasp/server/auth", "createUser")),
  _rule("@wasp/auth/forms/internal/Form", "FormError", _to("wasp/client/auth", "FormError")),
  _rule("@wasp/auth/forms/internal/Form", "FormInput", _to("wasp/client/auth", "FormInput")),
  _rule("@wasp/auth/forms/internal/Form", "FormItemGroup", _to("wasp/client/auth", "FormItemGroup")),
  _rule("@wasp/auth/forms/internal/Form", "FormLabel", _to("wasp/client/auth", "FormLabel")),
]

WASP_0_11_TO_0_12: Tuple[ImportMapping, ...] = tuple(ImportMapping.model_validate(r) for r in _RULES)
