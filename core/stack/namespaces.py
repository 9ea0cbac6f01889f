# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Namespace scoping.

Every developer owns ``<developer_prefix><username>``; shared resources live
in the global namespace. Public identifiers hide namespaces behind a scope:
``global/<name>`` or ``<username>/<name>``.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from core.stack.exceptions import InvalidReferenceError, PermissionDeniedError
from core.stack.value_objects import Caller, Role, ScopedId

logger = logging.getLogger(__name__)

ALL_NAMESPACES = "*"
DEFAULT_GLOBAL_NAMESPACE = "lissto-global"
DEFAULT_DEVELOPER_PREFIX = "dev-"
DEFAULT_GLOBAL_BRANCHES = ("main", "master")


class NamespaceManager:
    """Maps callers, scopes and branches to namespaces."""

    def __init__(
        self,
        global_namespace: str = DEFAULT_GLOBAL_NAMESPACE,
        developer_prefix: str = DEFAULT_DEVELOPER_PREFIX,
        global_branches: Iterable[str] = DEFAULT_GLOBAL_BRANCHES,
    ):
        self._global = global_namespace
        self._prefix = developer_prefix
        self._global_branches = frozenset(global_branches)

    @property
    def global_namespace(self) -> str:
        return self._global

    def developer_namespace(self, username: str) -> str:
        return f"{self._prefix}{username}"

    def is_global_namespace(self, namespace: str) -> bool:
        return namespace == self._global

    def is_developer_namespace(self, namespace: str) -> bool:
        return namespace.startswith(self._prefix) and len(namespace) > len(self._prefix)

    def is_global_branch(self, branch: str) -> bool:
        return bool(branch) and branch in self._global_branches

    def scope_of(self, namespace: str) -> str:
        """Return the public scope of ``namespace``.

        Raises:
            InvalidReferenceError: If the namespace is neither global nor a
                developer namespace.
        """
        if self.is_global_namespace(namespace):
            return ScopedId.GLOBAL_SCOPE
        if self.is_developer_namespace(namespace):
            return namespace[len(self._prefix):]
        raise InvalidReferenceError(f"namespace '{namespace}' has no public scope")

    def namespace_of(self, scope: str) -> str:
        """Return the namespace behind a public scope."""
        if scope == ScopedId.GLOBAL_SCOPE:
            return self._global
        return self.developer_namespace(scope)

    def generate_scoped_id(self, namespace: str, name: str) -> str:
        """Return ``<scope>/<name>`` for a resource of ``namespace``."""
        return str(ScopedId(scope=self.scope_of(namespace), name=name))

    def parse_scoped_id(self, value: str, default_namespace: str = "") -> Tuple[str, str]:
        """Return ``(namespace, name)`` for a scoped id.

        Legacy ids without a scope resolve to ``default_namespace``.

        Raises:
            InvalidReferenceError: If the id is malformed, or legacy with no
                default namespace.
        """
        try:
            scoped = ScopedId.parse(value)
        except ValueError as exc:
            raise InvalidReferenceError(str(exc)) from exc
        if scoped.is_legacy:
            if not default_namespace:
                raise InvalidReferenceError(
                    f"Invalid identifier '{value}': expected <scope>/<name>"
                )
            return default_namespace, scoped.name
        return self.namespace_of(scoped.scope), scoped.name

    def determine_namespace(self, caller: Caller, branch: str = "", author: str = "") -> str:
        """Return the namespace a new resource of ``caller`` goes to.

        Admin and deploy callers on a global branch target the global
        namespace. Deploy callers otherwise need a branch and an author and
        target the author's namespace. Everyone else targets their own.

        Raises:
            PermissionDeniedError: If the request does not satisfy the role rules.
        """
        if caller.role is Role.USER and author and author != caller.username:
            raise PermissionDeniedError(
                f"author '{author}' does not match authenticated user '{caller.username}'"
            )
        if caller.role is Role.DEPLOY and not branch:
            raise PermissionDeniedError("branch required for deploy role")

        if self.is_global_branch(branch) and caller.role in (Role.ADMIN, Role.DEPLOY):
            return self._global

        if caller.role is Role.DEPLOY:
            if not author:
                raise PermissionDeniedError("author required for deploy role")
            return self.developer_namespace(author)

        return self.developer_namespace(caller.username)

    def allowed_namespaces(self, caller: Caller, write: bool = False) -> List[str]:
        """Return the namespaces ``caller`` may touch, or ``["*"]`` for all.

        Reads also reach the global namespace; writes stay in the caller's own.
        """
        if caller.role is Role.ADMIN:
            return [ALL_NAMESPACES]
        own = self.developer_namespace(caller.username)
        if write:
            return [own]
        return [self._global, own]

    @staticmethod
    def is_allowed(namespace: str, allowed: List[str]) -> bool:
        return ALL_NAMESPACES in allowed or namespace in allowed

    def namespaces_to_search(
        self, identifier: str, caller: Caller, write: bool = False
    ) -> Tuple[List[str], str]:
        """Return the namespaces to look in for ``identifier``, and its name.

        A scoped id searches its own namespace only, when allowed. A legacy id
        searches the caller's namespace, then the global one.

        Raises:
            InvalidReferenceError: If the identifier is malformed.
        """
        try:
            scoped = ScopedId.parse(identifier)
        except ValueError as exc:
            raise InvalidReferenceError(str(exc)) from exc

        allowed = self.allowed_namespaces(caller, write)
        if not scoped.is_legacy:
            namespace = self.namespace_of(scoped.scope)
            if self.is_allowed(namespace, allowed):
                return [namespace], scoped.name
            logger.info(
                "Caller %s may not access namespace %s", caller.username, namespace
            )
            return [], scoped.name

        candidates = [self.developer_namespace(caller.username), self._global]
        return [ns for ns in candidates if self.is_allowed(ns, allowed)], scoped.name

    def listable_namespaces(self, caller: Caller) -> Optional[List[str]]:
        """Return the namespaces to list for ``caller``, or None for every namespace."""
        allowed = self.allowed_namespaces(caller)
        if ALL_NAMESPACES in allowed:
            return None
        return allowed
