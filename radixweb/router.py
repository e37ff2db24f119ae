"""Radix-tree HTTP request router with static, parameter and wildcard segments."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from http import HTTPStatus
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

Handler = Callable[["RouteMatch"], Any]

PROPFIND = "PROPFIND"
REPORT = "REPORT"

METHODS = (
    "CONNECT",
    "DELETE",
    "GET",
    "HEAD",
    "OPTIONS",
    "PATCH",
    "POST",
    PROPFIND,
    "PUT",
    "TRACE",
    REPORT,
)

_PARAM_LABEL = ":"
_ANY_LABEL = "*"


class HTTPError(Exception):
    """An error that carries an HTTP status code."""

    def __init__(self, code: int, message: str = "") -> None:
        super().__init__(code, message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"code={self.code}, message={self.message}"

    @classmethod
    def from_status(cls, status: HTTPStatus) -> "HTTPError":
        """Build an error from a standard HTTP status and its reason phrase."""
        return cls(status.value, status.phrase)


def not_found_handler(context: Any) -> Any:
    """Handler used when no route matches the request path."""
    error = HTTPError.from_status(HTTPStatus.NOT_FOUND)
    raise error


def method_not_allowed_handler(context: Any) -> Any:
    """Handler used when the path matches but not for the request method."""
    error = HTTPError.from_status(HTTPStatus.METHOD_NOT_ALLOWED)
    raise error


class _Kind(IntEnum):
    STATIC = 0
    PARAM = 1
    ANY = 2


@dataclass(eq=False)
class _Node:
    kind: _Kind = _Kind.STATIC
    label: str = ""
    prefix: str = ""
    parent: Optional["_Node"] = None
    static_children: list = field(default_factory=list)
    ppath: str = ""
    pnames: tuple = ()
    handlers: dict = field(default_factory=dict)
    param_child: Optional["_Node"] = None
    any_child: Optional["_Node"] = None

    @property
    def is_leaf(self) -> bool:
        return not self.static_children and self.param_child is None and self.any_child is None

    @property
    def is_handler(self) -> bool:
        return bool(self.handlers)

    def set_handler(self, method: str, handler: Optional[Handler]) -> None:
        if method not in METHODS:
            return
        if handler is None:
            self.handlers.pop(method, None)
        else:
            self.handlers[method] = handler

    def find_static_child(self, label: str) -> Optional["_Node"]:
        return next((c for c in self.static_children if c.label == label), None)

    def find_child_with_label(self, label: str) -> Optional["_Node"]:
        child = self.find_static_child(label)
        if child is not None:
            return child
        if label == _PARAM_LABEL:
            return self.param_child
        if label == _ANY_LABEL:
            return self.any_child
        return None

    def check_method_not_allowed(self) -> Handler:
        if any(m in self.handlers for m in METHODS):
            return method_not_allowed_handler
        return not_found_handler


@dataclass
class RouteMatch:
    """Result of a route lookup: the handler, route path and path parameters."""

    method: str
    handler: Handler
    path: str
    param_names: tuple = ()
    param_values: list = field(default_factory=list)

    def param(self, name: str) -> str:
        """Return the value of path parameter ``name`` or an empty string."""
        for param_name, value in zip(self.param_names, self.param_values):
            if param_name == name:
                return value
        return ""

    @property
    def params(self) -> dict:
        return dict(zip(self.param_names, self.param_values))


def _common_prefix_length(a: str, b: str) -> int:
    length = 0
    for x, y in zip(a, b):
        if x != y:
            break
        length += 1
    return length


class Router:
    """Registry of routes, matched by longest common prefix with backtracking."""

    def __init__(self) -> None:
        self._root = _Node()
        self._max_param = 0

    @property
    def max_param(self) -> int:
        return self._max_param

    def add(self, method: str, path: str, handler: Optional[Handler]) -> None:
        """Register ``handler`` for ``method`` and ``path``."""
        if not path:
            path = "/"
        if not path.startswith("/"):
            path = "/" + path
        pnames: list = []
        ppath = path

        if handler is None:
            logger.error("Adding route without handler function: %s:%s", method, path)

        i, end = 0, len(path)
        while i < end:
            char = path[i]
            if char == _PARAM_LABEL:
                start = i + 1
                self._insert(method, path[:i], None, _Kind.STATIC, "", ())
                while i < end and path[i] != "/":
                    i += 1
                pnames.append(path[start:i])
                path = path[:start] + path[i:]
                i, end = start, len(path)
                if i == end:
                    self._insert(method, path[:i], handler, _Kind.PARAM, ppath, tuple(pnames))
                else:
                    self._insert(method, path[:i], None, _Kind.PARAM, "", ())
            elif char == _ANY_LABEL:
                self._insert(method, path[:i], None, _Kind.STATIC, "", ())
                pnames.append("*")
                self._insert(method, path[: i + 1], handler, _Kind.ANY, ppath, tuple(pnames))
            i += 1

        self._insert(method, path, handler, _Kind.STATIC, ppath, tuple(pnames))

    def _insert(self, method, path, handler, kind, ppath, pnames) -> None:
        self._max_param = max(self._max_param, len(pnames))
        node = self._root
        search = path

        while True:
            prefix_len = len(node.prefix)
            lcp = _common_prefix_length(search, node.prefix)

            if lcp == 0:
                node.label = search[0]
                node.prefix = search
                if handler is not None:
                    node.kind = kind
                    node.set_handler(method, handler)
                    node.ppath = ppath
                    node.pnames = pnames
            elif lcp < prefix_len:
                split = _Node(
                    kind=node.kind,
                    label=node.prefix[lcp],
                    prefix=node.prefix[lcp:],
                    parent=node,
                    static_children=node.static_children,
                    ppath=node.ppath,
                    pnames=node.pnames,
                    handlers=node.handlers,
                    param_child=node.param_child,
                    any_child=node.any_child,
                )
                for child in split.static_children:
                    child.parent = split
                if split.param_child is not None:
                    split.param_child.parent = split
                if split.any_child is not None:
                    split.any_child.parent = split

                node.kind = _Kind.STATIC
                node.label = node.prefix[0]
                node.prefix = node.prefix[:lcp]
                node.static_children = [split]
                node.handlers = {}
                node.ppath = ""
                node.pnames = ()
                node.param_child = None
                node.any_child = None

                if lcp == len(search):
                    node.kind = kind
                    node.set_handler(method, handler)
                    node.ppath = ppath
                    node.pnames = pnames
                else:
                    child = _Node(
                        kind=kind,
                        label=search[lcp],
                        prefix=search[lcp:],
                        parent=node,
                        ppath=ppath,
                        pnames=pnames,
                    )
                    child.set_handler(method, handler)
                    node.static_children.append(child)
            elif lcp < len(search):
                search = search[lcp:]
                existing = node.find_child_with_label(search[0])
                if existing is not None:
                    node = existing
                    continue
                child = _Node(
                    kind=kind,
                    label=search[0],
                    prefix=search,
                    parent=node,
                    ppath=ppath,
                    pnames=pnames,
                )
                child.set_handler(method, handler)
                if kind is _Kind.STATIC:
                    node.static_children.append(child)
                elif kind is _Kind.PARAM:
                    node.param_child = child
                else:
                    node.any_child = child
            elif handler is not None:
                node.set_handler(method, handler)
                node.ppath = ppath
                if not node.pnames:
                    node.pnames = pnames
            return

    def find(self, method: str, path: str) -> RouteMatch:
        """Look up the handler for ``method`` and ``path``, parsing path parameters."""
        values = [""] * self._max_param
        node: Optional[_Node] = self._root
        best: Optional[_Node] = None
        matched: Optional[Handler] = None
        search = path
        search_index = 0
        param_index = 0

        def backtrack(from_kind: _Kind) -> tuple:
            nonlocal node, search, search_index, param_index
            previous = node
            node = previous.parent
            valid = node is not None
            next_kind = _Kind.STATIC if previous.kind is _Kind.ANY else _Kind(previous.kind + 1)
            if from_kind is _Kind.STATIC:
                return next_kind, valid
            if previous.kind is _Kind.STATIC:
                search_index -= len(previous.prefix)
            else:
                param_index -= 1
                search_index -= len(values[param_index])
                values[param_index] = ""
            search = path[search_index:]
            return next_kind, valid

        stage = _Kind.STATIC
        while True:
            if stage is _Kind.STATIC:
                prefix_len = lcp = 0
                if node.kind is _Kind.STATIC:
                    prefix_len = len(node.prefix)
                    lcp = _common_prefix_length(search, node.prefix)

                if lcp != prefix_len:
                    next_kind, ok = backtrack(_Kind.STATIC)
                    if not ok:
                        return RouteMatch(method, not_found_handler, path, (), values)
                    if next_kind is _Kind.PARAM:
                        stage = _Kind.PARAM
                        continue
                    break

                search = search[lcp:]
                search_index += lcp

                if not search and node.is_handler:
                    if best is None:
                        best = node
                    handler = node.handlers.get(method)
                    if handler is not None:
                        matched = handler
                        break

                if search:
                    child = node.find_static_child(search[0])
                    if child is not None:
                        node = child
                        continue
                stage = _Kind.PARAM

            if stage is _Kind.PARAM:
                child = node.param_child
                if search and child is not None:
                    node = child
                    if node.is_leaf:
                        end = len(search)
                    else:
                        slash = search.find("/")
                        end = len(search) if slash == -1 else slash
                    values[param_index] = search[:end]
                    param_index += 1
                    search = search[end:]
                    search_index += end
                    stage = _Kind.STATIC
                    continue
                stage = _Kind.ANY

            child = node.any_child
            if child is not None:
                node = child
                values[len(node.pnames) - 1] = search
                param_index += 1
                search_index += len(search)
                search = ""
                if best is None:
                    best = node
                handler = node.handlers.get(method)
                if handler is not None:
                    matched = handler
                    break

            next_kind, ok = backtrack(_Kind.ANY)
            if not ok:
                break
            if next_kind is _Kind.PARAM:
                stage = _Kind.PARAM
                continue
            if next_kind is _Kind.ANY:
                stage = _Kind.ANY
                continue
            break

        if matched is not None:
            return RouteMatch(method, matched, node.ppath, node.pnames, values)
        if best is None:
            return RouteMatch(method, not_found_handler, path, (), values)
        return RouteMatch(method, best.check_method_not_allowed(), best.ppath, best.pnames, values)