"""Locating and reading custom directives in the schema AST.

Directives such as ``@connection(for: "User")`` are instructions to the
pipeline rather than part of the final schema. Passes find them with
``extract_directives``, read their arguments with the helpers below, and
usually strip them once they have been applied.
"""

from dataclasses import dataclass
from typing import Any, Collection

from .errors import DirectiveArgumentError
from .nodes import (
    BooleanValue,
    Directive,
    EnumValue,
    FloatValue,
    IntValue,
    ListValue,
    Node,
    NullValue,
    ObjectValue,
    StringValue,
    Value,
)
from .walker import Ancestors, walk


@dataclass
class DirectiveUsage:
    """A directive found in the tree, together with where it was found."""
    host: Node
    directive: Directive
    ancestors: Ancestors

    @property
    def parent(self) -> Node | None:
        """The node that owns the host (e.g. the type that owns a field)."""
        return self.ancestors[-1] if self.ancestors else None


def extract_directives(
    root: Node,
    name: str,
    strip: bool = False,
    kinds: Collection[type[Node]] | None = None,
) -> list[DirectiveUsage]:
    """Find every usage of directive ``name`` below ``root``.

    Args:
        root: Node to search (usually the Document)
        name: Directive name without the ``@``
        strip: Remove each matching directive from its host
        kinds: Only consider hosts that are instances of these node classes

    Returns:
        Usages in document order (first occurrence first)
    """
    host_kinds = tuple(kinds) if kinds else None
    usages: list[DirectiveUsage] = []

    def visitor(ancestors: Ancestors, node: Node) -> None:
        if not isinstance(node, Directive) or node.name != name or not ancestors:
            return
        host = ancestors[-1]
        if host_kinds and not isinstance(host, host_kinds):
            return
        usages.append(DirectiveUsage(host=host, directive=node, ancestors=ancestors[:-1]))
        if strip:
            remove_directive(host, node)

    walk(root, visitor)

    # the walker runs back to front
    usages.reverse()
    return usages


def remove_directive(host: Node, directive: Directive) -> None:
    """Remove one directive instance (matched by identity) from its host."""
    directives = getattr(host, "directives", None) or []
    for index, candidate in enumerate(directives):
        if candidate is directive:
            del directives[index]
            return


def find_directive(host: Node, name: str) -> Directive | None:
    """Return the first directive called ``name`` on ``host``."""
    for directive in getattr(host, "directives", None) or []:
        if directive.name == name:
            return directive
    return None


def has_directive(host: Node, name: str) -> bool:
    return find_directive(host, name) is not None


def get_argument(directive: Directive, name: str) -> Value | None:
    """Return the raw value node of a directive argument, if present."""
    for argument in directive.arguments:
        if argument.name == name:
            return argument.value
    return None


def value_to_python(value: Value | None) -> Any:
    """Evaluate a constant value node into a plain Python value."""
    if value is None or isinstance(value, NullValue):
        return None
    if isinstance(value, (StringValue, EnumValue)):
        return value.value
    if isinstance(value, IntValue):
        return int(value.value)
    if isinstance(value, FloatValue):
        return float(value.value)
    if isinstance(value, BooleanValue):
        return value.value
    if isinstance(value, ListValue):
        return [value_to_python(item) for item in value.values]
    if isinstance(value, ObjectValue):
        return {item.name: value_to_python(item.value) for item in value.fields}
    raise TypeError(f"Unsupported value node: {type(value).__name__}")


def get_string_argument(
    directive: Directive,
    name: str,
    required: bool = False,
    where: str = "",
) -> str | None:
    """Read a string argument, enforcing presence and value kind.

    Args:
        directive: Directive to read from
        name: Argument name
        required: Raise when the argument is absent
        where: Location used in error messages, e.g. 'field "Query.users"'

    Raises:
        DirectiveArgumentError: If the argument is required but missing, or is
            present with a non-string value
    """
    location = f" on {where}" if where else ""
    value = get_argument(directive, name)
    if value is None:
        if required:
            raise DirectiveArgumentError(
                f'The @{directive.name} directive{location} is missing the "{name}" argument.'
            )
        return None
    if not isinstance(value, StringValue):
        raise DirectiveArgumentError(
            f'The "{name}" argument of the @{directive.name} directive{location} '
            f"must be a string, got {value.kind}."
        )
    return value.value
