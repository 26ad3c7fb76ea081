"""Reverse-order tree walker over the mutable schema AST.

Every node is visited exactly once, parents before children, with siblings
visited last to first. Because later siblings are always visited before
earlier ones, a visitor may delete the node it is visiting (or any sibling
that has already been visited) without shifting the index of a node that
is still pending.

Example:
    def strip_secret(ancestors, node):
        if isinstance(node, FieldDefinition) and has_directive(node, "secret"):
            parent = ancestors[-1]
            parent.fields.remove(node)

    walk(document, strip_secret)
"""

from typing import Callable

from .nodes import Node

Ancestors = tuple[Node, ...]
Visitor = Callable[[Ancestors, Node], None]


def walk(root: Node, visitor: Visitor) -> None:
    """Visit ``root`` and everything reachable from it.

    Args:
        root: Node to start from (usually a Document)
        visitor: Called as ``visitor(ancestors, node)`` before the node's
            children are visited. ``ancestors`` runs from the root to the
            node's parent and excludes the node itself.

    Exceptions raised by the visitor propagate immediately and abort the walk.
    """
    _walk(root, [], visitor)


def _walk(node: object, stack: list[Node], visitor: Visitor) -> None:
    # anything that is not an AST node (names, None, raw strings) is skipped
    if not isinstance(node, Node):
        return

    visitor(tuple(stack), node)

    stack.append(node)
    try:
        for attr in reversed(node.children):
            child = getattr(node, attr, None)
            if isinstance(child, list):
                for index in range(len(child) - 1, -1, -1):
                    # the visitor may have shortened the list
                    if index < len(child):
                        _walk(child[index], stack, visitor)
            else:
                _walk(child, stack, visitor)
    finally:
        stack.pop()
