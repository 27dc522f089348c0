"""Local `$ref` resolution over a decoded API description."""

import logging
from typing import Any
from urllib.parse import unquote

logger = logging.getLogger(__name__)


class ReferenceResolutionError(LookupError):
    """A JSON Pointer does not lead to a node in the document."""

    def __init__(self, ref: str, message: str | None = None):
        super().__init__(message or f"Cannot resolve reference: {ref}")
        self.ref = ref


class CircularReferenceError(ReferenceResolutionError):
    """A chain of `$ref`s points back at itself."""

    def __init__(self, ref: str, chain: list[str]):
        super().__init__(ref, "Circular reference: " + " -> ".join([*chain, ref]))
        self.chain = chain


def is_local_ref(ref: Any) -> bool:
    return isinstance(ref, str) and ref.startswith("#")


def is_ref(node: Any) -> bool:
    return isinstance(node, dict) and isinstance(node.get("$ref"), str)


def pointer_segments(ref: str) -> list[str]:
    """Split `#/a/b~1c` into unescaped segments `["a", "b/c"]`."""
    pointer = ref[1:] if ref.startswith("#") else ref
    if not pointer:
        return []
    segments = pointer.split("/")[1:]
    return [unquote(s).replace("~1", "/").replace("~0", "~") for s in segments]


def walk(document: Any, ref: str) -> Any:
    """Return the node `ref` points at, without following nested `$ref`s."""
    node = document
    for segment in pointer_segments(ref):
        if isinstance(node, dict) and segment in node:
            node = node[segment]
        elif isinstance(node, list) and segment.isdigit() and int(segment) < len(node):
            node = node[int(segment)]
        else:
            raise ReferenceResolutionError(ref)
    return node


def resolve(document: dict, ref: str) -> Any:
    """Locate `ref` in `document`, following `$ref` chains.

    Raises CircularReferenceError when the chain revisits a pointer.
    """
    chain: list[str] = []
    node: Any = {"$ref": ref}
    while is_ref(node) and is_local_ref(node["$ref"]):
        current = node["$ref"]
        if current in chain:
            raise CircularReferenceError(current, chain)
        chain.append(current)
        node = walk(document, current)
    return node


class RefResolver:
    """Resolves local `$ref`s against one document.

    Resolved pointers are memoized on the resolver, never in the document.
    """

    def __init__(self, document: dict):
        self.document = document
        self._cache: dict[str, Any] = {}

    def resolve(self, ref: str) -> Any:
        if ref not in self._cache:
            logger.debug("Resolving %s", ref)
            self._cache[ref] = resolve(self.document, ref)
        return self._cache[ref]

    def deref(self, node: Any) -> Any:
        """Return the target of a local `$ref` node, or the node itself.

        Remote refs are returned untouched.
        """
        if is_ref(node) and is_local_ref(node["$ref"]):
            return self.resolve(node["$ref"])
        return node
