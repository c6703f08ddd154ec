"""Pre-order traversal of JSON-like document structures.

Drive API responses are plain trees of dicts, lists and scalars. ``walk``
yields every node together with the path of keys/indices that leads to it,
and ``render_path`` turns such a path into the bracket form used by link
selectors::

    >>> render_path(("body", "content", 0, "paragraph"))
    "['body']['content'][0]['paragraph']"
"""

from __future__ import annotations

from typing import Any, Iterator, List, Tuple, Union

PathSegment = Union[str, int]
Path = Tuple[PathSegment, ...]


def walk(node: Any, path: Path = ()) -> Iterator[Tuple[Path, Any]]:
    """Yield ``(path, value)`` for *node* and all of its descendants.

    Parents are emitted before their children. Scalars and ``None`` are
    leaves. Nesting depth is limited only by memory.
    """
    stack: List[Tuple[Path, Any]] = [(path, node)]

    while stack:
        current_path, current = stack.pop()
        yield current_path, current

        if isinstance(current, dict):
            children = [(current_path + (key,), value) for key, value in current.items()]
        elif isinstance(current, (list, tuple)):
            children = [
                (current_path + (index,), value) for index, value in enumerate(current)
            ]
        else:
            continue
        # Reversed so the first child is popped first
        stack.extend(reversed(children))


def _render_segment(segment: PathSegment) -> str:
    if isinstance(segment, int) and not isinstance(segment, bool):
        return f"[{segment}]"
    return f"['{segment}']"


def render_path(path: Path) -> str:
    """Render a path as ``['key']`` / ``[0]`` segments."""
    return "".join(_render_segment(segment) for segment in path)


def _render_tail(path: Path, length: int) -> str:
    """Render the shortest trailing part of *path* at least *length* chars long."""
    parts: List[str] = []
    size = 0
    for segment in reversed(path):
        part = _render_segment(segment)
        parts.append(part)
        size += len(part)
        if size >= length:
            break
    return "".join(reversed(parts))


def find_by_suffix(node: Any, selector: str) -> Iterator[Any]:
    """Yield every value in *node* whose rendered path ends with *selector*."""
    for path, value in walk(node):
        if not path:
            continue
        if _render_tail(path, len(selector)).endswith(selector):
            yield value
