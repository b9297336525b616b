from typing import Iterable


class VisitedPath:
    """
    Ids of the entities on the active recursion path.

    Each branch of the traversal owns its own path: `extend` returns a new
    path and never changes the receiver, so siblings cannot see each other's
    entries and unwinding the recursion drops ids implicitly.
    """

    __slots__ = ("_ids",)

    def __init__(self, ids: Iterable[str] = ()):
        self._ids = frozenset(ids)

    def extend(self, entity_id: str) -> "VisitedPath":
        """Return the path with `entity_id` appended."""
        return VisitedPath(self._ids | {entity_id})

    def contains(self, entity_id: str) -> bool:
        """True when `entity_id` is an ancestor on this path (a cycle)."""
        return entity_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)
