"""Reference registry: ordered collection of accepted media references.

The registry is the only place that tells the owning context about new
media.  ``add`` appends and notifies exactly once; ``remove`` is local
state only unless the owner opted in to removal notifications.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from mediaintake.models import MediaReference
from mediaintake.observability import get_logger

log = get_logger("mediaintake.registry")

AttachedCallback = Callable[[str, MediaReference], None]
RemovedCallback = Callable[[int, MediaReference], None]


class ReferenceRegistry:
    """Append/remove registry of :data:`MediaReference` objects.

    Parameters
    ----------
    on_media_attached:
        Called as ``on_media_attached(canonical_url, reference)`` once for
        every added reference, after it has been appended.
    on_media_removed:
        Optional.  Called as ``on_media_removed(index, reference)`` after
        a removal.  By default removal does not notify anyone.
    """

    def __init__(
        self,
        on_media_attached: AttachedCallback,
        on_media_removed: RemovedCallback | None = None,
    ) -> None:
        self._entries: list[MediaReference] = []
        self._on_media_attached = on_media_attached
        self._on_media_removed = on_media_removed

    @property
    def entries(self) -> tuple[MediaReference, ...]:
        """Snapshot of the current references, in insertion order."""
        return tuple(self._entries)

    def add(self, reference: MediaReference) -> None:
        """Append *reference* (no de-duplication) and notify the owner.

        Raises
        ------
        ValueError
            If the reference has no canonical URL.
        """
        if not reference.canonical_url:
            raise ValueError("Cannot register a reference without a canonical URL")
        self._entries.append(reference)
        log.info(
            "Reference registered",
            extra={
                "extra_fields": {
                    "op": "add",
                    "source_kind": reference.source_kind,
                    "canonical_url": reference.canonical_url,
                    "count": len(self._entries),
                }
            },
        )
        self._on_media_attached(reference.canonical_url, reference)

    def remove(self, index: int) -> MediaReference:
        """Delete the reference at position *index* and return it.

        The relative order of the remaining references is preserved.

        Raises
        ------
        IndexError
            If *index* is negative or past the end.
        """
        if index < 0 or index >= len(self._entries):
            raise IndexError(
                f"No reference at index {index} (registry holds {len(self._entries)})"
            )
        removed = self._entries.pop(index)
        log.info(
            "Reference removed",
            extra={
                "extra_fields": {
                    "op": "remove",
                    "index": index,
                    "canonical_url": removed.canonical_url,
                    "count": len(self._entries),
                }
            },
        )
        if self._on_media_removed is not None:
            self._on_media_removed(index, removed)
        return removed

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[MediaReference]:
        return iter(tuple(self._entries))

    def __getitem__(self, index: int) -> MediaReference:
        return self._entries[index]
