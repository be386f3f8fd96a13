"""Node id to analysis description lookup."""

from collections.abc import Iterable, Iterator

from loguru import logger

from .models import DescriptionEntry, DescriptionRecord


class DescriptionIndex:
    """Maps node ids to their optional description record.

    Rebuilt alongside the graph on every load. When the same node id appears
    more than once, the last entry wins.
    """

    def __init__(self) -> None:
        self._records: dict[int, DescriptionRecord | None] = {}

    @classmethod
    def from_entries(
        cls, entries: Iterable[DescriptionEntry] | None
    ) -> "DescriptionIndex":
        index = cls()
        index.populate(entries)
        return index

    def populate(self, entries: Iterable[DescriptionEntry] | None) -> None:
        """Clear the index and fill it from ``entries``."""
        self.clear()
        for entry in entries or ():
            if entry.node_id in self._records:
                logger.debug(
                    f"Description for node {entry.node_id} repeated, keeping the last one"
                )
            self._records[entry.node_id] = entry.description

    def clear(self) -> None:
        self._records.clear()

    def get(self, node_id: int) -> DescriptionRecord | None:
        return self._records.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return self._records.get(node_id) is not None  # type: ignore[call-overload]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[int]:
        return iter(self._records)
