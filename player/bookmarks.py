"""Client-local bookmarks (not persisted, not logged)."""

from typing import Iterator, Set


class BookmarkSet:
    def __init__(self):
        self._ids: Set[str] = set()

    def toggle(self, video_id: str) -> bool:
        """Flip the bookmark for video_id. Returns the new state."""
        if video_id in self._ids:
            self._ids.discard(video_id)
            return False
        self._ids.add(video_id)
        return True

    def is_bookmarked(self, video_id: str) -> bool:
        return video_id in self._ids

    def __contains__(self, video_id: object) -> bool:
        return video_id in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._ids))

    def __len__(self) -> int:
        return len(self._ids)
