# Keep the k largest files seen in a stream of (path, size) entries.
#
# Until k entries have arrived they are simply appended. When the k-th one
# arrives the list is sorted once (largest first) and from then on every new
# entry is either rejected against the current minimum or binary-inserted,
# dropping the smallest. That is O(n log k) overall instead of sorting all n.
#
# Equal sizes end up next to each other but their relative order is not stable.

from dataclasses import dataclass, field


@dataclass(frozen=True, order=True)
class FileEntry:
    """A file and its size in bytes. Entries compare by size only."""

    path: str = field(compare=False)
    size: int

    def __str__(self):
        return f'{self.path} ({self.size})'


def insertion_index(entries, size: int) -> int:
    """Index where an entry of `size` goes in the descending list `entries`.

    An entry whose size equals existing ones is placed in front of them.
    """
    low, high = 0, len(entries)
    while low != high:
        mid = (low + high) // 2
        if entries[mid].size > size:
            low = mid + 1
        else:
            high = mid
    return low


class TopKSizeTracker:

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError(f'capacity must be non-negative, got {capacity}')
        self.capacity = capacity
        self._entries = []
        self._sorted = False

    def __len__(self):
        return len(self._entries)

    @property
    def is_sorted(self):
        return self._sorted

    def offer(self, entry: FileEntry):
        if self.capacity == 0:
            return

        if not self._sorted:
            self._entries.append(entry)
            if len(self._entries) == self.capacity:
                self._entries.sort(key=lambda e: e.size, reverse=True)
                self._sorted = True
            return

        # smaller than the current minimum, can never make it in
        if entry.size < self._entries[-1].size:
            return

        self._entries.insert(insertion_index(self._entries, entry.size), entry)
        self._entries.pop()

    def snapshot(self):
        """Copy of the tracked entries.

        Largest first once the tracker is full. Before that the entries are in
        arrival order, see sorted_snapshot().
        """
        return list(self._entries)

    def sorted_snapshot(self):
        if self._sorted:
            return self.snapshot()
        return sorted(self._entries, key=lambda e: e.size, reverse=True)


def nlargest(capacity: int, entries):
    tracker = TopKSizeTracker(capacity)
    for entry in entries:
        tracker.offer(entry)
    return tracker.sorted_snapshot()
