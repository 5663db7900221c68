from typing import Any, Callable, Generic, Optional, Sequence, TypeVar

# T represents the Totally Ordered type used for coordinates (Time)
T = TypeVar('T')


class IntervalNode(Generic[T]):
    """Tree node with public accessors for start, end, and data."""
    __slots__ = ['start', 'end', 'data', 'left', 'right', 'max_end']

    def __init__(self, start: T, end: T, data: Any):
        self.start: T = start
        self.end: T = end
        self.data: Any = data
        self.left: Optional['IntervalNode[T]'] = None
        self.right: Optional['IntervalNode[T]'] = None
        self.max_end: T = end


class IntervalTree(Generic[T]):
    """
    Static augmented interval tree over half-open intervals [start, end).

    Built once from the whole set of intervals: the input is sorted by
    start and the median becomes the root, so the tree is balanced
    without rotations. Each node tracks the largest end in its subtree,
    which lets queries skip subtrees that end before the query starts.
    """

    def __init__(self, intervals: Sequence[tuple[T, T, Any]] = ()):
        ordered = sorted(intervals, key=lambda item: item[0])
        self._size = len(ordered)
        self.root: Optional[IntervalNode[T]] = self._build(ordered, 0, len(ordered))

    def __len__(self) -> int:
        return self._size

    def _build(self, items: list, lo: int, hi: int) -> Optional[IntervalNode[T]]:
        if lo >= hi:
            return None
        mid = (lo + hi) // 2
        start, end, data = items[mid]
        node = IntervalNode(start, end, data)
        node.left = self._build(items, lo, mid)
        node.right = self._build(items, mid + 1, hi)
        if node.left and node.left.max_end > node.max_end:
            node.max_end = node.left.max_end
        if node.right and node.right.max_end > node.max_end:
            node.max_end = node.right.max_end
        return node

    # --- Search Methods ---

    def find_intersecting(self, start: T, end: T, callback: Callable[[IntervalNode[T]], None]):
        """Finds intervals that share at least one instant with [start, end)."""
        def _search(node):
            # Nothing in this subtree ends after the query starts
            if not node or node.max_end <= start: return
            _search(node.left)
            if node.start < end and node.end > start: callback(node)
            # Right subtree only holds intervals starting at or after node.start
            if node.start < end: _search(node.right)
        _search(self.root)

    def intersecting(self, start: T, end: T) -> list[Any]:
        """Data of every interval intersecting [start, end), in start order."""
        found: list[Any] = []
        self.find_intersecting(start, end, lambda node: found.append(node.data))
        return found

    # --- Debug Tool ---

    def verify_integrity(self):
        """Raises if ordering or max_end augmentation is violated."""
        def _walk(node, lo, hi):
            if not node: return None
            if (lo is not None and node.start < lo) or (hi is not None and node.start > hi):
                raise RuntimeError(f"Order Violation at {node.start}")
            left_max = _walk(node.left, lo, node.start)
            right_max = _walk(node.right, node.start, hi)
            expected_max = node.end
            for m in (left_max, right_max):
                if m is not None and m > expected_max:
                    expected_max = m
            if node.max_end != expected_max:
                raise RuntimeError(f"MaxEnd Violation at {node.start}")
            return expected_max
        _walk(self.root, None, None)
