from typing import List, Optional, Sequence


class Interval:
    """
    zero-based half-open integer interval [start, end)
    """

    def __init__(self, start: int, end: Optional[int] = None):
        """
        Args:
            start: the start of the interval (inclusive)
            end: the end of the interval (exclusive). Defaults to a single base interval

        Raises:
            AttributeError: if the start is after the end
        """
        self.start = int(start)
        self.end = int(end) if end is not None else self.start + 1
        if self.start > self.end:
            raise AttributeError('interval start > end is not allowed', self.start, self.end)

    def __getitem__(self, index):
        try:
            index = int(index)
        except ValueError:
            raise IndexError('index input accessor must be an integer', index)
        if index == 0:
            return self.start
        elif index == 1:
            return self.end
        raise IndexError('index input accessor is out of bounds: 1 or 2 only', index)

    def __and__(self, other):  # intersection
        """the intersection of two intervals

        Example:
            >>> Interval(1, 10) & Interval(5, 50)
            Interval(5, 10)
            >>> Interval(1, 2) & Interval(10, 11)
            None
        """
        return Interval.intersection(self, other)

    def __or__(self, other):  # union
        """the union of two intervals

        Example:
            >>> Interval(1, 10) | Interval(5, 50)
            Interval(1, 50)
        """
        return Interval.union(self, other)

    @classmethod
    def overlaps(cls, first: Sequence[int], other: Sequence[int]) -> bool:
        """
        checks if two intervals share at least one base

        Example:
            >>> Interval.overlaps(Interval(1, 4), Interval(4, 7))
            False
            >>> Interval.overlaps((1, 10), (9, 11))
            True
        """
        return first[0] < other[1] and other[0] < first[1]

    @classmethod
    def touches(cls, first: Sequence[int], other: Sequence[int]) -> bool:
        """
        checks if two intervals overlap or are directly adjacent (book-ended)

        Example:
            >>> Interval.touches((1, 4), (4, 7))
            True
            >>> Interval.touches((1, 4), (5, 7))
            False
        """
        return first[0] <= other[1] and other[0] <= first[1]

    def length(self) -> int:
        return self.end - self.start

    def __len__(self):
        """
        the number of bases covered by the interval

        Example:
            >>> len(Interval(1, 11))
            10
        """
        return self.length()

    def __lt__(self, other):
        if self[0] < other[0]:
            return True
        elif self[0] == other[0] and self[1] < other[1]:
            return True
        return False

    def __eq__(self, other):
        try:
            return self[0] == other[0] and self[1] == other[1]
        except (TypeError, IndexError):
            return False

    def __hash__(self):
        return hash((self[0], self[1]))

    def __contains__(self, other):
        try:
            return other[0] >= self[0] and other[1] <= self[1]
        except TypeError:
            return self[0] <= other < self[1]

    def __repr__(self):
        return '{}({}, {})'.format(self.__class__.__name__, self.start, self.end)

    @classmethod
    def union(cls, *intervals) -> 'Interval':
        """
        returns the smallest interval spanning all of the input intervals

        Example:
            >>> Interval.union((1, 2), (4, 6), (4, 9), (20, 21))
            Interval(1, 21)
        """
        if len(intervals) < 1:
            raise AttributeError('cannot compute the union of an empty set of intervals')
        return Interval(min([i[0] for i in intervals]), max([i[1] for i in intervals]))

    @classmethod
    def intersection(cls, *intervals) -> Optional['Interval']:
        """
        returns None if there is no intersection

        Example:
            >>> Interval.intersection((1, 10), (2, 8), (7, 15))
            Interval(7, 8)
            >>> Interval.intersection((1, 2), (5, 9))
            None
        """
        if len(intervals) < 1:
            raise AttributeError('cannot compute the intersection of an empty set of intervals')
        low = max([i[0] for i in intervals])
        high = min([i[1] for i in intervals])
        if low >= high:
            return None
        return Interval(low, high)

    @classmethod
    def min_nonoverlapping(cls, *intervals) -> List['Interval']:
        """
        for a list of intervals, orders them and merges any overlapping or adjacent
        intervals to return a list of non-overlapping intervals. O(nlogn)

        Example:
            >>> Interval.min_nonoverlapping((1, 10), (7, 8), (6, 14), (14, 20), (22, 25))
            [Interval(1, 20), Interval(22, 25)]
        """
        if len(intervals) == 0:
            return []
        intervals = sorted(list(intervals), key=lambda x: (x[0], x[1]))
        new_intervals = [Interval(intervals[0][0], intervals[0][1])]
        for i in intervals[1:]:
            if Interval.touches(new_intervals[-1], i):
                new_intervals[-1] = new_intervals[-1] | i
            else:
                new_intervals.append(Interval(i[0], i[1]))
        return new_intervals

    @classmethod
    def base_count(cls, *intervals) -> int:
        """
        the number of distinct bases covered by a set of intervals

        Example:
            >>> Interval.base_count((0, 10), (5, 15), (20, 25))
            20
        """
        return sum([len(i) for i in Interval.min_nonoverlapping(*intervals)])
