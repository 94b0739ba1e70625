"""
Chainable in-memory collection used for observation queries.

Every query returns a new collection, the wrapped items are never mutated,
so one loaded dataset can be shared by any number of concurrent queries.
"""

from typing import TypeVar, Generic, Callable, List, Dict, Optional, Any, Union, Hashable
from collections.abc import Iterable

T = TypeVar('T')


class QueryableCollection(Generic[T]):
    """
    A lightweight, chainable view over a sequence of items.

    Examples:
        # Attribute matching
        observations.where(station='EHAM').all()

        # Chaining
        observations.filter(lambda o: o.visibility_m < 5000).order_by(lambda o: o.timestamp).first()

        # Grouping
        observations.group_by(lambda o: o.station)
    """

    def __init__(self, items: Union[List[T], Iterable[T]]):
        """
        Initialize a queryable collection.

        Args:
            items: List or iterable of items to wrap
        """
        self._items: List[T] = list(items) if not isinstance(items, list) else items

    def _new_collection(self, items: List[T]) -> 'QueryableCollection[T]':
        return self.__class__(items)

    def filter(self, predicate: Callable[[T], bool]) -> 'QueryableCollection[T]':
        """
        Filter items using a predicate function.

        Args:
            predicate: Function that takes an item and returns True to include it

        Returns:
            New collection with filtered items
        """
        return self._new_collection([item for item in self._items if predicate(item)])

    def where(self, **kwargs) -> 'QueryableCollection[T]':
        """
        Filter items using keyword arguments (attribute matching).
        All conditions must match (AND logic).

        Examples:
            observations.where(station='EHGG', visibility_m=9999)
        """
        def matches(item: T) -> bool:
            return all(
                getattr(item, key, None) == value
                for key, value in kwargs.items()
            )
        return self.filter(matches)

    def first(self) -> Optional[T]:
        """Return the first item or None if collection is empty."""
        return self._items[0] if self._items else None

    def last(self) -> Optional[T]:
        """Return the last item or None if collection is empty."""
        return self._items[-1] if self._items else None

    def all(self) -> List[T]:
        """Return all items as a list."""
        return list(self._items)

    def count(self) -> int:
        return len(self._items)

    def exists(self) -> bool:
        return len(self._items) > 0

    def is_empty(self) -> bool:
        return len(self._items) == 0

    def any(self, predicate: Callable[[T], bool]) -> bool:
        """Return True if any item matches the predicate."""
        return any(predicate(item) for item in self._items)

    def group_by(self, key_func: Callable[[T], Hashable]) -> Dict[Any, List[T]]:
        """
        Group items by a key function, keeping first-seen key order.

        Args:
            key_func: Function that returns a grouping key for each item

        Returns:
            Dictionary mapping keys to lists of items

        Examples:
            by_month = observations.group_by(lambda o: (o.timestamp.year, o.timestamp.month))
        """
        result: Dict[Any, List[T]] = {}
        for item in self._items:
            result.setdefault(key_func(item), []).append(item)
        return result

    def order_by(self, key_func: Callable[[T], Any], reverse: bool = False) -> 'QueryableCollection[T]':
        """
        Sort items by a key function (stable).

        Args:
            key_func: Function that returns a sort key for each item
            reverse: If True, sort in descending order
        """
        return self._new_collection(sorted(self._items, key=key_func, reverse=reverse))

    def take(self, n: int) -> 'QueryableCollection[T]':
        """Take the first n items."""
        return self._new_collection(self._items[:n])

    def skip(self, n: int) -> 'QueryableCollection[T]':
        """Skip the first n items."""
        return self._new_collection(self._items[n:])

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._new_collection(self._items[index])
        return self._items[index]

    def __bool__(self):
        return len(self._items) > 0

    def __repr__(self):
        """Show class name, a preview of the first items and the total count."""
        class_name = self.__class__.__name__
        count = len(self._items)

        if count == 0:
            return f"{class_name}([])"

        preview_items = []
        for item in self._items[:3]:
            if hasattr(item, 'station'):
                preview_items.append(repr(item.station))
            elif hasattr(item, 'name'):
                preview_items.append(repr(item.name))
            else:
                preview_items.append(f"<{type(item).__name__}>")

        if count > 3:
            preview_items.append('...')

        preview = '[' + ', '.join(preview_items) + ']'
        return f"{class_name}({preview}, count={count})"
