"""
Lists whose elements all belong to one class.
"""

import collections.abc

from .errors import TypeMismatch


class TypedList(collections.abc.Sequence):
    """
    An ordered collection accepting only instances of element_class.

    >>> numbers = TypedList([1, 2], int)
    >>> numbers.append(3)
    >>> list(numbers)
    [1, 2, 3]
    >>> numbers.append('four')
    Traceback (most recent call last):
    ...
    ircstate.errors.TypeMismatch: 'four' is not of class int
    >>> numbers
    <TypedList[int]: [1, 2, 3]>

    Subclasses fix the element class.

    >>> class Names(TypedList):
    ...     element_class = str
    >>> Names(['a']).will_accept('b', 3)
    False
    """

    element_class = object

    def __init__(self, items=(), element_class=None):
        if element_class is not None:
            if not isinstance(element_class, type):
                raise TypeMismatch("%r must be a class" % (element_class,))
            self.element_class = element_class
        self._items = []
        self.extend(items)

    def _check(self, items):
        items = list(items)
        for item in items:
            if not isinstance(item, self.element_class):
                raise TypeMismatch(
                    "%r is not of class %s" % (item, self.element_class.__name__)
                )
        return items

    def will_accept(self, *items):
        "Check whether items are acceptable for this list"
        return all(isinstance(item, self.element_class) for item in items)

    def is_valid(self):
        return self.will_accept(*self._items)

    def validate(self):
        if not self.is_valid():
            raise TypeMismatch("%r holds foreign elements" % self)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return type(self)(self._items[index], self.element_class)
        return self._items[index]

    def __len__(self):
        return len(self._items)

    def __delitem__(self, index):
        del self._items[index]

    def append(self, item):
        self._items.extend(self._check([item]))

    def extend(self, items):
        self._items.extend(self._check(items))

    def insert(self, index, item):
        (item,) = self._check([item])
        self._items.insert(index, item)

    def replace(self, items):
        "Replace the whole content with items"
        self._items[:] = self._check(items)

    def remove(self, item):
        self._items.remove(item)

    def discard(self, item):
        """
        Remove item if present; return True if it was.

        >>> numbers = TypedList([1], int)
        >>> numbers.discard(1), numbers.discard(1)
        (True, False)
        """
        try:
            self._items.remove(item)
        except ValueError:
            return False
        return True

    def pop(self, index=-1):
        return self._items.pop(index)

    def clear(self):
        del self._items[:]

    def __eq__(self, other):
        if isinstance(other, TypedList):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    def __repr__(self):
        return "<%s[%s]: %r>" % (
            type(self).__name__,
            self.element_class.__name__,
            self._items,
        )
