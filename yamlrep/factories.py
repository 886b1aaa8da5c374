"""Collection factories.

A CollectionFactory creates the native collection a collection mapper fills.
The mapper passes the node's child count as a hint; the factory may ignore
it. When the created collection already has slots (a FixedArray, or a
pre-sized list), the mapper fills it by index, otherwise it grows it through
the factory's add function.
"""

from collections import OrderedDict, deque
from collections.abc import MutableMapping


class FixedArray:
    """Fixed-length sequence; items can be replaced but never added."""

    __slots__ = ('_items',)

    def __init__(self, length=0, fill=None):
        if length < 0:
            raise ValueError("length must be non-negative")
        self._items = [fill] * length

    @classmethod
    def of(cls, iterable):
        items = list(iterable)
        array = cls(len(items))
        array._items[:] = items
        return array

    def __len__(self):
        return len(self._items)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return FixedArray.of(self._items[index])
        return self._items[index]

    def __setitem__(self, index, value):
        if isinstance(index, slice):
            raise TypeError("FixedArray does not support slice assignment")
        self._items[index] = value

    def __iter__(self):
        return iter(self._items)

    def __eq__(self, other):
        if isinstance(other, FixedArray):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    def __repr__(self):
        return 'FixedArray(%r)' % (self._items,)


def _append(collection, item):
    collection.append(item)


def _add(collection, item):
    collection.add(item)


def _setitem(collection, item):
    key, value = item
    collection[key] = value


class CollectionFactory:
    """Strategy creating native collections for collection mappers.

    Args:
        create: Callable taking a size hint and returning a new collection
        add: Callable (collection, item) used on growable collections;
            defaults to collection.append
        finish: Optional callable converting the filled collection into the
            final native value (e.g. list -> tuple)
        name: Optional display name
    """

    def __init__(self, create, add=None, finish=None, name=None):
        if not callable(create):
            raise TypeError("create must be callable")
        self._create = create
        self.add = add if add is not None else _append
        self.finish = finish
        self.name = name or getattr(create, '__name__', 'collection')

    def __call__(self, hint=0):
        return self._create(hint)

    def fill_in_place(self, collection):
        """Return True if collection already has slots to assign by index."""
        if isinstance(collection, (MutableMapping, set, frozenset)):
            return False
        return len(collection) > 0 and hasattr(collection, '__setitem__')

    def complete(self, collection):
        if self.finish is None:
            return collection
        return self.finish(collection)

    def __repr__(self):
        return 'CollectionFactory(%s)' % self.name


LIST = CollectionFactory(lambda hint: [], name='list')
TUPLE = CollectionFactory(lambda hint: [], finish=tuple, name='tuple')
SET = CollectionFactory(lambda hint: set(), add=_add, name='set')
FROZENSET = CollectionFactory(lambda hint: set(), add=_add, finish=frozenset,
                              name='frozenset')
DEQUE = CollectionFactory(lambda hint: deque(), name='deque')
DICT = CollectionFactory(lambda hint: {}, add=_setitem, name='dict')
ORDERED_DICT = CollectionFactory(lambda hint: OrderedDict(), add=_setitem,
                                 name='OrderedDict')


def fixed(length):
    """Factory for FixedArray targets of the given length; ignores the hint."""
    return CollectionFactory(lambda hint: FixedArray(length),
                             name='FixedArray[%d]' % length)


def presized():
    """Factory creating a list of hint None slots, filled by index."""
    return CollectionFactory(lambda hint: [None] * hint, name='presized list')


_FACTORIES = {
    list: LIST,
    tuple: TUPLE,
    set: SET,
    frozenset: FROZENSET,
    deque: DEQUE,
    dict: DICT,
    OrderedDict: ORDERED_DICT,
}


def factory_for(collection_type):
    """Return the built-in factory for a collection type.

    Raises:
        TypeError: if there is no factory for collection_type
    """
    if isinstance(collection_type, CollectionFactory):
        return collection_type
    try:
        return _FACTORIES[collection_type]
    except (KeyError, TypeError):
        raise TypeError("no collection factory for %r" % (collection_type,)) from None
