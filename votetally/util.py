'''Various utility functions for other modules of votetally.

There should normally be no need to use these functions directly.
'''

import math
import operator
from typing import Any, List, Tuple, Dict, Callable, Iterable, TypeVar
from numbers import Number


T = TypeVar('T')


def descending(items: Iterable[T], key: Callable[[T], Any]) -> List[T]:
    '''Sort the items by key, highest first.

    The sort is stable: items with equal keys keep their input order, which
    is how all ties between candidates are resolved.
    '''
    return sorted(items, key=key, reverse=True)


def descending_items(d: Dict[Any, Number]) -> List[Tuple[Any, Number]]:
    '''Return the dictionary items sorted by value, highest first.

    Items with equal values keep the insertion order of the dictionary.
    '''
    return descending(d.items(), key=operator.itemgetter(1))


def clamp(value: float, low: float = 0., high: float = 1.) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    '''Round to the nearest integer, rounding halves upwards.'''
    return int(math.floor(value + .5))
