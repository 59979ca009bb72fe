'''Quota functions giving the number of votes needed to win a seat.

A quota function takes the total number of votes and the number of seats
to fill and returns the number of votes a candidate needs to get elected.
The single transferable vote evaluator uses the Droop quota by default.

All supported quota functions are assembled in the `QUOTAS` dictionary keyed
by their name. `get()` retrieves from this dictionary by string key;
`construct()` also accepts callables and passes them through.
'''

from typing import Dict, Callable
from numbers import Number

import votetally.component.core


QUOTAS: Dict[str, Callable[[int, int], Number]] = {}


quota_mark, get, construct = votetally.component.core.register_functions(
    QUOTAS, 'quota'
)


@quota_mark
def droop(votes: int, seats: int) -> int:
    '''Droop quota, the most widely used one.

    This is the smallest integer quota guaranteeing that no more candidates
    than seats can reach it.
    '''
    return votes // (seats + 1) + 1


@quota_mark
def hare(votes: int, seats: int) -> float:
    '''Hare quota, the most basic one: votes per seat.'''
    return votes / seats


@quota_mark
def hagenbach_bischoff(votes: int, seats: int) -> float:
    '''Hagenbach-Bischoff quota, the unrounded variant of Droop.

    More than seats candidates may reach it when their totals are equal.
    '''
    return votes / (seats + 1)
