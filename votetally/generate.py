"""Generate voter populations for spatial voting simulations.

Voters are points in the unit square. They are produced in blocs: each
:class:`VoterBloc` holds a center position and a spread, and its voters are
sampled from a normal distribution around the center with the spread as its
standard deviation, clamped into the square. The positions can be turned into
ballots by :func:`votetally.spatial.generate_votes_from_spatial_data`.

Predefined populations can be created with :func:`create_preset_population`.
All sampling goes through a :class:`random.Random` instance, so fixing the
`random_state` seed makes the population reproducible.
"""

import enum
import itertools
import math
import random
import string
import collections
from typing import Any, List, Optional, Sequence, Union

import votetally.util
from votetally.candidate import SpatialCandidate
from votetally.spatial import Point


Voter = collections.namedtuple('Voter', ['position', 'bloc_id'])
Voter.__new__.__defaults__ = (None, )

VoterPopulation = collections.namedtuple(
    'VoterPopulation', ['blocs', 'total_count']
)

_bloc_ids = itertools.count(1)


class VoterBloc:
    """A group of voters normally distributed around a position.

    :param id: Identifier of the bloc.
    :param position: Center of the bloc.
    :param count: Number of voters in the bloc.
    :param spread: Standard deviation of voter coordinates around the center.
    """
    def __init__(self, id: str, position: Point, count: int, spread: float):
        self.id = id
        self.position = Point(*position)
        self.count = count
        self.spread = spread

    def __repr__(self):
        return (
            f'<VoterBloc {self.id} at ({self.position.x}, {self.position.y})'
            f' count={self.count} spread={self.spread}>'
        )

    def generate(self, rng: Optional[random.Random] = None) -> List[Voter]:
        """Sample the voters of the bloc."""
        if rng is None:
            rng = random.Random()
        voters = []
        for i in range(self.count):
            voters.append(Voter(
                Point(
                    votetally.util.clamp(
                        self.position.x + box_muller(rng) * self.spread
                    ),
                    votetally.util.clamp(
                        self.position.y + box_muller(rng) * self.spread
                    ),
                ),
                self.id
            ))
        return voters


def box_muller(rng: random.Random) -> float:
    '''Sample the standard normal distribution by the Box-Muller transform.'''
    u = 0.
    while u == 0:
        u = rng.random()
    v = 0.
    while v == 0:
        v = rng.random()
    return math.sqrt(-2. * math.log(u)) * math.cos(2. * math.pi * v)


def create_voter_bloc(position: Point, count: int, spread: float) -> VoterBloc:
    '''Create a voter bloc with a fresh identifier (``bloc-1``, ``bloc-2``...).'''
    return VoterBloc(f'bloc-{next(_bloc_ids)}', position, count, spread)


def generate_population(blocs: Sequence[VoterBloc],
                        random_state: Union[int, random.Random, None] = None,
                        ) -> List[Voter]:
    '''Sample the voters of all blocs, bloc by bloc.

    :param blocs: Voter blocs to sample.
    :param random_state: Seed for the sampler, or a random generator to use.
    '''
    if isinstance(random_state, random.Random):
        rng = random_state
    else:
        rng = random.Random(random_state)
    return [voter for bloc in blocs for voter in bloc.generate(rng)]


class Preset(str, enum.Enum):
    UNIFORM = 'uniform'
    CENTERED = 'centered'
    POLARIZED = 'polarized'
    TRIANGLE = 'triangle'
    CUSTOM = 'custom'


UNIFORM_GRID_SIZE = 5


def create_preset_population(preset: Union[str, Preset],
                             total_count: int,
                             ) -> VoterPopulation:
    '''Create voter blocs for a predefined population shape.

    -   ``uniform``: a 5x5 grid of narrow blocs covering the square,
    -   ``centered``: a single bloc in the middle,
    -   ``polarized``: two blocs on the left and right,
    -   ``triangle``: three blocs in the corners of a triangle,
    -   ``custom``: no blocs; the caller adds their own.

    The voters are split among the blocs evenly, rounding down, so the
    resulting total count may be slightly lower than requested.

    :raises KeyError: If the preset is unknown.
    '''
    try:
        preset = Preset(preset)
    except ValueError:
        raise KeyError(f'unknown population preset: {preset}')
    if preset == Preset.UNIFORM:
        per_bloc = total_count // (UNIFORM_GRID_SIZE ** 2)
        blocs = [
            create_voter_bloc(
                Point((i + .5) / UNIFORM_GRID_SIZE, (j + .5) / UNIFORM_GRID_SIZE),
                per_bloc, .08
            )
            for i in range(UNIFORM_GRID_SIZE)
            for j in range(UNIFORM_GRID_SIZE)
        ]
    elif preset == Preset.CENTERED:
        blocs = [create_voter_bloc(Point(.5, .5), total_count, .15)]
    elif preset == Preset.POLARIZED:
        per_bloc = total_count // 2
        blocs = [
            create_voter_bloc(Point(.25, .5), per_bloc, .12),
            create_voter_bloc(Point(.75, .5), per_bloc, .12),
        ]
    elif preset == Preset.TRIANGLE:
        per_bloc = total_count // 3
        blocs = [
            create_voter_bloc(Point(.5, .2), per_bloc, .1),
            create_voter_bloc(Point(.2, .8), per_bloc, .1),
            create_voter_bloc(Point(.8, .8), per_bloc, .1),
        ]
    else:
        blocs = []
    return VoterPopulation(blocs, sum(bloc.count for bloc in blocs))


def candidate_names(n: int) -> List[str]:
    if n > 26:
        raise NotImplementedError
    return list(string.ascii_uppercase[:n])


def circular_candidates(n: int,
                        radius: float = .3,
                        center: Point = Point(.5, .5),
                        **kwargs: Any) -> List[SpatialCandidate]:
    '''Place n candidates evenly on a circle, named by uppercase letters.

    The first candidate is placed straight above the center (towards
    larger y), the following ones clockwise. Their ids are ``'1'``,
    ``'2'``... Any keyword arguments are passed to the candidate constructor.
    '''
    return [
        SpatialCandidate(
            str(i + 1),
            name,
            center[0] + radius * math.sin(2 * math.pi * i / n),
            center[1] + radius * math.cos(2 * math.pi * i / n),
            **kwargs
        )
        for i, name in enumerate(candidate_names(n))
    ]
