import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import votetally.crit.yee as yee
from votetally.cache import ResultCache
from votetally.candidate import Candidate, SpatialCandidate, CandidateError
from votetally.evaluate import VotingSystemError
from votetally.generate import Voter
from votetally.system import VotingMethod


PAIR = [
    SpatialCandidate('b', 'B', .75, .5),
    SpatialCandidate('a', 'A', .25, .5),
]

LINE = [
    SpatialCandidate('L', 'Left', .1, .5),
    SpatialCandidate('C', 'Center', .5, .5),
    SpatialCandidate('R', 'Right', .9, .5),
]

SQUEEZED = [(.2, .5)] * 4 + [(.5, .5)] * 3 + [(.8, .5)] * 4


def test_cell_center():
    assert yee.cell_center(0, 0, 4) == (.125, .125)
    assert yee.cell_center(1, 3, 4) == (.875, .375)


def test_voronoi():
    assert yee.voronoi(PAIR, resolution=4) == [['a', 'a', 'b', 'b']] * 4


def test_voronoi_conformity():
    ideal = yee.voronoi(PAIR, resolution=4)
    assert yee.voronoi_conformity(ideal, PAIR) == 1
    assert yee.voronoi_conformity([['a'] * 4] * 4, PAIR) == .5
    assert yee.voronoi_matches([['a', 'a'], ['b', 'b']], PAIR) == [
        [True, False], [False, True]
    ]


def test_voronoi_conformity_empty_grid():
    assert yee.voronoi(PAIR, resolution=0) == []
    with pytest.raises(VotingSystemError):
        yee.voronoi_conformity([], PAIR)


@pytest.mark.parametrize('method', ['plurality', 'irv', 'star'])
def test_empty_population_gives_voronoi(method):
    diagram = yee.generate_yee_diagram([], PAIR, method, resolution=5)
    assert diagram.grid == yee.voronoi(PAIR, resolution=5)
    assert diagram.resolution == 5
    assert diagram.candidates == ['b', 'a']
    assert diagram.method == method


def test_sampled_voters_decide():
    voters = [Voter((.45, .5))] * 5
    assert yee.generate_yee_diagram(
        voters, PAIR, VotingMethod.PLURALITY, resolution=1
    ).grid == [['a']]
    assert yee.generate_yee_diagram(
        voters[:yee.MIN_SAMPLE_VOTERS - 1], PAIR, 'plurality', resolution=1
    ).grid == [['b']]
    assert yee.generate_yee_diagram(
        voters, PAIR, 'plurality', resolution=1, sample_radius=.01
    ).grid == [['b']]


@pytest.mark.parametrize(('method', 'winner'), [
    ('plurality', 'L'),
    ('irv', 'L'),
    ('borda', 'C'),
    ('approval', 'C'),
    ('condorcet', 'C'),
    ('smithApproval', 'C'),
    ('rankedPairs', 'C'),
])
def test_center_squeeze(method, winner):
    assert yee.compute_winner(SQUEEZED, LINE, method) == winner


@pytest.mark.parametrize('method', list(VotingMethod))
def test_unanimous_population(method):
    voters = [(.2, .5)] * 5
    assert yee.compute_winner(voters, LINE, method) == 'L'


def test_capped_approval():
    assert yee._capped_approval((.5, .5), LINE, 1) == ['C', 'L']
    assert yee._capped_approval((.2, .5), LINE, .3) == ['L', 'C']
    assert yee._capped_approval((.2, .5), LINE, 0) == ['L']


def test_compute_winner_errors():
    with pytest.raises(VotingSystemError):
        yee.compute_winner([(.5, .5)], [], 'plurality')
    with pytest.raises(KeyError):
        yee.compute_winner([(.5, .5)], LINE, 'dictatorship')
    with pytest.raises(CandidateError):
        yee.compute_winner([(.5, .5)], [Candidate('x', 'X')], 'plurality')


def test_cache_reuse():
    cache = ResultCache()
    voters = [Voter((.45, .5))] * 5
    first = yee.generate_yee_diagram(
        voters, PAIR, 'plurality', resolution=3, cache=cache
    )
    second = yee.generate_yee_diagram(
        voters, PAIR, VotingMethod.PLURALITY, resolution=3, cache=cache
    )
    assert second is first
    assert len(cache) == 1
    yee.generate_yee_diagram(voters, PAIR, 'borda', resolution=3, cache=cache)
    yee.generate_yee_diagram(voters[:4], PAIR, 'plurality', resolution=3,
                             cache=cache)
    assert len(cache) == 3
