import sys
import os

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from votetally.cache import ResultCache, position_digest
from votetally.candidate import SpatialCandidate
from votetally.system import VotingMethod


CANDS = [
    SpatialCandidate('1', 'A', .301, .5),
    SpatialCandidate('2', 'B', .7, .5),
]


def test_key_rounds_positions():
    moved = [SpatialCandidate('1', 'A', .299, .5), CANDS[1]]
    assert ResultCache.make_key(CANDS, 'plurality', .3) == (
        ResultCache.make_key(moved, 'plurality', .3)
    )


def test_key_distinguishes_setups():
    base = ResultCache.make_key(CANDS, 'plurality', .3, resolution=10)
    assert base != ResultCache.make_key(CANDS, 'approval', .3, resolution=10)
    assert base != ResultCache.make_key(CANDS, 'plurality', .2, resolution=10)
    assert base != ResultCache.make_key(CANDS, 'plurality', .3, resolution=20)
    assert base != ResultCache.make_key(CANDS[::-1], 'plurality', .3,
                                        resolution=10)


def test_key_method_member():
    assert ResultCache.make_key(CANDS, VotingMethod.BORDA, .3) == (
        ResultCache.make_key(CANDS, 'borda', .3)
    )


def test_get_set():
    cache = ResultCache()
    assert cache.get('k') is None
    assert cache.get('k', 5) == 5
    cache.set('k', 1)
    assert 'k' in cache
    assert cache.get('k') == 1
    assert len(cache) == 1
    cache.clear()
    assert len(cache) == 0


def test_get_or_compute():
    cache = ResultCache()
    calls = []

    def compute():
        calls.append(1)
        return 'result'

    assert cache.get_or_compute('k', compute) == 'result'
    assert cache.get_or_compute('k', compute) == 'result'
    assert len(calls) == 1


def test_eviction():
    cache = ResultCache(max_size=2)
    cache.set('a', 1)
    cache.set('b', 2)
    cache.set('a', 3)
    cache.set('c', 4)
    assert 'b' not in cache
    assert cache.get('a') == 3
    assert cache.get('c') == 4
    assert len(cache) == 2


def test_position_digest():
    positions = [(.1, .2), (.3, .4)]
    assert position_digest(positions) == position_digest([(.10001, .2), (.3, .4)])
    assert position_digest(positions) != position_digest(positions[::-1])
    assert len(position_digest([])) == 40
