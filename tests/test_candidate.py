import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import votetally.candidate
from votetally.candidate import Candidate, SpatialCandidate, CandidateError
from votetally.election import Election
from votetally.vote import Vote, InvalidBallotError


def test_candidate_identity():
    assert Candidate('1', 'Alice') == Candidate('1', 'Alicia')
    assert Candidate('1', 'Alice') != Candidate('2', 'Alice')
    assert len({Candidate('1', 'Alice'), Candidate('1', 'Alice')}) == 1


def test_spatial_candidate_position():
    cand = SpatialCandidate('a', 'A', .2, .7, color='#ff0000')
    assert cand.position == (.2, .7)
    assert cand == Candidate('a', 'A')


def test_index_duplicate():
    with pytest.raises(CandidateError):
        votetally.candidate.index_candidates([
            Candidate('1', 'Alice'), Candidate('1', 'Bob')
        ])


def test_index_order():
    cands = [Candidate(c, c) for c in 'zyx']
    assert list(votetally.candidate.index_candidates(cands)) == ['z', 'y', 'x']
    assert votetally.candidate.candidate_ids(cands) == ['z', 'y', 'x']


def test_check_spatial():
    spatial = [SpatialCandidate('a', 'A', .1, .1)]
    assert votetally.candidate.check_spatial(spatial) == spatial
    with pytest.raises(CandidateError) as excinfo:
        votetally.candidate.check_spatial(spatial + [Candidate('b', 'B')])
    assert 'SpatialCandidate' in str(excinfo.value)


def test_election_lookup():
    election = Election(
        'Lunch',
        [Candidate('1', 'Pizza'), Candidate('2', 'Sushi')],
        [Vote('V1', ranking=['2', '1'])],
        created_at='2024-01-01T00:00:00+00:00',
    )
    assert election.candidate_ids == ['1', '2']
    assert election.candidate('2').name == 'Sushi'
    assert election.candidate_by_name('Pizza').id == '1'
    assert election.candidate_by_name('Tacos') is None
    with pytest.raises(KeyError):
        election.candidate('3')
    election.validate()


def test_election_default_timestamp():
    assert Election('Empty', [Candidate('1', 'A')]).created_at


def test_election_validate_rejects():
    election = Election(
        'Lunch', [Candidate('1', 'Pizza')], [Vote('V1', ranking=['1', '9'])]
    )
    with pytest.raises(InvalidBallotError):
        election.validate()
