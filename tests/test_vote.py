import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from votetally.vote import Vote, BallotValidator
from votetally.vote import VoteError, InvalidBallotError, VoteValueError


VALIDATOR = BallotValidator(['1', '2', '3'])


def test_vote_copies_inputs():
    ranking = ['1', '2']
    approved = {'1'}
    scores = {'1': 5}
    vote = Vote('V1', ranking, approved, scores)
    ranking.append('3')
    approved.add('2')
    scores['2'] = 7
    assert vote.ranking == ('1', '2')
    assert vote.approved == frozenset(['1'])
    assert dict(vote.scores) == {'1': 5}


def test_vote_scores_readonly():
    vote = Vote('V1', scores={'1': 5})
    with pytest.raises(TypeError):
        vote.scores['1'] = 10


def test_vote_score_missing():
    assert Vote('V1').score('1') == 0
    assert Vote('V1', scores={'2': 4}).score('1') == 0
    assert Vote('V1', scores={'2': 4}).score('2') == 4


@pytest.mark.parametrize(('ranking', 'remaining', 'expected'), [
    (['1', '2', '3'], None, '1'),
    (['1', '2', '3'], {'2', '3'}, '2'),
    (['1', '2'], {'3'}, None),
    ([], None, None),
])
def test_first_choice(ranking, remaining, expected):
    assert Vote(ranking=ranking).first_choice(remaining) == expected


@pytest.mark.parametrize('vote', [
    Vote(),
    Vote('V1', ranking=['3']),
    Vote('V1', ranking=['1', '2', '3'], approved=['2'], scores={'1': 2.5}),
])
def test_valid(vote):
    VALIDATOR.validate(vote)


@pytest.mark.parametrize(('vote', 'bad_id'), [
    (Vote('V1', ranking=['1', '4']), '4'),
    (Vote('V1', ranking=['1', '2', '1']), '1'),
    (Vote('V1', approved=['x']), 'x'),
    (Vote('V1', scores={'1': 3, 'y': 2}), 'y'),
])
def test_invalid_ballot(vote, bad_id):
    with pytest.raises(InvalidBallotError) as excinfo:
        VALIDATOR.validate(vote)
    assert excinfo.value.candidate_id == bad_id
    assert isinstance(excinfo.value, VoteError)


@pytest.mark.parametrize('value', [
    '5', None, True, 1j, float('nan'), float('inf'), float('-inf'),
])
def test_invalid_score(value):
    with pytest.raises(VoteValueError):
        VALIDATOR.validate(Vote('V1', scores={'1': value}))


def test_unchecked_scores():
    BallotValidator(['1'], check_scores=False).validate(
        Vote('V1', scores={'1': 'five'})
    )


def test_validate_all_stops_at_first():
    with pytest.raises(InvalidBallotError) as excinfo:
        VALIDATOR.validate_all([
            Vote('V1', ranking=['1']),
            Vote('V2', ranking=['5']),
            Vote('V3', ranking=['6']),
        ])
    assert excinfo.value.vote.voter_name == 'V2'
