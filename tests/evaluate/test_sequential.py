import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import votetally.evaluate.sequential
from votetally.candidate import Candidate
from votetally.vote import Vote

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from sample_elections import CANDIDATES, VOTES, LETTER_CANDIDATES, ranked_votes

IRV = votetally.evaluate.sequential.InstantRunoff()
DEFAULT_STV = votetally.evaluate.sequential.SingleTransferableVote()


def test_irv_majority_first_round():
    result = IRV.evaluate(VOTES, CANDIDATES)
    assert result.winner == '1'
    assert len(result.rounds) == 1
    assert result.rounds[0].counts[0].candidate_id == '1'
    assert result.rounds[0].counts[0].total == 3
    assert result.rounds[0].eliminated is None


def test_irv_elimination():
    votes = ranked_votes('abcd', 'acbd', 'bacd', 'cbad', 'dabc')
    result = IRV.evaluate(votes, LETTER_CANDIDATES)
    assert result.rounds[0].eliminated == 'd'
    assert result.winner == 'a'
    assert len(result.rounds) == 2
    assert result.rounds[1].counts[0].total == 3


def test_irv_eliminated_later_listed_among_equals():
    votes = ranked_votes('abc', 'bac', 'cab', 'abc')
    cands = LETTER_CANDIDATES[:3]
    result = IRV.evaluate(votes, cands)
    assert result.rounds[0].eliminated == 'c'
    assert result.winner == 'a'


def test_irv_exhausted_ballots():
    votes = ranked_votes('a', 'a', 'b', 'b', 'cb')
    result = IRV.evaluate(votes, LETTER_CANDIDATES[:3])
    assert result.rounds[0].eliminated == 'c'
    assert result.winner == 'b'


def test_irv_single_candidate():
    result = IRV.evaluate(ranked_votes('a'), LETTER_CANDIDATES[:1])
    assert result.winner == 'a'
    assert result.rounds == []


@pytest.mark.parametrize(('rankings', 'n_seats', 'expected'), [
    (('123', '132', '123', '231', '321'), 2, ['1', '2']),
    (('123', '132', '231', '321', '123'), 2, ['1', '2']),
    (('123', '123', '123', '231', '321'), 1, ['1']),
    (('12', '12', '21', '3'), 3, ['1', '2', '3']),
])
def test_stv(rankings, n_seats, expected):
    votes = ranked_votes(*rankings)
    result = DEFAULT_STV.evaluate(votes, CANDIDATES, n_seats=n_seats)
    assert result.winner_ids == expected


def test_stv_rounds():
    votes = ranked_votes('123', '132', '123', '231', '321')
    result = DEFAULT_STV.evaluate(votes, CANDIDATES, n_seats=2)
    assert result.quota == 2
    first = result.rounds[0]
    assert first.elected == ['1']
    assert first.eliminated is None
    second = result.rounds[1]
    assert second.elected == []
    assert second.eliminated == '3'
    assert result.winners[0].round == 1
    assert result.winners[1].round == 3
    assert result.winners[1].name == 'Bob'


def test_stv_surplus_transfer():
    votes = ranked_votes('123', '132', '123', '231', '321')
    result = DEFAULT_STV.evaluate(votes, CANDIDATES, n_seats=2)
    counts = {item.candidate_id: item.total for item in result.rounds[1].counts}
    assert counts['2'] == pytest.approx(1 / 3 + 1 / 3 + 1)
    assert counts['3'] == pytest.approx(1 / 3 + 1)


def test_stv_seats_capped():
    result = DEFAULT_STV.evaluate(VOTES, CANDIDATES, n_seats=10)
    assert result.winner_ids == ['1', '2', '3']


def test_stv_hare_quota():
    stv = votetally.evaluate.sequential.SingleTransferableVote('hare')
    result = stv.evaluate(VOTES, CANDIDATES, n_seats=2)
    assert result.quota == 2.5
    assert result.winner == '1'


def test_stv_no_votes():
    result = DEFAULT_STV.evaluate([], CANDIDATES, n_seats=2)
    assert result.winner_ids == ['1', '2']


def test_stv_unranked_candidates():
    cands = CANDIDATES + [Candidate('4', 'Dave')]
    votes = [Vote('V1', ranking=['4']), Vote('V2', ranking=['4', '1'])]
    result = DEFAULT_STV.evaluate(votes, cands, n_seats=1)
    assert result.winner_ids == ['4']
