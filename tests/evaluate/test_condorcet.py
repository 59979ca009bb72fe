import sys
import os
import itertools

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import votetally.evaluate.condorcet as cond
from votetally.candidate import Candidate
from votetally.election import Election
from votetally.result import PairwiseResult, Victory
from votetally.vote import Vote

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from sample_elections import CANDIDATES, VOTES, LETTER_CANDIDATES, ranked_votes


NUMBERED = [Candidate(str(i), f'C{i}') for i in range(1, 4)]

WORKED_VOTES = ranked_votes('123', '123', '231', '312')
CYCLE_VOTES = ranked_votes('123', '231', '312')


def election(votes, candidates=NUMBERED):
    return Election('Test', candidates, votes, created_at='2024-01-01')


def test_matrix():
    matrix = cond.build_pairwise_matrix(VOTES, CANDIDATES)
    assert matrix['1'] == {'2': 3, '3': 3}
    assert matrix['2'] == {'1': 2, '3': 3}
    assert matrix['3'] == {'1': 2, '2': 2}


def test_matrix_unranked():
    votes = [Vote('V1', ranking=['2']), Vote('V2', ranking=[])]
    matrix = cond.build_pairwise_matrix(votes, CANDIDATES)
    assert matrix['2'] == {'1': 1, '3': 1}
    assert matrix['1'] == {'2': 0, '3': 0}
    assert matrix['3'] == {'1': 0, '2': 0}


def test_condorcet_winner():
    result = cond.CondorcetWinner().evaluate(VOTES, CANDIDATES)
    assert result.winner == '1'
    assert result.matrix['1']['2'] == 3
    assert result.matrix['2']['1'] == 2
    assert result.resolved_by is None


def test_condorcet_cycle():
    votes = ranked_votes('abc', 'bca', 'cab')
    result = cond.CondorcetWinner().evaluate(votes, LETTER_CANDIDATES[:3])
    assert result.winner is None
    assert result.matrix['a']['b'] == 2
    assert result.matrix['b']['a'] == 1


def test_condorcet_fallback():
    import votetally.evaluate.sequential
    evaluator = cond.CondorcetWinner(
        fallback=votetally.evaluate.sequential.InstantRunoff()
    )
    votes = ranked_votes('abc', 'bca', 'cab')
    result = evaluator.evaluate(votes, LETTER_CANDIDATES[:3])
    assert result.winner == 'a'
    assert result.resolved_by == 'InstantRunoff'


@pytest.mark.parametrize(('votes', 'expected'), [
    (VOTES, ['1']),
    (CYCLE_VOTES, ['1', '2', '3']),
    (WORKED_VOTES, ['1', '2', '3']),
    (ranked_votes('12', '21'), ['1', '2', '3']),
    ([], ['1', '2', '3']),
])
def test_smith_set(votes, expected):
    matrix = cond.build_pairwise_matrix(votes, CANDIDATES)
    assert cond.smith_set(matrix) == expected


def test_smith_set_top_cycle():
    cands = LETTER_CANDIDATES
    votes = ranked_votes('abcd', 'bcad', 'cabd')
    matrix = cond.build_pairwise_matrix(votes, cands)
    assert cond.smith_set(matrix) == ['a', 'b', 'c']


def test_worked_example_pairwise():
    results = cond.pairwise_results(election(WORKED_VOTES))
    assert results == [
        PairwiseResult('C1', 'C2', 3, 1),
        PairwiseResult('C1', 'C3', 2, 2),
        PairwiseResult('C2', 'C3', 3, 1),
    ]
    victories = cond.head_to_head_victories(results)
    assert victories == [Victory('C1', 'C2', 2), Victory('C2', 'C3', 2)]
    smith = cond.calculate_smith_set(victories, election(WORKED_VOTES))
    assert smith == ['C1']


def test_cyclic_example():
    elect = election(CYCLE_VOTES)
    victories = cond.head_to_head_victories(cond.pairwise_results(elect))
    assert len(victories) == 3
    assert all(vict.margin == 1 for vict in victories)
    assert cond.calculate_smith_set(victories, elect) == ['C1', 'C2', 'C3']


def test_full_tie_example():
    elect = election(ranked_votes('12', '21'), NUMBERED[:2])
    results = cond.pairwise_results(elect)
    assert results == [PairwiseResult('C1', 'C2', 1, 1)]
    victories = cond.head_to_head_victories(results)
    assert victories == []
    assert cond.calculate_smith_set(victories, elect) == ['C1', 'C2']


def test_victories_sorted_by_winner():
    results = [
        PairwiseResult('Zed', 'Amy', 1, 4),
        PairwiseResult('Mia', 'Zed', 0, 2),
    ]
    assert [v.winner for v in cond.head_to_head_victories(results)] == [
        'Amy', 'Zed'
    ]


def _tournaments(n):
    ids = [str(i) for i in range(n)]
    pairs = list(itertools.combinations(ids, 2))
    for orientation in itertools.product([True, False], repeat=len(pairs)):
        matrix = {a: {b: 0 for b in ids if b != a} for a in ids}
        victories = []
        for (a, b), a_wins in zip(pairs, orientation):
            winner, loser = (a, b) if a_wins else (b, a)
            matrix[winner][loser] = 1
            victories.append(Victory(winner, loser, 1))
        yield ids, matrix, victories


@pytest.mark.parametrize('n', [1, 2, 3, 4, 5])
def test_smith_algorithms_agree_on_tournaments(n):
    for ids, matrix, victories in _tournaments(n):
        elect = election([], [Candidate(i, i) for i in ids])
        by_components = cond.smith_set(matrix)
        by_reachability = cond.calculate_smith_set(victories, elect)
        assert by_components
        assert sorted(by_components) == by_reachability
        winner = cond.condorcet_winner(matrix)
        if winner is not None:
            assert by_components == [winner]


def test_smith_approval():
    result = cond.SmithApproval().evaluate(VOTES, CANDIDATES)
    assert result.winner == '1'
    assert result.smith_set == ['1']
    assert [item.candidate_id for item in result.counts] == ['1']


def test_smith_approval_cycle():
    votes = [
        Vote('V1', ranking=['1', '2', '3'], approved=['1', '2']),
        Vote('V2', ranking=['2', '3', '1'], approved=['2']),
        Vote('V3', ranking=['3', '1', '2'], approved=['3']),
    ]
    result = cond.SmithApproval().evaluate(votes, CANDIDATES)
    assert result.smith_set == ['1', '2', '3']
    assert result.winner == '2'


def test_smith_approval_ignores_outside_approvals():
    votes = [
        Vote('V1', ranking=['1', '2', '3'], approved=['3']),
        Vote('V2', ranking=['1', '3', '2'], approved=['3']),
        Vote('V3', ranking=['2', '1', '3'], approved=['3']),
    ]
    result = cond.SmithApproval().evaluate(votes, CANDIDATES)
    assert result.smith_set == ['1']
    assert result.winner == '1'


def test_ranked_pairs():
    result = cond.RankedPairs().evaluate(VOTES, CANDIDATES)
    assert result.winner == '1'
    assert len(result.locked_pairs) == 3


def test_ranked_pairs_locking():
    votes = ranked_votes('abc', 'abc', 'abc', 'bca', 'cab')
    result = cond.RankedPairs().evaluate(votes, LETTER_CANDIDATES[:3])
    assert result.winner == 'a'
    assert [(p.winner, p.loser, p.margin) for p in result.locked_pairs] == [
        ('a', 'b', 3), ('b', 'c', 3), ('a', 'c', 1)
    ]


def test_ranked_pairs_skips_cycle():
    votes = ranked_votes(
        'abc', 'abc', 'abc', 'abc', 'bca', 'bca', 'bca', 'cab', 'cab'
    )
    result = cond.RankedPairs().evaluate(votes, LETTER_CANDIDATES[:3])
    # a>b 6:3, b>c 7:2, c>a 5:4; the weakest, c>a, is skipped
    assert result.winner == 'a'
    assert [(p.winner, p.loser) for p in result.locked_pairs] == [
        ('b', 'c'), ('a', 'b')
    ]


def test_ranked_pairs_winning_votes():
    evaluator = cond.RankedPairs(pairwin_scoring='winning_votes')
    assert evaluator.evaluate(VOTES, CANDIDATES).winner == '1'
