import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import votetally.component.rankscore


@pytest.mark.parametrize(('scorer', 'n', 'expected'), [
    (votetally.component.rankscore.Borda(), 3, [2, 1, 0]),
    (votetally.component.rankscore.Borda(base=1), 4, [4, 3, 2, 1]),
    (votetally.component.rankscore.Borda(), 1, [0]),
    (votetally.component.rankscore.Dowdall(), 3, [1, .5, 1 / 3]),
])
def test_scores(scorer, n, expected):
    assert scorer.scores(n) == pytest.approx(expected)


def test_serialization():
    assert votetally.component.rankscore.Borda(base=2).to_dict() == {
        'class': 'votetally.component.rankscore.Borda', 'base': 2
    }
