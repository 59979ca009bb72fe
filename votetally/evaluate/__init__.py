'''Evaluate the results of the elections.

Evaluators take a list of ballots (:class:`votetally.vote.Vote`) and a list of
candidates (:class:`votetally.candidate.Candidate`) and return a result object
from :mod:`votetally.result`. Single-winner evaluators name a `winner`;
multi-winner ones (single transferable vote, reweighted range voting,
cumulative voting) take a number of seats and list their `winners`.

The modules are organized by the form of ballots the evaluators read:

-   :mod:`core` holds the evaluator machinery and plurality, approval and
    Borda count,
-   :mod:`condorcet` holds the pairwise comparison methods and tools,
-   :mod:`sequential` holds the round-based ranked methods (IRV, STV),
-   :mod:`cardinal` holds the score-based methods,
-   :mod:`waterfall` ranks the Smith set members by tie-breakers.

All evaluators validate the ballots first and raise
:class:`votetally.vote.InvalidBallotError` for ballots referring to unknown
candidates. Exact ties are always resolved in favor of the candidate listed
earlier in the candidate list.
'''

from votetally.evaluate.core import *    # noqa
