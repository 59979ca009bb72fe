"""Votetally - election tallying and spatial voting analysis.

Votetally counts the ballots of an election under many known voting
methods, from plurality to Condorcet methods, proportional ranked and score
systems, and explores how those methods behave on a two-dimensional
ideology plane.

An election is described by the following:

-   Who stands: a list of candidates from the ``candidate`` module. The order
    of the list matters, as exact ties are resolved in favor of the
    candidate listed earlier.
-   What the voters said: ballots (``vote`` module) that may carry a ranking,
    a set of approved candidates and scores all at once, so that a single
    set of ballots can be tallied by any method. Ballots referring to unknown
    candidates are rejected by the validator in the same module.
-   How to determine who is elected. This is the task of the ``evaluate``
    subpackage, whose evaluators return detailed result objects from the
    ``result`` module. The :mod:`system` module names every supported method
    and dispatches to its evaluator.

The spatial side consists of the ``spatial`` module, which turns voter
positions into ballots, the ``generate`` module producing voter
populations, and the ``crit`` subpackage with Yee diagrams and perturbation
maps.
"""
