"""Votetally - counting ranked ballots by the Schulze method.

Votetally takes the candidates of an election and the ranked ballots cast in
it and produces a tally: the finishing order of the candidates, with ties,
together with everything needed to explain it.

The counting proceeds in stages, each in its own module:

-   Ballot rankings may be partial; the ``ranking`` module brings them to
    a canonical form where every candidate is ranked and ranks are
    contiguous.
-   The ``preference`` module counts how many voters prefer each candidate to
    each other one, forming the pairwise preference matrix.
-   The ``paths`` module finds the strongest chain of preferences between
    every pair of candidates.
-   The ``place`` module peels the finishing order off the strongest paths.
-   The ``ballot`` module prepares the ballots for publication, hiding voter
    identities for secret ballot elections.

The :func:`votetally.tally.count_ballots` function ties these together and
checks that the result does not depend on the order of the candidates. The
:mod:`io` subpackage reads elections from and writes tallies to JSON files.
"""
