'''Ranked ballot contents and their normalization.

A voter's ballot is a list of :class:`Ranking` entries, each pairing
a candidate name with a rank number (lower is better) or ``None`` if the voter
left the candidate unranked. Voters may skip rank numbers, share rank numbers
between candidates, or leave some candidates out entirely; the functions in
this module bring such partial input into a canonical form where every
candidate of the election appears exactly once and the ranks are contiguous
integers starting at 1, unranked candidates being tied for last.

Note that pairwise preference counting (:mod:`votetally.preference`) works
on the raw rankings directly, using :func:`prefers`; the canonical form is
only needed for displaying and comparing ballots.
'''

import dataclasses
import random
from typing import List, Optional, Dict, Sequence, Tuple

from votetally.persist import simple_serialization


class CandidateError(LookupError):
    '''A ranking refers to a candidate that is not standing in the election.

    :param candidate_name: The name of the offending candidate.
    :param context: Who or what referred to the candidate (e.g. a voter).
    '''
    def __init__(self, candidate_name: str, context: Optional[str] = None):
        self.candidate_name = candidate_name
        self.context = context
        message = f'unknown candidate: {candidate_name!r}'
        if context is not None:
            message += f' ({context})'
        super().__init__(message)


@simple_serialization
@dataclasses.dataclass(frozen=True)
class Ranking:
    '''A rank given to a single candidate by a single voter.

    :param candidate_name: Name of the ranked candidate.
    :param rank: Rank number, 1 being the most preferred; None if the voter
        did not rank the candidate.
    '''
    candidate_name: str
    rank: Optional[int] = None

    def __str__(self):
        return f'{self.rank} {self.candidate_name}'


def add_missing_candidates(rankings: Sequence[Ranking],
                           all_candidate_names: Sequence[str],
                           ) -> List[Ranking]:
    '''Append an unranked entry for every candidate absent from the rankings.

    The rankings must not contain names outside ``all_candidate_names``;
    this is not checked here.

    :param rankings: Rankings of a single ballot.
    :param all_candidate_names: All candidates standing in the election.
    '''
    present = frozenset(ranking.candidate_name for ranking in rankings)
    return list(rankings) + [
        Ranking(name) for name in all_candidate_names if name not in present
    ]


def _rank_mapping(rankings: Sequence[Ranking]) -> Dict[int, int]:
    distinct_ranks = sorted(frozenset(
        ranking.rank for ranking in rankings if ranking.rank is not None
    ))
    return {rank: i for i, rank in enumerate(distinct_ranks, start=1)}


def normalize_rankings_replace_nulls(rankings: Sequence[Ranking]
                                     ) -> List[Ranking]:
    '''Remap explicit ranks to 1..k and place unranked candidates at k+1.

    The distinct rank values are renumbered in their relative order, so ranks
    ``5, 5, 9`` become ``1, 1, 2``. The order of the entries is kept.

    :param rankings: Rankings of a single ballot.
    '''
    new_ranks = _rank_mapping(rankings)
    last_rank = len(new_ranks) + 1
    return [
        Ranking(ranking.candidate_name, new_ranks.get(ranking.rank, last_rank))
        for ranking in rankings
    ]


def normalize_rankings_keep_nulls(rankings: Sequence[Ranking]
                                  ) -> List[Ranking]:
    '''Remap explicit ranks to 1..k, leaving unranked candidates unranked.'''
    new_ranks = _rank_mapping(rankings)
    return [
        Ranking(ranking.candidate_name, new_ranks.get(ranking.rank))
        for ranking in rankings
    ]


def effective_rankings(rankings: Sequence[Ranking],
                       all_candidate_names: Sequence[str],
                       ) -> List[Ranking]:
    '''Bring a ballot's rankings to the canonical comparable form.

    Every candidate of the election is present exactly once and the ranks
    are contiguous from 1, unranked candidates tied for last.

    :param rankings: Rankings of a single ballot.
    :param all_candidate_names: All candidates standing in the election.
    '''
    return normalize_rankings_replace_nulls(
        add_missing_candidates(rankings, all_candidate_names)
    )


def match_order_to_candidates(rankings: Sequence[Ranking],
                              candidate_names: Sequence[str],
                              ) -> List[Ranking]:
    '''Reorder the rankings to follow the order of the candidate names.

    :param rankings: Rankings covering every name in ``candidate_names``.
    :param candidate_names: The desired order.
    :raises CandidateError: If a candidate has no ranking.
    '''
    by_candidate = {ranking.candidate_name: ranking for ranking in rankings}
    try:
        return [by_candidate[name] for name in candidate_names]
    except KeyError as err:
        raise CandidateError(err.args[0], 'missing from rankings') from err


def _rank_for(rankings: Sequence[Ranking], candidate_name: str) -> float:
    for ranking in rankings:
        if ranking.candidate_name == candidate_name:
            if ranking.rank is not None:
                return ranking.rank
            break
    return float('inf')


def prefers(rankings: Sequence[Ranking], a: str, b: str) -> bool:
    '''Return True if the voter ranked candidate a strictly above b.

    Candidates missing from the rankings or left unranked count as worse than
    any explicitly ranked one, so raw partial ballots need no normalization.
    '''
    return _rank_for(rankings, a) < _rank_for(rankings, b)


def rank_key(rankings: Sequence[Ranking]) -> Tuple[int, ...]:
    '''Return the explicit rank values in entry order, as a sort key.

    Comparing two such keys compares the ballots lexicographically by their
    ranks, which is meaningful when both are aligned to the same candidate
    order.
    '''
    return tuple(
        ranking.rank for ranking in rankings if ranking.rank is not None
    )


def rankings_to_string(rankings: Sequence[Ranking]) -> str:
    return ' '.join(str(ranking) for ranking in rankings)


def voter_biased_ordering(rankings: Sequence[Ranking],
                          rng: random.Random,
                          ) -> List[Ranking]:
    '''Order the rankings as the voter sees them, best ranked first.

    Candidates sharing a rank (including the unranked ones, which go last)
    are shuffled among themselves so that no candidate gains a positional
    advantage from the order of the candidate list.

    :param rankings: Rankings of a single ballot.
    :param rng: Random generator used for shuffling.
    '''
    shuffled = list(rankings)
    rng.shuffle(shuffled)
    return sorted(
        shuffled,
        key=lambda ranking: (
            float('inf') if ranking.rank is None else ranking.rank
        )
    )
