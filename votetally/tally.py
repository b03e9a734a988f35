'''Ballot counting by the Schulze method.

The entry point is :func:`count_ballots`. It counts the ballots twice: once
with the candidates in the order given, and once more with the candidates
sorted by the finishing order of the first count, so that the matrices in the
result read in finishing order. The finishing order must not depend on the
order of the candidates; if the two counts disagree, the result is refused
with :class:`TallyConsistencyError`.
'''

import dataclasses
import logging
from typing import List, Sequence

import votetally.ballot
import votetally.paths
import votetally.place
import votetally.preference
from votetally.ballot import Ballot, RevealedBallot
from votetally.persist import simple_serialization
from votetally.place import Place
from votetally.preference import PreferenceMatrix
from votetally.ranking import CandidateError

logger = logging.getLogger(__name__)


class TallyConsistencyError(Exception):
    '''Reordering the candidates changed the finishing order.

    Signals a defect in the counting algorithm, never a problem with the
    input.

    :param first: Places from the count in the original candidate order.
    :param second: Places from the count in the finishing order.
    '''
    def __init__(self, first: List[Place], second: List[Place]):
        self.first = first
        self.second = second
        super().__init__(
            'changing the order of candidates affected the results:\n'
            + ', '.join(str(place) for place in first) + '\n'
            + ', '.join(str(place) for place in second)
        )


@simple_serialization
@dataclasses.dataclass(frozen=True)
class Tally:
    '''Result of counting the ballots of an election.

    :param election_name: Name of the election.
    :param candidate_names: Candidates in finishing order (alphabetical
        within ties); the matrices and ballot rankings follow this order.
    :param secret_ballot: Whether voter identities are hidden in ``ballots``.
    :param ballots: Disclosed ballots with canonical rankings.
    :param preferences: Pairwise preference matrix.
    :param strongest_path_matrix: Strongest path matrix.
    :param places: Finishing order with competition ranks.
    :param who_voted: Sorted names of everyone who cast a ballot; disclosed
        even for secret ballot elections.
    '''
    election_name: str
    candidate_names: List[str]
    secret_ballot: bool
    ballots: List[Ballot]
    preferences: PreferenceMatrix
    strongest_path_matrix: PreferenceMatrix
    places: List[Place]
    who_voted: List[str]

    @property
    def winners(self) -> List[str]:
        '''Candidates placed first (more than one if tied).'''
        return [place.candidate_name for place in self.places
                if place.rank == 1]


class BallotCounter:
    '''A single count of the ballots with a fixed candidate order.

    :param election_name: Name of the election.
    :param secret_ballot: Whether to hide voter identities.
    :param candidates: Candidate names; determines the matrix order.
    :param raw_ballots: Ballots as cast.
    '''
    def __init__(self,
                 election_name: str,
                 secret_ballot: bool,
                 candidates: Sequence[str],
                 raw_ballots: Sequence[RevealedBallot],
                 ):
        self.election_name = election_name
        self.secret_ballot = secret_ballot
        self.candidates = list(candidates)
        self.raw_ballots = list(raw_ballots)

    def count_ballots(self) -> Tally:
        preferences = votetally.preference.build_preferences(
            self.candidates,
            [ballot.rankings for ballot in self.raw_ballots]
        )
        strongest = votetally.paths.strongest_paths(preferences)
        places = votetally.place.places(strongest, self.candidates)
        return Tally(
            election_name=self.election_name,
            candidate_names=self.candidates,
            secret_ballot=self.secret_ballot,
            ballots=votetally.ballot.project_ballots(
                self.raw_ballots, self.candidates, self.secret_ballot
            ),
            preferences=preferences,
            strongest_path_matrix=strongest,
            places=places,
            who_voted=sorted(frozenset(
                ballot.voter_name for ballot in self.raw_ballots
            )),
        )


def check_candidates(candidate_names: Sequence[str],
                     ballots: Sequence[RevealedBallot],
                     ) -> None:
    '''Check that all ballots only rank candidates standing in the election.

    :raises CandidateError: For the first unknown candidate found.
    '''
    known = frozenset(candidate_names)
    for ballot in ballots:
        for ranking in ballot.rankings:
            if ranking.candidate_name not in known:
                raise CandidateError(
                    ranking.candidate_name,
                    f'ranked by {ballot.voter_name!r}'
                )


def count_ballots(election_name: str,
                  secret_ballot: bool,
                  candidate_names: Sequence[str],
                  ballots: Sequence[RevealedBallot],
                  ) -> Tally:
    '''Count the ballots of an election by the Schulze method.

    :param election_name: Name of the election.
    :param secret_ballot: Whether to hide voter identities in the result.
    :param candidate_names: Names of all candidates, unique.
    :param ballots: All ballots cast in the election.
    :raises CandidateError: If a ballot ranks an unknown candidate.
    :raises TallyConsistencyError: If the finishing order depends on the
        order of the candidates.
    '''
    check_candidates(candidate_names, ballots)
    logger.info('counting %d ballots for %d candidates in %s',
                len(ballots), len(candidate_names), election_name)
    initial = BallotCounter(
        election_name, secret_ballot, candidate_names, ballots
    ).count_ballots()
    logger.debug('initial places: %s', initial.places)
    in_place_order = [place.candidate_name for place in initial.places]
    final = BallotCounter(
        election_name, secret_ballot, in_place_order, ballots
    ).count_ballots()
    if frozenset(initial.places) != frozenset(final.places):
        raise TallyConsistencyError(initial.places, final.places)
    logger.info('places: %s',
                ', '.join(str(place) for place in final.places))
    return final
