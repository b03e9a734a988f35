'''Ballots and their disclosure.

Ballots come in two variants. A :class:`RevealedBallot` is what a voter
casts: it identifies the voter. A :class:`SecretBallot` keeps only the
election, the confirmation code handed to the voter and the rankings, so that
a voter can find their own ballot in a published tally but nobody else can
tell whose it is. Any revealed ballot can be made secret; the reverse is not
possible.

Both variants expose a ``rankings`` attribute and nothing else in common;
code that accepts either uses the :data:`Ballot` union.
'''

import dataclasses
import datetime
from typing import List, Optional, Sequence, Tuple, Union

import votetally.ranking
from votetally.persist import simple_serialization
from votetally.ranking import Ranking


@simple_serialization
@dataclasses.dataclass(frozen=True)
class SecretBallot:
    election_name: str
    confirmation_code: str
    rankings: Tuple[Ranking, ...]


@simple_serialization
@dataclasses.dataclass(frozen=True)
class RevealedBallot:
    '''A ballot as cast by an identified voter.

    :param voter_name: Name of the voter.
    :param election_name: Name of the election the ballot was cast in.
    :param confirmation_code: Code confirming the ballot to the voter.
    :param cast_timestamp: When the ballot was cast, if known.
    :param rankings: The voter's rankings; possibly partial.
    '''
    voter_name: str
    election_name: str
    confirmation_code: str
    cast_timestamp: Optional[datetime.datetime]
    rankings: Tuple[Ranking, ...]

    def __post_init__(self):
        object.__setattr__(self, 'rankings', tuple(self.rankings))

    def make_secret(self) -> SecretBallot:
        '''Drop the voter's identity.'''
        return SecretBallot(
            self.election_name, self.confirmation_code, self.rankings
        )


Ballot = Union[RevealedBallot, SecretBallot]


def with_effective_rankings(ballot: RevealedBallot,
                            candidate_names: Sequence[str],
                            ) -> RevealedBallot:
    '''Replace the ballot's rankings by their canonical form.

    The canonical rankings cover every candidate and follow the order of
    ``candidate_names``.
    '''
    return dataclasses.replace(
        ballot,
        rankings=tuple(votetally.ranking.match_order_to_candidates(
            votetally.ranking.effective_rankings(
                ballot.rankings, candidate_names
            ),
            candidate_names
        ))
    )


def project_ballots(ballots: Sequence[RevealedBallot],
                    candidate_names: Sequence[str],
                    secret_ballot: bool,
                    ) -> List[Ballot]:
    '''Produce the ballot list to be disclosed with a tally.

    All ballots get canonical rankings aligned to ``candidate_names``. For
    a secret ballot election, voter identities are dropped and the ballots
    are ordered by confirmation code; otherwise they are ordered by voter
    name. Ballots with equal primary keys are ordered by their ranks.

    :param ballots: Ballots as cast.
    :param candidate_names: Candidate order for the rankings.
    :param secret_ballot: Whether to hide voter identities.
    '''
    aligned = [
        with_effective_rankings(ballot, candidate_names) for ballot in ballots
    ]
    if secret_ballot:
        return sorted(
            (ballot.make_secret() for ballot in aligned),
            key=lambda ballot: (
                ballot.confirmation_code,
                votetally.ranking.rank_key(ballot.rankings),
            )
        )
    else:
        return sorted(
            aligned,
            key=lambda ballot: (
                ballot.voter_name,
                votetally.ranking.rank_key(ballot.rankings),
            )
        )
