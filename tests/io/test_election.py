import sys
import os
import io
import json
import datetime

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import votetally.io
import votetally.io.election
import votetally.persist
import votetally.tally
from votetally.io.core import ParseError
from votetally.ranking import Ranking


ELECTION = {
    'electionName': 'Languages',
    'secretBallot': False,
    'candidateNames': ['Kotlin', 'Rust', 'Go'],
    'ballots': [
        {
            'voterName': 'alice',
            'confirmationCode': 'c1',
            'castTimestamp': '2024-05-01T12:00:00Z',
            'rankings': [
                {'candidateName': 'Kotlin', 'rank': 1},
                {'candidateName': 'Rust', 'rank': 2},
                {'candidateName': 'Go', 'rank': 3},
            ],
        },
        {
            'voterName': 'bob',
            'confirmationCode': 'c2',
            'rankings': [
                {'candidateName': 'Rust', 'rank': 1},
                {'candidateName': 'Kotlin', 'rank': 2},
                {'candidateName': 'Go'},
            ],
        },
    ],
}


def test_loads():
    election = votetally.io.election.loads(json.dumps(ELECTION))
    assert election.election_name == 'Languages'
    assert election.candidate_names == ['Kotlin', 'Rust', 'Go']
    assert not election.secret_ballot
    alice, bob = election.ballots
    assert alice.voter_name == 'alice'
    assert alice.election_name == 'Languages'
    assert alice.cast_timestamp == datetime.datetime(
        2024, 5, 1, 12, 0, tzinfo=datetime.timezone.utc
    )
    assert bob.cast_timestamp is None
    assert bob.rankings == (
        Ranking('Rust', 1), Ranking('Kotlin', 2), Ranking('Go', None),
    )


def test_load_file():
    election = votetally.io.election.load(io.StringIO(json.dumps(ELECTION)))
    assert len(election.ballots) == 2


def test_defaults():
    election = votetally.io.election.loads(
        '{"electionName": "E", "candidateNames": []}'
    )
    assert election.secret_ballot
    assert election.ballots == []


@pytest.mark.parametrize('text', [
    'not json',
    '[]',
    '{"candidateNames": []}',
    '{"electionName": "E", "candidateNames": "A"}',
    '{"electionName": "E", "candidateNames": [1]}',
    '{"electionName": "E", "candidateNames": ["A"], "ballots": [1]}',
    '{"electionName": "E", "candidateNames": ["A"], "ballots": ['
    '{"voterName": "v", "confirmationCode": "c", "rankings": ['
    '{"candidateName": "A", "rank": "first"}]}]}',
    '{"electionName": "E", "candidateNames": ["A"], "ballots": ['
    '{"voterName": "v", "confirmationCode": "c", "rankings": ['
    '{"candidateName": "A", "rank": true}]}]}',
    '{"electionName": "E", "candidateNames": ["A"], "ballots": ['
    '{"voterName": "v", "confirmationCode": "c", "castTimestamp": "noon"}]}',
    '{"electionName": "E", "candidateNames": ["A"], "ballots": ['
    '{"confirmationCode": "c"}]}',
])
def test_invalid(text):
    with pytest.raises(ParseError):
        votetally.io.election.loads(text)


def test_dumps_tally():
    election = votetally.io.election.loads(json.dumps(ELECTION))
    tally = votetally.tally.count_ballots(
        election.election_name, election.secret_ballot,
        election.candidate_names, election.ballots,
    )
    dumped = json.loads(votetally.io.election.dumps(tally))
    assert dumped == votetally.persist.to_dict(tally)
    assert dumped['places'] == [
        {'rank': 1, 'candidateName': 'Kotlin'},
        {'rank': 1, 'candidateName': 'Rust'},
        {'rank': 3, 'candidateName': 'Go'},
    ]


def test_rankings_from_mapping():
    assert votetally.io.rankings_from_mapping({'A': 2, 'B': None}) == [
        Ranking('A', 2), Ranking('B', None)
    ]


def test_rankings_from_order():
    assert votetally.io.rankings_from_order(['C', 'A']) == [
        Ranking('C', 1), Ranking('A', 2)
    ]
