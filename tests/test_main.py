import sys
import os
import io
import json

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import votetally.__main__

sys.path.append(os.path.join(os.path.dirname(__file__), 'io'))
from test_election import ELECTION


def election_file():
    return io.StringIO(json.dumps(ELECTION))


def test_table_output(capsys):
    votetally.__main__.main(election_file(), quiet=True)
    out = capsys.readouterr().out
    assert 'Election Languages: 2 voters, 3 candidates' in out
    assert 'strongest paths' in out
    lines = out.split('\n')
    place_i = lines.index('places')
    assert lines[place_i + 2].split() == ['1', 'Kotlin']
    assert lines[place_i + 4].split() == ['3', 'Go']


def test_json_output(capsys):
    votetally.__main__.main(election_file(), output_format='json', quiet=True)
    tally = json.loads(capsys.readouterr().out)
    assert tally['electionName'] == 'Languages'
    assert tally['ballots'][0]['voterName'] == 'alice'


def test_secret_override(capsys):
    votetally.__main__.main(
        election_file(), output_format='json', secret_ballot='yes', quiet=True
    )
    tally = json.loads(capsys.readouterr().out)
    assert tally['secretBallot']
    assert all('voterName' not in ballot for ballot in tally['ballots'])
    assert tally['whoVoted'] == ['alice', 'bob']


def test_max_candidates():
    with pytest.raises(ValueError):
        votetally.__main__.main(election_file(), max_candidates=2, quiet=True)


def test_no_ballots(capsys):
    empty = dict(ELECTION, ballots=[])
    with pytest.warns(UserWarning):
        votetally.__main__.main(io.StringIO(json.dumps(empty)), quiet=True)
    assert 'Election Languages: 0 voters' in capsys.readouterr().out


def test_no_candidates(capsys):
    empty = {'electionName': 'Void', 'candidateNames': []}
    with pytest.warns(UserWarning):
        votetally.__main__.main(io.StringIO(json.dumps(empty)), quiet=True)
    assert 'Nobody placed' in capsys.readouterr().out
