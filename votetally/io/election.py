"""Election JSON files.

An election file is a JSON document of the following structure::

    {
        "electionName": "Languages",
        "secretBallot": true,
        "candidateNames": ["Kotlin", "Rust", "Go"],
        "ballots": [
            {
                "voterName": "alice",
                "confirmationCode": "c1",
                "castTimestamp": "2024-05-01T12:00:00+00:00",
                "rankings": [
                    {"candidateName": "Kotlin", "rank": 1},
                    {"candidateName": "Rust", "rank": 2}
                ]
            }
        ]
    }

``secretBallot`` defaults to true, ``castTimestamp`` to none and ``rank`` to
null (unranked). Tallies are written as JSON produced by
:func:`votetally.persist.to_dict`.
"""

import datetime
import json
from typing import Any, Dict, Iterable, List, Optional

import votetally.io.core
import votetally.persist
from votetally.ballot import RevealedBallot
from votetally.io.core import ElectionData
from votetally.ranking import Ranking
from votetally.tally import Tally


class ElectionParseError(votetally.io.core.ParseError):
    pass


def load_text(text: str) -> ElectionData:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ElectionParseError(f'invalid JSON: {e}') from e
    if not isinstance(document, dict):
        raise ElectionParseError(
            f'election file must hold a JSON object, got {document!r}'
        )
    election_name = _get(document, 'electionName', str)
    candidate_names = _get(document, 'candidateNames', list)
    for name in candidate_names:
        if not isinstance(name, str):
            raise ElectionParseError(f'invalid candidate name: {name!r}')
    secret_ballot = _get(document, 'secretBallot', bool, default=True)
    ballots = [
        _parse_ballot(item, election_name)
        for item in _get(document, 'ballots', list, default=[])
    ]
    return ElectionData(
        election_name=election_name,
        candidate_names=candidate_names,
        ballots=ballots,
        secret_ballot=secret_ballot,
    )


load, loads = votetally.io.core.loaders(load_text)


def dump_lines(tally: Tally, indent: Optional[int] = 2) -> Iterable[str]:
    text = json.dumps(
        votetally.persist.to_dict(tally), indent=indent, ensure_ascii=False
    )
    yield from text.split('\n')


dump, dumps = votetally.io.core.dumpers(dump_lines)


_MISSING = object()


def _get(obj: Dict[str, Any], key: str, type_: type, default: Any = _MISSING
         ) -> Any:
    if not isinstance(obj, dict):
        raise ElectionParseError(f'expected a JSON object, got {obj!r}')
    if key not in obj:
        if default is _MISSING:
            raise ElectionParseError(f'missing key {key!r} in {obj!r}')
        return default
    value = obj[key]
    if not isinstance(value, type_):
        raise ElectionParseError(
            f'{key!r} must be {_type_name(type_)}, got {value!r}'
        )
    return value


def _type_name(type_: Any) -> str:
    if isinstance(type_, tuple):
        return ' or '.join(t.__name__ for t in type_)
    return type_.__name__


def _parse_ballot(item: Any, election_name: str) -> RevealedBallot:
    return RevealedBallot(
        voter_name=_get(item, 'voterName', str),
        election_name=_get(item, 'electionName', str, default=election_name),
        confirmation_code=_get(item, 'confirmationCode', str),
        cast_timestamp=_parse_timestamp(
            _get(item, 'castTimestamp', (str, type(None)), default=None)
        ),
        rankings=_parse_rankings(_get(item, 'rankings', list, default=[])),
    )


def _parse_rankings(items: List[Any]) -> List[Ranking]:
    rankings = []
    for item in items:
        rank = _get(item, 'rank', (int, type(None)), default=None)
        if isinstance(rank, bool):
            raise ElectionParseError(f'invalid rank: {rank!r}')
        rankings.append(Ranking(_get(item, 'candidateName', str), rank))
    return rankings


def _parse_timestamp(value: Optional[str]) -> Optional[datetime.datetime]:
    if value is None:
        return None
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    try:
        return datetime.datetime.fromisoformat(value)
    except ValueError as e:
        raise ElectionParseError(f'invalid timestamp: {value!r}') from e
