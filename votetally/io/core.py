"""Shared functionality for election/tally file I/O. Internal."""

from __future__ import annotations

import dataclasses
import typing
from typing import Any, List, Tuple, Callable, Iterable, TextIO

from votetally.ballot import RevealedBallot


class ParseError(Exception):
    """An input that is invalid according to the given format was detected."""
    pass


@dataclasses.dataclass
class ElectionData:
    """A container for data loadable from an election file."""
    election_name: str
    candidate_names: List[str]
    ballots: List[RevealedBallot]
    secret_ballot: bool = True


def loaders(text_loader: Callable[..., ElectionData]
            ) -> Tuple[Callable[..., ElectionData], Callable[..., ElectionData]]:
    """Create load() and loads() functions from a text parsing function."""
    return_annot = typing.get_type_hints(text_loader).get('return')
    if return_annot is None:
        return_annot = Any

    def load(file: TextIO, **kwargs) -> return_annot:
        return text_loader(file.read(), **kwargs)

    def loads(text: str, **kwargs) -> return_annot:
        return text_loader(text, **kwargs)

    return load, loads


def dumpers(line_dumper: Callable[..., Iterable[str]]
            ) -> Tuple[Callable[..., None], Callable[..., str]]:
    """Create dump() and dumps() functions from a line generator function."""

    def dump(file: TextIO, *args, **kwargs) -> None:
        for line in line_dumper(*args, **kwargs):
            if not line.endswith('\n'):
                line += '\n'
            file.write(line)

    def dumps(*args, **kwargs) -> str:
        return ''.join(
            line + ('' if line.endswith('\n') else '\n')
            for line in line_dumper(*args, **kwargs)
        )

    return dump, dumps
