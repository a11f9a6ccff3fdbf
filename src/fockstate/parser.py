"""
The `fockstate.parser` module includes the decoder of the textual notation of Fock states.

Accepted forms, where blanks are allowed around every element:

    |1,0,2>        occupation of each mode
    [1,0,2] (1,0,2)
    |{P:H}1,0>     one photon annotated with `P:H` and one without annotation in mode 0
    |2{_:0},{_:1}> two photons annotated with `_:0` in mode 0, one annotated with `_:1` in mode 1
    |,,>           undefined state of 3 modes
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from fockstate.annotation import Annotation
from fockstate.config import KET_CLOSINGS
from fockstate.exceptions import FockStateParseError, InvalidArgumentError

logger = logging.getLogger(__name__)

DIGITS = "0123456789"
OPENINGS: Dict[str, Tuple[str, ...]] = {"[": ("]",), "(": (")",), "|": KET_CLOSINGS}


@dataclass(frozen=True)
class ParsedFock:
    """Result of decoding a textual Fock state.

    Attributes:
        m (int): number of modes, $m$
        occupation (Optional[List[int]]): number of photons in each mode, `None` for an undefined state
        annotations (Dict[int, List[Annotation]]): annotations of the annotated photons of each mode
    """

    m: int
    occupation: Optional[List[int]]
    annotations: Dict[int, List[Annotation]] = field(default_factory=dict)

    @property
    def n(self) -> int:
        return sum(self.occupation) if self.occupation is not None else 0


def _skip_blanks(s: str, pos: int) -> int:
    while pos < len(s) and s[pos] == " ":
        pos += 1
    return pos


def _error(s: str, pos: int, reason: str) -> FockStateParseError:
    logger.debug("cannot parse %r at position %d: %s", s, pos, reason)
    return FockStateParseError(f"invalid fock state representation ({reason}): {s!r}")


def _parse_term(s: str, pos: int) -> Tuple[int, List[Annotation], int]:
    """Decode the sub-terms describing the occupation of a single mode.

    Args:
        s: full textual state
        pos: position of the first sub-term

    Returns:
        Tuple of the number of photons in the mode, the annotations of its annotated photons and the position after the term
    """
    total = 0
    # annotation text -> [number of photons, annotation], merged on identical text
    grouped: Dict[str, List] = {}
    while pos < len(s) and (s[pos] in DIGITS or s[pos] == "{"):
        if s[pos] == "{":
            count = 1
        else:
            start = pos
            while pos < len(s) and s[pos] in DIGITS:
                pos += 1
            count = int(s[start:pos])
        if pos < len(s) and s[pos] == "{":
            if not count:
                raise _error(s, pos, "annotation on 0 photons")
            close = s.find("}", pos + 1)
            if close < 0:
                raise _error(s, pos, "no annotation close")
            try:
                annotation = Annotation(s[pos + 1 : close])
            except InvalidArgumentError as exc:
                raise _error(s, pos, str(exc)) from exc
            pos = close + 1
            text = annotation.to_str()
            if text:
                grouped.setdefault(text, [0, annotation])[0] += count
        total += count

    annotations = [annotation for count, annotation in grouped.values() for _ in range(count)]
    return total, annotations, pos


def parse_fock_str(s: str) -> ParsedFock:
    """Decode the textual notation of a Fock state.

    Args:
        s: textual state, e.g. `|1,0,2>`

    Returns:
        Decoded number of modes, occupation and annotations

    Raises:
        FockStateParseError: if the notation is malformed
    """
    pos = _skip_blanks(s, 0)
    if pos >= len(s) or s[pos] not in OPENINGS:
        raise _error(s, pos, "bad open")
    closings = OPENINGS[s[pos]]
    pos += 1

    occupation: List[int] = []
    annotations: Dict[int, List[Annotation]] = {}
    while True:
        pos = _skip_blanks(s, pos)
        c = s[pos] if pos < len(s) else ""
        if not c or c not in DIGITS + ",{" or (occupation and c != ",") or (not occupation and c == ","):
            break
        if c == ",":
            pos = _skip_blanks(s, pos + 1)
        count, mode_annotations, pos = _parse_term(s, pos)
        if mode_annotations:
            annotations[len(occupation)] = mode_annotations
        occupation.append(count)

    # bare commas describe an undefined state, one more mode than commas
    undefined_m = 0
    if not occupation and pos < len(s) and s[pos] == ",":
        undefined_m = 1
        while True:
            pos = _skip_blanks(s, pos)
            if pos >= len(s) or s[pos] != ",":
                break
            undefined_m += 1
            pos += 1

    if pos >= len(s) or s[pos] not in closings:
        raise _error(s, pos, "bad close")
    pos = _skip_blanks(s, pos + 1)
    if pos < len(s):
        raise _error(s, pos, "extra chars")

    if undefined_m:
        return ParsedFock(undefined_m, None)
    return ParsedFock(len(occupation), occupation, annotations)
