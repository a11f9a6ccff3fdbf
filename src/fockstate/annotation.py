"""
The `fockstate.annotation` module includes the distinguishability tags that can be attached to photons.

An annotation is written as a comma-separated list of `key:value` items, e.g. `P:H,_:1`. A bare value is stored under the
default key `_`. Two annotations are compatible when no key they share carries different values, in which case they merge
into the union of their items.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, Mapping, Optional, Tuple, Union

from fockstate.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

DEFAULT_KEY = "_"
POLARIZATION_KEY = "P"


class Annotation:
    """Distinguishability tag of a photon.

    Attributes:
        items (Dict[str, str]): mapping from annotation key to value
    """

    __slots__ = ("_items",)

    def __init__(self, token: Union[str, Mapping[str, str], "Annotation", None] = None) -> None:
        """Initialization of an annotation.

        Args:
            token: textual token (without the surrounding braces), a mapping of keys to values or another annotation
        """
        self._items: Dict[str, str] = {}
        if token is None:
            return
        if isinstance(token, Annotation):
            self._items = dict(token._items)
        elif isinstance(token, str):
            self._items = _parse_token(token)
        else:
            self._items = dict(_check_item(str(k), str(v)) for k, v in token.items())

    @property
    def items(self) -> Dict[str, str]:
        return dict(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(sorted(self._items.items()))

    def __contains__(self, key: str) -> bool:
        return key in self._items

    def __getitem__(self, key: str) -> str:
        return self._items[key]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Annotation):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self.to_str())

    def to_str(self) -> str:
        """Render the annotation as a token, an empty string meaning no annotation."""
        return ",".join(f"{k}:{v}" for k, v in sorted(self._items.items()))

    def __str__(self) -> str:
        return self.to_str()

    def __repr__(self) -> str:
        return f"Annotation({self.to_str()!r})"

    def compatible_annotation(self, other: "Annotation") -> Optional["Annotation"]:
        """Check whether two annotations can describe the same photon.

        Args:
            other: annotation to compare with

        Returns:
            The merged annotation if both are compatible, `None` otherwise
        """
        merged = dict(self._items)
        for key, value in other._items.items():
            if merged.setdefault(key, value) != value:
                return None
        return Annotation(merged)


def _parse_token(token: str) -> Dict[str, str]:
    items: Dict[str, str] = {}
    for part in token.split(","):
        part = part.strip()
        if not part:
            continue
        key, sep, value = part.partition(":")
        if not sep:
            key, value = DEFAULT_KEY, key
        key = key.strip()
        value = value.strip()
        _check_item(key, value)
        if key in items and items[key] != value:
            raise InvalidArgumentError(f"conflicting values for annotation key '{key}'")
        items[key] = value
    return items


def _check_item(key: str, value: str) -> Tuple[str, str]:
    for part in (key, value):
        if not part or any(c in part for c in ",:{}"):
            logger.debug("rejecting annotation item %r: %r", key, value)
            raise InvalidArgumentError(f"invalid annotation item '{key}:{value}'")
    return key, value
