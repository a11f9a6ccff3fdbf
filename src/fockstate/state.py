"""
The `fockstate.state` module includes the canonical encoding of Fock states of $n$ photons in $m$ optical modes.

A state is stored in mode-specifying form: the mode occupied by each photon, sorted in non-decreasing order. The
occupation vector $(2, 0, 1)$ is therefore encoded as $(0, 0, 2)$. A state whose encoding is missing is *undefined*, it
is the value reached once an enumeration of a basis is exhausted.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from fockstate.annotation import POLARIZATION_KEY, Annotation
from fockstate.config import Config
from fockstate.exceptions import InvalidArgumentError, ModeIndexError, UndefinedStateError
from fockstate.hashing import hash_function
from fockstate.parser import parse_fock_str

logger = logging.getLogger(__name__)

AnnotationLike = Union[Annotation, str]
MergeFunction = Callable[[Annotation, Annotation], Optional[Annotation]]


class FockState:
    """Fock state of $n$ photons in $m$ optical modes.

    Attributes:
        m (int): number of optical modes, $m$
        n (int): number of photons, $n$, zero for an undefined state
        is_defined (bool): whether the state carries an encoding
    """

    __slots__ = ("_m", "_n", "_code", "_annotations")

    def __init__(
        self,
        state: Union[None, int, str, Sequence[int], np.ndarray, "FockState"] = None,
        n: Optional[int] = None,
        annotations: Optional[Mapping[int, Iterable[AnnotationLike]]] = None,
    ) -> None:
        """Initialization of a Fock state.

        Args:
            state: `None` for the undefined state of $0$ modes, the number of modes $m$, the textual notation of the state,
                its occupation vector or another state to copy
            n: number of photons, only valid when `state` is the number of modes, placing all photons in the first mode
            annotations: annotations of the photons of each mode, as lists of annotations or annotation tokens
        """
        self._m = 0
        self._n = 0
        self._code: Optional[List[int]] = None
        self._annotations: Dict[int, List[Annotation]] = {}

        if n is not None and not isinstance(state, (int, np.integer)):
            raise InvalidArgumentError("number of photons can only be given along with the number of modes")

        if state is None:
            pass
        elif isinstance(state, FockState):
            self._assign(state)
        elif isinstance(state, (int, np.integer)):
            self._set_m_n(int(state), 0 if n is None else int(n))
        elif isinstance(state, str):
            parsed = parse_fock_str(state)
            self._m = parsed.m
            if parsed.occupation is not None:
                self._set_vect(parsed.occupation)
                self._annotations = {k: list(v) for k, v in parsed.annotations.items()}
        else:
            vect = np.asarray(state, dtype=int)
            if vect.ndim != 1:
                raise InvalidArgumentError("occupation vector must be one-dimensional")
            self._m = len(vect)
            self._set_vect(vect)

        if annotations:
            for k, la in annotations.items():
                self.set_mode_annotations(k, la)

    def _set_m_n(self, m: int, n: int) -> None:
        if m < 0 or n < 0:
            raise InvalidArgumentError(f"number of modes and photons must be non-negative, got m={m}, n={n}")
        if n and not m:
            raise InvalidArgumentError("cannot place photons in a state without modes")
        self._m = m
        self._n = n
        self._code = [0] * n

    def _set_vect(self, vect: Union[Sequence[int], np.ndarray]) -> None:
        vect = np.asarray(vect, dtype=int)
        if (vect < 0).any():
            raise InvalidArgumentError(f"occupation of a mode cannot be negative, got {vect.tolist()}")
        # mode 0 photons first, then mode 1 photons, ...
        self._code = np.repeat(np.arange(len(vect)), vect).tolist()
        self._n = len(self._code)

    def _assign(self, other: "FockState") -> None:
        self._m = other._m
        self._n = other._n
        self._code = None if other._code is None else list(other._code)
        self._annotations = {k: list(la) for k, la in other._annotations.items()}

    @classmethod
    def from_code(
        cls,
        m: int,
        code: Optional[List[int]],
        annotations: Optional[Dict[int, List[Annotation]]] = None,
    ) -> "FockState":
        """Build a state directly from its mode-specifying form, taking ownership of `code`.

        Args:
            m: number of optical modes, $m$
            code: mode of each photon sorted in non-decreasing order, `None` for an undefined state
            annotations: annotations of the annotated photons of each mode

        Returns:
            The encoded state
        """
        assert code is None or all(0 <= a <= b < m for a, b in zip(code, code[1:] + code[-1:])), "Invalid encoding"
        fs = cls.__new__(cls)
        fs._m = m
        fs._code = code
        fs._n = 0 if code is None else len(code)
        fs._annotations = annotations if annotations is not None and code is not None else {}
        return fs

    @classmethod
    def undefined(cls, m: int = 0) -> "FockState":
        """Build the undefined state of $m$ modes, rendered as `|,,...>`."""
        if m < 0:
            raise InvalidArgumentError(f"number of modes must be non-negative, got {m}")
        return cls.from_code(m, None)

    @property
    def m(self) -> int:
        return self._m

    @property
    def n(self) -> int:
        return self._n

    @property
    def is_defined(self) -> bool:
        return self._code is not None

    def _require_defined(self) -> List[int]:
        if self._code is None:
            raise UndefinedStateError()
        return self._code

    def copy(self) -> "FockState":
        return FockState(self)

    def __copy__(self) -> "FockState":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "FockState":
        return self.copy()

    def to_vect(self) -> List[int]:
        """Compute the occupation vector of the state.

        Returns:
            $m$-length list of the number of photons in each mode
        """
        code = self._require_defined()
        occupation: List[int] = np.bincount(np.asarray(code, dtype=int), minlength=self._m).tolist()
        return occupation

    def photon2mode(self, idx: int) -> int:
        """Mode occupied by the photon of index `idx` in the encoding."""
        code = self._require_defined()
        if idx < 0 or idx >= self._n:
            raise InvalidArgumentError(f"invalid photon index {idx}")
        return code[idx]

    def mode2photon(self, mode: int) -> int:
        """Index of the first photon occupying `mode`, -1 if the mode is empty."""
        code = self._require_defined()
        self._check_mode(mode)
        for i, k in enumerate(code):
            if k == mode:
                return i
            if k > mode:
                break
        return -1

    def __len__(self) -> int:
        return self._m

    def __iter__(self) -> Iterator[int]:
        return iter(self.to_vect())

    def __getitem__(self, idx: Union[int, slice]) -> Union[int, "FockState"]:
        """Number of photons in mode `idx`, or a sliced state if `idx` is a slice."""
        if isinstance(idx, slice):
            return self.slice(idx.start, idx.stop, idx.step)
        if idx < 0 or idx >= self._m:
            raise ModeIndexError(f"invalid mode {idx} for a state of {self._m} modes")
        code = self._require_defined()
        # photons are sorted by mode, stop as soon as the mode is passed
        count = 0
        for k in code:
            if k > idx:
                break
            if k == idx:
                count += 1
        return count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FockState):
            return NotImplemented
        if self._m != other._m or self._n != other._n:
            return False
        if self._m == 0:
            return True
        if self._code is None or other._code is None:
            return self._code is None and other._code is None
        return self._code == other._code

    def hash(self) -> int:
        """Stable 64-bit hash of the state, consistent with equality since annotations are not rendered."""
        return hash_function(self._render(False, ">"))

    def __hash__(self) -> int:
        return self.hash()

    def to_str(self, show_annotations: Optional[bool] = None) -> str:
        """Render the state in the textual notation understood by `fockstate.parser`.

        Args:
            show_annotations: whether annotated photons are rendered with their annotation, defaults to
                `Config().show_annotations`

        Returns:
            Textual notation, e.g. `|2,0,1>`, or `|,,>` for an undefined state of 3 modes
        """
        cfg = Config()
        if show_annotations is None:
            show_annotations = cfg.show_annotations
        return self._render(show_annotations, cfg.ket_close)

    def _render(self, show_annotations: bool, ket_close: str) -> str:
        if self._code is None:
            return "|" + "," * max(self._m - 1, 0) + ket_close

        fields = []
        for k, count in enumerate(self.to_vect()):
            annots = ""
            if show_annotations and k in self._annotations:
                grouped = Counter(a.to_str() for a in self._annotations[k])
                annots = "".join(f"{{{text}}}" if c == 1 else f"{c}{{{text}}}" for text, c in grouped.items())
                count -= len(self._annotations[k])
            fields.append(annots + (str(count) if not annots or count else ""))
        return "|" + ",".join(fields) + ket_close

    def __str__(self) -> str:
        return self.to_str()

    def __repr__(self) -> str:
        return f"FockState({self.to_str()!r})"

    def next_state(self) -> "FockState":
        """Replace the state, in place, by its successor in the enumeration of the basis of $n$ photons in $m$ modes.

        The last photon that is not in the last mode moves to the next mode, and all photons after it join it. Once all
        photons are in the last mode the enumeration is exhausted and the state becomes undefined. Annotations are
        dropped since photons change modes.

        Returns:
            The state itself
        """
        code = self._require_defined()
        i = self._n - 1
        while i >= 0 and code[i] == self._m - 1:
            i -= 1
        self._annotations = {}
        if i < 0:
            logger.debug("enumeration of %d photons in %d modes exhausted", self._n, self._m)
            self._code = None
            self._n = 0
            return self
        mode = code[i] + 1
        code[i:] = [mode] * (self._n - i)
        return self

    def __iadd__(self, c: int) -> "FockState":
        if not isinstance(c, (int, np.integer)):
            return NotImplemented
        if c < 0:
            raise InvalidArgumentError(f"cannot move back {-c} states in an enumeration")
        self._require_defined()
        for _ in range(c):
            self.next_state()
        return self

    def __add__(self, c: int) -> "FockState":
        if not isinstance(c, (int, np.integer)):
            return NotImplemented
        fs = self.copy()
        fs += c
        return fs

    def __mul__(self, other: "FockState") -> "FockState":
        """Tensor product, the modes of `other` follow the modes of this state."""
        if not isinstance(other, FockState):
            return NotImplemented
        if self._code is None or other._code is None:
            raise UndefinedStateError()
        code = self._code + [k + self._m for k in other._code]
        annotations = {k: list(la) for k, la in self._annotations.items()}
        annotations.update({k + self._m: list(la) for k, la in other._annotations.items()})
        return FockState.from_code(self._m + other._m, code, annotations)

    def prodnfact(self) -> int:
        """Compute the product of the factorials of the occupation of each mode.

        Returns:
            $\\prod_i n_i!$, the square of the normalization factor of the state
        """
        code = self._require_defined()
        p = 1
        i = 0
        while i < self._n:
            k = 1
            while i + k < self._n and code[i + k] == code[i]:
                k += 1
                p *= k
            i += k
        return p

    def _check_slice(self, start: Optional[int], end: Optional[int], step: Optional[int]) -> Tuple[int, int, int, int]:
        m = self._m
        start = 0 if start is None else start
        end = m if end is None else end
        step = 1 if step is None else step
        if start < 0:
            start += m
        if end < 0:
            end += m
        start = min(max(start, 0), m)
        end = min(max(end, 0), m)
        # a reversed range is the empty slice placed at start
        end = max(end, start)
        self._require_defined()
        if step < 1:
            raise InvalidArgumentError(f"slice step must be positive, got {step}")
        return start, end, step, len(range(start, end, step))

    def slice(self, start: Optional[int] = None, end: Optional[int] = None, step: Optional[int] = None) -> "FockState":
        """Extract the modes $start, start + step, \\dots$ below $end$ as a new state.

        Args:
            start: first mode, negative values count from $m$
            end: mode at which the slice stops (excluded), negative values count from $m$
            step: stride between extracted modes

        Returns:
            State of the extracted modes
        """
        start, end, step, slice_m = self._check_slice(start, end, step)
        assert self._code is not None

        def kept(k: int) -> bool:
            return start <= k < end and (k - start) % step == 0

        code = [(k - start) // step for k in self._code if kept(k)]
        annotations = {(k - start) // step: list(la) for k, la in self._annotations.items() if kept(k)}
        return FockState.from_code(slice_m, code, annotations)

    def set_slice(self, fs: "FockState", start: Optional[int] = None, end: Optional[int] = None) -> "FockState":
        """Build a new state where the modes from `start` to `end` are replaced by the modes of `fs`.

        Args:
            fs: replacement state, must have as many modes as the slice
            start: first replaced mode, negative values count from $m$
            end: mode at which the replacement stops (excluded), negative values count from $m$

        Returns:
            State with the same number of modes, $m$
        """
        start, end, _, slice_m = self._check_slice(start, end, 1)
        if slice_m != fs.m:
            raise InvalidArgumentError(f"cannot replace a slice of {slice_m} modes by a state of {fs.m} modes")
        replacement = fs._require_defined()
        assert self._code is not None

        code = [k for k in self._code if k < start]
        code += [k + start for k in replacement]
        code += [k for k in self._code if k >= end]
        annotations = {k: list(la) for k, la in self._annotations.items() if k < start or k >= end}
        annotations.update({k + start: list(la) for k, la in fs._annotations.items()})
        return FockState.from_code(self._m, code, annotations)

    def _check_mode(self, mode: int) -> None:
        if mode < 0 or mode >= self._m:
            raise InvalidArgumentError(f"invalid mode index {mode}")

    def _occupation(self, mode: int) -> int:
        return 0 if self._code is None else self._code.count(mode)

    def get_mode_annotations(self, mode: int) -> List[Annotation]:
        """Annotations of the photons in `mode`, unannotated photons coming last with an empty annotation."""
        self._check_mode(mode)
        annotated = self._annotations.get(mode, [])
        return [Annotation(a) for a in annotated] + [Annotation() for _ in range(self._occupation(mode) - len(annotated))]

    def set_mode_annotations(self, mode: int, annotations: Iterable[AnnotationLike]) -> None:
        """Annotate the photons in `mode`, replacing their previous annotations.

        Args:
            mode: index of the mode
            annotations: at most one annotation per photon in the mode, empty annotations leave a photon unannotated
        """
        self._check_mode(mode)
        la = [Annotation(a) for a in annotations]
        if len(la) > self._occupation(mode):
            raise InvalidArgumentError(f"{len(la)} annotations given for {self._occupation(mode)} photons in mode {mode}")
        la = [a for a in la if a]
        if la:
            self._annotations[mode] = la
        else:
            self._annotations.pop(mode, None)

    def get_photon_annotation(self, idx: int) -> Annotation:
        """Annotation of the photon of index `idx` in the encoding."""
        mode = self.photon2mode(idx)
        annotated = self._annotations.get(mode, [])
        rank = idx - self.mode2photon(mode)
        return Annotation(annotated[rank]) if rank < len(annotated) else Annotation()

    def clear_annotations(self) -> None:
        self._annotations = {}

    @property
    def has_annotations(self) -> bool:
        return bool(self._annotations)

    @property
    def has_polarization(self) -> bool:
        return any(POLARIZATION_KEY in a for la in self._annotations.values() for a in la)

    def separate_state(self, merge: Optional[MergeFunction] = None) -> List["FockState"]:
        """Split the state into states of mutually indistinguishable photons.

        Photons are visited in the order of the encoding; each joins the first group whose annotation can be merged with
        its own, the group annotation becoming the merged one, or starts a new group. The grouping is greedy, and
        therefore depends on the order of the photons when the merge relation is not transitive.

        Args:
            merge: function returning the merge of two annotations, or `None` if they are incompatible, defaults to
                `Annotation.compatible_annotation`

        Returns:
            A copy of the state without annotations if all photons are indistinguishable, otherwise one state without
            annotations per group, in the order the groups were found
        """
        if not self._n:
            return [self.copy()]
        if merge is None:
            merge = Annotation.compatible_annotation

        groups: List[Tuple[Annotation, List[int]]] = []
        for k in range(self._n):
            annot_k = self.get_photon_annotation(k)
            for g, (annot_group, photons) in enumerate(groups):
                merged = merge(annot_group, annot_k)
                if merged is not None:
                    groups[g] = (merged, photons)
                    photons.append(k)
                    break
            else:
                groups.append((annot_k, [k]))

        if len(groups) == 1:
            fs = self.copy()
            fs.clear_annotations()
            return [fs]

        logger.debug("%s separated into %d groups of indistinguishable photons", self, len(groups))
        states = []
        for _, photons in groups:
            vect = [0] * self._m
            for photon in photons:
                vect[self.photon2mode(photon)] += 1
            states.append(FockState(vect))
        return states
