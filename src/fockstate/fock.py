"""
The `fockstate.fock` module includes the enumeration of the symmetric Fock basis of $n$ photons in $m$ optical modes.
"""

from functools import cache
from typing import Iterator

import numpy as np

from fockstate.state import FockState


@cache
def calc_symm_dim(n: int, m: int) -> int:
    """Calculate the dimension of the symmetric Fock basis.

    Args:
        n: number of photons, $n$
        m: number of optical modes, $m$

    Returns:
        Dimension of the symmetric Fock basis, $N$
    """

    # no state fits photons in zero modes, the vacuum of zero modes is the only state with n = m = 0
    if m == 0:
        return 1 if n == 0 else 0

    # store the top of {n + m - 1 \choose n}
    top = n + m - 1

    # evaluate the simplified version of {n + m - 1 \choose n}
    i = 0
    numerator = 1
    denominator = 1
    while top - i >= m:
        numerator *= top - i
        i += 1
        denominator *= i
    dim = numerator // denominator

    return dim


def iter_symm_basis(n: int, m: int) -> Iterator[FockState]:
    """Enumerate the symmetric Fock basis by repeatedly moving to the successor of the first state.

    States are yielded in the order of their mode-specifying form, from all photons in the first mode to all photons in
    the last mode. Each yielded state is a fresh copy.

    Args:
        n: number of photons, $n$
        m: number of optical modes, $m$

    Yields:
        Every state of the $N$-dimensional symmetric Fock basis
    """
    if m == 0 and n > 0:
        return
    fs = FockState(m, n)
    while fs.is_defined:
        yield fs.copy()
        fs.next_state()


@cache
def build_symm_mode_basis(n: int, m: int) -> np.ndarray:
    """Generate a catalog of all states in the symmetric Fock basis, denoted with $n$ slots where each slot specifies which mode $m$ the photon resides in.

    Args:
        n: number of photons, $n$
        m: number of optical modes, $m$

    Returns:
        $N\\times n$ array that catalogs all states in the $N$-dimensional symmetric Fock basis, expressed in mode-specifying form
    """
    N = calc_symm_dim(n, m)
    modeBasis = np.zeros((N, n), dtype=int)
    for i, fs in enumerate(iter_symm_basis(n, m)):
        modeBasis[i, :] = [fs.photon2mode(k) for k in range(n)]
    return modeBasis


@cache
def build_symm_basis(n: int, m: int) -> np.ndarray:
    """Generate a catalog of all states in the symmetric Fock basis.

    Args:
        n: number of photons, $n$
        m: number of optical modes, $m$

    Returns:
        $N\\times m$ array that catalogs all states in the $N$-dimensional symmetric Fock basis
    """

    # initialize array to store the catalog of basis states
    N = calc_symm_dim(n, m)
    fockBasis = np.zeros((N, m), dtype=int)

    # insert the occupation of each mode for every state of the enumeration
    for i, fs in enumerate(iter_symm_basis(n, m)):
        fockBasis[i, :] = fs.to_vect()

    return fockBasis
