"""
The `fockstate.norm` module includes the normalization factors of Fock states, built on the product of the factorials of their occupations.
"""

from math import sqrt
from typing import Union

import jax.numpy as jnp
import numpy as np
from jax import vmap
from jax.scipy.special import factorial

from fockstate.fock import build_symm_basis
from fockstate.state import FockState


@vmap
def vectorial_factorial(x: Union[int, float]) -> Union[int, float]:
    """Compute the factorial on the input vectorially.

    Args:
        x: integer to compute the factorial of

    Returns:
        Factorial of the input
    """
    return factorial(x)  # type: ignore


@vmap
def calc_state_norm(S: jnp.ndarray) -> float:
    """Calculate the normalization factor of a state given as an occupation vector.

    Args:
        S: occupation vector of state $\\left| S\\right\\rangle$, length $m$

    Returns:
        $1/\\sqrt{\\prod_i s_i!}$
    """
    return 1.0 / jnp.sqrt(jnp.prod(vectorial_factorial(S)))  # type: ignore


def calc_norm(S: FockState, T: FockState) -> float:
    """Calculate the normalization factor for an element of a symmetric multi-photon unitary.

    Args:
        S: state $\\left| S\\right\\rangle$ corresponding to the row of the multi-photon unitary
        T: state $\\left| T\\right\\rangle$ corresponding to the column of the multi-photon unitary

    Returns:
        Normalization factor for symmetric multi-photon unitary element $\\left\\langle S\\right|\\boldsymbol{\\Phi}(\\mathbf{U})\\left| T\\right\\rangle$
    """
    return 1.0 / sqrt(S.prodnfact() * T.prodnfact())


def basis_norms(n: int, m: int) -> np.ndarray:
    """Calculate the normalization factor of every state of the symmetric Fock basis.

    Args:
        n: number of photons, $n$
        m: number of optical modes, $m$

    Returns:
        $N$-length array of normalization factors, in the order of `build_symm_basis`
    """
    basis = build_symm_basis(n, m)
    if basis.size == 0:
        return np.ones(basis.shape[0], dtype=float)
    norms: np.ndarray = np.asarray(calc_state_norm(jnp.asarray(basis)))
    return norms
