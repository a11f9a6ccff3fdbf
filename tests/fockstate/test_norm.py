import numpy as np

import fockstate.fock as fock
import fockstate.norm as norm
from fockstate.state import FockState


def test_calc_norm():
    assert np.isclose(norm.calc_norm(FockState([2, 0]), FockState([1, 1])), 2**-0.5)
    assert np.isclose(norm.calc_norm(FockState([3, 0]), FockState([0, 2])), 1 / np.sqrt(12))
    assert norm.calc_norm(FockState(3), FockState(3)) == 1.0


def test_basis_norms():
    n = 2
    m = 2
    result = np.array([2**-0.5, 1.0, 2**-0.5])
    assert np.allclose(norm.basis_norms(n, m), result, atol=1e-5)

    n = 3
    m = 2
    result = np.array([6**-0.5, 2**-0.5, 2**-0.5, 6**-0.5])
    assert np.allclose(norm.basis_norms(n, m), result, atol=1e-5)

    n = 3
    m = 3
    result = np.array([1 / np.sqrt(fs.prodnfact()) for fs in fock.iter_symm_basis(n, m)])
    assert np.allclose(norm.basis_norms(n, m), result, atol=1e-5)


def test_vectorial_factorial():
    assert np.allclose(norm.vectorial_factorial(np.array([0, 1, 2, 3, 4])), np.array([1, 1, 2, 6, 24]))
