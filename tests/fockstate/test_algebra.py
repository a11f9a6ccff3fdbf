from itertools import product
from math import factorial

import pytest

import fockstate.fock as fock
from fockstate.exceptions import InvalidArgumentError, UndefinedStateError
from fockstate.state import FockState


def test_next_state():
    fs = FockState("|2,0,1>")
    states = []
    while fs.is_defined:
        fs.next_state()
        states.append(fs.to_str())
    assert states == ["|1,2,0>", "|1,1,1>", "|1,0,2>", "|0,3,0>", "|0,2,1>", "|0,1,2>", "|0,0,3>", "|,,>"]

    # the exhausted enumeration is the undefined state of the same modes
    assert fs.m == 3
    assert fs.n == 0
    assert fs == FockState("|,,>")
    with pytest.raises(UndefinedStateError):
        fs.next_state()


def test_next_state_totality():
    for n, m in [(0, 3), (1, 5), (2, 4), (3, 3), (4, 2), (3, 1)]:
        fs = FockState(m, n)
        seen = []
        while fs.is_defined:
            seen.append(tuple(fs.to_vect()))
            fs.next_state()
        assert len(seen) == fock.calc_symm_dim(n, m)
        assert len(set(seen)) == len(seen)
        assert set(seen) == {v for v in product(range(n + 1), repeat=m) if sum(v) == n}


def test_next_state_drops_annotations():
    fs = FockState("|{_:0},1>")
    fs.next_state()
    assert fs.to_str() == "|0,2>"
    assert not fs.has_annotations


def test_add():
    fs = FockState("|3,0,0>")
    assert fs + 2 == FockState("|2,0,1>")
    assert fs + 0 == fs
    assert fs == FockState("|3,0,0>")

    fs += 3
    assert fs == FockState("|1,2,0>")

    fs = FockState("|0,0,3>") + 1
    assert not fs.is_defined
    with pytest.raises(UndefinedStateError):
        fs + 1
    with pytest.raises(UndefinedStateError):
        fs += 0
    with pytest.raises(InvalidArgumentError):
        FockState("|1,0>") + -1


def test_tensor_product():
    a = FockState("|1,0>")
    b = FockState("|0,2,1>")
    fs = a * b
    assert fs == FockState("|1,0,0,2,1>")
    assert fs.m == a.m + b.m
    assert fs.n == a.n + b.n
    assert b * a == FockState("|0,2,1,1,0>")

    assert FockState(2) * FockState("|1>") == FockState("|0,0,1>")
    assert FockState("|>") * b == b

    fs = FockState("|{_:0},0>") * FockState("|{_:1}>")
    assert fs.to_str() == "|{_:0},0,{_:1}>"

    with pytest.raises(UndefinedStateError):
        a * FockState("|,>")
    with pytest.raises(UndefinedStateError):
        FockState() * a


def test_prodnfact():
    for k in range(7):
        assert FockState([k]).prodnfact() == factorial(k)
    assert FockState([1, 1, 1, 1]).prodnfact() == 1
    assert FockState([2, 0, 3]).prodnfact() == 12
    assert FockState(3).prodnfact() == 1
    assert FockState([20, 1]).prodnfact() == factorial(20)
    with pytest.raises(UndefinedStateError):
        FockState("|,>").prodnfact()
