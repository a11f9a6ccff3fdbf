from fockstate.annotation import Annotation
from fockstate.state import FockState


def test_separate_incompatible():
    fs = FockState("|{_:0},{_:1},{_:2}>")
    assert fs.separate_state() == [FockState("|1,0,0>"), FockState("|0,1,0>"), FockState("|0,0,1>")]

    fs = FockState("|{_:0}{_:1},{_:2}>")
    states = fs.separate_state()
    assert len(states) == fs.n
    assert states == [FockState("|1,0>"), FockState("|1,0>"), FockState("|0,1>")]
    assert all(not s.has_annotations for s in states)


def test_separate_groups():
    fs = FockState("|2{_:0}{_:1}>")
    assert fs.separate_state() == [FockState("|2>"), FockState("|1>")]

    # unannotated photons join the first group
    fs = FockState("|{_:0},1,{_:1}>")
    assert fs.separate_state() == [FockState("|1,1,0>"), FockState("|0,0,1>")]


def test_separate_indistinguishable():
    fs = FockState("|1,1,0>")
    assert fs.separate_state() == [fs]

    fs = FockState("|{P:H},{_:0}>")
    states = fs.separate_state()
    assert len(states) == 1
    assert states[0] == FockState("|1,1>")
    assert not states[0].has_annotations
    assert fs.has_annotations

    fs = FockState(3)
    assert fs.separate_state() == [FockState(3)]


def test_separate_greedy_merge():
    def merge(a, b):
        # photons are indistinguishable when their labels differ by at most one, keeping the group label
        if abs(int(a["_"]) - int(b["_"])) <= 1:
            return a
        return None

    fs = FockState("|{_:0},{_:2},{_:1}>")
    assert fs.separate_state(merge) == [FockState("|1,0,1>"), FockState("|0,1,0>")]

    fs = FockState("|{_:1},{_:0},{_:2}>")
    assert fs.separate_state(merge) == [FockState("|1,1,1>")]


def test_separate_merged_representative():
    fs = FockState("|{P:H},{_:0},{_:1}>")
    # P:H merges with _:0 into P:H,_:0 which is then incompatible with _:1
    assert fs.separate_state() == [FockState("|1,1,0>"), FockState("|0,0,1>")]
    assert Annotation("P:H").compatible_annotation(Annotation("_:1")) == Annotation("P:H,_:1")
