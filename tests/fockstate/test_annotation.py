import pytest

from fockstate.annotation import Annotation
from fockstate.exceptions import InvalidArgumentError


def test_annotation_to_str():
    assert Annotation("0").to_str() == "_:0"
    assert Annotation("P:H, _:1").to_str() == "P:H,_:1"
    assert Annotation("_:1,P:H") == Annotation("P:H,_:1")
    assert Annotation({"P": "V"}).to_str() == "P:V"
    assert Annotation(Annotation("P:V")) == Annotation("P:V")
    assert str(Annotation("a")) == "_:a"
    assert repr(Annotation("a")) == "Annotation('_:a')"


def test_annotation_empty():
    assert not Annotation()
    assert not Annotation("")
    assert Annotation("").to_str() == ""
    assert len(Annotation("P:H,_:0")) == 2
    assert "P" in Annotation("P:H")
    assert Annotation("P:H")["P"] == "H"


def test_annotation_invalid():
    with pytest.raises(InvalidArgumentError):
        Annotation("P:")
    with pytest.raises(InvalidArgumentError):
        Annotation(":H")
    with pytest.raises(InvalidArgumentError):
        Annotation("_:0,_:1")


def test_compatible_annotation():
    assert Annotation("P:H").compatible_annotation(Annotation("_:1")) == Annotation("P:H,_:1")
    assert Annotation("P:H,_:1").compatible_annotation(Annotation("_:1")) == Annotation("P:H,_:1")
    assert Annotation("_:0").compatible_annotation(Annotation("_:1")) is None
    assert Annotation().compatible_annotation(Annotation("P:V")) == Annotation("P:V")
    assert Annotation("P:V").compatible_annotation(Annotation()) == Annotation("P:V")
    assert Annotation().compatible_annotation(Annotation()) == Annotation()


def test_annotation_invalid_mapping():
    for items in [{"P": "H,V"}, {"P": "a:b"}, {"P": "H}"}, {"{P": "H"}, {"P": ""}]:
        with pytest.raises(InvalidArgumentError):
            Annotation(items)
    with pytest.raises(InvalidArgumentError):
        Annotation("_:a}")

    # mapping annotations render to text that parses back to the same annotation
    annotation = Annotation({"P": "H", "_": "1"})
    assert Annotation(annotation.to_str()) == annotation
