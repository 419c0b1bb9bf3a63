import pytest

from nidc.errors import CompileError, LexError, NidError


def test_message_without_line_is_plain():
    assert str(NidError("bad thing")) == "bad thing"


def test_message_with_line_mentions_both():
    text = str(NidError("bad thing", 7))
    assert "bad thing" in text
    assert "7" in text


def test_attributes_are_kept():
    err = CompileError("oops", 12)
    assert err.message == "oops"
    assert err.line == 12


def test_line_defaults_to_none():
    assert LexError("x").line is None


@pytest.mark.parametrize("cls", [LexError, CompileError])
def test_subclasses_behave_like_base(cls):
    err = cls("broken")
    assert isinstance(err, NidError)
    assert err.message == "broken"
    assert err.line is None
    assert str(err) == "broken"


@pytest.mark.parametrize("cls", [LexError, CompileError])
def test_subclasses_with_line_render_like_base(cls):
    err = cls("broken", 4)
    assert err.line == 4
    assert str(err) == str(NidError("broken", 4))