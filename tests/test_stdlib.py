import pytest

from nidc.stdlib import is_pressed, sleep


def test_sleep_emits_wait():
    assert sleep(500) == ["wait, 500"]


def test_sleep_single_instruction_contains_time():
    result = sleep(65535)
    assert len(result) == 1
    assert result[0].endswith("65535")


def test_is_pressed_emits_kbd_and_branch():
    assert is_pressed(30, "#abc") == ["kbd, 30", "byk #abc"]


def test_is_pressed_uses_branch_name_last():
    result = is_pressed(1, "#branchname")
    assert result[-1].split()[-1] == "#branchname"
    assert result[0].startswith("kbd")


@pytest.mark.parametrize("value", [-1, 65536])
def test_sleep_rejects_out_of_range(value):
    with pytest.raises(ValueError):
        sleep(value)


@pytest.mark.parametrize("value", [-5, 70000])
def test_is_pressed_rejects_out_of_range(value):
    with pytest.raises(ValueError):
        is_pressed(value, "#x")