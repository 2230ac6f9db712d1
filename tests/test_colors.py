import pytest

from raycaster.colors import lookup_color


@pytest.mark.parametrize(
    "name, expected",
    [
        ("snow", 0xFFFAFA),
        ("white", 0xFFFFFF),
        ("black", 0x0),
        ("red", 0xFF0000),
        ("navy", 0x80),
        ("gray50", 0x7F7F7F),
        ("thistle4", 0x8B7B8B),
        ("light green", 0x90EE90),
    ],
)
def test_known_names(name, expected):
    assert lookup_color(name) == expected


def test_none_is_transparent_marker():
    assert lookup_color("none") == -1


def test_case_insensitive():
    assert lookup_color("SNOW") == lookup_color("snow")
    assert lookup_color("Ghost White") == lookup_color("ghost white")


def test_first_duplicate_wins():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


def test_gray_and_grey_spellings_agree():
    for level in range(101):
        assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")


def test_gray_scale_is_neutral_and_monotonic():
    values = [lookup_color(f"gray{level}") for level in range(101)]
    assert values[0] == lookup_color("black")
    assert values[-1] == lookup_color("white")
    assert values == sorted(values)
    for value in values:
        low = value & 0xFF
        assert value == low * 0x010101


def test_spaced_and_joined_names_agree():
    assert lookup_color("alice blue") == lookup_color("aliceblue")
    assert lookup_color("dodger blue") == lookup_color("dodgerblue1")


def test_unknown_name_raises():
    with pytest.raises(KeyError):
        lookup_color("not a colour")
    with pytest.raises(KeyError):
        lookup_color("gray101")