import pytest

from roundedsurface.model.corner_radii import CornerIcon, CornerRadii, field_name, icon_for_focused_field


@pytest.fixture()
def radii():
    return CornerRadii(top_left=1.0, top_right=2.0, bottom_left=3.0, bottom_right=4.0)


def test_lookup_by_is_right_is_top(radii):
    assert radii[False, True] == 1.0
    assert radii[True, True] == 2.0
    assert radii[False, False] == 3.0
    assert radii[True, False] == 4.0


def test_lookup_rejects_other_keys(radii):
    with pytest.raises(KeyError):
        radii["top_left"]
    with pytest.raises(KeyError):
        radii.get_corner_size((True,))


def test_clamped(radii):
    assert radii.clamped(2.5) == CornerRadii(1.0, 2.0, 2.5, 2.5)
    assert CornerRadii(-1.0, 0.5, 0.0, 9.0).clamped(1.0) == CornerRadii(0.0, 0.5, 0.0, 1.0)
    assert radii.clamped(-1.0) == CornerRadii()


def test_uniform_and_max(radii):
    assert CornerRadii.uniform(0.5) == CornerRadii(0.5, 0.5, 0.5, 0.5)
    assert radii.max() == 4.0


@pytest.mark.parametrize(
    ("suffix", "icon"),
    [
        ("topLeft", CornerIcon.TOP_LEFT),
        ("topRight", CornerIcon.TOP_RIGHT),
        ("bottomLeft", CornerIcon.BOTTOM_LEFT),
        ("bottomRight", CornerIcon.BOTTOM_RIGHT),
    ],
)
def test_icon_for_focused_field(suffix, icon):
    assert icon_for_focused_field(field_name("cornerRadii", suffix), "cornerRadii") is icon


def test_icon_without_matching_focus():
    assert icon_for_focused_field(None, "cornerRadii") is CornerIcon.NONE_SELECTED
    assert icon_for_focused_field("surfaceDepth", "cornerRadii") is CornerIcon.NONE_SELECTED
    assert icon_for_focused_field("otherRadii-topLeft", "cornerRadii") is CornerIcon.NONE_SELECTED
