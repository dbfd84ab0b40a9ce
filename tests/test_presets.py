import pytest

from viewcal.presets import DISPLAY_PRESETS, display_from_preset, preset_size


@pytest.mark.parametrize("key", [65, "65", 65.0, '65"'])
def test_preset_lookup_forms(key):
    assert preset_size(key) == (1.44, 0.81)


def test_presets_are_16_by_9():
    for w, h in DISPLAY_PRESETS.values():
        assert w / h == pytest.approx(16 / 9, abs=0.01)


def test_unknown_preset():
    with pytest.raises(KeyError, match="known presets"):
        preset_size(99)


def test_display_from_preset_takes_pose():
    d = display_from_preset("55", z=1.0, yaw=12.0, name="Side")
    assert (d.width, d.height) == (1.218, 0.685)
    assert d.z == 1.0 and d.yaw == 12.0 and d.name == "Side"
