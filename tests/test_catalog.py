import pytest

from errors import UnknownConditionError
from therapy.catalog import CATALOG, Condition, ConditionBaseline, get_baseline, list_conditions


def test_catalog_lists_the_four_conditions_in_order():
    assert [c.value for c in list_conditions()] == [
        "ulcera_superficial", "acné_leve", "dolor_muscular", "piel_sensible",
    ]


def test_lookup_by_enum_or_raw_key():
    assert get_baseline("acné_leve") is get_baseline(Condition.ACNE_LEVE)
    base = get_baseline("ulcera_superficial")
    assert (base.led_color, base.intensity_pct, base.ir_minutes) == ("#FF7F50", 70, 10)


def test_unknown_key_raises():
    with pytest.raises(UnknownConditionError) as exc:
        get_baseline("acne_leve")
    assert exc.value.key == "acne_leve"


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        CATALOG[Condition.ACNE_LEVE] = CATALOG[Condition.PIEL_SENSIBLE]


def test_baselines_have_distinct_colours_and_valid_ranges():
    colours = {b.led_color for b in CATALOG.values()}
    assert len(colours) == len(CATALOG)
    for base in CATALOG.values():
        assert 0 <= base.intensity_pct <= 100
        assert base.ir_minutes >= 1


@pytest.mark.parametrize("kwargs", [
    {"led_color": "red"},
    {"intensity_pct": 120},
    {"ir_minutes": 0},
])
def test_baseline_validation(kwargs):
    fields = dict(label="x", description="y", led_color="#FFFFFF", intensity_pct=50, ir_minutes=5)
    fields.update(kwargs)
    with pytest.raises(ValueError):
        ConditionBaseline(**fields)
