import pytest

from engine.enums import Resolution
from engine.seasonality import label_to_xs, season_type


@pytest.mark.parametrize(
    "resolution,expected",
    [
        ("weekly", 4),
        ("weekly_13w_sma", 4),
        ("weekly_104w_sma", 4),
        ("monthly", 3),
        ("quarterly", 2),
        ("yearly", 1),
        ("fluseason", 1),
        ("midyear", 1),
    ],
)
def test_season_type(resolution, expected):
    assert season_type(resolution) == expected


@pytest.mark.parametrize(
    "label,resolution,expected",
    [
        ("2020 W01", Resolution.weekly, "2020W01"),
        ("2020W53", Resolution.weekly_52w_sma, "2020W53"),
        ("2020 Jan", Resolution.monthly, "2020-01"),
        ("2019 Dec", Resolution.monthly, "2019-12"),
        ("2020 Q3", Resolution.quarterly, "2020Q3"),
        ("2019/20", Resolution.fluseason, "2019"),
        ("2019/20", Resolution.midyear, "2019"),
        ("2020", Resolution.yearly, "2020"),
    ],
)
def test_label_to_xs(label, resolution, expected):
    assert label_to_xs(label, resolution) == expected


@pytest.mark.parametrize(
    "label,resolution",
    [
        ("", Resolution.yearly),
        (None, Resolution.weekly),
        ("2020 Foo", Resolution.monthly),
        ("2020", Resolution.weekly),
        ("2020 W01", Resolution.yearly),
    ],
)
def test_label_to_xs_unmatched(label, resolution):
    assert label_to_xs(label, resolution) is None


def test_unknown_resolution_rejected():
    with pytest.raises(ValueError):
        season_type("daily")
