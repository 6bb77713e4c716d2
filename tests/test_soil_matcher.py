import logging
import threading

import pytest

from rotation_engine import config, soil_matcher
from rotation_engine.exceptions import InvalidNumeric
from rotation_engine.soil_matcher import SoilAcidityMatcher, check_acidity, get_soil, set_soil


def test_set_then_check():
    assert set_soil(50) == 50
    low = check_acidity(45)
    assert low.to_dict() == {"acidity": 45, "soilHP": 50, "match": True}
    assert check_acidity(55).match is False


def test_boundary_is_inclusive():
    set_soil(50)
    assert check_acidity(50).match is True
    assert check_acidity(50.0001).match is False


def test_default_threshold():
    assert get_soil() == 50
    assert SoilAcidityMatcher().get_soil() == 50


def test_numeric_strings_are_accepted():
    assert set_soil(" 42.5 ") == 42.5
    assert get_soil() == 42.5
    assert check_acidity("40").match is True


@pytest.mark.parametrize("value", ["abc", "", None, True, float("nan"), float("-inf"), [1]])
def test_invalid_threshold_keeps_previous(value, caplog):
    set_soil(30)
    with caplog.at_level(logging.WARNING), pytest.raises(InvalidNumeric):
        set_soil(value)
    assert get_soil() == 30
    assert "Rejected hp" in caplog.text


@pytest.mark.parametrize("value", ["abc", None, float("nan")])
def test_invalid_acidity(value):
    with pytest.raises(InvalidNumeric, match="acidity"):
        check_acidity(value)


def test_set_and_get_are_consistent():
    for hp in (0, -5, 1e6):
        set_soil(hp)
        assert get_soil() == hp


def test_configured_threshold(monkeypatch):
    monkeypatch.setenv("ROTATION_SOIL_THRESHOLD_HP", "65")
    config.get_config.cache_clear()
    assert soil_matcher.reset_soil_matcher().get_soil() == 65


def test_concurrent_writes_leave_a_written_value():
    matcher = SoilAcidityMatcher()
    values = [float(v) for v in range(20)]
    threads = [threading.Thread(target=matcher.set_soil, args=(v,)) for v in values]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert matcher.get_soil() in values
    assert matcher.as_dict() == {"hp": matcher.get_soil()}
