import pytest

from rotation_engine import config, soil_matcher, utils
from rotation_engine.models import Crop, PlanContext, SoilTestResults

ENV_VARS = (
    config.CONFIG_ENV,
    *config.ENV_OVERRIDES,
    utils.DATA_ENV,
    utils.OVERLAY_ENV,
)


@pytest.fixture(autouse=True)
def _isolated_state(monkeypatch):
    """Reset caches, environment overrides and the shared soil threshold."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config.get_config.cache_clear()
    utils.clear_dataset_cache()
    utils._LAST_WARNED.clear()
    soil_matcher.reset_soil_matcher(50)
    yield
    config.get_config.cache_clear()
    utils.clear_dataset_cache()
    soil_matcher.reset_soil_matcher(50)


@pytest.fixture
def corn():
    return Crop(
        id="corn",
        name="Corn",
        family="Poaceae",
        nutrient_requirement="high",
        water_requirement=7,
        season=("spring", "summer"),
        growth_duration=90,
    )


@pytest.fixture
def soybean():
    return Crop(
        id="soybean",
        name="Soybean",
        family="Fabaceae",
        nutrient_requirement="low",
        water_requirement=6,
        season=("spring", "summer"),
        growth_duration=100,
        nitrogen_fixer=True,
    )


@pytest.fixture
def wheat():
    return Crop(
        id="wheat",
        name="Wheat",
        family="Poaceae",
        nutrient_requirement="medium",
        water_requirement=5,
        season=("autumn", "winter"),
        growth_duration=120,
    )


@pytest.fixture
def tomato():
    return Crop(
        id="tomato",
        name="Tomato",
        family="Solanaceae",
        nutrient_requirement="high",
        water_requirement=8,
        season=("spring", "summer"),
        growth_duration=85,
    )


@pytest.fixture
def lettuce():
    return Crop(
        id="lettuce",
        name="Lettuce",
        family="Asteraceae",
        nutrient_requirement="low",
        water_requirement=4,
        season=("spring", "autumn"),
        growth_duration=45,
    )


@pytest.fixture
def make_plan():
    def _make(crops, current=None, **kwargs):
        kwargs.setdefault("soil_test_results", SoilTestResults())
        return PlanContext(available_crops=tuple(crops), current_crop=current, **kwargs)

    return _make
