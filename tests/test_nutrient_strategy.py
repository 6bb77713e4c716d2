from rotation_engine.models import CompatibilityEntry, Crop, SoilTestResults
from rotation_engine.nutrient_strategy import NutrientBasedStrategy, analyze_soil


def test_nitrogen_fixer_ranks_first(corn, soybean, make_plan):
    current = Crop(id="maize", name="Maize", family="Poaceae", nutrient_requirement="high")
    plan = make_plan(
        [soybean, corn],
        current,
        soil_test_results=SoilTestResults(nitrogen=20, phosphorus=15),
    )

    result = NutrientBasedStrategy().calculate_rotation(plan)

    assert [rec.crop.name for rec in result] == ["Soybean", "Corn"]
    assert result[0].score == 5
    assert "Nitrogen fixing crop needed" in result[0].reason
    assert result[0].reason == "Nitrogen fixing crop needed, Good nutrient match"
    assert result[1].score == -3
    assert result[1].reason == "Moderate match"


def test_analyze_soil_thresholds():
    flags = analyze_soil(SoilTestResults(nitrogen=29.9, phosphorus=20, potassium=10, organic_matter=2))
    assert flags.nitrogen
    assert not flags.phosphorus
    assert flags.potassium
    assert flags.organic_matter


def test_missing_readings_are_not_deficient(soybean, make_plan):
    assert analyze_soil(SoilTestResults()) == analyze_soil(None)
    assert not analyze_soil(SoilTestResults()).nitrogen

    result = NutrientBasedStrategy().calculate_rotation(make_plan([soybean]))
    assert result[0].score == 0
    assert result[0].reason == "Moderate match"


def test_compatibility_entry_is_centred(corn, make_plan):
    previous = Crop(id=2, name="Soybean", family="Fabaceae")
    candidate = Crop(
        id=1,
        name="Corn",
        family="Poaceae",
        nutrient_requirement="high",
        compatibility=(CompatibilityEntry(crop_id="2", score=8),),
    )
    result = NutrientBasedStrategy().calculate_rotation(make_plan([candidate], previous))
    assert result[0].score == 3
    assert result[0].reason == "Good nutrient match"

    # Without a current crop no entry applies
    assert NutrientBasedStrategy.compatibility_bonus(candidate, None) == 0


def test_empty_pool_returns_empty_list(make_plan):
    assert NutrientBasedStrategy().calculate_rotation(make_plan([])) == []


def test_name_and_description():
    strategy = NutrientBasedStrategy()
    assert strategy.name() == "NutrientBasedStrategy"
    assert "nutrient" in strategy.description()
