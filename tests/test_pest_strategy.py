from rotation_engine.models import Crop
from rotation_engine.pest_strategy import PestManagementStrategy, classify_pest_score


def test_different_family_beats_pest_prone_repeat(corn, make_plan):
    current = Crop(id="pepper", name="Pepper", family="Solanaceae", nutrient_requirement="high")
    tomato = Crop(id="tomato", name="Tomato", family="Solanaceae", nutrient_requirement="high")
    grain = Crop(id="corn", name="Corn", family="Poaceae", nutrient_requirement="medium")
    plan = make_plan([tomato, grain], current, pest_history=True)

    result = {rec.crop.name: rec for rec in PestManagementStrategy().calculate_rotation(plan)}

    assert result["Corn"].score > result["Tomato"].score
    assert result["Corn"].score == 15
    assert result["Corn"].reason == "Excellent pest cycle disruption"
    assert result["Tomato"].score == 0
    assert result["Tomato"].reason == "Consider alternative for better pest control"


def test_scores_never_negative(make_plan):
    current = Crop(name="Cabbage", family="Brassicaceae", nutrient_requirement="high")
    candidates = [
        Crop(name="Kale", family="Brassicaceae", nutrient_requirement="high"),
        Crop(name="Broccoli", family="Brassicaceae", nutrient_requirement="medium"),
        Crop(name="Radish", family="Brassicaceae", nutrient_requirement="low"),
    ]
    result = PestManagementStrategy().calculate_rotation(
        make_plan(candidates, current, pest_history=True)
    )
    assert all(rec.score >= 0 for rec in result)


def test_without_current_crop(tomato, make_plan):
    result = PestManagementStrategy().calculate_rotation(make_plan([tomato], pest_history=True))
    assert result[0].score == 6
    assert result[0].reason == "Good pest management choice"


def test_growth_habit_change(tomato, soybean):
    assert PestManagementStrategy.growth_habit_change(None, tomato) == 0
    assert PestManagementStrategy.growth_habit_change(tomato, soybean) == 2
    assert PestManagementStrategy.growth_habit_change(tomato, tomato) == 0


def test_classify_pest_score():
    assert classify_pest_score(8) == "Excellent pest cycle disruption"
    assert classify_pest_score(7) == "Good pest management choice"
    assert classify_pest_score(4) == "Moderate pest control"
    assert classify_pest_score(3.5) == "Consider alternative for better pest control"
