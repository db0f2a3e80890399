import pytest

from ecoflood.domain.risk_model import (
    RiskLevel,
    SimulationInput,
    SoilAbsorption,
    classify_risk,
    compute_risk,
    recommendations,
    risk_color,
    simulate,
)

FORESTS = [0, 10, 25, 40, 55, 60, 75, 90, 100]
RAINS = [0, 20, 50, 100, 150, 220, 300]
SOILS = ["low", "medium", "high"]


def _grid():
    for forest in FORESTS:
        for rain in RAINS:
            for soil in SOILS:
                yield forest, rain, soil


def test_baseline_scenario_constants():
    r = compute_risk(60, 100, "medium")
    assert r.flood_probability == pytest.approx(39.3)
    assert r.water_runoff == pytest.approx(36.7)
    assert r.environmental_health == pytest.approx(57.0)
    assert r.risk_level is RiskLevel.MEDIUM
    assert r.factors.forest_impact == pytest.approx(16.0)
    assert r.factors.rainfall_impact == pytest.approx(13.3)
    assert r.factors.soil_impact == pytest.approx(10.0)


def test_worst_corner_is_critical():
    r = compute_risk(0, 300, "low")
    assert r.flood_probability == 100.0
    assert r.risk_level is RiskLevel.CRITICAL


def test_best_corner_is_low():
    r = compute_risk(100, 0, "high")
    assert r.flood_probability == 0.0
    assert r.environmental_health == 100.0
    assert r.risk_level is RiskLevel.LOW


def test_all_percentages_bounded():
    for forest, rain, soil in _grid():
        r = compute_risk(forest, rain, soil)
        for value in (r.flood_probability, r.water_runoff, r.environmental_health):
            assert 0.0 <= value <= 100.0, (forest, rain, soil)


def test_more_rain_never_lowers_flood_probability():
    for forest in FORESTS:
        for soil in SOILS:
            probs = [compute_risk(forest, rain, soil).flood_probability for rain in RAINS]
            assert probs == sorted(probs)


def test_more_forest_never_raises_flood_probability():
    for rain in RAINS:
        for soil in SOILS:
            probs = [compute_risk(forest, rain, soil).flood_probability for forest in FORESTS]
            assert probs == sorted(probs, reverse=True)


def test_better_soil_never_raises_flood_probability():
    for forest in FORESTS:
        for rain in RAINS:
            low, medium, high = (compute_risk(forest, rain, s).flood_probability for s in SOILS)
            assert low >= medium >= high


def test_out_of_range_inputs_are_clamped():
    assert compute_risk(-20, 999, "low") == compute_risk(0, 300, "low")
    assert compute_risk(150, -5, "high") == compute_risk(100, 0, "high")
    params = SimulationInput(-1, 1000, "medium")
    assert params.forest_cover_percent == 0.0
    assert params.rainfall_mm == 300.0


def test_soil_parsing_accepts_enum_and_loose_strings():
    assert compute_risk(60, 100, " MEDIUM ") == compute_risk(60, 100, SoilAbsorption.MEDIUM)
    with pytest.raises(ValueError):
        compute_risk(60, 100, "sandy")


def test_repeated_calls_are_identical():
    first = compute_risk(42.5, 187.3, "low")
    for _ in range(20):
        assert compute_risk(42.5, 187.3, "low") == first
    assert simulate(SimulationInput(42.5, 187.3, "low")).to_dict() == first.to_dict()


@pytest.mark.parametrize("p,level", [
    (0, "low"), (24.9, "low"), (25, "medium"), (49.9, "medium"),
    (50, "high"), (74.9, "high"), (75, "critical"), (100, "critical"),
    (-3, "low"), (130, "critical"),
])
def test_classify_risk_bands(p, level):
    assert classify_risk(p).value == level


def test_classify_risk_is_monotonic():
    order = list(RiskLevel)
    levels = [order.index(classify_risk(p / 10)) for p in range(0, 1001)]
    assert levels == sorted(levels)


def test_to_dict_uses_client_keys():
    d = compute_risk(60, 100, "medium").to_dict()
    assert set(d) == {"floodProbability", "waterRunoff", "environmentalHealth", "riskLevel", "factors"}
    assert set(d["factors"]) == {"forestImpact", "rainfallImpact", "soilImpact"}
    assert d["riskLevel"] == "medium"


def test_risk_color_per_level():
    colors = {risk_color(level) for level in RiskLevel}
    assert len(colors) == 4
    assert risk_color("critical") == "#dc2626"
    assert risk_color(RiskLevel.LOW) == "#10b981"


def test_recommendations_count_for_all_scenarios():
    for forest, rain, soil in _grid():
        recs = recommendations(compute_risk(forest, rain, soil))
        assert 1 <= len(recs) <= 3
        assert all(isinstance(r, str) and r for r in recs)


def test_recommendations_follow_dominant_factor():
    # forest dominates at baseline, medium risk: single piece of advice
    baseline = recommendations(compute_risk(60, 100, "medium"))
    assert len(baseline) == 1
    assert "reforestation" in baseline[0].lower()

    # rainfall dominates, soil second, high risk: all three rules fire
    rainy = recommendations(compute_risk(90, 300, "medium"))
    assert len(rainy) == 3
    assert "drainage" in rainy[0].lower()
    assert "soil absorption" in rainy[1].lower()
    assert "early-warning" in rainy[2].lower()


def test_recommendations_low_risk_and_critical():
    assert len(recommendations(compute_risk(100, 0, "high"))) == 1
    worst = recommendations(compute_risk(0, 300, "low"))
    assert "reforestation" in worst[0].lower()
    assert any("early-warning" in r for r in worst)


def test_recommendations_soil_dominant():
    r = compute_risk(80, 30, "low")
    assert (r.factors.forest_impact, r.factors.rainfall_impact, r.factors.soil_impact) == (8.0, 4.0, 20.0)
    assert r.flood_probability == pytest.approx(32.0)
    assert r.risk_level is RiskLevel.MEDIUM
    recs = recommendations(r)
    assert len(recs) == 1
    assert "soil health" in recs[0].lower()


def test_recommendations_ties_prefer_forest_then_rainfall():
    # forest, rainfall and soil impacts all 20
    three_way = recommendations(compute_risk(50, 150, "low"))
    assert "reforestation" in three_way[0].lower()

    # rainfall and soil both 20, no forest loss
    r = compute_risk(100, 150, "low")
    assert r.factors.rainfall_impact == r.factors.soil_impact == 20.0
    recs = recommendations(r)
    assert "drainage" in recs[0].lower()
    assert "soil absorption" in recs[1].lower()


def test_nan_inputs_take_the_lower_bound():
    assert compute_risk(float("nan"), 100, "medium") == compute_risk(0, 100, "medium")
    assert SimulationInput(60, float("nan"), "medium").rainfall_mm == 0.0
    assert classify_risk(float("nan")) is RiskLevel.LOW
    assert compute_risk(float("inf"), float("-inf"), "high") == compute_risk(100, 0, "high")


def test_lookup_tables_cover_every_category():
    from ecoflood.domain import risk_model

    assert set(risk_model.SOIL_IMPACT) == set(SoilAbsorption)
    assert set(risk_model.SOIL_DEGRADATION) == set(SoilAbsorption)
    assert set(risk_model.RISK_COLORS) == set(RiskLevel)
