"""
Unit tests for scenario pack loading and validation.

Tests cover:
- The bundled starter pack
- Schema failures (missing fields, bad enums, bad game state)
- Duplicate ids
- Non-fatal quality warnings

Run: pytest tests/unit/test_scenario_catalog.py -v
"""

import json

import pytest

from adaptive_trainer.config import STARTER_PACK_PATH
from adaptive_trainer.drill.scenario_catalog import (
    Level,
    RunnerBase,
    ScenarioCatalog,
    Sport,
    check_pack_quality,
    load_scenario_pack,
    parse_scenario_pack,
)
from adaptive_trainer.exceptions import ScenarioPackError


class TestStarterPack:
    """The bundled pack must always load cleanly."""

    def test_loads(self):
        catalog = load_scenario_pack(STARTER_PACK_PATH)

        assert len(catalog) >= 10
        assert catalog.name == "Starter Pack"

    def test_covers_both_sports(self):
        stats = load_scenario_pack(STARTER_PACK_PATH).get_stats()
        assert set(stats["by_sport"]) == {"baseball", "softball"}

    def test_has_no_quality_warnings(self):
        assert check_pack_quality(load_scenario_pack(STARTER_PACK_PATH)) == []


class TestParseScenarioPack:
    """Test schema validation."""

    def test_pack_object(self, raw_scenario):
        catalog = parse_scenario_pack({
            "name": "Mini",
            "version": "2",
            "scenarios": [raw_scenario("a"), raw_scenario("b", sport="softball", level="8u")],
        })

        assert catalog.name == "Mini"
        assert catalog.version == "2"
        assert catalog.ids == ["a", "b"]
        assert catalog.get("b").sport is Sport.SOFTBALL
        assert catalog.get("b").level is Level.U8

    def test_bare_list(self, raw_scenario):
        catalog = parse_scenario_pack([raw_scenario("a")])
        assert catalog.name == "unnamed"
        assert "a" in catalog

    def test_unknown_fields_ignored(self, raw_scenario):
        catalog = parse_scenario_pack([raw_scenario("a", difficulty="hard")])
        assert len(catalog) == 1

    def test_missing_best_coaching_cue(self, raw_scenario):
        data = raw_scenario("a", best={"label": "Hold", "description": "Hold the runner."})

        with pytest.raises(ScenarioPackError) as exc_info:
            parse_scenario_pack([data], source="test.json")

        assert "test.json" in str(exc_info.value)
        assert any("coaching_cue" in p for p in exc_info.value.problems)

    def test_unknown_sport(self, raw_scenario):
        with pytest.raises(ScenarioPackError) as exc_info:
            parse_scenario_pack([raw_scenario("a", sport="cricket")])
        assert any("sport" in p for p in exc_info.value.problems)

    def test_missing_option(self, raw_scenario):
        data = raw_scenario("a")
        del data["bad"]
        with pytest.raises(ScenarioPackError):
            parse_scenario_pack([data])

    @pytest.mark.parametrize("outs", [-1, 3])
    def test_outs_out_of_range(self, raw_scenario, outs):
        with pytest.raises(ScenarioPackError):
            parse_scenario_pack([raw_scenario("a", outs=outs)])

    def test_duplicate_runner(self, raw_scenario):
        with pytest.raises(ScenarioPackError):
            parse_scenario_pack([raw_scenario("a", runners=["first", "first"])])

    def test_duplicate_ids(self, raw_scenario):
        with pytest.raises(ScenarioPackError) as exc_info:
            parse_scenario_pack([raw_scenario("a"), raw_scenario("b"), raw_scenario("a")])
        assert exc_info.value.problems == ["duplicate id: a"]

    def test_not_a_pack(self):
        with pytest.raises(ScenarioPackError):
            parse_scenario_pack("scenarios")


class TestLoadScenarioPack:
    """Test file-level failures."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(ScenarioPackError, match="Cannot read"):
            load_scenario_pack(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ScenarioPackError, match="not valid JSON"):
            load_scenario_pack(path)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"name": "Caf\xe9", "scenarios": []}')

        with pytest.raises(ScenarioPackError, match="not valid JSON"):
            load_scenario_pack(path)

    def test_round_trip_from_disk(self, tmp_path, raw_scenario):
        path = tmp_path / "pack.json"
        path.write_text(json.dumps({"scenarios": [raw_scenario("a")]}), encoding="utf-8")

        assert load_scenario_pack(path).ids == ["a"]


class TestScenarioRecord:
    """Test derived scenario properties."""

    def test_situation_bases_empty(self, make_scenario):
        scenario = make_scenario("a", outs=0, runners=[])
        assert scenario.situation == "0 outs, bases empty"

    def test_situation_one_runner(self, make_scenario):
        scenario = make_scenario("a", outs=1, runners=["second"])
        assert scenario.situation == "1 out, runner on second"

    def test_situation_corners(self, make_scenario):
        scenario = make_scenario("a", outs=2, runners=["first", "third"])
        assert scenario.situation == "2 outs, runners on first and third"
        assert scenario.runners == (RunnerBase.FIRST, RunnerBase.THIRD)


class TestCatalog:
    """Test ScenarioCatalog behavior."""

    def test_iteration_keeps_order(self, catalog):
        assert [s.id for s in catalog] == ["s1", "s2", "s3"]

    def test_get_missing(self, catalog):
        assert catalog.get("missing") is None

    def test_empty_catalog(self):
        catalog = ScenarioCatalog([])
        assert len(catalog) == 0
        assert catalog.get_stats()["total"] == 0


class TestCheckPackQuality:
    """Test non-fatal authoring warnings."""

    def test_short_description(self, make_scenario):
        catalog = ScenarioCatalog([
            make_scenario("a", description="Short."),
            make_scenario("b"),
            make_scenario("c", sport="softball"),
            make_scenario("d", sport="softball"),
        ])
        assert check_pack_quality(catalog) == ["a: description is missing or very short"]

    def test_shared_labels(self, make_scenario):
        scenario = make_scenario(
            "a",
            ok={"label": "Hold at second"},
        )
        warnings = check_pack_quality(ScenarioCatalog([scenario]))
        assert "a: answer options share a label" in warnings

    def test_single_scenario_category_and_missing_sport(self, make_scenario):
        catalog = ScenarioCatalog([
            make_scenario("a", category="bunt-defense"),
            make_scenario("b", category="baserunning"),
            make_scenario("c", category="baserunning"),
        ])
        warnings = check_pack_quality(catalog)

        assert "category 'bunt-defense' has only one scenario" in warnings
        assert "no softball scenarios" in warnings
        assert "category 'baserunning' has only one scenario" not in warnings

    def test_missing_question(self, make_scenario):
        catalog = ScenarioCatalog([make_scenario("a", question="  ")])
        assert "a: no question text" in check_pack_quality(catalog)
