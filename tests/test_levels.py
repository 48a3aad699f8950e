"""Tests for level templates and the level library."""

import dataclasses
import json

import pytest

from coin_platformer.entities import Platform, Collectible
from coin_platformer.levels import (
    LEVELS, LevelLibrary, LevelTemplate, LevelFormatError, default_library,
)


class TestBuiltinLevels:
    def test_two_levels(self):
        library = default_library()
        assert library.numbers == [1, 2]
        assert library.get(1).name == "The Beginning"
        assert library.get(2).name == "The Challenge"

    def test_missing_level_is_none(self):
        library = default_library()
        assert library.get(3) is None
        assert library.get(0) is None
        assert 3 not in library

    def test_enemies_anchor_at_spawn(self):
        for template in LEVELS.values():
            for enemy in template.enemies:
                assert enemy.start_x == enemy.x


class TestInstantiate:
    def test_returns_deep_copies(self):
        template = LEVELS[1]
        platforms, coins, enemies = template.instantiate()
        coins[0].active = False
        enemies[0].patrol()
        platforms.clear()

        assert template.collectibles[0].active
        assert template.enemies[0].x == 400
        assert len(template.platforms) == 4

    def test_each_call_is_fresh(self):
        _, first, _ = LEVELS[2].instantiate()
        _, second, _ = LEVELS[2].instantiate()
        assert first == second
        assert first[0] is not second[0]


class TestJsonLevels:
    def test_save_and_load(self, tmp_path):
        path = tmp_path / "levels.json"
        default_library().save(path)

        loaded = LevelLibrary.from_json(path)
        assert loaded.numbers == [1, 2]
        assert loaded.get(2).platforms == LEVELS[2].platforms
        assert loaded.get(2).enemies == LEVELS[2].enemies
        assert loaded.get(1).background == "#87CEEB"

    def test_minimal_entities_get_defaults(self):
        library = LevelLibrary.from_dict({"levels": {"1": {
            "platforms": [{"x": 0, "y": 550, "width": 800, "height": 50}],
            "collectibles": [{"x": 10, "y": 20}],
            "enemies": [{"x": 300, "y": 500, "speed_x": 2, "range": 50}],
        }}})
        template = library.get(1)
        assert template.name == "Level 1"
        assert template.platforms[0].type == "solid"
        assert template.collectibles[0].width == 20
        assert template.collectibles[0].active
        assert template.enemies[0].start_x == 300

    def test_missing_levels_table(self):
        with pytest.raises(LevelFormatError):
            LevelLibrary.from_dict({"version": 1})

    def test_non_integer_key(self):
        with pytest.raises(LevelFormatError):
            LevelLibrary.from_dict({"levels": {"first": {}}})

    def test_numbering_must_be_contiguous(self):
        with pytest.raises(LevelFormatError):
            LevelLibrary.from_dict({"levels": {"1": {}, "3": {}}})

    def test_platform_missing_field(self):
        with pytest.raises(LevelFormatError):
            LevelTemplate.from_dict(1, {"platforms": [{"x": 0, "y": 0, "width": 10}]})

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(LevelFormatError):
            LevelLibrary.from_json(path)

    def test_format_error_is_value_error(self):
        assert issubclass(LevelFormatError, ValueError)

    def test_to_dict_layout(self):
        data = default_library().to_dict()
        assert data["version"] == 1
        assert set(data["levels"]) == {"1", "2"}
        json.dumps(data)

    @pytest.mark.parametrize("kind, entity, field", [
        ("platforms", {"x": "0", "y": 550, "width": 800, "height": 50}, "x"),
        ("platforms", {"x": 0, "y": 550, "width": True, "height": 50}, "width"),
        ("enemies", {"x": 300, "y": 500, "speed_x": "2", "range": 50}, "speed_x"),
        ("enemies", {"x": 300, "y": 500, "speed_x": 2, "range": None}, "range"),
        ("enemies", {"x": 300, "y": 500, "speed_x": 2, "range": 50, "start_x": "300"}, "start_x"),
        ("collectibles", {"x": 10, "y": 20, "active": "false"}, "active"),
    ])
    def test_wrong_field_type_rejected_at_load(self, kind, entity, field):
        with pytest.raises(LevelFormatError) as excinfo:
            LevelLibrary.from_dict({"levels": {"1": {kind: [entity]}}})
        message = str(excinfo.value)
        assert "Level 1" in message
        assert f"'{field}'" in message

    def test_entity_must_be_an_object(self):
        with pytest.raises(LevelFormatError):
            LevelTemplate.from_dict(1, {"platforms": [[0, 550, 800, 50]]})

    def test_entity_table_must_be_a_list(self):
        with pytest.raises(LevelFormatError):
            LevelTemplate.from_dict(1, {"enemies": {"x": 0}})

    def test_inactive_coin_loads_inactive(self):
        template = LevelTemplate.from_dict(1, {"collectibles": [{"x": 10, "y": 20, "active": False}]})
        assert template.collectibles[0].active is False

    def test_camel_case_enemy_fields(self):
        template = LevelTemplate.from_dict(1, {"enemies": [
            {"x": 400, "y": 360, "width": 30, "height": 30, "color": "#F44336",
             "speedX": 0.8, "range": 100, "startX": 400},
        ]})
        assert template.enemies == LEVELS[1].enemies[:1]


class TestTemplateOwnership:
    def test_template_copies_caller_entities(self):
        platform = Platform(0, 550, 800, 50)
        coin = Collectible(x=10, y=20, width=20, height=20)
        template = LevelTemplate(
            number=1, name="Owned", platforms=(platform,), collectibles=(coin,), enemies=(),
        )
        platform.x = 999
        coin.active = False

        assert template.platforms[0].x == 0
        assert template.collectibles[0].active

    def test_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            LEVELS[1].name = "Renamed"
