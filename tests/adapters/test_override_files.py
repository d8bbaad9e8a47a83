from __future__ import annotations

import json
from pathlib import Path  # noqa: TC003

import pytest

from mhrdata.adapters.overrides import (
    MissingOverrideFileError,
    OverrideBaseModel,
    load_overrides,
    parse_overrides,
)
from mhrdata.config import ConfigurationError
from mhrdata.domain.model import (
    ArmorAttributes,
    ArmorStat,
    DecorationAttributes,
    EntityKind,
    SkillAttributes,
)


def _write(directory: Path, kind: EntityKind, payload: object) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / f"{kind}.json").write_text(json.dumps(payload), encoding="utf-8")


def test_load_armor_overrides(tmp_path: Path) -> None:
    _write(
        tmp_path,
        EntityKind.ARMOR,
        [
            {
                "id": "iron_helm",
                "rarity": 2,
                "stat": {
                    "defense": 20,
                    "fireRes": 1,
                    "waterRes": 2,
                    "iceRes": 3,
                    "elecRes": 4,
                    "dragonRes": -5,
                },
                "slots": [2, 1],
            },
            {"id": "bone_helm", "skills": {"attack_boost": {"level": 2}}},
        ],
    )

    iron, bone = load_overrides(tmp_path, EntityKind.ARMOR)

    assert iron.id == "iron_helm"
    assert iron.kind is EntityKind.ARMOR
    assert iron.attributes == ArmorAttributes(
        rarity=2,
        stat=ArmorStat(
            defense=20,
            fire_res=1,
            water_res=2,
            ice_res=3,
            elec_res=4,
            dragon_res=-5,
        ),
        slots=(2, 1),
    )
    assert iron.sub_attributes is None
    assert bone.attributes is None
    assert bone.sub_attributes == {"attack_boost": 2}


def test_partial_armor_attributes_are_rejected() -> None:
    payload = json.dumps([{"id": "iron_helm", "rarity": 2}])

    with pytest.raises(ConfigurationError, match="rarity, stat and slots together"):
        parse_overrides(payload, EntityKind.ARMOR)


def test_skill_overrides() -> None:
    payload = json.dumps([{"id": "guard", "maxLevel": 5}, {"id": "attack_boost"}])

    guard, attack = parse_overrides(payload, EntityKind.SKILL)

    assert guard.attributes == SkillAttributes(max_level=5)
    assert attack.attributes is None


def test_decoration_overrides() -> None:
    payload = json.dumps(
        [{"id": "guardian_jewel_2", "slotSize": 2, "skillLevel": 1, "skillId": "guard"}]
    )

    (override,) = parse_overrides(payload, EntityKind.DECORATION)

    assert override.attributes == DecorationAttributes(slot_size=2, skill_level=1)
    assert override.sub_attributes == {"guard": 1}


def test_unknown_keys_are_rejected() -> None:
    payload = json.dumps([{"id": "guard", "maxlevel": 5}])

    with pytest.raises(ConfigurationError, match="Invalid skill override data"):
        parse_overrides(payload, EntityKind.SKILL)


def test_invalid_json_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        parse_overrides("[{", EntityKind.SKILL)


def test_missing_override_file_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(MissingOverrideFileError, match="decoration"):
        load_overrides(tmp_path, EntityKind.DECORATION)


def test_empty_override_file_yields_no_overrides(tmp_path: Path) -> None:
    _write(tmp_path, EntityKind.SKILL, [])

    assert load_overrides(tmp_path, EntityKind.SKILL) == []


def test_duplicate_override_ids_are_rejected() -> None:
    payload = json.dumps(
        [
            {"id": "attack_boost", "maxLevel": 5},
            {"id": "guard", "maxLevel": 3},
            {"id": "attack_boost", "maxLevel": 9},
        ]
    )

    with pytest.raises(ConfigurationError, match="Duplicate skill override ids: attack_boost"):
        parse_overrides(payload, EntityKind.SKILL)


def test_override_base_model_is_abstract() -> None:
    with pytest.raises(TypeError, match="abstract"):
        OverrideBaseModel(id="guard")  # type: ignore[abstract]
