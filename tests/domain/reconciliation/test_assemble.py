from __future__ import annotations

import logging

import pytest

from mhrdata.domain.model import (
    ArmorAttributes,
    DecorationAttributes,
    EntityKind,
    SkillAttributes,
    Source,
)
from mhrdata.domain.reconciliation import (
    AlignmentMismatchError,
    EmptyIdentifierError,
    EmptyNameError,
    GroupLengthMismatch,
    assemble_entities,
)
from tests.helpers.records import (
    armor_store,
    make_armor,
    make_decoration,
    make_skill,
    make_store,
)


def test_assemble_builds_one_entity_per_pivot_record() -> None:
    store = armor_store(
        {
            "en": [make_armor("Iron Helm", slots=(1,)), make_armor("Bone Helm")],
            "ja": [
                make_armor("アイアンヘルム", slots=(1,)),
                make_armor("ボーンヘルム"),
            ],
            "ko": [make_armor("철 투구", slots=(1,)), make_armor("본 투구")],
        }
    )

    result = assemble_entities(store)

    assert [entity.id for entity in result.entities] == ["iron_helm", "bone_helm"]
    iron = result.entities[0]
    assert iron.names == {"en": "Iron Helm", "ja": "アイアンヘルム", "ko": "철 투구"}
    assert iron.kind is EntityKind.ARMOR
    assert iron.group == 1
    assert isinstance(iron.attributes, ArmorAttributes)
    assert iron.attributes.slots == (1,)
    assert iron.category is None
    assert iron.variant is None
    assert iron.provenance.sources == {Source.KIRANICO}
    assert result.duplicate_ids == {}


def test_every_entity_carries_one_non_empty_name_per_language() -> None:
    languages = ("en", "ja", "ko", "de")
    store = armor_store(
        {
            language: [make_armor(f"{language} helm {index}") for index in range(3)]
            for language in languages
        }
    )

    result = assemble_entities(store)

    for entity in result.entities:
        assert set(entity.names) == set(languages)
        assert all(name for name in entity.names.values())


def test_assemble_walks_groups_in_ascending_order() -> None:
    store = make_store(
        EntityKind.ARMOR,
        {
            "en": {2: [make_armor("Alloy Helm", rarity=2)], 1: [make_armor("Iron Helm")]},
            "ko": {2: [make_armor("합금 투구", rarity=2)], 1: [make_armor("철 투구")]},
        },
    )

    result = assemble_entities(store)

    assert [(entity.group, entity.id) for entity in result.entities] == [
        (1, "iron_helm"),
        (2, "alloy_helm"),
    ]


def test_sub_attribute_ids_come_from_pivot_names() -> None:
    store = armor_store(
        {
            "en": [
                make_armor("Kamura Head Scarf", skills=[("Attack Boost", 1), ("Wall Runner", 2)])
            ],
            "ko": [make_armor("카무라 두건", skills=[("공격", 1), ("벽달리기", 2)])],
        }
    )

    entity = assemble_entities(store).entities[0]

    assert entity.sub_attributes == {"attack_boost": 1, "wall_runner": 2}


def test_colliding_sub_attribute_ids_keep_last_value_and_are_reported(
    caplog: pytest.LogCaptureFixture,
) -> None:
    store = armor_store(
        {
            "en": [make_armor("Odd Helm", skills=[("Attack Boost", 1), ("attack  boost", 3)])],
            "ko": [make_armor("이상한 투구", skills=[("공격", 1), ("공격", 3)])],
        }
    )

    with caplog.at_level(logging.WARNING):
        result = assemble_entities(store)

    assert result.entities[0].sub_attributes == {"attack_boost": 3}
    assert len(result.collisions) == 1
    collision = result.collisions[0]
    assert collision.entity_id == "odd_helm"
    assert collision.sub_id == "attack_boost"
    assert collision.names == ("Attack Boost", "attack  boost")
    assert collision.kept == 3
    assert "collides" in caplog.text


def test_colliding_pivot_names_share_an_id(caplog: pytest.LogCaptureFixture) -> None:
    store = armor_store(
        {
            "en": [make_armor("Iron Helm"), make_armor("Iron  Helm")],
            "ko": [make_armor("철 투구"), make_armor("철 투구 2")],
        }
    )

    with caplog.at_level(logging.WARNING):
        result = assemble_entities(store)

    assert [entity.id for entity in result.entities] == ["iron_helm", "iron_helm"]
    assert result.duplicate_ids == {"iron_helm": 2}
    assert "Duplicate armor id 'iron_helm'" in caplog.text


def test_short_peer_group_aborts_assembly() -> None:
    store = armor_store(
        {
            "en": [make_armor("Iron Helm"), make_armor("Bone Helm")],
            "ko": [make_armor("철 투구")],
        }
    )

    with pytest.raises(GroupLengthMismatch):
        assemble_entities(store)


def test_empty_pivot_name_aborts_assembly() -> None:
    store = armor_store({"en": [make_armor("   ")], "ko": [make_armor("철 투구")]})

    with pytest.raises(EmptyIdentifierError) as excinfo:
        assemble_entities(store)

    assert excinfo.value.index == 0


def test_empty_peer_name_aborts_assembly() -> None:
    store = armor_store({"en": [make_armor("Iron Helm")], "ko": [make_armor("")]})

    with pytest.raises(EmptyNameError) as excinfo:
        assemble_entities(store)

    assert excinfo.value.language == "ko"


def test_skills_carry_texts_and_max_level() -> None:
    store = make_store(
        EntityKind.SKILL,
        {
            "en": {None: [make_skill("Attack Boost", text="Increases attack.", max_level=7)]},
            "ko": {None: [make_skill("공격", text="공격력이 상승한다.", max_level=7)]},
        },
    )

    entity = assemble_entities(store).entities[0]

    assert entity.id == "attack_boost"
    assert entity.group is None
    assert entity.attributes == SkillAttributes(max_level=7)
    assert entity.texts == {"en": "Increases attack.", "ko": "공격력이 상승한다."}
    assert entity.sub_attributes == {}


def test_decorations_carry_skill_names_per_language() -> None:
    store = make_store(
        EntityKind.DECORATION,
        {
            "en": {None: [make_decoration("Attack Jewel 1", skill_name="Attack Boost")]},
            "ko": {None: [make_decoration("공격주 1", skill_name="공격")]},
        },
    )

    entity = assemble_entities(store).entities[0]

    assert entity.id == "attack_jewel_1"
    assert entity.attributes == DecorationAttributes(slot_size=1, skill_level=1)
    assert entity.sub_attributes == {"attack_boost": 1}
    assert entity.sub_names == {"en": "Attack Boost", "ko": "공격"}


def test_alignment_check_rejects_shifted_rows() -> None:
    store = armor_store(
        {
            "en": [make_armor("Iron Helm", defense=10), make_armor("Bone Helm", defense=12)],
            "ko": [make_armor("본 투구", defense=12), make_armor("철 투구", defense=10)],
        }
    )

    assert len(assemble_entities(store).entities) == 2
    with pytest.raises(AlignmentMismatchError) as excinfo:
        assemble_entities(store, check_alignment=True)

    assert excinfo.value.language == "ko"
    assert excinfo.value.index == 0


def test_alignment_check_ignores_skills() -> None:
    store = make_store(
        EntityKind.SKILL,
        {
            "en": {None: [make_skill("Attack Boost", max_level=7)]},
            "ko": {None: [make_skill("공격", max_level=3)]},
        },
    )

    result = assemble_entities(store, check_alignment=True)

    assert len(result.entities) == 1
