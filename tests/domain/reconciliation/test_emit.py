from __future__ import annotations

from mhrdata.domain.model import EntityKind
from mhrdata.domain.reconciliation import (
    assemble_entities,
    filter_complete,
    link_entities,
    to_payload,
)
from tests.helpers.records import (
    armor_store,
    make_armor,
    make_decoration,
    make_secondary,
    make_skill,
    make_store,
)


def test_filter_drops_unlinked_entities_and_keeps_order() -> None:
    store = armor_store(
        {
            "en": [make_armor("Iron Helm"), make_armor("Bone Helm"), make_armor("Alloy Helm")],
            "ko": [make_armor("철 투구"), make_armor("본 투구"), make_armor("합금 투구")],
        }
    )
    entities = assemble_entities(store).entities
    link_entities(
        entities,
        [make_secondary("합금 투구"), make_secondary("철 투구")],
        language="ko",
    )

    accepted, discarded = filter_complete(entities)

    assert [entity.id for entity in accepted] == ["iron_helm", "alloy_helm"]
    assert [entity.id for entity in discarded] == ["bone_helm"]


def test_filter_without_link_requirement_keeps_everything() -> None:
    store = make_store(EntityKind.SKILL, {"en": {None: [make_skill("Guard")]}})
    entities = assemble_entities(store).entities

    accepted, discarded = filter_complete(entities, require_link=False)

    assert accepted == entities
    assert discarded == []


def test_armor_payload_shape() -> None:
    store = armor_store(
        {
            "en": [make_armor("Iron Helm", defense=2, skills=[("Attack Boost", 1)], slots=(1,))],
            "ko": [make_armor("철 투구", defense=2, skills=[("공격", 1)], slots=(1,))],
        }
    )
    entities = assemble_entities(store).entities
    link_entities(
        entities, [make_secondary("철 투구", category="helm", variant="all")], language="ko"
    )

    payload = to_payload(entities[0])

    assert payload == {
        "id": "iron_helm",
        "part": "helm",
        "sexType": "all",
        "names": {"en": "Iron Helm", "ko": "철 투구"},
        "rarity": 1,
        "stat": {
            "defense": 2,
            "fireRes": 0,
            "waterRes": 0,
            "iceRes": 0,
            "elecRes": 0,
            "dragonRes": 0,
        },
        "skills": {"attack_boost": {"level": 1}},
        "slots": [1],
    }


def test_skill_payload_shape() -> None:
    store = make_store(
        EntityKind.SKILL,
        {
            "en": {None: [make_skill("Guard", text="Reduces knockbacks.", max_level=5)]},
            "ko": {None: [make_skill("가드", text="넉백을 줄인다.", max_level=5)]},
        },
    )

    payload = to_payload(assemble_entities(store).entities[0])

    assert payload == {
        "id": "guard",
        "names": {"en": "Guard", "ko": "가드"},
        "texts": {"en": "Reduces knockbacks.", "ko": "넉백을 줄인다."},
        "maxLevel": 5,
    }


def test_decoration_payload_shape() -> None:
    store = make_store(
        EntityKind.DECORATION,
        {
            "en": {
                None: [
                    make_decoration(
                        "Guardian Jewel 2",
                        skill_name="Guard",
                        skill_level=1,
                        slot_size=2,
                        text="Guard +1",
                    )
                ]
            },
            "ko": {
                None: [
                    make_decoration(
                        "철벽주 2",
                        skill_name="가드",
                        skill_level=1,
                        slot_size=2,
                        text="가드 +1",
                    )
                ]
            },
        },
    )

    payload = to_payload(assemble_entities(store).entities[0])

    assert payload == {
        "id": "guardian_jewel_2",
        "names": {"en": "Guardian Jewel 2", "ko": "철벽주 2"},
        "skillNames": {"en": "Guard", "ko": "가드"},
        "texts": {"en": "Guard +1", "ko": "가드 +1"},
        "skillId": "guard",
        "skillLevel": 1,
        "slotSize": 2,
    }
