from __future__ import annotations

import pytest

from mhrdata.adapters.kiranico import (
    KiranicoParseError,
    parse_armor_page,
    parse_decoration_page,
    parse_skill_page,
)
from mhrdata.domain.model import ArmorStat, RawSkillLevel
from tests.helpers.pages import (
    armor_page,
    armor_row,
    decoration_page,
    decoration_row,
    skill_page,
    skill_row,
)


def test_parse_armor_page_reads_every_column() -> None:
    html = armor_page(
        armor_row(
            "Kamura Head Scarf",
            defense=1,
            resistances=(2, 0, 0, -1, 3),
            slots=(1, 1),
            skills=[("Wall Runner", 1), ("Hunger Resistance", 2)],
        ),
        armor_row("Leather Headgear"),
    )

    armors = parse_armor_page(html, rarity=1)

    assert [armor.name for armor in armors] == ["Kamura Head Scarf", "Leather Headgear"]
    scarf = armors[0]
    assert scarf.rarity == 1
    assert scarf.slots == (1, 1)
    assert scarf.stat == ArmorStat(
        defense=1,
        fire_res=2,
        water_res=0,
        ice_res=0,
        elec_res=-1,
        dragon_res=3,
    )
    assert scarf.skills == (
        RawSkillLevel(name="Wall Runner", level=1),
        RawSkillLevel(name="Hunger Resistance", level=2),
    )
    assert armors[1].skills == ()
    assert armors[1].slots == ()


def test_parse_armor_page_keeps_non_latin_names() -> None:
    html = armor_page(armor_row("철 투구", skills=[("공격", 3)]))

    armor = parse_armor_page(html, rarity=4)[0]

    assert armor.name == "철 투구"
    assert armor.rarity == 4
    assert armor.skills == (RawSkillLevel(name="공격", level=3),)


def test_parse_armor_page_rejects_short_rows() -> None:
    html = armor_page("<tr><td>only</td><td>two</td></tr>")

    with pytest.raises(KiranicoParseError, match="expected 7 cells"):
        parse_armor_page(html, rarity=1)


def test_parse_armor_page_rejects_unknown_slot_icon() -> None:
    row = armor_row("Iron Helm", slots=(1,)).replace("deco1.png", "unknown.svg")
    html = armor_page(row)

    with pytest.raises(KiranicoParseError, match="slot icon"):
        parse_armor_page(html, rarity=1)


def test_parse_skill_page_joins_paragraphs_and_finds_max_level() -> None:
    html = skill_page(
        skill_row("Attack Boost", "Increases attack power.", "", "Lv1 Attack +3", "Lv7 Attack +9"),
        skill_row("Guard", "Reduces knockbacks."),
    )

    skills = parse_skill_page(html)

    assert [skill.name for skill in skills] == ["Attack Boost", "Guard"]
    assert skills[0].text == "Increases attack power.\nLv1 Attack +3\nLv7 Attack +9"
    assert skills[0].max_level == 7
    assert skills[1].max_level is None


def test_parse_skill_page_requires_a_name() -> None:
    html = skill_page("<tr><td><a href='/skills/1'>Attack Boost</a></td><td><p>x</p></td></tr>")

    with pytest.raises(KiranicoParseError, match="missing name"):
        parse_skill_page(html)


def test_parse_decoration_page() -> None:
    html = decoration_page(
        decoration_row(
            "Guardian Jewel 2",
            skill="Guard",
            level=1,
            slot_size=2,
            description="Improves guard performance.",
        ),
    )

    decoration = parse_decoration_page(html)[0]

    assert decoration.name == "Guardian Jewel 2"
    assert decoration.skill_name == "Guard"
    assert decoration.skill_level == 1
    assert decoration.slot_size == 2
    assert decoration.text == "Improves guard performance."


def test_parse_decoration_page_requires_slot_icon() -> None:
    html = decoration_page(
        "<tr><td><a href='/decorations/1'>Attack Jewel 1</a></td>"
        "<td><a href='/skills/1'>Attack Boost</a> Lv1</td></tr>"
    )

    with pytest.raises(KiranicoParseError, match="missing slot icon"):
        parse_decoration_page(html)


def test_empty_table_yields_no_records() -> None:
    assert parse_skill_page("<html><body><p>maintenance</p></body></html>") == []
