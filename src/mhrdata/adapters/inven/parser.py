"""HTML parser for the Inven armor list (secondary source).

Inven publishes one flat Korean table with the armor part and sex type that the
primary source does not expose. Labels are mapped to the canonical enum values;
rows with unknown labels are skipped because they cannot be linked anyway.
"""

from __future__ import annotations

import logging
from typing import Final

from bs4 import BeautifulSoup

from mhrdata.domain.model import ArmorPart, SecondaryRecord, SexType

log = logging.getLogger(__name__)

INVEN_LANGUAGE: Final[str] = "ko"

PART_LABELS: Final[dict[str, ArmorPart]] = {
    "머리": ArmorPart.HELM,
    "몸통": ArmorPart.TORSO,
    "몸": ArmorPart.TORSO,
    "팔": ArmorPart.ARM,
    "허리": ArmorPart.WAIST,
    "다리": ArmorPart.FEET,
}

SEX_LABELS: Final[dict[str, SexType]] = {
    "공용": SexType.ALL,
    "남": SexType.MALE,
    "남성": SexType.MALE,
    "여": SexType.FEMALE,
    "여성": SexType.FEMALE,
}


def parse_armor_list(html: str, *, language: str = INVEN_LANGUAGE) -> list[SecondaryRecord]:
    soup = BeautifulSoup(html, "html.parser")
    records: list[SecondaryRecord] = []
    for index, row in enumerate(soup.select("table tbody tr")):
        cells = row.find_all("td", recursive=False)
        if len(cells) < 3:  # noqa: PLR2004
            log.debug("Skipping Inven row %s with %s cells", index, len(cells))
            continue
        name = cells[0].get_text(strip=True)
        part_label = cells[1].get_text(strip=True)
        sex_label = cells[2].get_text(strip=True)

        part = PART_LABELS.get(part_label)
        sex = SEX_LABELS.get(sex_label)
        if not name or part is None or sex is None:
            log.warning(
                "Skipping Inven row %s: name=%r part=%r sex=%r",
                index,
                name,
                part_label,
                sex_label,
            )
            continue
        records.append(
            SecondaryRecord(name=name, category=str(part), variant=str(sex), language=language)
        )

    log.debug("Parsed %s Inven armor rows", len(records))
    return records
