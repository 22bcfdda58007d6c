# planner/equipment_advisor.py

from __future__ import annotations

from typing import List, Mapping, Sequence

from utils.errors import ValidationError

from . import catalog

MAX_SUGGESTIONS = 6


def suggest_exercises(
    equipment: Sequence[str],
    table: Mapping[str, Sequence[dict]] = catalog.EQUIPMENT_TABLE,
) -> List[dict]:
    """
    Collect suggestion records for each known equipment tag, in input order.

    Tags are not de-duplicated against each other. If nothing matched, the
    bodyweight list is used instead. At most MAX_SUGGESTIONS are returned.
    """
    if isinstance(equipment, (str, bytes)) or not isinstance(equipment, (list, tuple)):
        raise ValidationError("Invalid equipment list", ["equipment must be an array of strings"])
    if not all(isinstance(tag, str) for tag in equipment):
        raise ValidationError("Invalid equipment list", ["equipment must contain only strings"])

    suggested: List[dict] = []
    for tag in equipment:
        suggested.extend(table.get(tag, ()))

    if not suggested:
        suggested.extend(table[catalog.BODYWEIGHT_TAG])

    return [dict(record) for record in suggested[:MAX_SUGGESTIONS]]
