# msu_schedule/services/core/free_rooms.py

import logging
from typing import Dict, Set

from msu_schedule.services.parsers.common_structs import FreeRoomsData, GroupSchedule
from msu_schedule.services.utils.lookup_tables import LookupTables, DEFAULT_TABLES


log = logging.getLogger(__name__)


def occupied_rooms(groups: Dict[str, GroupSchedule], day_index: int, lesson_index: int) -> Set[str]:
    """Все аудитории, занятые какой-либо группой в слот (день, пара)."""
    occupied = set()
    for group in groups.values():
        if day_index >= len(group.days):
            continue
        lessons = group.days[day_index].lessons
        if lesson_index < len(lessons) and lessons[lesson_index] is not None:
            occupied.update(lessons[lesson_index].rooms)
    return occupied


def calculate_free_rooms(groups: Dict[str, GroupSchedule], tables: LookupTables = DEFAULT_TABLES) -> FreeRoomsData:
    """
    Строит сетку свободных аудиторий: день ('1'..'7') -> пара ('1'..'5') -> список.
    Порядок аудиторий в списке - как в справочнике. last_update проставляет вызывающий код.
    """
    schedule = {}
    for day_index in range(tables.days_per_week):
        pairs = {}
        for lesson_index in range(tables.periods_per_day):
            occupied = occupied_rooms(groups, day_index, lesson_index)
            pairs[str(lesson_index + 1)] = [room for room in tables.rooms if room not in occupied]
        schedule[str(day_index + 1)] = pairs

    log.info(f"Свободные аудитории рассчитаны по {len(groups)} группам.")
    return FreeRoomsData(schedule=schedule)
