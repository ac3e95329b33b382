# msu_schedule/utils.py

from enum import Enum
from dataclasses import is_dataclass, asdict


def make_json_serializable(data):
    """
    Рекурсивно преобразует объекты, которые не сериализуются в JSON,
    в подходящий формат (строки, словари, списки).
    """
    # Дата-класс превращаем в словарь и снова пропускаем через эту же функцию,
    # чтобы обработать вложенные объекты
    if is_dataclass(data) and not isinstance(data, type):
        return make_json_serializable(asdict(data))

    if isinstance(data, dict):
        return {str(k): make_json_serializable(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [make_json_serializable(i) for i in data]
    if isinstance(data, Enum):
        return data.value

    return data
