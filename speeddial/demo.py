"""Демонстрационные записи для пустого реестра."""
from typing import List, Tuple

from .registry import SpeedDialRegistry

DEMO_ENTRIES: List[Tuple[str, str, str]] = [
    ('Directory 1', 'home', '123-456-7890'),
    ('Directory 1', 'work', '987-654-3210'),
    ('Directory 1', 'mom', '555-111-2222'),
    ('Directory 2', 'friend1', '111-222-3333'),
    ('Directory 2', 'friend2', '444-555-6666'),
    ('Directory 5', 'emergency', '911'),
]


def seed_demo(registry: SpeedDialRegistry) -> int:
    """Добавляет демо-записи, возвращает число принятых. Отказы не считаются ошибкой."""
    registry.initialize()
    return sum(1 for directory, code, number in DEMO_ENTRIES
               if registry.add_number(directory, code, number))
