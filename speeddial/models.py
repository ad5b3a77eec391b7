"""Модели данных для справочников быстрого набора."""
from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True, order=True)
class Entry:
    """Запись быстрого набора: код и номер телефона."""
    code: str
    number: str


@dataclass
class Directory:
    """Справочник (группа) с фиксированной ёмкостью."""
    name: str
    capacity: int
    entries: Dict[str, str] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.entries)

    @property
    def is_full(self) -> bool:
        return len(self.entries) >= self.capacity

    def sorted_entries(self) -> List[Entry]:
        return [Entry(code, number) for code, number in sorted(self.entries.items())]


@dataclass(frozen=True)
class DirectoryStats:
    """Сводка по справочнику для списков: занято / всего."""
    name: str
    count: int = 0
    capacity: int = 0
