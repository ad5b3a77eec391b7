"""Реестр справочников быстрого набора.

Реестр ничего не печатает и не пишет в лог: каждая операция возвращает
Outcome, а сообщение для пользователя формирует вызывающая сторона.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from .config import RegistrySettings
from .models import Directory, DirectoryStats, Entry


class Failure(str, Enum):
    NOT_INITIALIZED = 'not_initialized'
    DIRECTORY_NOT_FOUND = 'directory_not_found'
    DIRECTORY_FULL = 'directory_full'
    DUPLICATE_CODE = 'duplicate_code'
    CODE_NOT_FOUND = 'code_not_found'
    DIRECTORY_EXISTS = 'directory_exists'
    REGISTRY_FULL = 'registry_full'
    INVALID_CAPACITY = 'invalid_capacity'


class InitState(str, Enum):
    INITIALIZED = 'initialized'
    ALREADY_INITIALIZED = 'already_initialized'


@dataclass(frozen=True)
class Outcome:
    """Результат операции реестра. bool(outcome) == outcome.ok."""
    ok: bool
    value: Any = None
    failure: Optional[Failure] = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, value: Any = None) -> 'Outcome':
        return cls(True, value)

    @classmethod
    def fail(cls, failure: Failure) -> 'Outcome':
        return cls(False, None, failure)


@dataclass(frozen=True)
class RegistryEvent:
    kind: str
    directory: str
    code: Optional[str] = None


EVENT_ADDED = 'added'
EVENT_REMOVED = 'removed'
EVENT_DIRECTORY_ADDED = 'directory_added'

Observer = Callable[[RegistryEvent], None]


class SpeedDialRegistry:
    """Двухуровневое хранилище: справочник -> код -> номер."""

    def __init__(self, settings: Optional[RegistrySettings] = None):
        self.settings = settings or RegistrySettings()
        self._directories: Dict[str, Directory] = {}
        self._observers: List[Observer] = []
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> InitState:
        """Создаёт справочники "Directory 1".."Directory N". Повторный вызов ничего не меняет."""
        if self._initialized:
            return InitState.ALREADY_INITIALIZED
        names = self.settings.directory_names()
        capacities = self.settings.directory_capacities()
        for name, capacity in zip(names, capacities):
            self._directories[name] = Directory(name=name, capacity=capacity)
        self._initialized = True
        return InitState.INITIALIZED

    def subscribe(self, observer: Observer) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self, event: RegistryEvent) -> None:
        for observer in list(self._observers):
            observer(event)

    def _lookup(self, directory_name: str):
        if not self._initialized:
            return None, Outcome.fail(Failure.NOT_INITIALIZED)
        directory = self._directories.get(directory_name)
        if directory is None:
            return None, Outcome.fail(Failure.DIRECTORY_NOT_FOUND)
        return directory, None

    @staticmethod
    def _truncate(value: str, limit: Optional[int]) -> str:
        if limit is None:
            return value
        return value[:limit]

    def _key(self, code: str) -> str:
        """Код в том виде, в каком он хранится в справочнике."""
        return self._truncate(code, self.settings.max_code_length)

    def add_directory(self, name: str, capacity: Optional[int] = None) -> Outcome:
        if not self._initialized:
            return Outcome.fail(Failure.NOT_INITIALIZED)
        if name in self._directories:
            return Outcome.fail(Failure.DIRECTORY_EXISTS)
        limit = self.settings.max_directories
        if limit and len(self._directories) >= limit:
            return Outcome.fail(Failure.REGISTRY_FULL)
        if capacity is None:
            capacity = self.settings.default_capacity
        if capacity <= 0:
            return Outcome.fail(Failure.INVALID_CAPACITY)
        self._directories[name] = Directory(name=name, capacity=capacity)
        self._notify(RegistryEvent(EVENT_DIRECTORY_ADDED, name))
        return Outcome.success(capacity)

    def add_number(self, directory_name: str, code: str, number: str) -> Outcome:
        directory, error = self._lookup(directory_name)
        if error is not None:
            return error
        if directory.is_full:
            return Outcome.fail(Failure.DIRECTORY_FULL)
        code = self._key(code)
        number = self._truncate(number, self.settings.max_number_length)
        if code in directory.entries:
            return Outcome.fail(Failure.DUPLICATE_CODE)
        directory.entries[code] = number
        self._notify(RegistryEvent(EVENT_ADDED, directory_name, code))
        return Outcome.success(Entry(code, number))

    def get_phone_number(self, directory_name: str, code: str) -> Outcome:
        directory, error = self._lookup(directory_name)
        if error is not None:
            return error
        code = self._key(code)
        number = directory.entries.get(code)
        if number is None:
            return Outcome.fail(Failure.CODE_NOT_FOUND)
        return Outcome.success(number)

    def remove_number(self, directory_name: str, code: str) -> Outcome:
        directory, error = self._lookup(directory_name)
        if error is not None:
            return error
        code = self._key(code)
        if code not in directory.entries:
            return Outcome.fail(Failure.CODE_NOT_FOUND)
        number = directory.entries.pop(code)
        self._notify(RegistryEvent(EVENT_REMOVED, directory_name, code))
        return Outcome.success(number)

    def list_entries(self, directory_name: str) -> Outcome:
        """Записи справочника, отсортированные по коду. Пустой список != нет справочника."""
        directory, error = self._lookup(directory_name)
        if error is not None:
            return error
        return Outcome.success(directory.sorted_entries())

    def list_directory_names(self) -> Outcome:
        if not self._initialized:
            return Outcome.fail(Failure.NOT_INITIALIZED)
        return Outcome.success(sorted(self._directories))

    def directory_stats(self) -> Outcome:
        if not self._initialized:
            return Outcome.fail(Failure.NOT_INITIALIZED)
        stats = [
            DirectoryStats(name=d.name, count=d.count, capacity=d.capacity)
            for d in self._directories.values()
        ]
        return Outcome.success(sorted(stats, key=lambda s: s.name))
