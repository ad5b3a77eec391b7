"""Человекочитаемые сообщения об ошибках реестра для интерфейсов."""
from typing import Optional

from .registry import Failure

FAILURE_MESSAGES = {
    Failure.NOT_INITIALIZED: 'Реестр не инициализирован',
    Failure.DIRECTORY_NOT_FOUND: "Справочник '{directory}' не найден",
    Failure.DIRECTORY_FULL: "Справочник '{directory}' заполнен",
    Failure.DUPLICATE_CODE: "Код '{code}' уже есть в справочнике '{directory}'",
    Failure.CODE_NOT_FOUND: "Код '{code}' не найден в справочнике '{directory}'",
    Failure.DIRECTORY_EXISTS: "Справочник '{directory}' уже существует",
    Failure.REGISTRY_FULL: 'Превышено число справочников',
    Failure.INVALID_CAPACITY: 'Ёмкость справочника должна быть положительной',
}


def describe(failure: Failure, directory: str = '', code: Optional[str] = '') -> str:
    return FAILURE_MESSAGES[failure].format(directory=directory, code=code or '')
