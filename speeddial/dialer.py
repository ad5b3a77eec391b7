"""Набор номера: реестр только отдаёт номер, звонит внешний Dialer."""
import logging
import re
from dataclasses import dataclass
from typing import Protocol

from .registry import Outcome, SpeedDialRegistry

logger = logging.getLogger(__name__)

NON_DIAL_CHARS = re.compile(r"[^\d]")


def tel_uri(number: str) -> str:
    """tel:-ссылка: только цифры и ведущий '+'."""
    stripped = number.strip()
    prefix = '+' if stripped.startswith('+') else ''
    return f"tel:{prefix}{NON_DIAL_CHARS.sub('', stripped)}"


@dataclass(frozen=True)
class DialResult:
    number: str
    uri: str
    label: str = ''


class Dialer(Protocol):
    def dial(self, number: str, label: str = '') -> DialResult:
        ...


class LogDialer:
    """Имитация звонка: пишет строку в лог."""

    def dial(self, number: str, label: str = '') -> DialResult:
        uri = tel_uri(number)
        logger.info('Simulated call to %s (%s)', number, label or uri)
        return DialResult(number=number, uri=uri, label=label)


def dial_entry(
    registry: SpeedDialRegistry,
    dialer: Dialer,
    directory_name: str,
    code: str,
) -> Outcome:
    found = registry.get_phone_number(directory_name, code)
    if not found:
        return found
    label = f'{directory_name}/{code}'
    return Outcome.success(dialer.dial(found.value, label=label))
