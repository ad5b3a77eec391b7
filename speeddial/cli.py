"""Консольная оболочка для реестра быстрого набора."""
import argparse
import logging
import shlex
import sys
from typing import Callable, Dict, List, Optional, TextIO

from .config import ensure_config, load_settings
from .demo import seed_demo
from .dialer import Dialer, LogDialer, dial_entry
from .messages import describe
from .registry import InitState, SpeedDialRegistry

logger = logging.getLogger(__name__)

PROMPT = 'speeddial> '
HELP_TEXT = """Команды:
  dirs                              список справочников
  list <справочник>                 записи справочника
  add <справочник> <код> <номер>    добавить запись
  get <справочник> <код>            найти номер
  remove <справочник> <код>         удалить запись
  dial <справочник> <код>           позвонить (имитация)
  mkdir <справочник> [ёмкость]      создать справочник
  help                              эта справка
  exit                              выход
Имена с пробелами берите в кавычки: list "Directory 1\""""


class SpeedDialShell:
    """Цикл команд поверх явно переданного реестра."""

    def __init__(
        self,
        registry: SpeedDialRegistry,
        dialer: Optional[Dialer] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.registry = registry
        self.dialer = dialer or LogDialer()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.running = False
        self.commands: Dict[str, Callable[[List[str]], None]] = {
            'dirs': self.do_dirs,
            'list': self.do_list,
            'add': self.do_add,
            'get': self.do_get,
            'remove': self.do_remove,
            'dial': self.do_dial,
            'mkdir': self.do_mkdir,
            'help': self.do_help,
            'exit': self.do_exit,
        }

    def write(self, text: str) -> None:
        self.stdout.write(text + '\n')

    def _expect(self, args: List[str], count: int, usage: str) -> bool:
        if len(args) != count:
            self.write(f'Использование: {usage}')
            return False
        return True

    def do_dirs(self, args: List[str]) -> None:
        outcome = self.registry.directory_stats()
        if not outcome:
            self.write(describe(outcome.failure))
            return
        for stats in outcome.value:
            self.write(f'  {stats.name} ({stats.count}/{stats.capacity})')

    def do_list(self, args: List[str]) -> None:
        if not self._expect(args, 1, 'list <справочник>'):
            return
        directory = args[0]
        outcome = self.registry.list_entries(directory)
        if not outcome:
            self.write(describe(outcome.failure, directory))
            return
        if not outcome.value:
            self.write(f"Справочник '{directory}' пуст")
            return
        for entry in outcome.value:
            self.write(f'  {entry.code}: {entry.number}')

    def do_add(self, args: List[str]) -> None:
        if not self._expect(args, 3, 'add <справочник> <код> <номер>'):
            return
        directory, code, number = args
        outcome = self.registry.add_number(directory, code, number)
        if not outcome:
            self.write(describe(outcome.failure, directory, code))
            return
        entry = outcome.value
        self.write(f"Добавлено: {entry.code} -> {entry.number} в '{directory}'")

    def do_get(self, args: List[str]) -> None:
        if not self._expect(args, 2, 'get <справочник> <код>'):
            return
        directory, code = args
        outcome = self.registry.get_phone_number(directory, code)
        if not outcome:
            self.write(describe(outcome.failure, directory, code))
            return
        self.write(outcome.value)

    def do_remove(self, args: List[str]) -> None:
        if not self._expect(args, 2, 'remove <справочник> <код>'):
            return
        directory, code = args
        outcome = self.registry.remove_number(directory, code)
        if not outcome:
            self.write(describe(outcome.failure, directory, code))
            return
        self.write(f"Удалено: {code} -> {outcome.value} из '{directory}'")

    def do_dial(self, args: List[str]) -> None:
        if not self._expect(args, 2, 'dial <справочник> <код>'):
            return
        directory, code = args
        outcome = dial_entry(self.registry, self.dialer, directory, code)
        if not outcome:
            self.write(describe(outcome.failure, directory, code))
            return
        self.write(f'Звоним {outcome.value.number} ({outcome.value.uri})')

    def do_mkdir(self, args: List[str]) -> None:
        if len(args) not in (1, 2):
            self.write('Использование: mkdir <справочник> [ёмкость]')
            return
        capacity = None
        if len(args) == 2:
            try:
                capacity = int(args[1])
            except ValueError:
                self.write('Ёмкость должна быть целым числом')
                return
        outcome = self.registry.add_directory(args[0], capacity)
        if not outcome:
            self.write(describe(outcome.failure, args[0]))
            return
        self.write(f"Создан справочник '{args[0]}' на {outcome.value} номеров")

    def do_help(self, args: List[str]) -> None:
        self.write(HELP_TEXT)

    def do_exit(self, args: List[str]) -> None:
        self.running = False

    def execute(self, line: str) -> None:
        try:
            tokens = shlex.split(line)
        except ValueError as exc:
            self.write(f'Ошибка разбора команды: {exc}')
            return
        if not tokens:
            return
        command = self.commands.get(tokens[0].lower())
        if command is None:
            self.write("Неизвестная команда. Введите 'help'.")
            return
        command(tokens[1:])

    def run(self) -> None:
        self.running = True
        self.write("Введите 'help' для списка команд.")
        while self.running:
            self.stdout.write(PROMPT)
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                break
            self.execute(line.strip())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='speeddial', description='Справочники быстрого набора')
    parser.add_argument('--config', default=None, help='путь к Config.cfg')
    parser.add_argument('--demo', action='store_true', help='заполнить демо-записями')
    parser.add_argument('--verbose', action='store_true', help='подробный лог')
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    settings = load_settings(ensure_config(args.config))
    registry = SpeedDialRegistry(settings)
    if registry.initialize() is InitState.INITIALIZED:
        logger.info('Registry initialized with %d directories', settings.max_directories)
    if args.demo:
        seed_demo(registry)
    SpeedDialShell(registry).run()


if __name__ == '__main__':
    main()
