"""Работа с Config.cfg: параметры реестра быстрого набора."""
import configparser
import os
from dataclasses import dataclass
from typing import List, Optional

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), '..', 'Config.cfg')
SECTION = 'SpeedDial'
DIRECTORY_NAME_TEMPLATE = 'Directory {index}'
REMAINDER_DISCARD = 'discard'
REMAINDER_SPREAD = 'spread'
REMAINDER_POLICIES = (REMAINDER_DISCARD, REMAINDER_SPREAD)

DEFAULTS = {
    'MaxDirectories': '5',
    'TotalCapacity': '1000',
    'DefaultCapacity': '200',
    'RemainderPolicy': REMAINDER_DISCARD,
    'MaxCodeLength': '49',
    'MaxNumberLength': '32',
}

ENV_OVERRIDES = {
    'SPEEDDIAL_MAX_DIRECTORIES': 'MaxDirectories',
    'SPEEDDIAL_TOTAL_CAPACITY': 'TotalCapacity',
    'SPEEDDIAL_DEFAULT_CAPACITY': 'DefaultCapacity',
    'SPEEDDIAL_REMAINDER_POLICY': 'RemainderPolicy',
}


@dataclass(frozen=True)
class RegistrySettings:
    """Неизменяемые параметры реестра, задаются при создании."""
    max_directories: int = 5
    total_capacity: int = 1000
    default_capacity: int = 200
    remainder_policy: str = REMAINDER_DISCARD
    max_code_length: Optional[int] = 49
    max_number_length: Optional[int] = 32

    def __post_init__(self) -> None:
        if self.max_directories < 0:
            raise ValueError('MaxDirectories не может быть отрицательным')
        if self.total_capacity < 0:
            raise ValueError('TotalCapacity не может быть отрицательным')
        if self.max_directories and self.total_capacity < self.max_directories:
            raise ValueError('TotalCapacity меньше MaxDirectories: справочники получат нулевую ёмкость')
        if self.default_capacity <= 0:
            raise ValueError('DefaultCapacity должен быть положительным')
        if self.remainder_policy not in REMAINDER_POLICIES:
            raise ValueError(f'Неизвестная политика остатка: {self.remainder_policy}')
        for limit in (self.max_code_length, self.max_number_length):
            if limit is not None and limit <= 0:
                raise ValueError('Ограничение длины должно быть положительным')

    def directory_names(self) -> List[str]:
        return [DIRECTORY_NAME_TEMPLATE.format(index=i) for i in range(1, self.max_directories + 1)]

    def directory_capacities(self) -> List[int]:
        """Ёмкости справочников по порядку создания.

        discard: total // n каждому, остаток теряется.
        spread: первые total % n справочников получают по одному месту сверху.
        """
        n = self.max_directories
        if n == 0:
            return []
        base, remainder = divmod(self.total_capacity, n)
        if self.remainder_policy == REMAINDER_SPREAD:
            return [base + 1 if i < remainder else base for i in range(n)]
        return [base] * n


def get_config_path() -> str:
    return os.environ.get('SPEEDDIAL_CONFIG', DEFAULT_CONFIG_PATH)


def _write_config(config: configparser.ConfigParser, path: str) -> None:
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as cfg:
        config.write(cfg)


def ensure_config(path: Optional[str] = None) -> str:
    """Создаёт Config.cfg с настройками по умолчанию при отсутствии."""
    path = path or get_config_path()
    if not os.path.exists(path):
        config = configparser.ConfigParser()
        config.optionxform = str
        config[SECTION] = dict(DEFAULTS)
        _write_config(config, path)
    return path


def load_config(path: Optional[str] = None) -> configparser.ConfigParser:
    config = configparser.ConfigParser()
    config.optionxform = str
    config.read(path or get_config_path(), encoding='utf-8')
    return config


def _get_int(values: dict, key: str) -> int:
    raw = str(values[key]).strip()
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'{key}: ожидалось целое число, получено {raw!r}') from None


def _get_limit(values: dict, key: str) -> Optional[int]:
    value = _get_int(values, key)
    return value or None


def load_settings(path: Optional[str] = None) -> RegistrySettings:
    """Читает Config.cfg и переменные окружения, возвращает RegistrySettings."""
    config = load_config(path)
    values = dict(DEFAULTS)
    if config.has_section(SECTION):
        values.update(config[SECTION])
    for env_name, key in ENV_OVERRIDES.items():
        if env_name in os.environ:
            values[key] = os.environ[env_name]
    return RegistrySettings(
        max_directories=_get_int(values, 'MaxDirectories'),
        total_capacity=_get_int(values, 'TotalCapacity'),
        default_capacity=_get_int(values, 'DefaultCapacity'),
        remainder_policy=values['RemainderPolicy'].strip().lower(),
        max_code_length=_get_limit(values, 'MaxCodeLength'),
        max_number_length=_get_limit(values, 'MaxNumberLength'),
    )
