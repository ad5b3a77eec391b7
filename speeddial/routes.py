"""Маршруты Flask: JSON API справочников быстрого набора."""
import logging
import threading
from dataclasses import asdict
from datetime import datetime
from io import BytesIO
from typing import Optional

from flask import Blueprint, current_app, jsonify, request, send_file

from .dialer import Dialer, LogDialer, dial_entry
from .excel_io import export_to_excel, import_from_excel
from .messages import describe
from .registry import Failure, Outcome, SpeedDialRegistry

logger = logging.getLogger(__name__)

speeddial_bp = Blueprint('speeddial', __name__)
EXTENSION_KEY = 'speeddial'

FAILURE_STATUS = {
    Failure.NOT_INITIALIZED: 503,
    Failure.DIRECTORY_NOT_FOUND: 404,
    Failure.CODE_NOT_FOUND: 404,
    Failure.DIRECTORY_FULL: 409,
    Failure.DUPLICATE_CODE: 409,
    Failure.DIRECTORY_EXISTS: 409,
    Failure.REGISTRY_FULL: 409,
    Failure.INVALID_CAPACITY: 400,
}


class RegistryHolder:
    """Реестр приложения под одной блокировкой: Flask обслуживает запросы в потоках."""

    def __init__(self, registry: SpeedDialRegistry, dialer: Optional[Dialer] = None):
        self.registry = registry
        self.dialer = dialer or LogDialer()
        self.lock = threading.Lock()


def _holder() -> RegistryHolder:
    return current_app.extensions[EXTENSION_KEY]


def _failure_response(outcome: Outcome, directory: str = '', code: str = ''):
    message = describe(outcome.failure, directory, code)
    return jsonify({'error': outcome.failure.value, 'message': message}), FAILURE_STATUS[outcome.failure]


def _bad_request(message: str):
    return jsonify({'error': 'invalid_input', 'message': message}), 400


def _payload() -> dict:
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


def _entry_json(entry) -> dict:
    return {'code': entry.code, 'number': entry.number}


@speeddial_bp.route('/directories')
def list_directories():
    holder = _holder()
    with holder.lock:
        outcome = holder.registry.directory_stats()
    if not outcome:
        return _failure_response(outcome)
    return jsonify({'directories': [asdict(s) for s in outcome.value]})


@speeddial_bp.route('/directories', methods=['POST'])
def create_directory():
    data = _payload()
    name = str(data.get('name') or '').strip()
    if not name:
        return _bad_request('Имя справочника обязательно')
    capacity = data.get('capacity')
    if capacity not in (None, ''):
        try:
            capacity = int(capacity)
        except (TypeError, ValueError):
            return _bad_request('Ёмкость должна быть целым числом')
    else:
        capacity = None

    holder = _holder()
    with holder.lock:
        outcome = holder.registry.add_directory(name, capacity)
    if not outcome:
        return _failure_response(outcome, name)
    return jsonify({'name': name, 'capacity': outcome.value}), 201


@speeddial_bp.route('/directories/<directory>')
def show_directory(directory: str):
    holder = _holder()
    with holder.lock:
        outcome = holder.registry.list_entries(directory)
    if not outcome:
        return _failure_response(outcome, directory)
    return jsonify({
        'name': directory,
        'entries': [_entry_json(e) for e in outcome.value],
    })


@speeddial_bp.route('/directories/<directory>/entries', methods=['POST'])
def add_entry(directory: str):
    data = _payload()
    code = str(data.get('code') or '').strip()
    number = str(data.get('number') or '').strip()
    if not code or not number:
        return _bad_request('Укажите код и номер телефона')
    if '/' in code:
        return _bad_request("Код не может содержать '/'")

    holder = _holder()
    with holder.lock:
        outcome = holder.registry.add_number(directory, code, number)
    if not outcome:
        return _failure_response(outcome, directory, code)
    return jsonify(_entry_json(outcome.value)), 201


@speeddial_bp.route('/directories/<directory>/entries/<code>')
def get_entry(directory: str, code: str):
    holder = _holder()
    with holder.lock:
        outcome = holder.registry.get_phone_number(directory, code)
    if not outcome:
        return _failure_response(outcome, directory, code)
    return jsonify({'code': code, 'number': outcome.value})


@speeddial_bp.route('/directories/<directory>/entries/<code>', methods=['DELETE'])
def delete_entry(directory: str, code: str):
    holder = _holder()
    with holder.lock:
        outcome = holder.registry.remove_number(directory, code)
    if not outcome:
        return _failure_response(outcome, directory, code)
    return jsonify({'code': code, 'number': outcome.value})


@speeddial_bp.route('/directories/<directory>/entries/<code>/dial', methods=['POST'])
def dial(directory: str, code: str):
    holder = _holder()
    with holder.lock:
        outcome = dial_entry(holder.registry, holder.dialer, directory, code)
    if not outcome:
        return _failure_response(outcome, directory, code)
    result = outcome.value
    return jsonify({'number': result.number, 'uri': result.uri})


@speeddial_bp.route('/export/excel')
def export_excel():
    holder = _holder()
    with holder.lock:
        data = export_to_excel(holder.registry)
    filename = f"speeddial_{datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
    return send_file(BytesIO(data), as_attachment=True, download_name=filename, mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet')


@speeddial_bp.route('/import/excel', methods=['POST'])
def import_excel():
    file = request.files.get('excel_file')
    if not file:
        return _bad_request('Не выбран файл для импорта')

    holder = _holder()
    try:
        with holder.lock:
            report = import_from_excel(holder.registry, BytesIO(file.read()))
    except Exception as exc:  # noqa: BLE001
        logger.warning('Excel import failed: %s', exc)
        return _bad_request(f'Ошибка импорта: {exc}')
    return jsonify({
        'added': report.added,
        'rejected': [
            {
                'row': r.row_index,
                'directory': r.directory,
                'code': r.code,
                'error': r.failure.value,
                'message': describe(r.failure, r.directory, r.code),
            }
            for r in report.rejected
        ],
    })
