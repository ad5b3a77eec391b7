"""Точка входа Flask-приложения для справочников быстрого набора."""
import os
from functools import wraps
from typing import Optional

from flask import Flask, request, Response

from speeddial.config import ensure_config, load_settings, RegistrySettings
from speeddial.demo import seed_demo
from speeddial.registry import SpeedDialRegistry
from speeddial.routes import EXTENSION_KEY, RegistryHolder, speeddial_bp


def create_app(
    settings: Optional[RegistrySettings] = None,
    registry: Optional[SpeedDialRegistry] = None,
) -> Flask:
    """Создаёт и настраивает экземпляр Flask, регистрирует блюпринты."""
    app = Flask(__name__)
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'dev-secret')

    if registry is None:
        if settings is None:
            # Инициализируем конфигурационный файл
            settings = load_settings(ensure_config())
        registry = SpeedDialRegistry(settings)
    registry.initialize()
    if os.environ.get('SPEEDDIAL_SEED_DEMO') == '1':
        seed_demo(registry)
    app.extensions[EXTENSION_KEY] = RegistryHolder(registry)

    username = os.environ.get('BASIC_AUTH_USERNAME', 'admin')
    password = os.environ.get('BASIC_AUTH_PASSWORD', 'admin')

    def check_auth(user: str, pwd: str) -> bool:
        return user == username and pwd == password

    def authenticate() -> Response:
        return Response(
            'Требуется авторизация', 401,
            {'WWW-Authenticate': 'Basic realm="Login Required"'}
        )

    def requires_auth(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            auth = request.authorization
            if not auth or not check_auth(auth.username, auth.password):
                return authenticate()
            return f(*args, **kwargs)
        return decorated

    # Подключаем блюпринт и защищаем все маршруты базовой авторизацией
    app.register_blueprint(speeddial_bp)

    for rule in app.url_map.iter_rules():
        if rule.endpoint == 'static':
            continue
        view_func = app.view_functions[rule.endpoint]
        app.view_functions[rule.endpoint] = requires_auth(view_func)

    return app


if __name__ == '__main__':
    port = int(os.environ.get('APP_PORT', 5000))
    create_app().run(host='0.0.0.0', port=port)
