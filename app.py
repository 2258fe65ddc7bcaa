from __future__ import annotations
import logging
import os

import click
from flask import Flask

from config import config_map
from extensions import db

log = logging.getLogger(__name__)

def register_blueprints(app: Flask) -> None:
    from blueprints.core import bp as core_bp
    from blueprints.directory import bp as directory_bp
    from blueprints.gradebook import bp as gradebook_bp
    from blueprints.grades import bp as grades_bp

    # core без префикса → '/health' в корне
    app.register_blueprint(core_bp)
    app.register_blueprint(directory_bp, url_prefix="/api/v1")
    app.register_blueprint(gradebook_bp, url_prefix="/api/v1")
    app.register_blueprint(grades_bp, url_prefix="/api/v1")

def register_commands(app: Flask) -> None:
    @app.cli.command("init-db")
    def init_db():
        """Создать таблицы (если их нет)."""
        db.create_all()
        click.echo("DB initialized")

    @app.cli.command("seed-demo")
    def seed_demo_cmd():
        """Идемпотентно наполнить БД демо-данными."""
        from seed import seed_demo
        db.create_all()
        stats = seed_demo()
        click.echo(f"Demo data ready: {stats}")

    @app.cli.command("recompute-grades")
    def recompute_grades_cmd():
        """Пересобрать все итоговые оценки из баллов."""
        from blueprints.grades.services import recompute_all
        click.echo(f"Overall grades written: {recompute_all()}")

def create_app(config_name: str | None = None, overrides: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    cfg_name = config_name or os.getenv("FLASK_CONFIG", "default")
    app.config.from_object(config_map[cfg_name])
    # --- ВАЖНО: изоляция БД в тестах ---
    # pytest всегда выставляет переменную окружения PYTEST_CURRENT_TEST.
    if os.environ.get("PYTEST_CURRENT_TEST") and cfg_name != "test":
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///:memory:"
    if overrides:
        app.config.update(overrides)

    from blueprints.grades.services import validate_grade_scale
    validate_grade_scale(app.config["GRADE_SCALE"])

    db.init_app(app)
    register_blueprints(app)
    register_commands(app)
    log.debug("app created with config %s", cfg_name)
    return app
