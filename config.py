from __future__ import annotations
import os
from pathlib import Path

# Шкала оценок: (нижняя граница процента, буква), строго по убыванию.
# Последняя граница должна быть <= 0, иначе часть диапазона останется без буквы.
DEFAULT_GRADE_SCALE = (
    (90.0, "A"),
    (80.0, "B"),
    (70.0, "C"),
    (60.0, "D"),
    (0.0, "F"),
)

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
    BASE_DIR = Path(__file__).resolve().parent
    # SQLite file in project directory
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'gradebook.db'}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    GRADE_SCALE = DEFAULT_GRADE_SCALE
    GRADE_PERCENT_PRECISION = 2
    AT_RISK_THRESHOLD = 70.0
    UPCOMING_WINDOW_DAYS = 7

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_JSON = True

class DevConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

class TestConfig(BaseConfig):
    TESTING = True
    # один общий коннект (StaticPool): изоляции читателей между потоками нет,
    # многопоточные тесты берут файловую БД
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    LOG_LEVEL = "WARNING"

class ProdConfig(BaseConfig):
    DEBUG = False

config_map = {
    "dev": DevConfig,
    "test": TestConfig,
    "prod": ProdConfig,
    "default": DevConfig,
}
