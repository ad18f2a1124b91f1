import logging

from course_attendance.config import get_settings_module
from course_attendance.logging_setup import configure_logging
from course_attendance.settings import load_settings


def test_settings_module_follows_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    assert get_settings_module() == "course_attendance.config.production"

    monkeypatch.setenv("APP_ENV", "test")
    assert get_settings_module() == "course_attendance.config.testing"

    monkeypatch.delenv("APP_ENV")
    assert get_settings_module() == "course_attendance.config.development"


def test_load_testing_settings():
    settings = load_settings("course_attendance.config.testing")

    assert settings.schedule.course_length == 15
    assert settings.schedule.code_digits == 4
    assert settings.attendance.lates_per_absence == 3
    assert settings.attendance.warn_absences == 2
    assert settings.attendance.danger_absences == 3
    assert settings.attendance.danger_rate_below == 70
    assert settings.attendance.open_minutes == 10
    assert settings.holidays_file is None


def test_development_settings_read_environment(monkeypatch):
    import importlib

    import course_attendance.config.development as development

    monkeypatch.setenv("ABSENT_DANGER_COUNT", "4")
    monkeypatch.setenv("COURSE_LENGTH_WEEKS", "16")
    importlib.reload(development)
    try:
        settings = load_settings("course_attendance.config.development")
        assert settings.attendance.danger_absences == 4
        assert settings.schedule.course_length == 16
    finally:
        monkeypatch.undo()
        importlib.reload(development)


def test_configure_logging_installs_one_handler():
    configure_logging("DEBUG")
    configure_logging("WARNING")

    logger = logging.getLogger("course_attendance")
    named = [h for h in logger.handlers if h.get_name() == "course_attendance"]
    assert len(named) == 1
    assert isinstance(named[0], logging.StreamHandler)
    assert logger.level == logging.WARNING
