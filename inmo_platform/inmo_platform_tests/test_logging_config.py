import logging

from inmo_platform.inmo_platform.inmo_service.utils.logging_config import configure_logging


def test_app_settings_override_earlier_logging_setup(app):
    # importing main already configured logging at the default level
    assert logging.getLogger().level == logging.WARNING


def test_reconfigure_replaces_level_and_handlers(tmp_path):
    configure_logging("DEBUG", str(tmp_path / "logs"))
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h, logging.FileHandler) for h in root.handlers)

    configure_logging("ERROR")
    assert root.level == logging.ERROR
    assert not any(isinstance(h, logging.FileHandler) for h in root.handlers)
