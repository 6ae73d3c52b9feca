import logging

from placement_tracker.core.config import Settings
from placement_tracker.core.logging_config import configure_logging


def test_postgres_url_names_psycopg2_driver():
    settings = Settings(postgres_host="db", postgres_port=5433, postgres_user="u", postgres_password="pw", postgres_db="placements")
    assert settings.postgres_url == "postgresql+psycopg2://u:pw@db:5433/placements"


def test_configure_logging_defaults_to_settings_level():
    configure_logging()
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
