"""
Inicializa la base de datos desde la línea de comandos.

Uso: python -m scripts.init_db
"""
import logging
import sys

from app.config.database import Database
from app.config.settings import get_settings
from app.core.logging_config import setup_logging
from app.modules.setup import SetupService

logger = logging.getLogger("scripts.init_db")


def main() -> int:
    settings = get_settings()
    setup_logging(settings.log_level)

    database = Database(settings.sqlalchemy_database_url)
    try:
        seeded = SetupService(database, settings).initialize()
    except Exception as e:
        logger.error(f"❌ Error inicializando base de datos: {e}")
        return 1
    finally:
        database.dispose()

    logger.info(f"✅ Base de datos inicializada: {seeded}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
