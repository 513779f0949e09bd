"""
Verifica la conexión con la base de datos configurada.

Uso: python -m scripts.check_db_connection
"""
import logging
import sys

from app.config.database import Database
from app.config.settings import get_settings
from app.core.logging_config import setup_logging

logger = logging.getLogger("scripts.check_db_connection")


def main() -> int:
    settings = get_settings()
    setup_logging(settings.log_level)

    database = Database(settings.sqlalchemy_database_url)
    # Nunca mostrar la contraseña
    logger.info(f"Intentando conectar: {database.engine.url.render_as_string(hide_password=True)}")

    try:
        server_time = database.ping()
    except Exception as e:
        logger.error(f"❌ Error al conectar con la base de datos: {e}")
        return 1
    finally:
        database.dispose()

    logger.info(f"✅ Conexión exitosa - hora del servidor: {server_time}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
