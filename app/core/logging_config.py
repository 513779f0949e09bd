import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO"):
    """Configura el logger raíz una sola vez por proceso"""
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )
    # El log de SQL va por app.config.database; evitar duplicados de SQLAlchemy
    logging.getLogger("sqlalchemy.engine").propagate = False
