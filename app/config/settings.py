from pydantic import Field, model_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL
from typing import List, Literal, Optional

class Settings(BaseSettings):
    # App Info
    app_name: str = "TechStore API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: Optional[str] = None

    # Variables de la instalación original (se usan si no hay DATABASE_URL)
    postgres_user: Optional[str] = None
    postgres_password: Optional[str] = None
    postgres_host: Optional[str] = None
    postgres_port: int = 5432
    postgres_database: Optional[str] = None

    # CORS
    allowed_origins: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Inventario
    stock_decrement_mode: Literal["application", "trigger"] = Field(
        default="application",
        description="Mecanismo único que descuenta stock al registrar una venta"
    )
    stock_floor_policy: Literal["allow", "reject", "clamp"] = Field(
        default="allow",
        description="Qué hacer cuando una venta deja el stock por debajo de cero"
    )

    # Reportes
    seller_commission_rate: float = Field(default=0.10, ge=0)
    customer_report_limit: int = Field(default=20, gt=0)
    top_relationships_limit: int = Field(default=10, gt=0)

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = False

    @model_validator(mode="after")
    def validate_stock_options(self):
        if self.stock_decrement_mode == "trigger" and self.stock_floor_policy != "allow":
            raise ValueError(
                "stock_floor_policy 'reject'/'clamp' requiere stock_decrement_mode='application'"
            )
        return self

    @property
    def sqlalchemy_database_url(self) -> str:
        """URL efectiva de conexión"""
        if self.database_url:
            return self.database_url

        if not (self.postgres_host and self.postgres_database):
            raise ValueError(
                "Configure DATABASE_URL o POSTGRES_HOST/POSTGRES_DATABASE"
            )

        return URL.create(
            "postgresql+psycopg2",
            username=self.postgres_user,
            password=self.postgres_password,
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_database,
        ).render_as_string(hide_password=False)


def get_settings() -> Settings:
    return Settings()
