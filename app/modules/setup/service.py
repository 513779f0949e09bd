# app/modules/setup/service.py
import logging
from decimal import Decimal
from typing import Dict

from sqlalchemy.engine import Connection

from app.config.database import Base, Database
from app.config.settings import Settings
from app.modules.reports.repository import monthly_sales_by_seller_select
from app.shared.database.models import PaymentMethod, Seller, Product

logger = logging.getLogger(__name__)

SALES_BY_SELLER_VIEW = "vw_vendas_por_vendedor"
STOCK_TRIGGER = "trg_atualizar_estoque"

# ==================== DATOS INICIALES ====================

SEED_PAYMENT_METHODS = ["Dinheiro", "Cartão de Crédito", "Cartão de Débito", "PIX"]

SEED_SELLERS = [
    {"name": "Maria Oliveira", "email": "maria@techstore.com", "phone": "(83) 99999-1111", "status": "active"},
    {"name": "Carlos Pereira", "email": "carlos@techstore.com", "phone": "(83) 99999-2222", "status": "active"},
    {"name": "Ana Souza", "email": "ana@techstore.com", "phone": "(83) 99999-3333", "status": "active"},
]

SEED_PRODUCTS = [
    {"name": "iPhone 15 Pro", "description": "Smartphone Apple com câmera profissional",
     "price": Decimal("8999.00"), "category": "smartphones", "stock": 15, "origin": "outros"},
    {"name": "Samsung Galaxy S23", "description": "Smartphone Samsung com tela AMOLED",
     "price": Decimal("5499.00"), "category": "smartphones", "stock": 23, "origin": "mari"},
    {"name": "AirPods Pro", "description": "Fones de ouvido sem fio com cancelamento de ruído",
     "price": Decimal("1899.00"), "category": "acessorios", "stock": 30, "origin": "outros"},
    {"name": "MacBook Pro M2", "description": "Notebook Apple com chip M2",
     "price": Decimal("14999.00"), "category": "notebooks", "stock": 8, "origin": "outros"},
    {"name": "Xiaomi Redmi Note 12", "description": "Smartphone Xiaomi com ótimo custo-benefício",
     "price": Decimal("1799.00"), "category": "smartphones", "stock": 0, "origin": "mari"},
]

# ==================== TRIGGER DE STOCK ====================

POSTGRES_TRIGGER_DDL = [
    """
    CREATE OR REPLACE FUNCTION atualizar_estoque_produto()
    RETURNS TRIGGER AS $$
    BEGIN
      UPDATE produtos
      SET estoque = estoque - NEW.quantidade
      WHERE id = NEW.produto_id;
      RETURN NEW;
    END;
    $$ LANGUAGE plpgsql
    """,
    f"DROP TRIGGER IF EXISTS {STOCK_TRIGGER} ON itens_venda",
    f"""
    CREATE TRIGGER {STOCK_TRIGGER}
    AFTER INSERT ON itens_venda
    FOR EACH ROW
    EXECUTE FUNCTION atualizar_estoque_produto()
    """,
]

SQLITE_TRIGGER_DDL = [
    f"""
    CREATE TRIGGER IF NOT EXISTS {STOCK_TRIGGER}
    AFTER INSERT ON itens_venda
    FOR EACH ROW
    BEGIN
      UPDATE produtos SET estoque = estoque - NEW.quantidade WHERE id = NEW.produto_id;
    END
    """,
]


class SetupService:
    """
    Inicialización idempotente de la base: tablas, índices, vista,
    trigger de stock (según configuración) y datos iniciales.
    """

    def __init__(self, database: Database, settings: Settings):
        self.database = database
        self.settings = settings

    def initialize(self) -> Dict[str, int]:
        engine = self.database.engine

        Base.metadata.create_all(bind=engine)
        logger.info("✅ Tablas e índices verificados")

        with engine.begin() as conn:
            self._create_sales_view(conn)
            self._configure_stock_trigger(conn)

        seeded = self._seed_initial_data()
        logger.info(f"✅ Datos iniciales: {seeded}")
        return seeded

    def _create_sales_view(self, conn: Connection):
        select_sql = monthly_sales_by_seller_select().compile(
            dialect=conn.dialect,
            compile_kwargs={"literal_binds": True}
        )
        conn.exec_driver_sql(f"DROP VIEW IF EXISTS {SALES_BY_SELLER_VIEW}")
        conn.exec_driver_sql(f"CREATE VIEW {SALES_BY_SELLER_VIEW} AS {select_sql}")
        logger.info(f"✅ Vista {SALES_BY_SELLER_VIEW} creada")

    def _configure_stock_trigger(self, conn: Connection):
        """
        Un solo mecanismo descuenta stock: en modo 'application' se elimina
        el trigger; en modo 'trigger' se instala.
        """
        dialect = conn.dialect.name

        if self.settings.stock_decrement_mode != "trigger":
            if dialect == "postgresql":
                conn.exec_driver_sql(f"DROP TRIGGER IF EXISTS {STOCK_TRIGGER} ON itens_venda")
            else:
                conn.exec_driver_sql(f"DROP TRIGGER IF EXISTS {STOCK_TRIGGER}")
            logger.info("ℹ️ Stock descontado por la aplicación, trigger deshabilitado")
            return

        if dialect == "postgresql":
            statements = POSTGRES_TRIGGER_DDL
        elif dialect == "sqlite":
            statements = SQLITE_TRIGGER_DDL
        else:
            raise RuntimeError(f"Trigger de stock no soportado para {dialect}")

        for statement in statements:
            conn.exec_driver_sql(statement)
        logger.info(f"✅ Trigger {STOCK_TRIGGER} instalado")

    def _seed_initial_data(self) -> Dict[str, int]:
        """
        Inserta solo las filas que faltan: forma de pago y producto por
        nombre, vendedor por email.
        """
        db = self.database.session()
        try:
            existing_methods = {name for (name,) in db.query(PaymentMethod.name)}
            new_methods = [
                PaymentMethod(name=name)
                for name in SEED_PAYMENT_METHODS if name not in existing_methods
            ]

            existing_emails = {email for (email,) in db.query(Seller.email)}
            new_sellers = [
                Seller(**seller)
                for seller in SEED_SELLERS if seller["email"] not in existing_emails
            ]

            existing_products = {name for (name,) in db.query(Product.name)}
            new_products = [
                Product(**product)
                for product in SEED_PRODUCTS if product["name"] not in existing_products
            ]

            db.add_all(new_methods + new_sellers + new_products)
            db.commit()

            return {
                "payment_methods": len(new_methods),
                "sellers": len(new_sellers),
                "products": len(new_products)
            }
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
