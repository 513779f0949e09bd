# app/modules/sales/service.py
import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Dict, Any, Tuple
from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.config.settings import Settings
from .repository import SalesRepository, InsufficientStockError
from .schemas import CENTS, SaleCreateRequest, SaleQuoteRequest

logger = logging.getLogger(__name__)

# 25% por cada preferencia marcada, acumulativo (las tres = 75%)
DISCOUNT_PER_FLAG = Decimal("0.25")

NO_FLAGS = (False, False, False)


def calculate_discount(subtotal: Decimal, flags: Iterable[bool]) -> Tuple[Decimal, Decimal]:
    """
    Devuelve (porcentaje, monto) del descuento por preferencias del cliente
    """
    rate = DISCOUNT_PER_FLAG * sum(1 for flag in flags if flag)
    return rate, (Decimal(subtotal) * rate).quantize(CENTS)


class SalesService:
    """
    Servicio principal para las operaciones de ventas
    """

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.repository = SalesRepository(db)

    # ==================== CONSULTAS ====================

    async def get_sales(self) -> List[Dict[str, Any]]:
        return self.repository.get_sales()

    async def get_sale_details(self, sale_id: int) -> Dict[str, Any]:
        sale = self.repository.get_sale_header(sale_id)
        if not sale:
            raise HTTPException(status_code=404, detail="Venta no encontrada")

        sale["items"] = self.repository.get_sale_items(sale_id)
        return sale

    async def get_sale_products(self, sale_id: int) -> List[Dict[str, Any]]:
        return [
            {
                "id": item["product_id"],
                "name": item["product_name"],
                "quantity": item["quantity"],
                "unit_price": item["unit_price"],
                "subtotal": item["subtotal"]
            }
            for item in self.repository.get_sale_items(sale_id)
        ]

    # ==================== COTIZACIÓN ====================

    async def quote_sale(self, quote_data: SaleQuoteRequest) -> Dict[str, Any]:
        """
        Calcular subtotal, descuento y total del carrito sin registrar nada
        """
        if quote_data.customer_id is not None:
            customer = self.repository.get_customer_by_id(quote_data.customer_id)
            if not customer:
                raise HTTPException(status_code=404, detail="Cliente no encontrado")
            flags = customer.preference_flags
        elif quote_data.customer is not None:
            flags = quote_data.customer.preference_flags
        else:
            flags = NO_FLAGS

        subtotal = self._items_subtotal(quote_data.items)
        rate, discount = calculate_discount(subtotal, flags)

        return {
            "subtotal": float(subtotal),
            "discount_rate": float(rate),
            "discount": float(discount),
            "total": float(subtotal - discount)
        }

    # ==================== REGISTRO DE VENTAS ====================

    async def create_sale(self, sale_data: SaleCreateRequest) -> Dict[str, Any]:
        """
        Registrar venta completa en una sola transacción:
        cliente (si es nuevo) + cabecera + items + stock.
        """
        try:
            # 1. Resolver cliente
            customer_id, flags = self._resolve_customer(sale_data)

            # 2. Totales: total = subtotal - descuento
            subtotal = self._items_subtotal(sale_data.items)
            discount = sale_data.discount
            if discount is None:
                _, discount = calculate_discount(subtotal, flags)
            total = (subtotal - discount).quantize(CENTS)
            if sale_data.total is not None and sale_data.total.quantize(CENTS) != total:
                raise ValueError(
                    f"Total {sale_data.total} no coincide con subtotal - descuento ({total})"
                )

            # 3. Cabecera
            sale = self.repository.create_sale(
                customer_id=customer_id,
                seller_id=sale_data.seller_id,
                payment_method_id=sale_data.payment_method_id,
                total=total,
                discount=discount
            )

            # 4. Items + inventario
            decrement_in_app = self.settings.stock_decrement_mode == "application"
            for item in sale_data.items:
                self.repository.create_sale_item(sale_id=sale.id, item_data=item)

                if decrement_in_app:
                    self.repository.decrease_product_stock(
                        product_id=item.product_id,
                        quantity=item.quantity,
                        floor_policy=self.settings.stock_floor_policy
                    )

            self.db.commit()

            logger.info(
                f"✅ Venta {sale.id} registrada - vendedor {sale_data.seller_id} - "
                f"{len(sale_data.items)} items - total {total}"
            )
            return {"id": sale.id}

        except InsufficientStockError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Venta rechazada: {e}")
            raise HTTPException(status_code=400, detail=str(e))

        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Error registrando venta: {e}")
            raise HTTPException(status_code=500, detail="Error registrando venta")

    def _resolve_customer(self, sale_data: SaleCreateRequest) -> Tuple[Optional[int], Tuple[bool, bool, bool]]:
        """
        ID explícito se usa directamente (la FK valida al insertar);
        si no, insert-or-get por email con los datos del formulario.
        """
        if sale_data.customer_id is not None:
            flags = NO_FLAGS
            if sale_data.discount is None:
                customer = self.repository.get_customer_by_id(sale_data.customer_id)
                if customer:
                    flags = customer.preference_flags
            return sale_data.customer_id, flags

        customer_id = self.repository.get_or_create_customer(sale_data.customer)
        return customer_id, sale_data.customer.preference_flags

    @staticmethod
    def _items_subtotal(items) -> Decimal:
        return sum((item.subtotal for item in items), Decimal("0"))
