# app/modules/sales/repository.py
from decimal import Decimal
from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy import case, desc, insert
from sqlalchemy.dialects import postgresql, sqlite

from app.shared.database.models import (
    Customer, Sale, SaleItem, Product, Seller, PaymentMethod
)

class InsufficientStockError(Exception):
    """El descuento dejaría el stock por debajo de cero (política 'reject')"""

    def __init__(self, product_id: int, quantity: int):
        self.product_id = product_id
        self.quantity = quantity
        super().__init__(f"Stock insuficiente para el producto {product_id} (cantidad {quantity})")

class ProductNotFoundError(Exception):
    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Producto {product_id} no existe")

class SalesRepository:
    """
    Repositorio para todas las operaciones de datos relacionadas con ventas.

    Los métodos de escritura solo hacen flush: el commit/rollback lo decide
    el servicio para que la venta completa sea una sola transacción.
    """

    def __init__(self, db: Session):
        self.db = db

    # ==================== CONSULTAS ====================

    def _sales_with_names_query(self):
        return self.db.query(
            Sale,
            Customer.name.label("customer_name"),
            Customer.email.label("customer_email"),
            Seller.name.label("seller_name"),
            PaymentMethod.name.label("payment_method")
        ).outerjoin(
            Customer, Sale.customer_id == Customer.id
        ).join(
            Seller, Sale.seller_id == Seller.id
        ).join(
            PaymentMethod, Sale.payment_method_id == PaymentMethod.id
        )

    def get_sales(self) -> List[Dict[str, Any]]:
        """
        Todas las ventas con nombres de cliente, vendedor y forma de pago
        """
        results = self._sales_with_names_query().order_by(desc(Sale.sold_at), desc(Sale.id)).all()

        return [
            {
                "id": sale.id,
                "customer_id": sale.customer_id,
                "seller_id": sale.seller_id,
                "payment_method_id": sale.payment_method_id,
                "total": float(sale.total),
                "discount": float(sale.discount or 0),
                "sold_at": sale.sold_at,
                "customer_name": customer_name,
                "seller_name": seller_name,
                "payment_method": payment_method
            }
            for sale, customer_name, _, seller_name, payment_method in results
        ]

    def get_sale_header(self, sale_id: int) -> Optional[Dict[str, Any]]:
        row = self._sales_with_names_query().filter(Sale.id == sale_id).first()
        if not row:
            return None

        sale, customer_name, customer_email, seller_name, payment_method = row
        return {
            "id": sale.id,
            "sold_at": sale.sold_at,
            "total": float(sale.total),
            "discount": float(sale.discount or 0),
            "customer_name": customer_name,
            "customer_email": customer_email,
            "seller_name": seller_name,
            "payment_method": payment_method
        }

    def get_sale_items(self, sale_id: int) -> List[Dict[str, Any]]:
        results = self.db.query(
            SaleItem, Product.name
        ).join(
            Product, SaleItem.product_id == Product.id
        ).filter(
            SaleItem.sale_id == sale_id
        ).order_by(SaleItem.id).all()

        return [
            {
                "id": item.id,
                "product_id": item.product_id,
                "product_name": product_name,
                "quantity": item.quantity,
                "unit_price": float(item.unit_price),
                "subtotal": float(item.subtotal)
            }
            for item, product_name in results
        ]

    def get_customer_by_id(self, customer_id: int) -> Optional[Customer]:
        return self.db.query(Customer).filter(Customer.id == customer_id).first()

    def get_customer_by_email(self, email: str) -> Optional[Customer]:
        return self.db.query(Customer).filter(Customer.email == email).first()

    # ==================== CLIENTES ====================

    def get_or_create_customer(self, customer_data: Any) -> int:
        """
        Insert-or-get atómico por email.

        INSERT ... ON CONFLICT (email) DO NOTHING y luego lectura de la fila:
        dos ventas simultáneas para el mismo email nuevo terminan con el
        mismo cliente en vez de fallar por la restricción UNIQUE.
        """
        values = {
            "name": customer_data.name,
            "email": customer_data.email,
            "phone": customer_data.phone,
            "supports_flamengo": customer_data.supports_flamengo,
            "watches_one_piece": customer_data.watches_one_piece,
            "from_sousa": customer_data.from_sousa,
        }

        if not customer_data.email:
            customer = Customer(**values)
            self.db.add(customer)
            self.db.flush()
            return customer.id

        # claves por atributo -> columnas reales (nome, telefone...)
        column_values = {Customer.__mapper__.columns[key]: value for key, value in values.items()}
        table = Customer.__table__

        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            stmt = postgresql.insert(table).values(column_values).on_conflict_do_nothing(
                index_elements=["email"]
            )
            self.db.execute(stmt)
        elif dialect == "sqlite":
            stmt = sqlite.insert(table).values(column_values).on_conflict_do_nothing(
                index_elements=["email"]
            )
            self.db.execute(stmt)
        else:
            # Sin soporte de ON CONFLICT: lookup-then-insert
            if not self.get_customer_by_email(customer_data.email):
                self.db.execute(insert(table).values(column_values))

        return self.db.query(Customer.id).filter(Customer.email == customer_data.email).scalar()

    # ==================== VENTAS ====================

    def create_sale(
        self,
        customer_id: Optional[int],
        seller_id: int,
        payment_method_id: int,
        total: Decimal,
        discount: Decimal
    ) -> Sale:
        """
        Crear cabecera de venta
        """
        sale = Sale(
            customer_id=customer_id,
            seller_id=seller_id,
            payment_method_id=payment_method_id,
            total=total,
            discount=discount
        )

        self.db.add(sale)
        self.db.flush()

        return sale

    def create_sale_item(self, sale_id: int, item_data: Any) -> SaleItem:
        """
        Crear item de venta
        """
        sale_item = SaleItem(
            sale_id=sale_id,
            product_id=item_data.product_id,
            quantity=item_data.quantity,
            unit_price=item_data.unit_price,
            subtotal=item_data.subtotal
        )

        self.db.add(sale_item)
        self.db.flush()

        return sale_item

    # ==================== INVENTARIO ====================

    def decrease_product_stock(self, product_id: int, quantity: int, floor_policy: str = "allow"):
        """
        Decrementar stock de producto después de venta.

        Siempre es un UPDATE relativo (estoque = estoque - n), nunca
        lectura + escritura absoluta.
        """
        query = self.db.query(Product).filter(Product.id == product_id)

        if floor_policy == "reject":
            query = query.filter(Product.stock >= quantity)
            new_stock = Product.stock - quantity
        elif floor_policy == "clamp":
            new_stock = case(
                (Product.stock - quantity >= 0, Product.stock - quantity),
                else_=0
            )
        else:
            new_stock = Product.stock - quantity

        updated = query.update({Product.stock: new_stock}, synchronize_session=False)

        if updated == 0:
            exists = self.db.query(Product.id).filter(Product.id == product_id).first()
            if not exists:
                raise ProductNotFoundError(product_id)
            raise InsufficientStockError(product_id, quantity)
