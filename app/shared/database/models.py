from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, ForeignKey, Numeric, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.config.database import Base

# Las tablas y columnas conservan los nombres de la base existente
# (clientes, vendedores, produtos...). Los atributos Python van en inglés.

# ===== PERSONAS =====

class Customer(Base):
    """Modelo de Cliente - EXACTO A BD"""
    __tablename__ = "clientes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column("nome", String(100), nullable=False)
    email = Column(String(100), unique=True)
    phone = Column("telefone", String(20))
    supports_flamengo = Column("torce_flamengo", Boolean, default=False)
    watches_one_piece = Column("assiste_one_piece", Boolean, default=False)
    from_sousa = Column("de_sousa", Boolean, default=False)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    # Relationships
    sales = relationship("Sale", back_populates="customer")

    @property
    def preference_flags(self):
        return (
            bool(self.supports_flamengo),
            bool(self.watches_one_piece),
            bool(self.from_sousa),
        )

class Seller(Base):
    """Modelo de Vendedor - EXACTO A BD"""
    __tablename__ = "vendedores"

    id = Column(Integer, primary_key=True, index=True)
    name = Column("nome", String(100), nullable=False)
    email = Column(String(100), unique=True)
    phone = Column("telefone", String(20))
    status = Column(String(20), default='active', server_default='active')
    created_at = Column(DateTime, server_default=func.current_timestamp())

    # Relationships
    sales = relationship("Sale", back_populates="seller")

# ===== CATÁLOGO =====

class Product(Base):
    """Modelo de Producto - EXACTO A BD"""
    __tablename__ = "produtos"

    id = Column(Integer, primary_key=True, index=True)
    name = Column("nome", String(100), nullable=False)
    description = Column("descricao", Text)
    price = Column("preco", Numeric(10, 2), nullable=False)
    category = Column("categoria", String(50))
    stock = Column("estoque", Integer, default=0)  # Sin piso: puede quedar negativo
    origin = Column("fabricado_em", String(50))
    created_at = Column(DateTime, server_default=func.current_timestamp())

    __table_args__ = (
        Index("idx_produtos_categoria", category),
    )

    # Relationships
    sale_items = relationship("SaleItem", back_populates="product")

class PaymentMethod(Base):
    """Modelo de Forma de Pago - tabla de referencia, solo lectura"""
    __tablename__ = "formas_pagamento"

    id = Column(Integer, primary_key=True, index=True)
    name = Column("nome", String(50), nullable=False)
    created_at = Column(DateTime, server_default=func.current_timestamp())

# ===== VENTAS =====

class Sale(Base):
    """Modelo de Venta - EXACTO A BD"""
    __tablename__ = "vendas"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column("cliente_id", Integer, ForeignKey("clientes.id"))
    seller_id = Column("vendedor_id", Integer, ForeignKey("vendedores.id"), nullable=False)
    payment_method_id = Column("forma_pagamento_id", Integer, ForeignKey("formas_pagamento.id"), nullable=False)
    total = Column("valor_total", Numeric(10, 2), nullable=False)
    discount = Column("desconto", Numeric(10, 2), default=0, server_default="0")
    sold_at = Column("data_venda", DateTime, server_default=func.current_timestamp())

    __table_args__ = (
        Index("idx_vendas_data", sold_at),
        Index("idx_vendas_vendedor", seller_id),
        Index("idx_vendas_cliente", customer_id),
    )

    # Relationships
    customer = relationship("Customer", back_populates="sales")
    seller = relationship("Seller", back_populates="sales")
    payment_method = relationship("PaymentMethod")
    items = relationship("SaleItem", back_populates="sale", passive_deletes=True)

class SaleItem(Base):
    """Modelo de Item de Venta - EXACTO A BD"""
    __tablename__ = "itens_venda"

    id = Column(Integer, primary_key=True, index=True)
    sale_id = Column("venda_id", Integer, ForeignKey("vendas.id", ondelete="CASCADE"))
    product_id = Column("produto_id", Integer, ForeignKey("produtos.id"))
    quantity = Column("quantidade", Integer, nullable=False)
    unit_price = Column("preco_unitario", Numeric(10, 2), nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)

    # Relationships
    sale = relationship("Sale", back_populates="items")
    product = relationship("Product", back_populates="sale_items")
