from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    DateTime,
    ForeignKey,
    Index,
    func,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)  # argon2 hash, never the plaintext

    roles = relationship(
        "UserRole",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UserRole.id",
    )
    sessions = relationship("AuthSession", back_populates="user", cascade="all, delete-orphan")


class UserRole(Base):
    """One role grant. object_id is the franchise id for franchisee grants."""
    __tablename__ = "user_roles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String, nullable=False)  # 'admin', 'franchisee', 'diner'
    object_id = Column(Integer, nullable=True)

    user = relationship("User", back_populates="roles")

    __table_args__ = (
        Index("ix_user_roles_role_object", "role", "object_id"),
    )


class AuthSession(Base):
    """A live login. Tokens whose signature has no row here are rejected."""
    __tablename__ = "auth_sessions"

    token = Column(String, primary_key=True)  # token signature segment
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="sessions")


class Franchise(Base):
    __tablename__ = "franchises"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)

    stores = relationship(
        "Store",
        back_populates="franchise",
        cascade="all, delete-orphan",
        order_by="Store.id",
    )


class Store(Base):
    __tablename__ = "stores"

    id = Column(Integer, primary_key=True, index=True)
    franchise_id = Column(Integer, ForeignKey("franchises.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)

    franchise = relationship("Franchise", back_populates="stores")


class MenuItem(Base):
    __tablename__ = "menu"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    image = Column(String, nullable=False, default="")
    price = Column(Float, nullable=False)


class DinerOrder(Base):
    __tablename__ = "diner_orders"

    id = Column(Integer, primary_key=True, index=True)
    # Plain columns: orders outlive the diner, franchise and store they reference
    diner_id = Column(Integer, nullable=False, index=True)
    franchise_id = Column(Integer, nullable=False, index=True)
    store_id = Column(Integer, nullable=False, index=True)
    date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    __table_args__ = (
        Index("ix_diner_orders_diner_date", "diner_id", "date"),
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("diner_orders.id", ondelete="CASCADE"), nullable=False, index=True)
    menu_id = Column(Integer, ForeignKey("menu.id"), nullable=False)
    description = Column(String, nullable=False)
    price = Column(Float, nullable=False)

    order = relationship("DinerOrder", back_populates="items")
