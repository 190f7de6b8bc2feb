"""
SQLAlchemy ORM models for the GenHPP PostgreSQL schema.

These models provide type-safe database access and support for:
- JSONB columns for material lists and chat payloads
- Foreign key relationships with cascading deletes
- Automatic timestamp management
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import relationship

Base = declarative_base()


# ======================
# Users
# ======================


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    email = Column(Text, unique=True)
    auth_id = Column(Text, unique=True, index=True, nullable=True)
    photo_url = Column(Text)
    is_admin = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    calculations = relationship("Calculation", back_populates="user", cascade="all, delete-orphan")
    expenses = relationship("Expense", back_populates="user", cascade="all, delete-orphan")
    notifications = relationship("Notification", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, name='{self.name}', email='{self.email}', admin={self.is_admin})>"


# ======================
# HPP Calculations
# ======================


class Calculation(Base):
    __tablename__ = "calculations"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    product_name = Column(Text, nullable=False)
    materials = Column(JSONB, nullable=False, default=list)
    labor_cost = Column(Numeric(15, 2), nullable=False, default=0)
    overhead = Column(Numeric(15, 2), nullable=False, default=0)
    packaging = Column(Numeric(15, 2), nullable=False, default=0)
    margin = Column(Numeric(7, 2), nullable=False, default=0)
    product_quantity = Column(Integer, nullable=False, default=1)
    total_hpp = Column(Numeric(15, 2), nullable=False)
    suggested_price = Column(Numeric(15, 2), nullable=False)
    is_public = Column(Boolean, default=False, nullable=False)
    production_tips = Column(Text)
    product_image_url = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="calculations")
    public_copy = relationship(
        "PublicCalculation",
        back_populates="calculation",
        uselist=False,
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint("labor_cost >= 0 AND overhead >= 0 AND packaging >= 0", name="ck_calculation_costs"),
        CheckConstraint("margin >= 0", name="ck_calculation_margin"),
        Index("idx_calculations_user_id", "user_id"),
        Index("idx_calculations_created_at", "created_at"),
    )

    def __repr__(self):
        return f"<Calculation(id={self.id}, product='{self.product_name}', hpp={self.total_hpp})>"


class PublicCalculation(Base):
    """Denormalized copy of a shared calculation shown in the community feed."""

    __tablename__ = "public_calculations"

    id = Column(Integer, primary_key=True)
    calculation_id = Column(
        Integer, ForeignKey("calculations.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    user_name = Column(Text, nullable=False)
    user_photo_url = Column(Text)
    product_name = Column(Text, nullable=False)
    materials = Column(JSONB, nullable=False, default=list)
    labor_cost = Column(Numeric(15, 2), nullable=False, default=0)
    overhead = Column(Numeric(15, 2), nullable=False, default=0)
    packaging = Column(Numeric(15, 2), nullable=False, default=0)
    margin = Column(Numeric(7, 2), nullable=False, default=0)
    product_quantity = Column(Integer, nullable=False, default=1)
    total_hpp = Column(Numeric(15, 2), nullable=False)
    suggested_price = Column(Numeric(15, 2), nullable=False)
    production_tips = Column(Text)
    product_image_url = Column(Text)
    is_featured = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    calculation = relationship("Calculation", back_populates="public_copy")
    comments = relationship("Comment", back_populates="public_calculation", cascade="all, delete-orphan")
    reports = relationship("ContentReport", back_populates="public_calculation", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_public_calculations_created_at", "created_at"),
        Index("idx_public_calculations_user_id", "user_id"),
    )

    def __repr__(self):
        return f"<PublicCalculation(id={self.id}, product='{self.product_name}', user='{self.user_name}')>"


# ======================
# Expenses
# ======================


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(Text, nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    category = Column(Text, nullable=False)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="expenses")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_expense_amount"),
        CheckConstraint(
            "category IN ('Sewa Tempat', 'Listrik & Air', 'Gaji Karyawan', "
            "'Biaya Pengemasan', 'Pemasaran', 'Lainnya')",
            name="ck_expense_category",
        ),
        Index("idx_expenses_user_date", "user_id", "date"),
    )

    def __repr__(self):
        return f"<Expense(id={self.id}, name='{self.name}', amount={self.amount}, date={self.date})>"


# ======================
# Community
# ======================


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True)
    public_calculation_id = Column(
        Integer, ForeignKey("public_calculations.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    user_name = Column(Text, nullable=False)
    user_photo_url = Column(Text)
    text = Column(Text, nullable=False)
    parent_id = Column(Integer, ForeignKey("comments.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    public_calculation = relationship("PublicCalculation", back_populates="comments")

    __table_args__ = (
        Index("idx_comments_public_calculation", "public_calculation_id", "created_at"),
    )

    def __repr__(self):
        return f"<Comment(id={self.id}, calc={self.public_calculation_id}, parent={self.parent_id})>"


class ContentReport(Base):
    __tablename__ = "content_reports"

    id = Column(Integer, primary_key=True)
    public_calculation_id = Column(
        Integer, ForeignKey("public_calculations.id", ondelete="CASCADE"), nullable=False
    )
    reporter_user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    reported_user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))
    category = Column(Text, nullable=False)
    reason = Column(Text, nullable=False)
    status = Column(Text, nullable=False, default="open")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    public_calculation = relationship("PublicCalculation", back_populates="reports")

    __table_args__ = (
        CheckConstraint("status IN ('open', 'resolved')", name="ck_report_status"),
        Index("idx_content_reports_status", "status"),
    )

    def __repr__(self):
        return f"<ContentReport(id={self.id}, category='{self.category}', status='{self.status}')>"


# ======================
# Notifications
# ======================


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    type = Column(Text, nullable=False, default="admin")
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="notifications")

    __table_args__ = (
        Index("idx_notifications_user_read", "user_id", "is_read"),
    )

    def __repr__(self):
        return f"<Notification(id={self.id}, user={self.user_id}, title='{self.title}', read={self.is_read})>"


# ======================
# Anonymous Chat
# ======================


class ChatSession(Base):
    __tablename__ = "chat_sessions"

    id = Column(Integer, primary_key=True)
    participant_ids = Column(JSONB, nullable=False, default=list)
    status = Column(Text, nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    messages = relationship(
        "ChatMessage",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="ChatMessage.id",
    )

    __table_args__ = (
        CheckConstraint("status IN ('pending', 'active', 'ended')", name="ck_chat_status"),
        Index("idx_chat_sessions_status", "status"),
    )

    def __repr__(self):
        return f"<ChatSession(id={self.id}, status='{self.status}', participants={self.participant_ids})>"


class ChatMessage(Base):
    __tablename__ = "chat_messages"

    id = Column(Integer, primary_key=True)
    session_id = Column(Integer, ForeignKey("chat_sessions.id", ondelete="CASCADE"), nullable=False)
    sender_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    text = Column(Text)
    image_url = Column(Text)
    calculation = Column(JSONB)
    reply_to = Column(JSONB)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    session = relationship("ChatSession", back_populates="messages")

    __table_args__ = (
        Index("idx_chat_messages_session", "session_id", "created_at"),
    )

    def __repr__(self):
        return f"<ChatMessage(id={self.id}, session={self.session_id}, sender={self.sender_id})>"


# ======================
# Site Status
# ======================


class SiteStatus(Base):
    """Single-row table (id = 1) holding global maintenance flags."""

    __tablename__ = "site_status"

    id = Column(Integer, primary_key=True)
    is_maintenance_mode = Column(Boolean, default=False, nullable=False)
    is_update_mode = Column(Boolean, default=False, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<SiteStatus(maintenance={self.is_maintenance_mode}, update={self.is_update_mode})>"
