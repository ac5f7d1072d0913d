"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, Text,
    Numeric, Date, ForeignKey,
    Index, UniqueConstraint, CheckConstraint
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class ClientModel(Base):
    """Client table"""
    __tablename__ = 'clients'

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(String(64), nullable=False)
    name = Column(String(255), nullable=False)

    # Billing contact
    contact_name = Column(String(255))
    email = Column(String(255))
    address = Column(Text)
    city = Column(String(100))
    state = Column(String(100))
    postal_code = Column(String(20))
    country = Column(String(100))

    version = Column(Integer, default=1)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    engagements = relationship("EngagementModel", back_populates="client")
    invoices = relationship("InvoiceModel", back_populates="client")

    __table_args__ = (
        Index('idx_clients_owner_name', 'owner_id', 'name'),
        UniqueConstraint('owner_id', 'name', name='unique_client_name_per_owner'),
    )


class EngagementModel(Base):
    """
    Engagement table.
    There is deliberately no status column: status is derived from the dates.
    """
    __tablename__ = 'engagements'

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(String(64), nullable=False)
    client_id = Column(Integer, ForeignKey('clients.id'), nullable=False)
    project_name = Column(String(255), nullable=False)
    description = Column(Text)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    billing_mode = Column(String(20), nullable=False, default='hourly')
    hourly_rate = Column(Numeric(10, 2))
    total_cost = Column(Numeric(12, 2))
    net_terms = Column(Integer, nullable=False, default=30)

    version = Column(Integer, default=1)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    client = relationship("ClientModel", back_populates="engagements")
    time_logs = relationship("TimeLogModel", back_populates="engagement")

    __table_args__ = (
        Index('idx_engagements_owner_client', 'owner_id', 'client_id'),
        Index('idx_engagements_dates', 'start_date', 'end_date'),
        CheckConstraint('end_date >= start_date', name='check_engagement_dates'),
        CheckConstraint("billing_mode IN ('hourly', 'project')", name='check_billing_mode'),
    )


class TimeLogModel(Base):
    """Time log table"""
    __tablename__ = 'time_logs'

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(String(64), nullable=False)
    engagement_id = Column(Integer, ForeignKey('engagements.id'), nullable=False)
    date = Column(Date, nullable=False)
    hours = Column(Numeric(5, 2), nullable=False)
    description = Column(Text)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    engagement = relationship("EngagementModel", back_populates="time_logs")

    __table_args__ = (
        Index('idx_time_logs_owner_date', 'owner_id', 'date'),
        Index('idx_time_logs_engagement_date', 'engagement_id', 'date'),
        CheckConstraint('hours > 0', name='check_positive_hours'),
    )


class InvoiceModel(Base):
    """Invoice table"""
    __tablename__ = 'invoices'

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(String(64), nullable=False)
    client_id = Column(Integer, ForeignKey('clients.id'), nullable=False)
    engagement_id = Column(Integer, ForeignKey('engagements.id'))

    invoice_number = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False, default='pending')
    currency = Column(String(3), default='USD')

    # Cached totals, rewritten from line items on every save
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    total_hours = Column(Numeric(10, 2), nullable=False, default=0)

    issue_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    net_terms = Column(Integer, nullable=False, default=30)
    period_start = Column(Date, nullable=False)
    period_end = Column(Date, nullable=False)
    notes = Column(Text)

    # Billing snapshot taken at generation time
    client_name = Column(String(255))
    project_name = Column(String(255))
    billing_contact_name = Column(String(255))
    billing_email = Column(String(255))
    billing_address = Column(Text)
    billing_city = Column(String(100))
    billing_state = Column(String(100))
    billing_postal_code = Column(String(20))
    billing_country = Column(String(100))

    last_status_change_at = Column(DateTime)
    version = Column(Integer, default=1)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    client = relationship("ClientModel", back_populates="invoices")
    line_items = relationship(
        "InvoiceLineItemModel",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceLineItemModel.position",
    )

    __table_args__ = (
        Index('idx_invoices_owner_client', 'owner_id', 'client_id'),
        Index('idx_invoices_status', 'status'),
        Index('idx_invoices_dates', 'issue_date', 'due_date'),
        UniqueConstraint('owner_id', 'invoice_number', name='unique_invoice_number_per_owner'),
        CheckConstraint(
            "status IN ('pending', 'submitted', 'paid', 'overdue')",
            name='check_invoice_status'
        ),
    )


class InvoiceLineItemModel(Base):
    """Invoice line item table"""
    __tablename__ = 'invoice_line_items'

    id = Column(Integer, primary_key=True, autoincrement=True)
    invoice_id = Column(Integer, ForeignKey('invoices.id', ondelete='CASCADE'), nullable=False)
    line_id = Column(String(64), nullable=False)
    # Traceability only; no foreign key so deleting either side never cascades
    time_log_id = Column(Integer)
    date = Column(Date, nullable=False)
    hours = Column(Numeric(10, 2), nullable=False, default=0)
    description = Column(Text, nullable=False)
    rate = Column(Numeric(12, 2), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)

    # Position for ordering
    position = Column(Integer, default=0)

    invoice = relationship("InvoiceModel", back_populates="line_items")


class InvoiceGenerationLockModel(Base):
    """One row per in-flight invoice generation."""
    __tablename__ = 'invoice_generation_locks'

    id = Column(Integer, primary_key=True, autoincrement=True)
    engagement_id = Column(Integer, nullable=False)
    period_start = Column(Date, nullable=False)
    period_end = Column(Date, nullable=False)
    acquired_at = Column(DateTime, server_default=func.now())

    __table_args__ = (
        UniqueConstraint(
            'engagement_id', 'period_start', 'period_end',
            name='unique_generation_per_engagement_period'
        ),
    )


def create_all_tables(engine):
    """Create all tables in the database"""
    Base.metadata.create_all(bind=engine)


def drop_all_tables(engine):
    """Drop all tables in the database"""
    Base.metadata.drop_all(bind=engine)
