"""
Repository providers for the routers.
Every repository in a request shares the request's session, so a route's
writes commit or roll back together.
"""

from typing import Annotated
from fastapi import Depends
from sqlalchemy.orm import Session

from consultdesk.infrastructure.db.database import get_db
from consultdesk.infrastructure.repositories import (
    SQLAlchemyClientRepository,
    SQLAlchemyEngagementRepository,
    SQLAlchemyTimeLogRepository,
    SQLAlchemyInvoiceRepository,
    SQLAlchemyAggregationLock,
)


def get_client_repository(session: Session = Depends(get_db)) -> SQLAlchemyClientRepository:
    return SQLAlchemyClientRepository(session)


def get_engagement_repository(session: Session = Depends(get_db)) -> SQLAlchemyEngagementRepository:
    return SQLAlchemyEngagementRepository(session)


def get_time_log_repository(session: Session = Depends(get_db)) -> SQLAlchemyTimeLogRepository:
    return SQLAlchemyTimeLogRepository(session)


def get_invoice_repository(session: Session = Depends(get_db)) -> SQLAlchemyInvoiceRepository:
    return SQLAlchemyInvoiceRepository(session)


def get_aggregation_lock(session: Session = Depends(get_db)) -> SQLAlchemyAggregationLock:
    return SQLAlchemyAggregationLock(session)


ClientRepositoryDep = Annotated[SQLAlchemyClientRepository, Depends(get_client_repository)]
EngagementRepositoryDep = Annotated[SQLAlchemyEngagementRepository, Depends(get_engagement_repository)]
TimeLogRepositoryDep = Annotated[SQLAlchemyTimeLogRepository, Depends(get_time_log_repository)]
InvoiceRepositoryDep = Annotated[SQLAlchemyInvoiceRepository, Depends(get_invoice_repository)]
AggregationLockDep = Annotated[SQLAlchemyAggregationLock, Depends(get_aggregation_lock)]
