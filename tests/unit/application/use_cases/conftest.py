"""
In-memory repository fakes for use case tests.
"""

from datetime import date

import pytest

from consultdesk.domain.models.base import ConcurrentAggregationConflict, DuplicateEntityError
from consultdesk.domain.repositories import (
    AggregationLock,
    ClientRepository,
    EngagementRepository,
    InvoiceRepository,
    TimeLogRepository,
)


class InMemoryRepository:
    def __init__(self):
        self.items = {}
        self.next_id = 1

    def _store(self, entity):
        if entity.id is None:
            entity.id = self.next_id
        self.next_id = max(self.next_id, entity.id + 1)
        self.items[entity.id] = entity
        return entity

    def get_by_id(self, entity_id, owner_id):
        entity = self.items.get(entity_id)
        if entity is not None and entity.owner_id == owner_id:
            return entity
        return None

    def _owned(self, owner_id):
        return [entity for entity in self.items.values() if entity.owner_id == owner_id]

    def delete(self, entity_id, owner_id):
        if self.get_by_id(entity_id, owner_id) is None:
            return False
        del self.items[entity_id]
        return True


class InMemoryClientRepository(InMemoryRepository, ClientRepository):
    def save(self, client):
        for other in self._owned(client.owner_id):
            if other.id != client.id and other.name.lower() == client.name.lower():
                raise DuplicateEntityError("Client", "name", client.name)
        return self._store(client)

    def get_by_owner(self, owner_id):
        return sorted(self._owned(owner_id), key=lambda client: client.name.lower())


class InMemoryEngagementRepository(InMemoryRepository, EngagementRepository):
    def save(self, engagement):
        return self._store(engagement)

    def get_by_owner(self, owner_id, client_id=None, overlapping=None):
        result = []
        for engagement in self._owned(owner_id):
            if client_id is not None and engagement.client_id != client_id:
                continue
            if overlapping is not None and not overlapping.is_unbounded:
                if engagement.end_date < overlapping.start or engagement.start_date > overlapping.end:
                    continue
            result.append(engagement)
        return result

    def get_by_client(self, client_id, owner_id):
        return self.get_by_owner(owner_id, client_id=client_id)


class InMemoryTimeLogRepository(InMemoryRepository, TimeLogRepository):
    def __init__(self, engagements=None):
        super().__init__()
        self.engagements = engagements

    def save(self, time_log):
        return self._store(time_log)

    def get_by_owner(self, owner_id, engagement_id=None, client_id=None, period=None):
        result = []
        for time_log in self._owned(owner_id):
            if engagement_id is not None and time_log.engagement_id != engagement_id:
                continue
            if client_id is not None:
                engagement = self.engagements.get_by_id(time_log.engagement_id, owner_id)
                if engagement is None or engagement.client_id != client_id:
                    continue
            if period is not None and not period.contains(time_log.date):
                continue
            result.append(time_log)
        return sorted(result, key=lambda time_log: (time_log.date, time_log.id))

    def get_by_engagement(self, engagement_id, owner_id, period=None):
        return self.get_by_owner(owner_id, engagement_id=engagement_id, period=period)


class InMemoryInvoiceRepository(InMemoryRepository, InvoiceRepository):
    def __init__(self):
        super().__init__()
        self.save_calls = 0

    def save(self, invoice):
        self.save_calls += 1
        for other in self._owned(invoice.owner_id):
            if other.id != invoice.id and other.invoice_number == invoice.invoice_number:
                raise DuplicateEntityError("Invoice", "invoice_number", invoice.invoice_number)
        return self._store(invoice)

    def get_by_owner(self, owner_id, status=None, client_id=None, issued=None, engagement_id=None):
        result = []
        for invoice in self._owned(owner_id):
            if status is not None and invoice.status != status:
                continue
            if client_id is not None and invoice.client_id != client_id:
                continue
            if engagement_id is not None and invoice.engagement_id != engagement_id:
                continue
            if issued is not None and not issued.contains(invoice.issue_date):
                continue
            result.append(invoice)
        return sorted(result, key=lambda invoice: (invoice.issue_date, invoice.id), reverse=True)

    def get_invoice_numbers(self, owner_id):
        return [invoice.invoice_number for invoice in self._owned(owner_id)]


class InMemoryAggregationLock(AggregationLock):
    def __init__(self):
        self.held = set()
        self.acquired = []

    def acquire(self, engagement_id, period_start, period_end):
        key = (engagement_id, period_start, period_end)
        if key in self.held:
            raise ConcurrentAggregationConflict(engagement_id, period_start, period_end)
        self.held.add(key)
        self.acquired.append(key)

    def release(self, engagement_id, period_start, period_end):
        self.held.discard((engagement_id, period_start, period_end))


@pytest.fixture
def client_repository(client_entity):
    repository = InMemoryClientRepository()
    repository.save(client_entity)
    return repository


@pytest.fixture
def engagement_repository(hourly_engagement, project_engagement):
    repository = InMemoryEngagementRepository()
    repository.save(hourly_engagement)
    repository.save(project_engagement)
    return repository


@pytest.fixture
def time_log_repository(engagement_repository, make_time_log):
    repository = InMemoryTimeLogRepository(engagement_repository)
    repository.save(make_time_log(1, 10, date(2025, 3, 1), "4", "Schema design"))
    repository.save(make_time_log(2, 10, date(2025, 3, 2), "3", "Pipeline review"))
    repository.save(make_time_log(3, 10, date(2025, 4, 1), "5"))
    repository.save(make_time_log(4, 20, date(2025, 3, 5), "6"))
    return repository


@pytest.fixture
def invoice_repository():
    return InMemoryInvoiceRepository()


@pytest.fixture
def aggregation_lock():
    return InMemoryAggregationLock()
