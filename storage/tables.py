"""
Keyed in-memory table with an auto-incrementing id counter.
"""

import logging
import threading
from dataclasses import MISSING, fields, replace
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


class UnknownFieldError(ValueError):
    """Raised when a payload names fields the entity does not have."""

    def __init__(self, entity, names):
        self.entity = entity
        self.names = sorted(names)
        super().__init__(f"Unknown field(s) for {entity}: {', '.join(self.names)}")


class MissingFieldError(ValueError):
    """Raised when an insert leaves out required fields."""

    def __init__(self, entity, names):
        self.entity = entity
        self.names = sorted(names)
        super().__init__(f"Missing required field(s) for {entity}: {', '.join(self.names)}")


def utcnow():
    return datetime.now(timezone.utc)


def required_fields(model):
    """Writable fields of a record type that have no default."""
    return [
        f.name for f in fields(model)
        if f.name != 'id' and f.name not in model.auto_fields
        and f.default is MISSING and f.default_factory is MISSING
    ]


class EntityTable:
    """
    Process-lifetime map of id -> record for one entity type.

    Ids start at 1 and are never handed out twice, even after a delete.
    Iteration order is insertion order.
    """

    def __init__(self, model):
        self.model = model
        self.name = model.__name__
        self._rows = {}
        self._next_id = 1
        self._lock = threading.RLock()

    def __len__(self):
        return len(self._rows)

    def _clean(self, data):
        # id and auto-stamped fields belong to storage
        data = {k: v for k, v in data.items() if k != 'id' and k not in self.model.auto_fields}
        unknown = set(data) - set(self.model.field_names())
        if unknown:
            raise UnknownFieldError(self.name, unknown)
        return data

    def get(self, record_id):
        return self._rows.get(record_id)

    def all(self):
        with self._lock:
            return list(self._rows.values())

    def filter(self, predicate):
        return [row for row in self.all() if predicate(row)]

    def filter_by(self, **criteria):
        return self.filter(lambda row: all(getattr(row, k) == v for k, v in criteria.items()))

    def find_by(self, **criteria):
        for row in self.all():
            if all(getattr(row, k) == v for k, v in criteria.items()):
                return row
        return None

    def insert(self, data, **stamps):
        """Store a new record built from `data` plus storage-owned `stamps`."""
        data = self._clean(data)
        missing = set(required_fields(self.model)) - set(data)
        if missing:
            raise MissingFieldError(self.name, missing)
        with self._lock:
            record = self.model(id=self._next_id, **data, **stamps)
            self._rows[record.id] = record
            self._next_id += 1
        logger.debug("Created %s #%s", self.name, record.id)
        return record

    def update(self, record_id, data):
        """Merge `data` into an existing record. Returns None for unknown ids."""
        with self._lock:
            current = self._rows.get(record_id)
            if current is None:
                return None
            data = self._clean(data)
            updated = replace(current, **data)
            self._rows[record_id] = updated
        return updated

    def delete(self, record_id):
        with self._lock:
            removed = self._rows.pop(record_id, None)
        if removed is not None:
            logger.debug("Deleted %s #%s", self.name, record_id)
        return removed is not None

    def clear(self):
        with self._lock:
            self._rows.clear()
            self._next_id = 1
