"""Data access layer: record store over the stored_record table"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from soshopay_mock.domain.exceptions import NotFoundError
from soshopay_mock.domain.models import PayGoProduct
from soshopay_mock.domain.ports import PAYGO_PRODUCTS, Predicate, Record
from soshopay_mock.infrastructure.database.models import StoredRecord

logger = logging.getLogger(__name__)


class SqlRecordStore:
    """RecordStore backed by SQLAlchemy; writes are flushed, callers commit"""

    def __init__(self, db: Session):
        self.db = db

    def _rows(self, collection: str) -> List[StoredRecord]:
        return (
            self.db.query(StoredRecord)
            .filter(StoredRecord.collection == collection)
            .order_by(StoredRecord.position)
            .all()
        )

    def _row(self, collection: str, record_id: str) -> Optional[StoredRecord]:
        return (
            self.db.query(StoredRecord)
            .filter(StoredRecord.collection == collection, StoredRecord.record_id == str(record_id))
            .first()
        )

    def find_all(self, collection: str) -> List[Record]:
        return [dict(row.data) for row in self._rows(collection)]

    def find_by_id(self, collection: str, record_id: str) -> Optional[Record]:
        row = self._row(collection, record_id)
        return dict(row.data) if row else None

    def find_by(self, collection: str, predicate: Predicate) -> Optional[Record]:
        for record in self.find_all(collection):
            if predicate(record):
                return record
        return None

    def filter(self, collection: str, predicate: Predicate) -> List[Record]:
        return [record for record in self.find_all(collection) if predicate(record)]

    def update(self, collection: str, record_id: str, changes: Mapping[str, Any]) -> Optional[Record]:
        row = self._row(collection, record_id)
        if row is None:
            return None
        # Reassign so SQLAlchemy sees the JSON column change
        row.data = {**row.data, **changes}
        self.db.flush()
        return dict(row.data)

    def update_all(self, collection: str, changes: Mapping[str, Any]) -> int:
        rows = self._rows(collection)
        for row in rows:
            row.data = {**row.data, **changes}
        self.db.flush()
        return len(rows)

    def delete(self, collection: str, record_id: str) -> bool:
        row = self._row(collection, record_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.flush()
        return True

    def load_dataset(self, dataset: Mapping[str, List[Mapping[str, Any]]]) -> Dict[str, int]:
        """Replace every collection named in dataset with its records, in order"""
        counts: Dict[str, int] = {}
        for collection, records in dataset.items():
            self.db.query(StoredRecord).filter(StoredRecord.collection == collection).delete()
            for position, record in enumerate(records):
                self.db.add(
                    StoredRecord(
                        collection=collection,
                        record_id=str(record["id"]),
                        position=position,
                        data=dict(record),
                    )
                )
            counts[collection] = len(records)
        self.db.flush()
        return counts


def seed_from_file(db: Session, path: Path) -> Dict[str, int]:
    """Load a json-server style db.json into the store and commit"""
    dataset = json.loads(Path(path).read_text(encoding="utf-8"))
    counts = SqlRecordStore(db).load_dataset(dataset)
    db.commit()
    logger.info("Dataset seeded", extra={"dataset_path": str(path), "collections": counts})
    return counts


class StoreProductCatalog:
    """PayGo product catalog read from the paygo_products collection"""

    def __init__(self, store: SqlRecordStore):
        self.store = store

    @staticmethod
    def _to_product(record: Mapping[str, Any]) -> PayGoProduct:
        return PayGoProduct(
            id=str(record["id"]),
            name=record.get("name", ""),
            price=float(record.get("price", 0)),
            category=record.get("category", ""),
        )

    def get_product(self, product_id: str) -> PayGoProduct:
        record = self.store.find_by_id(PAYGO_PRODUCTS, product_id)
        if record is None:
            raise NotFoundError("Product not found")
        return self._to_product(record)

    def list_products(self) -> List[PayGoProduct]:
        return [self._to_product(record) for record in self.store.find_all(PAYGO_PRODUCTS)]
