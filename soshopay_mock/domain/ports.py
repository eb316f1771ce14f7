"""Interfaces the domain needs from storage; implementations are injected"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol

from soshopay_mock.domain.models import PayGoProduct

Record = Dict[str, Any]
Predicate = Callable[[Mapping[str, Any]], bool]

CLIENTS = "clients"
LOANS = "loans"
SETTLED_LOANS = "settled_loans"
PAYMENTS = "payments"
NOTIFICATIONS = "notifications"
PAYGO_PRODUCTS = "paygo_products"


class RecordStore(Protocol):
    """Ordered collections of JSON records keyed by their "id" field"""

    def find_all(self, collection: str) -> List[Record]:
        ...

    def find_by_id(self, collection: str, record_id: str) -> Optional[Record]:
        ...

    def find_by(self, collection: str, predicate: Predicate) -> Optional[Record]:
        """First record, in storage order, matching predicate"""
        ...

    def filter(self, collection: str, predicate: Predicate) -> List[Record]:
        ...

    def update(self, collection: str, record_id: str, changes: Mapping[str, Any]) -> Optional[Record]:
        """Merge changes into one record; None if it does not exist"""
        ...

    def update_all(self, collection: str, changes: Mapping[str, Any]) -> int:
        ...

    def delete(self, collection: str, record_id: str) -> bool:
        ...


class ProductCatalog(Protocol):
    """Lookup of PayGo products by id"""

    def get_product(self, product_id: str) -> PayGoProduct:
        """Raise NotFoundError when the product does not exist"""
        ...

    def list_products(self) -> List[PayGoProduct]:
        ...
