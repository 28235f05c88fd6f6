from pydantic import BaseModel
from typing import Optional, Dict, List


class ProductRecord(BaseModel):
    """One search result captured from the storefront"""
    name: str
    url: str = ""
    price: str = ""
    price_per_unit: str = ""
    quantity: Optional[str] = None

    def is_usable(self) -> bool:
        return bool(self.name) and bool(self.url or self.price)


class ShoppingData(BaseModel):
    """Persisted scrape result, options keyed opt_1..opt_n in extraction order"""
    supervalu: Dict[str, ProductRecord] = {}

    @classmethod
    def from_records(cls, records: List[ProductRecord]) -> "ShoppingData":
        data = cls()
        for index, record in enumerate(records, start=1):
            data.add_option(index, record)
        return data

    def add_option(self, index: int, record: ProductRecord):
        self.supervalu[f"opt_{index}"] = record

    def to_document(self) -> dict:
        """Plain dict for YAML output, quantity omitted when unset"""
        return {
            "supervalu": {
                key: record.model_dump(exclude_none=True)
                for key, record in self.supervalu.items()
            }
        }
