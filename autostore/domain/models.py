from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Mapping


@dataclass
class Store:
    code: int
    name: str
    address: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Store":
        return cls(code=int(row["code"]), name=row["name"], address=row["address"])

    def to_dict(self) -> dict:
        return asdict(self)

    def describe(self) -> str:
        return f"Code: {self.code}\nName: {self.name}\nAddress: {self.address}"


@dataclass
class Vehicle:
    """Plain value holder. `price` is whatever was (or will be) stored; depreciation lives in the service layer."""
    code: int
    brand: str
    model: str
    year: int
    store_id: int
    price: float
    condition: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Vehicle":
        return cls(
            code=int(row["code"]),
            brand=row["brand"],
            model=row["model"],
            year=int(row["year"]) if row["year"] is not None else 0,
            store_id=int(row["store_id"]) if row["store_id"] is not None else 0,
            price=float(row["price"]) if row["price"] is not None else 0.0,
            condition=row["condition"],
        )

    def to_dict(self) -> dict:
        return asdict(self)

    def describe(self) -> str:
        return (
            f"Code: {self.code}\n"
            f"Brand: {self.brand}\n"
            f"Model: {self.model}\n"
            f"Year: {self.year}\n"
            f"Condition: {self.condition}\n"
            f"Price: {self.price:,.2f}\n"
            f"Store: {self.store_id}"
        )
