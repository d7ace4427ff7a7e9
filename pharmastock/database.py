"""File-backed store of medicines and their sales."""

from __future__ import annotations

import copy
import logging
import os
import time
from pathlib import Path

from .medicine import Medicine

log = logging.getLogger(__name__)

MEDICINE_FILE = "medicines.dat"
SALES_FILE = "sales.dat"
DATA_DIR_ENV = "PHARMASTOCK_DATA_DIR"


class DatabaseError(Exception):
    """Raised when the data files cannot be read or written."""


def default_data_dir() -> Path:
    """Return the data directory: the environment override or ./data."""
    override = os.environ.get(DATA_DIR_ENV)
    return Path(override) if override else Path.cwd() / "data"


def _parse_medicine(line: str, lineno: int) -> Medicine:
    parts = line.split(",")
    if len(parts) != 8:
        raise DatabaseError(f"malformed medicine record on line {lineno}: {line!r}")
    id_, name, category, manufacturer, price, stock, produced, shelf_life = parts
    try:
        return Medicine(
            id=id_,
            name=name,
            category=category,
            manufacturer=manufacturer,
            price=float(price),
            stock=int(stock),
            production_date=int(produced),
            shelf_life=int(shelf_life),
        )
    except ValueError as exc:
        raise DatabaseError(f"malformed medicine record on line {lineno}: {exc}") from exc


def _parse_sale(line: str, lineno: int) -> tuple[str, int, int]:
    parts = line.split(",")
    if len(parts) != 3:
        raise DatabaseError(f"malformed sales record on line {lineno}: {line!r}")
    medicine_id, when, quantity = parts
    try:
        return medicine_id, int(when), int(quantity)
    except ValueError as exc:
        raise DatabaseError(f"malformed sales record on line {lineno}: {exc}") from exc


def _data_lines(path: Path):
    with path.open(encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, 1):
            line = raw.rstrip("\r\n")
            if line.strip():
                yield lineno, line


class Database:
    """Medicines and sales records, saved to a data directory after each change.

    Used as a context manager, it saves once more on leaving the block.
    """

    def __init__(self, data_dir: str | os.PathLike | None = None) -> None:
        self.data_dir = Path(data_dir) if data_dir is not None else default_data_dir()
        self.medicine_file = self.data_dir / MEDICINE_FILE
        self.sales_file = self.data_dir / SALES_FILE
        self.medicines: list[Medicine] = []
        self.sales_records: dict[str, list[tuple[int, int]]] = {}
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DatabaseError(f"cannot create data directory {self.data_dir}: {exc}") from exc
        log.debug("data directory: %s", self.data_dir)
        self.load()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.save()

    def add_medicine(self, medicine: Medicine) -> None:
        self.medicines.append(medicine)
        log.debug("added medicine %s", medicine.name)
        self.save()

    def update_medicine(self, medicine: Medicine) -> None:
        """Replace the first stored medicine with the same id, then save."""
        for index, stored in enumerate(self.medicines):
            if stored.id == medicine.id:
                self.medicines[index] = medicine
                log.debug("updated medicine %s", medicine.name)
                break
        self.save()

    def find_medicine(self, medicine_id: str) -> Medicine | None:
        """Return the stored medicine with this id, or None."""
        return next((m for m in self.medicines if m.id == medicine_id), None)

    def search_medicines(self, query: str) -> list[Medicine]:
        """Return copies of medicines whose name or id contains ``query``."""
        return [
            copy.copy(m) for m in self.medicines if query in m.name or query in m.id
        ]

    def add_sales_record(self, medicine_id: str, quantity: int, when: int | None = None) -> None:
        if when is None:
            when = int(time.time())
        self.sales_records.setdefault(medicine_id, []).append((int(when), quantity))
        self.save()

    def sales_by_category(self, start: int, end: int) -> dict[str, float]:
        """Sum price times quantity of sales in [start, end], per category.

        Sales of medicines no longer in stock are left out; categories whose
        medicines have sales only outside the window appear with 0.0.
        """
        totals: dict[str, float] = {}
        for medicine_id in sorted(self.sales_records):
            medicine = self.find_medicine(medicine_id)
            if medicine is None:
                continue
            amount = sum(
                (medicine.price * quantity
                 for when, quantity in self.sales_records[medicine_id]
                 if start <= when <= end),
                0.0,
            )
            totals[medicine.category] = totals.get(medicine.category, 0.0) + amount
        return dict(sorted(totals.items()))

    def clear_sales_records(self) -> None:
        self.sales_records.clear()
        self.save()

    def clear_inventory(self) -> None:
        self.medicines.clear()
        self.save()

    def clear_all_data(self) -> None:
        self.medicines.clear()
        self.sales_records.clear()
        self.save()

    def save(self) -> None:
        """Write both data files."""
        try:
            with self.medicine_file.open("w", encoding="utf-8", newline="\n") as fh:
                for m in self.medicines:
                    fh.write(
                        f"{m.id},{m.name},{m.category},{m.manufacturer},"
                        f"{m.price:g},{m.stock},{m.production_date},{m.shelf_life}\n"
                    )
            with self.sales_file.open("w", encoding="utf-8", newline="\n") as fh:
                for medicine_id in sorted(self.sales_records):
                    for when, quantity in self.sales_records[medicine_id]:
                        fh.write(f"{medicine_id},{when},{quantity}\n")
        except OSError as exc:
            raise DatabaseError(f"failed to save data: {exc}") from exc
        log.debug("data saved")

    def load(self) -> None:
        """Replace the contents in memory with those of the data files.

        A missing medicine file is created empty and the sales file is then
        not read; a missing sales file is created empty.
        """
        self.medicines = []
        self.sales_records = {}
        try:
            if not self.medicine_file.exists():
                log.debug("medicine file missing, creating %s", self.medicine_file)
                self.medicine_file.touch()
                return
            self.medicines = [
                _parse_medicine(line, lineno)
                for lineno, line in _data_lines(self.medicine_file)
            ]
            log.debug("loaded %d medicines", len(self.medicines))

            if not self.sales_file.exists():
                log.debug("sales file missing, creating %s", self.sales_file)
                self.sales_file.touch()
                return
            for lineno, line in _data_lines(self.sales_file):
                medicine_id, when, quantity = _parse_sale(line, lineno)
                self.sales_records.setdefault(medicine_id, []).append((when, quantity))
        except OSError as exc:
            raise DatabaseError(f"failed to load data: {exc}") from exc