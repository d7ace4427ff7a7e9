"""Command-line front end for managing pharmacy stock and sales."""

from __future__ import annotations

import argparse
import sys
from datetime import date, datetime
from typing import Callable, Sequence

from .database import Database, DatabaseError
from .medicine import Medicine
from .statistics import Period, sales_report

CATEGORIES = ("处方药", "非处方药", "中药", "西药", "保健品")
TABLE_HEADERS = ("药品编号", "药品名称", "类别", "生产商", "价格", "库存", "生产日期", "保质期")
STATS_HEADERS = ("类别", "销售额")

MAX_PRICE = 999999.99
MAX_STOCK = 999999
MIN_SHELF_LIFE = 1
MAX_SHELF_LIFE = 3650

_CLEAR_PROMPTS = {
    "sales": ("确定要清除所有销售记录吗？此操作无法恢复！", "所有销售记录已清除"),
    "inventory": ("确定要清除所有库存数据吗？此操作无法恢复！", "所有库存数据已清除"),
    "all": ("确定要清除所有数据吗？包括库存和销售记录！此操作无法恢复！", "所有数据已清除"),
}


class SaleError(Exception):
    """Raised when a sale cannot be made."""


def format_row(medicine: Medicine) -> list[str]:
    """Return the table cells shown for one medicine."""
    produced = datetime.fromtimestamp(medicine.production_date).strftime("%Y-%m-%d")
    return [
        medicine.id,
        medicine.name,
        medicine.category,
        medicine.manufacturer,
        f"{medicine.price:.2f}",
        str(medicine.stock),
        produced,
        f"{medicine.shelf_life} 天",
    ]


def sell_medicine(database: Database, medicine_id: str, quantity: int) -> Medicine:
    """Sell ``quantity`` units of a medicine, record the sale and return the medicine."""
    medicine = database.find_medicine(medicine_id)
    if medicine is None:
        raise SaleError(f"no medicine with id {medicine_id!r}")
    if not 1 <= quantity <= medicine.stock:
        raise SaleError(
            f"quantity must be between 1 and {medicine.stock}, got {quantity}"
        )
    medicine.stock -= quantity
    database.update_medicine(medicine)
    database.add_sales_record(medicine_id, quantity)
    return medicine


def _bounded_int(low: int, high: int) -> Callable[[str], int]:
    def convert(text: str) -> int:
        try:
            value = int(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
        if not low <= value <= high:
            raise argparse.ArgumentTypeError(f"must be between {low} and {high}")
        return value

    return convert


def _price(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from None
    if not 0 <= value <= MAX_PRICE:
        raise argparse.ArgumentTypeError(f"must be between 0 and {MAX_PRICE}")
    return round(value, 2)


def _iso_date(text: str) -> date:
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {text!r}") from None


def _midnight_epoch(day: date) -> int:
    return int(datetime(day.year, day.month, day.day).timestamp())


def _print_medicines(medicines: Sequence[Medicine]) -> None:
    print("\t".join(TABLE_HEADERS))
    for medicine in medicines:
        print("\t".join(format_row(medicine)))


def _cmd_list(db: Database, args: argparse.Namespace) -> int:
    _print_medicines(db.search_medicines(""))
    return 0


def _cmd_search(db: Database, args: argparse.Namespace) -> int:
    _print_medicines(db.search_medicines(args.query))
    return 0


def _cmd_add(db: Database, args: argparse.Namespace) -> int:
    produced = args.production_date or date.today()
    db.add_medicine(
        Medicine(
            id=args.id,
            name=args.name,
            category=args.category,
            manufacturer=args.manufacturer,
            price=args.price,
            stock=args.stock,
            production_date=_midnight_epoch(produced),
            shelf_life=args.shelf_life,
        )
    )
    _print_medicines(db.search_medicines(""))
    return 0


def _cmd_sell(db: Database, args: argparse.Namespace) -> int:
    sell_medicine(db, args.id, args.quantity)
    _print_medicines(db.search_medicines(""))
    return 0


def _cmd_stats(db: Database, args: argparse.Namespace) -> int:
    period = Period(args.period)
    print(period.label)
    print("\t".join(STATS_HEADERS))
    for category, amount in sales_report(db, period):
        print(f"{category}\t{amount:.2f}")
    return 0


def _cmd_clear(db: Database, args: argparse.Namespace) -> int:
    question, done = _CLEAR_PROMPTS[args.what]
    if not args.yes:
        answer = input(f"{question} [y/N] ").strip().lower()
        if answer not in ("y", "yes"):
            return 0
    if args.what == "sales":
        db.clear_sales_records()
    elif args.what == "inventory":
        db.clear_inventory()
    else:
        db.clear_all_data()
    print(done)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the command line."""
    parser = argparse.ArgumentParser(prog="pharmastock", description="药店药品管理系统")
    parser.add_argument("--data-dir", help="directory holding the data files")
    sub = parser.add_subparsers(dest="command")

    p_list = sub.add_parser("list", help="show all medicines")
    p_list.set_defaults(handler=_cmd_list)

    p_search = sub.add_parser("search", help="search by name or id")
    p_search.add_argument("query")
    p_search.set_defaults(handler=_cmd_search)

    p_add = sub.add_parser("add", help="put a medicine into stock")
    p_add.add_argument("id")
    p_add.add_argument("name")
    p_add.add_argument("--category", choices=CATEGORIES, default=CATEGORIES[0])
    p_add.add_argument("--manufacturer", default="")
    p_add.add_argument("--price", type=_price, default=0.0)
    p_add.add_argument("--stock", type=_bounded_int(0, MAX_STOCK), default=0)
    p_add.add_argument("--production-date", type=_iso_date, default=None)
    p_add.add_argument(
        "--shelf-life",
        type=_bounded_int(MIN_SHELF_LIFE, MAX_SHELF_LIFE),
        default=MIN_SHELF_LIFE,
        help="shelf life in days",
    )
    p_add.set_defaults(handler=_cmd_add)

    p_sell = sub.add_parser("sell", help="sell a medicine")
    p_sell.add_argument("id")
    p_sell.add_argument("quantity", type=int)
    p_sell.set_defaults(handler=_cmd_sell)

    p_stats = sub.add_parser("stats", help="sales per category")
    p_stats.add_argument(
        "--period", choices=[p.value for p in Period], default=Period.TODAY.value
    )
    p_stats.set_defaults(handler=_cmd_stats)

    p_clear = sub.add_parser("clear", help="clear stored data")
    p_clear.add_argument("what", choices=tuple(_CLEAR_PROMPTS))
    p_clear.add_argument("--yes", action="store_true", help="do not ask for confirmation")
    p_clear.set_defaults(handler=_cmd_clear)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    args = build_parser().parse_args(argv)
    handler = getattr(args, "handler", _cmd_list)
    try:
        with Database(args.data_dir) as db:
            return handler(db, args)
    except (DatabaseError, SaleError) as exc:
        print(f"错误: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())