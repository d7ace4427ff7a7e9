# pharmastock

Keep track of a small pharmacy's stock: record medicines as they come in,
sell them against the stock on hand, search the inventory by name or code,
and total sales per category over the last day, month, quarter or year.

## Storage

Everything is stored as plain comma-separated text in a data directory:

- `medicines.dat` – one medicine per line: code, name, category,
  manufacturer, price, stock, production date (seconds since the epoch) and
  shelf life in days;
- `sales.dat` – one sale per line: medicine code, time of sale (seconds since
  the epoch) and quantity.

The data directory is the one given with `--data-dir` (or passed to
`Database`); otherwise it is the directory named by the environment variable
`PHARMASTOCK_DATA_DIR`, or else `data` under the current directory. It is
created if missing, and so are empty data files.

Every change is written to disk straight away. Blank lines in the files are
skipped; a line with the wrong number of fields or a field that is not a
number raises `DatabaseError`, as does a file that cannot be read or written.
Prices are written with six significant digits. Fields are not quoted, so a
name or manufacturer must not contain a comma.

## Installing

```
pip install .
```

Python 3.10 or later is required; there are no other dependencies.

## Command line

```
pharmastock [--data-dir DIR] COMMAND ...
```

| Command | What it does |
| --- | --- |
| `list` | Show every medicine (also what runs when no command is given). |
| `search QUERY` | Show medicines whose name or code contains `QUERY`. |
| `add ID NAME [options]` | Put a medicine into stock, then show the inventory. |
| `sell ID QUANTITY` | Sell units of a medicine, record the sale, then show the inventory. |
| `stats [--period today\|month\|quarter\|year]` | Sales amount per category; default `today`. |
| `clear sales\|inventory\|all [--yes]` | Clear sales records, the inventory, or both. |

Options of `add`:

- `--category` – one of 处方药, 非处方药, 中药, 西药, 保健品 (default 处方药);
- `--manufacturer` – default empty;
- `--price` – 0 to 999999.99, rounded to two decimals (default 0);
- `--stock` – 0 to 999999 (default 0);
- `--production-date YYYY-MM-DD` – stored as local midnight of that day
  (default today);
- `--shelf-life` – days, 1 to 3650 (default 1).

A sale must be of at least one unit and may not exceed the stock on hand.
`clear` asks for confirmation unless `--yes` is given. The periods of
`stats` are rolling windows ending now: the last 1, 30, 90 or 365 days.

The inventory is printed as tab-separated columns with a header row; the
production date is shown as `YYYY-MM-DD` and the price with two decimals.
Errors (an unknown medicine, a bad quantity, unreadable data) are printed to
standard error and the command exits with status 1.

To see all options:

```
pharmastock --help
```

## Using it from Python

```python
import time

from pharmastock.database import Database, default_data_dir
from pharmastock.medicine import Medicine
from pharmastock.statistics import Period, sales_report

with Database(default_data_dir()) as db:
    aspirin = Medicine("A001", "Aspirin", "西药", "Acme Pharma", 12.5, 100,
                       int(time.time()), 730)
    db.add_medicine(aspirin)
    db.add_sales_record("A001", 3, int(time.time()))

    for period in Period:
        print(period.label, sales_report(db, period, int(time.time())))
```

- `Database.find_medicine(id)` returns the stored medicine or `None`;
  `Database.search_medicines(query)` returns copies of every medicine whose
  name or code contains the query (an empty query lists the whole inventory).
- `Database.update_medicine` replaces the stored medicine with the same code.
- `Database.sales_by_category(start, end)` sums price times quantity for
  sales between `start` and `end` inclusive, grouped by category and sorted
  by category name. Sales of medicines no longer in the inventory are left
  out.
- `Database.clear_sales_records`, `clear_inventory` and `clear_all_data`
  empty the stored data; `save` and `load` write and re-read the files.
  Used as a context manager, a `Database` saves once more on leaving the
  block.
- `pharmastock.cli.sell_medicine(db, id, quantity)` lowers the stock and
  records the sale, raising `SaleError` for an unknown code or a quantity
  outside 1 to the stock on hand.
- `statistics.period_start(period, now)` gives the start of a reporting
  window; `sales_report(db, period, now)` returns `(category, amount)` pairs.
- `Medicine.is_expired(now)` and `Medicine.is_near_expiration(now)` (less
  than 30 days of shelf life left) check a medicine against a given moment,
  the current time if `now` is omitted.

## What it does not do

There is no graphical interface: everything is done through the
`pharmastock` command or from Python. Expired or nearly expired medicines
are not flagged in the inventory listing; use the `Medicine` methods for
that.