import pytest

from pharmastock.database import (
    DATA_DIR_ENV,
    MEDICINE_FILE,
    SALES_FILE,
    Database,
    DatabaseError,
    default_data_dir,
)
from pharmastock.medicine import Medicine

PRODUCED = 1700000000


def make(id_="A1", name="Aspirin", category="西药", price=12.5, stock=10):
    return Medicine(id_, name, category, "Maker", price, stock, PRODUCED, 365)


@pytest.fixture
def db(tmp_path):
    return Database(tmp_path / "data")


def test_init_creates_directory_and_medicine_file(tmp_path):
    target = tmp_path / "nested" / "data"
    Database(target)
    assert (target / MEDICINE_FILE).is_file()


def test_add_and_reload_round_trip(db):
    med = make()
    db.add_medicine(med)
    reloaded = Database(db.data_dir)
    [got] = reloaded.medicines
    assert (got.id, got.name, got.category, got.manufacturer) == (
        med.id, med.name, med.category, med.manufacturer)
    assert (got.price, got.stock, got.production_date, got.shelf_life) == (
        med.price, med.stock, med.production_date, med.shelf_life)


def test_medicine_file_format(db):
    db.add_medicine(make())
    text = (db.data_dir / MEDICINE_FILE).read_text(encoding="utf-8")
    assert text == "A1,Aspirin,西药,Maker,12.5,10,1700000000,365\n"


def test_find_medicine(db):
    db.add_medicine(make("A1"))
    db.add_medicine(make("B2", name="Ibuprofen"))
    assert db.find_medicine("B2").name == "Ibuprofen"
    assert db.find_medicine("zzz") is None


def test_find_returns_stored_object(db):
    db.add_medicine(make())
    db.find_medicine("A1").stock = 3
    assert db.find_medicine("A1").stock == 3


def test_search_by_name_or_id(db):
    db.add_medicine(make("A1", name="Aspirin"))
    db.add_medicine(make("B2", name="Ibuprofen"))
    assert [m.id for m in db.search_medicines("prof")] == ["B2"]
    assert [m.id for m in db.search_medicines("A1")] == ["A1"]
    assert [m.id for m in db.search_medicines("")] == ["A1", "B2"]
    assert db.search_medicines("nothing") == []


def test_search_returns_copies(db):
    db.add_medicine(make())
    found = db.search_medicines("")[0]
    found.stock = 0
    assert db.find_medicine("A1").stock == make().stock


def test_update_medicine_persists(db):
    db.add_medicine(make())
    changed = make(stock=4)
    db.update_medicine(changed)
    assert db.find_medicine("A1").stock == 4
    assert Database(db.data_dir).find_medicine("A1").stock == 4


def test_update_unknown_medicine_changes_nothing(db):
    db.add_medicine(make())
    db.update_medicine(make("X9"))
    assert [m.id for m in db.medicines] == ["A1"]


def test_sales_records_round_trip(db):
    db.add_medicine(make())
    db.add_sales_record("A1", 2, when=PRODUCED + 10)
    db.add_sales_record("A1", 3, when=PRODUCED + 20)
    reloaded = Database(db.data_dir)
    assert reloaded.sales_records == {"A1": [(PRODUCED + 10, 2), (PRODUCED + 20, 3)]}


def test_sales_by_category_window(db):
    db.add_medicine(make("A1", category="西药", price=2.5))
    db.add_medicine(make("C1", category="中药", price=1.0))
    db.add_sales_record("A1", 4, when=100)
    db.add_sales_record("A1", 7, when=500)
    db.add_sales_record("C1", 2, when=500)
    result = db.sales_by_category(50, 200)
    assert result == {"中药": 0.0, "西药": 10.0}
    assert list(result) == sorted(result)


def test_sales_window_is_inclusive(db):
    db.add_medicine(make(price=2.0))
    db.add_sales_record("A1", 1, when=100)
    db.add_sales_record("A1", 1, when=200)
    assert db.sales_by_category(100, 200) == db.sales_by_category(0, 1000)


def test_sales_of_unknown_medicine_are_ignored(db):
    db.add_sales_record("ghost", 5, when=100)
    assert db.sales_by_category(0, 1000) == {}


def test_clear_sales_records(db):
    db.add_medicine(make())
    db.add_sales_record("A1", 1, when=100)
    db.clear_sales_records()
    assert db.sales_records == {}
    assert Database(db.data_dir).sales_records == {}
    assert len(db.medicines) == 1


def test_clear_inventory_keeps_sales(db):
    db.add_medicine(make())
    db.add_sales_record("A1", 1, when=100)
    db.clear_inventory()
    reloaded = Database(db.data_dir)
    assert reloaded.medicines == []
    assert reloaded.sales_records == {"A1": [(100, 1)]}


def test_clear_all_data(db):
    db.add_medicine(make())
    db.add_sales_record("A1", 1, when=100)
    db.clear_all_data()
    reloaded = Database(db.data_dir)
    assert (reloaded.medicines, reloaded.sales_records) == ([], {})


def test_context_manager_saves_on_exit(tmp_path):
    with Database(tmp_path) as db:
        db.add_medicine(make())
        db.find_medicine("A1").stock = 1
    assert Database(tmp_path).find_medicine("A1").stock == 1


def test_malformed_medicine_line_raises(tmp_path):
    (tmp_path / MEDICINE_FILE).write_text("A1,Aspirin,x\n", encoding="utf-8")
    with pytest.raises(DatabaseError):
        Database(tmp_path)


def test_non_numeric_sales_line_raises(tmp_path):
    (tmp_path / MEDICINE_FILE).write_text("", encoding="utf-8")
    (tmp_path / SALES_FILE).write_text("A1,soon,2\n", encoding="utf-8")
    with pytest.raises(DatabaseError):
        Database(tmp_path)


def test_missing_sales_file_is_created(tmp_path):
    (tmp_path / MEDICINE_FILE).write_text("", encoding="utf-8")
    Database(tmp_path)
    assert (tmp_path / SALES_FILE).is_file()


def test_data_dir_that_is_a_file_raises(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(DatabaseError):
        Database(blocker)


def test_default_data_dir_honours_environment(tmp_path, monkeypatch):
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path / "store"))
    assert default_data_dir() == tmp_path / "store"


def test_default_data_dir_without_environment(tmp_path, monkeypatch):
    monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    monkeypatch.chdir(tmp_path)
    assert default_data_dir() == tmp_path / "data"