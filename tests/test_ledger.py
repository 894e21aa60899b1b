import pytest

from hyprdrop.ledger import AddressLedger, FileLedgerStore, MemoryLedgerStore, parse_line
from hyprdrop.matcher import ClientMatcher
from hyprdrop.models import ByOpaqueHandle

from .conftest import make_client


@pytest.fixture
def ledger_path(tmp_path):
    return tmp_path / "state" / "hyprdrop" / "addresses"


@pytest.mark.asyncio
async def test_missing_file_is_empty(ledger_path, test_log):
    store = FileLedgerStore(ledger_path, test_log)
    assert await store.load() == {}


@pytest.mark.asyncio
async def test_malformed_rows_are_skipped(tmp_path, test_log):
    path = tmp_path / "addresses"
    path.write_text("term=0x55aa01\ngarbage\n\n=0x55aa02\nother=notanaddress\nlast=0x55aa03\n", encoding="utf-8")
    store = FileLedgerStore(path, test_log)
    assert await store.load() == {"term": "0x55aa01", "last": "0x55aa03"}


@pytest.mark.asyncio
async def test_undecodable_row_is_skipped(tmp_path, test_log):
    path = tmp_path / "addresses"
    path.write_bytes(b"term=0x55aa01\n\xff\xfe=0x55aa02\n")
    ledger = AddressLedger(FileLedgerStore(path, test_log), test_log)
    window = make_client(address="0x55aa01", initial_title="other")

    assert await ClientMatcher(ledger, test_log).find(ByOpaqueHandle(key="term"), [window]) == window
    assert await ledger.entries() == {"term": "0x55aa01"}


def test_parse_line_splits_on_last_delimiter():
    assert parse_line("a=b=0x55aa01\n") == ("a=b", "0x55aa01")
    assert parse_line("term 0x55aa01") is None


@pytest.mark.asyncio
async def test_record_then_lookup(ledger_path, test_log):
    ledger = AddressLedger(FileLedgerStore(ledger_path, test_log), test_log)
    await ledger.record("term", "0x55aa01")

    assert await ledger.lookup("term", [make_client(address="0x55aa01")]) == "0x55aa01"
    assert ledger_path.read_text(encoding="utf-8") == "term=0x55aa01\n"


@pytest.mark.asyncio
async def test_record_updates_in_place(ledger_path, test_log):
    ledger_path.parent.mkdir(parents=True)
    ledger_path.write_text("term=0x55aa01\nother=0x55bb01\n", encoding="utf-8")

    ledger = AddressLedger(FileLedgerStore(ledger_path, test_log), test_log)
    await ledger.record("term", "0x55aa02")

    assert ledger_path.read_text(encoding="utf-8") == "term=0x55aa02\nother=0x55bb01\n"
    # a new invocation sees the new value
    fresh = AddressLedger(FileLedgerStore(ledger_path, test_log), test_log)
    assert await fresh.lookup("term", [make_client(address="0x55aa02")]) == "0x55aa02"


@pytest.mark.asyncio
async def test_stale_entry_never_matches(test_log):
    ledger = AddressLedger(MemoryLedgerStore({"term": "0x55aa01"}), test_log)
    assert await ledger.lookup("term", [make_client(address="0x55ff00")]) is None
    assert await ledger.lookup("term", []) is None


@pytest.mark.asyncio
async def test_unknown_key(memory_ledger):
    assert await memory_ledger.lookup("term", [make_client()]) is None


@pytest.mark.asyncio
async def test_record_same_address_does_not_write(test_log, mocker):
    store = MemoryLedgerStore({"term": "0x55aa01"})
    save = mocker.spy(store, "save")
    ledger = AddressLedger(store, test_log)

    await ledger.record("term", "0x55aa01")
    save.assert_not_called()

    await ledger.record("term", "0x55aa02")
    save.assert_called_once()
    assert store.entries == {"term": "0x55aa02"}
