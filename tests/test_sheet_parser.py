import pytest

from cube_mover.sheets import SheetParseError, parse_sheet, read_rows
from cube_mover.sheets import parser as sheet_parser


def test_parse_basic_sheet():
    """Each name/value row becomes one mapping entry."""
    text = "name,value\ncubeSize,5.0\ncubeMoveStep,1.5\n"
    assert parse_sheet(text) == {"cubeSize": "5.0", "cubeMoveStep": "1.5"}


def test_parse_keeps_unknown_names_as_raw_entries():
    """The parser does not filter names; that is the oscillator's job."""
    sheet = parse_sheet("name,value\nfoo,bar\ncubeMoveMax,4\n")
    assert sheet == {"foo": "bar", "cubeMoveMax": "4"}


def test_rows_missing_a_cell_are_skipped():
    """Rows without a name or value are dropped without failing the sheet."""
    text = "name,value\ncubeSize,2\ncubeMoveStep\n,7\ncubeMoveMax,\n"
    assert parse_sheet(text) == {"cubeSize": "2"}


def test_duplicate_names_last_row_wins():
    """A later row overwrites an earlier one with the same name."""
    text = "name,value\ncubeSize,1\ncubeSize,3\n"
    assert parse_sheet(text) == {"cubeSize": "3"}


def test_extra_columns_and_column_order_do_not_matter():
    """Columns are located by header name, not position."""
    text = "note,value,name\nhello,2.5,cubeSize\n"
    assert parse_sheet(text) == {"cubeSize": "2.5"}


def test_cells_are_trimmed_and_quotes_handled():
    """Whitespace is trimmed and quoted cells may contain commas."""
    text = "name , value\n  cubeSize ,\"6.25\"\n\"odd, name\",x\n"
    sheet = parse_sheet(text)
    assert sheet["cubeSize"] == "6.25"
    assert sheet["odd, name"] == "x"


def test_bom_and_crlf_are_tolerated():
    """A leading BOM and Windows line endings do not break the header."""
    text = "\ufeffname,value\r\ncubeSize,4\r\n"
    assert parse_sheet(text) == {"cubeSize": "4"}


@pytest.mark.parametrize("text", ["", "   ", "\n\n"])
def test_empty_body_yields_empty_mapping(text):
    """Empty text parses to an empty mapping rather than an error."""
    assert parse_sheet(text) == {}


def test_header_without_required_columns_is_rejected():
    """A header lacking name/value makes the whole sheet malformed."""
    with pytest.raises(SheetParseError):
        parse_sheet("key,val\ncubeSize,5\n")


def test_read_rows_preserves_order_and_blank_lines():
    """Blank lines are dropped and row order is kept."""
    rows = read_rows("name,value\n\na,1\nb,2\n")
    assert rows == [{"name": "a", "value": "1"}, {"name": "b", "value": "2"}]


def test_parse_sheet_tokenizes_once(monkeypatch):
    """parse_sheet reads the CSV table a single time."""
    calls = []
    original = sheet_parser._read_table

    def counting(text):
        calls.append(text)
        return original(text)

    monkeypatch.setattr(sheet_parser, "_read_table", counting)
    assert parse_sheet("name,value\ncubeSize,2\n") == {"cubeSize": "2"}
    assert len(calls) == 1
