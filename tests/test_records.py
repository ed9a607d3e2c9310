import pytest

from phrase_upload.errors import FileReadError, ParseError
from phrase_upload.records import PendingRecord, load_records, parse_records


def test_pairs_lines_in_order():
    records = parse_records("greeting\nHello\nfarewell\nGoodbye\n")

    assert records == [
        PendingRecord(key="greeting", value="Hello"),
        PendingRecord(key="farewell", value="Goodbye"),
    ]


def test_blank_lines_do_not_count_toward_pairing():
    records = parse_records("\n\ngreeting\n\nHello\n\n\nfarewell\nGoodbye\n\n")

    assert [(r.key, r.value) for r in records] == [
        ("greeting", "Hello"),
        ("farewell", "Goodbye"),
    ]


def test_crlf_line_endings():
    records = parse_records("a\r\nA\r\nb\r\nB\r\n")

    assert [(r.key, r.value) for r in records] == [("a", "A"), ("b", "B")]


def test_empty_input_yields_no_records():
    assert parse_records("") == []
    assert parse_records("\n\n\n") == []


def test_values_are_kept_verbatim():
    records = parse_records("title\n  Hello, %@!  \n")

    assert records[0].value == "  Hello, %@!  "


@pytest.mark.parametrize(
    "contents",
    ["onlykey\n", "a\nA\nb\n", "a\n\nA\n\nb"],
)
def test_unpaired_key_is_a_parse_error(contents):
    with pytest.raises(ParseError) as exc_info:
        parse_records(contents, source="keys.txt")

    assert exc_info.value.file == "keys.txt"
    assert "keys.txt" in str(exc_info.value)


def test_records_are_immutable():
    record = PendingRecord(key="a", value="A")

    with pytest.raises(AttributeError):
        record.key = "b"


def test_load_records_reads_utf8_file(tmp_path):
    path = tmp_path / "keys.txt"
    path.write_text("greeting\nHallå\n", encoding="utf-8")

    assert load_records(path) == [PendingRecord(key="greeting", value="Hallå")]


def test_load_records_names_file_in_parse_error(tmp_path):
    path = tmp_path / "broken.txt"
    path.write_text("onlykey\n", encoding="utf-8")

    with pytest.raises(ParseError) as exc_info:
        load_records(str(path))

    assert exc_info.value.file == str(path)


def test_load_records_missing_file(tmp_path):
    path = tmp_path / "missing.txt"

    with pytest.raises(FileReadError) as exc_info:
        load_records(path)

    assert exc_info.value.path == str(path)
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


def test_only_newline_separates_lines():
    records = parse_records("title\nHello\u2028World\nk2\nv\x0cx\x85y\n")

    assert [(r.key, r.value) for r in records] == [
        ("title", "Hello\u2028World"),
        ("k2", "v\x0cx\x85y"),
    ]


def test_lone_carriage_return_stays_in_value():
    records = parse_records("a\r\nline1\rline2\r\n")

    assert records == [PendingRecord(key="a", value="line1\rline2")]


def test_load_records_keeps_lone_carriage_return(tmp_path):
    path = tmp_path / "keys.txt"
    path.write_bytes("a\r\nline1\rline2\r\nb\nB C\n".encode("utf-8"))

    assert load_records(path) == [
        PendingRecord(key="a", value="line1\rline2"),
        PendingRecord(key="b", value="B C"),
    ]
