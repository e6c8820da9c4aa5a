import pytest

from gtfs_merge.catalog import PRIMARY_ID_FIELDS
from gtfs_merge.errors import CsvReadError, NoHeaderFound
from gtfs_merge.merge.table import merge_table


def test_single_id_last_write_wins(tmp_path, feed_file):
    a = feed_file(tmp_path / "a", "stops.txt", "stop_id,stop_name\nA,X\nB,Other\n")
    b = feed_file(tmp_path / "b", "stops.txt", "stop_id,stop_name\nA,Y\n")
    merged = merge_table([a, b], ["stop_id"], "long", name="stops.txt")
    assert merged.header == ["stop_id", "stop_name"]
    # A keeps its first-seen position but carries the later content
    assert merged.rows == [["A", "Y"], ["B", "Other"]]
    assert merged.rows_replaced == 1


def test_single_id_empty_value_row_is_dropped(tmp_path, feed_file):
    a = feed_file(tmp_path / "a", "stops.txt", "stop_id,stop_name\n,Nameless\nS1,Named\n")
    merged = merge_table([a], ["stop_id"], None)
    assert merged.rows == [["S1", "Named"]]
    assert merged.rows_dropped == 1


def test_composite_keys_keep_distinct_sequences(tmp_path, feed_file):
    header = "trip_id,arrival_time,stop_id,stop_sequence\n"
    a = feed_file(tmp_path / "a", "stop_times.txt", header + "T1,08:00,S1,1\nT1,08:05,S2,2\n")
    b = feed_file(tmp_path / "b", "stop_times.txt", header + "T1,08:06,S2,2\n")
    merged = merge_table([a, b], PRIMARY_ID_FIELDS["stop_times.txt"], "long")
    assert merged.rows == [
        ["T1", "08:00", "S1", "1"],
        ["T1", "08:06", "S2", "2"],
    ]


def test_composite_all_empty_keys_collapse(tmp_path, feed_file):
    # known quirk: rows whose composite id fields are all empty overwrite each other
    header = "trip_id,arrival_time,stop_id,stop_sequence\n"
    a = feed_file(tmp_path / "a", "stop_times.txt", header + ",08:00,S1,\n,09:00,S2,\n")
    merged = merge_table([a], PRIMARY_ID_FIELDS["stop_times.txt"], None)
    assert merged.rows == [["", "09:00", "S2", ""]]
    assert merged.rows_dropped == 0


def test_no_id_table_keeps_every_row(tmp_path, feed_file):
    header = "feed_publisher_name,feed_lang\n"
    a = feed_file(tmp_path / "a", "feed_info.txt", header + "Acme,en\nAcme,en\n")
    b = feed_file(tmp_path / "b", "feed_info.txt", header + "Acme,en\n")
    merged = merge_table([a, b], PRIMARY_ID_FIELDS["feed_info.txt"], None)
    assert len(merged.rows) == 3
    assert merged.rows_replaced == 0


def test_rows_align_to_reference_header(tmp_path, feed_file):
    a = feed_file(tmp_path / "a", "routes.txt", "route_id,route_short_name\nR1,1\n")
    b = feed_file(tmp_path / "b", "routes.txt", "route_type,route_id,route_short_name,route_color\n3,R2,2,FF0000\n")
    merged = merge_table([a, b], ["route_id"], "long")
    assert merged.header == ["route_type", "route_id", "route_short_name", "route_color"]
    assert merged.rows == [["", "R1", "1", ""], ["3", "R2", "2", "FF0000"]]
    assert all(len(r) == len(merged.header) for r in merged.rows)


def test_short_header_drops_extra_columns(tmp_path, feed_file):
    a = feed_file(tmp_path / "a", "routes.txt", "route_id,route_short_name\nR1,1\n")
    b = feed_file(tmp_path / "b", "routes.txt", "route_type,route_id,route_short_name\n3,R2,2\n")
    merged = merge_table([a, b], ["route_id"], "short")
    assert merged.rows == [["R1", "1"], ["R2", "2"]]


def test_blank_lines_and_headerless_files_are_skipped(tmp_path, feed_file):
    a = feed_file(tmp_path / "a", "agency.txt", "")
    b = feed_file(tmp_path / "b", "agency.txt", "agency_id,agency_name\n\nA1,Acme\n\n")
    merged = merge_table([a, b], ["agency_id"], None)
    assert merged.rows == [["A1", "Acme"]]
    assert merged.files == 1
    assert merged.rows_read == 1


def test_missing_headers_everywhere_raise(tmp_path, feed_file):
    a = feed_file(tmp_path / "a", "levels.txt", "")
    with pytest.raises(NoHeaderFound):
        merge_table([a], ["level_id"], "long", name="levels.txt")


def test_malformed_text_raises_csv_read_error(tmp_path, feed_file):
    huge = "x" * 200_000
    a = feed_file(tmp_path / "a", "stops.txt", f"stop_id,stop_name\nS1,{huge}\n")
    with pytest.raises(CsvReadError) as ei:
        merge_table([a], ["stop_id"], None)
    assert "stops.txt" in str(ei.value)


def test_undecodable_bytes_raise_csv_read_error(tmp_path):
    feed = tmp_path / "a"
    feed.mkdir()
    p = feed / "stops.txt"
    p.write_bytes(b"stop_id,stop_name\nS1,Caf\xe9\n")
    with pytest.raises(CsvReadError) as ei:
        merge_table([p], ["stop_id"], None, name="stops.txt")
    assert "stops.txt" in str(ei.value)
    assert isinstance(ei.value.__cause__, UnicodeDecodeError)
