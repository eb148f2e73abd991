import pytest

from tinmesh.geom import Pt
from tinmesh.io import emit, format_number, format_raw, parse_points, read_points, write_raw
from tinmesh.mesh import Triangulation


def test_parse_drops_incomplete_rows_keeps_zeros():
    pts = parse_points("0, 1, 2\r\n3, 4, 5\r\n6,,8", header=False)
    assert pts == [Pt(0, 1, 2), Pt(3, 4, 5)]


def test_parse_skips_header_and_blank_lines():
    text = "x,y,z\n1,2,3\n\n4,5,6\n"
    assert parse_points(text) == [Pt(1, 2, 3), Pt(4, 5, 6)]


def test_parse_rejects_garbage_and_short_rows(caplog):
    text = "1,2,3\nabc,2,3\n1,2\n1,2,inf\n7,8,9,extra"
    with caplog.at_level("WARNING", logger="tinmesh"):
        pts = parse_points(text, header=False)
    assert pts == [Pt(1, 2, 3), Pt(7, 8, 9)]
    assert "Dropped 3 row(s)" in caplog.text


def test_parse_other_delimiter_and_newlines():
    text = "1;2;3\r4;5;6\n7;8;9"
    assert parse_points(text, delimiter=";", header=False) == [Pt(1, 2, 3), Pt(4, 5, 6), Pt(7, 8, 9)]


def test_read_points_with_bom(tmp_path):
    path = tmp_path / "data.csv"
    path.write_bytes("\ufeffX,Y,Z\r\n1.5,2,3\r\n".encode("utf-8"))
    assert read_points(path) == [Pt(1.5, 2, 3)]


@pytest.mark.parametrize("value, text", [
    (5.0, "5"),
    (0.0, "0"),
    (-0.0, "0"),
    (-7.0, "-7"),
    (100.0, "100"),
    (0.1, "0.1"),
    (1.25, "1.25"),
    (-1234.5678, "-1234.5678"),
    (0.000001, "0.000001"),
    (1e-7, "1e-7"),
    (1.5e-8, "1.5e-8"),
    (1e21, "1e+21"),
    (123456789012.0, "123456789012"),
])
def test_format_number(value, text):
    assert format_number(value) == text


def test_emit_resolves_indices_in_order():
    pts = [Pt(0, 0, 5), Pt(1, 0, 7), Pt(0, 1, 9)]
    tri = Triangulation(((0, 1, 2),))
    assert emit(tri, pts) == [(0, 0, 5, 1, 0, 7, 0, 1, 9)]


def test_emit_rejects_2d_points():
    with pytest.raises(ValueError):
        emit([(0, 1, 2)], [(0, 0), (1, 0), (0, 1)])


def test_format_raw_layout():
    records = [(0, 0, 5, 1, 0, 7, 1, 1, 9), (0.5, 0, 1, 1, 0, 2, 1, 1, 3)]
    assert format_raw(records) == "0 0 5 1 0 7 1 1 9\n0.5 0 1 1 0 2 1 1 3"
    assert format_raw([]) == ""


def test_write_raw_no_trailing_newline(tmp_path):
    path = tmp_path / "mesh.raw"
    write_raw(path, [(0, 0, 5, 1, 0, 7, 1, 1, 9)])
    assert path.read_bytes() == b"0 0 5 1 0 7 1 1 9"
