import random
import typing

import pytest

from tinmesh.config import Settings
from tinmesh.errors import DuplicatePointError, InsufficientPointsError
from tinmesh.geom import Pt, Pt2
from tinmesh.io import emit
from tinmesh.pipeline import convert_file, mesh_from_points
from tinmesh.project import project


def test_project_keeps_order_and_source_index():
    pts = [Pt(3, 4, 5), Pt(-1, 2, 0)]
    assert project(pts) == [Pt2(3, 4, 0), Pt2(-1, 2, 1)]


def test_round_trip_keeps_z():
    pts3 = [(0, 0, 5), (1, 0, 7), (1, 1, 9), (0, 1, 11)]
    z_of = {(x, y): z for x, y, z in pts3}
    result = mesh_from_points(pts3)
    records = result.records()
    assert len(records) == 2
    for rec in records:
        for k in range(3):
            x, y, z = rec[3 * k:3 * k + 3]
            assert z == z_of[(x, y)]


def test_duplicates_dropped_keep_first(caplog):
    pts3 = [(0, 0, 1), (1, 0, 2), (0, 1, 3), (1, 0, 99)]
    with caplog.at_level("WARNING", logger="tinmesh"):
        result = mesh_from_points(pts3)
    # points лишаються в порядку лоадера, трикутник посилається на перше входження
    assert result.points == [Pt(0, 0, 1), Pt(1, 0, 2), Pt(0, 1, 3), Pt(1, 0, 99)]
    assert result.triangulation.triangles == ((0, 1, 2),)
    assert "Dropped 1 point(s)" in caplog.text


def test_indices_refer_to_loader_points_after_dedup():
    # дублікат стоїть ПЕРЕД останньою точкою: індекси не мають зсуватися
    pts3 = [(0, 0, 1), (1, 0, 2), (1, 0, 99), (0, 1, 3)]
    result = mesh_from_points(pts3)
    assert result.triangulation.triangles == ((0, 1, 3),)
    assert emit(result.triangulation, pts3) == result.records()
    assert result.records() == [(0, 0, 1, 1, 0, 2, 0, 1, 3)]


def test_round_trip_with_dropped_duplicates_keeps_z():
    rnd = random.Random(3)
    pts3 = [(rnd.randint(0, 9), rnd.randint(0, 9), rnd.uniform(0, 5)) for _ in range(60)]
    first_z = {}
    for x, y, z in pts3:
        first_z.setdefault((x, y), z)
    result = mesh_from_points(pts3)
    used = {i for t in result.triangulation for i in t}
    assert len(used) < len(pts3)  # дублікати справді були
    for rec in emit(result.triangulation, pts3):
        for k in range(3):
            x, y, z = rec[3 * k:3 * k + 3]
            assert z == first_z[(x, y)]


def test_duplicates_error_mode():
    with pytest.raises(DuplicatePointError):
        mesh_from_points([(0, 0, 1), (1, 0, 2), (0, 1, 3), (1, 0, 99)], duplicates="error")


def test_dedup_can_leave_too_few_points():
    with pytest.raises(InsufficientPointsError):
        mesh_from_points([(0, 0, 1), (0, 0, 2), (1, 1, 3)])


def test_collinear_cloud_gives_no_records():
    result = mesh_from_points([(0, 0, 1), (1, 1, 2), (2, 2, 3)])
    assert result.triangulation.is_empty
    assert result.records() == []


@pytest.mark.parametrize("kwargs", [{"backend": "qhull"}, {"duplicates": "merge"}])
def test_unknown_options(kwargs):
    with pytest.raises(ValueError):
        mesh_from_points([(0, 0, 0), (1, 0, 0), (0, 1, 0)], **kwargs)


def test_scipy_backend_matches_internal():
    pytest.importorskip("scipy")
    rnd = random.Random(42)
    pts3 = [(rnd.uniform(0, 50), rnd.uniform(0, 50), rnd.uniform(0, 5)) for _ in range(200)]
    ours = mesh_from_points(pts3, backend="internal").triangulation
    theirs = mesh_from_points(pts3, backend="scipy").triangulation
    assert ours == theirs


def test_scipy_backend_collinear_and_small():
    pytest.importorskip("scipy")
    assert mesh_from_points([(0, 0, 1), (1, 1, 2), (2, 2, 3)], backend="scipy").triangulation.is_empty
    with pytest.raises(InsufficientPointsError):
        mesh_from_points([(0, 0, 1), (1, 1, 2)], backend="scipy")


def test_convert_file(tmp_path):
    src = tmp_path / "data.csv"
    dst = tmp_path / "mesh.raw"
    src.write_text("X,Y,Z\r\n0,0,5\r\n1,0,7\r\n1,1,9\r\n0,1,11\r\n0.5,,3\r\n", encoding="utf-8")

    result = convert_file(src, dst, Settings(delimiter=",", header=True, duplicates="drop", backend="internal"))

    lines = dst.read_text(encoding="utf-8").split("\n")
    assert len(lines) == len(result.triangulation) == 2
    for line in lines:
        fields = line.split(" ")
        assert len(fields) == 9
        for k in range(3):
            x, y, z = fields[3 * k:3 * k + 3]
            assert z == {("0", "0"): "5", ("1", "0"): "7", ("1", "1"): "9", ("0", "1"): "11"}[(x, y)]


def test_settings_replace_ignores_none():
    cfg = Settings(delimiter=",", header=True, duplicates="drop", backend="internal", log_level="INFO")
    new = cfg.replace(delimiter=";", header=None)
    assert new.delimiter == ";"
    assert new.header is True
    with pytest.raises(ValueError):
        cfg.replace(colour="red")


def test_settings_replace_returns_settings():
    assert typing.get_type_hints(Settings.replace)["return"] is Settings
    assert isinstance(Settings().replace(backend="scipy"), Settings)
