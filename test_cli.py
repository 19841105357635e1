"""
CLI and Polygon Loader Tests
============================

Vertex file parsing and the polyarea command-line entry point.

Usage:
    pytest test_cli.py
"""

import pytest

from polyarea_geometry import InvalidPolygon
from polyarea_cli import load_polygon, parse_vertices, IOFailure
from polyarea_cli.cli import main


@pytest.fixture
def square_file(tmp_path):
    path = tmp_path / "square.txt"
    path.write_text("0 0\n1 0\n1 1\n0 1\n")
    return path


# ─────────────────────────────────────────────────────────────────────────────
# Loader
# ─────────────────────────────────────────────────────────────────────────────

def test_parse_vertices_skips_unparseable_lines():
    lines = [
        "0 0\n",
        "# comment\n",
        "1.5\t0   trailing tokens\n",
        "\n",
        "nan 1\n",
        "x y\n",
        "  1e0 2.0  \n",
    ]
    assert parse_vertices(lines) == [(0.0, 0.0), (1.5, 0.0), (1.0, 2.0)]


def test_parse_vertices_enforces_capacity():
    lines = [f"{i} {i}" for i in range(5)]
    assert len(parse_vertices(lines, max_vertices=5)) == 5
    with pytest.raises(InvalidPolygon):
        parse_vertices(lines, max_vertices=4)


def test_load_polygon(square_file):
    polygon = load_polygon(square_file)
    assert len(polygon) == 4
    assert polygon.bounds == (0.0, 0.0, 1.0, 1.0)


def test_load_polygon_with_too_few_vertices(tmp_path):
    path = tmp_path / "line.txt"
    path.write_text("0 0\nnot a vertex\n1 1\n")
    with pytest.raises(InvalidPolygon):
        load_polygon(path)


def test_load_polygon_missing_file(tmp_path):
    with pytest.raises(IOFailure):
        load_polygon(tmp_path / "missing.txt")


# ─────────────────────────────────────────────────────────────────────────────
# CLI
# ─────────────────────────────────────────────────────────────────────────────

def test_cli_prints_estimate(square_file, capsys):
    status = main([str(square_file), "2", "40000", "--seed", "3", "--no-progress"])
    out = capsys.readouterr().out

    assert status == 0
    assert out.startswith("estimated area: ")
    assert out.rstrip().endswith(" square units")

    value = float(out.split()[2])
    assert value == pytest.approx(1.0, abs=0.1)


def test_cli_reports_progress(square_file, capsys):
    status = main([str(square_file), "3", "5000", "--progress-interval", "0.01"])
    out = capsys.readouterr().out

    assert status == 0
    assert "\rprogress: 100%" in out
    assert out.rstrip().splitlines()[-1].startswith("estimated area: ")


def test_cli_fit_domain(tmp_path, capsys):
    path = tmp_path / "rect.txt"
    path.write_text("10 10\n13 10\n13 12\n10 12\n")

    status = main([str(path), "2", "20000", "--fit-domain", "--seed", "9", "--no-progress"])
    out = capsys.readouterr().out

    # Domain equals the rectangle, every sample lands inside
    assert status == 0
    assert out.strip() == "estimated area: 6.00 square units"


def test_cli_reads_yaml_config(square_file, tmp_path, capsys):
    config = tmp_path / "run.yaml"
    config.write_text(
        "total_points: 1\n"
        "worker_count: 1\n"
        "batch_size: 128\n"
        "domain:\n"
        "  x_min: 0.0\n"
        "  y_min: 0.0\n"
        "  x_max: 1.0\n"
        "  y_max: 1.0\n"
    )

    status = main([str(square_file), "2", "1000", "--config", str(config), "--no-progress"])
    out = capsys.readouterr().out

    assert status == 0
    assert out.strip() == "estimated area: 1.00 square units"


@pytest.mark.parametrize(
    "line, field",
    [
        ("batch_size: 2.5", "batch_size"),
        ("batch_size: big", "batch_size"),
        ("seed: 1.5", "seed"),
        ("progress_interval: soon", "progress_interval"),
        ("domain: {x_max: wide}", "Domain bounds"),
    ],
)
def test_cli_rejects_mistyped_yaml_values(square_file, tmp_path, capsys, line, field):
    config = tmp_path / "run.yaml"
    config.write_text(f"total_points: 10\nworker_count: 1\n{line}\n")

    status = main([str(square_file), "2", "1000", "--config", str(config), "--no-progress"])
    captured = capsys.readouterr()

    assert status == 1
    assert f"Error: {field}" in captured.err
    assert "estimated area" not in captured.out
    assert "Traceback" not in captured.err


@pytest.mark.parametrize("workers, points", [("0", "100"), ("2", "0"), ("-1", "100")])
def test_cli_rejects_invalid_counts(square_file, capsys, workers, points):
    status = main([str(square_file), workers, points])
    captured = capsys.readouterr()

    assert status == 1
    assert "Error:" in captured.err
    assert "estimated area" not in captured.out


def test_cli_invalid_counts_checked_before_reading_file(tmp_path, capsys):
    status = main([str(tmp_path / "missing.txt"), "0", "100"])
    assert status == 1
    assert "worker_count" in capsys.readouterr().err


def test_cli_missing_polygon_file(tmp_path, capsys):
    status = main([str(tmp_path / "missing.txt"), "2", "100"])
    assert status == 1
    assert "Cannot read polygon file" in capsys.readouterr().err


def test_cli_polygon_with_too_few_vertices(tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_text("0 0\n1 1\n")
    status = main([str(path), "2", "100"])
    assert status == 1
    assert "at least 3 vertices" in capsys.readouterr().err


def test_cli_rejects_non_integer_counts(square_file):
    with pytest.raises(SystemExit) as excinfo:
        main([str(square_file), "two", "100"])
    assert excinfo.value.code == 2
