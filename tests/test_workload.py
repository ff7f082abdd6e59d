"""Tests for reading and normalizing process definitions."""

import json

import pytest

from rrsim.errors import WorkloadError
from rrsim.workload import (
    apply_arrival_strategy,
    demo_processes,
    load_processes,
    normalize_row,
    normalize_rows,
)


class TestNormalize:
    def test_table_cells_are_parsed(self) -> None:
        row = normalize_row({"pid": " P1 ", "arrival": " 2", "burst": "5 ", "priority": "1"})
        assert row == {"pid": "P1", "arrival": 2, "burst": 5, "priority": 1}

    def test_arrival_time_alias_and_default_priority(self) -> None:
        row = normalize_row({"pid": 7, "arrival_time": 0, "burst": 3})
        assert row == {"pid": 7, "arrival": 0, "burst": 3, "priority": 0}

    @pytest.mark.parametrize(
        "row,match",
        [
            ({"pid": "P1", "arrival": "x", "burst": 1}, "arrival"),
            ({"pid": "P1", "arrival": 0, "burst": "2.5"}, "burst"),
            ({"pid": "P1", "arrival": -1, "burst": 1}, "negative"),
            ({"pid": "P1", "arrival": 0, "burst": 0}, "positive"),
            ({"pid": "", "arrival": 0, "burst": 1}, "pid"),
            ({"pid": "P1", "burst": 1}, "arrival"),
            ({"pid": "P1", "arrival": 0}, "burst"),
            ({"pid": [1], "arrival": 0, "burst": 1}, "pid"),
            ({"pid": 1.5, "arrival": 0, "burst": 1}, "pid"),
            ({"pid": True, "arrival": 0, "burst": 1}, "pid"),
        ],
    )
    def test_malformed_rows_rejected(self, row, match) -> None:
        with pytest.raises(WorkloadError, match=match):
            normalize_row(row)

    def test_duplicates_rejected(self) -> None:
        rows = [{"pid": "P1", "arrival": 0, "burst": 1}, {"pid": "P1", "arrival": 1, "burst": 1}]
        with pytest.raises(WorkloadError, match="duplicate"):
            normalize_rows(rows)

    def test_workload_error_is_a_value_error(self) -> None:
        assert issubclass(WorkloadError, ValueError)


class TestLoad:
    def test_json_file(self, tmp_path) -> None:
        path = tmp_path / "jobs.json"
        path.write_text(json.dumps([
            {"pid": "A", "arrival_time": 0, "burst": 4, "priority": 2},
            {"pid": "B", "arrival": 1, "burst": 2},
        ]))
        assert load_processes(path) == [
            {"pid": "A", "arrival": 0, "burst": 4, "priority": 2},
            {"pid": "B", "arrival": 1, "burst": 2, "priority": 0},
        ]

    def test_json_object_with_processes_key_and_limit(self, tmp_path) -> None:
        path = tmp_path / "jobs.json"
        path.write_text(json.dumps({"processes": [
            {"pid": "A", "arrival": 0, "burst": 1},
            {"pid": "B", "arrival": 0, "burst": 1},
        ]}))
        assert [p["pid"] for p in load_processes(path, limit=1)] == ["A"]

    def test_csv_file(self, tmp_path) -> None:
        path = tmp_path / "jobs.csv"
        path.write_text("pid,arrival,burst,priority\nP1,0,3,1\nP2,5,2,\n")
        assert load_processes(path) == [
            {"pid": "P1", "arrival": 0, "burst": 3, "priority": 1},
            {"pid": "P2", "arrival": 5, "burst": 2, "priority": 0},
        ]

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(WorkloadError, match="not found"):
            load_processes(tmp_path / "nope.json")

    def test_bad_json(self, tmp_path) -> None:
        path = tmp_path / "jobs.json"
        path.write_text("{not json")
        with pytest.raises(WorkloadError, match="JSON"):
            load_processes(path)

    def test_json_of_wrong_shape(self, tmp_path) -> None:
        path = tmp_path / "jobs.json"
        path.write_text(json.dumps([1, 2, 3]))
        with pytest.raises(WorkloadError, match="list of process objects"):
            load_processes(path)

    def test_unhashable_pid_is_a_workload_error(self, tmp_path) -> None:
        path = tmp_path / "jobs.json"
        path.write_text(json.dumps([{"pid": [1], "arrival": 0, "burst": 1}]))
        with pytest.raises(WorkloadError, match="pid"):
            load_processes(path)

    def test_csv_with_byte_order_mark(self, tmp_path) -> None:
        path = tmp_path / "jobs.csv"
        path.write_bytes("pid,arrival,burst\nP1,0,3\n".encode("utf-8-sig"))
        assert load_processes(path) == [{"pid": "P1", "arrival": 0, "burst": 3, "priority": 0}]

    @pytest.mark.parametrize("name", ["jobs.csv", "jobs.json"])
    def test_undecodable_file(self, tmp_path, name) -> None:
        path = tmp_path / name
        path.write_bytes(b"pid,arrival,burst\n\xff\xfe,0,1\n")
        with pytest.raises(WorkloadError, match="cannot be read"):
            load_processes(path)

    def test_directory_instead_of_file(self, tmp_path) -> None:
        folder = tmp_path / "jobs.csv"
        folder.mkdir()
        with pytest.raises(WorkloadError, match="cannot be read"):
            load_processes(folder)

    def test_negative_limit(self, tmp_path) -> None:
        path = tmp_path / "jobs.csv"
        path.write_text("pid,arrival,burst\nP1,0,3\n")
        with pytest.raises(WorkloadError, match="limit"):
            load_processes(path, limit=-1)


class TestArrivalStrategies:
    def rows(self, n):
        return [{"pid": f"P{i}", "arrival": 0, "burst": 1, "priority": 0} for i in range(n)]

    def test_original_keeps_arrivals(self) -> None:
        rows = self.rows(3)
        assert apply_arrival_strategy(rows, "original") == self.rows(3)

    def test_staggered_is_increasing_and_seeded(self, tmp_path) -> None:
        path = tmp_path / "jobs.json"
        path.write_text(json.dumps(self.rows(6)))
        first = load_processes(path, arrival_strategy="staggered", seed=4)
        second = load_processes(path, arrival_strategy="staggered", seed=4)
        arrivals = [p["arrival"] for p in first]
        assert arrivals == [p["arrival"] for p in second]
        assert arrivals[0] == 0
        assert all(2 <= b - a <= 5 for a, b in zip(arrivals, arrivals[1:]))

    def test_random_range(self) -> None:
        import random

        rows = apply_arrival_strategy(self.rows(20), "random", random.Random(1))
        assert all(0 <= p["arrival"] <= 50 for p in rows)

    def test_burst_groups(self) -> None:
        import random

        rows = apply_arrival_strategy(self.rows(10), "burst", random.Random(2))
        first, second = rows[:5], rows[5:]
        assert max(p["arrival"] for p in first) < min(p["arrival"] for p in second)
        assert all(0 <= p["arrival"] <= 2 for p in first)

    def test_unknown_strategy(self) -> None:
        with pytest.raises(WorkloadError, match="Invalid arrival strategy"):
            apply_arrival_strategy(self.rows(1), "sometimes")


class TestDefaults:
    def test_demo_processes(self) -> None:
        assert [(p["pid"], p["arrival"], p["burst"]) for p in demo_processes()] == [
            ("P1", 0, 3),
            ("P2", 5, 2),
            ("P3", 8, 4),
        ]

