import json
import os
import tempfile

import pytest

from evalwatch.core.config import WatchConfig, load_config
from evalwatch.core.info import Info
from evalwatch.logger import (
    ALWAYS,
    COMMON_HEADERS,
    EVALUATIONS,
    TRANSFORMED_Y,
    BoundProperty,
    FlatFile,
    Property,
    TransformedY,
)
from evalwatch.sinks import JSONLSink, MemorySink, TableSink

from tests.helpers import PROBLEM, make_info, run_stream


def test_jsonl_sink_writes_lines_in_column_order():
    with tempfile.TemporaryDirectory() as d:
        path = os.path.join(d, "sub", "log.jsonl")
        sink = JSONLSink(path)
        sink.write({"b": 1, "a": 2})
        sink.write({"c": None})
        sink.close()
        sink.close()

        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().strip().splitlines()
        assert len(lines) == 2
        assert list(json.loads(lines[0])) == ["b", "a"]
        assert json.loads(lines[1]) == {"c": None}


def test_jsonl_sink_rejects_bad_args():
    with tempfile.TemporaryDirectory() as d:
        with pytest.raises(ValueError):
            JSONLSink(os.path.join(d, "x.jsonl"), flush_every=0)
        sink = JSONLSink(os.path.join(d, "x.jsonl"))
        with pytest.raises(ValueError):
            sink.write(["not", "a", "dict"])
        sink.close()


def test_flatfile_row_layout_and_no_value():
    sink = MemorySink()
    missing = BoundProperty(name="sigma", getter=lambda: None)
    f = FlatFile([ALWAYS], [EVALUATIONS, TRANSFORMED_Y, missing], sink, config=WatchConfig(no_value="NA"))
    f.attach_suite("bench")
    f.attach_problem(PROBLEM)
    f.call(make_info(4, 2.5))
    f.close()
    row = sink.rows[0]
    assert tuple(row)[: len(COMMON_HEADERS)] == COMMON_HEADERS
    assert list(row)[len(COMMON_HEADERS):] == ["evaluations", "transformed_y", "sigma"]
    assert row["suite_name"] == "bench"
    assert row["problem_name"] == "Sphere"
    assert row["optimization_type"] == "minimization"
    assert row["run"] == 1
    assert row["sigma"] == "NA"
    assert sink.closed and sink.runs == 1


def test_flatfile_store_positions():
    sink = MemorySink()
    f = FlatFile([ALWAYS], [EVALUATIONS], sink, store_positions=True)
    f.attach_problem(PROBLEM)
    f.call(Info(1, 3.0, 3.0, 3.0, 3.0, True, x=(0.5, -1.0)))
    f.call(make_info(2, 1.0))
    assert sink.rows[0]["x0"] == 0.5 and sink.rows[0]["x1"] == -1.0
    assert sink.rows[1]["x0"] == "None"


def test_flatfile_rejects_header_clash():
    class Run(Property):
        def evaluate(self, info):
            return 1.0

    with pytest.raises(ValueError):
        FlatFile([ALWAYS], [Run(name="run")], MemorySink())


def test_table_sink_repeat_header(tmp_path):
    path = tmp_path / "out" / "IOH.dat"
    sink = TableSink(path, repeat_header=True)
    f = FlatFile([ALWAYS], [EVALUATIONS, TRANSFORMED_Y], sink)
    f.attach_suite("bench")
    f.attach_problem(PROBLEM)
    for info in run_stream([2.0, 1.0]):
        f.call(info)
    f.reset()
    f.call(make_info(1, 5.0))
    f.close()

    lines = path.read_text(encoding="utf-8").splitlines()
    header = "\t".join(COMMON_HEADERS + ("evaluations", "transformed_y"))
    assert lines[0] == header
    assert lines[3] == "# " + header
    assert len(lines) == 5
    assert lines[1].split("\t")[-2:] == ["1", "2"]
    assert lines[4].split("\t")[6] == "2"


def test_table_sink_single_header(tmp_path):
    path = tmp_path / "IOH.dat"
    with TableSink(path, separator=",") as sink:
        sink.begin_run()
        sink.write({"a": 1, "b": 2})
        sink.begin_run()
        sink.write({"a": 3, "b": 4})
        with pytest.raises(ValueError):
            sink.write({"z": 0})
    assert path.read_text(encoding="utf-8").splitlines() == ["a,b", "1,2", "3,4"]


def test_config_from_json(tmp_path):
    path = tmp_path / "watch.json"
    path.write_text(json.dumps({"log_level": "debug", "no_value": "nan"}), encoding="utf-8")
    cfg = load_config(path)
    assert cfg.log_level == 10
    assert cfg.no_value == "nan"
    assert WatchConfig.from_dict(cfg.to_dict()) == cfg


def test_config_rejects_bad_values():
    with pytest.raises(ValueError):
        WatchConfig(log_level="loud")
    with pytest.raises(ValueError):
        WatchConfig.from_dict({"colour": "red"})


def test_table_sink_uses_property_formats(tmp_path):
    path = tmp_path / "fmt.dat"
    sink = TableSink(path)
    f = FlatFile([ALWAYS], [EVALUATIONS, TransformedY(format="{:.2e}")], sink, store_positions=True)
    f.attach_problem(PROBLEM)
    f.call(Info(7, 2.5, 2.5, 2.5, 2.5, True, x=(0.125, None)))
    f.close()
    cells = path.read_text(encoding="utf-8").splitlines()[1].split("\t")
    assert cells[-4:] == ["7", "2.50e+00", "0.125", "None"]


def test_flatfile_experiment_and_run_attributes():
    class Algo:
        sigma = 0.5
        popsize = 4

    algo = Algo()
    sink = MemorySink()
    f = FlatFile([ALWAYS], [EVALUATIONS], sink, algorithm_name="rs", algorithm_info="uniform sampling")
    f.add_experiment_attribute("budget", 100)
    f.add_run_attributes(algo, ["sigma", "popsize"])
    f.add_run_attribute("seed", 1)
    f.attach_problem(PROBLEM)
    f.call(make_info(1, 3.0))

    algo.sigma = 0.25
    f.set_run_attribute("seed", 2)
    f.reset()
    f.call(make_info(1, 4.0))

    first, second = sink.rows
    assert list(first)[len(COMMON_HEADERS):] == [
        "algorithm_name", "algorithm_info", "budget", "sigma", "popsize", "seed", "evaluations",
    ]
    assert first["algorithm_name"] == "rs" and first["budget"] == 100
    assert first["sigma"] == 0.5 and first["popsize"] == 4.0 and first["seed"] == 1.0
    # bound attributes are re-read when the next run opens
    assert second["sigma"] == 0.25 and second["seed"] == 2.0 and second["run"] == 2


def test_flatfile_attribute_errors_and_replacement():
    f = FlatFile([ALWAYS], [EVALUATIONS], MemorySink())
    with pytest.raises(KeyError):
        f.set_run_attribute("seed", 1)
    with pytest.raises(ValueError):
        f.add_experiment_attribute("evaluations", 1)
    with pytest.raises(ValueError):
        f.add_run_attribute("run", 1)
    f.add_run_attributes(object(), "missing")
    assert f.run_attributes == {"missing": None}
    f.set_run_attributes({"seed": 3})
    assert f.run_attributes == {"seed": 3.0}
    f.set_experiment_attributes({"algorithm_name": "cma"})
    assert f.experiment_attributes == {"algorithm_name": "cma"}
