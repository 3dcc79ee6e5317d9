import json
import logging

import pandas as pd

import main
from logging_config import setup_logging
from reports import ENGLISH_REPORT, SPANISH_REPORT


def _run(argv):
    return main.run(main.build_parser().parse_args(argv))


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_report_for_single_snapshot(tmp_path, capsys):
    report = _write(tmp_path, "r1.txt", ENGLISH_REPORT)
    assert _run([report, "--averages", "1,6", "0.9", "1.1", "1.4"]) == 0
    out = capsys.readouterr().out
    assert "SNAPSHOT 1/1" in out
    assert "Pre-match Market" in out
    assert "Goal Model" in out
    assert "▶ PHASE (Min 67): Decisive" in out
    assert "▶ GOAL PERFORMANCE (vs Expected for min 67)" in out


def test_json_output_threads_snapshots(tmp_path, capsys):
    first = _write(tmp_path, "r1.txt", SPANISH_REPORT)
    second = _write(tmp_path, "r2.txt", ENGLISH_REPORT)
    assert _run([first, second, "--json"]) == 0
    out = capsys.readouterr().out
    decoder = json.JSONDecoder()
    docs, idx = [], 0
    while idx < len(out):
        if out[idx].isspace():
            idx += 1
            continue
        doc, idx = decoder.raw_decode(out, idx)
        docs.append(doc)
    assert len(docs) == 2
    assert docs[0]["analysis"]["momentum"] == {"home": 0.0, "away": 0.0}
    assert docs[1]["live_stats"]["minute"] == 67
    assert docs[1]["odds"]["probs"] is not None
    assert docs[1]["prediction"] is None


def test_csv_export(tmp_path, capsys):
    first = _write(tmp_path, "r1.txt", SPANISH_REPORT)
    second = _write(tmp_path, "r2.txt", ENGLISH_REPORT)
    csv_path = tmp_path / "out" / "dominance.csv"
    assert _run([first, second, "--csv", str(csv_path)]) == 0
    frame = pd.read_csv(csv_path)
    assert frame["minute"].tolist() == [34, 67]


def test_empty_report_exit_code(tmp_path):
    report = _write(tmp_path, "empty.txt", "   \n")
    assert _run([report]) == 2


def test_missing_file_exit_code(tmp_path):
    assert _run([str(tmp_path / "nope.txt")]) == 1


def test_odds_override(tmp_path, capsys):
    report = _write(tmp_path, "r1.txt", SPANISH_REPORT)
    assert _run([report, "--odds", "2.0", "3.0", "4.0", "--json"]) == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc["odds"]["home"] == 2.0
    assert abs(doc["odds"]["probs"]["margin"] - 8.3333) < 1e-3


def test_parser_defaults():
    args = main.build_parser().parse_args(["a.txt"])
    assert args.reports == ["a.txt"]
    assert args.csv is None
    assert not args.reset_each
    assert main.build_parser().parse_args(["a.txt", "--csv"]).csv == ""


def test_huge_averages_do_not_crash(tmp_path, capsys):
    report = _write(tmp_path, "r1.txt", ENGLISH_REPORT)
    huge = "1" + "0" * 40
    assert _run([report, "--averages", huge, "1", "1", huge, "--json"]) == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc["prediction"]["prob_home_win"] is None
    assert doc["prediction"]["expected_goals_home"] > 1e39


def test_nan_odds_emit_strict_json(tmp_path, capsys):
    report = _write(tmp_path, "r1.txt", SPANISH_REPORT)
    assert _run([report, "--odds", "nan", "3", "4", "--json"]) == 0
    out = capsys.readouterr().out
    assert "NaN" not in out
    doc = json.loads(out)
    assert doc["odds"]["home"] is None
    assert doc["odds"]["probs"]["home"] is None


def test_json_safe_replaces_non_finite():
    value = {"a": float("inf"), "b": [1.5, float("nan")], "c": "x", "d": 2}
    assert main.json_safe(value) == {"a": None, "b": [1.5, None], "c": "x", "d": 2}


def test_setup_logging_does_not_stack_handlers():
    root = logging.getLogger()
    before, level = list(root.handlers), root.level
    try:
        setup_logging(level="WARNING", to_file=False)
        count = len(root.handlers)
        setup_logging(level="WARNING", to_file=False)
        assert len(root.handlers) == count == len(before) + 1
    finally:
        for h in list(root.handlers):
            if h not in before:
                root.removeHandler(h)
        root.setLevel(level)
