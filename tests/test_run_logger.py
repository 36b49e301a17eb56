import json

import pytest

from booking import Booking
from run_logging.run_logger import RunEvent, create_logger
from sequencing.generator import generate_boarding_sequence


def test_stdout_logger_emits_compact_json(capsys):
    logger = create_logger("STDOUT", destination=None, run_id="r1")
    logger.log_warning("something odd", source="in.csv")
    logger.close()

    line = capsys.readouterr().out.strip()
    event = json.loads(line)
    assert event["event"] == "warning"
    assert event["run_id"] == "r1"
    assert event["source"] == "in.csv"
    assert event["message"] == "something odd"
    assert set(event) == set(RunEvent(timestamp="", run_id="", event="").as_dict())


def test_failed_result_logs_errors_then_summary(tmp_path):
    path = tmp_path / "run.jsonl"
    logger = create_logger("jsonl", destination=path, run_id="r2")
    logger.log_result(generate_boarding_sequence([Booking("", ["A1"])]))
    logger.close()

    events = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [event["event"] for event in events] == ["error", "summary"]
    assert events[-1]["message"] == "no bookings sequenced"


def test_parquet_logger_writes_one_schema(tmp_path):
    pq = pytest.importorskip("pyarrow.parquet")
    path = tmp_path / "run.parquet"
    logger = create_logger("parquet", destination=path, run_id="r3")
    logger.log_result(
        generate_boarding_sequence([Booking("1", ["A2", "B7"]), Booking("2", ["?"])]),
        source="x.csv",
    )
    logger.close()

    rows = pq.read_table(path).to_pylist()
    assert [row["event"] for row in rows] == ["sequence", "warning", "summary"]
    assert rows[0]["seats"] == ["A2", "B7"]
    assert rows[0]["max_seat_number"] == 7


@pytest.mark.parametrize("mode", ["jsonl", "parquet"])
def test_file_modes_require_destination(mode):
    with pytest.raises(ValueError):
        create_logger(mode, destination=None, run_id="r")


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError, match="Unknown run log mode"):
        create_logger("syslog", destination=None, run_id="r")
