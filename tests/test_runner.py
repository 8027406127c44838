"""Tests for the receipt runner CLI."""

import json
import logging

import pytest

from conftest import FakeLLM
from src.clients.expenses.extraction import ReceiptExtractor
from src.clients.expenses.runner import ExitCode, build_parser, main
from src.viaticos.logging_config import PROJECT_LOGGERS


@pytest.fixture(autouse=True)
def _reset_project_loggers():
    """main() attaches handlers to the captured stderr; drop them after each test."""
    yield
    for name in PROJECT_LOGGERS:
        logging.getLogger(name).handlers.clear()


@pytest.fixture
def receipts(tmp_path):
    image = tmp_path / "comida.jpg"
    image.write_bytes(b"\xff\xd8jpeg")
    xml = tmp_path / "materiales.xml"
    xml.write_text("<Comprobante Total=\"420.00\"/>", encoding="utf-8")
    notes = tmp_path / "notes.txt"
    notes.write_text("not a receipt", encoding="utf-8")
    return {"image": image, "xml": xml, "notes": notes}


def test_parser_collects_repeated_employees():
    args = build_parser().parse_args(["-f", "a.jpg", "-e", "Juan Pérez", "-e", "Ana García", "--max-concurrency", "2"])
    assert args.employee == ["Juan Pérez", "Ana García"]
    assert args.max_concurrency == 2


def test_extract_only_success(receipts, extractor, capsys):
    code = main(["--files", str(receipts["image"]), str(receipts["xml"])], extractor=extractor)
    assert code == ExitCode.SUCCESS
    payload = json.loads(capsys.readouterr().out)
    assert payload["summary"] == {"total": 2, "extracted": 2, "failed": 0}
    assert [e["file_name"] for e in payload["extractions"]] == ["comida.jpg", "materiales.xml"]
    assert payload["extractions"][0]["data"]["totalAmount"] == 850.50
    assert "expenses" not in payload


def test_partial_failure(receipts, extractor, capsys):
    code = main(["--files", str(receipts["image"]), str(receipts["notes"])], extractor=extractor)
    assert code == ExitCode.PARTIAL_FAILURE
    payload = json.loads(capsys.readouterr().out)
    assert payload["failures"][0]["reason"] == "unsupported_file_type"


def test_total_failure(receipts, settings, capsys):
    def handler(parts):
        raise RuntimeError("quota exceeded for this project")

    extractor = ReceiptExtractor(llm=FakeLLM(handler), settings=settings)
    code = main(["--files", str(receipts["image"])], extractor=extractor)
    assert code == ExitCode.TOTAL_FAILURE
    payload = json.loads(capsys.readouterr().out)
    assert payload["failures"][0]["reason"] == "quota_exceeded"


def test_missing_file_is_usage_error(tmp_path, extractor, fake_llm):
    code = main(["--files", str(tmp_path / "missing.jpg")], extractor=extractor)
    assert code == ExitCode.USAGE_OR_VALIDATION
    assert fake_llm.calls == []


def test_incomplete_trip_fails_before_extraction(receipts, extractor, fake_llm, capsys):
    code = main(["--files", str(receipts["image"]), "--employee", "Juan Pérez"], extractor=extractor)
    assert code == ExitCode.USAGE_OR_VALIDATION
    assert "Please complete the trip name" in capsys.readouterr().err
    assert fake_llm.calls == []


def test_expenses_written_to_output_file(receipts, extractor, tmp_path):
    output = tmp_path / "out" / "expenses.json"
    output.parent.mkdir()
    code = main(
        [
            "--files", str(receipts["image"]),
            "--employee", "Juan Pérez", "--employee", "Ana García",
            "--trip", "Visita Cliente Monterrey",
            "--start", "2024-05-09", "--end", "2024-05-11",
            "--output", str(output),
        ],
        extractor=extractor,
    )
    assert code == ExitCode.SUCCESS
    payload = json.loads(output.read_text(encoding="utf-8"))
    expense = payload["expenses"][0]
    assert expense["employee_name"] == "Juan Pérez, Ana García"
    assert expense["status"] == "Pending"
    assert "content" not in expense["receipt_file"]
    pending = next(s for s in payload["summary"]["by_status"] if s["status"] == "Pending")
    assert pending["count"] == 1


def test_include_receipts_embeds_content(receipts, extractor, capsys):
    code = main(
        [
            "-f", str(receipts["image"]),
            "-e", "Juan Pérez", "-t", "Visita Cliente Monterrey", "--start", "2024-05-09", "--end", "2024-05-11",
            "--include-receipts",
        ],
        extractor=extractor,
    )
    assert code == ExitCode.SUCCESS
    payload = json.loads(capsys.readouterr().out)
    assert payload["expenses"][0]["receipt_file"]["content"] == "/9hqcGVn"
