import io
import json
from pathlib import Path

import pytest
from shelflife.cli.main import main

RECEIPT = "2 x Milk £1.50\nFresh Bananas\nTOTAL £3.00\n"


@pytest.fixture
def receipt_file(tmp_path: Path) -> Path:
    path = tmp_path / "receipt.txt"
    path.write_text(RECEIPT, encoding="utf-8")
    return path


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "usage: shelflife" in capsys.readouterr().out


def test_parse_prints_review_block(receipt_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", str(receipt_file)]) == 0

    out = capsys.readouterr().out
    assert "1. 2 × Milk - £1.50" in out
    assert "2. 1 × Fresh Bananas  [needs price]" in out
    assert "Detected total: £3.00" in out


def test_parse_json(receipt_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", str(receipt_file), "--json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert [item["name"] for item in data["items"]] == ["Milk", "Fresh Bananas"]
    assert data["total"] == 3.0


def test_parse_reads_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("Bread\n£1.20\n"))

    assert main(["parse", "-", "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["items"] == [{"name": "Bread", "quantity": 1, "price": 1.2}]


def test_parse_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", str(tmp_path / "missing.txt")]) == 1
    assert "Receipt file not found" in capsys.readouterr().out


def test_lines_prints_checklist(receipt_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["lines", str(receipt_file)]) == 0

    assert capsys.readouterr().out.splitlines() == [
        "[x] 0: 2 x Milk £1.50",
        "[ ] 1: Fresh Bananas",
    ]


def test_scan_reports_unreachable_ocr(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    from shelflife.application.receipts import scan
    from shelflife.runtime.ocr_client import OCRServiceUnavailable

    def fail(image_path: Path, ocr_url: str):
        raise OCRServiceUnavailable("Failed to connect to OCR service: refused")

    monkeypatch.setattr(scan, "fetch_receipt_text", fail)
    image = tmp_path / "receipt.jpg"
    image.write_bytes(b"\xff\xd8")

    assert main(["scan", str(image), "--ocr-url", "http://ocr.test"]) == 1
    assert "OCR service unavailable" in capsys.readouterr().out
