from __future__ import annotations

from pathlib import Path

from wobridge.ingestion.adapters.txt_adapter import TXTAdapter, decode_bytes


def test_txt_adapter_decodes_utf8_export(tmp_path: Path) -> None:
    path = tmp_path / "wo.txt"
    path.write_text("Work Order: 12345\nLocation: Café Rouge, 14 Elm St, Macon, GA\n", encoding="utf-8")

    document = TXTAdapter().extract(path)

    assert document.format_name == "txt"
    assert "Café Rouge" in document.text
    assert document.text.splitlines()[0] == "Work Order: 12345"


def test_txt_adapter_handles_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")

    assert TXTAdapter().extract(path).text == ""


def test_txt_adapter_sniffing_rejects_binary_and_other_formats(tmp_path: Path) -> None:
    adapter = TXTAdapter()

    assert adapter.supports(tmp_path / "wo.txt")
    assert adapter.supports(tmp_path / "upload", b"Work Order: 12345\n")
    assert not adapter.supports(tmp_path / "upload", b"%PDF-1.4")
    assert not adapter.supports(tmp_path / "upload", b"PK\x03\x04rest")
    assert not adapter.supports(tmp_path / "image", b"\x89PNG\x00\x00")
    assert not adapter.supports(tmp_path / "wo.eml", b"Subject: hi")
    assert not adapter.supports(tmp_path / "upload")


def test_decode_bytes_plain_ascii() -> None:
    assert decode_bytes(b"State: GA") == "State: GA"
