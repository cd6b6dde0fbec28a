"""Email adapter for work orders delivered as ``.eml`` messages."""

from __future__ import annotations

from email import policy
from email.message import EmailMessage
from email.parser import BytesParser
import logging
from pathlib import Path

from bs4 import BeautifulSoup

from wobridge.ingestion.adapters.txt_adapter import decode_bytes
from wobridge.ingestion.models import DecodedDocument

logger = logging.getLogger(__name__)

_HEADER_PREFIXES = (b"From:", b"Received:", b"Return-Path:", b"MIME-Version:", b"Subject:", b"Delivered-To:")


def html_to_text(html: str) -> str:
    """Flatten HTML into newline-separated text, one block per line."""

    soup = BeautifulSoup(html, "html.parser")
    for node in soup(["script", "style", "head"]):
        node.decompose()
    for br in soup.find_all("br"):
        br.replace_with("\n")
    return soup.get_text("\n")


def _part_text(part: EmailMessage) -> str:
    try:
        content = part.get_content()
    except (LookupError, UnicodeError):
        # Unknown or wrong declared charset; detect from the raw payload.
        raw = part.get_payload(decode=True) or b""
        content = decode_bytes(raw) if raw else ""
    if isinstance(content, bytes):
        content = decode_bytes(content) if content else ""
    return content


class EmailAdapter:
    """Decode the subject and preferred body part of an RFC 822 message.

    The subject goes first because forwarded work orders often only carry
    the ``WO`` number there.
    """

    def supports(self, path: Path, sniffed_bytes: bytes | None = None) -> bool:
        if path.suffix.lower() == ".eml":
            return True
        if sniffed_bytes is None:
            return False
        return sniffed_bytes.lstrip().startswith(_HEADER_PREFIXES)

    def extract(self, path: Path) -> DecodedDocument:
        with path.open("rb") as handle:
            message = BytesParser(policy=policy.default).parse(handle)

        subject = str(message.get("subject", "") or "").strip() or None
        body = self._body_text(message)

        # Plain subject line: a "Subject:" prefix would read as a label value.
        parts = [subject] if subject else []
        if body:
            parts.append(body)

        return DecodedDocument(
            source_path=str(path),
            text="\n".join(parts),
            format_name="eml",
            subject=subject,
        )

    def _body_text(self, message: EmailMessage) -> str:
        part = message.get_body(preferencelist=("plain", "html"))
        if part is None:
            logger.info("Email has no text body: %s", message.get("subject"))
            return ""

        content = _part_text(part)
        if part.get_content_subtype() == "html":
            return html_to_text(content)
        return content
