from __future__ import annotations

import re
from datetime import date, datetime
from typing import Iterable, List

from syllabus_deadlines.models import DeadlineRecord

ICS_MEDIA_TYPE = "text/calendar"
DEFAULT_FILENAME = "deadlines.ics"
PRODID = "-//syllabus-deadlines//EN"
UID_DOMAIN = "syllabus-deadlines"

# content lines longer than this many octets are folded
MAX_LINE_OCTETS = 75


def _escape_ics_text(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def _ics_date(d: date) -> str:
    return d.strftime("%Y%m%d")


def _fold(line: str) -> List[str]:
    """Split a content line into CRLF-joinable pieces of at most 75 octets.

    Continuation pieces start with a space, which counts toward their length.
    Multi-byte characters are never split.
    """
    pieces: List[str] = []
    current = ""
    size = 0
    for ch in line:
        n = len(ch.encode("utf-8"))
        if size + n > MAX_LINE_OCTETS:
            pieces.append(current)
            current = " "
            size = 1
        current += ch
        size += n
    pieces.append(current)
    return pieces


def build_ics(records: Iterable[DeadlineRecord]) -> str:
    """
    Serialize deadlines as an iCalendar document, one all-day VEVENT each.

    Nothing here depends on the clock (DTSTAMP is taken from the deadline
    itself), so the same records always produce the same bytes.
    """
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
    ]
    for i, record in enumerate(records):
        day = _ics_date(record.date)
        lines.extend(
            [
                "BEGIN:VEVENT",
                f"UID:{i}-{day}@{UID_DOMAIN}",
                f"DTSTAMP:{day}T000000Z",
                f"DTSTART;VALUE=DATE:{day}",
                f"SUMMARY:{_escape_ics_text(record.title)}",
            ]
        )
        if record.description:
            lines.append(f"DESCRIPTION:{_escape_ics_text(record.description)}")
        lines.append("END:VEVENT")
    lines.append("END:VCALENDAR")
    folded = [piece for line in lines for piece in _fold(line)]
    return "\r\n".join(folded) + "\r\n"


def parse_ics_dates(text: str) -> List[date]:
    """Read back the DTSTART dates of an exported calendar, in file order."""
    out: List[date] = []
    unfolded = re.sub(r"\r?\n[ \t]", "", text)
    for line in unfolded.splitlines():
        name, sep, value = line.partition(":")
        if not sep or name.split(";", 1)[0].upper() != "DTSTART":
            continue
        out.append(datetime.strptime(value.strip()[:8], "%Y%m%d").date())
    return out
