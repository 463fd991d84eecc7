from datetime import date

from integration.calendar_export import build_ics, parse_ics_dates
from syllabus_deadlines.models import DeadlineRecord


def test_single_event():
    ics = build_ics([DeadlineRecord(title="Essay", date=date(2026, 1, 25))])
    lines = ics.split("\r\n")
    assert lines[0] == "BEGIN:VCALENDAR"
    assert lines[-2] == "END:VCALENDAR"
    assert lines[-1] == ""
    assert ics.count("BEGIN:VEVENT") == 1
    assert ics.count("END:VEVENT") == 1
    assert "SUMMARY:Essay" in lines
    assert "DTSTART;VALUE=DATE:20260125" in lines


def test_events_follow_input_order_with_unique_uids():
    records = [
        DeadlineRecord(title="B", date=date(2026, 3, 1)),
        DeadlineRecord(title="A", date=date(2026, 3, 1)),
        DeadlineRecord(title="C", date=date(2026, 1, 1)),
    ]
    ics = build_ics(records)
    summaries = [line for line in ics.split("\r\n") if line.startswith("SUMMARY:")]
    assert summaries == ["SUMMARY:B", "SUMMARY:A", "SUMMARY:C"]
    uids = [line for line in ics.split("\r\n") if line.startswith("UID:")]
    assert len(set(uids)) == 3


def test_output_is_reproducible():
    records = [
        DeadlineRecord(title="Essay", date=date(2026, 1, 25), description="2000 words"),
        DeadlineRecord(title="Final", date=date(2026, 5, 1), type="exam"),
    ]
    assert build_ics(records) == build_ics(records)


def test_dates_round_trip():
    records = [
        DeadlineRecord(title="Essay", date=date(2026, 1, 25)),
        DeadlineRecord(title="Quiz", date=date(2026, 2, 3), type="quiz"),
        DeadlineRecord(title="Final", date=date(2027, 5, 1), type="exam"),
    ]
    assert parse_ics_dates(build_ics(records)) == [r.date for r in records]


def test_text_is_escaped():
    record = DeadlineRecord(
        title="Read ch. 1, 2; notes",
        date=date(2026, 1, 25),
        description="line one\nline two",
    )
    ics = build_ics([record])
    assert "SUMMARY:Read ch. 1\\, 2\\; notes" in ics
    assert "DESCRIPTION:line one\\nline two" in ics


def test_description_omitted_when_absent():
    ics = build_ics([DeadlineRecord(title="Essay", date=date(2026, 1, 25))])
    assert "DESCRIPTION" not in ics


def test_empty_list_is_an_empty_calendar():
    ics = build_ics([])
    assert "BEGIN:VEVENT" not in ics
    assert ics.startswith("BEGIN:VCALENDAR\r\n")
    assert ics.endswith("END:VCALENDAR\r\n")


def test_every_event_has_a_stable_dtstamp():
    records = [
        DeadlineRecord(title="Essay", date=date(2026, 1, 25)),
        DeadlineRecord(title="Final", date=date(2026, 5, 1), type="exam"),
    ]
    lines = build_ics(records).split("\r\n")
    stamps = [line for line in lines if line.startswith("DTSTAMP:")]
    assert stamps == ["DTSTAMP:20260125T000000Z", "DTSTAMP:20260501T000000Z"]


def test_long_lines_are_folded():
    record = DeadlineRecord(title="A" * 120, date=date(2026, 1, 25), description="é" * 80)
    ics = build_ics([record])
    lines = ics.split("\r\n")
    assert all(len(line.encode("utf-8")) <= 75 for line in lines)

    summary = lines.index("SUMMARY:" + "A" * 67)
    assert lines[summary + 1] == " " + "A" * 53

    unfolded = ics.replace("\r\n ", "")
    assert "SUMMARY:" + "A" * 120 + "\r\n" in unfolded
    assert "DESCRIPTION:" + "é" * 80 + "\r\n" in unfolded
    assert parse_ics_dates(ics) == [date(2026, 1, 25)]
