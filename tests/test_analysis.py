"""Tests für Session-Prüfung, pädagogische Prüfung und Execution-Guide-Prüfung."""

from datetime import date, datetime, timedelta

import pytest

from analysis.guide_validator import ExecutionGuideValidator
from analysis.pedagogical_audit import PedagogicalAuditor
from analysis.session_validator import SessionValidator, ValidationContext
from config.defaults import DEFAULT_LEARNING_METHOD
from models.module import Assessment, Module
from models.session import StudySession


# ─── Testdaten-Hilfsfunktionen ────────────────────────────────────────────────

START = date(2026, 10, 19)   # Montag
END = date(2026, 12, 31)


def _make_context() -> ValidationContext:
    return ValidationContext(start=START, end=END, module_names={"Datenbanken", "Web Development"})


def _make_record(**overrides) -> dict:
    record = {
        "id": "llm-7",
        "date": "2026-10-20",
        "startTime": "09:00",
        "endTime": "10:30",
        "module": "Datenbanken",
        "topic": "SQL-Grundlagen",
        "description": "SELECT, WHERE und JOIN an Beispieldaten üben.",
        "learningMethod": "Active Recall",
    }
    record.update(overrides)
    return record


def _make_session(day: date, module: str = "Datenbanken",
                  start: str = "09:00", end: str = "10:00", sid: str = "1") -> StudySession:
    return StudySession(
        id=sid, date=day, start_time=start, end_time=end,
        module=module, topic="Thema", description="Beschreibung",
    )


def _make_module(name: str = "Datenbanken", deadline: date | None = None) -> Module:
    return Module(
        name=name, ects=5, workload=150,
        assessments=[Assessment(type="Klausur", weight=100, deadline=deadline)],
    )


def _make_guide(session_id="1", **overrides) -> dict:
    guide = {
        "sessionId": session_id,
        "sessionGoal": "Joins sicher anwenden",
        "agenda": [
            {"phase": "Warm-up", "duration": 10, "description": "Wiederholung"},
            {"phase": "Deep Work", "duration": 40, "description": "Übungen"},
            {"phase": "Review", "duration": 10, "description": "Fehler analysieren"},
        ],
        "methodIdeas": ["Karteikarten", "Selbsttest"],
        "tools": ["SQLite"],
        "deliverable": "Gelöstes Übungsblatt",
        "readyCheck": "Drei Joins ohne Vorlage schreiben",
    }
    guide.update(overrides)
    return guide


# ─── SESSION-VALIDATOR ────────────────────────────────────────────────────────

class TestSessionValidator:
    def test_valid_record_accepted(self):
        result = SessionValidator(_make_context()).validate([_make_record()])
        assert len(result.accepted) == 1
        s = result.accepted[0]
        assert s.date == date(2026, 10, 20)
        assert s.module == "Datenbanken"
        assert s.learning_method == "Active Recall"

    def test_ids_reassigned_sequentially(self):
        """IDs der KI werden ignoriert, akzeptierte Sessions heißen "1", "2", ..."""
        records = [
            _make_record(id="x"),
            _make_record(module="Unbekannt"),
            _make_record(id="x"),
        ]
        result = SessionValidator(_make_context()).validate(records)
        assert [s.id for s in result.accepted] == ["1", "2"]

    def test_order_preserved(self):
        records = [_make_record(date="2026-11-05"), _make_record(date="2026-10-21")]
        result = SessionValidator(_make_context()).validate(records)
        assert [s.date.day for s in result.accepted] == [5, 21]

    @pytest.mark.parametrize("value", ["2026-13-01", "20.10.2026", None, ""])
    def test_invalid_date_rejected(self, value):
        result = SessionValidator(_make_context()).validate([_make_record(date=value)])
        assert result.accepted == []
        assert result.rejections[0].rule == "invalid_date"

    @pytest.mark.parametrize("value", ["2026-10-18", "2027-01-01"])
    def test_date_out_of_range_rejected(self, value):
        result = SessionValidator(_make_context()).validate([_make_record(date=value)])
        assert result.rejections[0].rule == "date_out_of_range"

    def test_range_is_inclusive(self):
        records = [_make_record(date=START.isoformat()), _make_record(date=END.isoformat())]
        assert len(SessionValidator(_make_context()).validate(records).accepted) == 2

    def test_module_must_match_exactly(self):
        """Keine unscharfe Zuordnung: Groß-/Kleinschreibung zählt."""
        result = SessionValidator(_make_context()).validate([_make_record(module="datenbanken")])
        assert result.rejections[0].rule == "unknown_module"

    def test_unknown_method_repaired(self):
        result = SessionValidator(_make_context()).validate(
            [_make_record(learningMethod="Hypno-Learning")])
        assert result.accepted[0].learning_method == DEFAULT_LEARNING_METHOD
        assert result.repaired_methods == 1

    def test_missing_method_stays_empty(self):
        record = _make_record()
        del record["learningMethod"]
        result = SessionValidator(_make_context()).validate([record])
        assert result.accepted[0].learning_method is None
        assert result.repaired_methods == 0

    @pytest.mark.parametrize("start,end", [
        ("9:00", "10:00"), ("09:00", "24:00"), ("10:00", "09:00"), ("10:00", "10:00"),
        ("18:00\n", "20:00"),
    ])
    def test_invalid_time_rejected(self, start, end):
        result = SessionValidator(_make_context()).validate(
            [_make_record(startTime=start, endTime=end)])
        assert result.rejections[0].rule == "invalid_time"

    @pytest.mark.parametrize("field", ["topic", "description"])
    def test_empty_content_rejected(self, field):
        result = SessionValidator(_make_context()).validate([_make_record(**{field: "  "})])
        assert result.rejections[0].rule == "missing_content"

    def test_date_checked_before_module(self):
        """Erster Verstoß entscheidet: Datum vor Modul."""
        result = SessionValidator(_make_context()).validate(
            [_make_record(date="2030-01-01", module="Unbekannt")])
        assert result.rejections[0].rule == "date_out_of_range"

    def test_non_object_rejected_without_abort(self):
        result = SessionValidator(_make_context()).validate(["kaputt", 42, _make_record()])
        assert len(result.accepted) == 1
        assert [r.rule for r in result.rejections] == ["not_an_object", "not_an_object"]
        assert result.total == 3

    def test_optional_lists_cleaned(self):
        result = SessionValidator(_make_context()).validate([_make_record(
            contentTopics=["SQL", "", 3], competencies="keine Liste", studyTips="  ")])
        s = result.accepted[0]
        assert s.content_topics == ["SQL"]
        assert s.competencies is None
        assert s.study_tips is None


# ─── PÄDAGOGISCHE PRÜFUNG ─────────────────────────────────────────────────────

class TestPedagogicalAuditor:
    def test_clean_plan(self):
        sessions = [_make_session(START), _make_session(START + timedelta(days=2))]
        report = PedagogicalAuditor().audit(sessions, [_make_module()])
        assert report.is_clean

    def test_daily_load_over_480_minutes(self):
        sessions = [
            _make_session(START, start="08:00", end="12:00", module="Datenbanken"),
            _make_session(START, start="13:00", end="18:00", module="Web Development"),
        ]
        report = PedagogicalAuditor().audit(sessions, [])
        assert [w.check for w in report.warnings] == ["daily_load"]
        assert "60 min über" in report.messages[0]

    def test_exactly_480_minutes_is_fine(self):
        sessions = [
            _make_session(START, start="08:00", end="12:00", module="Datenbanken"),
            _make_session(START, start="13:00", end="17:00", module="Web Development"),
        ]
        assert PedagogicalAuditor().audit(sessions, []).is_clean

    def test_module_monotony(self):
        sessions = [
            _make_session(START, start=f"{h:02d}:00", end=f"{h:02d}:45") for h in (8, 10, 12)
        ]
        report = PedagogicalAuditor().audit(sessions, [])
        assert [w.check for w in report.warnings] == ["module_monotony"]

    def test_two_per_day_is_fine(self):
        sessions = [
            _make_session(START, start="08:00", end="09:00"),
            _make_session(START, start="10:00", end="11:00"),
        ]
        assert PedagogicalAuditor().audit(sessions, []).is_clean

    def test_six_consecutive_days(self):
        sessions = [_make_session(START + timedelta(days=i)) for i in range(6)]
        report = PedagogicalAuditor().audit(sessions, [])
        assert [w.check for w in report.warnings] == ["consecutive_days"]
        assert report.warnings[0].day == START

    def test_five_consecutive_days_is_fine(self):
        sessions = [_make_session(START + timedelta(days=i)) for i in range(5)]
        assert PedagogicalAuditor().audit(sessions, []).is_clean

    def test_long_run_warns_once(self):
        sessions = [_make_session(START + timedelta(days=i)) for i in range(10)]
        report = PedagogicalAuditor().audit(sessions, [])
        assert len(report.warnings) == 1

    def test_missing_exam_review(self):
        deadline = START + timedelta(days=40)
        sessions = [_make_session(START)]
        report = PedagogicalAuditor().audit(sessions, [_make_module(deadline=deadline)])
        assert [w.check for w in report.warnings] == ["missing_review"]
        assert "Datenbanken" in report.messages[0]
        assert deadline.isoformat() in report.messages[0]

    def test_review_window_boundaries(self):
        """Fenster: Deadline − 14 Tage bis Deadline, jeweils inklusive."""
        deadline = START + timedelta(days=40)
        auditor = PedagogicalAuditor()
        module = _make_module(deadline=deadline)
        assert auditor.audit([_make_session(deadline - timedelta(days=14))], [module]).is_clean
        assert auditor.audit([_make_session(deadline)], [module]).is_clean
        assert not auditor.audit([_make_session(deadline - timedelta(days=15))], [module]).is_clean

    def test_review_warning_removed_by_one_session(self):
        deadline = date(2025, 1, 20)
        module = _make_module(deadline=deadline)
        auditor = PedagogicalAuditor()
        early = [_make_session(date(2025, 1, 2))]

        report = auditor.audit(early, [module])
        assert len(report.warnings) == 1
        assert "Datenbanken" in report.messages[0] and "2025-01-20" in report.messages[0]

        report = auditor.audit(early + [_make_session(date(2025, 1, 10))], [module])
        assert report.is_clean

    def test_review_must_be_same_module(self):
        deadline = START + timedelta(days=20)
        sessions = [_make_session(deadline - timedelta(days=1), module="Web Development")]
        report = PedagogicalAuditor().audit(sessions, [_make_module(deadline=deadline)])
        assert not report.is_clean

    def test_warning_order_follows_checks(self):
        """Reihenfolge: Tageslast, Monotonie, Serien, Prüfungsvorbereitung."""
        deadline = START + timedelta(days=60)
        sessions = [_make_session(START + timedelta(days=i)) for i in range(6)]
        sessions += [
            _make_session(START, start="10:00", end="15:00"),
            _make_session(START, start="15:00", end="20:00"),
        ]
        report = PedagogicalAuditor().audit(sessions, [_make_module(deadline=deadline)])
        assert [w.check for w in report.warnings] == [
            "daily_load", "module_monotony", "consecutive_days", "missing_review",
        ]

    def test_audit_does_not_mutate(self):
        sessions = [_make_session(START)]
        before = [s.model_dump() for s in sessions]
        PedagogicalAuditor().audit(sessions, [_make_module(deadline=START)])
        assert [s.model_dump() for s in sessions] == before


# ─── EXECUTION-GUIDE-VALIDATOR ────────────────────────────────────────────────

class TestExecutionGuideValidator:
    SESSIONS = [_make_session(START, start="09:00", end="10:00", sid="1")]

    def test_valid_guide(self):
        stamp = datetime(2026, 10, 19, 12, 0)
        result = ExecutionGuideValidator().validate([_make_guide()], self.SESSIONS, stamp)
        assert len(result.guides) == 1
        guide = result.guides[0]
        assert guide.agenda_minutes == 60
        assert guide.generated_at == stamp
        assert result.warnings == []

    def test_numeric_session_id_accepted(self):
        result = ExecutionGuideValidator().validate([_make_guide(session_id=1)], self.SESSIONS)
        assert result.guides[0].session_id == "1"

    def test_string_duration_accepted(self):
        agenda = [{"phase": "Arbeit", "duration": "60", "description": "x"}]
        result = ExecutionGuideValidator().validate([_make_guide(agenda=agenda)], self.SESSIONS)
        assert result.guides[0].agenda[0].duration == 60

    @pytest.mark.parametrize("field", ["sessionGoal", "deliverable", "readyCheck"])
    def test_missing_string_field_drops_guide(self, field):
        guide = _make_guide()
        del guide[field]
        result = ExecutionGuideValidator().validate([guide], self.SESSIONS)
        assert result.guides == []
        assert field in result.rejections[0].reason

    def test_empty_agenda_drops_guide(self):
        result = ExecutionGuideValidator().validate([_make_guide(agenda=[])], self.SESSIONS)
        assert result.guides == []

    def test_tools_must_be_list(self):
        result = ExecutionGuideValidator().validate([_make_guide(tools="SQLite")], self.SESSIONS)
        assert result.guides == []

    @pytest.mark.parametrize("item", [
        {"duration": 10, "description": "x"},
        {"phase": "A", "description": "x"},
        {"phase": "A", "duration": 0, "description": "x"},
        {"phase": "A", "duration": "zehn", "description": "x"},
        {"phase": "A", "duration": 10},
    ])
    def test_broken_agenda_item_drops_guide(self, item):
        result = ExecutionGuideValidator().validate([_make_guide(agenda=[item])], self.SESSIONS)
        assert result.guides == []

    def test_duration_mismatch_is_warning_only(self):
        agenda = [{"phase": "Arbeit", "duration": 90, "description": "x"}]
        result = ExecutionGuideValidator().validate([_make_guide(agenda=agenda)], self.SESSIONS)
        assert len(result.guides) == 1
        assert any("Agenda 90 min" in w for w in result.warnings)

    def test_duration_within_tolerance(self):
        agenda = [{"phase": "Arbeit", "duration": 65, "description": "x"}]
        result = ExecutionGuideValidator().validate([_make_guide(agenda=agenda)], self.SESSIONS)
        assert result.warnings == []

    def test_method_idea_count_warning(self):
        result = ExecutionGuideValidator().validate(
            [_make_guide(methodIdeas=["nur eine"])], self.SESSIONS)
        assert len(result.guides) == 1
        assert any("Methoden-Ideen" in w for w in result.warnings)

    def test_bad_guide_does_not_stop_batch(self):
        result = ExecutionGuideValidator().validate(
            ["kein Objekt", _make_guide(sessionGoal=""), _make_guide()], self.SESSIONS)
        assert len(result.guides) == 1
        assert len(result.rejections) == 2
