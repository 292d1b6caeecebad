from config.schema import (
    ExportConfig,
    LLMConfig,
    PlannerConfig,
    PlanningConfig,
    StorageConfig,
)


# ─── PDF-VERARBEITUNG ───

PDF_MAX_FILE_SIZE_MB = 50
PDF_MAX_FILE_SIZE_BYTES = PDF_MAX_FILE_SIZE_MB * 1024 * 1024
PDF_MAX_PAGES = 200
PDF_MAGIC_NUMBER = b"%PDF-"
# Unterhalb dieser Länge wird nur gewarnt (z.B. eingescannte Seiten)
PDF_MIN_TEXT_LENGTH = 100


# ─── MODUL-PLAUSIBILITÄT ───

ECTS_MIN = 1
ECTS_MAX = 30
ECTS_DEFAULT = 6
WORKLOAD_MIN = 30
WORKLOAD_MAX = 900
WORKLOAD_PER_ECTS = 30          # Konvention: 1 ECTS ≈ 30 Stunden
ASSESSMENT_WEIGHT_TOLERANCE = 0.1
CONTENT_MAX = 6
COMPETENCIES_MAX = 5


# ─── LERNPLANUNG (feste Policy, nicht konfigurierbar) ───

MAX_DAILY_STUDY_MINUTES = 8 * 60
MAX_SESSIONS_PER_MODULE_PER_DAY = 2
MAX_CONSECUTIVE_STUDY_DAYS = 6
EXAM_REVIEW_PERIOD_DAYS = 14

# Planungshorizont
DEFAULT_HORIZON_WEEKS = 16
MAX_DEADLINE_YEARS = 2
MIN_HORIZON_DAYS = 7
SHORT_HORIZON_EXTENSION_DAYS = 21
MAX_HORIZON_DAYS = 365

# Erwartete Mindestanzahl Sessions: max(MIN_EXPECTED_SESSIONS, Wochen × Slots)
MIN_EXPECTED_SESSIONS = 10
# Unterhalb dieses Anteils der Erwartung wird eine Low-Yield-Warnung geloggt
LOW_YIELD_RATIO = 0.5

# Toleranz Agenda-Summe vs. Session-Dauer (Minuten)
AGENDA_DURATION_TOLERANCE_MINUTES = 5

TIME_FORMAT_PATTERN = r"([0-1][0-9]|2[0-3]):[0-5][0-9]"


# ─── WOCHENTAGE ───

WEEKDAYS: list[str] = [
    "Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag", "Samstag", "Sonntag",
]


# ─── LERNMETHODEN ───
# Titel, Beschreibung und Tipps je erlaubter Methode.

LEARNING_METHODS: dict[str, dict] = {
    "Deep Work": {
        "title":       "Deep Work",
        "description": "Konzentrierte, ablenkungsfreie Arbeit an kognitiv anspruchsvollen "
                       "Aufgaben. Optimal für komplexe Projekte und kreative Arbeit.",
        "tips": [
            "Schalte alle Benachrichtigungen aus",
            "Plane mindestens 2-4 Stunden ein",
            "Arbeite in einem ruhigen Umfeld",
            "Mache nur alle 90 Minuten eine Pause",
        ],
    },
    "Pomodoro": {
        "title":       "Pomodoro-Technik",
        "description": "Arbeite in 25-Minuten-Intervallen mit 5-Minuten-Pausen. "
                       "Nach 4 Pomodoros eine längere Pause (15-30 Min).",
        "tips": [
            "25 Minuten fokussierte Arbeit",
            "5 Minuten Pause (aufstehen, bewegen)",
            "Nach 4 Zyklen: 15-30 Min Pause",
            "Ideal für Programmierung und Übungen",
        ],
    },
    "Spaced Repetition": {
        "title":       "Spaced Repetition",
        "description": "Wiederhole Lernstoff in zunehmend größeren Abständen für "
                       "optimales Langzeitgedächtnis.",
        "tips": [
            "Erste Wiederholung: nach 1 Tag",
            "Zweite Wiederholung: nach 3 Tagen",
            "Dritte Wiederholung: nach 7 Tagen",
            "Nutze Karteikarten oder Apps wie Anki",
        ],
    },
    "Active Recall": {
        "title":       "Active Recall",
        "description": "Aktives Abrufen von Wissen ohne Hilfsmittel. Teste dich selbst "
                       "statt passiv zu lesen.",
        "tips": [
            "Schließe Bücher und Notizen",
            "Schreibe alles auf, was du weißt",
            "Vergleiche mit dem Original",
            "Konzentriere dich auf Lücken",
        ],
    },
    "Feynman Technik": {
        "title":       "Feynman-Technik",
        "description": "Erkläre ein Konzept in einfachen Worten, als würdest du es "
                       "einem Kind beibringen.",
        "tips": [
            "Wähle ein Konzept",
            "Erkläre es in einfachen Worten",
            "Identifiziere Wissenslücken",
            "Vereinfache und verwende Analogien",
        ],
    },
    "Interleaving": {
        "title":       "Interleaving",
        "description": "Wechsle zwischen verschiedenen Themen/Modulen statt alles auf "
                       "einmal zu lernen.",
        "tips": [
            "Mische verschiedene Themen",
            "Verbessert Problemlösungsfähigkeit",
            "Verhindert Langeweile",
            "Fördert Transfer von Wissen",
        ],
    },
    "Practice Testing": {
        "title":       "Practice Testing",
        "description": "Übe mit echten oder simulierten Prüfungen. Die beste "
                       "Vorbereitung auf Prüfungen.",
        "tips": [
            "Nutze alte Prüfungen",
            "Simuliere Prüfungsbedingungen",
            "Zeitlimit einhalten",
            "Analysiere Fehler gründlich",
        ],
    },
}

ALLOWED_LEARNING_METHODS: list[str] = [
    "Spaced Repetition",
    "Active Recall",
    "Deep Work",
    "Pomodoro",
    "Feynman Technik",
    "Interleaving",
    "Practice Testing",
]

# Ersatz für halluzinierte Methoden-Tags
DEFAULT_LEARNING_METHOD = "Active Recall"


def default_planner_config() -> PlannerConfig:
    """Komplette Default-Konfiguration (OpenAI gpt-4o, Ausgabe nach output/)."""
    return PlannerConfig(
        llm=LLMConfig(),
        planning=PlanningConfig(),
        storage=StorageConfig(),
        export=ExportConfig(),
    )
