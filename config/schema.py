from pydantic import BaseModel, Field, model_validator
from enum import Enum


class PlanningMode(str, Enum):
    SINGLE = "single"
    STAGED = "staged"


# ─── KI-ANBINDUNG ───

class LLMConfig(BaseModel):
    """Einstellungen für den externen Sprachmodell-Dienst.

    Der API-Key selbst steht NIE in der YAML-Datei, sondern wird aus der
    hier benannten Umgebungsvariable gelesen.
    """
    # Modellname beim Anbieter
    model: str = Field("gpt-4o",
        description="Modellname (OpenAI)")
    # Umgebungsvariable mit dem API-Key
    api_key_env: str = Field("OPENAI_API_KEY",
        description="Umgebungsvariable für den API-Key")
    # Modul-Extraktion: niedrige Temperatur für stabile Fakten
    extraction_temperature: float = Field(0.1, ge=0.0, le=2.0)
    extraction_max_tokens: int = Field(1000, ge=100)
    # Semesterplan (einstufig oder zweistufig)
    plan_temperature: float = Field(0.7, ge=0.0, le=2.0)
    plan_max_tokens: int = Field(16000, ge=100)
    # Wochen-Ausarbeitung (Execution Guides)
    elaboration_temperature: float = Field(0.7, ge=0.0, le=2.0)
    elaboration_max_tokens: int = Field(16000, ge=100)
    # Modul-Lernleitfaden
    guide_temperature: float = Field(0.7, ge=0.0, le=2.0)
    guide_max_tokens: int = Field(4000, ge=100)
    # PDF-Text wird vor dem Senden auf diese Länge gekürzt
    max_text_chars: int = Field(12000, ge=1000,
        description="Max. Zeichen Modulbeschreibung pro Anfrage")


# ─── PLANUNG ───

class PlanningConfig(BaseModel):
    """Ablauf der Semesterplan-Generierung."""
    # single = ein Aufruf, staged = Verteilung + Anreicherung
    mode: PlanningMode = Field(PlanningMode.SINGLE,
        description="single: ein KI-Aufruf, staged: Verteilung + Anreicherung")


# ─── ABLAGE ───

class StorageConfig(BaseModel):
    """Dateipfade für Lerndaten und Execution Guides."""
    # Module, Zeitslots und Sessions
    data_file: str = Field("output/study_data.json")
    # Schlüssel-Wert-Ablage der Execution Guides (Session-ID → Guide)
    guides_file: str = Field("output/execution_guides.json")

    @model_validator(mode='after')
    def validate_distinct_files(self):
        """Lerndaten und Guides dürfen nicht in dieselbe Datei schreiben."""
        if self.data_file == self.guides_file:
            raise ValueError(
                f"data_file und guides_file zeigen auf dieselbe Datei: {self.data_file}")
        return self


# ─── EXPORT ───

class ExportConfig(BaseModel):
    """Export-Einstellungen."""
    # Zielverzeichnis für CSV/JSON/Excel/PDF
    output_dir: str = Field("output")


# ─── GESAMT-CONFIG ───

class PlannerConfig(BaseModel):
    """Gesamtkonfiguration des Lernplan-Generators."""
    # KI-Anbindung
    llm: LLMConfig = Field(default_factory=LLMConfig)
    # Planungsablauf
    planning: PlanningConfig = Field(default_factory=PlanningConfig)
    # Ablage
    storage: StorageConfig = Field(default_factory=StorageConfig)
    # Export
    export: ExportConfig = Field(default_factory=ExportConfig)
