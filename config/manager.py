"""Konfigurationsmanager: Laden, Speichern, Validieren und interaktives Bearbeiten.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
import os
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table
from rich import box
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.schema import (
    ExportConfig,
    LLMConfig,
    PlannerConfig,
    PlanningConfig,
    StorageConfig,
)

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Lernplan-Generator: Konfiguration
# Version: 1.0
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "llm": (
        "KI-Anbindung",
        "Der API-Key steht NICHT in dieser Datei, sondern in der Umgebungsvariable\n"
        "aus 'api_key_env' (Standard: OPENAI_API_KEY).",
    ),
    "planning": (
        "Planung",
        "mode: single = ein KI-Aufruf, staged = Verteilung + Anreicherung.",
    ),
    "storage": (
        "Ablage",
        None,
    ),
    "export": (
        "Export",
        None,
    ),
}


def resolve_api_key(config: PlannerConfig) -> str:
    """Liest den API-Key aus der konfigurierten Umgebungsvariable ('' wenn nicht gesetzt)."""
    return os.environ.get(config.llm.api_key_env, "").strip()


def is_plausible_api_key(key: str) -> bool:
    """OpenAI-Keys beginnen mit 'sk-'."""
    return bool(key) and key.startswith("sk-")


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "planner_config.yaml"

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> PlannerConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py setup' aus, um den Lernplaner einzurichten."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            config = PlannerConfig.model_validate(dict(raw or {}))
            return config
        except Exception as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    # ─── Speichern ───

    def save(self, config: PlannerConfig, path: Optional[Path] = None) -> None:
        """Speichere Config als YAML mit deutschen Kommentaren."""
        target = path or self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Konfiguration gespeichert: {target}")

    def _build_commented_yaml(self, config: PlannerConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        if "llm" in cm:
            llm_map = CommentedMap(cm["llm"])
            llm_map.yaml_add_eol_comment("PDF-Text wird vorher gekürzt", "max_text_chars")
            cm["llm"] = llm_map

        return cm

    # ─── Interaktives Bearbeiten ───

    def edit_interactive(self, config: PlannerConfig) -> PlannerConfig:
        """Interaktives Bearbeitungsmenü für die Konfiguration."""
        while True:
            console.print()
            console.print(Panel(
                "[bold]Konfiguration bearbeiten[/bold]",
                border_style="cyan",
            ))
            console.print("  [bold]1.[/bold] KI-Anbindung (Modell, Temperaturen, Tokens)")
            console.print("  [bold]2.[/bold] Planungsmodus")
            console.print("  [bold]3.[/bold] Ablage (Dateipfade)")
            console.print("  [bold]4.[/bold] Export-Verzeichnis")
            console.print("  [bold]0.[/bold] Speichern & Zurück")

            choice = Prompt.ask("\nAuswahl", default="0")

            if choice == "1":
                config = config.model_copy(
                    update={"llm": self._edit_llm(config.llm)}
                )
            elif choice == "2":
                config = config.model_copy(
                    update={"planning": self._edit_planning(config.planning)}
                )
            elif choice == "3":
                config = config.model_copy(
                    update={"storage": self._edit_storage(config.storage)}
                )
            elif choice == "4":
                out = Prompt.ask("Export-Verzeichnis", default=config.export.output_dir)
                config = config.model_copy(
                    update={"export": ExportConfig(output_dir=out)}
                )
            elif choice == "0":
                self.save(config)
                break
            else:
                console.print("[yellow]Ungültige Auswahl.[/yellow]")

        return config

    def _edit_llm(self, lc: LLMConfig) -> LLMConfig:
        """KI-Einstellungen interaktiv anpassen."""
        console.print("\n[bold]Aktuelle KI-Einstellungen:[/bold]")
        table = Table(box=box.SIMPLE)
        table.add_column("Parameter", style="bold")
        table.add_column("Aktuell")
        for k, v in lc.model_dump().items():
            table.add_row(k, str(v))
        console.print(table)

        if not Confirm.ask("Änderungen vornehmen?", default=False):
            return lc

        return LLMConfig(
            model=Prompt.ask("Modell", default=lc.model),
            api_key_env=Prompt.ask("Umgebungsvariable API-Key", default=lc.api_key_env),
            extraction_temperature=FloatPrompt.ask(
                "Temperatur Modul-Extraktion", default=lc.extraction_temperature),
            extraction_max_tokens=IntPrompt.ask(
                "Max. Tokens Modul-Extraktion", default=lc.extraction_max_tokens),
            plan_temperature=FloatPrompt.ask(
                "Temperatur Semesterplan", default=lc.plan_temperature),
            plan_max_tokens=IntPrompt.ask(
                "Max. Tokens Semesterplan", default=lc.plan_max_tokens),
            elaboration_temperature=FloatPrompt.ask(
                "Temperatur Wochen-Ausarbeitung", default=lc.elaboration_temperature),
            elaboration_max_tokens=IntPrompt.ask(
                "Max. Tokens Wochen-Ausarbeitung", default=lc.elaboration_max_tokens),
            guide_temperature=FloatPrompt.ask(
                "Temperatur Lernleitfaden", default=lc.guide_temperature),
            guide_max_tokens=IntPrompt.ask(
                "Max. Tokens Lernleitfaden", default=lc.guide_max_tokens),
            max_text_chars=IntPrompt.ask(
                "Max. Zeichen Modulbeschreibung", default=lc.max_text_chars),
        )

    def _edit_planning(self, pc: PlanningConfig) -> PlanningConfig:
        """Planungsmodus wählen."""
        from config.wizard import _wizard_planning
        console.print(f"\nAktueller Modus: [bold]{pc.mode.value}[/bold]")
        return _wizard_planning()

    def _edit_storage(self, sc: StorageConfig) -> StorageConfig:
        """Dateipfade interaktiv anpassen."""
        data_file = Prompt.ask("Datei für Lerndaten", default=sc.data_file)
        guides_file = Prompt.ask("Datei für Execution Guides", default=sc.guides_file)
        try:
            return StorageConfig(data_file=data_file, guides_file=guides_file)
        except ValueError as e:
            console.print(f"[yellow]⚠[/yellow]  {e}")
            return sc
