"""Interaktiver Setup-Wizard für die Ersteinrichtung des Lernplan-Generators.

Führt den Nutzer Schritt für Schritt durch KI-Anbindung, Planungsmodus
und Ablage. Nutzt rich für schöne Konsolenausgabe.
"""

import os
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table
from rich import box

from config.schema import (
    ExportConfig,
    LLMConfig,
    PlannerConfig,
    PlanningConfig,
    PlanningMode,
    StorageConfig,
)
from config.defaults import ALLOWED_LEARNING_METHODS, LEARNING_METHODS
from config.manager import is_plausible_api_key

console = Console()


def _header(title: str) -> None:
    console.print()
    console.print(Panel(f"[bold cyan]{title}[/bold cyan]", expand=False))


def _info(text: str) -> None:
    console.print(f"[dim]{text}[/dim]")


def _success(text: str) -> None:
    console.print(f"[green]✓[/green] {text}")


def _warn(text: str) -> None:
    console.print(f"[yellow]⚠[/yellow]  {text}")


def _show_methods_table() -> None:
    """Zeigt die erlaubten Lernmethoden als rich-Tabelle an."""
    table = Table(title="Lernmethoden", box=box.ROUNDED)
    table.add_column("Methode", style="bold")
    table.add_column("Beschreibung")
    for name in ALLOWED_LEARNING_METHODS:
        table.add_row(name, LEARNING_METHODS[name]["description"])
    console.print(table)


# ─── SCHRITT 1: KI-Anbindung ───

def _wizard_llm() -> LLMConfig:
    _header("Schritt 1: KI-Anbindung")
    _info("Der API-Key wird aus einer Umgebungsvariable gelesen und nie gespeichert.")

    model = Prompt.ask("Modell", default="gpt-4o")
    env_name = Prompt.ask("Umgebungsvariable für den API-Key", default="OPENAI_API_KEY")

    key = os.environ.get(env_name, "").strip()
    if not key:
        _warn(f"Umgebungsvariable {env_name} ist nicht gesetzt. "
              f"Ohne Key sind keine KI-Aufrufe möglich.")
    elif not is_plausible_api_key(key):
        _warn("Der API-Key sieht ungewöhnlich aus (erwartet: 'sk-...').")
    else:
        _success(f"API-Key in {env_name} gefunden.")

    return LLMConfig(model=model, api_key_env=env_name)


# ─── SCHRITT 2: Planung ───

def _wizard_planning() -> PlanningConfig:
    _header("Schritt 2: Planungsmodus")
    console.print("  [bold]1.[/bold] Einstufig: ein KI-Aufruf erzeugt den ganzen Semesterplan")
    console.print("  [bold]2.[/bold] Zweistufig: erst Module auf Slots verteilen, "
                  "dann Inhalte anreichern")
    choice = Prompt.ask("Modus wählen", default="1")
    mode = PlanningMode.STAGED if choice == "2" else PlanningMode.SINGLE
    _success(f"Modus: {mode.value}")
    return PlanningConfig(mode=mode)


# ─── SCHRITT 3: Ablage ───

def _wizard_storage() -> tuple[StorageConfig, ExportConfig]:
    _header("Schritt 3: Ablage & Export")
    defaults = StorageConfig()
    if Confirm.ask("Standard-Pfade (output/) übernehmen?", default=True):
        return defaults, ExportConfig()

    out_dir = Prompt.ask("Export-Verzeichnis", default="output")
    data_file = Prompt.ask("Datei für Lerndaten", default=f"{out_dir}/study_data.json")
    guides_file = Prompt.ask("Datei für Execution Guides",
                             default=f"{out_dir}/execution_guides.json")
    try:
        storage = StorageConfig(data_file=data_file, guides_file=guides_file)
    except ValueError as e:
        _warn(f"Validierungsfehler: {e}")
        _warn("Standard-Pfade werden verwendet.")
        storage = defaults
    return storage, ExportConfig(output_dir=out_dir)


def _show_summary(config: PlannerConfig) -> None:
    _header("Zusammenfassung")
    table = Table(box=box.ROUNDED)
    table.add_column("Bereich", style="bold")
    table.add_column("Wert")
    table.add_row("Modell", config.llm.model)
    table.add_row("API-Key aus", config.llm.api_key_env)
    table.add_row("Planungsmodus", config.planning.mode.value)
    table.add_row("Lerndaten", config.storage.data_file)
    table.add_row("Execution Guides", config.storage.guides_file)
    table.add_row("Export", config.export.output_dir)
    console.print(table)


# ─── HAUPT-WIZARD ───

def run_wizard() -> Optional[PlannerConfig]:
    """Führt den vollständigen interaktiven Setup-Wizard aus.

    Returns:
        Fertige PlannerConfig oder None, wenn der Nutzer abbricht.
    """
    console.print()
    console.print(Panel(
        "[bold]Willkommen beim Lernplan-Generator![/bold]\n\n"
        "Aus deinen Modulbeschreibungen (PDF) und freien Zeitfenstern\n"
        "erstellt eine KI einen Semester-Lernplan mit Prüfungsvorbereitung.\n\n"
        "[dim]Standard-Werte können mit Enter übernommen werden.[/dim]",
        title="[bold cyan]Lernplan-Generator[/bold cyan]",
        border_style="cyan",
    ))

    if not Confirm.ask("\nMöchtest du den Lernplaner jetzt einrichten?", default=True):
        console.print("[yellow]Einrichtung abgebrochen.[/yellow]")
        return None

    try:
        llm = _wizard_llm()
        planning = _wizard_planning()
        storage, export = _wizard_storage()

        config = PlannerConfig(llm=llm, planning=planning, storage=storage, export=export)

        _show_summary(config)
        _show_methods_table()

        if not Confirm.ask("\nKonfiguration speichern?", default=True):
            console.print("[yellow]Konfiguration wird nicht gespeichert.[/yellow]")
            return None

        _success("Konfiguration wird gespeichert...")
        return config

    except KeyboardInterrupt:
        console.print("\n[yellow]Wizard abgebrochen.[/yellow]")
        return None
