"""Semester-Lernplaner: Haupt-CLI.

Verwendung:
  python main.py setup                        Ersteinrichtung (Wizard)
  python main.py config show|edit             Konfiguration anzeigen/bearbeiten
  python main.py demo                         Demo-Daten erzeugen
  python main.py module import <pdf...>       Module aus Modulhandbüchern
  python main.py module list|remove|deadline|normalize
  python main.py slot add Mo 18:00 20:00      Lernfenster hinzufügen
  python main.py slot list|remove
  python main.py check                        Eingaben prüfen
  python main.py plan generate [--mode]       Semesterplan generieren
  python main.py plan show [--week DATUM]     Plan anzeigen
  python main.py plan audit                   Pädagogische Prüfung
  python main.py week elaborate <DATUM>       Execution Guides einer Woche
  python main.py guide show|list|delete|clear Gespeicherte Guides
  python main.py learning-guide <MODUL>       Lernleitfaden für ein Modul
  python main.py export csv|json|modules|xlsx|pdf
"""

import logging
import sys
from datetime import date
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


def _load_config_or_abort():
    """Lädt die Konfiguration oder bricht mit Fehlermeldung ab."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    if mgr.first_run_check():
        console.print(
            "[red]Keine Konfiguration gefunden.[/red]\n"
            "Führen Sie zunächst [bold]python main.py setup[/bold] aus."
        )
        sys.exit(1)
    try:
        return mgr, mgr.load()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def _load_data(config):
    """Lädt den gespeicherten Datensatz oder liefert einen leeren."""
    from models.study_data import StudyData
    path = Path(config.storage.data_file)
    if not path.exists():
        return StudyData()
    return StudyData.load_json(path)


def _save_data(config, data) -> None:
    data.save_json(Path(config.storage.data_file))


def _llm_client(config):
    from config.manager import resolve_api_key
    from llm.client import OpenAIClient
    return OpenAIClient(resolve_api_key(config), model=config.llm.model)


def _parse_date_or_abort(text: str) -> date:
    from planner.dates import parse_iso_date
    parsed = parse_iso_date(text)
    if parsed is None:
        console.print(f"[red]Ungültiges Datum '{text}' (erwartet JJJJ-MM-TT).[/red]")
        sys.exit(1)
    return parsed


def _abort_on_planner_error(e) -> None:
    console.print(f"[red bold]Fehlgeschlagen ({e.kind.value}):[/red bold] {e}")
    sys.exit(1)


# ─── SETUP ────────────────────────────────────────────────────────────────────

@click.command("setup")
def cmd_setup():
    """Ersteinrichtung: KI-Zugang und Ablage mit dem Setup-Wizard anlegen."""
    from config.wizard import run_wizard
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check():
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Verwenden Sie [bold]python main.py config edit[/bold] zum Bearbeiten."
        )
        if not click.confirm("Trotzdem neu einrichten?", default=False):
            return

    config = run_wizard()
    if config is not None:
        mgr.save(config)
        console.print("[bold green]Einrichtung abgeschlossen![/bold green]")
        console.print(
            "Importieren Sie jetzt Module mit [bold]python main.py module import[/bold] "
            "oder testen Sie mit [bold]python main.py demo[/bold]."
        )


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder bearbeiten."""


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    from config.manager import is_plausible_api_key, resolve_api_key
    mgr, config = _load_config_or_abort()

    key = resolve_api_key(config)
    key_status = (
        "[green]gesetzt[/green]" if is_plausible_api_key(key)
        else "[yellow]unplausibel[/yellow]" if key else "[red]fehlt[/red]"
    )
    console.print(Panel(
        f"[bold]{config.llm.model}[/bold]  |  "
        f"API-Key ({config.llm.api_key_env}): {key_status}  |  "
        f"Modus: {config.planning.mode.value}",
        title="Lernplaner-Konfiguration",
        border_style="cyan",
    ))

    table = Table(title="KI-Aufrufe", box=box.ROUNDED)
    table.add_column("Aufruf")
    table.add_column("Temperatur", justify="right")
    table.add_column("Max. Tokens", justify="right")
    lc = config.llm
    table.add_row("Modul-Extraktion", str(lc.extraction_temperature), str(lc.extraction_max_tokens))
    table.add_row("Semesterplan", str(lc.plan_temperature), str(lc.plan_max_tokens))
    table.add_row("Wochen-Ausarbeitung", str(lc.elaboration_temperature),
                  str(lc.elaboration_max_tokens))
    table.add_row("Lernleitfaden", str(lc.guide_temperature), str(lc.guide_max_tokens))
    console.print(table)

    console.print(
        f"\n[bold]Daten:[/bold] {config.storage.data_file} | "
        f"[bold]Guides:[/bold] {config.storage.guides_file} | "
        f"[bold]Export:[/bold] {config.export.output_dir}/"
    )


@cmd_config.command("edit")
def config_edit():
    """Bearbeitet die Konfiguration interaktiv."""
    mgr, config = _load_config_or_abort()
    mgr.edit_interactive(config)


# ─── DEMO ─────────────────────────────────────────────────────────────────────

@click.command("demo")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--force", is_flag=True, default=False,
              help="Vorhandenen Datensatz überschreiben.")
def cmd_demo(seed: int, force: bool):
    """Erzeugt Demo-Daten (3 Module, 3 Lernfenster)."""
    mgr, config = _load_config_or_abort()
    from data.demo_data import DemoDataGenerator

    path = Path(config.storage.data_file)
    if path.exists() and not force:
        if not click.confirm(f"{path} existiert bereits. Überschreiben?", default=False):
            return

    gen = DemoDataGenerator(seed=seed)
    data = gen.generate()
    gen.print_summary(data)
    _save_data(config, data)
    console.print(f"[green]✓[/green] Demo-Daten gespeichert: {path}")


# ─── MODULE ───────────────────────────────────────────────────────────────────

@click.group("module")
def cmd_module():
    """Module importieren und bearbeiten."""


@cmd_module.command("import")
@click.argument("pdfs", nargs=-1, required=True,
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
def module_import(pdfs: tuple[Path, ...]):
    """Liest Modulhandbuch-PDFs und extrahiert die Module per KI."""
    from models.module import ModuleEditError
    from planner.module_extractor import ModuleExtractor

    mgr, config = _load_config_or_abort()
    data = _load_data(config)
    extractor = ModuleExtractor(_llm_client(config), config.llm)

    with console.status(f"Analysiere {len(pdfs)} PDF(s)..."):
        result = extractor.process_files(list(pdfs))

    for module in result.modules:
        try:
            data = data.add_module(module)
        except ModuleEditError as e:
            console.print(f"[yellow]⚠ {e}[/yellow]")
            continue
        console.print(
            f"[green]✓[/green] {module.name} ({module.ects} ECTS, {module.workload}h, "
            f"{len(module.assessments)} Prüfungsleistungen)"
        )
    for name, message in result.failures:
        console.print(f"[red]✗ {name}:[/red] {message}")

    _save_data(config, data)
    if result.failures and not result.modules:
        sys.exit(1)


@cmd_module.command("list")
def module_list():
    """Listet alle Module mit Prüfungsleistungen."""
    mgr, config = _load_config_or_abort()
    data = _load_data(config)
    if not data.modules:
        console.print("[dim]Keine Module vorhanden.[/dim]")
        return

    for m in data.modules:
        table = Table(
            title=f"{m.name}  ({m.ects} ECTS, {m.workload}h)",
            box=box.ROUNDED, title_justify="left",
        )
        table.add_column("Nr.", justify="right")
        table.add_column("Prüfungsleistung")
        table.add_column("Gewicht", justify="right")
        table.add_column("Format")
        table.add_column("Deadline")
        for i, a in enumerate(m.assessments, 1):
            table.add_row(
                str(i), a.type, f"{a.weight}%", a.format.value,
                a.deadline.strftime("%d.%m.%Y") if a.deadline else "[yellow]offen[/yellow]",
            )
        console.print(table)


@cmd_module.command("remove")
@click.argument("name")
def module_remove(name: str):
    """Entfernt ein Modul."""
    from models.module import ModuleEditError
    mgr, config = _load_config_or_abort()
    data = _load_data(config)
    try:
        data = data.remove_module(name)
    except ModuleEditError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    _save_data(config, data)
    console.print(f"[green]✓[/green] Modul '{name}' entfernt.")


@cmd_module.command("deadline")
@click.argument("name")
@click.argument("number", type=int)
@click.argument("deadline")
def module_deadline(name: str, number: int, deadline: str):
    """Setzt die Deadline der Prüfungsleistung NUMBER (1-basiert)."""
    from models.module import ModuleEditError
    mgr, config = _load_config_or_abort()
    data = _load_data(config)
    module = data.find_module(name)
    if module is None:
        console.print(f"[red]Modul '{name}' nicht gefunden.[/red]")
        sys.exit(1)
    try:
        module = module.with_deadline(number - 1, _parse_date_or_abort(deadline))
    except ModuleEditError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    _save_data(config, data.replace_module(module))
    console.print(f"[green]✓[/green] Deadline gesetzt: {name} Nr. {number} → {deadline}")


@cmd_module.command("normalize")
@click.argument("name")
def module_normalize(name: str):
    """Normalisiert die Gewichte eines Moduls auf genau 100 %."""
    mgr, config = _load_config_or_abort()
    data = _load_data(config)
    module = data.find_module(name)
    if module is None:
        console.print(f"[red]Modul '{name}' nicht gefunden.[/red]")
        sys.exit(1)
    normalized = module.with_normalized_weights()
    _save_data(config, data.replace_module(normalized))
    console.print(
        f"[green]✓[/green] {name}: "
        + ", ".join(f"{a.type} {a.weight}%" for a in normalized.assessments)
    )


# ─── SLOT ─────────────────────────────────────────────────────────────────────

@click.group("slot")
def cmd_slot():
    """Wöchentliche Lernfenster verwalten."""


@cmd_slot.command("add")
@click.argument("day")
@click.argument("start")
@click.argument("end")
def slot_add(day: str, start: str, end: str):
    """Fügt ein Lernfenster hinzu, z.B. 'Mo 18:00 20:00'."""
    from pydantic import ValidationError
    from models.timeslot import TimeSlot, Weekday

    mgr, config = _load_config_or_abort()
    data = _load_data(config)
    try:
        slot = TimeSlot(day=Weekday.parse(day), start_time=start, end_time=end)
    except (ValueError, ValidationError) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    _save_data(config, data.add_time_slot(slot))
    console.print(f"[green]✓[/green] Lernfenster {slot} hinzugefügt (ID {slot.id}).")


@cmd_slot.command("list")
def slot_list():
    """Listet die Lernfenster."""
    mgr, config = _load_config_or_abort()
    data = _load_data(config)
    if not data.time_slots:
        console.print("[dim]Keine Lernfenster definiert.[/dim]")
        return
    table = Table(title="Lernfenster", box=box.ROUNDED)
    table.add_column("ID", style="dim")
    table.add_column("Tag")
    table.add_column("Beginn")
    table.add_column("Ende")
    table.add_column("Dauer", justify="right")
    for s in sorted(data.time_slots, key=lambda s: (s.day.index, s.start_time)):
        table.add_row(s.id, s.day.value, s.start_time, s.end_time, f"{s.duration_minutes} min")
    console.print(table)


@cmd_slot.command("remove")
@click.argument("slot_id")
def slot_remove(slot_id: str):
    """Entfernt ein Lernfenster per ID."""
    mgr, config = _load_config_or_abort()
    data = _load_data(config)
    try:
        data = data.remove_time_slot(slot_id)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    _save_data(config, data)
    console.print(f"[green]✓[/green] Lernfenster {slot_id} entfernt.")


# ─── CHECK ────────────────────────────────────────────────────────────────────

@click.command("check")
def cmd_check():
    """Prüft, ob ein Semesterplan generiert werden kann."""
    mgr, config = _load_config_or_abort()
    data = _load_data(config)
    console.print(f"\n{data.summary()}\n")
    report = data.validate_inputs()
    report.print_rich()
    sys.exit(0 if report.is_ready else 1)


# ─── PLAN ─────────────────────────────────────────────────────────────────────

@click.group("plan")
def cmd_plan():
    """Semesterplan generieren, anzeigen und prüfen."""


@cmd_plan.command("generate")
@click.option("--mode", type=click.Choice(["single", "staged"]), default=None,
              help="Einstufig oder zweistufig (Standard aus der Config).")
def plan_generate(mode: str | None):
    """Generiert den Semesterplan per KI (mit Ersatzplan bei Fehlern)."""
    from config.schema import PlanningMode
    from planner.errors import InputPreconditionError
    from planner.reconciler import PlanReconciler

    mgr, config = _load_config_or_abort()
    data = _load_data(config)
    planning_mode = PlanningMode(mode) if mode else config.planning.mode

    reconciler = PlanReconciler(_llm_client(config), config.llm, mode=planning_mode)
    try:
        with console.status("Semesterplan wird generiert..."):
            result = reconciler.generate(data.modules, data.time_slots)
    except InputPreconditionError as e:
        _abort_on_planner_error(e)

    data = data.model_copy(update={
        "sessions": result.sessions,
        "plan_start": result.start_date,
        "plan_end": result.end_date,
        "used_fallback": result.used_fallback,
    })
    _save_data(config, data)

    if result.used_fallback:
        console.print(Panel(
            f"[yellow]KI-Plan fehlgeschlagen ({result.failure_kind.value}):[/yellow] "
            f"{result.failure_message}\nEs wurde ein einfacher Ersatzplan erstellt.",
            border_style="yellow",
        ))
    console.print(
        f"[green]✓[/green] {len(result.sessions)} Sessions von "
        f"{result.start_date:%d.%m.%Y} bis {result.end_date:%d.%m.%Y} "
        f"({result.weeks} Wochen, erwartet ≥{result.expected_sessions})"
    )
    if result.rejected or result.repaired_methods:
        console.print(
            f"[dim]{result.rejected} Sessions verworfen, "
            f"{result.repaired_methods} Lernmethoden ersetzt.[/dim]"
        )
    if result.warnings:
        console.print(
            f"[yellow]{len(result.warnings)} Hinweise[/yellow] – "
            "Details mit [bold]python main.py plan audit[/bold]."
        )


@cmd_plan.command("show")
@click.option("--week", "week", default=None, help="Nur die Woche ab DATUM (JJJJ-MM-TT).")
def plan_show(week: str | None):
    """Zeigt den Semesterplan (oder eine Woche) als Tabelle."""
    from export.helpers import group_sessions_by_week
    from planner.week_elaboration import sessions_for_week

    mgr, config = _load_config_or_abort()
    data = _load_data(config)
    if not data.sessions:
        console.print("[dim]Noch kein Plan generiert.[/dim]")
        return

    sessions = data.sessions
    if week:
        sessions = sessions_for_week(sessions, _parse_date_or_abort(week))

    for monday, week_sessions in group_sessions_by_week(sessions).items():
        table = Table(
            title=f"KW {monday.isocalendar()[1]} (ab {monday:%d.%m.%Y})",
            box=box.ROUNDED, title_justify="left",
        )
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Datum")
        table.add_column("Zeit")
        table.add_column("Modul", style="bold cyan")
        table.add_column("Thema")
        table.add_column("Methode")
        for s in week_sessions:
            table.add_row(
                s.id, f"{s.date:%a %d.%m.}", f"{s.start_time}–{s.end_time}",
                s.module, s.topic, s.learning_method or "",
            )
        console.print(table)


@cmd_plan.command("audit")
def plan_audit():
    """Prüft den Plan auf Tageslast, Monotonie, Ruhetage und Prüfungsvorbereitung."""
    from analysis.pedagogical_audit import PedagogicalAuditor

    mgr, config = _load_config_or_abort()
    data = _load_data(config)
    report = PedagogicalAuditor().audit(data.sessions, data.modules)
    report.print_rich()


# ─── WEEK ─────────────────────────────────────────────────────────────────────

@click.group("week")
def cmd_week():
    """Wochen-Ausarbeitung (Execution Guides)."""


@cmd_week.command("elaborate")
@click.argument("week_start")
def week_elaborate(week_start: str):
    """Erzeugt Execution Guides für alle Sessions der Woche ab WEEK_START."""
    from data.guide_store import JsonGuideStore
    from planner.errors import PlannerError
    from planner.week_elaboration import WeekElaborator

    mgr, config = _load_config_or_abort()
    data = _load_data(config)
    start = _parse_date_or_abort(week_start)
    store = JsonGuideStore(Path(config.storage.guides_file))
    elaborator = WeekElaborator(_llm_client(config), store, config.llm)

    try:
        with console.status(f"Woche ab {start:%d.%m.%Y} wird ausgearbeitet..."):
            result = elaborator.elaborate(start, data.sessions, data.modules)
    except PlannerError as e:
        _abort_on_planner_error(e)

    console.print(
        f"[green]✓[/green] {len(result.guides)} Execution Guides gespeichert "
        f"({result.summary['weekStartDate']} – {result.summary['weekEndDate']})"
    )
    if result.dropped:
        console.print(f"[yellow]{result.dropped} Guides verworfen.[/yellow]")
    for w in result.warnings:
        console.print(f"[yellow]⚠ {w}[/yellow]")


# ─── GUIDE ────────────────────────────────────────────────────────────────────

@click.group("guide")
def cmd_guide():
    """Gespeicherte Execution Guides verwalten."""


def _guide_store():
    from data.guide_store import JsonGuideStore
    mgr, config = _load_config_or_abort()
    return JsonGuideStore(Path(config.storage.guides_file))


@cmd_guide.command("show")
@click.argument("session_id")
def guide_show(session_id: str):
    """Zeigt den Execution Guide einer Session."""
    guide = _guide_store().get(session_id)
    if guide is None:
        console.print(f"[dim]Kein Guide für Session {session_id}.[/dim]")
        sys.exit(1)

    console.print(Panel(
        f"[bold]{guide.session_goal}[/bold]",
        title=f"Session {guide.session_id}",
        border_style="cyan",
    ))
    table = Table(title="Ablauf", box=box.ROUNDED)
    table.add_column("Phase", style="bold")
    table.add_column("Min", justify="right")
    table.add_column("Beschreibung")
    for item in guide.agenda:
        table.add_row(item.phase, str(item.duration), item.description)
    console.print(table)
    console.print(f"[bold]Methoden-Ideen:[/bold] {'; '.join(guide.method_ideas)}")
    console.print(f"[bold]Tools:[/bold] {', '.join(guide.tools)}")
    console.print(f"[bold]Ergebnis:[/bold] {guide.deliverable}")
    console.print(f"[bold]Abschluss-Check:[/bold] {guide.ready_check}")


@cmd_guide.command("list")
def guide_list():
    """Listet alle gespeicherten Guides."""
    guides = _guide_store().get_all()
    if not guides:
        console.print("[dim]Keine Execution Guides gespeichert.[/dim]")
        return
    table = Table(title="Execution Guides", box=box.ROUNDED)
    table.add_column("Session", justify="right")
    table.add_column("Ziel")
    table.add_column("Dauer", justify="right")
    table.add_column("Erstellt")
    for session_id, guide in sorted(guides.items(), key=lambda kv: kv[1].generated_at):
        table.add_row(
            session_id, guide.session_goal, f"{guide.agenda_minutes} min",
            f"{guide.generated_at:%d.%m.%Y %H:%M}",
        )
    console.print(table)


@cmd_guide.command("delete")
@click.argument("session_id")
def guide_delete(session_id: str):
    """Löscht den Guide einer Session."""
    if _guide_store().delete(session_id):
        console.print(f"[green]✓[/green] Guide {session_id} gelöscht.")
    else:
        console.print(f"[dim]Kein Guide für Session {session_id}.[/dim]")


@cmd_guide.command("clear")
def guide_clear():
    """Löscht alle gespeicherten Guides."""
    if click.confirm("Alle Execution Guides löschen?", default=False):
        _guide_store().clear()
        console.print("[green]✓[/green] Alle Guides gelöscht.")


# ─── LEARNING GUIDE ───────────────────────────────────────────────────────────

@click.command("learning-guide")
@click.argument("module_name")
def cmd_learning_guide(module_name: str):
    """Erstellt einen Lernleitfaden für ein Modul."""
    from planner.errors import PlannerError
    from planner.learning_guide import LearningGuideGenerator

    mgr, config = _load_config_or_abort()
    data = _load_data(config)
    module = data.find_module(module_name)
    if module is None:
        console.print(f"[red]Modul '{module_name}' nicht gefunden.[/red]")
        sys.exit(1)

    generator = LearningGuideGenerator(_llm_client(config), config.llm)
    try:
        with console.status(f"Lernleitfaden für {module.name} wird erstellt..."):
            guide = generator.generate(module, data.sessions)
    except PlannerError as e:
        _abort_on_planner_error(e)

    console.print(Panel(
        guide.overview or "[dim]keine Übersicht[/dim]",
        title=f"Lernleitfaden: {guide.module_name} ({guide.total_hours}h, "
              f"{guide.session_count} Sessions)",
        border_style="cyan",
    ))
    strategy = guide.learning_strategy
    if strategy.method:
        console.print(f"[bold]Strategie:[/bold] {strategy.method} – {strategy.reasoning}")
    if guide.weekly_plan:
        table = Table(title="Wochenplan", box=box.ROUNDED)
        table.add_column("Woche")
        table.add_column("Fokus")
        table.add_column("Aufgaben")
        for w in guide.weekly_plan:
            table.add_row(w.week, w.focus, "\n".join(w.tasks))
        console.print(table)
    for prep in guide.exam_prep:
        console.print(
            f"[bold]{prep.assessment_type}[/bold] ({prep.deadline or 'offen'}): "
            f"4 Wochen vorher: {'; '.join(prep.four_weeks)}"
        )

    out_dir = Path(config.export.output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / f"lernleitfaden_{module.name.replace(' ', '_')}.json"
    out_path.write_text(guide.model_dump_json(indent=2), encoding="utf-8")
    console.print(f"[green]✓[/green] Gespeichert: {out_path}")


# ─── EXPORT ───────────────────────────────────────────────────────────────────

@click.command("export")
@click.argument("fmt", type=click.Choice(["csv", "json", "modules", "xlsx", "pdf"]))
def cmd_export(fmt: str):
    """Exportiert den Plan (csv/json/xlsx/pdf) oder die Module (modules)."""
    from export import (
        ExcelExporter, PdfExporter, export_modules_json,
        export_sessions_csv, export_sessions_json,
    )
    from export.helpers import dated_filename

    mgr, config = _load_config_or_abort()
    data = _load_data(config)
    out_dir = Path(config.export.output_dir)

    if fmt == "modules":
        if not data.modules:
            console.print("[red]Keine Module zum Exportieren.[/red]")
            sys.exit(1)
        path = export_modules_json(data.modules, out_dir)
    else:
        if not data.sessions:
            console.print("[red]Kein Plan vorhanden. Zuerst 'plan generate' ausführen.[/red]")
            sys.exit(1)
        if fmt == "csv":
            path = export_sessions_csv(data.sessions, out_dir)
        elif fmt == "json":
            path = export_sessions_json(data.sessions, out_dir)
        elif fmt == "xlsx":
            path = out_dir / dated_filename("lernplan", "xlsx")
            ExcelExporter(data.sessions, data.modules, data.used_fallback).export(path)
        else:
            path = out_dir / dated_filename("lernplan", "pdf")
            PdfExporter(data.sessions).export(path)

    console.print(f"[green]✓[/green] Exportiert: {path}")


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Ausführliches Logging.")
def cli(verbose: bool):
    """Semester-Lernplaner: Module, Lernfenster und KI-generierter Lernplan.

    Starten Sie mit: python main.py setup
    """
    _setup_logging(verbose)


def main():
    """Einstiegspunkt. Startet automatisch den Wizard beim ersten Aufruf."""
    from config.manager import ConfigManager
    mgr = ConfigManager()

    if len(sys.argv) == 1 and mgr.first_run_check():
        console.print(Panel(
            "[bold]Willkommen beim Semester-Lernplaner![/bold]\n\n"
            "Keine Konfiguration gefunden.\n"
            "Der Setup-Wizard wird jetzt gestartet...",
            border_style="cyan",
        ))
        sys.argv.append("setup")

    cli()


# Befehle registrieren
cli.add_command(cmd_setup)
cli.add_command(cmd_config)
cli.add_command(cmd_demo)
cli.add_command(cmd_module)
cli.add_command(cmd_slot)
cli.add_command(cmd_check)
cli.add_command(cmd_plan)
cli.add_command(cmd_week)
cli.add_command(cmd_guide)
cli.add_command(cmd_learning_guide)
cli.add_command(cmd_export)


if __name__ == "__main__":
    main()
