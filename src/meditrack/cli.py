from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from .clinic import Clinic
from .config import ClinicConfig, GenerationConfig
from .data_generation import generate_clinic, save_data
from .errors import NotFoundError
from .logging_config import setup_logging

console = Console()
app = typer.Typer(add_completion=False, no_args_is_help=True)

_DEFAULTS = ClinicConfig()


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@app.callback()
def main_options(
    log_level: LogLevel = typer.Option(LogLevel(_DEFAULTS.log_level), case_sensitive=False, help="Logging level."),
) -> None:
    setup_logging(log_level.value, console=console)


def _build_clinic(seed: int, doctors: int, patients: int) -> Clinic:
    gen = GenerationConfig(seed=seed, doctors=doctors, patients=patients)
    console.log("Generating synthetic clinic...", style="bold")
    return generate_clinic(gen, ClinicConfig())


@app.command("recommend")
def recommend(
    symptoms: Optional[List[str]] = typer.Argument(None, help="Free-text symptoms, e.g. 'chest pain'."),
    max_doctors: int = typer.Option(5, help="Doctors to recommend."),
    days_ahead: int = typer.Option(_DEFAULTS.default_days_ahead, help="Days to search for open slots."),
    slots_per_doctor: int = typer.Option(3, help="Open slots to list per doctor."),
    seed: int = typer.Option(42, help="Random seed for the synthetic clinic."),
    doctors: int = typer.Option(20, help="Doctors in the synthetic clinic."),
    patients: int = typer.Option(60, help="Patients in the synthetic clinic."),
) -> None:
    clinic = _build_clinic(seed, doctors, patients)
    suggestions = clinic.appointments.suggest_slots_for_symptoms(
        symptoms or [], max_doctors, days_ahead, slots_per_doctor
    )
    if not suggestions:
        console.print("No matching doctors.")
        return

    table = Table(title="Recommended doctors", show_header=True, header_style="bold magenta")
    table.add_column("Doctor")
    table.add_column("Specialization")
    table.add_column("Rating")
    table.add_column("Experience")
    table.add_column("Next open slots")
    for doctor, slots in suggestions.items():
        table.add_row(
            f"{doctor.name} [{doctor.doctor_id}]",
            doctor.specialization.label,
            f"{doctor.rating:0.1f}",
            f"{doctor.years_of_experience}y",
            ", ".join(s.strftime("%a %d %b %H:%M") for s in slots) or "-",
        )
    console.print(table)


@app.command("slots")
def slots(
    doctor_id: str = typer.Argument(..., help="Doctor id, e.g. DOC00501."),
    days_ahead: int = typer.Option(_DEFAULTS.default_days_ahead, help="Days to search."),
    max_slots: int = typer.Option(_DEFAULTS.default_max_slots, help="Maximum slots to list."),
    seed: int = typer.Option(42, help="Random seed for the synthetic clinic."),
    doctors: int = typer.Option(20, help="Doctors in the synthetic clinic."),
    patients: int = typer.Option(60, help="Patients in the synthetic clinic."),
) -> None:
    clinic = _build_clinic(seed, doctors, patients)
    try:
        doctor = clinic.doctors.get(doctor_id)
    except NotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    found = clinic.appointments.suggest_available_slots(doctor.doctor_id, days_ahead, max_slots)
    console.print(f"Open slots for {doctor.name} ({doctor.specialization.label}):")
    for slot in found:
        console.print(f"  {slot:%Y-%m-%d %H:%M}")
    if not found:
        console.print("  none")


@app.command("report")
def report(
    seed: int = typer.Option(42, help="Random seed for the synthetic clinic."),
    doctors: int = typer.Option(20, help="Doctors in the synthetic clinic."),
    patients: int = typer.Option(60, help="Patients in the synthetic clinic."),
    csv_out: Optional[Path] = typer.Option(None, help="Directory to save doctors/patients/appointments/bills CSV."),
    png_out: Optional[Path] = typer.Option(None, help="Path to save the matplotlib overview PNG."),
) -> None:
    clinic = _build_clinic(seed, doctors, patients)
    _print_metrics(clinic.compute_metrics())

    if csv_out:
        save_data(clinic, csv_out)
        console.log(f"Saved clinic tables to {csv_out}")

    if png_out:
        from .visualize import plot_overview

        plot_overview(clinic, outfile=png_out)


def _print_metrics(metrics: dict) -> None:
    table = Table(title="Clinic KPIs", show_header=True, header_style="bold magenta")
    table.add_column("Metric")
    table.add_column("Value")
    for key, val in metrics.items():
        table.add_row(key, f"{val:0.3f}" if isinstance(val, float) else str(val))
    console.print(table)
