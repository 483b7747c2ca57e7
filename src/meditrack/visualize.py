"""
Lightweight visualizations for quick inspection.
"""

from __future__ import annotations

from pathlib import Path

import matplotlib

# Use a non-interactive backend to avoid display issues in headless environments.
matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from .clinic import Clinic  # noqa: E402


def plot_overview(clinic: Clinic, outfile: Path) -> None:
    appts = clinic.appointments_frame()
    doctors = clinic.doctors_frame()
    fig, axes = plt.subplots(2, 2, figsize=(12, 8))

    # Appointment lifecycle mix
    if len(appts):
        appts["status"].value_counts().plot(kind="bar", ax=axes[0, 0], color="tab:blue")
    axes[0, 0].set_title("Appointments by status")

    # Roster coverage
    if len(doctors):
        doctors["specialization"].value_counts().plot(kind="bar", ax=axes[0, 1], color="tab:purple")
        doctors.groupby("specialization")["consultation_fee"].mean().plot(
            kind="bar", ax=axes[1, 0], color="tab:green"
        )
    axes[0, 1].set_title("Doctors by specialization")
    axes[1, 0].set_title("Average consultation fee")

    # Money collected vs still owed
    axes[1, 1].bar(
        ["paid", "outstanding"],
        [clinic.billing.total_revenue(), clinic.billing.outstanding_amount()],
        color=["tab:green", "tab:red"],
    )
    axes[1, 1].set_title("Billing totals")

    plt.tight_layout()
    fig.savefig(outfile, dpi=150)
    plt.close(fig)
