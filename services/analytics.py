"""
Derived views over record snapshots: KPIs, upcoming appointments, top
patients, calendar bucketing and list filters.

Everything here is a pure function of the patients/incidents it is given and
is recomputed on every call.
"""

from collections import defaultdict
from datetime import date

from core.time_utils import now_local, try_parse_datetime, try_parse_date
from models.incident import STATUSES


def _cost(incident) -> float:
    return incident.cost or 0


def _dated(incidents):
    """Yield (datetime, incident) pairs; undated or unparseable incidents are skipped."""
    for i in incidents:
        dt = try_parse_datetime(i.appointment_date)
        if dt is not None:
            yield dt, i


def compute_kpis(patients, incidents) -> dict:
    by_status = {status: 0 for status in STATUSES}
    for i in incidents:
        by_status[i.status] = by_status.get(i.status, 0) + 1

    return {
        "total_patients": len(patients),
        "total_revenue": sum(_cost(i) for i in incidents),
        "by_status": by_status,
        "completed": by_status["Completed"],
        "pending": by_status["Scheduled"] + by_status["Pending"],
        "cancelled": by_status["Cancelled"],
    }


def upcoming_appointments(incidents, now=None, limit: int | None = 10) -> list:
    """Scheduled incidents strictly after ``now``, soonest first."""
    now = now or now_local()
    upcoming = [
        (dt, i) for dt, i in _dated(incidents)
        if i.status == "Scheduled" and dt > now
    ]
    upcoming.sort(key=lambda pair: pair[0])
    upcoming = [i for _, i in upcoming]
    return upcoming if limit is None else upcoming[:limit]


def top_patients(patients, incidents, limit: int = 5) -> list[dict]:
    """Patients ranked by number of incidents; ties keep collection order."""
    visits = defaultdict(int)
    spent = defaultdict(float)
    for i in incidents:
        visits[i.patient_id] += 1
        spent[i.patient_id] += _cost(i)

    rows = [
        {"patient": p, "visits": visits[p.id], "total_spent": spent[p.id]}
        for p in patients
    ]
    # sorted() is stable
    rows = sorted(rows, key=lambda row: row["visits"], reverse=True)
    return rows[:limit]


# ------------------------------------------
# Calendar
# ------------------------------------------
def monthly_appointments(incidents, year: int, month: int) -> list:
    return [i for dt, i in _dated(incidents) if dt.year == year and dt.month == month]


def appointments_by_day(incidents, year: int, month: int) -> dict[int, list]:
    """Day-of-month -> incidents on that day, for the given month."""
    days = defaultdict(list)
    for dt, i in _dated(incidents):
        if dt.year == year and dt.month == month:
            days[dt.day].append(i)
    return dict(days)


def appointments_on(incidents, day: date) -> list:
    return [i for dt, i in _dated(incidents) if dt.date() == day]


# ------------------------------------------
# List filters
# ------------------------------------------
def search_patients(patients, term: str) -> list:
    if not term:
        return list(patients)
    q = term.lower()
    return [
        p for p in patients
        if q in (p.name or "").lower()
        or q in (p.email or "").lower()
        or term in (p.contact or "")
    ]


def filter_incidents(incidents, patients, term: str = "", status: str = "All") -> list:
    names = {p.id: (p.name or "").lower() for p in patients}
    q = (term or "").lower()

    result = []
    for i in incidents:
        if status != "All" and i.status != status:
            continue
        if q and not (
            q in names.get(i.patient_id, "")
            or q in (i.title or "").lower()
            or q in (i.description or "").lower()
        ):
            continue
        result.append(i)
    return result


def patient_history(incidents, patient_id: str, status: str = "All") -> list:
    """A patient's incidents, most recent appointment first. Undated ones go last."""
    own = [
        i for i in incidents
        if i.patient_id == patient_id and (status == "All" or i.status == status)
    ]
    dated = sorted(_dated(own), key=lambda pair: pair[0], reverse=True)
    undated = [i for i in own if try_parse_datetime(i.appointment_date) is None]
    return [i for _, i in dated] + undated


def patient_summary(incidents, patient_id: str, now=None) -> dict:
    own = [i for i in incidents if i.patient_id == patient_id]
    upcoming = upcoming_appointments(own, now=now, limit=None)
    return {
        "total": len(own),
        "upcoming": len(upcoming),
        "completed": sum(1 for i in own if i.status == "Completed"),
        "total_spent": sum(_cost(i) for i in own),
        "next_appointment": upcoming[0] if upcoming else None,
    }


def calculate_age(dob, today: date | None = None) -> int | None:
    """Whole years since ``dob``; None when the date is missing or unreadable."""
    born = try_parse_date(dob)
    if born is None:
        return None
    today = today or date.today()
    age = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        age -= 1
    return age
