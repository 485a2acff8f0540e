import calendar
import streamlit as st
from datetime import date

from core.session_manager import require_role, get_records
from core.helpers import render_admin_sidebar, format_time, format_money, status_label
from services.analytics import monthly_appointments, appointments_by_day

WEEK_DAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def _shift_month(year: int, month: int, delta: int):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def main():
    require_role("Admin")
    render_admin_sidebar()

    st.title("Calendar")

    today = date.today()
    year = st.session_state.get("calendar_year", today.year)
    month = st.session_state.get("calendar_month", today.month)

    records = get_records()
    incidents = records.incidents
    patients = {p.id: p for p in records.patients}

    st.caption(f"{len(monthly_appointments(incidents, year, month))} appointments this month")

    nav_prev, header, nav_next = st.columns([1, 4, 1])
    if nav_prev.button("◀", key="cal_prev"):
        st.session_state.calendar_year, st.session_state.calendar_month = _shift_month(year, month, -1)
        st.session_state.pop("calendar_selected", None)
        st.rerun()
    header.subheader(f"{calendar.month_name[month]} {year}")
    if nav_next.button("▶", key="cal_next"):
        st.session_state.calendar_year, st.session_state.calendar_month = _shift_month(year, month, 1)
        st.session_state.pop("calendar_selected", None)
        st.rerun()

    by_day = appointments_by_day(incidents, year, month)

    # Sunday-first grid, 0 marks days outside the month
    grid = calendar.Calendar(firstweekday=6).monthdayscalendar(year, month)
    for col, name in zip(st.columns(7), WEEK_DAYS):
        col.markdown(f"**{name}**")
    for week in grid:
        for col, day in zip(st.columns(7), week):
            if day == 0:
                col.write("")
                continue
            count = len(by_day.get(day, []))
            label = f"{day}" + (f" • {count}" if count else "")
            if date(year, month, day) == today:
                label = f"[{label}]"
            if col.button(label, key=f"cal_day_{day}", use_container_width=True):
                st.session_state.calendar_selected = day

    st.divider()

    selected = st.session_state.get("calendar_selected")
    if not selected:
        st.info("Select a date")
        return

    day_appts = sorted(by_day.get(selected, []), key=lambda i: i.appointment_date)
    st.subheader(date(year, month, selected).strftime("%A, %B %d, %Y"))
    st.caption(f"{len(day_appts)} appointment{'s' if len(day_appts) != 1 else ''}")

    for appt in day_appts:
        patient = patients.get(appt.patient_id)
        with st.container(border=True):
            st.write(f"**{appt.title}** — {status_label(appt.status)}")
            st.caption(f"{format_time(appt.appointment_date)} • {patient.name if patient else 'Unknown patient'}")
            if patient and patient.contact:
                st.caption(patient.contact)
            if appt.description:
                st.write(appt.description)
            if appt.cost:
                st.write(format_money(appt.cost))


if __name__ == "__main__":
    main()
