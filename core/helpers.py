import streamlit as st

from core.time_utils import try_parse_datetime

STATUS_ICONS = {
    "Completed": "✅",
    "Scheduled": "🕒",
    "Cancelled": "❌",
    "Pending": "⚠️",
}


def format_datetime(value: str | None) -> str:
    if not value:
        return "—"
    dt = try_parse_datetime(value)
    # Show unreadable stored values as-is
    return dt.strftime("%b %d, %Y %I:%M %p") if dt else str(value)


def format_time(value: str) -> str:
    dt = try_parse_datetime(value)
    return dt.strftime("%I:%M %p") if dt else "—"


def format_money(amount) -> str:
    if amount is None:
        return "—"
    return f"${amount:,.2f}".replace(".00", "")


def status_label(status: str) -> str:
    return f"{STATUS_ICONS.get(status, '•')} {status}"


# -----------------------------
# Sidebar helpers
# -----------------------------
def _inject_css(rules: str):
    st.markdown(f"<style>{rules}</style>", unsafe_allow_html=True)


def hide_default_sidebar_nav():
    """Drop the page list Streamlit builds from pages/; the role menus replace it."""
    _inject_css('[data-testid="stSidebarNav"] { display: none; }')


def hide_sidebar_completely():
    """No sidebar at all, toggle included. The login screen has nowhere to go yet."""
    _inject_css(
        '[data-testid="stSidebar"] { display: none !important; }'
        '[data-testid="collapsedControl"] { display: none !important; }'
    )


def _render_logout():
    st.divider()
    if st.button("Logout", use_container_width=True):
        from core.session_manager import logout
        logout()


def render_admin_sidebar():
    """Render the admin menu.

    Items:
    - Dashboard
    - Patients
    - Appointments
    - Calendar
    - Logout
    """
    hide_default_sidebar_nav()
    with st.sidebar:
        st.markdown("### Clinic Menu")
        if st.button("Dashboard", use_container_width=True):
            st.switch_page("pages/a_dashboard.py")
        if st.button("Patients", use_container_width=True):
            st.switch_page("pages/a_patients.py")
        if st.button("Appointments", use_container_width=True):
            st.switch_page("pages/a_appointments.py")
        if st.button("Calendar", use_container_width=True):
            st.switch_page("pages/a_calendar.py")
        _render_logout()


def render_patient_sidebar():
    hide_default_sidebar_nav()
    with st.sidebar:
        st.markdown("### My Menu")
        if st.button("My Dashboard", use_container_width=True):
            st.switch_page("pages/p_dashboard.py")
        if st.button("My Appointments", use_container_width=True):
            st.switch_page("pages/p_appointments.py")
        _render_logout()
