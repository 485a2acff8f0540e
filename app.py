import streamlit as st

from core.config import configure_logging
from core.helpers import hide_sidebar_completely
from core.session_manager import init_session_state, get_auth, login, logout, home_page


def go_to(page_path: str):
    st.switch_page(page_path)


def render_login():
    hide_sidebar_completely()

    st.subheader("Sign in")
    st.write("Please enter your credentials to continue.")

    with st.form("login_form"):
        email = st.text_input("Email", placeholder="admin@entnt.in")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login")

    if submitted:
        if login(email, password):
            st.success("Login successful! Redirecting...")
            go_to(home_page(get_auth().current_user.role))
        else:
            st.error("Invalid credentials. Try again.")

    with st.expander("Demo accounts"):
        st.caption("Admin: admin@entnt.in / admin123")
        st.caption("Patient: john@entnt.in / patient123")


def main():
    st.set_page_config(
        page_title="Dental Clinic",
        page_icon="🦷",
        layout="wide",
        initial_sidebar_state="collapsed",
    )
    configure_logging()
    init_session_state()

    user = get_auth().current_user

    cols = st.columns([4, 2])
    with cols[0]:
        st.title("Dental Clinic")
    with cols[1]:
        if user:
            st.info(f"Logged in as: **{user.email}** ({user.role})")
            if st.button("Log out"):
                logout()

    st.write("---")

    if user is None:
        render_login()
        return

    st.subheader("Quick navigation")
    if st.button(f"Go to {'Clinic' if get_auth().is_admin else 'My'} Dashboard"):
        go_to(home_page(user.role))


if __name__ == "__main__":
    main()
