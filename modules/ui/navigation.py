import streamlit as st

from config.environment import Environment


class Navigation:
    """Handles navigation and sidebar components."""

    @staticmethod
    def display_header():
        """Display the product name in the sidebar."""
        st.sidebar.markdown(f"""
            <div style="padding: 0.5rem 0;">
                <p style="text-transform: uppercase; letter-spacing: 0.2em; margin: 0;">{Environment.APP_NAME}</p>
                <h3 style="margin: 0;">{Environment.APP_TAGLINE}</h3>
            </div>
        """, unsafe_allow_html=True)

    @staticmethod
    def display_sidebar(on_logout):
        """Display the sidebar with navigation and the logout button."""
        Navigation.display_header()
        with st.sidebar:
            st.markdown("---")
            st.page_link("pages/3_dashboard.py", label="Dashboard")
            st.page_link("pages/4_generate.py", label="Generate")
            st.markdown("---")
            if st.button("Log out", key="logout"):
                on_logout()
