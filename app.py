import os

import streamlit as st

from autolytiq.log import setup_logging
from autolytiq.presets import DISCLAIMER
from ui.auto import render_auto_view
from ui.gig import render_gig_view
from ui.housing import render_housing_view
from ui.pro_report import render_pro_report_view

PAGES = {
    "Auto Payment": render_auto_view,
    "Housing": render_housing_view,
    "Gig Income": render_gig_view,
    "Pro Report": render_pro_report_view,
}


def main():
    setup_logging(os.environ.get("AUTOLYTIQ_LOG_LEVEL", "INFO"))
    st.set_page_config(page_title="AUTOLYTIQ AFFORDABILITY CALCULATORS", layout="wide")
    nav = st.sidebar.radio("Navigate", list(PAGES))
    st.title("AUTOLYTIQ AFFORDABILITY CALCULATORS")
    st.caption("Payment • Verdict • What's driving it • What if")
    PAGES[nav]()
    st.divider()
    st.caption(DISCLAIMER)


if __name__ == "__main__":
    main()
