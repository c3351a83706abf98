"""Streamlit entry point.

Delegates to `streamlit_app.py`, so `streamlit run app.py` (the hosted
default) and `streamlit run streamlit_app.py` start the same page.
"""

from streamlit_app import main


if __name__ == "__main__":
    main()
