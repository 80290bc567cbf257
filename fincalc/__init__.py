"""Financial calculator suite.

The computation core lives in :mod:`fincalc.calculators`; the Streamlit
presentation helpers live in :mod:`fincalc.components`.
"""

__version__ = "0.1.0"
