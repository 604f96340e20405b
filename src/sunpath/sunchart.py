"""CLI entry point for shadow plan generation.

Edit the where/when variables at the top, then run:
    python src/sunpath/sunchart.py
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

from sunpath.compute import run  # noqa: E402
from sunpath.models import QueryInput  # noqa: E402
from sunpath.renderers.static import save_static_chart  # noqa: E402

logging.basicConfig(level=os.environ.get("SUNPATH_LOG_LEVEL", "WARNING"))

where = "Eiffel Tower, Paris"
when = "2024-06-21 15:00"

data = run(QueryInput(address=where, when=when))
path = save_static_chart(data)
print(f"Saved: {path}")
