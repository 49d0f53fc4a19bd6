"""conflictscan - recursive scanner for unresolved merge-conflict markers."""

import logging

__version__ = "0.1.0"

# Library modules log; the CLI decides whether anything is shown
logging.getLogger(__name__).addHandler(logging.NullHandler())
