"""Root test configuration: make ``farm_bot`` importable without installing."""

import os
import sys

# Running ``pytest`` from a checkout does not put the repository root on the
# import path the way ``python -m pytest`` does.
ROOT_DIR = os.path.abspath(os.path.dirname(__file__))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)
