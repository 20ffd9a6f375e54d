import os
import sys


# `common.audit_engine` and `scripts.run_model_audit` are imported relative to
# `src/backend`, also when pytest is started from the repository root without
# the pyproject `pythonpath` setting (e.g. a bare `pytest src/backend/tests`).
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)
