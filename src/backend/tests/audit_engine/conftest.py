import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest

from common.audit_engine.config import AuditConfig
from common.audit_engine.context import AuditContext
from common.audit_engine.dataset import Dataset


RULES_TEXT = """PROJECT EXECUTION PLAN
Project Name: Riverside Medical Centre
Project Number: RMC-2024-01
Revision: P03
Date: 12/03/2024

File naming structure: [Project]-[Originator]-[Volume]-[Level]-[Type]-[Role]-[Number]

Project codes: RMC
Originator codes: ABC, XYZ
Volume codes: ZZ, B1
Level codes: L01, L02, XX
Type codes: M3, DR
Role codes: A, S, M

All models are produced in metric units: millimeter for lengths, meter for levels.
Survey point: N 5000.000 E 3000.000
Project base point: N 0.000 E 0.000
Starting view: 00_Starting View
Worksets: Shared Levels and Grids, Architecture Interior
"""


@pytest.fixture
def rules_text() -> str:
    return RULES_TEXT


@pytest.fixture
def make_dataset():
    def _make(records, *, name: str = "model_data.csv") -> Dataset:
        return Dataset.from_records(records, name=name)

    return _make


@pytest.fixture
def make_ctx(make_dataset, rules_text):
    def _make(records, *, source_text=None, checks=None, **config) -> AuditContext:
        cfg = AuditConfig(checks=checks or {}, **config)
        return AuditContext.build(
            rules_text if source_text is None else source_text,
            make_dataset(records),
            cfg,
        )

    return _make
