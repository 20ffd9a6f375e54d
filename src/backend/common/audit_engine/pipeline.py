from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Union

from .config import AuditConfig
from .context import AuditContext
from .dataset import Dataset
from .models import AuditRunReport
from .runner import AuditRunner


def analyze(
    corpus: str,
    records: Union[Dataset, Iterable[Mapping[str, Any]]],
    config: Optional[AuditConfig] = None,
    *,
    suite: str = "qaqc",
    check_ids: Optional[set[str]] = None,
) -> AuditRunReport:
    """Run every registered check of ``suite`` over ``records`` against ``corpus``.

    Raises `EmptyInputError` for a blank corpus or an empty dataset; column
    problems are reported per check in the returned report.
    """
    dataset = records if isinstance(records, Dataset) else Dataset.from_records(records)
    ctx = AuditContext.build(corpus, dataset, config)
    return AuditRunner(suite=suite).run(ctx, check_ids=check_ids)
