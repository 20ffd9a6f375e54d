from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable, Optional

from .context import AuditContext
from .errors import MissingColumnError
from .models import AuditRunReport, CheckOutcome, CheckResult, VerdictStatus
from .registry import registry

logger = logging.getLogger(__name__)


class AuditRunner:
    def __init__(self, checks: Optional[Iterable] = None, *, suite: str = "qaqc"):
        self._suite = suite
        self._checks = list(checks) if checks is not None else registry.create_all(suite=suite)

    def run(self, ctx: AuditContext, *, check_ids: Optional[set[str]] = None) -> AuditRunReport:
        results = []
        for check in self._checks:
            if check_ids is not None and check.check_id not in check_ids:
                continue
            results.append(self._evaluate(check, ctx))

        totals: dict[VerdictStatus, int] = {}
        outcomes: dict[CheckOutcome, int] = {}
        for res in results:
            outcomes[res.outcome] = outcomes.get(res.outcome, 0) + 1
            for verdict in res.verdicts:
                totals[verdict.status] = totals.get(verdict.status, 0) + 1

        logger.info(
            "Audit suite %r finished: %d check(s), outcomes=%s",
            self._suite,
            len(results),
            {k.value: v for k, v in outcomes.items()},
        )
        return AuditRunReport(
            run_id=str(uuid.uuid4()),
            generated_at=datetime.now(timezone.utc),
            suite=self._suite,
            results=results,
            totals=totals,
            outcomes=outcomes,
        )

    @staticmethod
    def _evaluate(check, ctx: AuditContext) -> CheckResult:
        try:
            return check.evaluate(ctx)
        except MissingColumnError as exc:
            logger.debug("Skipping %s: %s", check.check_id, exc)
            return CheckResult(
                check_id=check.check_id,
                check_title=check.check_title,
                outcome=CheckOutcome.MISSING_COLUMN,
                summary=str(exc),
            )
        except Exception as exc:
            # Failures stay local to the check; the remaining checks still run.
            logger.exception("Check %s failed", check.check_id)
            return CheckResult(
                check_id=check.check_id,
                check_title=check.check_title,
                outcome=CheckOutcome.FAILED,
                summary=f"Check failed: {exc}",
            )
