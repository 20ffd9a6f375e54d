from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Type

from .config import CheckConfigBase
from .context import AuditContext
from .models import CheckOutcome, CheckResult, CheckResultDetail, VerdictRecord


class Check(ABC):
    check_id: str
    check_title: str
    suite: str = "qaqc"
    config_model: Type[CheckConfigBase] = CheckConfigBase

    def __init__(self):
        if not getattr(self, "check_id", None):
            raise ValueError("Check must define check_id")

    def default_config(self) -> CheckConfigBase:
        return self.config_model()

    def get_config(self, ctx: AuditContext) -> CheckConfigBase:
        return ctx.config.get_check_config(self.check_id, self.config_model, self.default_config())

    def evaluate(self, ctx: AuditContext) -> CheckResult:
        cfg = self.get_config(ctx)
        if not cfg.enabled:
            return CheckResult(
                check_id=self.check_id,
                check_title=self.check_title,
                outcome=CheckOutcome.DISABLED,
                summary="Check disabled by project configuration.",
            )
        # Raises MissingColumnError; the runner reports it without running the check.
        column = ctx.dataset.require_column(
            cfg.column_candidates,
            partial=cfg.partial_match,
            dimension=self.check_title,
        )
        return self.run(ctx, cfg, column)

    @abstractmethod
    def run(self, ctx: AuditContext, cfg: CheckConfigBase, column: str) -> CheckResult:  # pragma: no cover
        raise NotImplementedError

    def result(
        self,
        column: Optional[str],
        verdicts: List[VerdictRecord],
        details: Optional[List[CheckResultDetail]] = None,
    ) -> CheckResult:
        return CheckResult.from_verdicts(
            check_id=self.check_id,
            check_title=self.check_title,
            column=column,
            verdicts=verdicts,
            details=details,
        )
