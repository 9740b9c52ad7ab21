from app.analysis.exceptions import ComplianceCheckError
from app.analysis.models import Category, ComplianceStatus
from app.analysis.rules import COMPLIANCE_RULES, RuleTable
from app.logging.logger import Log


class ComplianceChecker:
    """Derives a compliance status from the required terms a document lacks."""

    def __init__(self, rules: RuleTable = COMPLIANCE_RULES) -> None:
        self._rules = rules

    def check(self, text: str, category: Category | str) -> ComplianceStatus:
        """0 missing terms -> Pass, 1 -> Warning, 2 or more -> Fail.

        Never raises: any failure is logged and reported as ERROR.
        """
        try:
            missing = self.missing_terms(text, category)
        except Exception as exc:
            Log.error(f"Compliance check failed: {exc}")
            return ComplianceStatus.ERROR
        return ComplianceStatus.from_missing_count(len(missing))

    def missing_terms(self, text: str, category: Category | str) -> list[str]:
        """Names of required terms absent from *text*, in table order.

        Raises:
            ComplianceCheckError: if *text* cannot be scanned.
        """
        if not isinstance(text, str):
            raise ComplianceCheckError(f"Expected text, got {type(text).__name__}")
        return [rule.label for rule in self._rules.get(category, ()) if not rule.matches(text)]
