"""
Result types shared by the wall validators.

A check returns ValidationIssues; MeshValidator collects them into one
ValidationResult per pipeline stage. The generator raises ValidationError
for any result that contains a FAIL, before new buffers are published.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Iterable, List, Optional


class Severity(Enum):
    """How an issue affects publishing.

    INFO and WARN issues are only logged. A single FAIL discards the
    buffers of the regeneration that produced it.
    """
    INFO = auto()
    WARN = auto()
    FAIL = auto()

    def __str__(self) -> str:
        return self.name


class ValidationStage(Enum):
    """Point of the regeneration pipeline a result belongs to."""
    VARIANTS = "variants"      # after TextureVariantRegistry.ensure()
    GENERATION = "generation"  # after the buffers were built

    def __str__(self) -> str:
        return self.value


@dataclass
class ValidationIssue:
    """One finding of a check.

    Attributes:
        severity: INFO, WARN or FAIL
        code: Rule code, e.g. "MESH-002"
        message: What is wrong
        remediation: How to fix it, if known
        location: Buffer name or tile slot ("triangles", "variants:left[0]")
    """
    severity: Severity
    code: str
    message: str
    remediation: Optional[str] = None
    location: Optional[str] = None

    @property
    def is_failure(self) -> bool:
        return self.severity is Severity.FAIL

    def format(self) -> str:
        """[SEVERITY] CODE location=L :: message :: fix=FIX"""
        return (f"[{self.severity}] {self.code} location={self.location or '-'} :: "
                f"{self.message} :: fix={self.remediation or 'N/A'}")

    def __str__(self) -> str:
        return self.format()


@dataclass
class ValidationResult:
    """Issues reported by one validation stage."""
    issues: List[ValidationIssue] = field(default_factory=list)
    stage: Optional[ValidationStage] = None

    def _of(self, severity: Severity) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity is severity]

    @property
    def failed(self) -> bool:
        return any(i.is_failure for i in self.issues)

    @property
    def passed(self) -> bool:
        return not self.failed

    @property
    def errors(self) -> List[ValidationIssue]:
        return self._of(Severity.FAIL)

    @property
    def warnings(self) -> List[ValidationIssue]:
        return self._of(Severity.WARN)

    @property
    def codes(self) -> List[str]:
        """Rule codes in the order they were reported."""
        return [i.code for i in self.issues]

    def add_issue(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def extend(self, issues: Iterable[ValidationIssue]) -> None:
        self.issues.extend(issues)

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        """Append the issues of other and return self."""
        self.extend(other.issues)
        return self

    def counts(self) -> Dict[Severity, int]:
        counter = Counter(i.severity for i in self.issues)
        return {severity: counter[severity] for severity in Severity}

    def report(self) -> str:
        """Multi-line report, failures first."""
        if not self.issues:
            return "Validation passed: No issues found"
        stage = f" ({self.stage})" if self.stage else ""
        status = "FAILED" if self.failed else "PASSED"
        lines = [f"Validation {status}{stage}: {len(self.issues)} issue(s)"]
        for severity in (Severity.FAIL, Severity.WARN, Severity.INFO):
            lines.extend(f"  {issue}" for issue in self._of(severity))
        return "\n".join(lines)

    def to_dict(self) -> dict:
        counts = self.counts()
        return {
            'stage': str(self.stage) if self.stage else None,
            'passed': self.passed,
            'fail_count': counts[Severity.FAIL],
            'warn_count': counts[Severity.WARN],
            'info_count': counts[Severity.INFO],
            'issues': [
                {
                    'severity': str(i.severity),
                    'code': i.code,
                    'message': i.message,
                    'remediation': i.remediation,
                    'location': i.location,
                }
                for i in self.issues
            ],
        }


class ValidationError(Exception):
    """A regeneration produced FAIL issues; `result` holds all of them."""

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.report())
