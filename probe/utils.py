from __future__ import annotations

from probe.types import Outcome


def summarize(outcomes: list[Outcome]) -> tuple[dict, int]:
    """Compute a summary dict and an exit code from case outcomes."""
    failures = [
        {
            "case": o.case.name,
            "path": o.case.path,
            "expected_status": o.case.status,
            "status": o.status,
            "expected_location": o.case.location,
            "location": o.location,
        }
        for o in outcomes
        if not o.passed
    ]
    passed = len(outcomes) - len(failures)
    summary = {
        "component": "probe",
        "event": "summary",
        "cases": len(outcomes),
        "passed": passed,
        "failed": len(failures),
        "failures": failures,
    }
    exit_code = 0 if (outcomes and not failures) else 1
    return summary, exit_code
