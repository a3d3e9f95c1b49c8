from __future__ import annotations
from typing import Literal

Decision = Literal["PASSED", "PASSED_WITH_WARNINGS", "FAILED"]

# More warnings than this marks a pass as significant; the exit code stays 0.
WARNING_THRESHOLD = 5

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

def decide(error_count: int, warning_count: int) -> Decision:
    if error_count > 0:
        return "FAILED"
    if warning_count > WARNING_THRESHOLD:
        return "PASSED_WITH_WARNINGS"
    return "PASSED"

def exit_code(error_count: int, warning_count: int) -> int:
    return EXIT_FAILURE if decide(error_count, warning_count) == "FAILED" else EXIT_SUCCESS

def describe(decision: Decision) -> str:
    if decision == "FAILED":
        return "Verification FAILED"
    if decision == "PASSED_WITH_WARNINGS":
        return "Verification PASSED with significant warnings"
    return "Verification PASSED"
