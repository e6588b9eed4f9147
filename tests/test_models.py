# File: tests/test_models.py
import pytest

from a11y_audit.browser.models import Impact, PageResult, Violation
from conftest import axe_violation


def test_violation_from_axe_keeps_payload():
    entry = axe_violation("image-alt", impact="critical", nodes=2)
    violation = Violation.from_axe(entry)
    assert violation.rule_id == "image-alt"
    assert violation.impact is Impact.CRITICAL
    assert violation.description == "image-alt description"
    assert len(violation.nodes) == 2
    assert violation.payload == entry


def test_violation_without_impact():
    entry = axe_violation("region")
    entry["impact"] = None
    assert Violation.from_axe(entry).impact is None


def test_timed_out_result_has_no_violations():
    result = PageResult.timeout("https://a.gov/")
    assert result.timed_out
    assert result.violations == ()
    assert result.violation_count == 0


def test_timed_out_result_with_violations_rejected():
    violation = Violation.from_axe(axe_violation("image-alt"))
    with pytest.raises(ValueError):
        PageResult(url="https://a.gov/", violations=(violation,), timed_out=True)
