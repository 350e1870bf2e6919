"""
Eligibility Checker

Evaluates one company profile against one program's compiled rules.
Any failed rule makes the program ineligible. With no failures, a single
unresolved decision variable makes the result undetermined.
"""

from .contracts import CompanyProfile, PolicyFundProgram, EligibilityResult
from .constants import CheckStatus
from .rules import build_rules


def check_eligibility(
    profile: CompanyProfile,
    program: PolicyFundProgram
) -> EligibilityResult:
    """
    Check a single program against a profile.

    Args:
        profile: Company profile
        program: Knowledge-base program

    Returns:
        EligibilityResult with checks grouped by status
    """
    passed, failed, warnings, unresolved = [], [], [], []
    buckets = {
        CheckStatus.PASS.value: passed,
        CheckStatus.FAIL.value: failed,
        CheckStatus.WARNING.value: warnings,
        CheckStatus.UNRESOLVED.value: unresolved,
    }

    for rule in build_rules(program):
        result = rule.evaluate(profile)
        buckets[result.status].append(result)

    is_eligible = not failed
    return EligibilityResult(
        program_id=program.id,
        program_name=program.name,
        is_eligible=is_eligible,
        undetermined=is_eligible and bool(unresolved),
        passed=passed,
        failed=failed,
        warnings=warnings,
        unresolved=unresolved,
    )
