from typing import Dict, Any, List
import json
from .safety_rules import SAFETY_RULES, SYSTEM_ROLE_DEFINITION, JSON_OUTPUT_FORMAT_INSTRUCTION

# Profile fields worth sending; the rest is noise for the briefing
PROFILE_FIELDS = [
    "industry",
    "industry_detail",
    "region",
    "company_size",
    "business_age",
    "annual_revenue",
    "employee_count",
    "credit_rating",
    "requested_funding_purpose",
    "tax_delinquency_status",
    "credit_issue_status",
]


def build_system_prompt() -> str:
    """Constructs the static system prompt."""
    rules_str = "\n".join([f"- {rule}" for rule in SAFETY_RULES])

    return f"""{SYSTEM_ROLE_DEFINITION}

SAFETY RULES (NON-NEGOTIABLE):
{rules_str}

OUTPUT FORMAT:
{JSON_OUTPUT_FORMAT_INSTRUCTION}
"""


def build_user_prompt(company_profile: Dict[str, Any], engine_output: Dict[str, Any], limit: int = 5) -> str:
    """
    Constructs the user prompt from profile and engine results.
    Truncates each bucket to save tokens.
    """
    profile_summary = {field: company_profile.get(field) for field in PROFILE_FIELDS}
    profile_summary["qualifications"] = [
        key[3:] for key, value in company_profile.items()
        if key.startswith("is_") and key != "is_inactive" and value is True
    ]

    matched = _minimize_matched(engine_output.get("matched", [])[:limit])
    conditional = [
        {
            "id": c.get("program_id"),
            "program": c.get("program_name"),
            "missing": c.get("what_is_missing"),
        }
        for c in engine_output.get("conditional", [])[:limit]
    ]
    excluded = [
        {
            "id": e.get("program_id"),
            "program": e.get("program_name"),
            "reason": e.get("excluded_reason"),
        }
        for e in engine_output.get("excluded", [])[:limit]
    ]

    user_content = f"""
COMPANY PROFILE:
{json.dumps(profile_summary, indent=2, ensure_ascii=False, default=str)}

TRACK DECISION:
{json.dumps(engine_output.get("track_decision", {}), ensure_ascii=False)}

ENGINE WARNINGS: {json.dumps(engine_output.get("warnings", []), ensure_ascii=False)}

MATCHED FUNDS (Ranked):
{json.dumps(matched, indent=2, ensure_ascii=False)}

CONDITIONAL FUNDS:
{json.dumps(conditional, indent=2, ensure_ascii=False)}

EXCLUDED FUNDS:
{json.dumps(excluded, indent=2, ensure_ascii=False)}

TASK:
Write a briefing on these results for the business owner. Adhere strictly to the safety rules.
"""
    return user_content


def _minimize_matched(funds: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Helper to reduce matched fund dict size for prompt."""
    minimized = []
    for f in funds:
        minimized.append({
            "id": f.get("program_id"),
            "agency": f.get("agency"),
            "program": f.get("program_name"),
            "rank": f.get("rank"),
            "label": f.get("label"),
            "track": f.get("track"),
            "score": f.get("fit_score"),
            "why": f.get("why"),
            "amount": f.get("support_amount"),
        })
    return minimized
