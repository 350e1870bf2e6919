"""
Built-in Catalog

Institutions and policy-fund programs shipped with the engine. Loaded once
into the KnowledgeBase; a JSON catalog file can replace it at startup.
"""

from typing import List

from .contracts import (
    Institution,
    PolicyFundProgram,
    EligibilityCriteria,
    BusinessAgeCriterion,
    RangeCriterion,
    FundingPurpose,
    SupportTerms,
)
from .constants import (
    Track,
    FundType,
    CompanySize,
    IndustryCategory,
    Qualification,
    Certification,
    BusinessAgeException,
)

# =============================================================================
# INSTITUTIONS
# =============================================================================

INSTITUTIONS: List[Institution] = [
    Institution(
        id="kosmes",
        name="KOSMES",
        full_name="Korea SMEs and Startups Agency",
        website="https://www.kosmes.or.kr",
        contact_number="1357",
    ),
    Institution(
        id="kodit",
        name="KODIT",
        full_name="Korea Credit Guarantee Fund",
        website="https://www.kodit.co.kr",
        contact_number="1588-6565",
    ),
    Institution(
        id="kibo",
        name="KIBO",
        full_name="Korea Technology Finance Corporation",
        website="https://www.kibo.or.kr",
        contact_number="1544-1120",
    ),
    Institution(
        id="semas",
        name="SEMAS",
        full_name="Small Enterprise and Market Service",
        website="https://www.semas.or.kr",
        contact_number="1357",
    ),
    Institution(
        id="seoul_credit",
        name="Seoul Credit Guarantee",
        full_name="Seoul Credit Guarantee Foundation",
        website="https://www.seoulshinbo.co.kr",
        contact_number="1577-6119",
    ),
    Institution(
        id="gyeonggi_credit",
        name="Gyeonggi Credit Guarantee",
        full_name="Gyeonggi Credit Guarantee Foundation",
        website="https://www.gcgf.or.kr",
        contact_number="1588-7365",
    ),
    Institution(
        id="mss",
        name="MSS",
        full_name="Ministry of SMEs and Startups",
        website="https://www.mss.go.kr",
        contact_number="1357",
    ),
    Institution(
        id="motie",
        name="MOTIE",
        full_name="Ministry of Trade, Industry and Energy",
        website="https://www.motie.go.kr",
        contact_number="1577-0900",
    ),
    Institution(
        id="keiti",
        name="KEITI",
        full_name="Korea Environmental Industry and Technology Institute",
        website="https://www.keiti.re.kr",
        contact_number="02-2284-1114",
    ),
]

# Industries no policy lender will finance
COMMON_EXCLUDED_INDUSTRIES = ["gambling", "entertainment bar", "real estate rental", "money lending"]

STARTUP_EXCEPTIONS = [
    BusinessAgeException.YOUTH_STARTUP_ACADEMY,
    BusinessAgeException.GLOBAL_STARTUP_ACADEMY,
    BusinessAgeException.STARTUP_SUCCESS_PACKAGE,
    BusinessAgeException.TIPS_PROGRAM,
]

WORKING_ONLY = FundingPurpose(working=True, facility=False)
FACILITY_ONLY = FundingPurpose(working=False, facility=True)


# =============================================================================
# PROGRAMS
# =============================================================================

PROGRAMS: List[PolicyFundProgram] = [
    # --- Exclusive track ---
    PolicyFundProgram(
        id="kosmes-restart",
        institution_id="kosmes",
        name="Restart Challenge Fund",
        short_name="Restart",
        track=Track.EXCLUSIVE,
        description="Loans for owners restarting after a good-faith business failure.",
        eligibility=EligibilityCriteria(
            required_qualifications=[Qualification.RESTART],
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
            additional_requirements=["Completion of restart training"],
        ),
        terms=SupportTerms(amount="up to KRW 1.5B", interest_rate="policy rate - 0.3%p", loan_period="5-10 years"),
        official_url="https://www.kosmes.or.kr",
    ),
    PolicyFundProgram(
        id="kosmes-disabled",
        institution_id="kosmes",
        name="Disabled-Owned Business Fund",
        short_name="Disabled-owned",
        track=Track.EXCLUSIVE,
        description="Set-aside loans for disabled-owned businesses and standard workplaces.",
        eligibility=EligibilityCriteria(
            required_qualifications=[Qualification.DISABLED, Qualification.DISABLED_STANDARD],
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        terms=SupportTerms(amount="up to KRW 1B", interest_rate="2.0% fixed", loan_period="5 years"),
        official_url="https://www.kosmes.or.kr",
    ),
    PolicyFundProgram(
        id="kosmes-social-economy",
        institution_id="kosmes",
        name="Social Economy Enterprise Fund",
        short_name="Social economy",
        track=Track.EXCLUSIVE,
        description="Loans for certified social enterprises and cooperatives.",
        eligibility=EligibilityCriteria(
            required_qualifications=[Qualification.SOCIAL_ENTERPRISE],
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        terms=SupportTerms(amount="up to KRW 1B", interest_rate="2.0% fixed", loan_period="5 years"),
        official_url="https://www.kosmes.or.kr",
    ),
    PolicyFundProgram(
        id="semas-women-owned",
        institution_id="semas",
        name="Women-Owned Business Fund",
        short_name="Women-owned",
        track=Track.EXCLUSIVE,
        description="Working-capital loans for female-owned small businesses.",
        funding_purpose=WORKING_ONLY,
        eligibility=EligibilityCriteria(
            required_qualifications=[Qualification.FEMALE],
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        target_scale=[CompanySize.MICRO, CompanySize.SMALL],
        terms=SupportTerms(amount="up to KRW 100M", interest_rate="policy rate + 0.6%p", loan_period="5 years"),
        official_url="https://www.semas.or.kr",
    ),

    # --- Policy-linked track ---
    PolicyFundProgram(
        id="kosmes-youth-employment",
        institution_id="kosmes",
        name="Youth Employment Special Fund",
        short_name="Youth employment",
        track=Track.POLICY_LINKED,
        description="Loans for companies hiring young employees or led by young founders.",
        eligibility=EligibilityCriteria(
            business_age=BusinessAgeCriterion(max=7, description="under 7 years"),
            preferred_qualifications=[Qualification.YOUTH],
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        terms=SupportTerms(amount="up to KRW 1B", interest_rate="2.5% fixed", loan_period="6 years"),
        preferential_conditions=["Youth founder: interest rate -0.2%p"],
        official_url="https://www.kosmes.or.kr",
    ),
    PolicyFundProgram(
        id="mss-job-creation",
        institution_id="mss",
        name="Job Creation Linked Fund",
        short_name="Job creation",
        track=Track.POLICY_LINKED,
        description="Loans tied to a commitment to add permanent employees.",
        eligibility=EligibilityCriteria(
            employee_count=RangeCriterion(min=5, description="5 employees or more"),
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        terms=SupportTerms(amount="up to KRW 2B", interest_rate="policy rate", loan_period="5-8 years"),
        official_url="https://www.mss.go.kr",
    ),
    PolicyFundProgram(
        id="keiti-green-transition",
        institution_id="keiti",
        name="Green Transition Fund",
        short_name="Green transition",
        track=Track.POLICY_LINKED,
        description="Facility loans for environmental and carbon-reduction investment.",
        funding_purpose=FACILITY_ONLY,
        eligibility=EligibilityCriteria(
            requires_environment_investment=True,
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        terms=SupportTerms(amount="up to KRW 3B", interest_rate="policy rate - 0.5%p", loan_period="10 years"),
        official_url="https://www.keiti.re.kr",
    ),

    # --- General track ---
    PolicyFundProgram(
        id="kosmes-startup-base",
        institution_id="kosmes",
        name="Startup Base Fund",
        short_name="Startup base",
        track=Track.GENERAL,
        description="Loans for early-stage companies to secure working and facility capital.",
        eligibility=EligibilityCriteria(
            business_age=BusinessAgeCriterion(
                max=7,
                max_with_exception=10,
                exceptions=STARTUP_EXCEPTIONS,
                description="under 7 years (10 with an accepted exception)",
            ),
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        terms=SupportTerms(amount="up to KRW 6B", interest_rate="policy rate", loan_period="5-10 years"),
        official_url="https://www.kosmes.or.kr",
    ),
    PolicyFundProgram(
        id="kosmes-innovation-growth",
        institution_id="kosmes",
        name="Innovation Growth Fund",
        short_name="Innovation growth",
        track=Track.GENERAL,
        description="Loans for companies past the startup stage with technology assets.",
        eligibility=EligibilityCriteria(
            business_age=BusinessAgeCriterion(min=7, description="7 years or more"),
            requires_technology=True,
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        terms=SupportTerms(amount="up to KRW 6B", interest_rate="policy rate", loan_period="5-10 years"),
        official_url="https://www.kosmes.or.kr",
    ),
    PolicyFundProgram(
        id="kosmes-new-market",
        institution_id="kosmes",
        name="New Market Entry Fund",
        short_name="New market",
        track=Track.GENERAL,
        description="Loans for companies entering overseas markets.",
        eligibility=EligibilityCriteria(
            requires_export=True,
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        terms=SupportTerms(amount="up to KRW 3B", interest_rate="policy rate", loan_period="5 years"),
        official_url="https://www.kosmes.or.kr",
    ),
    PolicyFundProgram(
        id="kosmes-investment-loan",
        institution_id="kosmes",
        name="Investment-Linked Loan",
        short_name="Investment-linked",
        track=Track.GENERAL,
        description="Convertible loans for companies planning equity investment.",
        eligibility=EligibilityCriteria(
            requires_investment_intent=True,
            required_certifications=[Certification.VENTURE, Certification.INNOBIZ],
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        target_scale=[CompanySize.SMALL, CompanySize.MEDIUM, CompanySize.VENTURE, CompanySize.INNOBIZ],
        terms=SupportTerms(amount="up to KRW 10B", interest_rate="2.0% (convertible)", loan_period="5 years"),
        official_url="https://www.kosmes.or.kr",
    ),
    PolicyFundProgram(
        id="kosmes-smart-factory",
        institution_id="kosmes",
        name="Smart Factory Facility Fund",
        short_name="Smart factory",
        track=Track.GENERAL,
        fund_type=FundType.LOAN,
        description="Facility loans for building or upgrading smart factories.",
        funding_purpose=FACILITY_ONLY,
        eligibility=EligibilityCriteria(
            allowed_industries=[IndustryCategory.MANUFACTURING],
            requires_smart_factory_plan=True,
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        terms=SupportTerms(amount="up to KRW 10B", interest_rate="policy rate - 0.3%p", loan_period="10 years"),
        official_url="https://www.kosmes.or.kr",
    ),
    PolicyFundProgram(
        id="kosmes-emergency",
        institution_id="kosmes",
        name="Emergency Management Stability Fund",
        short_name="Emergency",
        track=Track.GENERAL,
        description="Working capital for companies hit by disasters or sharp sales drops.",
        funding_purpose=WORKING_ONLY,
        eligibility=EligibilityCriteria(
            requires_emergency_situation=True,
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        terms=SupportTerms(amount="up to KRW 1B", interest_rate="policy rate", loan_period="5 years"),
        official_url="https://www.kosmes.or.kr",
    ),
    PolicyFundProgram(
        id="semas-micro-manufacturer",
        institution_id="semas",
        name="Micro-Manufacturer Special Fund",
        short_name="Micro-manufacturer",
        track=Track.GENERAL,
        description="Loans reserved for manufacturers with fewer than 10 employees.",
        eligibility=EligibilityCriteria(
            allowed_industries=[IndustryCategory.MANUFACTURING],
            employee_count=RangeCriterion(max=9, description="fewer than 10 employees"),
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        target_scale=[CompanySize.MICRO],
        terms=SupportTerms(amount="up to KRW 200M", interest_rate="policy rate + 0.6%p", loan_period="5 years"),
        official_url="https://www.semas.or.kr",
    ),
    PolicyFundProgram(
        id="motie-midsize-ladder",
        institution_id="motie",
        name="Mid-Sized Growth Ladder Fund",
        short_name="Growth ladder",
        track=Track.GENERAL,
        description="Loans for medium enterprises preparing to grow into mid-sized firms.",
        eligibility=EligibilityCriteria(
            revenue=RangeCriterion(min=10_000_000_000, description="KRW 10B or more"),
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        target_scale=[CompanySize.MEDIUM],
        terms=SupportTerms(amount="up to KRW 10B", interest_rate="policy rate", loan_period="8 years"),
        official_url="https://www.motie.go.kr",
    ),

    # --- Guarantee track ---
    PolicyFundProgram(
        id="kodit-general-guarantee",
        institution_id="kodit",
        name="General Credit Guarantee",
        short_name="KODIT general",
        track=Track.GUARANTEE,
        fund_type=FundType.GUARANTEE,
        description="Credit guarantee for bank loans to small and medium enterprises.",
        eligibility=EligibilityCriteria(
            max_credit_rating=7,
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        terms=SupportTerms(amount="up to KRW 3B", guarantee_ratio="85%"),
        official_url="https://www.kodit.co.kr",
    ),
    PolicyFundProgram(
        id="kodit-startup-guarantee",
        institution_id="kodit",
        name="Startup Guarantee",
        short_name="KODIT startup",
        track=Track.GUARANTEE,
        fund_type=FundType.GUARANTEE,
        description="Credit guarantee for companies within seven years of founding.",
        eligibility=EligibilityCriteria(
            business_age=BusinessAgeCriterion(max=7, description="under 7 years"),
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        terms=SupportTerms(amount="up to KRW 3B", guarantee_ratio="90-100%"),
        official_url="https://www.kodit.co.kr",
    ),
    PolicyFundProgram(
        id="kibo-tech-appraisal",
        institution_id="kibo",
        name="Technology Appraisal Guarantee",
        short_name="KIBO tech",
        track=Track.GUARANTEE,
        fund_type=FundType.GUARANTEE,
        description="Guarantee based on an appraisal of the company's technology.",
        eligibility=EligibilityCriteria(
            requires_technology=True,
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        terms=SupportTerms(amount="up to KRW 3B", guarantee_ratio="85-95%"),
        official_url="https://www.kibo.or.kr",
    ),
    PolicyFundProgram(
        id="seoul-small-business-guarantee",
        institution_id="seoul_credit",
        name="Seoul Small Business Guarantee",
        short_name="Seoul guarantee",
        track=Track.GUARANTEE,
        fund_type=FundType.GUARANTEE,
        description="Regional guarantee for small businesses located in Seoul.",
        eligibility=EligibilityCriteria(
            allowed_regions=["서울"],
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        target_scale=[CompanySize.MICRO, CompanySize.SMALL],
        terms=SupportTerms(amount="up to KRW 800M", guarantee_ratio="100%"),
        official_url="https://www.seoulshinbo.co.kr",
    ),
    PolicyFundProgram(
        id="gyeonggi-small-business-guarantee",
        institution_id="gyeonggi_credit",
        name="Gyeonggi Small Business Guarantee",
        short_name="Gyeonggi guarantee",
        track=Track.GUARANTEE,
        fund_type=FundType.GUARANTEE,
        description="Regional guarantee for small businesses located in Gyeonggi.",
        eligibility=EligibilityCriteria(
            allowed_regions=["경기"],
            excluded_industries=COMMON_EXCLUDED_INDUSTRIES,
        ),
        target_scale=[CompanySize.MICRO, CompanySize.SMALL],
        terms=SupportTerms(amount="up to KRW 800M", guarantee_ratio="100%"),
        official_url="https://www.gcgf.or.kr",
    ),
]
