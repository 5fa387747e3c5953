"""Income-band narrative tables for the Pro Report.

Each table is a list of ``(minimum annual income, record)`` pairs checked top
down.  The last entry of every table starts at ``-inf`` so any income, even a
negative or zero one, lands in a band.  Text may contain ``str.format``
fields filled in by :mod:`autolytiq.report`.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple, TypeVar

from autolytiq.models import ExpandedTip, ThirtyDayPlan

T = TypeVar("T")

NEG_INF = float("-inf")

OVERALL: List[Tuple[float, str]] = [
    (100000, "Your income level is generally viewed favorably by most lenders. Strong candidates typically see more competitive rates."),
    (60000, "Your income is in a range that typically meets requirements for most standard financial products."),
    (40000, "Your income can support many financial products. Building savings and credit history will strengthen applications."),
    (NEG_INF, "Focus on building income stability and emergency savings. Consider secured credit options to build credit history."),
]

CREDIT_CARDS: List[Tuple[float, str]] = [
    (75000, "Generally well-positioned for premium credit cards with travel rewards and higher limits."),
    (40000, "Good fit for mid-tier rewards cards. Consider cards with no annual fee and cash back benefits."),
    (NEG_INF, "Start with secured cards or student cards to build credit history. Graduate to rewards cards over time."),
]

# $5,000 and $3,000 per month.
PERSONAL_LOANS: List[Tuple[float, str]] = [
    (60000, "Income typically supports personal loans up to 2-3x monthly income, depending on existing debts."),
    (36000, "Personal loans are accessible. Keep monthly payments under 10% of gross income for comfort."),
    (NEG_INF, "Smaller personal loans may be available. Consider credit unions for better rates on smaller amounts."),
]

# $4,000 per month.
AUTO_LOANS: List[Tuple[float, str]] = [
    (
        48000,
        "Following the {auto_pti:.0f}% rule, comfortable monthly auto payment is around "
        "${max_auto_payment:,.0f}. Include insurance and maintenance in your budget.",
    ),
    (NEG_INF, "Budget-friendly options recommended. Keep total car costs under 15% of income including insurance."),
]

MORTGAGE: List[Tuple[float, str]] = [
    (
        80000,
        "Following the {housing_pct:.0f}% rule, max housing payment around ${max_housing:,.0f}/month. "
        "20% down payment avoids PMI.",
    ),
    (
        50000,
        "First-time buyer programs may help. Look into FHA loans with 3.5% down. "
        "Housing budget: ~${max_housing:,.0f}/month.",
    ),
    (NEG_INF, "Building savings and credit history is the priority. Consider assistance programs when ready to buy."),
]

LEVERAGE_MOVES: List[Tuple[float, List[str]]] = [
    (
        100000,
        [
            "Max all tax-advantaged accounts: 401(k) ($23,000), IRA ($7,000), HSA ($4,150/$8,300) reduces taxable income",
            "Consider real estate investment: Rental income + depreciation provides cash flow and tax benefits",
            "Explore backdoor Roth conversions: Circumvent income limits to access tax-free growth",
        ],
    ),
    (
        50000,
        [
            "Max out employer 401(k) match immediately: This is a 50-100% instant return on your contribution",
            "Open a Roth IRA and contribute $7,000/year: Tax-free growth compounds significantly over time",
            "Build emergency fund to 3-6 months expenses: This creates financial security and negotiation leverage",
        ],
    ),
    (
        NEG_INF,
        [
            "Upskill with free certifications: Google Career Certificates, Coursera, and LinkedIn Learning can boost your earning potential by 20-40%",
            "Start a side income stream: Freelancing, tutoring, or gig work can add $500-2,000/month",
            "Negotiate your salary: 78% of employers expect negotiation. Research your market rate and ask for a meeting",
        ],
    ),
]

THIRTY_DAY_PLANS: List[Tuple[float, ThirtyDayPlan]] = [
    (
        100000,
        ThirtyDayPlan(
            week1=[
                "Verify you're maxing all tax-advantaged accounts ($23k 401k + $7k IRA)",
                "Review mega backdoor Roth eligibility with your 401(k) plan",
                "Audit your portfolio for tax-loss harvesting opportunities",
            ],
            week2=[
                "Schedule meeting with a fee-only fiduciary financial advisor",
                "Research real estate syndications or REITs for diversification",
                "Review estate planning documents (will, trust, beneficiaries)",
            ],
            week3=[
                "Evaluate need for umbrella insurance given asset level",
                "Consider charitable giving strategy: donor-advised fund or appreciated stock",
                "Review corporate benefits for any unused perks (legal, financial planning)",
            ],
            week4=[
                "Set up quarterly net worth tracking",
                "Create or update legacy/estate plan",
                "Schedule annual tax planning meeting with CPA",
            ],
        ),
    ),
    (
        50000,
        ThirtyDayPlan(
            week1=[
                "Review your 401(k) contribution - ensure you're maxing employer match",
                "Check that beneficiaries are updated on all accounts",
                "Audit your insurance coverage (life, disability, umbrella)",
            ],
            week2=[
                "Open or fund Roth IRA - set up automatic monthly contributions",
                "Research HSA-eligible health plans for next enrollment",
                "Review your asset allocation - ensure age-appropriate diversification",
            ],
            week3=[
                "Calculate your net worth (assets minus liabilities)",
                "Review all investment fees - switch to low-cost index funds if needed",
                "Create or update your emergency fund goal (3-6 months expenses)",
            ],
            week4=[
                "Schedule annual compensation review conversation",
                "Set up automatic increases to retirement contributions with raises",
                "Create a 12-month financial roadmap with specific milestones",
            ],
        ),
    ),
    (
        NEG_INF,
        ThirtyDayPlan(
            week1=[
                "Audit all subscriptions - cancel anything unused weekly",
                "Set up automatic savings transfer of $50/paycheck (adjust based on your budget)",
                "List your top 3 marketable skills",
            ],
            week2=[
                "Apply for one free certification (Google, HubSpot, LinkedIn)",
                "Research salary benchmarks for your role on Glassdoor",
                "Calculate your true hourly rate including commute time",
            ],
            week3=[
                "Draft a salary negotiation script or job search plan",
                "Open a high-yield savings account (4-5% APY) if you don't have one",
                "Identify one potential side income that uses your existing skills",
            ],
            week4=[
                "Schedule a career conversation with your manager or apply to 3 jobs",
                "Set specific income goal for next quarter",
                "Review and optimize your budget using the 50/30/20 framework",
            ],
        ),
    ),
]

EXPANDED_TIPS: List[Tuple[float, List[ExpandedTip]]] = [
    (
        100000,
        [
            ExpandedTip(
                title="Tax Planning vs Tax Preparation",
                description="At your income level, proactive tax planning saves more than reactive tax filing. Plan quarterly, not annually.",
                action_items=[
                    "Meet with CPA in Q4 to plan year-end moves",
                    "Bunch deductions in alternating years if beneficial",
                    "Consider Qualified Business Income deductions if applicable",
                ],
            ),
            ExpandedTip(
                title="Wealth Preservation",
                description="As wealth grows, protection becomes as important as growth. Diversification and insurance are key.",
                action_items=[
                    "Ensure umbrella insurance covers your net worth",
                    "Diversify across asset classes and geographies",
                    "Consider asset protection strategies (trusts, LLCs)",
                ],
            ),
        ],
    ),
    (
        50000,
        [
            ExpandedTip(
                title="Tax Efficiency Fundamentals",
                description="Every dollar saved in taxes is a dollar earned. Pre-tax contributions reduce your tax bracket.",
                action_items=[
                    "Max employer 401(k) match (typically 3-6%)",
                    "Use FSA for medical/dependent care expenses",
                    "Consider pre-tax commuter benefits if available",
                ],
            ),
            ExpandedTip(
                title="Investment Simplicity",
                description="Low-cost index funds beat 90% of actively managed funds over 20 years. Keep investing simple.",
                action_items=[
                    "Use target-date funds for hands-off investing",
                    "Keep investment fees under 0.20%",
                    "Avoid timing the market - contribute consistently",
                ],
            ),
        ],
    ),
    (
        NEG_INF,
        [
            ExpandedTip(
                title="The Power of Compound Income",
                description="Focus on increasing income rather than just cutting expenses. A $5,000/year raise compounds throughout your career.",
                action_items=[
                    "Identify your highest-value skill and improve it",
                    "Consider certifications that directly lead to higher pay",
                    "Track your accomplishments for performance reviews",
                ],
            ),
            ExpandedTip(
                title="Emergency Fund Strategy",
                description="Even small emergency funds prevent debt spirals. Start with $1,000, then build to one month's expenses.",
                action_items=[
                    "Open a separate high-yield savings account",
                    "Automate a small weekly transfer ($20-50)",
                    "Use this fund ONLY for true emergencies",
                ],
            ),
        ],
    ),
]

# Appended for every income.
UNIVERSAL_TIPS: List[ExpandedTip] = [
    ExpandedTip(
        title="The Psychology of Money",
        description="Financial success is 20% knowledge and 80% behavior. Automate good decisions to remove willpower from the equation.",
        action_items=[
            "Automate savings and investments on payday",
            "Use separate accounts for different goals",
            "Review spending monthly, not daily (avoid anxiety)",
        ],
    ),
]


def pick_band(bands: Sequence[Tuple[float, T]], annual_income: float) -> T:
    """Return the record of the first band whose minimum ``annual_income`` meets."""

    for minimum, record in bands:
        if annual_income >= minimum:
            return record
    return bands[-1][1]
