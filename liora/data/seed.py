"""
Demo data loaded at startup: the company catalogue, one full memo,
and a handful of call requests, meetings and notifications.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from liora.models.company import (
    CompanyOverview,
    InvestmentMemo,
    InvestorProfile,
)
from liora.models.schemas import (
    CallRequest,
    CallStatus,
    CallResponse,
    MeetingSchedule,
    CallRequestNotification,
    CallRequestPayload,
    CallResponseNotification,
    CallResponsePayload,
    SystemNotification,
    SystemPayload,
)


COMPANIES: List[CompanyOverview] = [
    CompanyOverview(
        id="1",
        name="TechFlow AI",
        description="AI-powered workflow automation platform for enterprise teams",
        sector="AI/ML",
        stage="series-a",
        founded_year=2022,
        location="San Francisco, CA",
        website="https://techflow.ai",
        logo="/logos/techflow.png",
        tagline="Automate your workflow with AI",
        employee_count=45,
        funding_raised=12_000_000,
        valuation=50_000_000,
        founder_id="founder-1",
    ),
    CompanyOverview(
        id="2",
        name="GreenTech Solutions",
        description="Sustainable energy solutions for commercial buildings",
        sector="CleanTech",
        stage="seed",
        founded_year=2021,
        location="Austin, TX",
        website="https://greentech.com",
        tagline="Clean energy for everyone",
        employee_count=28,
        funding_raised=5_000_000,
        valuation=25_000_000,
        founder_id="founder-2",
    ),
    CompanyOverview(
        id="3",
        name="HealthTech Innovations",
        description="Digital health platform connecting patients with specialists",
        sector="HealthTech",
        stage="pre-seed",
        founded_year=2023,
        location="Boston, MA",
        website="https://healthtech.io",
        tagline="Healthcare made accessible",
        employee_count=12,
        funding_raised=1_500_000,
        valuation=8_000_000,
        founder_id="founder-3",
    ),
    CompanyOverview(
        id="4",
        name="FinanceFlow",
        description="Modern banking infrastructure for fintech companies",
        sector="FinTech",
        stage="series-a",
        founded_year=2020,
        location="New York, NY",
        website="https://financeflow.com",
        tagline="Banking infrastructure reimagined",
        employee_count=67,
        funding_raised=25_000_000,
        valuation=120_000_000,
        founder_id="founder-4",
    ),
    CompanyOverview(
        id="5",
        name="EduTech Platform",
        description="Personalized learning platform for K-12 education",
        sector="EdTech",
        stage="seed",
        founded_year=2022,
        location="Seattle, WA",
        website="https://edutech.com",
        tagline="Personalized learning for every student",
        employee_count=34,
        funding_raised=8_000_000,
        valuation=35_000_000,
        founder_id="founder-5",
    ),
]


INVESTORS: List[InvestorProfile] = [
    InvestorProfile(
        id="investor-1",
        name="Sarah Johnson",
        firm="Accel Partners",
        title="Principal",
        avatar="/investors/sarah-johnson.jpg",
        focus_areas=["AI/ML", "Enterprise Software", "B2B SaaS"],
        investment_range="$5M - $25M",
        portfolio=["Slack", "Atlassian", "Dropbox"],
    ),
    InvestorProfile(
        id="investor-2",
        name="Michael Chen",
        firm="Sequoia Capital",
        title="Partner",
        avatar="/investors/michael-chen.jpg",
        focus_areas=["Enterprise AI", "Automation", "Developer Tools"],
        investment_range="$10M - $50M",
        portfolio=["GitHub", "Docker", "Zoom"],
    ),
    InvestorProfile(
        id="investor-3",
        name="Emily Rodriguez",
        firm="Andreessen Horowitz",
        title="General Partner",
        avatar="/investors/emily-rodriguez.jpg",
        focus_areas=["AI Infrastructure", "Enterprise Software", "Future of Work"],
        investment_range="$15M - $100M",
        portfolio=["Databricks", "PagerDuty", "Okta"],
    ),
]


TECHFLOW_MEMO = InvestmentMemo.model_validate({
    "id": "memo-1",
    "company_id": "1",
    "version": "2.1",
    "created_at": "2024-01-15T10:00:00Z",
    "updated_at": "2024-01-20T14:30:00Z",
    "overview": {
        **COMPANIES[0].model_dump(),
        "description": (
            "TechFlow AI is revolutionizing enterprise workflow automation through "
            "advanced artificial intelligence and machine learning technologies. "
            "Our platform helps businesses streamline their operations, reduce manual "
            "tasks, and increase productivity by up to 40%."
        ),
    },
    "market_analysis": {
        "market_size": {
            "current": 15_000_000_000,
            "projected": 45_000_000_000,
            "year": 2028,
            "currency": "USD",
        },
        "growth_rate": 28.5,
        "market_trends": [
            "Increasing adoption of AI automation in enterprise workflows",
            "Growing demand for no-code/low-code solutions",
            "Rising focus on operational efficiency and cost reduction",
            "Expansion of AI capabilities in document processing",
            "Integration with existing enterprise software ecosystems",
        ],
        "chart_data": [
            {"year": 2022, "market_size": 15_000_000_000, "company_revenue": 2_500_000},
            {"year": 2023, "market_size": 19_000_000_000, "company_revenue": 8_500_000},
            {"year": 2024, "market_size": 24_000_000_000, "company_revenue": 15_000_000},
            {"year": 2025, "market_size": 30_000_000_000, "company_revenue": 25_000_000},
            {"year": 2026, "market_size": 36_000_000_000, "company_revenue": 38_000_000},
            {"year": 2027, "market_size": 42_000_000_000, "company_revenue": 55_000_000},
            {"year": 2028, "market_size": 45_000_000_000, "company_revenue": 75_000_000},
        ],
        "competitive_position": "challenger",
    },
    "founders": [
        {
            "id": "founder-1",
            "name": "Sarah Chen",
            "role": "CEO & Co-Founder",
            "bio": (
                "Sarah is a seasoned entrepreneur with over 12 years of experience in "
                "AI and enterprise software. She previously led product development at "
                "Google Cloud AI."
            ),
            "profile_image": "/founders/sarah-chen.jpg",
            "social_links": {
                "linkedin": "https://linkedin.com/in/sarahchen",
                "twitter": "https://twitter.com/sarahchen_ai",
                "github": "https://github.com/sarahchen",
            },
            "experience": [
                {
                    "company": "Google Cloud AI",
                    "role": "Senior Product Manager",
                    "duration": "2019-2022",
                    "description": "Led the development of AutoML and AI Platform products.",
                },
                {
                    "company": "Microsoft Azure",
                    "role": "Principal Program Manager",
                    "duration": "2016-2019",
                    "description": "Spearheaded the Azure Cognitive Services initiative.",
                },
            ],
            "education": [
                {"institution": "Stanford University",
                 "degree": "PhD in Computer Science (AI/ML)", "year": 2014},
                {"institution": "MIT", "degree": "MS in Computer Science", "year": 2010},
            ],
            "achievements": [
                "Named in Forbes 30 Under 30 for Enterprise Technology (2020)",
                "Holds 8 patents in machine learning and automation",
            ],
            "red_flags": [],
        },
        {
            "id": "founder-2",
            "name": "Marcus Rodriguez",
            "role": "CTO & Co-Founder",
            "bio": (
                "Marcus is a technical visionary with deep expertise in distributed "
                "systems and machine learning infrastructure."
            ),
            "profile_image": "/founders/marcus-rodriguez.jpg",
            "social_links": {
                "linkedin": "https://linkedin.com/in/marcusrodriguez",
                "github": "https://github.com/marcusrodriguez",
            },
            "experience": [
                {
                    "company": "Netflix",
                    "role": "Senior Staff Engineer",
                    "duration": "2020-2022",
                    "description": "Architected the recommendation engine infrastructure.",
                },
            ],
            "education": [
                {"institution": "Carnegie Mellon University",
                 "degree": "MS in Computer Science", "year": 2015},
            ],
            "achievements": ["Holds 5 patents in distributed ML systems"],
            "red_flags": [
                "Limited experience in early-stage startup environments",
            ],
        },
    ],
    "competition": {
        "competitors": [
            {
                "name": "UiPath",
                "description": "Leading robotic process automation platform with enterprise focus",
                "funding_raised": 2_000_000_000,
                "market_share": 35,
                "strengths": ["Market leader with strong brand recognition"],
                "weaknesses": ["Complex setup and implementation process"],
            },
            {
                "name": "Automation Anywhere",
                "description": "Cloud-native intelligent automation platform",
                "funding_raised": 840_000_000,
                "market_share": 25,
                "strengths": ["Cloud-first architecture"],
                "weaknesses": ["Smaller market presence than UiPath"],
            },
            {
                "name": "Blue Prism",
                "description": "Enterprise-grade intelligent automation platform",
                "funding_raised": 150_000_000,
                "market_share": 15,
                "strengths": ["Strong security and governance features"],
                "weaknesses": ["Limited cloud capabilities"],
            },
        ],
        "competitive_advantages": [
            "AI-first approach with advanced natural language processing",
            "No-code interface accessible to business users",
            "Faster implementation time (weeks vs months)",
        ],
        "market_position": (
            "TechFlow AI is positioned as an innovative challenger in the enterprise "
            "automation space."
        ),
    },
    "kpis": {
        "revenue": {"current": 15_000_000, "growth": 185.5, "recurring": 13_500_000},
        "customers": {"total": 450, "growth": 125.8, "churn": 3.2},
        "sector_specific": {
            "average_contract_value": 180_000,
            "customer_lifetime_value": 850_000,
            "sales_cycle_length": 4.5,
            "net_promoter_score": 72,
        },
    },
    "risk_assessment": {
        "risk_level": "medium",
        "categories": {
            "market": {"level": "medium", "factors": [
                "Intense competition from established RPA vendors"]},
            "financial": {"level": "low", "factors": [
                "Strong revenue growth and recurring revenue model"]},
            "operational": {"level": "medium", "factors": [
                "Scaling challenges as customer base grows rapidly"]},
            "team": {"level": "low", "factors": [
                "Strong technical leadership with proven track records"]},
        },
        "red_flags": [
            "High customer acquisition costs in competitive market",
            "Dependence on third-party AI models and cloud infrastructure",
        ],
        "mitigation_strategies": [
            "Develop proprietary AI models to reduce third-party dependencies",
            "Establish strategic partnerships with system integrators",
        ],
    },
    "recommendation": {
        "score": 78,
        "reasoning": (
            "TechFlow AI presents a compelling investment opportunity in the rapidly "
            "growing enterprise automation market."
        ),
        "investment_thesis": (
            "Enterprise workflow automation is shifting from rule-based RPA to "
            "AI-native solutions."
        ),
    },
})

MEMOS = {TECHFLOW_MEMO.company_id: TECHFLOW_MEMO}


def find_company(company_id: str) -> Optional[CompanyOverview]:
    """Look up a catalogue entry by id."""
    return next((c for c in COMPANIES if c.id == company_id), None)


def demo_call_requests(now: Optional[datetime] = None) -> List[CallRequest]:
    now = now or datetime.utcnow()
    return [
        CallRequest(
            id="call-req-1",
            investor_id="investor-1",
            investor_name="Sarah Johnson",
            company_id="1",
            message=(
                "I'm very interested in TechFlow AI's approach to enterprise "
                "automation. Would love to discuss potential investment opportunities."
            ),
            timestamp=now - timedelta(hours=2),
            status=CallStatus.PENDING,
        ),
        CallRequest(
            id="call-req-2",
            investor_id="investor-2",
            investor_name="Michael Chen",
            company_id="1",
            message=(
                "Your AI-first automation platform aligns perfectly with our "
                "investment thesis."
            ),
            timestamp=now - timedelta(hours=5),
            status=CallStatus.ACCEPTED,
        ),
        CallRequest(
            id="call-req-3",
            investor_id="investor-3",
            investor_name="Emily Rodriguez",
            company_id="1",
            message="Impressed by your traction and team background.",
            timestamp=now - timedelta(days=1),
            status=CallStatus.DECLINED,
        ),
    ]


def demo_meetings(now: Optional[datetime] = None) -> List[MeetingSchedule]:
    now = now or datetime.utcnow()
    return [
        MeetingSchedule(
            id="meeting-1",
            call_request_id="call-req-2",
            investor_id="investor-2",
            founder_id="founder-1",
            scheduled_time=now + timedelta(days=1),
            duration=45,
            meeting_link="https://meet.google.com/abc-defg-hij",
            notes="Series A discussion - focus on growth strategy and market expansion",
        ),
        MeetingSchedule(
            id="meeting-2",
            call_request_id="call-req-4",
            investor_id="investor-4",
            founder_id="founder-1",
            scheduled_time=now + timedelta(days=3),
            duration=30,
            meeting_link="https://zoom.us/j/123456789",
            notes="Initial investment discussion",
        ),
    ]


def demo_notifications(now: Optional[datetime] = None) -> list:
    now = now or datetime.utcnow()
    first_request = demo_call_requests(now)[0]
    return [
        CallRequestNotification(
            id="notif-1",
            title="New Call Request",
            message=(
                "Sarah Johnson wants to schedule a call to discuss investment "
                "opportunities"
            ),
            timestamp=now - timedelta(hours=2),
            user_id="founder-1",
            payload=CallRequestPayload(
                call_request=first_request, request_id=first_request.id),
        ),
        CallResponseNotification(
            id="notif-2",
            title="Call Request Accepted",
            message=(
                "TechFlow AI has accepted your call request. You can now schedule "
                "a meeting."
            ),
            timestamp=now - timedelta(hours=3),
            user_id="investor-2",
            payload=CallResponsePayload(call_response=CallResponse(
                request_id="call-req-2",
                status="accepted",
                message="Thank you for your interest! I'm available for a call this week.",
            )),
        ),
        SystemNotification(
            id="notif-3",
            title="Meeting Scheduled",
            message=(
                "Your meeting with Michael Chen has been scheduled for tomorrow "
                "at 2:00 PM"
            ),
            timestamp=now - timedelta(hours=1),
            read=True,
            user_id="founder-1",
            payload=SystemPayload(meeting_id="meeting-1"),
        ),
    ]
