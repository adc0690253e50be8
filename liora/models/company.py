"""
Company, investment memo and chart data models.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Literal, Union

from liora.models.schemas import RiskLevel


CompanyStage = Literal["pre-seed", "seed", "series-a", "series-b", "series-c+"]


class CompanyOverview(BaseModel):
    """A startup as listed in discovery."""

    id: str
    name: str
    description: str
    sector: str
    stage: CompanyStage
    founded_year: int
    location: str
    website: Optional[str] = None
    logo: Optional[str] = None
    tagline: str
    employee_count: int
    funding_raised: float
    valuation: Optional[float] = None
    founder_id: Optional[str] = None


class MarketSize(BaseModel):
    current: float
    projected: float
    year: int
    currency: str = "USD"


class MarketChartPoint(BaseModel):
    year: int
    market_size: float
    company_revenue: Optional[float] = None


class MarketAnalysis(BaseModel):
    market_size: MarketSize
    growth_rate: float
    market_trends: List[str] = Field(default_factory=list)
    chart_data: List[MarketChartPoint] = Field(default_factory=list)
    competitive_position: Literal["leader", "challenger", "follower", "niche"]


class FounderExperience(BaseModel):
    company: str
    role: str
    duration: str
    description: str


class FounderEducation(BaseModel):
    institution: str
    degree: str
    year: int


class FounderProfile(BaseModel):
    id: str
    name: str
    role: str
    bio: str
    profile_image: Optional[str] = None
    social_links: Dict[str, str] = Field(default_factory=dict)
    experience: List[FounderExperience] = Field(default_factory=list)
    education: List[FounderEducation] = Field(default_factory=list)
    achievements: List[str] = Field(default_factory=list)
    red_flags: List[str] = Field(default_factory=list)


class Competitor(BaseModel):
    name: str
    description: str
    funding_raised: float
    market_share: Optional[float] = None
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)


class CompetitorAnalysis(BaseModel):
    competitors: List[Competitor] = Field(default_factory=list)
    competitive_advantages: List[str] = Field(default_factory=list)
    market_position: str


class RevenueMetrics(BaseModel):
    current: float
    growth: float
    recurring: Optional[float] = None


class CustomerMetrics(BaseModel):
    total: int
    growth: float
    churn: Optional[float] = None


class KPIMetrics(BaseModel):
    revenue: RevenueMetrics
    customers: CustomerMetrics
    sector_specific: Dict[str, Union[float, int, str, bool]] = Field(
        default_factory=dict)


class RiskCategory(BaseModel):
    level: RiskLevel
    factors: List[str] = Field(default_factory=list)


class RiskCategories(BaseModel):
    market: RiskCategory
    financial: RiskCategory
    operational: RiskCategory
    team: RiskCategory


class RiskAssessment(BaseModel):
    risk_level: RiskLevel
    categories: RiskCategories
    red_flags: List[str] = Field(default_factory=list)
    mitigation_strategies: List[str] = Field(default_factory=list)


class Recommendation(BaseModel):
    score: int = Field(..., ge=0, le=100)
    reasoning: str
    investment_thesis: str


class InvestmentMemo(BaseModel):
    """Structured investment summary for one company."""

    id: str
    company_id: str
    version: str
    created_at: str
    updated_at: str
    overview: CompanyOverview
    market_analysis: MarketAnalysis
    founders: List[FounderProfile] = Field(default_factory=list)
    competition: CompetitorAnalysis
    kpis: KPIMetrics
    risk_assessment: RiskAssessment
    recommendation: Recommendation


class InvestorProfile(BaseModel):
    """Investor directory entry used for call requests."""

    id: str
    name: str
    firm: str
    title: str
    avatar: Optional[str] = None
    focus_areas: List[str] = Field(default_factory=list)
    investment_range: str
    portfolio: List[str] = Field(default_factory=list)


# ============================================================================
# Chart data
# ============================================================================

class MarketGrowthChartData(BaseModel):
    years: List[int]
    market_size: List[float]
    company_revenue: Optional[List[Optional[float]]] = None
    projected_growth: Optional[List[Optional[float]]] = None


class MetricComparison(BaseModel):
    current: float
    previous: float
    growth: float


class FundingRound(BaseModel):
    stage: str
    amount: float
    date: str


class FundingSummary(BaseModel):
    total: float
    rounds: List[FundingRound] = Field(default_factory=list)


class CompanyMetricsChartData(BaseModel):
    revenue: MetricComparison
    customers: MetricComparison
    funding: FundingSummary


class RiskRadarCategories(BaseModel):
    market: float
    financial: float
    operational: float
    team: float
    competitive: float


class RiskRadarData(BaseModel):
    categories: RiskRadarCategories
    max_value: float = 5


class RiskSummary(BaseModel):
    """Overall reading of a risk radar."""

    average_risk: float
    risk_percentage: float
    level: Literal["Low", "Medium", "High"]
    highest_category: str
    highest_value: float


class CompanyCharts(BaseModel):
    company_id: str
    market_growth: MarketGrowthChartData
    metrics: CompanyMetricsChartData
    risk_radar: RiskRadarData
    risk_summary: RiskSummary


class CompanySearchResponse(BaseModel):
    companies: List[CompanyOverview]
    total: int
    active_filters_count: int
