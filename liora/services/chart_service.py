"""
Chart data derived from an investment memo: market growth, company
metrics and the risk radar.
"""

from typing import Optional

from liora.models.company import (
    CompanyCharts,
    CompanyMetricsChartData,
    FundingRound,
    FundingSummary,
    InvestmentMemo,
    MarketGrowthChartData,
    MetricComparison,
    RiskRadarCategories,
    RiskRadarData,
    RiskSummary,
)
from liora.models.schemas import RiskLevel

RISK_SCALE_MAX = 5

RISK_LEVEL_SCORES = {
    RiskLevel.LOW: 1,
    RiskLevel.MEDIUM: 3,
    RiskLevel.HIGH: 5,
}

# Risk of the company's market position relative to competitors
COMPETITIVE_POSITION_SCORES = {
    "leader": 1,
    "niche": 2,
    "challenger": 3,
    "follower": 4,
}


def _memo_year(memo: InvestmentMemo) -> Optional[int]:
    try:
        return int(memo.created_at[:4])
    except ValueError:
        return None


def build_market_growth(memo: InvestmentMemo) -> MarketGrowthChartData:
    """
    Split company revenue at the memo year: earlier points are actuals,
    later points are projections.
    """
    points = sorted(memo.market_analysis.chart_data, key=lambda p: p.year)
    cutoff = _memo_year(memo)

    actual, projected = [], []
    for point in points:
        is_projection = cutoff is not None and point.year > cutoff
        actual.append(None if is_projection else point.company_revenue)
        projected.append(point.company_revenue if is_projection else None)

    return MarketGrowthChartData(
        years=[p.year for p in points],
        market_size=[p.market_size for p in points],
        company_revenue=actual,
        projected_growth=projected if any(v is not None for v in projected) else None,
    )


def _comparison(current: float, growth: float) -> MetricComparison:
    previous = current / (1 + growth / 100) if growth > -100 else 0
    return MetricComparison(
        current=current, previous=round(previous, 2), growth=growth)


def build_company_metrics(memo: InvestmentMemo) -> CompanyMetricsChartData:
    overview = memo.overview
    kpis = memo.kpis
    return CompanyMetricsChartData(
        revenue=_comparison(kpis.revenue.current, kpis.revenue.growth),
        customers=_comparison(kpis.customers.total, kpis.customers.growth),
        funding=FundingSummary(
            total=overview.funding_raised,
            rounds=[FundingRound(
                stage=overview.stage,
                amount=overview.funding_raised,
                date=memo.created_at[:10],
            )] if overview.funding_raised else [],
        ),
    )


def build_risk_radar(memo: InvestmentMemo) -> RiskRadarData:
    categories = memo.risk_assessment.categories
    return RiskRadarData(
        categories=RiskRadarCategories(
            market=RISK_LEVEL_SCORES[categories.market.level],
            financial=RISK_LEVEL_SCORES[categories.financial.level],
            operational=RISK_LEVEL_SCORES[categories.operational.level],
            team=RISK_LEVEL_SCORES[categories.team.level],
            competitive=COMPETITIVE_POSITION_SCORES[
                memo.market_analysis.competitive_position],
        ),
        max_value=RISK_SCALE_MAX,
    )


def risk_level_label(percentage: float) -> str:
    if percentage <= 30:
        return "Low"
    if percentage <= 60:
        return "Medium"
    return "High"


def summarize_risk(radar: RiskRadarData) -> RiskSummary:
    """Average score, its share of the scale and the worst category."""
    scores = radar.categories.model_dump()
    average = sum(scores.values()) / len(scores)
    percentage = average / radar.max_value * 100
    highest = max(scores, key=scores.get)
    return RiskSummary(
        average_risk=round(average, 2),
        risk_percentage=round(percentage, 2),
        level=risk_level_label(percentage),
        highest_category=highest,
        highest_value=scores[highest],
    )


def build_company_charts(memo: InvestmentMemo) -> CompanyCharts:
    radar = build_risk_radar(memo)
    return CompanyCharts(
        company_id=memo.company_id,
        market_growth=build_market_growth(memo),
        metrics=build_company_metrics(memo),
        risk_radar=radar,
        risk_summary=summarize_risk(radar),
    )
