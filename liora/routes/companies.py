"""
Company discovery, memo, chart and investor directory API routes.
"""

from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, Query

from liora.core.deps import get_company_service, get_investor_store
from liora.models.company import (
    CompanyCharts,
    CompanyOverview,
    CompanySearchResponse,
    InvestmentMemo,
    InvestorProfile,
)
from liora.models.schemas import CompanyFilters, FundingRange
from liora.services.chart_service import build_company_charts
from liora.services.company_service import CompanyService
from liora.stores.investor_store import InvestorStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/companies", tags=["companies"])
investors_router = APIRouter(prefix="/api/v1/investors", tags=["investors"])


@router.get("", response_model=CompanySearchResponse)
async def search_companies(
    q: str = Query(default="", description="Matches name, description, sector or location"),
    sectors: List[str] = Query(default=[]),
    stages: List[str] = Query(default=[]),
    min_funding: float = Query(default=0, ge=0),
    max_funding: float = Query(default=100_000_000, ge=0),
    location: str = Query(default=""),
    use_saved: bool = Query(
        default=False, description="Ignore the other parameters and use the saved filters"),
    companies: CompanyService = Depends(get_company_service),
    investor_store: InvestorStore = Depends(get_investor_store)
):
    """Search the catalogue and report how many filter groups are active."""
    if use_saved:
        filters = investor_store.filters
    else:
        filters = CompanyFilters(
            sectors=sectors,
            stages=stages,
            funding_range=FundingRange(min=min_funding, max=max_funding),
            location=location,
            search_query=q,
        )
    return companies.search(filters)


@router.get("/{company_id}", response_model=CompanyOverview)
async def get_company(
    company_id: str,
    companies: CompanyService = Depends(get_company_service)
):
    return companies.get_company(company_id)


@router.get("/{company_id}/memo", response_model=InvestmentMemo)
async def get_memo(
    company_id: str,
    companies: CompanyService = Depends(get_company_service)
):
    return companies.get_memo(company_id)


@router.get("/{company_id}/charts", response_model=CompanyCharts)
async def get_charts(
    company_id: str,
    companies: CompanyService = Depends(get_company_service)
):
    """Market growth, metrics and risk radar derived from the memo."""
    return build_company_charts(companies.get_memo(company_id))


@investors_router.get("", response_model=List[InvestorProfile])
async def list_investors(
    focus_area: Optional[str] = Query(default=None),
    companies: CompanyService = Depends(get_company_service)
):
    return companies.list_investors(focus_area)


@investors_router.get("/{investor_id}", response_model=InvestorProfile)
async def get_investor(
    investor_id: str,
    companies: CompanyService = Depends(get_company_service)
):
    return companies.get_investor(investor_id)
