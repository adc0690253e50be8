"""
Company Service - discovery search over the company catalogue and memo
lookup.
"""

from typing import List, Optional
import logging

from liora.core.exceptions import ResourceNotFoundError
from liora.data.seed import COMPANIES, INVESTORS, MEMOS
from liora.models.company import (
    CompanyOverview,
    CompanySearchResponse,
    InvestmentMemo,
    InvestorProfile,
)
from liora.models.schemas import CompanyFilters, FundingRange

logger = logging.getLogger(__name__)

DEFAULT_FUNDING_RANGE = FundingRange()


def matches_search(company: CompanyOverview, query: str) -> bool:
    """Case-insensitive match on name, description, sector or location."""
    query = query.lower()
    return any(
        query in field.lower()
        for field in (company.name, company.description,
                      company.sector, company.location)
    )


def matches_filters(company: CompanyOverview, filters: CompanyFilters) -> bool:
    if filters.search_query and not matches_search(company, filters.search_query):
        return False

    if filters.sectors and company.sector not in filters.sectors:
        return False

    if filters.stages and company.stage not in filters.stages:
        return False

    funding = filters.funding_range
    if company.funding_raised < funding.min or company.funding_raised > funding.max:
        return False

    if filters.location and filters.location.lower() not in company.location.lower():
        return False

    return True


def count_active_filters(filters: CompanyFilters) -> int:
    """Number of filter groups narrowing the results. Search is not counted."""
    count = 0
    if filters.sectors:
        count += 1
    if filters.stages:
        count += 1
    if filters.location:
        count += 1
    if (filters.funding_range.min > DEFAULT_FUNDING_RANGE.min
            or filters.funding_range.max < DEFAULT_FUNDING_RANGE.max):
        count += 1
    return count


class CompanyService:
    """Read-only access to companies, their investment memos and the
    investor directory."""

    def __init__(
        self,
        companies: Optional[List[CompanyOverview]] = None,
        memos: Optional[dict] = None,
        investors: Optional[List[InvestorProfile]] = None
    ):
        self._companies = list(companies if companies is not None else COMPANIES)
        self._memos = dict(memos if memos is not None else MEMOS)
        self._investors = list(investors if investors is not None else INVESTORS)

    def list_companies(self) -> List[CompanyOverview]:
        return list(self._companies)

    def search(self, filters: CompanyFilters) -> CompanySearchResponse:
        results = [c for c in self._companies if matches_filters(c, filters)]
        logger.debug(
            f"Company search matched {len(results)}/{len(self._companies)}")
        return CompanySearchResponse(
            companies=results,
            total=len(results),
            active_filters_count=count_active_filters(filters),
        )

    def get_company(self, company_id: str) -> CompanyOverview:
        for company in self._companies:
            if company.id == company_id:
                return company
        raise ResourceNotFoundError("Company", company_id)

    def get_memo(self, company_id: str) -> InvestmentMemo:
        self.get_company(company_id)
        memo = self._memos.get(company_id)
        if memo is None:
            raise ResourceNotFoundError(
                "InvestmentMemo", company_id,
                message=f"No investment memo for company '{company_id}'")
        return memo

    def list_investors(self, focus_area: Optional[str] = None) -> List[InvestorProfile]:
        if not focus_area:
            return list(self._investors)
        needle = focus_area.lower()
        return [
            investor for investor in self._investors
            if any(needle in area.lower() for area in investor.focus_areas)
        ]

    def get_investor(self, investor_id: str) -> InvestorProfile:
        for investor in self._investors:
            if investor.id == investor_id:
                return investor
        raise ResourceNotFoundError("Investor", investor_id)
