"""Portfolio valuation and analysis endpoints."""

from fastapi import APIRouter, Depends

from tradeleague.api.deps import get_analysis_service, get_valuation_service
from tradeleague.api.schemas import (
    AllocationResponse,
    NetWorthResponse,
    PerformanceResponse,
    PortfolioResponse,
)
from tradeleague.services import AnalysisService, ValuationService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("/{account_id}", response_model=PortfolioResponse)
def get_portfolio(
    account_id: str,
    valuation: ValuationService = Depends(get_valuation_service),
) -> PortfolioResponse:
    """Holdings with current prices, P/L and weights."""
    return PortfolioResponse.model_validate(valuation.get_portfolio(account_id))


@router.get("/{account_id}/value", response_model=NetWorthResponse)
def get_net_worth(
    account_id: str,
    valuation: ValuationService = Depends(get_valuation_service),
) -> NetWorthResponse:
    """Cash, portfolio value and net worth."""
    return NetWorthResponse.model_validate(valuation.value_of(account_id))


@router.get("/{account_id}/allocation", response_model=AllocationResponse)
def get_allocation(
    account_id: str,
    analysis: AnalysisService = Depends(get_analysis_service),
) -> AllocationResponse:
    """Allocation by symbol."""
    return AllocationResponse.model_validate(analysis.allocation(account_id))


@router.get("/{account_id}/sectors", response_model=AllocationResponse)
def get_sector_allocation(
    account_id: str,
    analysis: AnalysisService = Depends(get_analysis_service),
) -> AllocationResponse:
    """Allocation by sector."""
    return AllocationResponse.model_validate(analysis.sector_allocation(account_id))


@router.get("/{account_id}/metrics", response_model=PerformanceResponse)
def get_metrics(
    account_id: str,
    analysis: AnalysisService = Depends(get_analysis_service),
) -> PerformanceResponse:
    """Gain/loss, best and worst performer, diversification score."""
    return PerformanceResponse.model_validate(analysis.performance(account_id))
