"""Account endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from tradeleague.api.deps import get_account_service, get_ledger
from tradeleague.api.schemas import (
    AccountCreate,
    AccountEnsure,
    AccountUpdate,
    AccountResponse,
    AccountListResponse,
    TransactionResponse,
    TransactionListResponse,
)
from tradeleague.core.exceptions import InvalidInputError
from tradeleague.core.timezone import parse_datetime_eastern
from tradeleague.services import AccountService, PositionLedger

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    data: AccountCreate,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Create a new account under a generated id."""
    account = service.create_account(data.display_name, initial_cash=data.initial_cash)
    return AccountResponse.model_validate(account)


@router.get("", response_model=AccountListResponse)
def list_accounts(
    service: AccountService = Depends(get_account_service),
) -> AccountListResponse:
    """List all accounts."""
    accounts = service.list_accounts()
    return AccountListResponse(
        accounts=[AccountResponse.model_validate(a) for a in accounts],
        count=len(accounts),
    )


@router.put("/{account_id}", response_model=AccountResponse)
def ensure_account(
    account_id: str,
    data: Optional[AccountEnsure] = None,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Return the account, creating it on first sign-in."""
    data = data or AccountEnsure()
    account = service.ensure_account(
        account_id,
        display_name=data.display_name,
        initial_cash=data.initial_cash,
    )
    return AccountResponse.model_validate(account)


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: str,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Get a single account."""
    return AccountResponse.model_validate(service.get_account(account_id))


@router.patch("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: str,
    data: AccountUpdate,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Update an account's profile."""
    account = service.update_profile(account_id, data.display_name)
    return AccountResponse.model_validate(account)


@router.get("/{account_id}/transactions", response_model=TransactionListResponse)
def list_transactions(
    account_id: str,
    limit: int = Query(50, ge=1, le=500, description="Maximum records to return"),
    since: Optional[str] = Query(None, description="Only trades at or after this time (US/Eastern if no offset)"),
    ledger: PositionLedger = Depends(get_ledger),
) -> TransactionListResponse:
    """Trade history for an account, newest first."""
    since_dt = None
    if since:
        try:
            since_dt = parse_datetime_eastern(since)
        except (ValueError, OverflowError):
            raise InvalidInputError(f"Invalid 'since' timestamp: {since!r}") from None

    transactions = ledger.list_transactions(account_id, limit=limit, since=since_dt)
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        count=len(transactions),
    )
