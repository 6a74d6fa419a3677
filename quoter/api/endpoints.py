"""API endpoints for the quoting service."""

import asyncio

import structlog
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from quoter.amounts import format_units, parse_units
from quoter.models.quote import QuoteResponse
from quoter.models.types import is_valid_address
from quoter.pools.snapshot import (
    PoolSnapshotProvider,
    PoolSnapshotUnavailable,
    default_pool_provider,
)
from quoter.routing.router import compute_quote
from quoter.routing.types import TradeDirection

logger = structlog.get_logger()

router = APIRouter()

ERROR_NO_AMOUNT = (
    'The quote request requires an amount; neither "fromAmount" nor "toAmount" was provided.'
)
ERROR_MULTIPLE_AMOUNT = (
    'The quote request requires either "fromAmount" or "toAmount", but not both.'
)
ERROR_POOLS_UNAVAILABLE = "Pool data is currently unavailable"
ERROR_INTERNAL = "Failed to compute quote"


def error_address(field: str) -> str:
    return f'The "{field}" address is invalid'


def error_amount(field: str) -> str:
    return f'The "{field}" amount is invalid'


def error_zero_amount(field: str) -> str:
    return f'The "{field}" amount must be greater than zero'


def error_no_route(from_token: str, to_token: str) -> str:
    return f'No route found between "{from_token}" and "{to_token}"'


def get_pool_provider() -> PoolSnapshotProvider:
    """Dependency provider for the pool snapshot provider.

    Override this in tests to inject a fixed snapshot:
        app.dependency_overrides[get_pool_provider] = lambda: provider
    """
    return default_pool_provider


def _failure(status_code: int, error: str) -> JSONResponse:
    body = QuoteResponse.failure(error).model_dump(by_alias=True, exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


@router.get("/quote", response_model=QuoteResponse, response_model_exclude_none=True)
async def get_quote(
    from_token: str = Query(
        alias="fromToken", description="The address of the token the user wants to sell."
    ),
    to_token: str = Query(
        alias="toToken", description="The address of the token the user wants to receive."
    ),
    from_amount: str | None = Query(
        default=None,
        alias="fromAmount",
        description="Amount to sell. Exactly one of fromAmount or toAmount is required.",
    ),
    to_amount: str | None = Query(
        default=None,
        alias="toAmount",
        description="Amount to receive. Exactly one of fromAmount or toAmount is required.",
    ),
    provider: PoolSnapshotProvider = Depends(get_pool_provider),
) -> QuoteResponse | JSONResponse:
    """Quote the best route for exchanging a specified amount of tokens.

    Error Handling:
        - Missing, duplicated or malformed parameters: 400 with an error message
        - Pool data unavailable: 503
        - No route between the tokens: 200 with success=false
        - Unexpected exception while quoting: logged, 500
    """
    if not from_amount and not to_amount:
        return _failure(400, ERROR_NO_AMOUNT)
    if from_amount and to_amount:
        return _failure(400, ERROR_MULTIPLE_AMOUNT)
    if not is_valid_address(from_token):
        return _failure(400, error_address("fromToken"))
    if not is_valid_address(to_token):
        return _failure(400, error_address("toToken"))

    loop = asyncio.get_running_loop()
    try:
        snapshot = await loop.run_in_executor(None, provider.get_snapshot)
    except PoolSnapshotUnavailable as err:
        logger.warning("pools_unavailable", error=str(err))
        return _failure(503, ERROR_POOLS_UNAVAILABLE)

    token_in = snapshot.get_token(from_token)
    token_out = snapshot.get_token(to_token)
    if token_in is None or token_out is None:
        return _failure(200, error_no_route(from_token, to_token))

    if from_amount:
        direction, amount_field, raw_amount = TradeDirection.EXACT_INPUT, "fromAmount", from_amount
        amount_token, quote_token = token_in, token_out
    else:
        direction, amount_field = TradeDirection.EXACT_OUTPUT, "toAmount"
        raw_amount = to_amount or ""
        amount_token, quote_token = token_out, token_in

    try:
        amount = parse_units(raw_amount, amount_token.decimals)
    except ValueError:
        return _failure(400, error_amount(amount_field))
    if amount == 0:
        return _failure(400, error_zero_amount(amount_field))

    logger.info(
        "quote_requested",
        token_in=token_in.address,
        token_out=token_out.address,
        direction=direction.value,
        amount=str(amount),
    )

    try:
        result = await loop.run_in_executor(
            None,
            compute_quote,
            amount,
            token_in.address,
            token_out.address,
            snapshot,
            direction,
        )
    except Exception:
        logger.exception(
            "quote_failed",
            token_in=token_in.address,
            token_out=token_out.address,
            direction=direction.value,
        )
        return _failure(500, ERROR_INTERNAL)

    if not result.found:
        return _failure(200, error_no_route(from_token, to_token))

    return QuoteResponse(
        success=True,
        quote=format_units(result.amount, quote_token.decimals),
        guaranteed_amount=format_units(result.guaranteed_amount, quote_token.decimals),
        route=result.route,
        price_impact=format(result.price_impact, "f"),
        suggested_slippage=format(result.suggested_slippage, "f"),
        direction=direction.value,
    )
