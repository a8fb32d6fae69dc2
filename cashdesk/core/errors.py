from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette import status
import logging

logger = logging.getLogger("cashdesk.errors")


# Domain errors ----------------------------------------------------
class CashdeskError(Exception):
    """Base class for rejections raised by the pricing / reconciliation core."""

    code = "cashdesk_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.code, "detail": self.message}


class MalformedInputError(CashdeskError):
    """Non-numeric rate/amount/discount or missing currency. Never persisted."""

    code = "malformed_input"


class MissingReferenceDataError(MalformedInputError):
    """Rate table / cash-flow ledger absent, or currency not listed."""

    code = "missing_reference_data"


class InsufficientLiquidityError(CashdeskError):
    """Business rejection: the counter cannot cover the order."""

    code = "insufficient_liquidity"

    def __init__(self, side: str, required: float, available: float, shortfall: float):
        super().__init__(
            f"Insufficient {side}: required {required:.2f}, available {available:.2f}, "
            f"short by {shortfall:.2f}"
        )
        self.side = side
        self.required = required
        self.available = available
        self.shortfall = shortfall

    def to_dict(self) -> dict:
        base = super().to_dict()
        base.update(
            side=self.side,
            required=self.required,
            available=self.available,
            shortfall=self.shortfall,
        )
        return base


class LedgerWriteError(CashdeskError):
    """Order row could not be appended; nothing was committed."""

    code = "ledger_write_failed"


# HTTP handlers ----------------------------------------------------
def not_found_handler(request: Request, exc):  # type: ignore
    detail = getattr(exc, "detail", None)
    status_code = getattr(exc, "status_code", status.HTTP_404_NOT_FOUND)
    if status_code == status.HTTP_404_NOT_FOUND and detail in (None, "Not Found"):
        detail = f"No route for {request.method} {request.url.path}"
    return JSONResponse(
        status_code=status_code,
        content={
            "error": "not_found" if status_code == 404 else "http_error",
            "detail": detail,
        },
    )


# Order forms reject bad rate / amount / discount as malformed input,
# whichever layer catches them first.
MALFORMED_INPUT_PATHS = ("/orders",)


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    error = "validation_error"
    if request.url.path.startswith(MALFORMED_INPUT_PATHS):
        error = MalformedInputError.code
        logger.info("rejected malformed order form: %s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": error,
            "detail": jsonable_encoder(exc.errors()),
        },
    )


def malformed_input_handler(request: Request, exc: MalformedInputError):  # type: ignore
    logger.info("rejected malformed input: %s", exc.message)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=exc.to_dict()
    )


def liquidity_handler(request: Request, exc: InsufficientLiquidityError):  # type: ignore
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=exc.to_dict())


def ledger_write_handler(request: Request, exc: LedgerWriteError):  # type: ignore
    logger.error("ledger append failed: %s", exc.message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=exc.to_dict()
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )
