"""
Calculator endpoint.

Each request runs a fresh in-memory session over the submitted keystrokes;
nothing about a calculator session is stored.
"""

from fastapi import APIRouter, HTTPException, status

from api.deps import CurrentUser
from core.config import settings
from core.exceptions import CalculatorError
from engines.calculator import Calculator
from schemas.calculator import CalculatorRequest, CalculatorState
from schemas.converters import calculator_to_schema

router = APIRouter()


@router.post("/evaluate", response_model=CalculatorState)
async def evaluate(
    request: CalculatorRequest,
    current_user: CurrentUser,
) -> CalculatorState:
    """
    Press the given keys in order and return the resulting state.

    Unknown keys and functions applied outside their domain are rejected
    with 422.
    """
    calculator = Calculator(memory=request.memory, history_limit=settings.CALCULATOR_HISTORY_LIMIT)
    try:
        calculator.run(request.keys)
    except CalculatorError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    return calculator_to_schema(calculator)
