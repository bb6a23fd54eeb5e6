"""
Cart Router

Thin HTTP layer over CartEngine. Every mutation answers with the outcome
kind and the cart as it is after the call.
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from rocketcart.cart import CartEngine, CartOutcome, CartResult

router = APIRouter(prefix="/api", tags=["cart"])

OUTCOME_STATUS = {
    CartOutcome.COMMITTED: 200,
    CartOutcome.NO_OP: 200,
    CartOutcome.NOT_FOUND: 404,
    CartOutcome.STOCK_EXCEEDED: 409,
    CartOutcome.EXTERNAL_FAILURE: 502,
}


class AddToCartRequest(BaseModel):
    product_id: int


class UpdateCartItemRequest(BaseModel):
    product_id: int
    amount: int  # <= 0 is ignored, use DELETE to remove


def get_engine(request: Request) -> CartEngine:
    return request.app.state.cart_engine


def _result_response(result: CartResult, engine: CartEngine) -> JSONResponse:
    return JSONResponse(
        status_code=OUTCOME_STATUS[result.outcome],
        content={
            "outcome": result.outcome.value,
            "detail": result.detail,
            "cart": engine.get_cart_summary(),
        },
    )


@router.get("/cart")
async def get_cart(engine: CartEngine = Depends(get_engine)):
    return engine.get_cart_summary()


@router.post("/cart/add")
async def add_to_cart(request: AddToCartRequest, engine: CartEngine = Depends(get_engine)):
    result = await engine.add_product(request.product_id)
    return _result_response(result, engine)


@router.patch("/cart/item")
async def update_cart_item(request: UpdateCartItemRequest, engine: CartEngine = Depends(get_engine)):
    result = await engine.update_product_amount(request.product_id, request.amount)
    return _result_response(result, engine)


@router.delete("/cart/item/{product_id}")
async def remove_cart_item(product_id: int, engine: CartEngine = Depends(get_engine)):
    result = await engine.remove_product(product_id)
    return _result_response(result, engine)
