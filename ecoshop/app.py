from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from .auth.dependencies import require_admin, require_user
from .auth.models import (
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    TwoFactorSetupResponse,
    UserOut,
)
from .auth.users import authenticate, enable_two_factor, register, update_profile, verify_two_factor
from .cart.models import CartAddRequest, CartOut, CartUpdateRequest
from .cart.store import add_item, clear_cart, get_cart, remove_item, update_item
from .catalog.data_store import add_product, get_product, list_products
from .catalog.models import ProductCreate, ProductOut
from .config import DEFAULT_APP_CONFIG
from .errors import EcoShopError
from .feedback.models import FeedbackOut, FeedbackRequest, ProductFeedbackResponse
from .feedback.store import get_product_feedback, record_feedback
from .logging_config import RequestLoggingMiddleware, setup_logging
from .orders.models import GatewayOrder, OrderOut, PaymentVerifyRequest
from .orders.store import create_payment, get_order, list_orders, place_order, verify_payment
from .preferences.models import (
    CategoriesRequest,
    PreferenceRequest,
    PreferenceStateOut,
    PreferenceUpdateResponse,
)
from .preferences.state import Preference
from .preferences.store import get_state, set_categories, set_preference
from .recommendations.models import RecommendationResponse
from .recommendations.service import get_recommendations

setup_logging(DEFAULT_APP_CONFIG.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="EcoShop API", version="1.0.0")
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(SessionMiddleware, secret_key=DEFAULT_APP_CONFIG.session_secret)


@app.exception_handler(EcoShopError)
async def handle_ecoshop_error(request: Request, exc: EcoShopError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            exc.message,
            extra={"path": str(request.url.path), "details": exc.details},
            exc_info=exc,
        )
    else:
        logger.warning(exc.message, extra={"path": str(request.url.path)})
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": type(exc).__name__,
            "message": exc.message,
            "details": exc.details,
        },
    )


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/register", response_model=UserOut, status_code=201)
def auth_register(body: RegisterRequest) -> dict:
    return register(body.username, body.email, body.password)


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if not verify_two_factor(user["id"], body.token):
        raise HTTPException(status_code=403, detail="Invalid 2FA token")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/enable-2fa", response_model=TwoFactorSetupResponse)
def auth_enable_2fa(request: Request, user: dict = Depends(require_user)) -> TwoFactorSetupResponse:
    otpauth_url = enable_two_factor(user["id"])
    request.session["user"] = {**user, "is_2fa_enabled": True}
    return TwoFactorSetupResponse(
        otpauth_url=otpauth_url,
        message="2FA enabled. Scan QR code in authenticator app.",
    )


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me", response_model=UserOut)
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


@app.put("/auth/profile", response_model=UserOut)
def auth_profile(
    body: ProfileUpdateRequest,
    request: Request,
    user: dict = Depends(require_user),
) -> dict:
    updated = update_profile(user["id"], username=body.username, password=body.password)
    request.session["user"] = updated
    return updated


# ── Catalog endpoints ────────────────────────────────────────────────────


@app.get("/products", response_model=list[ProductOut])
def products() -> list[ProductOut]:
    return list_products()


@app.get("/products/{product_id}", response_model=ProductOut)
def product_detail(product_id: str) -> ProductOut:
    return get_product(product_id)


@app.post("/products", response_model=ProductOut, status_code=201)
def product_add(body: ProductCreate, user: dict = Depends(require_admin)) -> ProductOut:
    return add_product(body)


# ── Preference endpoints ─────────────────────────────────────────────────


def _update_preference(user: dict, product_id: str, preference: Preference, message: str) -> PreferenceUpdateResponse:
    get_product(product_id)
    set_preference(user["id"], product_id, preference)
    return PreferenceUpdateResponse(product_id=product_id, preference=preference, message=message)


@app.get("/preferences", response_model=PreferenceStateOut)
def preferences(user: dict = Depends(require_user)) -> PreferenceStateOut:
    state = get_state(user["id"])
    return PreferenceStateOut(
        liked=sorted(state.liked),
        disliked=sorted(state.disliked),
        stated_categories=sorted(state.stated_categories),
        preferred_categories=sorted(state.preferred_categories(list_products())),
    )


@app.post("/preferences/like", response_model=PreferenceUpdateResponse)
def like(body: PreferenceRequest, user: dict = Depends(require_user)) -> PreferenceUpdateResponse:
    return _update_preference(user, body.product_id, Preference.liked, "Product liked! Preferences updated.")


@app.post("/preferences/dislike", response_model=PreferenceUpdateResponse)
def dislike(body: PreferenceRequest, user: dict = Depends(require_user)) -> PreferenceUpdateResponse:
    return _update_preference(
        user, body.product_id, Preference.disliked,
        "Product disliked & removed from recommendations.",
    )


@app.post("/preferences/neutral", response_model=PreferenceUpdateResponse)
def neutral(body: PreferenceRequest, user: dict = Depends(require_user)) -> PreferenceUpdateResponse:
    return _update_preference(user, body.product_id, Preference.neutral, "Preference cleared.")


@app.put("/preferences/categories", response_model=PreferenceStateOut)
def preference_categories(body: CategoriesRequest, user: dict = Depends(require_user)) -> PreferenceStateOut:
    set_categories(user["id"], body.categories)
    return preferences(user)


# ── Recommendation endpoints ─────────────────────────────────────────────


@app.get("/recommendations", response_model=RecommendationResponse)
def my_recommendations(
    limit: int | None = Query(default=None, ge=1, le=50),
    user: dict = Depends(require_user),
) -> RecommendationResponse:
    return get_recommendations(user["id"], limit=limit)


@app.get("/recommendations/{user_id}", response_model=RecommendationResponse)
def user_recommendations(
    user_id: str,
    limit: int | None = Query(default=None, ge=1, le=50),
    user: dict = Depends(require_user),
) -> RecommendationResponse:
    if user_id != user["id"] and user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Cannot view another user's recommendations")
    return get_recommendations(user_id, limit=limit)


# ── Cart endpoints ───────────────────────────────────────────────────────


@app.get("/cart", response_model=CartOut)
def cart(user: dict = Depends(require_user)) -> CartOut:
    return get_cart(user["id"])


@app.post("/cart", response_model=CartOut)
def cart_add(body: CartAddRequest, user: dict = Depends(require_user)) -> CartOut:
    return add_item(user["id"], body.product_id, body.quantity)


@app.put("/cart/{product_id}", response_model=CartOut)
def cart_update(product_id: str, body: CartUpdateRequest, user: dict = Depends(require_user)) -> CartOut:
    return update_item(user["id"], product_id, body.quantity)


@app.delete("/cart/{product_id}", response_model=CartOut)
def cart_remove(product_id: str, user: dict = Depends(require_user)) -> CartOut:
    return remove_item(user["id"], product_id)


@app.delete("/cart", response_model=CartOut)
def cart_clear(user: dict = Depends(require_user)) -> CartOut:
    return clear_cart(user["id"])


# ── Order endpoints ──────────────────────────────────────────────────────


@app.post("/orders", response_model=OrderOut, status_code=201)
def order_place(user: dict = Depends(require_user)) -> OrderOut:
    return place_order(user["id"])


@app.get("/orders", response_model=list[OrderOut])
def orders(user: dict = Depends(require_user)) -> list[OrderOut]:
    return list_orders(user["id"])


@app.get("/orders/{order_id}", response_model=OrderOut)
def order_detail(order_id: str, user: dict = Depends(require_user)) -> OrderOut:
    return get_order(user["id"], order_id)


@app.post("/orders/{order_id}/payment", response_model=GatewayOrder)
def order_payment(order_id: str, user: dict = Depends(require_user)) -> GatewayOrder:
    return create_payment(user["id"], order_id)


@app.post("/orders/payment/verify", response_model=OrderOut)
def order_payment_verify(body: PaymentVerifyRequest, user: dict = Depends(require_user)) -> OrderOut:
    return verify_payment(user["id"], body.gateway_order_id, body.payment_id, body.signature)


# ── Feedback endpoints ───────────────────────────────────────────────────


@app.post("/feedback", response_model=FeedbackOut, status_code=201)
def feedback(body: FeedbackRequest, user: dict = Depends(require_user)) -> FeedbackOut:
    return record_feedback(user["id"], body.product_id, body.rating, body.comment)


@app.get("/feedback/{product_id}", response_model=ProductFeedbackResponse)
def product_feedback(product_id: str) -> ProductFeedbackResponse:
    return get_product_feedback(product_id)
