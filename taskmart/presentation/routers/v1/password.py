from typing import Annotated, Callable

from fastapi import APIRouter, Depends

from taskmart.application.request_password_reset import request_password_reset
from taskmart.application.reset_password import reset_password
from taskmart.application.verify_reset_code import verify_reset_code
from taskmart.domain.ports.otp_delivery import OTPDeliveryPort
from taskmart.domain.ports.otp_store import OTPStorePort
from taskmart.domain.ports.unit_of_work import UnitOfWorkPort
from taskmart.presentation.dependencies import (
    get_hash_password,
    get_otp_delivery,
    get_otp_store,
    get_password_policy,
    get_uow,
)
from taskmart.schemas.requests import ForgotPasswordIn, ResetPasswordIn, VerifyOTPIn
from taskmart.schemas.responses import ErrorOut, MessageOut, VerifyOTPOut

router = APIRouter(prefix="/password", tags=["Password"])

_errors = {400: {"model": ErrorOut}, 401: {"model": ErrorOut}}


@router.post("/forgot", response_model=MessageOut, responses={400: {"model": ErrorOut}})
async def post_forgot_password(
    body: ForgotPasswordIn,
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    otp_store: Annotated[OTPStorePort, Depends(get_otp_store)],
    delivery: Annotated[OTPDeliveryPort, Depends(get_otp_delivery)],
):
    message = await request_password_reset(
        uow=uow,
        otp_store=otp_store,
        delivery=delivery,
        email=body.email,
    )
    return MessageOut(message=message)


@router.post("/verify-otp", response_model=VerifyOTPOut, responses=_errors)
async def post_verify_otp(
    body: VerifyOTPIn,
    otp_store: Annotated[OTPStorePort, Depends(get_otp_store)],
):
    expires_in = await verify_reset_code(
        otp_store=otp_store,
        email=body.email,
        code=body.otp,
    )
    return VerifyOTPOut(
        message="OTP verified successfully", expires_in_seconds=expires_in
    )


@router.post(
    "/reset",
    response_model=MessageOut,
    responses={**_errors, 404: {"model": ErrorOut}},
)
async def post_reset_password(
    body: ResetPasswordIn,
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    otp_store: Annotated[OTPStorePort, Depends(get_otp_store)],
    hash_password: Annotated[Callable[..., str], Depends(get_hash_password)],
    password_policy: Annotated[
        Callable[[str], list[str]], Depends(get_password_policy)
    ],
):
    await reset_password(
        uow=uow,
        otp_store=otp_store,
        email=body.email,
        code=body.otp,
        new_password=body.new_password,
        confirm_password=body.confirm_password,
        hash_password=hash_password,
        password_policy=password_policy,
    )
    return MessageOut(
        message="Password reset successfully. You can now login with your new password."
    )
