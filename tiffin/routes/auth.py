"""
Authentication Endpoints

    POST /api/auth/send-otp
    POST /api/auth/verify-otp
    POST /api/auth/login
    POST /api/auth/signup
"""

from fastapi import APIRouter, Depends

from tiffin.core.config import get_logger, get_settings
from tiffin.dependencies import get_credential_service
from tiffin.schemas import (
    AuthResponse,
    LoginRequest,
    SendOtpRequest,
    SendOtpResponse,
    SignupRequest,
    UserOut,
    VerifyOtpRequest,
    VerifyOtpResponse,
)
from tiffin.services.auth import CredentialService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/send-otp", response_model=SendOtpResponse)
async def send_otp(
    body: SendOtpRequest,
    credentials: CredentialService = Depends(get_credential_service),
) -> SendOtpResponse:
    """Issue a one-time code for phone login."""
    logger.info(f"📱 OTP requested for phone: {body.phone}")
    code = await credentials.send_otp(body.phone)

    return SendOtpResponse(
        message="OTP sent successfully",
        otp=code if get_settings().should_expose_otp else None,
    )


@router.post("/verify-otp", response_model=VerifyOtpResponse)
async def verify_otp(
    body: VerifyOtpRequest,
    credentials: CredentialService = Depends(get_credential_service),
) -> VerifyOtpResponse:
    """Exchange a valid OTP for a session token; creates the account on first use."""
    result = credentials.authenticate_by_otp(body.phone, body.otp)

    return VerifyOtpResponse(
        token=result.token,
        phone=result.user.phone,
        name=result.user.name,
        is_new_user=result.is_new_user,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    credentials: CredentialService = Depends(get_credential_service),
) -> AuthResponse:
    logger.info(f"🔐 Login attempt for email: {body.email}")
    result = credentials.authenticate_by_password(body.email, body.password)
    return AuthResponse(token=result.token, user=UserOut.from_user(result.user))


@router.post("/signup", response_model=AuthResponse)
async def signup(
    body: SignupRequest,
    credentials: CredentialService = Depends(get_credential_service),
) -> AuthResponse:
    logger.info(f"📝 Signup attempt for email: {body.email}")
    result = credentials.signup(body.name, body.email, body.phone, body.password)
    return AuthResponse(token=result.token, user=UserOut.from_user(result.user))
