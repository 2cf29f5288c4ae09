from fastapi import APIRouter, Depends, Request
from app.domains.otp.models import SendOTPRequest, VerifyOTPRequest
from app.domains.otp.otp_service import OTPService

router = APIRouter()


def get_otp_service(request: Request) -> OTPService:
    return request.app.state.otp_service


@router.post("/send-otp")
async def send_otp(data: SendOTPRequest, otp_service: OTPService = Depends(get_otp_service)):
    """
    Endpoint to send OTP.
    """
    await otp_service.send_otp(data.phone)
    return {"message": "OTP sent successfully."}


@router.post("/verify-otp")
async def verify_otp(data: VerifyOTPRequest, otp_service: OTPService = Depends(get_otp_service)):
    """
    Endpoint to verify OTP and mark the phone as verified.
    """
    await otp_service.verify_otp(data.phone, data.token)
    return {"message": "Phone verified successfully."}
