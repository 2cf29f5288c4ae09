import logging
from app.domains.users.service import UserService
from app.shared.errors import BadRequestError
from app.shared.phone import mask_phone
from app.shared.supabase_service import SupabaseAPI

logger = logging.getLogger(__name__)


class OTPService:
    def __init__(self, supabase: SupabaseAPI, user_service: UserService):
        """
        Initialize OTP Service.

        Code generation, delivery, expiry and single use are all owned by
        the hosted auth service; this class only forwards to it.

        Args:
            supabase (SupabaseAPI): Client used for the SMS OTP channel.
            user_service (UserService): Marks accounts verified.
        """
        self.supabase = supabase
        self.user_service = user_service

    async def send_otp(self, phone_number: str):
        """
        Ask the hosted service to text a one-time code to the phone.

        Args:
            phone_number (str): The user's phone number.

        Raises:
            BadRequestError: phone_number is missing or empty.
            ExternalServiceError: the dispatch failed.
        """
        if not phone_number:
            raise BadRequestError("Phone number is required.")

        await self.supabase.send_otp(phone_number)
        logger.info(f"OTP sent to {mask_phone(phone_number)}")

    async def verify_otp(self, phone_number: str, token: str) -> list[dict]:
        """
        Verify the code, then flag the matching account as verified.

        A wrong code and an expired code fail the same way. If the code is
        accepted but the account update fails, the code stays consumed on
        the hosted side while the account remains unverified.

        Args:
            phone_number (str): The user's phone number.
            token (str): The code the user received.

        Returns:
            list[dict]: The updated account rows.
        """
        if not phone_number or not token:
            raise BadRequestError("Phone and OTP token are required.")

        await self.supabase.verify_otp(phone_number, token, otp_type="sms")
        rows = await self.user_service.mark_phone_verified(phone_number)
        logger.info(f"Phone {mask_phone(phone_number)} verified")
        return rows
