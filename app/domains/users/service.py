import logging
from app.domains.users.models import Account, RegisterRequest, Role
from app.shared.errors import ConflictError
from app.shared.password import hash_password
from app.shared.phone import mask_phone
from app.shared.supabase_service import SupabaseAPI

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, supabase: SupabaseAPI, table: str = "users", bcrypt_rounds: int = 10):
        self.supabase = supabase
        self.table = table
        self.bcrypt_rounds = bcrypt_rounds

    async def register(self, data: RegisterRequest) -> Account:
        """
        Create an unverified account.

        Raises:
            ConflictError: the email is already registered.
            ExternalServiceError: the lookup or insert failed.
        """
        # Not atomic: two concurrent registrations can both pass this check.
        # Only a unique constraint on users.email closes that window.
        existing = await self.supabase.select_one(self.table, "email", data.email)
        if existing:
            logger.info(f"Registration rejected, email already registered (id={existing.get('id')})")
            raise ConflictError("Email is already registered.")

        account = Account(
            full_name=data.full_name,
            email=data.email,
            phone=data.phone,
            password=await hash_password(data.password, self.bcrypt_rounds),
            role=Role.OFFICER if data.is_officer else Role.CITIZEN,
            anonymous_status=data.anonymous,
            officer_verification=False if data.is_officer else None,
            verification_status=False,
        )
        await self.supabase.insert(self.table, account.to_row())
        logger.info(f"Registered {account.role.value} account for phone {mask_phone(account.phone)}")
        return account

    async def mark_phone_verified(self, phone: str) -> list[dict]:
        """Set verification_status on the account(s) holding this phone."""
        rows = await self.supabase.update(self.table, "phone", phone, {"verification_status": True})
        logger.info(f"Marked {len(rows)} account(s) verified for phone {mask_phone(phone)}")
        return rows
