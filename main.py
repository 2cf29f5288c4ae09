from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.domains.users.routes import router as user_router
from app.domains.otp.routes import router as otp_router
from app.shared.supabase_service import SupabaseAPI
from app.shared.errors import register_exception_handlers
from app.domains.otp.otp_service import OTPService
from app.domains.users.service import UserService
from app.config.setting import settings
import logging
from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s"
)

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)

# Any origin by default; set ALLOWED_ORIGINS to narrow it for production
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.parsed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

@app.on_event("startup")
async def startup():
    # One client for the process lifetime, shared by the services below
    supabase = SupabaseAPI(
        settings.supabase_url,
        settings.supabase_anon_key,
        timeout=settings.supabase_timeout,
    )
    app.state.supabase = supabase

    user_service = UserService(supabase, table=settings.users_table, bcrypt_rounds=settings.bcrypt_rounds)
    app.state.user_service = user_service
    app.state.otp_service = OTPService(supabase, user_service)

    logger.info(f"{settings.app_name} ({settings.environment}) using Supabase at {settings.supabase_url}")
    logger.info(f"Server running on http://localhost:{settings.port}")

@app.on_event("shutdown")
async def shutdown():
    await app.state.supabase.close()


app.include_router(user_router, tags=["Users"])
app.include_router(otp_router, tags=["OTP"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.port)
