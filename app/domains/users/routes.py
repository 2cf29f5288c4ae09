from fastapi import APIRouter, Depends, Request
from app.domains.users.models import RegisterRequest
from app.domains.users.service import UserService

router = APIRouter()


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


@router.post("/register")
async def register(data: RegisterRequest, user_service: UserService = Depends(get_user_service)):
    """
    Register a citizen or officer account. The phone still has to be
    verified through /send-otp and /verify-otp.
    """
    await user_service.register(data)
    return {"message": "Registration successful. Please verify your phone."}
