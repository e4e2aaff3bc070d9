"""
Session routes - token issue and logout
"""
from fastapi import APIRouter, Response

from ..schemas import TokenRequest, SuccessResponse
from ..auth import create_access_token, set_auth_cookie, clear_auth_cookie
from ..logger import logger

router = APIRouter(tags=["Auth"])

@router.post("/jwt", response_model=SuccessResponse)
async def issue_token(request: TokenRequest, response: Response):
    """Issue a session token for the given email and set it as a cookie"""
    token = create_access_token(request.email)
    set_auth_cookie(response, token)

    logger.info(f"Session token issued: {request.email}")

    return SuccessResponse()

@router.get("/logout", response_model=SuccessResponse)
async def logout(response: Response):
    """Clear the session cookie"""
    clear_auth_cookie(response)
    logger.info("Session cookie cleared")
    return SuccessResponse()
