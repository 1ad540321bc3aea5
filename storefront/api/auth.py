"""
Auth API Endpoints
Back-office login and the signed-in user's profile
"""
from fastapi import APIRouter, Depends, HTTPException, status

from storefront.core.auth import TokenUser, get_current_user
from storefront.core.exceptions import StorefrontError
from storefront.domain.user import LoginRequest, PasswordChange, ProfileUpdate
from storefront.services.auth_service import AuthService, AuthenticationError

router = APIRouter()


@router.post("/login")
async def login(credentials: LoginRequest):
    """Exchange email and password for a bearer token"""
    try:
        token, user = AuthService().login(str(credentials.email), credentials.password)
        return {
            "access_token": token,
            "token_type": "bearer",
            "user": user.to_dict()
        }

    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"}
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Login failed: {str(e)}")


@router.post("/logout")
async def logout():
    """Tokens are stateless; the client just drops it"""
    return {"message": "Logged out successfully"}


@router.get("/me")
async def get_me(user: TokenUser = Depends(get_current_user)):
    try:
        current = AuthService().get_user(int(user.id))
        return {
            "status": "success",
            "data": current.to_dict()
        }

    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching profile: {str(e)}")


@router.patch("/me")
async def update_me(data: ProfileUpdate, user: TokenUser = Depends(get_current_user)):
    """Update the signed-in user's name or email"""
    try:
        updated = AuthService().update_profile(int(user.id), data)
        return {
            "status": "success",
            "data": updated.to_dict()
        }

    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update profile: {str(e)}")


@router.post("/me/change-password")
async def change_password(data: PasswordChange, user: TokenUser = Depends(get_current_user)):
    try:
        AuthService().change_password(int(user.id), data.current_password, data.new_password)
        return {
            "status": "success",
            "data": {"message": "Password updated"}
        }

    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to change password: {str(e)}")
