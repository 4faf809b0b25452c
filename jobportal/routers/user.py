import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobportal.database import get_db, is_unique_violation
from jobportal.dependencies import get_current_claims
from jobportal.core.responses import envelope, profile_to_response
from jobportal.core.security import TokenClaims, create_access_token, verify_password
from jobportal.repos.user_repo import (
    get_by_email,
    create as create_user,
    update_profile as update_user_profile,
)
from jobportal.schemas.user import UserRegister, UserLogin, ProfileUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/user", tags=["user"])

EMAIL_EXISTS = "Email already exists."
INVALID_CREDENTIALS = "Invalid credentials."


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(data: UserRegister, db: Session = Depends(get_db)):
    try:
        if get_by_email(db, data.email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=EMAIL_EXISTS)
        try:
            user = create_user(
                db,
                full_name=data.full_name,
                email=data.email,
                phone_number=data.phone_number,
                password=data.password,
                role=data.role,
                bio=data.bio,
                skills=data.skills,
                resume=data.resume,
                resume_original_name=data.resume_original_name,
            )
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same email
            db.rollback()
            if not is_unique_violation(e):
                raise
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=EMAIL_EXISTS) from None
        logger.info("User registered: %s (role=%s)", user.email, user.role)
        return envelope(
            "User registered successfully.",
            user={"id": user.id, "full_name": user.full_name, "email": user.email},
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Register failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error registering user.") from e


@router.post("/login")
def login(data: UserLogin, db: Session = Depends(get_db)):
    try:
        user = get_by_email(db, data.email)
        if not user or not verify_password(data.password, user.password_hash):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_CREDENTIALS)
        token = create_access_token(user.id, user.email, user.role)
        logger.info("User logged in: %s", user.email)
        return envelope("Login successful.", token=token)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Login failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error logging in.") from e


@router.post("/logout")
def logout():
    """Tokens are stateless; the client discards its copy and it lapses at expiry."""
    return envelope("Logout successful.")


@router.put("/update-profile/{user_id}")
def update_profile(
    user_id: str,
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims),
):
    try:
        if claims.user_id != user_id:
            logger.info("Profile update denied: token user=%s path user=%s", claims.user_id, user_id)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You are not authorized to update this profile.",
            )
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        user = update_user_profile(db, user_id, **changes)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
        logger.info("Profile updated for user=%s fields=%s", user_id, sorted(changes))
        return envelope("Profile updated successfully.", profile=profile_to_response(user))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Profile update failed for user=%s: %s", user_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error updating profile.") from e
