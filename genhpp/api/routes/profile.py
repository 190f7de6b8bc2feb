"""
Profile API endpoints for the current user.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from genhpp.api.schemas import ProfileUpdate, UserResponse
from genhpp.api.auth import get_current_user
from genhpp.db.connection import get_db_session
from genhpp.db.models import User
from genhpp.db.repositories import UserRepository


router = APIRouter()


@router.get("", response_model=UserResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("", response_model=UserResponse)
def update_profile(
    profile_update: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Change display name and avatar. Email and password belong to the identity provider."""
    update_data = {k: v for k, v in profile_update.model_dump().items() if v is not None}
    if "name" in update_data:
        update_data["name"] = update_data["name"].strip()
        if len(update_data["name"]) < 2:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Nama minimal 2 karakter",
            )

    try:
        updated = UserRepository(db).update(current_user.id, **update_data)
        db.commit()
        db.refresh(updated)
        return updated
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update profile: {str(e)}",
        )
