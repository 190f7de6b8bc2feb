"""
Calculation CRUD API endpoints.

Provides REST API for saving HPP calculations, sharing them to the community
feed, previewing results and exporting them as CSV.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from genhpp.api.schemas import (
    CalculationCreate,
    CalculationUpdate,
    CalculationResponse,
    HPPInput,
    HPPResult,
)
from genhpp.api.auth import get_current_user
from genhpp.core.constants import DEFAULT_PUBLIC_USER_NAME
from genhpp.core.export import calculation_to_csv, content_disposition
from genhpp.core.hpp import calculate_hpp
from genhpp.db.connection import get_db_session
from genhpp.db.models import Calculation, User
from genhpp.db.repositories import CalculationRepository, PublicCalculationRepository


router = APIRouter()

INPUT_FIELDS = (
    "product_name",
    "materials",
    "labor_cost",
    "overhead",
    "packaging",
    "margin",
    "product_quantity",
    "production_tips",
    "product_image_url",
)


def _totals(values: dict) -> dict:
    """Server-side HPP totals for a set of calculation inputs."""
    result = calculate_hpp(
        values["materials"],
        values["labor_cost"],
        values["overhead"],
        values["packaging"],
        values["margin"],
    )
    return {"total_hpp": result["total_hpp"], "suggested_price": result["suggested_price"]}


def _sync_public_copy(db: Session, calculation: Calculation, user: User) -> None:
    public_repo = PublicCalculationRepository(db)
    if calculation.is_public:
        public_repo.upsert_from_calculation(
            calculation,
            user_name=user.name or DEFAULT_PUBLIC_USER_NAME,
            user_photo_url=user.photo_url,
        )
    else:
        public_repo.delete_for_calculation(calculation.id)


def _get_owned(repo: CalculationRepository, calculation_id: int, user: User, action: str) -> Calculation:
    calculation = repo.get_by_id(calculation_id)
    if not calculation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Calculation {calculation_id} not found",
        )
    if calculation.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Not authorized to {action} this calculation",
        )
    return calculation


@router.post("/preview", response_model=HPPResult)
def preview_calculation(payload: HPPInput):
    """Compute HPP and suggested price without saving anything."""
    data = payload.model_dump()
    return calculate_hpp(data["materials"], data["labor_cost"], data["overhead"], data["packaging"], data["margin"])


@router.post("/", response_model=CalculationResponse, status_code=status.HTTP_201_CREATED)
def create_calculation(
    calculation: CalculationCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    repo = CalculationRepository(db)
    values = calculation.model_dump(include=set(INPUT_FIELDS))

    try:
        new_calculation = repo.create(
            user_id=current_user.id,
            is_public=calculation.share_publicly,
            **values,
            **_totals(values),
        )
        if new_calculation.is_public:
            _sync_public_copy(db, new_calculation, current_user)
        db.commit()
        db.refresh(new_calculation)
        return new_calculation
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create calculation: {str(e)}",
        )


@router.get("/", response_model=List[CalculationResponse])
def list_calculations(
    limit: int = 100,
    offset: int = 0,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return CalculationRepository(db).list_for_user(current_user.id, limit=limit, offset=offset)


@router.get("/{calculation_id}", response_model=CalculationResponse)
def get_calculation(
    calculation_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return _get_owned(CalculationRepository(db), calculation_id, current_user, "access")


@router.put("/{calculation_id}", response_model=CalculationResponse)
def update_calculation(
    calculation_id: int,
    calculation_update: CalculationUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    repo = CalculationRepository(db)
    existing = _get_owned(repo, calculation_id, current_user, "modify")

    try:
        update_data = {
            k: v for k, v in calculation_update.model_dump(include=set(INPUT_FIELDS)).items() if v is not None
        }
        merged = {field: getattr(existing, field) for field in INPUT_FIELDS}
        merged.update(update_data)
        update_data.update(_totals(merged))
        if calculation_update.share_publicly is not None:
            update_data["is_public"] = calculation_update.share_publicly

        updated = repo.update(calculation_id, **update_data)
        _sync_public_copy(db, updated, current_user)
        db.commit()
        db.refresh(updated)
        return updated
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update calculation: {str(e)}",
        )


@router.delete("/{calculation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_calculation(
    calculation_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    repo = CalculationRepository(db)
    _get_owned(repo, calculation_id, current_user, "delete")

    try:
        # The public copy and its comments go with it
        repo.delete(calculation_id)
        db.commit()
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete calculation: {str(e)}",
        )


@router.get("/{calculation_id}/export.csv")
def export_calculation(
    calculation_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Download a calculation as an Indonesian CSV report."""
    calculation = _get_owned(CalculationRepository(db), calculation_id, current_user, "export")
    content = calculation_to_csv(
        product_name=calculation.product_name,
        materials=calculation.materials,
        labor_cost=float(calculation.labor_cost),
        overhead=float(calculation.overhead),
        packaging=float(calculation.packaging),
        total_hpp=float(calculation.total_hpp),
        margin=float(calculation.margin),
        suggested_price=float(calculation.suggested_price),
    )
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": content_disposition(calculation.product_name)},
    )
