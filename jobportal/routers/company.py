import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobportal.database import get_db, is_unique_violation
from jobportal.dependencies import get_current_claims
from jobportal.core.responses import envelope, company_to_response
from jobportal.core.security import TokenClaims, is_valid_id
from jobportal.repos.company_repo import (
    get_all as get_all_companies,
    get_by_id,
    get_by_name,
    create as create_company,
    update as update_company_repo,
)
from jobportal.schemas.company import CompanyRegister, CompanyUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/company", tags=["company"])

DUPLICATE_NAME = "You can't register the same company."


@router.post("/register-company", status_code=status.HTTP_201_CREATED)
def register_company(
    data: CompanyRegister,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims),
):
    try:
        if not (data.name and data.description and data.website and data.location):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="All fields are required.")
        if get_by_name(db, data.name):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_NAME)
        try:
            company = create_company(
                db,
                name=data.name,
                description=data.description,
                website=data.website,
                location=data.location,
                user_id=claims.user_id,
            )
        except IntegrityError as e:
            db.rollback()
            if not is_unique_violation(e):
                raise
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_NAME) from None
        logger.info("Company registered: %s by user=%s", company.name, claims.user_id)
        return envelope("Company registered successfully.", company=company_to_response(company))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Company registration failed for user=%s: %s", claims.user_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error.") from e


@router.get("/get-companies")
def get_companies(
    db: Session = Depends(get_db),
    _claims: TokenClaims = Depends(get_current_claims),
):
    """List every registered company, whoever owns it."""
    try:
        companies = get_all_companies(db)
        if not companies:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No companies found.")
        return envelope(companies=[company_to_response(c) for c in companies])
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Listing companies failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error.") from e


@router.get("/get-company/{company_id}")
def get_company(
    company_id: str,
    db: Session = Depends(get_db),
    _claims: TokenClaims = Depends(get_current_claims),
):
    try:
        company = get_by_id(db, company_id) if is_valid_id(company_id) else None
        if not company:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Company not found.")
        return envelope(company=company_to_response(company))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Get company failed for id=%s: %s", company_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error.") from e


@router.put("/update-company/{company_id}")
def update_company(
    company_id: str,
    data: CompanyUpdate,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims),
):
    try:
        if not is_valid_id(company_id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid company ID.")
        changes = data.model_dump(exclude_none=True)
        try:
            company = update_company_repo(db, company_id, **changes)
        except IntegrityError as e:
            db.rollback()
            if not is_unique_violation(e):
                raise
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_NAME) from None
        if not company:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Company not found.")
        logger.info("Company %s updated by user=%s fields=%s", company_id, claims.user_id, sorted(changes))
        return envelope("Company information updated.", company=company_to_response(company))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Company update failed for id=%s: %s", company_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error.") from e
