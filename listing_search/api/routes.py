# listing_search/api/routes.py
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from .. import services
from ..db import SessionLocal, get_db
from ..kinds import PRODUCT, SERVICE

router = APIRouter()

@router.get("/health")
def health():
    return {"status": "ok"}


def _search(kind, request: Request, db: Session):
    # keep every value of repeated keys; the normalizer takes the first
    params = {key: request.query_params.getlist(key) for key in request.query_params.keys()}
    try:
        result = services.search(db, SessionLocal, kind, params)
    except services.ListingQueryError:
        raise HTTPException(status_code=500, detail="Query failed")
    return result.to_json()


@router.get("/products")
def products(request: Request, db: Session = Depends(get_db)):
    return _search(PRODUCT, request, db)


@router.get("/services")
def services_page(request: Request, db: Session = Depends(get_db)):
    return _search(SERVICE, request, db)
