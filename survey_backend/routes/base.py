from fastapi import APIRouter

APP_NAME = "survey-backend"
APP_VERSION = "0.1.0"

router = APIRouter()

@router.get("/health")
def health():
    return {"ok": True}

@router.get("/version")
def version():
    return {"app": APP_NAME, "version": APP_VERSION}
