"""
FastAPI Development Server for the Form Service

Stands in for the remote form service during local development:
- POST /create-user  register a roll number + name
- GET  /get-form     return the form definition for a registered user

Errors use the same {"message": ...} body the real service sends.
Run with:  uvicorn backend.api:app --reload
"""

import logging
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import settings
from config.form_schema import get_sample_form_path, load_form_file, parse_form_response

logger = logging.getLogger(__name__)


# ============================================================================
# APP SETUP
# ============================================================================

app = FastAPI(
    title="Dynamic Form Service (dev)",
    description="Local stand-in for the form schema / user registration service",
    version="1.0.0"
)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify allowed origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def message_exception_handler(request: Request, exc: HTTPException):
    """Return {"message": ...} bodies instead of FastAPI's {"detail": ...}."""
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class CreateUserRequest(BaseModel):
    """Request to register a user."""
    rollNumber: Optional[str] = None
    name: Optional[str] = None


class CreateUserResponse(BaseModel):
    """Acknowledgement of a registered user."""
    message: str
    rollNumber: str
    name: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    api_version: str
    registered_users: int


# ============================================================================
# IN-MEMORY STORE
# ============================================================================

class UserRegistry:
    """Registered users keyed by roll number; lives as long as the process."""

    def __init__(self):
        self.users: Dict[str, str] = {}

    def register(self, roll_number: str, name: str) -> None:
        if roll_number in self.users:
            raise ValueError(f"User with roll number {roll_number} already exists")
        self.users[roll_number] = name

    def is_registered(self, roll_number: str) -> bool:
        return roll_number in self.users

    def clear(self) -> None:
        self.users.clear()


registry = UserRegistry()

_form_payload = None


def get_form_payload() -> dict:
    """Load and check the bundled form once."""
    global _form_payload
    if _form_payload is None:
        payload = load_form_file(get_sample_form_path())
        parse_form_response(payload)
        _form_payload = payload
    return _form_payload


# ============================================================================
# API ENDPOINTS
# ============================================================================

@app.get("/", response_model=HealthResponse)
async def root():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        api_version="1.0.0",
        registered_users=len(registry.users)
    )


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return await root()


@app.post("/create-user", response_model=CreateUserResponse)
async def create_user(request: CreateUserRequest):
    """Register a roll number + name."""
    roll_number = (request.rollNumber or "").strip()
    name = (request.name or "").strip()

    if not roll_number or not name:
        raise HTTPException(status_code=400, detail="rollNumber and name are required")

    try:
        registry.register(roll_number, name)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))

    logger.info(f"[DevAPI] Registered {roll_number}")
    return CreateUserResponse(
        message="User created successfully",
        rollNumber=roll_number,
        name=name
    )


@app.get("/get-form")
async def get_form(rollNumber: Optional[str] = Query(None)):
    """Return the form definition for a registered user."""
    if not rollNumber:
        raise HTTPException(status_code=400, detail="rollNumber is required")

    if not registry.is_registered(rollNumber):
        raise HTTPException(status_code=404, detail=f"No user found with roll number {rollNumber}")

    return get_form_payload()


# ============================================================================
# RUN SERVER
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
