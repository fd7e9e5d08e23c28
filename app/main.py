# ========================================
# app/main.py - SkillCompass API
# ========================================

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.database import connect_to_mongo, close_mongo_connection, init_indexes
from app.utils.errors import register_exception_handlers
from app.utils.logger import setup_logging, get_logger
from app.utils.mongo import utcnow

# ===========================
# IMPORT ALL ROUTERS
# ===========================

# Auth & HR accounts
from app.routes.auth import router as auth_router, initialize_hr_account

# Employee self-service
from app.routes.employee import router as employee_router
from app.routes.saved_course import router as saved_course_router
from app.routes.course import router as course_router

# HR console
from app.routes.hr import router as hr_router
from app.routes.hr_saved_course import router as hr_saved_course_router

# Internal jobs
from app.routes.job import router as job_router
from app.routes.employee_job import router as employee_job_router
from app.routes.hr_job_management import router as hr_job_management_router

# Approvals
from app.routes.approval import router as approval_router
import os
from dotenv import load_dotenv

load_dotenv()
setup_logging()
logger = get_logger(__name__)

API_VERSION = "1.0.0"

# ===========================
# CREATE FASTAPI APP
# ===========================

app = FastAPI(
    title="SkillCompass API",
    description="Employee career development: skills, saved courses, internal jobs and HR approvals",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# ===========================
# CORS MIDDLEWARE
# ===========================
raw_origins = os.getenv("ALLOWED_ORIGINS", "")
origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# ===========================
# DATABASE EVENTS
# ===========================

@app.on_event("startup")
async def start_db():
    """Connect to MongoDB, ensure indexes and the default HR account"""
    await connect_to_mongo()
    await init_indexes()
    await initialize_hr_account()

@app.on_event("shutdown")
async def stop_db():
    """Close MongoDB connection on shutdown"""
    await close_mongo_connection()

# ===========================
# REGISTER ROUTERS
# ===========================

app.include_router(auth_router)

app.include_router(employee_router)
app.include_router(saved_course_router)
app.include_router(course_router)

app.include_router(hr_router)
app.include_router(hr_saved_course_router)

app.include_router(job_router)
app.include_router(employee_job_router)
app.include_router(hr_job_management_router)

app.include_router(approval_router)

# ===========================
# ROOT ENDPOINTS
# ===========================

def _status():
    return {
        "success": True,
        "message": "SkillCompass API is running!",
        "version": API_VERSION,
        "timestamp": utcnow().isoformat()
    }


@app.get("/")
async def root():
    """API root endpoint"""
    return {**_status(), "documentation": "/docs"}


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return _status()
