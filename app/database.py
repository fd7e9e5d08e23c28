from motor.motor_asyncio import AsyncIOMotorClient
import os
from pathlib import Path
from dotenv import load_dotenv

from app.utils.logger import get_logger

logger = get_logger(__name__)

# Find and load .env file next to the app/ package
current_dir = Path(__file__).resolve().parent  # app/
backend_dir = current_dir.parent                # project root
env_path = backend_dir / ".env"

if env_path.exists():
    load_dotenv(dotenv_path=env_path)
else:
    load_dotenv()

MONGO_URI = os.getenv("MONGO_URI")
DATABASE_NAME = os.getenv("DATABASE_NAME", "skillcompass")

client = None
db = None


async def connect_to_mongo():
    global client, db

    if not MONGO_URI:
        raise ValueError("MONGO_URI environment variable is not set! Check your .env file.")

    client = AsyncIOMotorClient(MONGO_URI)
    db = client[DATABASE_NAME]
    await client.admin.command('ping')

    if "mongodb+srv" in MONGO_URI:
        logger.info("Connected to MongoDB Atlas (database=%s)", DATABASE_NAME)
    else:
        logger.warning("Connected to LOCAL MongoDB (database=%s)", DATABASE_NAME)


async def close_mongo_connection():
    if client:
        client.close()


async def init_indexes():
    """
    Create the indexes that back the application-level uniqueness checks.
    Safe to call on every startup.
    """
    database = get_db()

    await database.users.create_index("email", unique=True)
    await database.employees.create_index("user_id", unique=True)
    await database.employees.create_index("saved_courses.status")
    await database.employees.create_index("career_goals.status")
    await database.jobs.create_index([("status", 1), ("deadline", 1)])
    await database.job_referrals.create_index([("job_id", 1), ("referred_by", 1)], unique=True)
    await database.job_switch_requests.create_index([("employee_id", 1), ("status", 1)])
    await database.approval_requests.create_index([("employee_id", 1), ("status", 1)])
    await database.course_recommendations.create_index([("employee_id", 1), ("status", 1)])
    await database.course_progress.create_index(
        [("employee_id", 1), ("recommendation_id", 1), ("course_id", 1)], unique=True
    )

    logger.info("MongoDB indexes ensured")


def get_db():
    return db
