from passlib.context import CryptContext
import os
from dotenv import load_dotenv

load_dotenv()

# Default HR account, seeded at startup when missing
HR_EMAIL = os.getenv("HR_EMAIL", "hr@skillcompass.com")
HR_PASSWORD = os.getenv("HR_PASSWORD", "hr123")

# Password hashing (Argon2)
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

def verify_password(plain_password, hashed_password):
    """Checks if the typed password matches the saved hash."""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password):
    """Converts a plain password (e.g., '123') into a secret hash."""
    return pwd_context.hash(password)
