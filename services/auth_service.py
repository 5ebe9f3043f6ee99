import re
from datetime import datetime, timezone

from werkzeug.security import check_password_hash, generate_password_hash

from models.user import UserCreate, UserInDB
from utils.mongodb import get_db

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class AuthError(Exception):
    def __init__(self, message, status=400):
        self.status = status
        super().__init__(message)


def is_valid_email(email):
    return bool(email) and EMAIL_RE.match(email) is not None and len(email) > 5


def rename_id_field(user_data):
    """Rename _id to id in user data."""
    if "_id" in user_data:
        user_data["id"] = str(user_data["_id"])
        del user_data["_id"]
    return user_data


def _users():
    return get_db()["users"]


def register_user(email, password, name):
    """Create a user with a hashed password and return it as a UserInDB."""
    email = (email or "").strip().lower()
    if not is_valid_email(email):
        raise AuthError("Please enter a valid email address")
    if not password:
        raise AuthError("Password is required")

    users = _users()
    if users.find_one({"email": email}):
        raise AuthError("User already exists. Please log in instead.", status=409)

    # Validate user data using the Pydantic model
    user = UserCreate(email=email, name=name or email.split("@")[0])
    document = {
        **user.model_dump(),
        "password_hash": generate_password_hash(password),
        "created_at": datetime.now(timezone.utc),
    }
    user_id = users.insert_one(document).inserted_id
    return UserInDB(id=str(user_id), **user.model_dump())


def authenticate_user(email, password):
    email = (email or "").strip().lower()
    if not is_valid_email(email):
        raise AuthError("Please enter a valid email address")
    if not password:
        raise AuthError("Password is required")

    user = _users().find_one({"email": email})
    if not user:
        raise AuthError("User not found. Please register first.", status=404)
    if not check_password_hash(user.get("password_hash") or "", password):
        raise AuthError("Wrong credentials. Please check your email and password.", status=401)

    user = rename_id_field(dict(user))
    return UserInDB(**{k: v for k, v in user.items() if k in UserInDB.model_fields})
