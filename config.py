import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./tenant_access.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    INVITATION_TTL_DAYS = int(data.get("INVITATION_TTL_DAYS", 7))
    DEFAULT_INVITATION_ROLE = data.get("DEFAULT_INVITATION_ROLE", "PARTICIPANT")
    SCOPE_OWNER_ROLE = data.get("SCOPE_OWNER_ROLE", "ORGANIZER")
    ACCEPT_INVITATION_URL = data.get(
        "ACCEPT_INVITATION_URL", "http://localhost:3000/invitations/accept"
    )
