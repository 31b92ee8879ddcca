# taskboard/config/settings.py
# Application configuration, read from the environment (and .env when present)

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == 'true'


class Settings:
    """Settings for the Taskboard API"""

    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///./taskboard.db')
    DATABASE_SSLMODE = os.getenv('DATABASE_SSLMODE')  # e.g. "require" on hosted PostgreSQL

    # Token settings
    AUTH = {
        'secret_key': os.getenv('SECRET_KEY', 'change-me'),
        'algorithm': os.getenv('ALGORITHM', 'HS256'),
        'access_token_expire_minutes': int(os.getenv('ACCESS_TOKEN_EXPIRE_MINUTES', 60 * 24)),
    }

    # Calendar days (overdue grace period) are evaluated in this zone
    APP_TIMEZONE = os.getenv('APP_TIMEZONE', 'UTC')

    # Attachment storage
    STORAGE = {
        'upload_dir': os.getenv('UPLOAD_DIR', 'uploads'),
        'bucket': os.getenv('STORAGE_BUCKET', 'task-attachments'),
        'public_url': os.getenv('PUBLIC_FILES_URL', '/files'),
        'max_file_size': int(os.getenv('MAX_FILE_SIZE', 10 * 1024 * 1024)),  # 10MB
        'allowed_extensions': {
            # Documents
            '.pdf', '.doc', '.docx', '.txt', '.rtf', '.odt', '.md',
            # Images
            '.jpg', '.jpeg', '.png', '.gif', '.bmp', '.svg', '.webp',
            # Spreadsheets
            '.xls', '.xlsx', '.csv', '.ods',
            # Presentations
            '.ppt', '.pptx', '.odp',
            # Archives
            '.zip', '.7z', '.tar', '.gz',
        },
        # Checked against the saved file's content, not the client's header
        'allowed_mime_types': {
            # Documents
            'application/pdf',
            'application/msword',
            'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
            'text/plain',
            'text/rtf',
            'application/rtf',
            'text/markdown',
            'text/x-markdown',
            'application/vnd.oasis.opendocument.text',
            # Images
            'image/jpeg',
            'image/png',
            'image/gif',
            'image/bmp',
            'image/svg+xml',
            'image/webp',
            # Spreadsheets
            'application/vnd.ms-excel',
            'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
            'text/csv',
            'application/vnd.oasis.opendocument.spreadsheet',
            # Presentations
            'application/vnd.ms-powerpoint',
            'application/vnd.openxmlformats-officedocument.presentationml.presentation',
            'application/vnd.oasis.opendocument.presentation',
            # Archives
            'application/zip',
            'application/x-7z-compressed',
            'application/x-tar',
            'application/gzip',
            'application/x-gzip',
        },
    }

    SERVER = {
        'host': os.getenv('HOST', '0.0.0.0'),
        'port': int(os.getenv('PORT', '8000')),
        'reload': _env_bool('RELOAD', 'false'),
    }

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    @classmethod
    def cors_origins(cls) -> List[str]:
        """Comma separated CORS_ORIGINS, defaulting to local development frontends"""
        raw = os.getenv('CORS_ORIGINS', 'http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000')
        return [origin.strip() for origin in raw.split(',') if origin.strip()]

    @classmethod
    def is_extension_allowed(cls, extension: str) -> bool:
        """Check if file extension is allowed"""
        return extension.lower() in cls.STORAGE['allowed_extensions']


settings = Settings()
