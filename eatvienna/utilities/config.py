"""Configuration management for the I Eat Vienna Packliste service."""
import os
from typing import Final, List
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# Web Push (VAPID); without a private key notifications are only listed in the app
VAPID_PUBLIC_KEY: Final[str] = os.getenv('VAPID_PUBLIC_KEY', '')
VAPID_PRIVATE_KEY: Final[str] = os.getenv('VAPID_PRIVATE_KEY', '')
VAPID_SUBJECT: Final[str] = os.getenv('VAPID_SUBJECT', 'mailto:office@ieatvienna.at')
PUSH_ADMIN_RECIPIENTS: Final[List[str]] = [
    r.strip() for r in os.getenv('PUSH_ADMIN_RECIPIENTS', 'agnes@ieatvienna.at,office@ieatvienna.at').split(',')
    if r.strip()
]
PUSH_TIMEOUT: Final[float] = float(os.getenv('PUSH_TIMEOUT', '5'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('DATA_DIR', str(BASE_DIR / 'data')))
