"""Configuration and settings."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
OUTPUT_DIR = PROJECT_ROOT / "output"

# Ensure directories exist
DATA_DIR.mkdir(parents=True, exist_ok=True)
OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

# Database
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR / 'rfp_desk.db'}")

# LLM
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
LLM_MODEL = os.getenv("LLM_MODEL", "openai:gpt-4o-mini")
LLM_RETRIES = int(os.getenv("LLM_RETRIES", "1"))

# Logging
LOG_DIR = OUTPUT_DIR / "logs"
LOG_FILE = LOG_DIR / "app.jsonl"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
VERBOSE_LOGGING = os.getenv("VERBOSE_LOGGING", "false").lower() == "true"

# Ensure log directory exists
LOG_DIR.mkdir(parents=True, exist_ok=True)

# OpenTelemetry
TRACING_ENABLED = os.getenv("TRACING_ENABLED", "false").lower() == "true"
OTEL_EXPORTER_ENDPOINT = os.getenv("OTEL_EXPORTER_ENDPOINT", "http://localhost:4318/v1/traces")
OTEL_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", "rfp-desk")
DEPLOYMENT_ENVIRONMENT = os.getenv("DEPLOYMENT_ENVIRONMENT", "development")

# Inbound mail (IMAP). Polling is disabled when host/user/pass are missing.
IMAP_HOST = os.getenv("IMAP_HOST", "")
IMAP_PORT = int(os.getenv("IMAP_PORT", "993"))
IMAP_USER = os.getenv("IMAP_USER", "")
IMAP_PASS = os.getenv("IMAP_PASS", "")
IMAP_MAILBOX = os.getenv("IMAP_MAILBOX", "INBOX")
IMAP_TIMEOUT_SECONDS = float(os.getenv("IMAP_TIMEOUT_SECONDS", "30"))
MAIL_POLL_INTERVAL_SECONDS = float(os.getenv("MAIL_POLL_INTERVAL_SECONDS", "60"))

# Context matching for replies without an RFP identifier
CONTEXT_MATCH_WINDOW_DAYS = int(os.getenv("CONTEXT_MATCH_WINDOW_DAYS", "30"))
CONTEXT_MATCH_LIMIT = int(os.getenv("CONTEXT_MATCH_LIMIT", "10"))
CONTEXT_MATCH_THRESHOLD = int(os.getenv("CONTEXT_MATCH_THRESHOLD", "2"))

# Outbound mail (SMTP)
SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USER = os.getenv("SMTP_USER", "")
SMTP_PASS = os.getenv("SMTP_PASS", "")
SMTP_FROM = os.getenv("SMTP_FROM", "rfp@example.com")
SMTP_TIMEOUT_SECONDS = float(os.getenv("SMTP_TIMEOUT_SECONDS", "30"))

# HTTP API
API_PORT = int(os.getenv("API_PORT", "8000"))
