import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

SUPABASE_CONFIG = {
    "url": os.getenv("SUPABASE_URL", ""),
    "anon_key": os.getenv("SUPABASE_ANON_KEY", ""),
    "service_key": os.getenv("SUPABASE_SERVICE_KEY", ""),
}

SMTP_CONFIG = {
    "host": os.getenv("SMTP_HOST", ""),
    "port": int(os.getenv("SMTP_PORT", "587")),
    "user": os.getenv("SMTP_USER", ""),
    "password": os.getenv("SMTP_PASSWORD", ""),
    "from_email": os.getenv("EMAIL_FROM", "noreply@dinkhousepb.com"),
    "from_name": os.getenv("EMAIL_FROM_NAME", "The Dink House"),
}

SITE_URL = os.getenv("SITE_URL", "http://localhost:5000")
LOGO_URL = os.getenv("LOGO_URL", "")

DEBUG = True
TESTING = False

# When the allowed_emails lookup fails locally, let the login through as admin
ALLOW_UNLISTED_EMAILS_IN_DEV = bool(int(os.getenv("ALLOW_UNLISTED_EMAILS_IN_DEV", "1")))
