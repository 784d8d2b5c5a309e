import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

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

SITE_URL = os.getenv("SITE_URL", "https://dinkhousepb.com")
LOGO_URL = os.getenv("LOGO_URL", "")

DEBUG = False
TESTING = False
ALLOW_UNLISTED_EMAILS_IN_DEV = False
