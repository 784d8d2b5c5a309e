SECRET_KEY = "test-secret-key"

SUPABASE_CONFIG = {"url": "", "anon_key": "", "service_key": ""}

SMTP_CONFIG = {
    "host": "",
    "port": 587,
    "user": "",
    "password": "",
    "from_email": "noreply@example.com",
    "from_name": "The Dink House",
}

SITE_URL = "http://localhost"
LOGO_URL = ""

DEBUG = False
TESTING = True
ALLOW_UNLISTED_EMAILS_IN_DEV = False
