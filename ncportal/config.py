# ncportal/config.py
import os
import logging
from logging.handlers import RotatingFileHandler
from dotenv import load_dotenv

# Determine the base directory of the project (where .env should be)
# This assumes config.py is in ncportal/
basedir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

# Load the .env file from the project root
dotenv_path = os.path.join(basedir, '.env')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path)
    print(f"INFO: Loaded environment variables from {dotenv_path}")
else:
    print(f"WARNING: .env file not found at {dotenv_path}. Using environment variables or defaults.")


def _float_env(name, default):
    try:
        return float(os.environ.get(name, default))
    except (TypeError, ValueError):
        print(f"WARNING: {name} is not a number. Using default {default}.")
        return float(default)


class Config:
    """Base configuration class."""
    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        print("WARNING: SECRET_KEY not found in environment. Using default. THIS IS INSECURE FOR PRODUCTION.")
        SECRET_KEY = 'a-default-insecure-secret-key-CHANGE-ME'

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URI')

    LOG_LEVEL = os.environ.get('LOG_LEVEL')

    # Browser dashboard origins (comma separated, '*' for any)
    CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', '*').split(',') if o.strip()]

    # --- Admin credential (injected, never stored in code) ---
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD_HASH = os.environ.get('ADMIN_PASSWORD_HASH')  # bcrypt hash, preferred
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')  # plaintext fallback for local setups
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL', 'admin@example.com')
    if not (ADMIN_PASSWORD_HASH or ADMIN_PASSWORD):
        print("WARNING: Neither ADMIN_PASSWORD_HASH nor ADMIN_PASSWORD is set. Admin login is disabled.")

    # --- Message content ---
    BRAND_NAME = os.environ.get('BRAND_NAME', 'Khatabook')
    FORM_LINK_EN = os.environ.get('FORM_LINK_EN', 'https://forms.gle/kXKU5HCtrjKDYZPH9')
    FORM_LINK_HI = os.environ.get('FORM_LINK_HI', 'https://forms.gle/RxSM1cFmpqJ5E5dp9')

    # --- Push vendor (CleverTap external trigger) ---
    PUSH_API_URL = os.environ.get('PUSH_API_URL', 'https://api.clevertap.com/1/send/externaltrigger.json')
    PUSH_ACCOUNT_ID = os.environ.get('PUSH_ACCOUNT_ID')
    PUSH_PASSCODE = os.environ.get('PUSH_PASSCODE')
    PUSH_CAMPAIGN_ID = os.environ.get('PUSH_CAMPAIGN_ID')

    # --- SMS vendor (enterprise gateway) ---
    SMS_API_URL = os.environ.get('SMS_API_URL', 'https://enterprise.smsgupshup.com/GatewayAPI/rest')
    SMS_USER_ID = os.environ.get('SMS_USER_ID')
    SMS_PASSWORD = os.environ.get('SMS_PASSWORD')
    SMS_PRINCIPAL_ENTITY_ID = os.environ.get('SMS_PRINCIPAL_ENTITY_ID')
    SMS_OTP_TEMPLATE_ID = os.environ.get('SMS_OTP_TEMPLATE_ID')
    SMS_FORM_TEMPLATE_ID = os.environ.get('SMS_FORM_TEMPLATE_ID')

    # --- WhatsApp vendor (media gateway) ---
    WHATSAPP_API_URL = os.environ.get('WHATSAPP_API_URL', 'https://mediaapi.smsgupshup.com/GatewayAPI/rest')
    WHATSAPP_USER_ID = os.environ.get('WHATSAPP_USER_ID')
    WHATSAPP_PASSWORD = os.environ.get('WHATSAPP_PASSWORD')

    # --- Outbound HTTP ---
    VENDOR_TIMEOUT_SECONDS = _float_env('VENDOR_TIMEOUT_SECONDS', 30)
    RELAY_TIMEOUT_SECONDS = _float_env('RELAY_TIMEOUT_SECONDS', 30)
    RELAY_USER_AGENT = os.environ.get('RELAY_USER_AGENT', 'NumberChangePortal-Proxy/1.0')

    @staticmethod
    def init_app(app):
        """Perform app-specific initialization if needed."""
        pass


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URI') or \
        'postgresql://ncportal_user@localhost:5432/number_change_portal'
    SQLALCHEMY_ECHO = os.environ.get('SQLALCHEMY_ECHO', 'False').lower() in ('true', '1', 't')


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SECRET_KEY = 'testing-secret-key'
    # In-memory SQLite unless a real test database is provided
    SQLALCHEMY_DATABASE_URI = os.environ.get('TEST_DATABASE_URI') or 'sqlite://'
    SQLALCHEMY_ECHO = False

    ADMIN_USERNAME = 'admin'
    ADMIN_PASSWORD_HASH = None
    ADMIN_PASSWORD = 'admin-test-pass'
    ADMIN_EMAIL = 'admin@test.local'
    BCRYPT_LOG_ROUNDS = 4  # fast hashing in tests

    PUSH_API_URL = 'https://push.test/1/send/externaltrigger.json'
    PUSH_ACCOUNT_ID = 'TEST-ACCOUNT'
    PUSH_PASSCODE = 'TEST-PASSCODE'
    PUSH_CAMPAIGN_ID = '1000'
    SMS_API_URL = 'https://sms.test/GatewayAPI/rest'
    SMS_USER_ID = 'sms-user'
    SMS_PASSWORD = 'sms-secret'
    SMS_PRINCIPAL_ENTITY_ID = '1601'
    SMS_OTP_TEMPLATE_ID = '1007-otp'
    SMS_FORM_TEMPLATE_ID = '1007-form'
    WHATSAPP_API_URL = 'https://whatsapp.test/GatewayAPI/rest'
    WHATSAPP_USER_ID = 'wa-user'
    WHATSAPP_PASSWORD = 'wa-secret'


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URI')
    if not SQLALCHEMY_DATABASE_URI:
        print("CRITICAL: DATABASE_URI not set for production environment!")

    if not Config.SECRET_KEY or Config.SECRET_KEY == 'a-default-insecure-secret-key-CHANGE-ME':
        print("CRITICAL: SECRET_KEY is not set or is using the default insecure value for production!")

    for _key in ('PUSH_ACCOUNT_ID', 'PUSH_PASSCODE', 'SMS_USER_ID', 'SMS_PASSWORD',
                 'WHATSAPP_USER_ID', 'WHATSAPP_PASSWORD'):
        if not getattr(Config, _key):
            print(f"CRITICAL: {_key} is not set for production environment! Related sends will fail.")
    del _key

    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    REMEMBER_COOKIE_SECURE = True

    @classmethod
    def init_app(cls, app):
        """Initialize production-specific settings."""
        Config.init_app(app)

        # --- Production Logging Setup ---
        log_level = os.environ.get('LOG_LEVEL', 'INFO').upper()
        log_dir = os.path.join(basedir, 'logs')

        try:
            os.makedirs(log_dir, exist_ok=True)

            log_file = os.path.join(log_dir, 'ncportal_app.log')
            # Rotate logs at 10MB, keep 5 backups
            file_handler = RotatingFileHandler(log_file, maxBytes=10*1024*1024, backupCount=5)
            log_format = logging.Formatter(
                '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
            )
            file_handler.setFormatter(log_format)

            log_level_numeric = getattr(logging, log_level, logging.INFO)
            file_handler.setLevel(log_level_numeric)
            app.logger.addHandler(file_handler)
            app.logger.setLevel(log_level_numeric)

            app.logger.info(f'Number Change Portal startup in production mode. Log Level: {log_level}')

        except Exception as e:
            app.logger.error(f"Failed to configure file logging: {e}", exc_info=True)


# Dictionary to access configuration classes by name
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
